#!/usr/bin/env python3
"""
Database Reset Script
Reset PostgreSQL schema and the reservation slot calendar

Features:
1. Drop & Recreate Tables - from the SQLAlchemy models
2. Seed Reservation Slots - the whole term at full capacity

Notes:
- Tags and demo users are seeded separately: `python -m script.seed_data`
- Running services keep their in-process caches; call POST /api/initialize afterwards
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.asyncpg_setting import close_all_asyncpg_pools
from src.platform.database.orm_db_setting import create_db_and_tables
from src.platform.database.unit_of_work import AsyncpgUnitOfWork
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm


async def recreate_tables() -> None:
    print(f'Database URL: {settings.DATABASE_URL_ASYNC}')
    print('🗑️ Dropping and recreating tables...')
    await create_db_and_tables(drop_existing=True)
    print('   ✅ Tables recreated')


async def seed_reservation_slots() -> int:
    term = ReservationTerm.from_settings(settings)
    print(
        f'🗓️ Seeding slots {term.start_at} ~ {term.end_at} '
        f'({term.slot_seconds}s each, capacity={term.capacity})...'
    )

    async with AsyncpgUnitOfWork() as uow:
        count = await uow.slot_repo.initialize(term=term)
        await uow.commit()

    print(f'   ✅ {count} slots created')
    return count


async def main():
    print('🔄 Starting database reset...')
    print('=' * 50)

    try:
        await recreate_tables()
        print()

        await seed_reservation_slots()
        print()

        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed tags and demo users, run: python -m script.seed_data')

    except Exception as e:
        print(f'❌ Reset failed: {e}')
        exit(1)
    finally:
        await close_all_asyncpg_pools()


if __name__ == '__main__':
    asyncio.run(main())
