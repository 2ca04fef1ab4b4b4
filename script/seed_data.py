#!/usr/bin/env python3
"""
Database Seed Script
Populate tags and demo users

Features:
1. Create Tags - the fixed tag vocabulary livestreams can carry
2. Create Users - demo broadcasters, each printed with a session cookie value

Notes:
- Run `python -m script.reset_database` first
- Existing tags/users with the same name are left untouched
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.asyncpg_setting import acquire_connection, close_all_asyncpg_pools
from src.service.livestream.driving_adapter.http_controller.auth.session_auth import SessionAuth


TAG_NAMES = [
    'ライブ配信',
    'ゲーム実況',
    '生放送',
    'アドバイス',
    '初心者歓迎',
    'プロゲーマー',
    '新作ゲーム',
    'レトロゲーム',
    'RPG',
    'FPS',
    'アクションゲーム',
    '料理',
    '音楽',
    '雑談',
]

# (name, display_name, description)
DEMO_USERS = [
    ('test001', 'Test User 001', 'first demo broadcaster'),
    ('test002', 'Test User 002', 'second demo broadcaster'),
]


async def seed_tags() -> None:
    print(f'🏷️ Creating {len(TAG_NAMES)} tags...')
    async with acquire_connection() as conn:
        await conn.executemany(
            'INSERT INTO tags (name) VALUES ($1) ON CONFLICT (name) DO NOTHING',
            [(name,) for name in TAG_NAMES],
        )
    print('   ✅ Tags ready')


async def seed_users() -> None:
    print(f'👤 Creating {len(DEMO_USERS)} demo users...')
    session_auth = SessionAuth()

    async with acquire_connection() as conn:
        for name, display_name, description in DEMO_USERS:
            user_id = await conn.fetchval(
                """
                INSERT INTO users (name, display_name, description, password)
                VALUES ($1, $2, $3, '')
                ON CONFLICT (name) DO UPDATE SET name = EXCLUDED.name
                RETURNING id
                """,
                name,
                display_name,
                description,
            )
            token = session_auth.create_session_token(user_id=user_id, username=name)
            print(f'   ✅ {name} (id={user_id})')
            print(f'      Cookie: {settings.SESSION_COOKIE_NAME}={token}')


async def main():
    print('🌱 Starting seed...')
    print('=' * 50)

    try:
        await seed_tags()
        print()

        await seed_users()
        print()

        print('=' * 50)
        print('✅ Seed completed! Call POST /api/initialize on running services.')

    except Exception as e:
        print(f'❌ Seed failed: {e}')
        exit(1)
    finally:
        await close_all_asyncpg_pools()


if __name__ == '__main__':
    asyncio.run(main())
