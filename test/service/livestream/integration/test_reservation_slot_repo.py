"""
Integration tests for the PostgreSQL reservation path

Runs against the test database created in test/conftest.py; every test starts
from truncated tables and is skipped when PostgreSQL is not reachable.

Test Coverage:
1. Slot seeding covers the term with full capacity
2. Lock / count / decrement inside one AsyncpgUnitOfWork
3. Rollback leaves slots untouched
4. Concurrent reservations on one slot never exceed its capacity
5. Query repos read back the committed livestream with its tags
6. Ranges that cut into a slot are rejected; tags are read through on a cache miss
"""

import anyio
import pytest

from src.platform.database.asyncpg_setting import acquire_connection
from src.platform.database.unit_of_work import AsyncpgUnitOfWork
from src.platform.exception.exceptions import ReservationOverbookedError
from src.service.livestream.app.command.reserve_livestream_use_case import (
    ReserveLivestreamUseCase,
)
from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.enum.entity_kind import EntityKind
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm
from src.service.livestream.driven_adapter.repo.livestream_query_repo_impl import (
    LivestreamQueryRepoImpl,
)
from src.service.livestream.driven_adapter.repo.tag_query_repo_impl import TagQueryRepoImpl
from src.service.livestream.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.livestream.driven_adapter.state.livestream_cache_registry import (
    LivestreamCacheRegistry,
)
from test.service.livestream.sample_data import (
    ALICE,
    ALL_TAGS,
    BOB,
    CAPACITY,
    HOUR,
    TAG_GAME,
    TAG_MUSIC,
    TERM_END,
    TERM_START,
    hours,
)


pytestmark = pytest.mark.integration


@pytest.fixture
def term() -> ReservationTerm:
    return ReservationTerm(
        start_at=TERM_START, end_at=TERM_END, slot_seconds=HOUR, capacity=CAPACITY
    )


@pytest.fixture
async def seeded_term(term: ReservationTerm) -> ReservationTerm:
    async with acquire_connection() as conn:
        await conn.executemany(
            'INSERT INTO users (id, name, display_name, description, password) '
            "VALUES ($1, $2, $3, $4, '')",
            [(user.id, user.name, user.display_name, user.description) for user in (ALICE, BOB)],
        )
        await conn.executemany(
            'INSERT INTO tags (id, name) VALUES ($1, $2)',
            [(tag.id, tag.name) for tag in ALL_TAGS],
        )

    async with AsyncpgUnitOfWork() as uow:
        await uow.slot_repo.initialize(term=term)
        await uow.commit()

    return term


@pytest.fixture
def cache_registry() -> LivestreamCacheRegistry:
    registry = LivestreamCacheRegistry()
    registry.bulk_load(EntityKind.TAG, [(tag.id, tag) for tag in ALL_TAGS])
    return registry


def _draft(*, start_at: int, end_at: int, tag_ids=()) -> Livestream:
    return Livestream.create(
        user_id=ALICE.id,
        title='Integration stream',
        description='Real database',
        playlist_url='https://media.example.com/playlist.m3u8',
        thumbnail_url='https://media.example.com/thumbnail.jpg',
        start_at=start_at,
        end_at=end_at,
        tag_ids=tag_ids,
    )


async def _remaining(start_at: int, end_at: int) -> list[int]:
    async with AsyncpgUnitOfWork() as uow:
        slots = await uow.slot_repo.list_range(start_at=start_at, end_at=end_at)
    return [slot.slot for slot in slots]


class TestSlotSeeding:
    @pytest.mark.asyncio
    async def test_initialize_tiles_the_term_at_full_capacity(self, seeded_term):
        slots = await _remaining(TERM_START, TERM_END)

        assert len(slots) == seeded_term.slot_count
        assert set(slots) == {CAPACITY}

    @pytest.mark.asyncio
    async def test_initialize_twice_resets_consumed_capacity(self, seeded_term):
        # Given: One slot consumed
        async with AsyncpgUnitOfWork() as uow:
            await uow.slot_repo.decrement_range(start_at=hours(0), end_at=hours(1))
            await uow.commit()

        # When
        async with AsyncpgUnitOfWork() as uow:
            count = await uow.slot_repo.initialize(term=seeded_term)
            await uow.commit()

        # Then
        assert count == seeded_term.slot_count
        assert await _remaining(hours(0), hours(1)) == [CAPACITY]


class TestSlotRepoInTransaction:
    @pytest.mark.asyncio
    async def test_lock_count_and_decrement(self, seeded_term):
        async with AsyncpgUnitOfWork() as uow:
            locked = await uow.slot_repo.lock_range(start_at=hours(2), end_at=hours(5))
            available = await uow.slot_repo.count_available(slots=locked)
            updated = await uow.slot_repo.decrement_range(start_at=hours(2), end_at=hours(5))
            await uow.commit()

        assert [slot.start_at for slot in locked] == [hours(2), hours(3), hours(4)]
        assert available == 3
        assert updated == 3
        assert await _remaining(hours(1), hours(6)) == [
            CAPACITY,
            CAPACITY - 1,
            CAPACITY - 1,
            CAPACITY - 1,
            CAPACITY,
        ]

    @pytest.mark.asyncio
    async def test_partial_slots_are_not_locked(self, seeded_term):
        async with AsyncpgUnitOfWork() as uow:
            locked = await uow.slot_repo.lock_range(start_at=hours(2) + 60, end_at=hours(4) + 60)

        assert [slot.start_at for slot in locked] == [hours(3)]

    @pytest.mark.asyncio
    async def test_decrement_stops_at_zero(self, seeded_term):
        for _ in range(CAPACITY + 1):
            async with AsyncpgUnitOfWork() as uow:
                await uow.slot_repo.decrement_range(start_at=hours(6), end_at=hours(7))
                await uow.commit()

        assert await _remaining(hours(6), hours(7)) == [0]

    @pytest.mark.asyncio
    async def test_exit_without_commit_rolls_back(self, seeded_term):
        async with AsyncpgUnitOfWork() as uow:
            await uow.slot_repo.decrement_range(start_at=hours(8), end_at=hours(10))
            await uow.livestream_command_repo.create(
                livestream=_draft(start_at=hours(8), end_at=hours(10))
            )

        assert await _remaining(hours(8), hours(10)) == [CAPACITY, CAPACITY]
        assert await LivestreamQueryRepoImpl().list_all() == []


class TestReserveAgainstPostgres:
    @pytest.mark.asyncio
    async def test_reservation_is_readable_through_query_repos(self, seeded_term, cache_registry):
        # Given
        use_case = ReserveLivestreamUseCase(
            uow=AsyncpgUnitOfWork(),
            cache_registry=cache_registry,
            term=seeded_term,
            tag_query_repo=TagQueryRepoImpl(),
        )

        # When
        livestream = await use_case.reserve(
            caller=CallerIdentity(user_id=ALICE.id, username=ALICE.name),
            start_at=hours(11),
            end_at=hours(13),
            tag_ids=[TAG_MUSIC.id, TAG_GAME.id],
            title='Integration stream',
            description='Real database',
            playlist_url='https://media.example.com/playlist.m3u8',
            thumbnail_url='https://media.example.com/thumbnail.jpg',
        )

        # Then
        stored = await LivestreamQueryRepoImpl().get_by_id(livestream_id=livestream.id)
        assert stored is not None
        assert stored.user_id == ALICE.id
        assert sorted(stored.tag_ids) == sorted([TAG_MUSIC.id, TAG_GAME.id])
        owned = await LivestreamQueryRepoImpl().list_by_user_id(user_id=ALICE.id)
        assert [item.id for item in owned] == [livestream.id]
        assert await UserQueryRepoImpl().get_by_name(name=BOB.name) == BOB
        assert await TagQueryRepoImpl().get_by_id(tag_id=TAG_GAME.id) == TAG_GAME
        assert await _remaining(hours(11), hours(13)) == [CAPACITY - 1, CAPACITY - 1]

    @pytest.mark.asyncio
    async def test_concurrent_reservations_respect_capacity(self, seeded_term, cache_registry):
        # Given: More contenders than the slot can hold
        contenders = CAPACITY + 4
        accepted: list[int] = []
        rejected: list[int] = []

        async def contend(index: int) -> None:
            use_case = ReserveLivestreamUseCase(
                uow=AsyncpgUnitOfWork(),
                cache_registry=cache_registry,
                term=seeded_term,
                tag_query_repo=TagQueryRepoImpl(),
            )
            try:
                await use_case.reserve(
                    caller=CallerIdentity(user_id=ALICE.id),
                    start_at=hours(20),
                    end_at=hours(21),
                    tag_ids=[],
                    title=f'contender {index}',
                    description='race',
                    playlist_url='p',
                    thumbnail_url='t',
                )
                accepted.append(index)
            except ReservationOverbookedError:
                rejected.append(index)

        # When
        async with anyio.create_task_group() as tg:
            for index in range(contenders):
                tg.start_soon(contend, index)

        # Then
        assert len(accepted) == CAPACITY
        assert len(rejected) == contenders - CAPACITY
        assert await _remaining(hours(20), hours(21)) == [0]
        assert len(await LivestreamQueryRepoImpl().list_all()) == CAPACITY

    @pytest.mark.asyncio
    async def test_range_cutting_into_a_full_slot_is_rejected(self, seeded_term, cache_registry):
        # Given: Hour 15 has no capacity left
        async with AsyncpgUnitOfWork() as uow:
            for _ in range(CAPACITY):
                await uow.slot_repo.decrement_range(start_at=hours(15), end_at=hours(16))
            await uow.commit()
        use_case = ReserveLivestreamUseCase(
            uow=AsyncpgUnitOfWork(),
            cache_registry=cache_registry,
            term=seeded_term,
            tag_query_repo=TagQueryRepoImpl(),
        )

        # When: The range ends half way into hour 15
        with pytest.raises(ReservationOverbookedError):
            await use_case.reserve(
                caller=CallerIdentity(user_id=ALICE.id),
                start_at=hours(14),
                end_at=hours(15) + HOUR // 2,
                tag_ids=[],
                title='Half past',
                description='Ends inside a full slot',
                playlist_url='p',
                thumbnail_url='t',
            )

        # Then: Hour 14 kept its capacity and nothing was stored
        assert await _remaining(hours(14), hours(16)) == [CAPACITY, 0]
        assert await LivestreamQueryRepoImpl().list_all() == []

    @pytest.mark.asyncio
    async def test_tag_added_after_cache_load_is_accepted(self, seeded_term, cache_registry):
        # Given: A tag row the cache has never seen
        async with acquire_connection() as conn:
            await conn.execute("INSERT INTO tags (id, name) VALUES (40, '料理')")
        use_case = ReserveLivestreamUseCase(
            uow=AsyncpgUnitOfWork(),
            cache_registry=cache_registry,
            term=seeded_term,
            tag_query_repo=TagQueryRepoImpl(),
        )

        # When
        livestream = await use_case.reserve(
            caller=CallerIdentity(user_id=ALICE.id),
            start_at=hours(17),
            end_at=hours(18),
            tag_ids=[40],
            title='Cooking',
            description='New tag',
            playlist_url='p',
            thumbnail_url='t',
        )

        # Then
        assert livestream.tag_ids == (40,)
        assert cache_registry.get_tag(40).name == '料理'
