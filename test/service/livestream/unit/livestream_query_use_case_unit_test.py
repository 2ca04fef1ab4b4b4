"""
Unit tests for the livestream read side

Test Coverage:
1. LivestreamResponseAssembler: cache joins, read-through on miss, write-back
2. GetLivestreamUseCase: cache first, storage fallback, not found
3. ListLivestreamsUseCase: mine, by username, search by tag / latest
4. ListTagsUseCase
"""

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.livestream.app.query.get_livestream_use_case import GetLivestreamUseCase
from src.service.livestream.app.query.list_livestreams_use_case import ListLivestreamsUseCase
from src.service.livestream.app.query.list_tags_use_case import ListTagsUseCase
from src.service.livestream.app.query.livestream_response_assembler import (
    LivestreamResponseAssembler,
)
from src.service.livestream.domain.entity.user_entity import User
from src.service.livestream.domain.enum.entity_kind import EntityKind
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity
from src.service.livestream.driven_adapter.state.livestream_cache_registry import (
    LivestreamCacheRegistry,
)
from test.service.livestream.fakes import InMemoryTagQueryRepo, InMemoryUserQueryRepo
from test.service.livestream.sample_data import (
    ALICE,
    BOB,
    TAG_CHAT,
    TAG_GAME,
    TAG_MUSIC,
    make_livestream,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def assembler(cache_registry, user_query_repo, tag_query_repo):
    return LivestreamResponseAssembler(
        cache_registry=cache_registry,
        user_query_repo=user_query_repo,
        tag_query_repo=tag_query_repo,
    )


@pytest.fixture
def seeded_livestreams(livestream_query_repo):
    livestreams = [
        make_livestream(livestream_id=1, user_id=ALICE.id, tag_ids=[TAG_GAME.id]),
        make_livestream(
            livestream_id=2, user_id=BOB.id, start_offset_hours=2, tag_ids=[TAG_MUSIC.id]
        ),
        make_livestream(
            livestream_id=3,
            user_id=ALICE.id,
            start_offset_hours=4,
            tag_ids=[TAG_MUSIC.id, TAG_CHAT.id],
        ),
    ]
    livestream_query_repo.livestreams.extend(livestreams)
    return livestreams


@pytest.fixture
def list_use_case(cache_registry, livestream_query_repo, user_query_repo, assembler):
    return ListLivestreamsUseCase(
        cache_registry=cache_registry,
        livestream_query_repo=livestream_query_repo,
        user_query_repo=user_query_repo,
        assembler=assembler,
    )


class TestLivestreamResponseAssembler:
    @pytest.mark.asyncio
    async def test_assemble_joins_owner_and_tags(self, assembler, user_query_repo):
        # Given
        livestream = make_livestream(
            livestream_id=7, user_id=ALICE.id, tag_ids=[TAG_MUSIC.id, TAG_GAME.id]
        )

        # When
        response = await assembler.assemble(livestream)

        # Then: Owner and tags come from the cache, in tag order
        assert response['id'] == 7
        assert response['owner'] == {
            'id': ALICE.id,
            'name': ALICE.name,
            'display_name': ALICE.display_name,
            'description': ALICE.description,
        }
        assert response['tags'] == [
            {'id': TAG_MUSIC.id, 'name': TAG_MUSIC.name},
            {'id': TAG_GAME.id, 'name': TAG_GAME.name},
        ]
        assert response['start_at'] == livestream.start_at
        assert response['end_at'] == livestream.end_at
        assert user_query_repo.calls == []

    @pytest.mark.asyncio
    async def test_owner_miss_reads_storage_once_and_writes_back(
        self, cache_registry, tag_query_repo
    ):
        # Given: A user the cache has never seen
        carol = User(id=3, name='carol', display_name='Carol')
        user_query_repo = InMemoryUserQueryRepo([carol])
        assembler = LivestreamResponseAssembler(
            cache_registry=cache_registry,
            user_query_repo=user_query_repo,
            tag_query_repo=tag_query_repo,
        )
        livestream = make_livestream(livestream_id=8, user_id=carol.id)

        # When: Assembled twice
        await assembler.assemble(livestream)
        response = await assembler.assemble(livestream)

        # Then: Storage was read once, then the cache answered
        assert response['owner']['name'] == 'carol'
        assert user_query_repo.calls == ['get_by_id']
        assert cache_registry.get_user_by_name('carol') == carol

    @pytest.mark.asyncio
    async def test_tag_miss_reads_storage(self, user_query_repo):
        registry = LivestreamCacheRegistry()
        registry.remember_user(ALICE)
        tag_query_repo = InMemoryTagQueryRepo([TAG_CHAT])
        assembler = LivestreamResponseAssembler(
            cache_registry=registry,
            user_query_repo=user_query_repo,
            tag_query_repo=tag_query_repo,
        )

        response = await assembler.assemble(
            make_livestream(livestream_id=9, user_id=ALICE.id, tag_ids=[TAG_CHAT.id])
        )

        assert response['tags'] == [{'id': TAG_CHAT.id, 'name': TAG_CHAT.name}]
        assert registry.get_tag(TAG_CHAT.id) == TAG_CHAT

    @pytest.mark.asyncio
    async def test_missing_owner_is_not_found(self, cache_registry, tag_query_repo):
        assembler = LivestreamResponseAssembler(
            cache_registry=cache_registry,
            user_query_repo=InMemoryUserQueryRepo(),
            tag_query_repo=tag_query_repo,
        )

        with pytest.raises(NotFoundError):
            await assembler.assemble(make_livestream(livestream_id=1, user_id=404))


class TestGetLivestreamUseCase:
    @pytest.mark.asyncio
    async def test_cache_hit_skips_storage(self, cache_registry, livestream_query_repo, assembler):
        # Given
        livestream = make_livestream(livestream_id=5, user_id=BOB.id)
        cache_registry.remember_livestream(livestream)
        use_case = GetLivestreamUseCase(
            cache_registry=cache_registry,
            livestream_query_repo=livestream_query_repo,
            assembler=assembler,
        )

        # When
        response = await use_case.get_livestream(livestream_id=5)

        # Then
        assert response['id'] == 5
        assert response['owner']['name'] == BOB.name
        assert livestream_query_repo.calls == []

    @pytest.mark.asyncio
    async def test_cache_miss_falls_back_to_storage(
        self, cache_registry, livestream_query_repo, assembler, seeded_livestreams
    ):
        use_case = GetLivestreamUseCase(
            cache_registry=cache_registry,
            livestream_query_repo=livestream_query_repo,
            assembler=assembler,
        )

        response = await use_case.get_livestream(livestream_id=2)

        assert response['id'] == 2
        assert livestream_query_repo.calls == ['get_by_id']
        assert cache_registry.get(EntityKind.LIVESTREAM_BY_ID, 2) == (seeded_livestreams[1], True)

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, cache_registry, livestream_query_repo, assembler):
        use_case = GetLivestreamUseCase(
            cache_registry=cache_registry,
            livestream_query_repo=livestream_query_repo,
            assembler=assembler,
        )

        with pytest.raises(NotFoundError, match='livestream not found'):
            await use_case.get_livestream(livestream_id=404)


class TestListLivestreams:
    @pytest.mark.asyncio
    async def test_list_mine_reads_through_then_uses_cache(
        self, list_use_case, livestream_query_repo, seeded_livestreams
    ):
        caller = CallerIdentity(user_id=ALICE.id, username=ALICE.name)

        first = await list_use_case.list_mine(caller=caller)
        second = await list_use_case.list_mine(caller=caller)

        assert [item['id'] for item in first] == [1, 3]
        assert first == second
        assert livestream_query_repo.calls == ['list_by_user_id']

    @pytest.mark.asyncio
    async def test_list_mine_is_empty_for_a_new_user(self, list_use_case):
        result = await list_use_case.list_mine(caller=CallerIdentity(user_id=BOB.id))

        assert result == []

    @pytest.mark.asyncio
    async def test_list_by_username(self, list_use_case, seeded_livestreams):
        result = await list_use_case.list_by_username(username=BOB.name)

        assert [item['id'] for item in result] == [2]
        assert result[0]['owner']['display_name'] == BOB.display_name

    @pytest.mark.asyncio
    async def test_list_by_unknown_username_is_not_found(self, list_use_case):
        with pytest.raises(NotFoundError, match='user not found'):
            await list_use_case.list_by_username(username='nobody')

    @pytest.mark.asyncio
    async def test_list_by_username_reads_user_from_storage_on_miss(
        self, livestream_query_repo, assembler
    ):
        # Given: An empty cache
        registry = LivestreamCacheRegistry()
        user_query_repo = InMemoryUserQueryRepo([ALICE])
        use_case = ListLivestreamsUseCase(
            cache_registry=registry,
            livestream_query_repo=livestream_query_repo,
            user_query_repo=user_query_repo,
            assembler=assembler,
        )

        # When
        await use_case.list_by_username(username=ALICE.name)

        # Then
        assert user_query_repo.calls == ['get_by_name']
        assert registry.get_user_by_id(ALICE.id) == ALICE


class TestSearchLivestreams:
    @pytest.mark.asyncio
    async def test_search_by_tag_name_newest_first(self, list_use_case, seeded_livestreams):
        result = await list_use_case.search(tag=TAG_MUSIC.name)

        assert [item['id'] for item in result] == [3, 2]

    @pytest.mark.asyncio
    async def test_search_by_unknown_tag_is_empty(self, list_use_case, seeded_livestreams):
        assert await list_use_case.search(tag='no-such-tag') == []

    @pytest.mark.asyncio
    async def test_search_without_tag_returns_latest(self, list_use_case, seeded_livestreams):
        result = await list_use_case.search()

        assert [item['id'] for item in result] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_search_with_limit(self, list_use_case, seeded_livestreams):
        result = await list_use_case.search(limit=2)

        assert [item['id'] for item in result] == [3, 2]

    @pytest.mark.asyncio
    async def test_negative_limit_is_rejected(self, list_use_case):
        with pytest.raises(DomainError):
            await list_use_case.search(limit=-1)


class TestListTags:
    @pytest.mark.asyncio
    async def test_tags_sorted_by_id(self, cache_registry):
        use_case = ListTagsUseCase(cache_registry=cache_registry)

        tags = await use_case.list_tags()

        assert [tag.id for tag in tags] == [TAG_GAME.id, TAG_MUSIC.id, TAG_CHAT.id]
