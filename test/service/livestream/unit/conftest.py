"""
Unit test fixtures for the livestream service.

Everything here is in-memory: a slot store with emulated row locks and query
repos over plain lists.
"""

import pytest

from src.platform.config.core_setting import AdmissionPolicy
from src.service.livestream.domain.enum.entity_kind import EntityKind
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm
from src.service.livestream.driven_adapter.state.livestream_cache_registry import (
    LivestreamCacheRegistry,
)
from test.service.livestream.fakes import (
    InMemoryLivecommentRepo,
    InMemoryLivestreamQueryRepo,
    InMemoryLivestreamViewerRepo,
    InMemoryReactionRepo,
    InMemorySlotStore,
    InMemoryTagQueryRepo,
    InMemoryUserQueryRepo,
)
from test.service.livestream.sample_data import (
    ALICE,
    ALL_TAGS,
    BOB,
    CAPACITY,
    HOUR,
    TERM_END,
    TERM_START,
)


@pytest.fixture
def term() -> ReservationTerm:
    return ReservationTerm(
        start_at=TERM_START, end_at=TERM_END, slot_seconds=HOUR, capacity=CAPACITY
    )


@pytest.fixture
def any_slot_term() -> ReservationTerm:
    return ReservationTerm(
        start_at=TERM_START,
        end_at=TERM_END,
        slot_seconds=HOUR,
        capacity=CAPACITY,
        admission_policy=AdmissionPolicy.ANY_SLOT,
    )


@pytest.fixture
def slot_store(term: ReservationTerm) -> InMemorySlotStore:
    return InMemorySlotStore(term)


@pytest.fixture
def cache_registry() -> LivestreamCacheRegistry:
    registry = LivestreamCacheRegistry()
    registry.bulk_load(EntityKind.TAG, [(tag.id, tag) for tag in ALL_TAGS])
    for user in (ALICE, BOB):
        registry.remember_user(user)
    return registry


@pytest.fixture
def user_query_repo() -> InMemoryUserQueryRepo:
    return InMemoryUserQueryRepo([ALICE, BOB])


@pytest.fixture
def tag_query_repo() -> InMemoryTagQueryRepo:
    return InMemoryTagQueryRepo(ALL_TAGS)


@pytest.fixture
def livestream_query_repo() -> InMemoryLivestreamQueryRepo:
    return InMemoryLivestreamQueryRepo()


@pytest.fixture
def livestream_viewer_repo() -> InMemoryLivestreamViewerRepo:
    return InMemoryLivestreamViewerRepo()


@pytest.fixture
def livecomment_repo() -> InMemoryLivecommentRepo:
    return InMemoryLivecommentRepo()


@pytest.fixture
def reaction_repo() -> InMemoryReactionRepo:
    return InMemoryReactionRepo()
