"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.unit_of_work import AsyncpgUnitOfWork
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm
from src.service.livestream.driven_adapter.repo.livecomment_repo_impl import LivecommentRepoImpl
from src.service.livestream.driven_adapter.repo.livestream_query_repo_impl import (
    LivestreamQueryRepoImpl,
)
from src.service.livestream.driven_adapter.repo.livestream_viewer_repo_impl import (
    LivestreamViewerRepoImpl,
)
from src.service.livestream.driven_adapter.repo.reaction_repo_impl import ReactionRepoImpl
from src.service.livestream.driven_adapter.repo.tag_query_repo_impl import TagQueryRepoImpl
from src.service.livestream.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.livestream.driven_adapter.state.livestream_cache_registry import (
    LivestreamCacheRegistry,
)
from src.service.livestream.driving_adapter.http_controller.auth.session_auth import SessionAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Reservation horizon, slot length, capacity and admission policy
    reservation_term = providers.Singleton(ReservationTerm.from_settings, settings=config_service)

    # In-process entity caches (bulk loaded by the lifespan before serving)
    cache_registry = providers.Singleton(LivestreamCacheRegistry)

    # Unit of Work - one connection + transaction per request, never shared
    unit_of_work = providers.Factory(AsyncpgUnitOfWork)

    # Repositories (stateless - acquire a pooled connection per call)
    livestream_query_repo = providers.Singleton(LivestreamQueryRepoImpl)
    user_query_repo = providers.Singleton(UserQueryRepoImpl)
    tag_query_repo = providers.Singleton(TagQueryRepoImpl)
    livestream_viewer_repo = providers.Singleton(LivestreamViewerRepoImpl)
    livecomment_repo = providers.Singleton(LivecommentRepoImpl)
    reaction_repo = providers.Singleton(ReactionRepoImpl)

    # Auth service
    session_auth = providers.Singleton(SessionAuth)


container = Container()


def setup() -> None:
    container.config_service()
    container.reservation_term()
    container.cache_registry()


def cleanup() -> None:
    container.reset_singletons()
