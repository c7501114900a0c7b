"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.event.seat_update_broadcaster import SeatUpdateBroadcasterImpl
from src.platform.state.trip_lock import TripLockRegistry
from src.service.fleet.driven_adapter.repo.directory_command_repo_impl import (
    DirectoryCommandRepoImpl,
)
from src.service.fleet.driven_adapter.repo.directory_query_repo_impl import (
    DirectoryQueryRepoImpl,
)
from src.service.shared_kernel.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.trip_booking.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.trip_booking.driven_adapter.repo.trip_command_repo_impl import (
    TripCommandRepoImpl,
)
from src.service.trip_booking.driven_adapter.repo.trip_query_repo_impl import TripQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager under the hood)
    database = providers.Singleton(Database)

    # One unit of work per use case execution
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Repositories (stateless - open a session per call)
    directory_query_repo = providers.Singleton(
        DirectoryQueryRepoImpl, session_factory=database.provided.session
    )
    directory_command_repo = providers.Singleton(
        DirectoryCommandRepoImpl, session_factory=database.provided.session
    )
    trip_command_repo = providers.Singleton(
        TripCommandRepoImpl, session_factory=database.provided.session
    )
    trip_query_repo = providers.Singleton(
        TripQueryRepoImpl, session_factory=database.provided.session
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )

    # Per-trip serialization point (process-local)
    trip_lock_registry = providers.Singleton(TripLockRegistry)

    # Change notifier, closed by the lifespan on shutdown
    seat_update_broadcaster = providers.Singleton(
        SeatUpdateBroadcasterImpl,
        max_buffer_size=config_service.provided.NOTIFIER_BUFFER_SIZE,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
