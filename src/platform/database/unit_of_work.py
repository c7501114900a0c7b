"""
Unit of Work - one database session shared by the repositories of one transaction

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; anything not committed is rolled back on exit
- Repositories receive the shared session from the UoW
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.fleet.app.interface.i_directory_command_repo import IDirectoryCommandRepo
    from src.service.trip_booking.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from src.service.trip_booking.app.interface.i_trip_command_repo import ITripCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work

    Usage:
        async with uow:
            await uow.reservation_command_repo.create(reservation=...)
            await uow.trip_command_repo.add_seat(...)
            await uow.commit()
    """

    trip_command_repo: ITripCommandRepo
    reservation_command_repo: IReservationCommandRepo
    directory_command_repo: IDirectoryCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A new instance is created per use case execution (providers.Factory).
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None
        self._exit_stack: AsyncExitStack | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.fleet.driven_adapter.repo.directory_command_repo_impl import (
            DirectoryCommandRepoImpl,
        )
        from src.service.trip_booking.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.trip_booking.driven_adapter.repo.trip_command_repo_impl import (
            TripCommandRepoImpl,
        )

        self._exit_stack = AsyncExitStack()
        self.session = await self._exit_stack.enter_async_context(self.session_factory())

        # Repositories share the UoW session
        self.trip_command_repo = TripCommandRepoImpl(session=self.session)
        self.reservation_command_repo = ReservationCommandRepoImpl(session=self.session)
        self.directory_command_repo = DirectoryCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._exit_stack is not None:
                await self._exit_stack.aclose()
            self._exit_stack = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'Unit of work used outside its context'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
