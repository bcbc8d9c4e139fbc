"""
Base Service.

Base class for all services providing common patterns for business logic.
Services own the unit of work: each operation opens a session, runs inside
one transaction, and converts store failures into typed application errors.

Usage:
    from keepnotes.backend.services.base import BaseService

    class NoteService(BaseService):
        async def list_notes(self) -> list[Note]:
            return await self._execute_db_operation(
                "list_notes",
                lambda session: NoteRepository(session).get_all_newest_first(),
                error=StoreReadError,
                message="Failed to fetch notes",
            )
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from keepnotes.backend.core.exceptions import NotFoundError, StoreError
from keepnotes.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Session and transaction management per operation
    - Logging context
    - Error wrapping for database operations

    Subclasses should:
    - Call super().__init__(session_factory) in their __init__
    - Implement business logic methods on top of _execute_db_operation
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the service with a session factory.

        Args:
            session_factory: Factory producing SQLAlchemy async sessions
        """
        self._session_factory = session_factory
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get the session factory."""
        return self._session_factory

    async def _execute_db_operation(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
        error: type[StoreError],
        message: str,
    ) -> T:
        """
        Run work in its own session and transaction.

        The transaction commits when work returns and rolls back when it
        raises, so a failed operation leaves the store untouched.

        Args:
            operation: Description of the operation for logging
            work: Coroutine function receiving the open session
            error: Typed error to raise on failure
            message: Fixed message for the raised error

        Returns:
            Result of work

        Raises:
            StoreError: The given error type, chained to the cause
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    return await work(session)
        except NotFoundError as e:
            self._logger.warning(
                "Record not found",
                extra={"operation": operation, "error": e.message},
            )
            raise error(message) from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise error(message) from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
