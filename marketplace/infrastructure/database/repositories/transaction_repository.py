"""
Transaction service for managing database transactions centrally.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config.logging import get_logger
from marketplace.domain.exceptions.base import DomainError

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService:
    """Centralized transaction management service."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logger

    async def execute_in_transaction(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Execute an operation within a transaction.

        Args:
            operation: Async function to execute

        Returns:
            Result of the operation

        Raises:
            Exception: Any exception that occurs during execution
        """
        try:
            result = await operation()

            await self.session.commit()

            self.logger.debug("Transaction committed successfully")
            return result

        except DomainError as e:
            await self.session.rollback()
            self.logger.info(
                "Transaction rolled back", reason=type(e).__name__, error=str(e)
            )
            raise

        except Exception as e:
            await self.session.rollback()
            self.logger.error(
                "Transaction rolled back due to error", error=str(e), exc_info=True
            )
            raise
