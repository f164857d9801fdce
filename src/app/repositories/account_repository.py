from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get account by username, locking the row for the current transaction"""
        pass

    @abstractmethod
    async def get_by_identity(
        self, username: str, email: str, phone: str
    ) -> Optional[Account]:
        """Get account matching username, email and phone exactly, locking the row"""
        pass
