from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import AccountCredential


class IAccountCredentialRepository(ABC):
    """Account credential repository interface - application layer"""

    @abstractmethod
    async def get_by_account_id(self, account_id: int) -> Optional[AccountCredential]:
        """Get the active credential of an account"""
        pass

    @abstractmethod
    async def replace(self, account_id: int, salt: str, salted_hash: str) -> int:
        """Replace salt and salted_hash in one statement. Returns rows updated."""
        pass
