from abc import ABC, abstractmethod
from typing import Optional


class TokenIssuer(ABC):
    """Signs short-lived bearer tokens confirming a credential rotation"""

    @abstractmethod
    def issue(self, account_id: int) -> str:
        """Sign a token carrying the account id"""
        pass

    @abstractmethod
    def verify(self, token: str) -> Optional[dict]:
        """Decode a token, or None if the signature or expiry is invalid"""
        pass
