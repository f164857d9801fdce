from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from src.app.services.token_issuer import TokenIssuer


class JwtTokenIssuer(TokenIssuer):
    """
    HS256 reset token issuer.

    The signing secret is handed in once at startup and never re-read
    from configuration afterwards.
    """

    algorithm = "HS256"

    def __init__(self, secret: str, ttl: timedelta = timedelta(minutes=15)):
        if not secret:
            raise ValueError("JWT signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl

    def issue(self, account_id: int) -> str:
        """
        Generate reset confirmation token

        Args:
            account_id: Account whose credential was rotated

        Returns:
            JWT token string (HS256, expires after the configured ttl)
        """
        now = datetime.now(UTC)
        payload = {
            "id": account_id,
            "exp": now + self._ttl,
            "iat": now,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[dict]:
        """
        Verify and decode reset token

        Args:
            token: JWT token string

        Returns:
            Decoded payload dict or None if invalid or expired
        """
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError:
            return None
