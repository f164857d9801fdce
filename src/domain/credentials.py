"""
Credentialing helpers

Salt generation and salted hashing for AccountCredential rows.

The digest is a single SHA-256 over password + salt rather than bcrypt: it is
the scheme of the account store's existing salt / salted_hash columns, and
rows written here must verify the same way as rows written at registration.
"""

import hashlib
import hmac
import secrets


def generate_salt(size: int = 32) -> str:
    """Return `size` bytes of CSPRNG output, hex encoded."""
    return secrets.token_hex(size)


def generate_hash(password: str, salt: str) -> str:
    """SHA-256 hex digest of password + salt."""
    return hashlib.sha256((password + salt).encode()).hexdigest()


def verify_password(password: str, salt: str, salted_hash: str) -> bool:
    """Constant-time check of a password against a stored (salt, hash) pair."""
    return hmac.compare_digest(generate_hash(password, salt), salted_hash)
