"""
AccountCredential Entity

Salted password hash owned one-to-one by an Account.
"""

from sqlmodel import Field, SQLModel


class AccountCredential(SQLModel, table=True):
    """
    AccountCredential entity - the active (salt, salted_hash) pair of an account.

    Business Rules:
    - At most one row per account (account_id is the primary key)
    - Salt is 32 random bytes, hex encoded
    - salted_hash is the SHA-256 hex digest of password + salt
    - Rotation replaces salt and salted_hash together, never one alone
    """

    __tablename__ = "account_credential"

    account_id: int = Field(foreign_key="account.account_id", primary_key=True)
    salted_hash: str = Field(max_length=64)  # SHA-256 hex output
    salt: str = Field(max_length=64)
