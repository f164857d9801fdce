"""
Account Entity

Identity attributes a caller can present to prove who they are.
"""

from typing import Optional

from sqlmodel import Field, Index, SQLModel


class Account(SQLModel, table=True):
    """
    Account entity - a catalog user.

    Business Rules:
    - username, email and phone are each unique across accounts
    - (username, email, phone) together identify an account for forgot-password
    - Credentials live in AccountCredential, never on this row
    """

    __tablename__ = "account"

    account_id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(unique=True, max_length=255)
    phone: str = Field(unique=True, max_length=15)  # 123-456-7890

    __table_args__ = (Index("idx_account_identity", "username", "email", "phone"),)
