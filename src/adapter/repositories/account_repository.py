from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get account by username, locking the row for the current transaction"""
        stmt = select(Account).where(Account.username == username).with_for_update()
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_identity(
        self, username: str, email: str, phone: str
    ) -> Optional[Account]:
        """Get account matching username, email and phone exactly, locking the row"""
        stmt = (
            select(Account)
            .where(
                Account.username == username,
                Account.email == email,
                Account.phone == phone,
            )
            .with_for_update()
        )
        result = await self.session.exec(stmt)
        return result.first()
