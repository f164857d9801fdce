from typing import Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_credential_repository import IAccountCredentialRepository
from src.domain.entities import AccountCredential


class AccountCredentialRepository(IAccountCredentialRepository):
    """Account credential repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_account_id(self, account_id: int) -> Optional[AccountCredential]:
        """Get the active credential of an account"""
        stmt = select(AccountCredential).where(AccountCredential.account_id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def replace(self, account_id: int, salt: str, salted_hash: str) -> int:
        """Replace salt and salted_hash in one statement"""
        stmt = (
            update(AccountCredential)
            .where(AccountCredential.account_id == account_id)
            .values(salted_hash=salted_hash, salt=salt)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
