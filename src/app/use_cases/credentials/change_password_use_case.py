"""
Change Password Use Case

Rotates the password of an account identified by username.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.credentials import verify_password
from src.libs.result import Error, Result, Return
from .dtos import ChangePasswordCommand, PasswordUpdatedResponse
from .pipeline import (
    PASSWORD_UPDATED_MESSAGE,
    CredentialContext,
    CredentialRotationUseCase,
    Stage,
)

logger = logging.getLogger(__name__)


class ChangePasswordUseCase(CredentialRotationUseCase):
    """
    Use case for changing a known password.

    Business Rules:
    - username, current password, new password and confirmation are required
    - Account resolved by username alone
    - The current password is only checked against the stored credential when
      verify_current_password is enabled; by default a username match is enough
    """

    required_fields = (
        "username",
        "current_password",
        "new_password",
        "confirm_new_password",
    )

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        salt_bytes: int = 32,
        verify_current_password: bool = False,
    ):
        super().__init__(uow, token_issuer, salt_bytes)
        self.verify_current_password = verify_current_password

    def stages(self) -> List[Stage]:
        stages = [
            self.require_fields,
            self.validate_new_password,
            self.confirm_new_password,
            self.resolve_by_username,
        ]
        if self.verify_current_password:
            stages.append(self.check_current_password)
        stages.extend([self.rotate_credential, self.issue_token])
        return stages

    async def resolve_by_username(self, context: CredentialContext) -> Result[CredentialContext]:
        try:
            account = await self.uow.accounts.get_by_username(context.username)
        except SQLAlchemyError:
            return self.lookup_failed(context)

        if account is None:
            return self.account_not_found()

        return Return.ok(context.advance(account_id=account.account_id))

    async def check_current_password(self, context: CredentialContext) -> Result[CredentialContext]:
        try:
            credential = await self.uow.credentials.get_by_account_id(context.account_id)
        except SQLAlchemyError:
            return self.lookup_failed(context)

        if credential is None or not verify_password(
            context.current_password, credential.salt, credential.salted_hash
        ):
            logger.warning(f"Current password rejected for account {context.account_id}")
            return Return.err(
                Error("INVALID_CREDENTIALS", "Invalid username or password")
            )

        return Return.ok(context)

    async def execute(self, command: ChangePasswordCommand) -> Result[PasswordUpdatedResponse]:
        """
        Execute change password use case.

        Args:
            command: ChangePasswordCommand with username, current and new password

        Returns:
            Result with confirmation message and reset token, or Error

        Errors:
            - MISSING_PARAMETER: A required field is absent or empty
            - INVALID_PASSWORD: New password fails the complexity rules
            - PASSWORD_MISMATCH: New password differs from its confirmation
            - ACCOUNT_NOT_FOUND: No account with this username
            - INVALID_CREDENTIALS: Current password rejected (verification enabled only)
            - ACCOUNT_LOOKUP_FAILED / RESOLUTION_FAILURE / CREDENTIAL_UPDATE_FAILED
        """
        context = CredentialContext(
            username=command.username,
            current_password=command.current_password,
            new_password=command.new_password,
            confirm_new_password=command.confirm_new_password,
        )

        result = await self.run(context)
        if result.is_err():
            return Return.err(result.error)

        return Return.ok(
            PasswordUpdatedResponse(
                message=PASSWORD_UPDATED_MESSAGE,
                reset_token=result.value.reset_token,
            )
        )
