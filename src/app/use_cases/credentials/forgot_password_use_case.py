"""
Forgot Password Use Case

Resets a forgotten password once the caller proves username, email and phone.
"""

from typing import List

from sqlalchemy.exc import SQLAlchemyError

from src.libs.result import Result, Return
from .dtos import ForgotPasswordCommand, PasswordUpdatedResponse
from .pipeline import (
    PASSWORD_UPDATED_MESSAGE,
    CredentialContext,
    CredentialRotationUseCase,
    Stage,
)


class ForgotPasswordUseCase(CredentialRotationUseCase):
    """
    Use case for resetting a forgotten password.

    Business Rules:
    - username, email, phone, new password and confirmation are required
    - Email must contain '@', phone must be grouped 3-3-4 (123-456-7890)
    - Account resolved by exact match on all three of username, email and phone;
      the triple stands in for the current password
    - No match returns ACCOUNT_NOT_FOUND and nothing is mutated
    """

    required_fields = (
        "username",
        "email",
        "phone",
        "new_password",
        "confirm_new_password",
    )

    def stages(self) -> List[Stage]:
        return [
            self.require_fields,
            self.validate_new_password,
            self.confirm_new_password,
            self.validate_email,
            self.validate_phone,
            self.resolve_by_identity,
            self.rotate_credential,
            self.issue_token,
        ]

    async def resolve_by_identity(self, context: CredentialContext) -> Result[CredentialContext]:
        try:
            account = await self.uow.accounts.get_by_identity(
                context.username, context.email, context.phone
            )
        except SQLAlchemyError:
            return self.lookup_failed(context)

        if account is None:
            return self.account_not_found()

        return Return.ok(context.advance(account_id=account.account_id))

    async def execute(self, command: ForgotPasswordCommand) -> Result[PasswordUpdatedResponse]:
        """
        Execute forgot password use case.

        Args:
            command: ForgotPasswordCommand with identity claims and new password

        Returns:
            Result with confirmation message and reset token, or Error

        Errors:
            - MISSING_PARAMETER: A required field is absent or empty
            - INVALID_PASSWORD: New password fails the complexity rules
            - PASSWORD_MISMATCH: New password differs from its confirmation
            - INVALID_EMAIL / INVALID_PHONE: Identity claim has the wrong shape
            - ACCOUNT_NOT_FOUND: No account matches username, email and phone
            - ACCOUNT_LOOKUP_FAILED / RESOLUTION_FAILURE / CREDENTIAL_UPDATE_FAILED
        """
        context = CredentialContext(
            username=command.username,
            email=command.email,
            phone=command.phone,
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
