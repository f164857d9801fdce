"""
Credential Rotation Pipeline

Ordered stages shared by the change-password and forgot-password flows:
request validation, policy validation, identity resolution, credential
rotation and token issuance. Each stage receives the current context and
returns either a new context or a terminal error; the driver stops at the
first error.
"""

import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.credentials import generate_hash, generate_salt
from src.domain.password_policy import (
    is_string_provided,
    is_valid_email,
    is_valid_new_password,
    is_valid_phone,
)
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

PASSWORD_UPDATED_MESSAGE = "Password updated successfully"


@dataclass(frozen=True)
class CredentialContext:
    """
    Request-scoped pipeline state.

    Frozen: stages derive a new context with `advance` instead of
    mutating the one they were given.
    """

    username: Optional[str] = None
    new_password: Optional[str] = None
    confirm_new_password: Optional[str] = None
    current_password: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    account_id: Optional[int] = None
    reset_token: Optional[str] = None

    def advance(self, **changes) -> "CredentialContext":
        return replace(self, **changes)

    def describe(self) -> dict:
        """Loggable view of the request, passwords masked"""
        return {
            "username": self.username,
            "email": self.email,
            "phone": self.phone,
            "account_id": self.account_id,
            "current_password": "******",
            "new_password": "******",
        }


Stage = Callable[[CredentialContext], Awaitable[Result[CredentialContext]]]


async def run_stages(
    context: CredentialContext, stages: Sequence[Stage]
) -> Result[CredentialContext]:
    """Run stages in order until one fails or all succeed"""
    for stage in stages:
        result = await stage(context)
        if result.is_err():
            return result
        context = result.value
    return Return.ok(context)


class CredentialRotationUseCase:
    """
    Base use case for rotating an account credential.

    Business Rules:
    - All required fields must be non-empty strings
    - New password: 8-24 chars, upper, lower, digit and special character
    - New password must equal its confirmation
    - Policy checks run before any store access
    - Resolution and rotation share one transaction; the resolving read locks the row
    - Salt and salted hash are replaced together in a single statement
    - Reset token is issued only after the rotation is committed
    - Failures are never retried
    """

    required_fields: Sequence[str] = ()

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        salt_bytes: int = 32,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.salt_bytes = salt_bytes

    def stages(self) -> List[Stage]:
        raise NotImplementedError

    async def run(self, context: CredentialContext) -> Result[CredentialContext]:
        async with self.uow:
            return await run_stages(context, self.stages())

    # ------------------------------------------------------------------
    # Request validation
    # ------------------------------------------------------------------

    async def require_fields(self, context: CredentialContext) -> Result[CredentialContext]:
        for name in self.required_fields:
            if not is_string_provided(getattr(context, name)):
                return Return.err(
                    Error("MISSING_PARAMETER", "Missing required information")
                )
        return Return.ok(context)

    # ------------------------------------------------------------------
    # Policy validation
    # ------------------------------------------------------------------

    async def validate_new_password(self, context: CredentialContext) -> Result[CredentialContext]:
        if not is_valid_new_password(context.new_password):
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    "Invalid new password - please refer to documentation",
                )
            )
        return Return.ok(context)

    async def confirm_new_password(self, context: CredentialContext) -> Result[CredentialContext]:
        if context.new_password != context.confirm_new_password:
            return Return.err(Error("PASSWORD_MISMATCH", "The passwords do not match"))
        return Return.ok(context)

    async def validate_email(self, context: CredentialContext) -> Result[CredentialContext]:
        if not is_valid_email(context.email):
            return Return.err(
                Error(
                    "INVALID_EMAIL",
                    "Invalid email - please refer to registration documentation",
                )
            )
        return Return.ok(context)

    async def validate_phone(self, context: CredentialContext) -> Result[CredentialContext]:
        if not is_valid_phone(context.phone):
            return Return.err(
                Error(
                    "INVALID_PHONE",
                    "Invalid phone number - please refer to registration documentation",
                )
            )
        return Return.ok(context)

    # ------------------------------------------------------------------
    # Rotation and issuance
    # ------------------------------------------------------------------

    def account_not_found(self) -> Result[CredentialContext]:
        return Return.err(
            Error("ACCOUNT_NOT_FOUND", "User does not exist within the Database")
        )

    def lookup_failed(self, context: CredentialContext) -> Result[CredentialContext]:
        logger.exception(f"Account lookup failed: {context.describe()}")
        return Return.err(
            Error(
                "ACCOUNT_LOOKUP_FAILED",
                "Unexpected issue on account retrieval in the database",
            )
        )

    async def rotate_credential(self, context: CredentialContext) -> Result[CredentialContext]:
        if not context.account_id:
            logger.error(f"Rotation reached without a resolved account: {context.describe()}")
            return Return.err(
                Error(
                    "RESOLUTION_FAILURE",
                    "Unexpected issue on retrieving user in the database",
                )
            )

        salt = generate_salt(self.salt_bytes)
        salted_hash = generate_hash(context.new_password, salt)

        try:
            updated = await self.uow.credentials.replace(context.account_id, salt, salted_hash)
            if updated == 0:
                logger.error(f"No credential row to rotate: {context.describe()}")
                return Return.err(
                    Error(
                        "CREDENTIAL_UPDATE_FAILED",
                        "Unexpected issue on updating password in the database",
                    )
                )
            await self.uow.commit()
        except SQLAlchemyError:
            logger.exception(f"Password update failed: {context.describe()}")
            return Return.err(
                Error(
                    "CREDENTIAL_UPDATE_FAILED",
                    "Unexpected issue on updating password in the database",
                )
            )

        logger.info(f"Credential rotated for account {context.account_id}")
        return Return.ok(context)

    async def issue_token(self, context: CredentialContext) -> Result[CredentialContext]:
        reset_token = self.token_issuer.issue(context.account_id)
        return Return.ok(context.advance(reset_token=reset_token))
