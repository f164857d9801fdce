from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, Field

from config import ApplicationConfig
from src.api.error import http_error
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.credentials import (
    ChangePasswordCommand,
    ChangePasswordUseCase,
    ForgotPasswordCommand,
    ForgotPasswordUseCase,
    PasswordUpdatedResponse,
)
from src.depends import get_token_issuer, get_unit_of_work

router = APIRouter()

# Error code -> HTTP status for client-side failures; anything else is a 500
CLIENT_ERROR_STATUSES = {
    "MISSING_PARAMETER": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "PASSWORD_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "INVALID_EMAIL": status.HTTP_400_BAD_REQUEST,
    "INVALID_PHONE": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class ChangePasswordRequest(BaseModel):
    """
    Change password HTTP request payload

    Fields are optional here; presence is checked by the use case so that
    a missing field is a 400 MISSING_PARAMETER rather than a 422.
    """

    username: Optional[str] = Field(None, description="Account username")
    password: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("password", "currentPasswordField"),
        description="Current password",
    )
    new_password: Optional[str] = Field(None, alias="newPassword", description="New password")
    confirm_new_password: Optional[str] = Field(
        None, alias="confirmNewPassword", description="Confirmation of new password"
    )


@router.put(
    "/changePassword",
    status_code=status.HTTP_200_OK,
    response_model=PasswordUpdatedResponse,
)
async def change_password(
    request: ChangePasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Change Password (known password)

    New password must be 8-24 characters with upper and lower case letters,
    a digit and a special character (!@#$%^&*()_+=-).

    Raises:
        - 400 Bad Request: Missing field, invalid new password, passwords do not match
        - 401 Unauthorized: Current password rejected (only when VERIFY_CURRENT_PASSWORD is on)
        - 404 Not Found: No account with this username
        - 500 Internal Server Error: Lookup or update failure
    """
    command = ChangePasswordCommand(
        username=request.username,
        current_password=request.password,
        new_password=request.new_password,
        confirm_new_password=request.confirm_new_password,
    )

    use_case = ChangePasswordUseCase(
        uow,
        token_issuer,
        salt_bytes=ApplicationConfig.SALT_BYTES,
        verify_current_password=ApplicationConfig.VERIFY_CURRENT_PASSWORD,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise http_error(result.error, CLIENT_ERROR_STATUSES)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload

    username, email and phone together prove the caller's identity.
    """

    username: Optional[str] = Field(None, description="Account username")
    email: Optional[str] = Field(None, description="Account email")
    phone: Optional[str] = Field(None, description="Account phone, 123-456-7890")
    new_password: Optional[str] = Field(None, alias="newPassword", description="New password")
    confirm_new_password: Optional[str] = Field(
        None, alias="confirmNewPassword", description="Confirmation of new password"
    )


@router.put(
    "/forgotPassword",
    status_code=status.HTTP_200_OK,
    response_model=PasswordUpdatedResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Forgot Password

    Resets the password of the account matching username, email and phone.
    Returns a reset token (JWT, 15 minutes) confirming the rotation.

    Raises:
        - 400 Bad Request: Missing field, invalid password/email/phone, passwords do not match
        - 404 Not Found: No account matches username, email and phone
        - 500 Internal Server Error: Lookup or update failure
    """
    command = ForgotPasswordCommand(
        username=request.username,
        email=request.email,
        phone=request.phone,
        new_password=request.new_password,
        confirm_new_password=request.confirm_new_password,
    )

    use_case = ForgotPasswordUseCase(
        uow, token_issuer, salt_bytes=ApplicationConfig.SALT_BYTES
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise http_error(result.error, CLIENT_ERROR_STATUSES)

    return result.value
