"""
Credential Use Case DTOs (Data Transfer Objects)

Command and Response classes for the change/forgot password flows.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Command DTOs
# ============================================================================


class ChangePasswordCommand(BaseModel):
    """Change a known password. Fields stay optional so missing ones are reported by the pipeline."""

    model_config = ConfigDict(frozen=True)

    username: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_new_password: Optional[str] = None


class ForgotPasswordCommand(BaseModel):
    """Reset a forgotten password by proving username, email and phone"""

    model_config = ConfigDict(frozen=True)

    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    new_password: Optional[str] = None
    confirm_new_password: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PasswordUpdatedResponse(BaseModel):
    """Response for both password rotation use cases"""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    reset_token: str = Field(..., alias="resetToken")
