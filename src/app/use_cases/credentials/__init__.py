"""
Credential Use Cases

Password change and forgotten-password reset.
"""

from .change_password_use_case import ChangePasswordUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .pipeline import CredentialContext, CredentialRotationUseCase, run_stages
from .dtos import (
    ChangePasswordCommand,
    ForgotPasswordCommand,
    PasswordUpdatedResponse,
)

__all__ = [
    # Use Cases
    "ChangePasswordUseCase",
    "ForgotPasswordUseCase",
    "CredentialRotationUseCase",
    # Pipeline
    "CredentialContext",
    "run_stages",
    # DTOs - Commands
    "ChangePasswordCommand",
    "ForgotPasswordCommand",
    # DTOs - Responses
    "PasswordUpdatedResponse",
]
