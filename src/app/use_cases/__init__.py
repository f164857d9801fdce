"""
Use Cases

Organized into domain folders:
- credentials/: Password change and forgotten-password reset
"""

from .credentials import (
    ChangePasswordUseCase,
    ForgotPasswordUseCase,
    ChangePasswordCommand,
    ForgotPasswordCommand,
    PasswordUpdatedResponse,
)

__all__ = [
    # Credentials
    "ChangePasswordUseCase",
    "ForgotPasswordUseCase",
    "ChangePasswordCommand",
    "ForgotPasswordCommand",
    "PasswordUpdatedResponse",
]
