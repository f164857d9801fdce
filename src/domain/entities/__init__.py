"""
Credential Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .account import Account
from .account_credential import AccountCredential

__all__ = [
    "Account",
    "AccountCredential",
]
