"""
Identity module.

Reconciles purchase-created shadow profiles with authenticated accounts.

Public API:
- IIdentityService: Interface for identity reconciliation
- ClaimResult, RegistrationResult, ResolvedSession: Results
- Identity exceptions: MissingIdentityEmailError, UnverifiedEmailError
"""

from .interfaces import IIdentityService
from .models import (
    ClaimResult,
    RegistrationOutcome,
    RegistrationResult,
    ResolvedSession,
)
from .exceptions import MissingIdentityEmailError, UnverifiedEmailError

__all__ = [
    # Interface
    "IIdentityService",
    # Models
    "ClaimResult",
    "RegistrationOutcome",
    "RegistrationResult",
    "ResolvedSession",
    # Exceptions
    "MissingIdentityEmailError",
    "UnverifiedEmailError",
]
