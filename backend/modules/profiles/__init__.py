"""
Profiles module.

Profile store adapter: key-based read/update/insert access to profile
records, with no business logic.

Public API:
- IProfileStore: Interface for profile persistence
- SupabaseProfileStore: Production implementation
- InMemoryProfileStore: Test/development implementation
- Profile, NewProfile, PremiumGrant: Data models
"""

from .interfaces import IProfileStore
from .memory import InMemoryProfileStore
from .models import NewProfile, PremiumGrant, Profile
from .repository import SupabaseProfileStore
from .exceptions import DuplicateProfileError, ProfileNotFoundError

__all__ = [
    # Interface
    "IProfileStore",
    # Implementations
    "SupabaseProfileStore",
    "InMemoryProfileStore",
    # Models
    "Profile",
    "NewProfile",
    "PremiumGrant",
    # Exceptions
    "DuplicateProfileError",
    "ProfileNotFoundError",
]
