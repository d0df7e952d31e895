"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests either call reset_container() or use app.dependency_overrides to
swap in the in-memory profile store and a mocked license authority.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.entitlements.service import EntitlementEngine
    from modules.identity.interfaces import IIdentityService
    from modules.licensing.interfaces import ILicenseActivationService, ILicenseAuthority
    from modules.profiles.interfaces import IProfileStore
    from modules.purchases.interfaces import IPurchaseWebhookService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._auth_service: "IAuthService | None" = None
        self._profile_store: "IProfileStore | None" = None
        self._entitlement_engine: "EntitlementEngine | None" = None
        self._identity_service: "IIdentityService | None" = None
        self._license_authority: "ILicenseAuthority | None" = None
        self._activation_service: "ILicenseActivationService | None" = None
        self._webhook_service: "IPurchaseWebhookService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(jwt_secret=self.settings.supabase_jwt_secret)
        return self._auth_service

    @property
    def profile_store(self) -> "IProfileStore":
        """Get the profile store instance."""
        if self._profile_store is None:
            from modules.profiles.repository import SupabaseProfileStore
            from shared.database import get_supabase_client
            self._profile_store = SupabaseProfileStore(
                get_supabase_client(),
                table=self.settings.profiles_table,
            )
        return self._profile_store

    @property
    def entitlements(self) -> "EntitlementEngine":
        """Get the entitlement engine bound to the admin allowlist."""
        if self._entitlement_engine is None:
            from modules.entitlements.service import EntitlementEngine
            self._entitlement_engine = EntitlementEngine(self.settings.admin_allowlist)
        return self._entitlement_engine

    @property
    def identity(self) -> "IIdentityService":
        """Get the identity reconciliation service instance."""
        if self._identity_service is None:
            from modules.identity.service import IdentityService
            self._identity_service = IdentityService(
                store=self.profile_store,
                engine=self.entitlements,
                require_confirmed_email=self.settings.require_confirmed_email,
                resolve_timeout_seconds=self.settings.session_resolve_timeout_seconds,
            )
        return self._identity_service

    @property
    def license_authority(self) -> "ILicenseAuthority":
        """Get the license authority client instance."""
        if self._license_authority is None:
            from modules.licensing.client import GumroadLicenseClient
            self._license_authority = GumroadLicenseClient(
                verify_url=self.settings.license_verify_url,
                timeout_seconds=self.settings.license_authority_timeout_seconds,
            )
        return self._license_authority

    @property
    def activation(self) -> "ILicenseActivationService":
        """Get the license activation service instance."""
        if self._activation_service is None:
            from modules.licensing.service import LicenseActivationService
            self._activation_service = LicenseActivationService(
                authority=self.license_authority,
                store=self.profile_store,
                identity=self.identity,
                product_id=self.settings.gumroad_product_id,
                premium_window=self.settings.premium_window,
            )
        return self._activation_service

    @property
    def webhooks(self) -> "IPurchaseWebhookService":
        """Get the purchase webhook service instance."""
        if self._webhook_service is None:
            from modules.purchases.service import PurchaseWebhookService
            self._webhook_service = PurchaseWebhookService(
                store=self.profile_store,
                product_id=self.settings.gumroad_product_id,
                premium_window=self.settings.premium_window,
            )
        return self._webhook_service

    def use_profile_store(self, store: "IProfileStore") -> None:
        """Replace the profile store and drop every service built on it."""
        self.reset()
        self._profile_store = store

    def use_license_authority(self, authority: "ILicenseAuthority") -> None:
        """Replace the license authority client."""
        self._license_authority = authority
        self._activation_service = None

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._profile_store = None
        self._entitlement_engine = None
        self._identity_service = None
        self._license_authority = None
        self._activation_service = None
        self._webhook_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions

def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_identity_service() -> "IIdentityService":
    """FastAPI dependency for identity reconciliation service."""
    return get_container().identity


def get_activation_service() -> "ILicenseActivationService":
    """FastAPI dependency for license activation service."""
    return get_container().activation


def get_webhook_service() -> "IPurchaseWebhookService":
    """FastAPI dependency for purchase webhook service."""
    return get_container().webhooks
