"""
Shared test fixtures.

Every service runs over the in-memory profile store and a scriptable
license authority; API tests get a TestClient wired to the same objects.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    ServiceContainer,
    get_activation_service,
    get_auth_service,
    get_identity_service,
    get_webhook_service,
    reset_container,
)
from modules.licensing.exceptions import AuthorityUnavailableError
from modules.profiles.memory import InMemoryProfileStore
from shared.config import Settings, get_settings

from tests.factories import (
    GOOD_KEY,
    REFUNDED_KEY,
    UNREACHABLE_KEY,
    TEST_JWT_SECRET,
    TEST_PRODUCT_ID,
    FakeLicenseAuthority,
    bearer,
    create_test_token,
    sale_result,
)


@pytest.fixture(autouse=True)
def reset_services():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment's .env file."""
    return Settings(
        _env_file=None,
        supabase_jwt_secret=TEST_JWT_SECRET,
        gumroad_product_id=TEST_PRODUCT_ID,
        admin_emails=["Admin@Example.com"],
        session_resolve_timeout_seconds=1.0,
        trial_state_path=str(tmp_path / "trial_usage.json"),
    )


@pytest.fixture
def store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def authority() -> FakeLicenseAuthority:
    return FakeLicenseAuthority(
        {
            GOOD_KEY: sale_result(),
            REFUNDED_KEY: sale_result(refunded=True),
            UNREACHABLE_KEY: AuthorityUnavailableError("Gumroad request timed out"),
        }
    )


@pytest.fixture
def container(settings, store, authority) -> ServiceContainer:
    """A container over the in-memory store and fake authority."""
    container = ServiceContainer(settings)
    container.use_profile_store(store)
    container.use_license_authority(authority)
    return container


@pytest.fixture
def client(container, settings):
    """TestClient whose route dependencies resolve through the test container."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_auth_service] = lambda: container.auth
    app.dependency_overrides[get_identity_service] = lambda: container.identity
    app.dependency_overrides[get_activation_service] = lambda: container.activation
    app.dependency_overrides[get_webhook_service] = lambda: container.webhooks
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return bearer(auth_token)
