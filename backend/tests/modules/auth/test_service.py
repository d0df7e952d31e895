import pytest
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.service import AuthService
from modules.auth.exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)
from tests.factories import TEST_JWT_SECRET, create_test_token


def _payload(**overrides):
    now = datetime.now(timezone.utc)
    payload = {
        "sub": "user-123",
        "email": "Test@Example.com",
        "exp": now + timedelta(hours=1),
        "iat": now,
        "aud": "authenticated",
        "role": "authenticated",
    }
    payload.update(overrides)
    return payload


class TestAuthService:
    @pytest.fixture
    def service(self):
        return AuthService(jwt_secret=TEST_JWT_SECRET)

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service):
        """Should validate a valid token and return user."""
        user = await service.validate_token(create_test_token(user_id="user-123"))
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.email_verified is True
        assert user.role == "user"

    @pytest.mark.asyncio
    async def test_unconfirmed_email(self, service):
        token = jwt.encode(_payload(), TEST_JWT_SECRET, algorithm="HS256")
        user = await service.validate_token(token)
        assert user.email_verified is False
        assert user.normalized_email == "test@example.com"

    @pytest.mark.asyncio
    async def test_email_verified_from_user_metadata(self, service):
        token = jwt.encode(
            _payload(user_metadata={"email_verified": True}),
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        user = await service.validate_token(token)
        assert user.email_verified is True

    @pytest.mark.asyncio
    async def test_token_without_email(self, service):
        user = await service.validate_token(create_test_token(email=None))
        assert user.email == ""

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service):
        """Should raise ExpiredTokenError for expired token."""
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(create_test_token(expired=True))

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None])
    async def test_validate_missing_token(self, service, token):
        with pytest.raises(MissingTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_validate_wrong_secret(self, service):
        """Should raise InvalidTokenError for token signed with wrong secret."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token(create_test_token(secret="wrong-secret"))

    @pytest.mark.asyncio
    async def test_validate_wrong_audience(self, service):
        """Should raise InvalidTokenError for token with wrong audience."""
        token = jwt.encode(_payload(aud="wrong-audience"), TEST_JWT_SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_unconfigured_secret_rejects(self):
        service = AuthService(jwt_secret="")
        with pytest.raises(InvalidTokenError, match="not configured"):
            await service.validate_token(create_test_token())
