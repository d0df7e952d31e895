from modules.auth.models import JWTPayload


class TestJWTPayload:
    def test_parse_jwt_payload(self):
        """Should parse JWT payload from dict."""
        payload = JWTPayload(
            sub="user-123",
            email="test@example.com",
            exp=1704067200,
            iat=1704063600,
            aud="authenticated",
            role="authenticated",
            session_id="ignored",
        )
        assert payload.sub == "user-123"
        assert payload.email == "test@example.com"

    def test_jwt_defaults(self):
        """JWTPayload should have sensible defaults."""
        payload = JWTPayload(sub="user-123", exp=1704067200, iat=1704063600)
        assert payload.aud == "authenticated"
        assert payload.role == "authenticated"
        assert payload.app_metadata == {}
        assert payload.user_metadata == {}
        assert payload.email_verified is False

    def test_email_confirmed_at_marks_verified(self):
        payload = JWTPayload(
            sub="user-123",
            exp=1704067200,
            iat=1704063600,
            email_confirmed_at="2024-01-01T00:00:00Z",
        )
        assert payload.email_verified is True

    def test_user_metadata_flag_must_be_true(self):
        payload = JWTPayload(
            sub="user-123",
            exp=1704067200,
            iat=1704063600,
            user_metadata={"email_verified": "yes"},
        )
        assert payload.email_verified is False

    def test_supabase_access_token_shape(self):
        """Supabase tokens carry the flag in user_metadata, not email_confirmed_at."""
        payload = JWTPayload(
            sub="user-123",
            email="test@example.com",
            exp=1704067200,
            iat=1704063600,
            user_metadata={"email": "test@example.com", "email_verified": True},
        )
        assert payload.email_confirmed_at is None
        assert payload.email_verified is True
