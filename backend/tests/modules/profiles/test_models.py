from datetime import datetime, timezone

from modules.profiles.models import NewProfile, PremiumGrant, Profile


class TestProfile:
    def test_email_normalized(self):
        profile = Profile(id="p1", email="  Buyer@Example.COM ")
        assert profile.email == "buyer@example.com"

    def test_shadow_until_linked(self):
        assert Profile(id="p1", email="a@example.com").is_shadow
        assert not Profile(id="p1", email="a@example.com", auth_user_id="u1").is_shadow

    def test_null_progression_from_row(self):
        """Older rows store NULL progression columns."""
        profile = Profile.from_row(
            {
                "id": "p1",
                "email": "a@example.com",
                "level": None,
                "xp": None,
                "streak": None,
                "badges": None,
                "unknown_column": "ignored",
            }
        )
        assert (profile.level, profile.xp, profile.streak, profile.badges) == (1, 0, 0, [])

    def test_parses_iso_expiry(self):
        profile = Profile.from_row(
            {"id": "p1", "email": "a@example.com", "premium_expires_at": "2030-01-01T00:00:00+00:00"}
        )
        assert profile.premium_expires_at == datetime(2030, 1, 1, tzinfo=timezone.utc)


class TestNewProfile:
    def test_to_row_serializes_expiry(self):
        expires = datetime(2030, 1, 1, tzinfo=timezone.utc)
        row = NewProfile(email="A@Example.com", is_premium=True, premium_expires_at=expires).to_row()
        assert row["email"] == "a@example.com"
        assert row["premium_expires_at"] == "2030-01-01T00:00:00+00:00"
        assert row["auth_user_id"] is None
        assert row["level"] == 1


class TestPremiumGrant:
    def test_to_row_sets_premium(self):
        expires = datetime(2030, 1, 1, tzinfo=timezone.utc)
        row = PremiumGrant(license_key="KEY", premium_expires_at=expires).to_row()
        assert row == {
            "is_premium": True,
            "license_key": "KEY",
            "premium_expires_at": "2030-01-01T00:00:00+00:00",
        }
