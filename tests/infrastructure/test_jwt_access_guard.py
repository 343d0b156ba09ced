"""Tests for admin credential issuing and validation."""

from datetime import datetime, timedelta, timezone

import jwt
import pydantic
import pytest

from storefront.domain.exceptions import UnauthorizedError
from storefront.infrastructure import bootstrap
from storefront.infrastructure.auth.jwt_access_guard import MIN_SECRET_BYTES, JwtAccessGuard
from storefront.infrastructure.auth.passwords import hash_password, verify_password
from storefront.infrastructure.config import Settings, get_settings

SECRET = "test-secret-for-admin-tokens-0123456789"
EMAIL = "admin@example.com"
PASSWORD_HASH = hash_password("hunter2", iterations=1_000)


def _guard(**overrides) -> JwtAccessGuard:
    kwargs = dict(secret=SECRET, admin_email=EMAIL, admin_password_hash=PASSWORD_HASH)
    kwargs.update(overrides)
    return JwtAccessGuard(**kwargs)


class TestPasswords:

    def test_round_trip(self):
        assert verify_password("hunter2", PASSWORD_HASH)

    def test_wrong_password(self):
        assert not verify_password("hunter3", PASSWORD_HASH)

    def test_salted(self):
        assert hash_password("same", iterations=1_000) != hash_password("same", iterations=1_000)

    @pytest.mark.parametrize("bad", ["", "hunter2", "pbkdf2:sha256:x$salt$abc", "md5$a$b"])
    def test_malformed_hash_never_matches(self, bad):
        assert not verify_password("hunter2", bad)


class TestIssueCredential:

    def test_valid_login_yields_token(self):
        guard = _guard()
        token = guard.issue_credential(EMAIL, "hunter2")
        assert guard.validate(token).subject == EMAIL

    def test_email_is_case_insensitive(self):
        guard = _guard()
        assert guard.validate(guard.issue_credential(" Admin@Example.com ", "hunter2"))

    def test_token_valid_for_24_hours(self):
        token = _guard().issue_credential(EMAIL, "hunter2")
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["exp"] - claims["iat"] == 24 * 3600

    def test_wrong_password_rejected(self):
        with pytest.raises(UnauthorizedError):
            _guard().issue_credential(EMAIL, "wrong")

    def test_wrong_email_rejected(self):
        with pytest.raises(UnauthorizedError):
            _guard().issue_credential("intruder@example.com", "hunter2")

    def test_unconfigured_admin_rejects_everyone(self):
        with pytest.raises(UnauthorizedError):
            _guard(admin_password_hash="").issue_credential(EMAIL, "")

    def test_secret_required(self):
        with pytest.raises(ValueError):
            _guard(secret="")

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError, match="32 bytes"):
            _guard(secret="x" * (MIN_SECRET_BYTES - 1))

    def test_short_configured_secret_rejected(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_JWT_SECRET", "too-short")
        with pytest.raises(pydantic.ValidationError):
            Settings()

    def test_development_fallback_secret_is_usable(self, monkeypatch):
        assert len(bootstrap._DEV_JWT_SECRET.encode("utf-8")) >= MIN_SECRET_BYTES
        monkeypatch.setenv("STOREFRONT_JWT_SECRET", "")
        monkeypatch.setenv("STOREFRONT_ADMIN_EMAIL", EMAIL)
        monkeypatch.setenv("STOREFRONT_ADMIN_PASSWORD_HASH", PASSWORD_HASH)
        get_settings.cache_clear()
        try:
            guard = bootstrap.access_guard()
            token = guard.issue_credential(EMAIL, "hunter2")
            assert guard.validate(token).subject == EMAIL
        finally:
            get_settings.cache_clear()


class TestValidate:

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_missing_or_malformed(self, token):
        with pytest.raises(UnauthorizedError):
            _guard().validate(token)

    def test_expired(self):
        long_ago = datetime.now(timezone.utc) - timedelta(hours=25)
        token = _guard(clock=lambda: long_ago).issue_credential(EMAIL, "hunter2")
        with pytest.raises(UnauthorizedError, match="expired"):
            _guard().validate(token)

    def test_signed_with_other_secret(self):
        other = _guard(secret="another-secret-for-admin-tokens-0123")
        token = other.issue_credential(EMAIL, "hunter2")
        with pytest.raises(UnauthorizedError, match="Invalid"):
            _guard().validate(token)

    def test_token_of_another_kind(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": EMAIL, "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(UnauthorizedError):
            _guard().validate(token)
