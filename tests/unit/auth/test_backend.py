"""Unit tests for auth backend (JWT and password handling)."""

from datetime import timedelta
from uuid import uuid4

from jose import jwt

from app.config import settings
from app.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_password_returns_bcrypt_hash(self):
        hashed = hash_password("mysecretpassword")

        assert hashed != "mysecretpassword"
        assert hashed.startswith("$2b$")

    def test_hash_password_salted(self):
        assert hash_password("mysecretpassword") != hash_password("mysecretpassword")

    def test_verify_password(self):
        hashed = hash_password("mysecretpassword")

        assert verify_password("mysecretpassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False


class TestJWTTokens:
    def test_access_token_round_trip(self):
        user_id, tenant_id = uuid4(), uuid4()

        data = decode_token(create_access_token(user_id, tenant_id))

        assert data is not None
        assert data.user_id == user_id
        assert data.tenant_id == tenant_id
        assert data.type == "access"
        assert data.jti

    def test_tenant_claim_is_present(self):
        tenant_id = uuid4()
        token = create_access_token(uuid4(), tenant_id)

        payload = jwt.get_unverified_claims(token)

        assert payload["tenant_id"] == str(tenant_id)

    def test_decode_token_invalid(self):
        assert decode_token("invalid.token.here") is None

    def test_decode_token_expired(self):
        token = create_access_token(uuid4(), uuid4(), expires_delta=timedelta(seconds=-10))

        assert decode_token(token) is None

    def test_decode_token_wrong_key(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "tenant_id": str(uuid4()), "exp": 9999999999},
            "another-secret",
            algorithm=settings.jwt_algorithm,
        )

        assert decode_token(token) is None

    def test_decode_token_without_tenant(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": 9999999999},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        assert decode_token(token) is None

    def test_refresh_tokens_are_unique(self):
        first, second = create_refresh_token(), create_refresh_token()

        assert first != second
        assert len(first) > 20


class TestTokenHashing:
    def test_hash_token_is_sha256_hex(self):
        assert len(hash_token("myrefreshtoken123")) == 64

    def test_hash_token_is_stable(self):
        assert hash_token("token1") == hash_token("token1")
        assert hash_token("token1") != hash_token("token2")
