"""
Unit tests for bearer token validation
"""
import time
from datetime import timedelta
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from jose import jwt

from fiap_api.core.auth import create_access_token, decode_token
from fiap_api.core.config import settings


class TestDecodeToken:
    """Test decode_token signature and lifetime checks"""

    def test_valid_token_returns_claims(self):
        token = create_access_token("user-1", name="Ana", role="admin")

        payload = decode_token(token)

        assert payload["sub"] == "user-1"
        assert payload["name"] == "Ana"
        assert payload["role"] == "admin"
        assert payload["exp"] > time.time()

    def test_expired_token_is_rejected(self):
        token = create_access_token("user-1", expires_delta=timedelta(minutes=-1))

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_token_expiring_exactly_now_is_rejected(self):
        exp = int(time.time()) + 30
        token = jwt.encode({"sub": "user-1", "exp": exp}, settings.JWT_SECRET, algorithm="HS256")

        with patch("fiap_api.core.auth.time") as mock_time:
            mock_time.time.return_value = exp
            with pytest.raises(HTTPException) as exc_info:
                decode_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_token_expiring_one_second_later_is_accepted(self):
        exp = int(time.time()) + 30
        token = jwt.encode({"sub": "user-1", "exp": exp}, settings.JWT_SECRET, algorithm="HS256")

        with patch("fiap_api.core.auth.time") as mock_time:
            mock_time.time.return_value = exp - 1
            payload = decode_token(token)

        assert payload["exp"] == exp

    def test_token_without_exp_is_rejected(self):
        token = create_access_token("user-1", expires_delta=None)

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_secret_is_rejected(self):
        token = create_access_token("user-1", secret="another-secret-entirely-0000000000")

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail.startswith("Invalid token")

    def test_issuer_and_audience_are_not_validated(self):
        token = jwt.encode(
            {"sub": "user-1", "iss": "someone", "aud": "something", "exp": int(time.time()) + 60},
            settings.JWT_SECRET,
            algorithm="HS256"
        )

        payload = decode_token(token)

        assert payload["aud"] == "something"

    def test_garbage_token_is_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token("not-a-jwt")

        assert exc_info.value.status_code == 401


class TestProtectedRoutes:
    """Every /api/v1 route requires a bearer token"""

    @pytest.mark.parametrize("path", ["/customers", "/products", "/orders", "/payments"])
    def test_missing_token_returns_401(self, client, api_prefix, path):
        response = client.get(f"{api_prefix}{path}")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token_returns_401(self, client, api_prefix, expired_token):
        response = client.get(
            f"{api_prefix}/customers",
            headers={"Authorization": f"Bearer {expired_token}"}
        )

        assert response.status_code == 401

    def test_valid_token_is_accepted(self, client, api_prefix, auth_headers):
        response = client.get(f"{api_prefix}/customers", headers=auth_headers)

        assert response.status_code == 200

    def test_health_does_not_require_token(self, client):
        from unittest.mock import patch

        with patch("fiap_api.main.check_database", return_value=0.5):
            response = client.get("/health")

        assert response.status_code == 200
