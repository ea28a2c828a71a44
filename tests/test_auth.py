# =============================================================================
# tests/test_auth.py - Hosted Login Tests
# =============================================================================
# Tests for /account/login, /account/callback, /account/logout and the
# Frontegg access-token verification.
# =============================================================================

import time
from urllib.parse import parse_qs, urlparse

import pytest
from jose import jwt

from app.auth.dependencies import verify_access_token
from app.auth.models import AuthUser
from app.exceptions import LoginFailedError
from tests.helpers import TENANT_ID, read_session, sign_in


# =============================================================================
# AuthUser Tests
# =============================================================================

class TestAuthUser:

    def test_from_claims(self):
        user = AuthUser.from_claims({
            "sub": "user-1",
            "email": "a@example.com",
            "tenantId": "t1",
            "tenantIds": ["t1", None, "t2"],
        })

        assert user.id == "user-1"
        assert user.tenant_id == "t1"
        assert user.tenant_ids == ["t1", "t2"]
        assert user.display_name == "a@example.com"

    def test_session_round_trip(self):
        user = AuthUser(id="u", name="Sam", tenant_id="t1")

        assert AuthUser(**user.to_session()) == user

    def test_display_name_fallback(self):
        assert AuthUser(id="u").display_name == "User"


# =============================================================================
# Token Verification Tests
# =============================================================================

class TestVerifyAccessToken:

    def test_valid_token(self, frontegg_client, make_token):
        user = verify_access_token(make_token(), frontegg_client)

        assert user.id == "user-1"
        assert user.name == "Jane Doe"
        assert user.tenant_id == TENANT_ID

    def test_jwks_is_cached(self, frontegg_client, fake_frontegg, make_token):
        verify_access_token(make_token(), frontegg_client)
        verify_access_token(make_token(), frontegg_client)

        assert fake_frontegg.count("/.well-known/jwks.json") == 1

    def test_expired_token(self, frontegg_client, make_token):
        token = make_token(exp=int(time.time()) - 60)

        with pytest.raises(LoginFailedError) as exc_info:
            verify_access_token(token, frontegg_client)

        assert exc_info.value.status_code == 401
        assert "expired" in exc_info.value.message

    def test_garbage_token(self, frontegg_client):
        with pytest.raises(LoginFailedError):
            verify_access_token("not-a-jwt", frontegg_client)

    def test_header_algorithm_is_ignored(self, frontegg_client):
        token = jwt.encode(
            {"sub": "user-1", "exp": int(time.time()) + 3600},
            "shared-secret",
            algorithm="HS256",
            headers={"kid": "test-key"},
        )

        with pytest.raises(LoginFailedError) as exc_info:
            verify_access_token(token, frontegg_client)

        assert exc_info.value.status_code == 401

    def test_unknown_signing_key(self, frontegg_client, fake_frontegg, make_token):
        fake_frontegg.jwks_response = (200, {"keys": [{"kid": "other", "kty": "RSA"}]})

        with pytest.raises(LoginFailedError) as exc_info:
            verify_access_token(make_token(), frontegg_client)

        assert "no signing key" in exc_info.value.message


# =============================================================================
# Route Tests
# =============================================================================

class TestLoginRoutes:

    def test_login_redirects_to_hosted_login(self, client):
        response = client.get("/account/login", follow_redirects=False)

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        query = parse_qs(location.query)
        assert location.netloc == "login.frontegg.test"
        assert location.path == "/oauth/authorize"
        assert query["response_type"] == ["code"]
        assert query["redirect_uri"] == ["http://testserver/account/callback"]
        assert read_session(client)["auth_state"] == query["state"][0]

    def test_callback_signs_user_in(self, client, fake_frontegg, make_token):
        response = sign_in(client, fake_frontegg, make_token())

        assert response.status_code == 302
        assert response.headers["location"] == "http://testserver/"
        session = read_session(client)
        assert session["user"]["id"] == "user-1"
        assert session["user"]["tenantId"] == TENANT_ID
        assert "auth_state" not in session
        assert fake_frontegg.count("/oauth/token") == 1

    def test_callback_rejects_bad_state(self, client):
        client.get("/account/login", follow_redirects=False)

        response = client.get(
            "/account/callback",
            params={"code": "auth-code", "state": "forged"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "LOGIN_FAILED"
        assert "user" not in read_session(client)

    def test_callback_reports_provider_error(self, client):
        login = client.get("/account/login", follow_redirects=False)
        state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]

        response = client.get(
            "/account/callback",
            params={"state": state, "error": "access_denied"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert "access_denied" in response.json()["error"]

    def test_callback_code_exchange_failure(self, client, fake_frontegg):
        login = client.get("/account/login", follow_redirects=False)
        state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]
        fake_frontegg.token_response = (400, {"error": "invalid_grant"})

        response = client.get(
            "/account/callback",
            params={"code": "stale", "state": state},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert "invalid_grant" in response.json()["error"]

    def test_callback_rejects_expired_token(self, client, fake_frontegg, make_token):
        response = sign_in(client, fake_frontegg, make_token(exp=int(time.time()) - 60))

        assert response.status_code == 401
        assert "user" not in read_session(client)

    def test_logout_clears_session(self, signed_in_client):
        response = signed_in_client.get("/account/logout", follow_redirects=False)

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert location.path == "/oauth/logout"
        assert parse_qs(location.query)["post_logout_redirect_uri"] == ["http://testserver/"]
        assert read_session(signed_in_client) == {}
