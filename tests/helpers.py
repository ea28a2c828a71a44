# =============================================================================
# tests/helpers.py - Shared Test Helpers
# =============================================================================

import json
from base64 import b64decode
from urllib.parse import parse_qs, urlparse

import httpx
from fastapi.testclient import TestClient
from itsdangerous import BadSignature, TimestampSigner

from app.config import settings

TENANT_ID = "tenant-1"


def sign_in(test_client: TestClient, fake, access_token: str) -> httpx.Response:
    """Run the hosted-login round trip and return the callback response."""
    login = test_client.get("/account/login", follow_redirects=False)
    state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]
    fake.token_response = (200, {"access_token": access_token})
    return test_client.get(
        "/account/callback",
        params={"code": "auth-code", "state": state},
        follow_redirects=False,
    )


def read_session(test_client: TestClient) -> dict:
    """Decode the signed session cookie the same way SessionMiddleware does."""
    cookie = test_client.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie is None:
        return {}
    signer = TimestampSigner(str(settings.SECRET_KEY))
    try:
        data = signer.unsign(cookie.encode("utf-8"))
    except BadSignature:
        return {}
    return json.loads(b64decode(data)) or {}


def session_cache_value(test_client: TestClient, tenant_id: str = TENANT_ID):
    return read_session(test_client).get(f"assignedApps_{tenant_id}")
