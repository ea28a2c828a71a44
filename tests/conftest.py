# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - A fake Frontegg (httpx.MockTransport) recording every upstream call
# - A TestClient wired to the fake, with optional signed-in session
# =============================================================================

import os
import time

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("FRONTEGG_CLIENT_ID", "test-vendor-client")
os.environ.setdefault("FRONTEGG_SECRET", "test-vendor-secret")
os.environ.setdefault("FRONTEGG_API_URL", "https://api.frontegg.test")
os.environ.setdefault("FRONTEGG_BASE_URL", "https://login.frontegg.test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient
from jose import jwk, jwt

from app.auth.dependencies import clear_jwks_cache
from app.dependencies import get_frontegg_client, get_vendor_token_cache
from app.main import app
from core.models.app import AppDescriptor
from core.services.vendor_token import VendorTokenCache
from lib.frontegg_client import FronteggClient
from tests.helpers import TENANT_ID, sign_in

SIGNING_KID = "test-key"


# =============================================================================
# Signing keys
# =============================================================================

@pytest.fixture(scope="session")
def rsa_keys():
    """RSA key pair (private PEM, public JWK) for signing fake user tokens."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    public_jwk = jwk.construct(public_pem, algorithm="RS256").to_dict()
    public_jwk["kid"] = SIGNING_KID
    return private_pem, public_jwk


@pytest.fixture
def make_token(rsa_keys):
    """Factory for signed Frontegg-style access tokens."""
    private_pem, _ = rsa_keys

    def _make(**overrides):
        claims = {
            "sub": "user-1",
            "email": "jane.doe@example.com",
            "name": "Jane Doe",
            "tenantId": TENANT_ID,
            "tenantIds": [TENANT_ID],
            "iat": int(time.time()),
            "exp": int(time.time()) + 3600,
        }
        claims.update(overrides)
        claims = {k: v for k, v in claims.items() if v is not None}
        return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": SIGNING_KID})

    return _make


# =============================================================================
# Fake Frontegg
# =============================================================================

class FakeFrontegg:
    """
    Stand-in for the Frontegg API and hosted-login domain.

    Each route returns whatever (status, body) is configured on the
    instance; `calls` records (method, path) for every request.
    """

    def __init__(self, public_jwk: dict):
        self.calls: list[tuple[str, str]] = []
        self.requests: list[httpx.Request] = []
        self.vendor_response = (200, {"token": "vendor-token-1", "expiresIn": 3600})
        self.assignments_response = (
            200,
            [{"tenantId": TENANT_ID, "appIds": ["fe-travel", "fe-unknown", None]}],
        )
        self.user_apps_response = (200, {"appIds": ["fe-fintech"]})
        self.jwks_response = (200, {"keys": [public_jwk]})
        self.token_response = (200, {"access_token": ""})

    def count(self, path_fragment: str) -> int:
        return sum(1 for _, path in self.calls if path_fragment in path)

    @staticmethod
    def _reply(configured) -> httpx.Response:
        status, body = configured
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path))
        self.requests.append(request)

        if path == "/auth/vendor/":
            return self._reply(self.vendor_response)
        if path.endswith("/tenant-assignments/v1"):
            return self._reply(self.assignments_response)
        if "/user-apps/v1/" in path:
            return self._reply(self.user_apps_response)
        if path == "/.well-known/jwks.json":
            return self._reply(self.jwks_response)
        if path == "/oauth/token":
            return self._reply(self.token_response)
        return httpx.Response(404, json={"message": f"no route for {path}"})


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_frontegg(rsa_keys):
    _, public_jwk = rsa_keys
    return FakeFrontegg(public_jwk)


@pytest.fixture
def frontegg_client(fake_frontegg):
    client = FronteggClient(
        api_url="https://api.frontegg.test",
        base_url="https://login.frontegg.test",
        transport=httpx.MockTransport(fake_frontegg.handler),
    )
    yield client
    client.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_cache(frontegg_client, clock):
    return VendorTokenCache(
        client=frontegg_client,
        client_id="test-vendor-client",
        secret="test-vendor-secret",
        default_ttl=23 * 60 * 60,
        clock=clock,
    )


# =============================================================================
# Catalog
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove APP_<TYPE>_* variables and cached JWKS between tests."""
    for name in list(os.environ):
        if name.startswith("APP_") and name != "APP_TYPES":
            monkeypatch.delenv(name, raising=False)
    clear_jwks_cache()
    yield
    clear_jwks_cache()


@pytest.fixture
def catalog_env(monkeypatch):
    """Two fully configured app types (TRAVEL, FINTECH) and one partial one."""
    values = {
        "APP_TRAVEL_APPID": "fe-travel",
        "APP_TRAVEL_URL": "https://travel.example.com",
        "APP_TRAVEL_NAME": "Travel",
        "APP_TRAVEL_ICON": "✈️",
        "APP_FINTECH_APPID": "fe-fintech",
        "APP_FINTECH_URL": "https://fintech.example.com",
        "APP_FINTECH_NAME": "Fintech",
        "APP_FINTECH_DESCRIPTION": "Payments and ledgers",
        "APP_FINTECH_COLOR": "from-green-500 to-emerald-600",
        # No URL -> skipped
        "APP_BIOPHARMA_APPID": "fe-bio",
        "APP_BIOPHARMA_NAME": "Biopharma",
    }
    for key, value in values.items():
        monkeypatch.setenv(key, value)
    return values


@pytest.fixture
def sample_catalog():
    return [
        AppDescriptor(id="travel", app_id="fe-travel", name="Travel", url="https://travel.example.com"),
        AppDescriptor(id="fintech", app_id="fe-fintech", name="Fintech", url="https://fintech.example.com"),
        AppDescriptor(id="logistics", app_id="fe-logistics", name="Logistics", url="https://logistics.example.com"),
    ]


# =============================================================================
# HTTP client
# =============================================================================

@pytest.fixture
def client(frontegg_client, token_cache):
    """TestClient whose Frontegg calls go to the fake."""
    app.dependency_overrides[get_frontegg_client] = lambda: frontegg_client
    app.dependency_overrides[get_vendor_token_cache] = lambda: token_cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in_client(client, fake_frontegg, make_token):
    response = sign_in(client, fake_frontegg, make_token())
    assert response.status_code == 302
    return client

