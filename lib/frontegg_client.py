# =============================================================================
# lib/frontegg_client.py - Frontegg HTTP Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the Frontegg endpoints the portal
# calls:
# - Vendor authentication (service credential for the portal backend)
# - Tenant / user application assignments (entitlements)
# - Hosted login: authorization-code exchange and JWKS signing keys
#
# The wrapper only speaks HTTP. It never interprets entitlement payloads;
# that belongs to core/services/entitlement_service.py.
#
# Usage:
#   from lib.frontegg_client import FronteggClient
#   client = FronteggClient.from_settings(settings)
#   data = client.authenticate_vendor(client_id, secret)
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

# Set up logging for this module
logger = logging.getLogger(__name__)


class FronteggClientError(Exception):
    """
    Error during a Frontegg API call.

    Carries the upstream HTTP status (None when the request never got an
    answer) and the raw response body so callers can build their own
    error payloads.
    """

    def __init__(
        self,
        message: str,
        code: str = "FRONTEGG_ERROR",
        status_code: int | None = None,
        body: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.body = body
        self.suggestion = suggestion

    @property
    def upstream_message(self) -> str:
        """
        Best human-readable reason from the upstream body.

        Prefers the JSON `message` or `error` field and falls back to the
        raw text.
        """
        if not self.body:
            return self.message
        try:
            parsed = json.loads(self.body)
        except ValueError:
            return self.body
        if isinstance(parsed, dict):
            reason = parsed.get("message") or parsed.get("error")
            if reason:
                return str(reason)
        return self.body

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.status_code is not None:
            result += f" (HTTP {self.status_code})"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class FronteggClient:
    """
    Typed wrapper for Frontegg HTTP calls.

    One instance is shared across the application (see app/dependencies.py)
    so the underlying httpx connection pool is reused.

    Example:
        client = FronteggClient(
            api_url="https://api.frontegg.com",
            base_url="https://app-xyz.frontegg.com",
        )
        token = client.authenticate_vendor("client-id", "secret")["token"]
        assignments = client.get_tenant_assignments(token, "tenant-1")
    """

    def __init__(
        self,
        api_url: str,
        base_url: str,
        tenant_assignments_path: str = "/applications/resources/applications/tenant-assignments/v1",
        user_apps_path: str = "/applications/resources/applications/user-apps/v1/{user_id}",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.base_url = base_url.rstrip("/")
        self.tenant_assignments_path = tenant_assignments_path
        self.user_apps_path = user_apps_path
        self._http = httpx.Client(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Any, transport: httpx.BaseTransport | None = None) -> FronteggClient:
        """Build a client from the application Settings."""
        return cls(
            api_url=settings.FRONTEGG_API_URL,
            base_url=settings.FRONTEGG_BASE_URL,
            tenant_assignments_path=settings.FRONTEGG_TENANT_ASSIGNMENTS_PATH,
            user_apps_path=settings.FRONTEGG_USER_APPS_PATH,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    # -------------------------------------------------------------------------
    # Low-level helpers
    # -------------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request and raise FronteggClientError on transport or HTTP errors.
        """
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Frontegg request {method} {url} failed: {e}")
            raise FronteggClientError(
                message=f"Request to Frontegg failed: {e}",
                code="UPSTREAM_UNREACHABLE",
                suggestion="Check FRONTEGG_API_URL / FRONTEGG_BASE_URL and network access",
            ) from e

        if response.is_error:
            logger.error(
                f"Frontegg {method} {url} returned {response.status_code}: {response.text[:200]}"
            )
            raise FronteggClientError(
                message=f"Frontegg returned HTTP {response.status_code}",
                code="UPSTREAM_HTTP_ERROR",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Failed to parse Frontegg response as JSON: {e}")
            raise FronteggClientError(
                message="Response is not valid JSON",
                code="INVALID_JSON",
                status_code=response.status_code,
                body=response.text,
            ) from e

    # -------------------------------------------------------------------------
    # Vendor API
    # -------------------------------------------------------------------------

    def authenticate_vendor(self, client_id: str, secret: str) -> dict[str, Any]:
        """
        Exchange vendor credentials for a vendor bearer token.

        Returns:
            The raw Frontegg body, e.g. {"token": "...", "expiresIn": 86400}
        """
        response = self._request(
            "POST",
            f"{self.api_url}/auth/vendor/",
            json={"clientId": client_id, "secret": secret},
        )
        data = self._json(response)
        if not isinstance(data, dict):
            raise FronteggClientError(
                message="Vendor authentication returned an unexpected body",
                code="INVALID_JSON",
                status_code=response.status_code,
                body=response.text,
            )
        return data

    def get_tenant_assignments(self, vendor_token: str, tenant_id: str) -> Any:
        """
        Fetch the applications assigned to a tenant.

        The body shape is not guaranteed; callers normalize it.
        """
        response = self._request(
            "GET",
            f"{self.api_url}{self.tenant_assignments_path}",
            headers={
                "Authorization": f"Bearer {vendor_token}",
                "frontegg-tenant-id": tenant_id,
            },
        )
        return self._json(response)

    def get_user_apps(self, vendor_token: str, tenant_id: str, user_id: str) -> Any:
        """Fetch the applications assigned to a single user of a tenant."""
        path = self.user_apps_path.format(user_id=user_id)
        response = self._request(
            "GET",
            f"{self.api_url}{path}",
            headers={
                "Authorization": f"Bearer {vendor_token}",
                "frontegg-tenant-id": tenant_id,
                "frontegg-user-id": user_id,
            },
        )
        return self._json(response)

    # -------------------------------------------------------------------------
    # Hosted Login
    # -------------------------------------------------------------------------

    def get_jwks(self) -> dict[str, Any]:
        """Fetch the workspace JWKS used to sign user access tokens."""
        response = self._request("GET", f"{self.base_url}/.well-known/jwks.json")
        data = self._json(response)
        return data if isinstance(data, dict) else {"keys": []}

    def exchange_code(
        self,
        code: str,
        redirect_uri: str,
        client_id: str,
        client_secret: str | None = None,
    ) -> dict[str, Any]:
        """
        Exchange an authorization code from hosted login for tokens.

        Returns:
            The token response, including `access_token`.
        """
        auth = (client_id, client_secret) if client_secret else None
        response = self._request(
            "POST",
            f"{self.base_url}/oauth/token",
            json={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri,
                "client_id": client_id,
            },
            auth=auth,
        )
        data = self._json(response)
        if not isinstance(data, dict):
            raise FronteggClientError(
                message="Token exchange returned an unexpected body",
                code="INVALID_JSON",
                status_code=response.status_code,
                body=response.text,
            )
        return data
