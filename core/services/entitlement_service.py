# =============================================================================
# core/services/entitlement_service.py - Entitlement Resolution
# =============================================================================
# Asks Frontegg which applications a tenant (or one of its users) may use and
# flattens the answer into a list of Frontegg application IDs.
#
# Frontegg has answered in several shapes over time, so extract_app_ids
# accepts all of them:
#   1. [{"tenantId": "t1", "appIds": ["a", "b"]}, ...]   assignment objects
#   2. [{"appId": "a"}, {"id": "b"}] or ["a", "b"]       app objects / bare IDs
#   3. {"appIds": [...]} / {"items": [...]} / ...        object with nested array
#   4. {"appId": "a"}                                     single object
# Anything that is not a non-null string is dropped.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    EntitlementLookupError,
    InvalidUpstreamResponseError,
    PortalException,
    UpstreamUnavailableError,
    VendorTokenError,
)
from core.services.vendor_token import VendorTokenCache
from lib.frontegg_client import FronteggClient, FronteggClientError

logger = logging.getLogger(__name__)

# Keys under which an object may wrap the real array
NESTED_ARRAY_KEYS = ("items", "data", "applications", "apps", "assignments")


def _string_ids(values: list[Any]) -> list[str]:
    # dict.fromkeys dedupes while keeping first-seen order
    return list(dict.fromkeys(v for v in values if isinstance(v, str)))


def _is_assignment(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("appIds"), list)


def _matches(assignment: dict[str, Any], tenant_id: str | None, user_id: str | None) -> bool:
    if user_id and assignment.get("userId") == user_id:
        return True
    return bool(tenant_id) and assignment.get("tenantId") == tenant_id


def extract_app_ids(
    payload: Any,
    tenant_id: str | None = None,
    user_id: str | None = None,
) -> list[str]:
    """
    Flatten a Frontegg entitlement payload into application IDs.

    Args:
        payload: Parsed JSON body from Frontegg
        tenant_id: Tenant the lookup was for (selects the matching assignment)
        user_id: User the lookup was for, if any

    Returns:
        Application IDs in first-seen order, without duplicates
    """
    if isinstance(payload, list):
        if any(_is_assignment(item) for item in payload):
            # Match over every entry; only the chosen one may supply IDs
            chosen = next(
                (a for a in payload if isinstance(a, dict) and _matches(a, tenant_id, user_id)),
                payload[0],
            )
            return _string_ids(chosen["appIds"]) if _is_assignment(chosen) else []

        ids: list[Any] = []
        for item in payload:
            if isinstance(item, dict):
                ids.append(item.get("appId") or item.get("id"))
            else:
                ids.append(item)
        return _string_ids(ids)

    if isinstance(payload, dict):
        if isinstance(payload.get("appIds"), list):
            return _string_ids(payload["appIds"])
        for key in NESTED_ARRAY_KEYS:
            nested = payload.get(key)
            if isinstance(nested, list):
                return extract_app_ids(nested, tenant_id=tenant_id, user_id=user_id)
        return _string_ids([payload.get("appId")])

    return []


class EntitlementService:
    """
    Resolves entitlements through the Frontegg vendor API.

    Example:
        service = EntitlementService(client, token_cache)
        app_ids = service.resolve("tenant-123")
    """

    def __init__(self, client: FronteggClient, token_cache: VendorTokenCache):
        self._client = client
        self._token_cache = token_cache

    def _vendor_token(self) -> str:
        try:
            return self._token_cache.get_token()
        except PortalException as e:
            # Callers only need to know the vendor step failed
            logger.error(f"Vendor token unavailable: {e.message}")
            raise VendorTokenError(status_code=500) from e

    def resolve(self, tenant_id: str, user_id: str | None = None) -> list[str]:
        """
        Fetch and normalize the entitled application IDs.

        Args:
            tenant_id: Frontegg tenant ID
            user_id: Optional user ID for a per-user lookup

        Returns:
            Frontegg application IDs

        Raises:
            VendorTokenError: The vendor token could not be obtained
            EntitlementLookupError: Frontegg answered with a non-2xx status
            InvalidUpstreamResponseError: Frontegg answered with non-JSON
            UpstreamUnavailableError: Frontegg could not be reached
        """
        vendor_token = self._vendor_token()

        try:
            if user_id:
                payload = self._client.get_user_apps(vendor_token, tenant_id, user_id)
            else:
                payload = self._client.get_tenant_assignments(vendor_token, tenant_id)
        except FronteggClientError as e:
            if e.code == "INVALID_JSON":
                raise InvalidUpstreamResponseError() from e
            if e.status_code is None:
                raise UpstreamUnavailableError(e.message) from e
            logger.error(f"Failed to get user apps for tenant {tenant_id}: {e.upstream_message}")
            raise EntitlementLookupError(e.status_code, details=e.upstream_message) from e

        app_ids = extract_app_ids(payload, tenant_id=tenant_id, user_id=user_id)
        logger.info(f"Resolved {len(app_ids)} app IDs for tenant {tenant_id}")
        return app_ids
