# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), and tests replace
# them through app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.entitlement_service import EntitlementService
from core.services.vendor_token import VendorTokenCache
from lib.frontegg_client import FronteggClient


@lru_cache
def get_frontegg_client() -> FronteggClient:
    """
    Get the Frontegg client instance.

    Returns the process-wide client so connections are pooled.
    """
    return FronteggClient.from_settings(settings)


@lru_cache
def get_vendor_token_cache() -> VendorTokenCache:
    """
    Get the process-wide vendor token cache.

    Created lazily on first use and lost on restart.
    """
    return VendorTokenCache(
        client=get_frontegg_client(),
        client_id=settings.FRONTEGG_CLIENT_ID,
        secret=settings.FRONTEGG_SECRET,
        default_ttl=settings.VENDOR_TOKEN_DEFAULT_TTL_SECONDS,
    )


def get_entitlement_service(
    client: Annotated[FronteggClient, Depends(get_frontegg_client)],
    token_cache: Annotated[VendorTokenCache, Depends(get_vendor_token_cache)],
) -> EntitlementService:
    return EntitlementService(client, token_cache)


# Type aliases for dependency injection
FronteggClientDep = Annotated[FronteggClient, Depends(get_frontegg_client)]
VendorTokenCacheDep = Annotated[VendorTokenCache, Depends(get_vendor_token_cache)]
EntitlementServiceDep = Annotated[EntitlementService, Depends(get_entitlement_service)]
