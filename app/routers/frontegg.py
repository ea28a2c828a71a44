# =============================================================================
# app/routers/frontegg.py - Frontegg Proxy Endpoints
# =============================================================================
# - GET /api/frontegg/vendor-token  cached vendor bearer token
# - GET /api/frontegg/user-apps     entitled Frontegg application IDs
#
# Both endpoints are thin: token caching lives in VendorTokenCache and
# payload normalization in EntitlementService.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, get_current_user
from app.dependencies import EntitlementServiceDep, VendorTokenCacheDep
from app.exceptions import TenantAccessDeniedError, TenantIdRequiredError
from core.models.entitlement import UserAppsResponse, VendorTokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/vendor-token", response_model=VendorTokenResponse)
def get_vendor_token(token_cache: VendorTokenCacheDep):
    """
    Return the vendor token, fetching a new one only after expiry.

    Errors:
        500: Credentials not configured / no token in Frontegg response
        4xx/5xx: Frontegg's own status when it rejects the credentials
    """
    return VendorTokenResponse(token=token_cache.get_token())


@router.get("/user-apps", response_model=UserAppsResponse)
def get_user_apps(
    service: EntitlementServiceDep,
    user: AuthUser = Depends(get_current_user),
    tenant_id: Annotated[Optional[str], Query(alias="tenantId", description="Frontegg tenant ID")] = None,
    user_id: Annotated[Optional[str], Query(alias="userId", description="Optional Frontegg user ID")] = None,
):
    """
    Return the Frontegg application IDs assigned to a tenant or user.

    Errors:
        401: No Frontegg session
        400: tenantId missing
        403: tenantId or userId does not belong to the signed-in user
        500: Vendor token unavailable / Frontegg sent invalid JSON
        4xx/5xx: Frontegg's own status when the lookup fails
    """
    if not tenant_id:
        raise TenantIdRequiredError()
    if tenant_id != user.tenant_id and tenant_id not in user.tenant_ids:
        logger.warning(f"User {user.id} denied apps for tenant {tenant_id}")
        raise TenantAccessDeniedError()
    if user_id and user_id != user.id:
        logger.warning(f"User {user.id} denied apps for user {user_id}")
        raise TenantAccessDeniedError("You can only look up your own applications.")

    logger.debug(f"User {user.id} requested apps for tenant {tenant_id}")
    return UserAppsResponse(app_ids=service.resolve(tenant_id, user_id=user_id))
