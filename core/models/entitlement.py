# =============================================================================
# core/models/entitlement.py - Entitlement & Vendor Token Schemas
# =============================================================================
# - VendorTokenResponse: Body of GET /api/frontegg/vendor-token
# - UserAppsResponse: Body of GET /api/frontegg/user-apps
# - CachedVendorToken: The single in-memory vendor credential
# =============================================================================

from pydantic import BaseModel, Field


class VendorTokenResponse(BaseModel):
    """Vendor bearer token handed back to callers."""
    token: str


class UserAppsResponse(BaseModel):
    """Frontegg application IDs the tenant (or user) is entitled to."""
    app_ids: list[str] = Field(default_factory=list, alias="appIds")

    model_config = {"populate_by_name": True}


class CachedVendorToken(BaseModel):
    """
    Vendor token plus its absolute expiry (epoch seconds).

    Lives only in process memory; never persisted.
    """
    token: str
    expires_at: float

    model_config = {"frozen": True}

    def is_valid(self, now: float) -> bool:
        return self.expires_at > now
