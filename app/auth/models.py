# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Any, Optional

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """
    Signed-in user extracted from a Frontegg access token.

    Only the claims the portal needs are kept; this is what gets stored in
    the session cookie.
    """
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    tenant_id: Optional[str] = Field(default=None, alias="tenantId")
    tenant_ids: list[str] = Field(default_factory=list, alias="tenantIds")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @property
    def display_name(self) -> str:
        return self.name or self.email or "User"

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthUser":
        """Build a user from verified JWT claims."""
        tenant_ids = claims.get("tenantIds")
        return cls(
            id=str(claims["sub"]),
            email=claims.get("email"),
            name=claims.get("name"),
            tenant_id=claims.get("tenantId"),
            tenant_ids=[t for t in tenant_ids if isinstance(t, str)] if isinstance(tenant_ids, list) else [],
        )

    def to_session(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TokenPayload(BaseModel):
    """
    Decoded Frontegg user access token.

    Frontegg tokens include standard JWT claims plus tenant claims.
    """
    sub: str  # User ID
    email: Optional[str] = None
    name: Optional[str] = None
    tenantId: Optional[str] = None
    tenantIds: list[str] = Field(default_factory=list)
    exp: int  # Expiration timestamp
    iat: Optional[int] = None  # Issued at timestamp
