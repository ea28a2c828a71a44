# =============================================================================
# core/models/app.py - Application Catalog Schemas
# =============================================================================
# These models define the API contract for the application catalog:
# - AppDescriptor: One launchable application read from configuration
# - AppCatalogResponse: Body of GET /api/apps/config
#
# Descriptors are immutable once loaded. `id` is the portal's own identifier
# (the lower-cased app type), `app_id` is the Frontegg application ID that
# entitlements refer to.
# =============================================================================

from pydantic import BaseModel, Field

DEFAULT_ICON = "📱"
DEFAULT_COLOR = "from-gray-500 to-gray-600"


class AppDescriptor(BaseModel):
    """
    A launchable application.

    Example:
        {
            "id": "travel",
            "appId": "6f1c...-frontegg-app-id",
            "name": "Travel",
            "description": "Book and manage trips",
            "url": "https://travel.example.com",
            "icon": "✈️",
            "color": "from-sky-500 to-blue-600"
        }
    """

    id: str = Field(..., min_length=1, description="Portal identifier (lower-cased app type)")
    app_id: str = Field(..., min_length=1, alias="appId", description="Frontegg application ID")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(default="", description="Short description shown on the tile")
    url: str = Field(..., min_length=1, description="Launch URL")
    icon: str = Field(default=DEFAULT_ICON, description="Icon glyph")
    color: str = Field(default=DEFAULT_COLOR, description="Tailwind gradient color token")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class AppCatalogResponse(BaseModel):
    """Response body of the catalog endpoint."""
    apps: list[AppDescriptor]
