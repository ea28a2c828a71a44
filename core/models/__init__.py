# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the portal's schemas:
# - app.py: Application descriptors and the catalog response
# - entitlement.py: Vendor token and entitlement responses
# - launcher.py: Presentation state for the launcher page
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Catalog Models
# -----------------------------------------------------------------------------
from .app import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    AppCatalogResponse,
    AppDescriptor,
)

# -----------------------------------------------------------------------------
# Entitlement Models
# -----------------------------------------------------------------------------
from .entitlement import (
    CachedVendorToken,
    UserAppsResponse,
    VendorTokenResponse,
)

# -----------------------------------------------------------------------------
# Launcher Models
# -----------------------------------------------------------------------------
from .launcher import (
    LauncherState,
    LauncherStatus,
    LauncherView,
)

__all__ = [
    # Catalog
    "DEFAULT_COLOR",
    "DEFAULT_ICON",
    "AppCatalogResponse",
    "AppDescriptor",
    # Entitlement
    "CachedVendorToken",
    "UserAppsResponse",
    "VendorTokenResponse",
    # Launcher
    "LauncherState",
    "LauncherStatus",
    "LauncherView",
]
