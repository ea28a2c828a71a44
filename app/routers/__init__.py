# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - apps.py: Application catalog endpoint
# - frontegg.py: Vendor token and entitlement proxy endpoints
# - launcher.py: Server-rendered launcher page
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import apps
from . import frontegg
from . import launcher

__all__ = [
    "health",
    "apps",
    "frontegg",
    "launcher",
]
