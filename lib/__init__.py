# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - frontegg_client.py: Typed Frontegg HTTP wrapper (vendor auth, entitlements,
#   hosted login)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.frontegg_client import FronteggClient, FronteggClientError

__all__ = [
    "FronteggClient",
    "FronteggClientError",
]
