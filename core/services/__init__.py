# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .catalog_service import CatalogService, catalog_environ
from .vendor_token import VendorTokenCache
from .entitlement_service import EntitlementService, extract_app_ids
from .launcher_service import (
    EntitlementCache,
    build_launcher_view,
    map_to_catalog_ids,
    partition,
)

__all__ = [
    "CatalogService",
    "catalog_environ",
    "VendorTokenCache",
    "EntitlementService",
    "extract_app_ids",
    "EntitlementCache",
    "build_launcher_view",
    "map_to_catalog_ids",
    "partition",
]
