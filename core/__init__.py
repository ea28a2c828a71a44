# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the portal's business logic:
# - models/: Pydantic schemas and presentation state
# - services/: Catalog, vendor token cache, entitlements, launcher view
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
