# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the App Launcher:
# - test_catalog.py: App catalog read from APP_<TYPE>_* variables
# - test_vendor_token.py: Vendor token caching and refresh
# - test_entitlements.py: Entitlement lookup and response normalization
# - test_launcher.py: Launcher page, session cache and partitioning
# - test_auth.py: Hosted login, token verification and logout
# - test_health.py: Health endpoints
#
# Run tests with: poetry run pytest
# =============================================================================
