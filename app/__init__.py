# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the App Launcher web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - auth/: Frontegg hosted login and session user lookup
# - routers/: Endpoints organized by feature
# - templates/: Jinja2 templates for the launcher page
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

__version__ = "1.0.0"
