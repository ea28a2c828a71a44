# =============================================================================
# app/routers/apps.py - Application Catalog Endpoint
# =============================================================================
# Exposes the configured application catalog as JSON.
# =============================================================================

from fastapi import APIRouter

from core.models.app import AppCatalogResponse
from core.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/config", response_model=AppCatalogResponse)
async def get_app_config():
    """
    List the configured applications.

    Only app types with APPID, URL and NAME all set are returned.
    Responds 500 when no app type is configured.
    """
    return AppCatalogResponse(apps=CatalogService.load_catalog())
