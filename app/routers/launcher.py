# =============================================================================
# app/routers/launcher.py - Launcher Page
# =============================================================================
# Server-rendered landing page listing the user's apps and upselling the
# rest. See core/services/launcher_service.py for the page logic.
# =============================================================================

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.auth import get_current_user_optional
from app.dependencies import EntitlementServiceDep
from app.exceptions import CatalogEmptyError
from core.services.catalog_service import CatalogService
from core.services.launcher_service import build_launcher_view

logger = logging.getLogger(__name__)

router = APIRouter()

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse, name="launcher")
def launcher(request: Request, service: EntitlementServiceDep):
    """Render the launcher for the current (possibly anonymous) visitor."""
    try:
        catalog = CatalogService.load_catalog()
    except CatalogEmptyError:
        logger.error("Error fetching app config")
        catalog = None

    view = build_launcher_view(
        catalog=catalog,
        user=get_current_user_optional(request),
        storage=request.session,
        resolve=service.resolve,
    )
    return templates.TemplateResponse(request, "launcher.html", {"view": view})
