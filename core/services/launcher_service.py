# =============================================================================
# core/services/launcher_service.py - Launcher Page Logic
# =============================================================================
# Turns the catalog plus the signed-in user into a LauncherView:
#   1. Signed out       -> every app shown as unassigned
#   2. No tenant ID     -> error banner
#   3. Session cache    -> assigned IDs read back verbatim, no Frontegg call
#   4. Cache miss       -> resolve via Frontegg, map to catalog IDs, cache
#
# The session cache lives in the browser-bound session (request.session),
# keyed per tenant, and is cleared on sign-out.
# =============================================================================

import json
import logging
from collections.abc import Callable, MutableMapping
from typing import Any

from app.auth.models import AuthUser
from app.exceptions import PortalException
from core.models.app import AppDescriptor
from core.models.launcher import LauncherState, LauncherView

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "assignedApps_"

CATALOG_LOAD_ERROR = "Failed to load app configuration"
MISSING_TENANT_ERROR = "Tenant ID not available. Please sign in again."


def cache_key(tenant_id: str) -> str:
    return f"{CACHE_KEY_PREFIX}{tenant_id}"


class EntitlementCache:
    """
    Tenant-scoped cache of assigned catalog IDs.

    Values are stored as JSON strings so they read back exactly as written.
    There is no expiry; `clear` is called on sign-out.
    """

    def __init__(self, storage: MutableMapping[str, Any]):
        self._storage = storage

    def get(self, tenant_id: str) -> list[Any] | None:
        """
        Return the cached list, or None on a miss.

        Unparseable entries are removed. Parseable non-list entries are
        ignored but left in place.
        """
        key = cache_key(tenant_id)
        raw = self._storage.get(key)
        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding invalid cache entry {key}")
            self._storage.pop(key, None)
            return None
        if isinstance(value, list):
            return value
        return None

    def set(self, tenant_id: str, app_ids: list[str]) -> None:
        self._storage[cache_key(tenant_id)] = json.dumps(app_ids)

    def clear(self, tenant_id: str) -> None:
        self._storage.pop(cache_key(tenant_id), None)


def map_to_catalog_ids(app_ids: list[Any], catalog: list[AppDescriptor]) -> list[str]:
    """
    Map Frontegg application IDs to catalog IDs.

    IDs with no matching descriptor are dropped silently.
    """
    by_app_id = {app.app_id: app.id for app in catalog}
    return [by_app_id[a] for a in app_ids if a is not None and a in by_app_id]


def partition(
    catalog: list[AppDescriptor],
    assigned_ids: list[str],
) -> tuple[list[AppDescriptor], list[AppDescriptor]]:
    """Split the catalog into (assigned, unassigned), keeping catalog order."""
    assigned_set = set(assigned_ids)
    assigned = [app for app in catalog if app.id in assigned_set]
    unassigned = [app for app in catalog if app.id not in assigned_set]
    return assigned, unassigned


def welcome_title(user: AuthUser | None) -> str:
    """
    Greeting for the page header.

    Uses the user's name, then the local part of their email.
    """
    if user is None:
        return "Welcome to App Launcher"
    if user.name:
        return f"Welcome back, {user.name}!"
    if user.email:
        return f"Welcome back, {user.email.split('@')[0]}!"
    return "Welcome back!"


def build_launcher_view(
    catalog: list[AppDescriptor] | None,
    user: AuthUser | None,
    storage: MutableMapping[str, Any],
    resolve: Callable[[str], list[str]],
) -> LauncherView:
    """
    Build the render model for the launcher page.

    Args:
        catalog: Loaded descriptors, or None if the catalog failed to load
        user: Signed-in user, or None
        storage: Session mapping holding the per-tenant cache
        resolve: Callable returning Frontegg app IDs for a tenant ID

    Returns:
        LauncherView with state loaded or error (signed-in users) or
        loaded with every app unassigned (signed-out users)
    """
    apps = catalog or []
    state = LauncherState()

    if user is None:
        state.finish([])
        return LauncherView(
            authenticated=False,
            state=state,
            apps=apps,
            unassigned=list(apps),
        )

    view = LauncherView(
        authenticated=True,
        state=state,
        apps=apps,
        display_name=user.display_name,
        welcome_title=welcome_title(user),
        welcome_subtitle="Launch your apps from one place",
    )

    if catalog is None:
        state.fail(CATALOG_LOAD_ERROR)
        return view

    tenant_id = user.tenant_id
    if not tenant_id:
        state.fail(MISSING_TENANT_ERROR)
        return view

    cache = EntitlementCache(storage)
    cached = cache.get(tenant_id)
    if cached is not None:
        logger.debug(f"Using cached assigned apps for tenant {tenant_id}")
        state.finish(cached)
    else:
        state.start_loading()
        try:
            frontegg_ids = resolve(tenant_id)
        except PortalException as e:
            logger.error(f"Error fetching user apps: {e.message}")
            state.fail(e.message)
            return view
        assigned_ids = map_to_catalog_ids(frontegg_ids, apps)
        cache.set(tenant_id, assigned_ids)
        state.finish(assigned_ids)

    view.assigned, view.unassigned = partition(apps, state.assigned_ids)
    return view
