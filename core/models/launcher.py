# =============================================================================
# core/models/launcher.py - Launcher Page State
# =============================================================================
# Presentation state for the launcher page:
# - LauncherStatus / LauncherState: loading -> loaded | error
# - LauncherView: everything the template needs to render tiles
#
# State machine:
#     loading -> loaded
#            \-> error
#
# There is no retry transition; an error is rendered as a static banner.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum

from core.models.app import AppDescriptor


class LauncherStatus(str, Enum):
    """
    Where the assigned-apps section currently is.

    - loading: Entitlements have not been resolved yet
    - loaded: Assigned app IDs are known
    - error: Resolution failed; `LauncherState.error` holds the message
    """
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class LauncherState:
    """Three-flag presentation state driven by sequential lookups."""
    status: LauncherStatus = LauncherStatus.LOADING
    error: str | None = None
    assigned_ids: list[str] = field(default_factory=list)

    @property
    def is_loading(self) -> bool:
        return self.status == LauncherStatus.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.status == LauncherStatus.LOADED

    def start_loading(self) -> None:
        self.status = LauncherStatus.LOADING
        self.error = None

    def fail(self, message: str) -> None:
        self.status = LauncherStatus.ERROR
        self.error = message

    def finish(self, assigned_ids: list[str]) -> None:
        self.status = LauncherStatus.LOADED
        self.error = None
        self.assigned_ids = list(assigned_ids)


@dataclass
class LauncherView:
    """
    Render model for the launcher page.

    `apps` is the full catalog; `assigned` / `unassigned` partition it for
    signed-in users. Signed-out users see every app in `unassigned`.
    """
    authenticated: bool
    state: LauncherState
    apps: list[AppDescriptor] = field(default_factory=list)
    assigned: list[AppDescriptor] = field(default_factory=list)
    unassigned: list[AppDescriptor] = field(default_factory=list)
    display_name: str | None = None
    welcome_title: str = "Welcome to App Launcher"
    welcome_subtitle: str = "Sign in to access your apps and launch them from one convenient place"
