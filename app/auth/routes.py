# =============================================================================
# app/auth/routes.py - Hosted Login Routes
# =============================================================================
# Endpoints:
#   - GET /account/login     redirect to Frontegg hosted login
#   - GET /account/callback  exchange the code, verify the token, open a session
#   - GET /account/logout    clear the session (and the tenant's app cache)
#
# Note: Credentials are entered on Frontegg's hosted pages. These routes only
# run the authorization-code flow and keep a minimal user profile in the
# signed session cookie. Access tokens are not stored.
# =============================================================================

import logging
import secrets
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from app.auth.dependencies import (
    SESSION_USER_KEY,
    get_current_user_optional,
    verify_access_token,
)
from app.config import settings
from app.dependencies import FronteggClientDep
from app.exceptions import LoginFailedError
from core.services.launcher_service import EntitlementCache
from lib.frontegg_client import FronteggClientError

logger = logging.getLogger(__name__)

router = APIRouter()

STATE_KEY = "auth_state"
LOGIN_SCOPES = "openid email profile"


def _frontegg_url(path: str) -> str:
    return f"{settings.FRONTEGG_BASE_URL.rstrip('/')}{path}"


@router.get("/login", name="login")
async def login(request: Request):
    """
    Start the login flow by redirecting to Frontegg hosted login.

    A random `state` is kept in the session for CSRF protection.
    """
    state = secrets.token_urlsafe(32)
    request.session[STATE_KEY] = state

    params = {
        "response_type": "code",
        "client_id": settings.FRONTEGG_APP_CLIENT_ID,
        "redirect_uri": str(request.url_for("callback")),
        "scope": LOGIN_SCOPES,
        "state": state,
    }
    return RedirectResponse(
        _frontegg_url(f"/oauth/authorize?{urlencode(params)}"),
        status_code=302,
    )


@router.get("/callback", name="callback")
def callback(
    request: Request,
    client: FronteggClientDep,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
):
    """Handle the redirect from Frontegg and create a local session."""
    # CSRF check
    expected_state = request.session.pop(STATE_KEY, None)
    if not expected_state or expected_state != state:
        request.session.clear()
        raise LoginFailedError("invalid state. Please try again")

    if not code:
        request.session.clear()
        reason = error or "unknown_error"
        if error_description:
            reason = f"{reason} ({error_description})"
        raise LoginFailedError(reason)

    try:
        tokens = client.exchange_code(
            code=code,
            redirect_uri=str(request.url_for("callback")),
            client_id=settings.FRONTEGG_APP_CLIENT_ID,
            client_secret=settings.FRONTEGG_APP_SECRET or None,
        )
    except FronteggClientError as e:
        logger.error(f"Authorization code exchange failed: {e}")
        request.session.clear()
        raise LoginFailedError(f"token exchange failed ({e.upstream_message})")

    access_token = tokens.get("access_token") or tokens.get("accessToken")
    if not access_token:
        request.session.clear()
        raise LoginFailedError("no access token returned by identity provider")

    user = verify_access_token(access_token, client)
    request.session[SESSION_USER_KEY] = user.to_session()
    logger.info(f"User {user.id} signed in (tenant {user.tenant_id})")

    return RedirectResponse(str(request.url_for("launcher")), status_code=302)


@router.get("/logout", name="logout")
async def logout(request: Request):
    """
    Clear the local session and redirect to Frontegg logout.

    The tenant's cached app assignments are removed first.
    """
    user = get_current_user_optional(request)
    if user is not None and user.tenant_id:
        EntitlementCache(request.session).clear(user.tenant_id)
        logger.info(f"User {user.id} signed out")
    request.session.clear()

    query = urlencode({"post_logout_redirect_uri": str(request.url_for("launcher"))})
    return RedirectResponse(_frontegg_url(f"/oauth/logout?{query}"), status_code=302)
