# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The signed-in user lives in the Frontegg session cookie (request.session).
# It is written once by the hosted-login callback after the Frontegg access
# token has been verified against the workspace JWKS (RS256).
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Any, Optional

from fastapi import Request
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.auth.models import AuthUser, TokenPayload
from app.config import settings
from app.exceptions import LoginFailedError, NotAuthenticatedError
from lib.frontegg_client import FronteggClient, FronteggClientError

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"
SESSION_COOKIE_PREFIX = "fe_session"

# Accepted signing algorithms, independent of the token header
ALGORITHMS = ["RS256"]

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0


def clear_jwks_cache() -> None:
    global _jwks_cache, _jwks_cache_time
    _jwks_cache = {}
    _jwks_cache_time = 0


def _fetch_jwks(client: FronteggClient) -> dict:
    """Fetch JWKS from Frontegg with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    # Return cached if valid
    if _jwks_cache and (current_time - _jwks_cache_time) < settings.JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        _jwks_cache = client.get_jwks()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {settings.jwks_url}")
        return _jwks_cache
    except FronteggClientError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str, client: FronteggClient) -> dict:
    """
    Find the JWKS key that signed a token.

    Returns:
        The matching JWK

    Raises:
        LoginFailedError: If the header is unreadable or no key matches
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise LoginFailedError(f"unreadable token header ({e})", status_code=401)

    kid = unverified_header.get("kid")

    keys = _fetch_jwks(client).get("keys", [])
    for key in keys:
        if kid is None or key.get("kid") == kid:
            return key

    logger.warning(f"No JWKS key found for kid={kid}")
    raise LoginFailedError("no signing key matches the access token", status_code=401)


def verify_access_token(token: str, client: FronteggClient) -> AuthUser:
    """
    Verify a Frontegg access token and extract the user.

    This:
    1. Looks up the signing key in the (cached) workspace JWKS
    2. Verifies the signature and expiry
    3. Checks the audience when FRONTEGG_APP_CLIENT_ID is configured
    4. Returns an AuthUser with ID, email, name and tenant

    Raises:
        LoginFailedError: 401 if the token is invalid or expired
    """
    signing_key = _get_signing_key(token, client)

    decode_kwargs: dict[str, Any] = {"algorithms": ALGORITHMS}
    if settings.FRONTEGG_APP_CLIENT_ID:
        decode_kwargs["audience"] = settings.FRONTEGG_APP_CLIENT_ID
    else:
        decode_kwargs["options"] = {"verify_aud": False}

    try:
        claims = jwt.decode(token, signing_key, **decode_kwargs)
    except ExpiredSignatureError:
        logger.warning("Frontegg access token has expired")
        raise LoginFailedError("token has expired", status_code=401)
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise LoginFailedError(f"invalid token ({e})", status_code=401)

    try:
        payload = TokenPayload(**claims)
    except ValidationError as e:
        logger.warning(f"Access token is missing required claims: {e}")
        raise LoginFailedError("token is missing required claims", status_code=401)

    logger.debug(f"Authenticated user: {payload.sub}")
    return AuthUser.from_claims(claims)


def has_session_cookie(request: Request) -> bool:
    """True when any cookie name starts with fe_session."""
    return any(name.startswith(SESSION_COOKIE_PREFIX) for name in request.cookies)


def get_current_user_optional(request: Request) -> Optional[AuthUser]:
    """
    Get the signed-in user from the session, or None.

    A corrupt session entry is dropped and treated as signed out.
    """
    data = request.session.get(SESSION_USER_KEY)
    if not data:
        return None
    try:
        return AuthUser(**data)
    except (TypeError, ValidationError):
        logger.warning("Dropping malformed user entry from session")
        request.session.pop(SESSION_USER_KEY, None)
        return None


def get_current_user(request: Request) -> AuthUser:
    """
    Require a Frontegg session.

    Raises:
        NotAuthenticatedError: 401 if there is no fe_session cookie or no
            signed-in user in it
    """
    if not has_session_cookie(request):
        raise NotAuthenticatedError()
    user = get_current_user_optional(request)
    if user is None:
        raise NotAuthenticatedError()
    return user
