# =============================================================================
# core/services/vendor_token.py - Vendor Credential Cache
# =============================================================================
# Holds the single Frontegg vendor token the portal backend uses for
# entitlement lookups. The token is fetched lazily and reused until its
# absolute expiry, then replaced.
#
# The cache is process-wide and not persisted across restarts. Concurrent
# requests that all observe an expired token will each refresh it; the last
# writer wins.
# =============================================================================

import logging
import time
from collections.abc import Callable

from app.exceptions import (
    CredentialsNotConfiguredError,
    UpstreamUnavailableError,
    VendorTokenError,
)
from core.models.entitlement import CachedVendorToken
from lib.frontegg_client import FronteggClient, FronteggClientError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 23 * 60 * 60  # refresh roughly daily


class VendorTokenCache:
    """
    In-memory cache for the Frontegg vendor bearer token.

    Example:
        cache = VendorTokenCache(client, client_id="...", secret="...")
        token = cache.get_token()   # fetches
        token = cache.get_token()   # reused until expiry
    """

    def __init__(
        self,
        client: FronteggClient,
        client_id: str,
        secret: str,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._client = client
        self._client_id = client_id
        self._secret = secret
        self._default_ttl = default_ttl
        self._clock = clock
        self._cached: CachedVendorToken | None = None

    @property
    def cached(self) -> CachedVendorToken | None:
        return self._cached

    def clear(self) -> None:
        self._cached = None

    def _ttl_from(self, expires_in: object) -> float:
        # bool is an int subclass; reject it along with zero/negative values
        if isinstance(expires_in, (int, float)) and not isinstance(expires_in, bool) and expires_in > 0:
            return float(expires_in)
        return float(self._default_ttl)

    def get_token(self) -> str:
        """
        Return a valid vendor token, refreshing it when expired.

        Raises:
            CredentialsNotConfiguredError: FRONTEGG_CLIENT_ID / FRONTEGG_SECRET unset
            VendorTokenError: Frontegg rejected the request or sent no token
            UpstreamUnavailableError: Frontegg could not be reached
        """
        if not (self._client_id and self._secret):
            raise CredentialsNotConfiguredError()

        now = self._clock()
        if self._cached is not None and self._cached.is_valid(now):
            return self._cached.token

        logger.info("Fetching new Frontegg vendor token")
        try:
            data = self._client.authenticate_vendor(self._client_id, self._secret)
        except FronteggClientError as e:
            if e.status_code is None:
                raise UpstreamUnavailableError(e.message) from e
            if e.code == "INVALID_JSON":
                raise VendorTokenError(details=e.message) from e
            logger.error(f"Failed to get vendor token: {e.upstream_message}")
            raise VendorTokenError(status_code=e.status_code) from e

        token = data.get("token") or data.get("accessToken")
        if not token or not isinstance(token, str):
            logger.error("Frontegg vendor response contained no token")
            raise VendorTokenError(message="No token in response")

        ttl = self._ttl_from(data.get("expiresIn"))
        self._cached = CachedVendorToken(token=token, expires_at=now + ttl)
        logger.debug(f"Cached vendor token for {ttl:.0f}s")
        return token
