"""Single-flight token refresh.

When several requests discover at once that the bearer token is no longer
accepted, exactly one of them (the *refresher*) calls the refresh endpoint.
Every other caller is parked on a future in :attr:`RefreshGuard._queue` and
woken, in arrival order, with the new token or with the refresh error once
the refresher is done.

All of this runs on a single asyncio event loop, so the ``is_refreshing``
flag and the queue need no lock: nothing can interleave between reading the
flag and appending to the queue because there is no ``await`` in between.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable

from research_connect.api.errors import TokenRefreshError
from research_connect.auth.storage import CredentialStore

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_PATH = "/login?expired=true"

RefreshFn = Callable[[str], Awaitable[str]]
SessionExpiredHook = Callable[[str], None]


class RefreshGuard:
    """
    Coordinates token refreshes so at most one is in flight.

    Args:
        store: Where the current token lives; updated on success,
            cleared on failure
        refresh_fn: Coroutine exchanging the current token for a new one
        on_session_expired: Called with ``login_path`` once per failed
            refresh, after the credentials have been cleared
        login_path: Login entry point handed to ``on_session_expired``
    """

    def __init__(
        self,
        store: CredentialStore,
        refresh_fn: RefreshFn,
        on_session_expired: SessionExpiredHook | None = None,
        login_path: str = DEFAULT_LOGIN_PATH,
    ) -> None:
        self._store = store
        self._refresh_fn = refresh_fn
        self._on_session_expired = on_session_expired
        self.login_path = login_path
        self.is_refreshing = False
        self.refresh_count = 0
        self._queue: deque[asyncio.Future[str]] = deque()
        # Token whose refresh last failed, and how.
        self._failed_token: str | None = None
        self._failed_error: TokenRefreshError | None = None

    @property
    def pending(self) -> int:
        """Number of callers waiting on the refresh in progress."""
        return len(self._queue)

    async def refresh(self, stale_token: str | None = None) -> str:
        """
        Return a fresh token, refreshing at most once for all concurrent callers.

        Args:
            stale_token: The token the caller's request was sent with.  If
                the store already holds a different token, a refresh has
                completed since, and that token is returned without another
                round trip.

        Raises:
            TokenRefreshError: The refresh failed.  Every queued caller
                receives the same exception instance.
        """
        if self.is_refreshing:
            waiter: asyncio.Future[str] = asyncio.get_running_loop().create_future()
            self._queue.append(waiter)
            logger.debug("Token refresh in progress; queued caller #%d", len(self._queue))
            return await waiter

        current = self._store.get_token()
        if stale_token is not None and current and current != stale_token:
            logger.debug("Token already refreshed by another caller; reusing it")
            return current

        if stale_token is not None and stale_token == self._failed_token and self._failed_error:
            # Straggler from a session that already expired; do not clear twice.
            raise self._failed_error

        self.is_refreshing = True
        self.refresh_count += 1
        try:
            token = await self._run_refresh(current)
        except asyncio.CancelledError:
            self._settle(error=TokenRefreshError("Token refresh was cancelled"))
            raise
        except Exception as exc:
            error = exc if isinstance(exc, TokenRefreshError) else TokenRefreshError(str(exc))
            if error is not exc:
                error.__cause__ = exc
            self._failed_token = current
            self._failed_error = error
            self._settle(error=error)
            self._expire_session()
            raise error
        else:
            self._failed_token = None
            self._failed_error = None
            self._settle(token=token)
            return token
        finally:
            self.is_refreshing = False

    async def _run_refresh(self, current: str | None) -> str:
        if not current:
            raise TokenRefreshError("No token found")

        logger.info("Refreshing access token")
        token = await self._refresh_fn(current)
        self._store.set_token(token)
        logger.info("Access token refreshed (%d waiting caller(s) released)", len(self._queue))
        return token

    def _settle(self, token: str | None = None, error: BaseException | None = None) -> None:
        """Resolve or reject every queued caller in FIFO order."""
        while self._queue:
            waiter = self._queue.popleft()
            if waiter.done():
                # Caller was cancelled while waiting.
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(token)

    def _expire_session(self) -> None:
        self._store.clear()
        logger.warning("Session expired; sign in again at %s", self.login_path)
        if self._on_session_expired is not None:
            self._on_session_expired(self.login_path)
