"""In-process request rate limiting keyed by client address."""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable

from lexicon_search.config import (
    RATE_LIMIT_MAX_CLIENTS,
    RATE_LIMIT_META_REQUESTS,
    RATE_LIMIT_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
)


class FixedWindowRateLimiter:
    """Count requests per client in fixed windows.

    Meta-only requests are cheap and get a higher allowance. At most
    ``max_clients`` are tracked; the least recently seen is forgotten first.
    """

    def __init__(
        self,
        *,
        limit: int = RATE_LIMIT_REQUESTS,
        meta_limit: int = RATE_LIMIT_META_REQUESTS,
        window: float = RATE_LIMIT_WINDOW_SECONDS,
        max_clients: int = RATE_LIMIT_MAX_CLIENTS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.meta_limit = meta_limit
        self.window = window
        self.max_clients = max_clients
        self._clock = clock
        self._entries: OrderedDict[str, tuple[int, float]] = OrderedDict()
        self._lock = threading.Lock()

    def allow(self, client: str, *, meta_only: bool = False) -> bool:
        now = self._clock()
        limit = self.meta_limit if meta_only else self.limit
        with self._lock:
            count, started = self._entries.get(client, (0, now))
            if now - started >= self.window:
                count, started = 0, now
            if count >= limit:
                if client in self._entries:
                    self._entries.move_to_end(client)
                return False
            self._entries[client] = (count + 1, started)
            self._entries.move_to_end(client)
            while len(self._entries) > self.max_clients:
                self._entries.popitem(last=False)
            return True


def client_address(forwarded_for: str | None, peer: str | None) -> str:
    """First hop of X-Forwarded-For, else the peer address, else ``anonymous``."""
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return peer or "anonymous"
