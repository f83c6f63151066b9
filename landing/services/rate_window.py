"""Fixed-window submission limits keyed by client identifier.

The window is anchored at a client's first request rather than at clock
boundaries: the first request after ``window`` has elapsed starts a new
window with a count of one. Rejected requests do not touch the entry.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class RateLimitEntry:
    key: str
    count: int
    window_start: datetime


@dataclass(frozen=True)
class RateDecision:
    allowed: bool
    entry: RateLimitEntry
    retry_after: timedelta = timedelta(0)


class RateLimitStore(ABC):
    """Storage for rate-limit entries.

    ``lock(key)`` must serialize read-modify-write cycles for a key.
    A shared external store would implement it with its own atomic
    primitive.
    """

    @abstractmethod
    def get(self, key: str) -> RateLimitEntry | None: ...

    @abstractmethod
    def put(self, entry: RateLimitEntry) -> None: ...

    @abstractmethod
    def lock(self, key: str) -> AbstractContextManager[None]: ...

    def prune(self, expired_before: datetime) -> int:
        """Drop entries whose window started before ``expired_before``."""
        return 0


class InMemoryRateLimitStore(RateLimitStore):
    """Process-local store.

    Keys share a fixed pool of striped locks, so lock memory stays bounded
    while entries for distinct keys rarely contend.
    """

    def __init__(self, stripes: int = 64) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._stripes = [threading.Lock() for _ in range(stripes)]
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def put(self, entry: RateLimitEntry) -> None:
        with self._guard:
            self._entries[entry.key] = entry

    @contextmanager
    def lock(self, key: str) -> Iterator[None]:
        with self._stripes[hash(key) % len(self._stripes)]:
            yield

    def prune(self, expired_before: datetime) -> int:
        removed = 0
        with self._guard:
            for key in list(self._entries):
                if self._entries[key].window_start < expired_before:
                    del self._entries[key]
                    removed += 1
        return removed

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()


class SubmissionRateLimiter:
    """Allow at most ``max_requests`` per client within ``window``."""

    def __init__(
        self,
        store: RateLimitStore,
        *,
        max_requests: int = 5,
        window: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.max_requests = max_requests
        self.window = window
        self.clock = clock
        self._last_prune: datetime | None = None

    def hit(self, key: str) -> RateDecision:
        """Count a request from ``key`` and report whether it may proceed."""
        now = self.clock()
        self._maybe_prune(now)

        with self.store.lock(key):
            entry = self.store.get(key)
            if entry is None or now - entry.window_start > self.window:
                entry = RateLimitEntry(key=key, count=1, window_start=now)
                self.store.put(entry)
                return RateDecision(allowed=True, entry=entry)

            if entry.count >= self.max_requests:
                retry_after = entry.window_start + self.window - now
                return RateDecision(
                    allowed=False,
                    entry=entry,
                    retry_after=max(retry_after, timedelta(0)),
                )

            entry = replace(entry, count=entry.count + 1)
            self.store.put(entry)
            return RateDecision(allowed=True, entry=entry)

    def _maybe_prune(self, now: datetime) -> None:
        if self._last_prune is not None and now - self._last_prune < self.window:
            return
        self._last_prune = now
        removed = self.store.prune(now - self.window)
        if removed:
            logger.debug("Pruned %d expired rate-limit entries", removed)
