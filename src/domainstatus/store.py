"""Thread-safe in-memory store of per-domain status histories.

This is the only component that touches the shared history mapping. Every
public method takes the store's reader/writer lock, so histories are never
observed half-appended or half-evicted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from domainstatus._rwlock import ReadWriteLock
from domainstatus.models import StatusUpdate, format_timestamp, parse_timestamp

_logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


def _newest_first(history: list[StatusUpdate]) -> list[StatusUpdate]:
    """Copy *history* ordered by timestamp, most recent first.

    Sorting ascending (stable) and then reversing puts the most recently
    appended entry first among equal timestamps. ``sorted(reverse=True)``
    would keep ties in insertion order instead.
    """
    ordered = sorted(history, key=lambda update: update.observed_at)
    ordered.reverse()
    return ordered


class StatusStore:
    """In-memory mapping of domain -> append-only status history.

    Invariants:
    - a domain present in the mapping has at least one update;
    - within a history, timestamps never decrease in insertion order.
    """

    def __init__(self, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._lock = ReadWriteLock()
        self._histories: dict[str, list[StatusUpdate]] = {}

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._histories)

    def __contains__(self, domain: object) -> bool:
        with self._lock.read_locked():
            return domain in self._histories

    def append(self, domain: str, status: str) -> None:
        """Record *status* for *domain*, stamped with the current time."""
        with self._lock.write_locked():
            observed_at = format_timestamp(self._clock())
            history = self._histories.setdefault(domain, [])
            # Keep per-domain order even if the wall clock steps backwards.
            if history and observed_at < history[-1].observed_at:
                observed_at = history[-1].observed_at
            history.append(StatusUpdate(status=status, observed_at=observed_at))
        _logger.debug("Stored status for %s at %s", domain, observed_at)

    def snapshot(self) -> dict[str, list[StatusUpdate]]:
        """Return an independent copy of every history, newest first."""
        with self._lock.read_locked():
            return {domain: _newest_first(history) for domain, history in self._histories.items()}

    def lookup(self, domain: str) -> tuple[list[StatusUpdate], bool]:
        """Return ``(history, found)`` for *domain*, newest first."""
        with self._lock.read_locked():
            history = self._histories.get(domain)
            if history is None:
                return [], False
            return _newest_first(history), True

    def evict(self, now: datetime, max_age: timedelta) -> int:
        """Drop updates older than ``now - max_age``; return how many were dropped.

        Domains left without updates are removed. Entries whose timestamp
        cannot be parsed are logged and dropped as well.
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        cutoff = now - max_age
        removed = 0
        corrupt: list[tuple[str, str]] = []

        with self._lock.write_locked():
            for domain in list(self._histories):
                kept: list[StatusUpdate] = []
                for update in self._histories[domain]:
                    try:
                        observed = parse_timestamp(update.observed_at)
                    except ValueError:
                        corrupt.append((domain, update.observed_at))
                        continue
                    if observed >= cutoff:
                        kept.append(update)

                removed += len(self._histories[domain]) - len(kept)
                if kept:
                    self._histories[domain] = kept
                else:
                    del self._histories[domain]

        for domain, observed_at in corrupt:
            _logger.warning("Dropped update for %s with unparseable timestamp %r", domain, observed_at)
        _logger.debug("Evicted %d updates older than %s", removed, format_timestamp(cutoff))
        return removed
