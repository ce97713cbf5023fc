"""Expiring snapshot store for the recipe corpus."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Keyed snapshots that expire after a TTL."""

    def get(self, key: str) -> object | None:
        """Return the snapshot stored under ``key`` while it is fresh."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a snapshot that stays fresh for ``ttl_seconds``."""

    def delete(self, key: str) -> None:
        """Forget the snapshot stored under ``key``."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class _Snapshot:
    value: object
    stored_at: datetime
    ttl: timedelta

    def is_stale(self, now: datetime) -> bool:
        return now >= self.stored_at + self.ttl


@dataclass
class InMemoryCache(Cache):
    """Process-local store; every worker loads its own corpus copy."""

    clock: Callable[[], datetime] = _utc_now
    _snapshots: dict[str, _Snapshot] = field(default_factory=dict, repr=False)

    def get(self, key: str) -> object | None:
        snapshot = self._snapshots.get(key)
        if snapshot is None:
            return None
        if snapshot.is_stale(self.clock()):
            del self._snapshots[key]
            return None
        return snapshot.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self._snapshots[key] = _Snapshot(
            value=value,
            stored_at=self.clock(),
            ttl=timedelta(seconds=ttl_seconds),
        )

    def delete(self, key: str) -> None:
        self._snapshots.pop(key, None)
