# kerbside/services/sensor_cache.py
"""
Live Sensor Cache — a single-slot, process-wide TTL cache of the upstream feed.

States:
  NoCache  — nothing fetched yet (or force_refresh() cleared it)
  Fresh    — snapshot younger than the TTL, returned as-is
  Stale    — TTL expired; the next get() tries one fetch and falls back to the
             stale snapshot if that fetch fails

A failed fetch never raises to the caller: get() returns the previous snapshot
or None. Refreshes are serialised with an asyncio.Lock and the new snapshot
replaces the old one in a single assignment.
"""

import asyncio
import time
from datetime import datetime
from typing import Awaitable, Callable, Optional

import httpx

from kerbside.models.sensor import SensorRecord, SensorSnapshot
from kerbside.services.sensor_feed import SensorFeedError
from kerbside.utils.logger import get_logger

logger = get_logger(__name__)

Fetcher = Callable[[], Awaitable[list[SensorRecord]]]


class SensorCache:
    def __init__(
        self,
        fetcher: Fetcher,
        ttl_seconds: float = 180.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetcher = fetcher
        self._ttl = ttl_seconds
        self._clock = clock
        self._snapshot: Optional[SensorSnapshot] = None
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> Optional[SensorSnapshot]:
        return self._snapshot

    def age_seconds(self) -> Optional[float]:
        if self._snapshot is None:
            return None
        return self._clock() - self._snapshot.fetched_at

    def is_fresh(self) -> bool:
        age = self.age_seconds()
        return age is not None and age < self._ttl

    async def get(self) -> Optional[SensorSnapshot]:
        if self.is_fresh():
            logger.debug("[SENSORS] Using cached data")
            return self._snapshot

        async with self._lock:
            # Another request may have refreshed while we waited
            if self.is_fresh():
                return self._snapshot
            return await self._refresh()

    async def _refresh(self) -> Optional[SensorSnapshot]:
        logger.info("[SENSORS] Fetching fresh data...")
        try:
            records = await self._fetcher()
        except (SensorFeedError, httpx.HTTPError) as e:
            logger.warning(f"[SENSORS] Fetch failed, serving {'stale cache' if self._snapshot else 'no data'}: {e}")
            return self._snapshot

        self._snapshot = SensorSnapshot(
            records=tuple(records),
            fetched_at=self._clock(),
            fetched_at_iso=datetime.now().isoformat(timespec="seconds"),
        )
        logger.info(f"[SENSORS] Fresh data cached: {len(records)} records")
        return self._snapshot

    def force_refresh(self):
        """Drop the cached snapshot so the next get() goes upstream."""
        self._snapshot = None
        logger.info("[SENSORS] Cache cleared")

    def status(self) -> dict:
        age = self.age_seconds()
        return {
            "records_in_cache": len(self._snapshot) if self._snapshot else 0,
            "cache_age_minutes": round(age / 60, 1) if age is not None else "no cache",
            "last_fetched": self._snapshot.fetched_at_iso if self._snapshot else None,
        }
