# kerbside/services/sensor_feed.py
"""
Upstream bay-sensor feed — City of Melbourne open data.

Endpoint: GET {SENSOR_FEED_URL}?limit={SENSOR_FEED_LIMIT}
Response: {"total_count": n, "results": [{kerbsideid, zone_number, status_description,
          location: {lat, lon}, lastupdated, ...}, ...]}  (a bare JSON array is accepted too)
"""

import asyncio
from typing import Optional

import httpx

from kerbside.config import settings
from kerbside.models.sensor import SensorRecord
from kerbside.utils.logger import get_logger

logger = get_logger(__name__)


class SensorFeedError(Exception):
    """Upstream fetch failed: network error, timeout, non-200, bad JSON or no records."""


def parse_feed_payload(payload) -> list[SensorRecord]:
    """Accept a bare record list or the open-data {"results": [...]} envelope."""
    if isinstance(payload, dict):
        payload = payload.get("results")
    if not isinstance(payload, list):
        raise SensorFeedError("Unexpected sensor feed payload shape")
    return [SensorRecord.from_feed(raw) for raw in payload if isinstance(raw, dict)]


class SensorFeedClient:
    """One bounded-timeout GET per fetch() call. No retries."""

    def __init__(
        self,
        url: Optional[str] = None,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.SENSOR_FEED_URL
        self.limit = limit or settings.SENSOR_FEED_LIMIT
        self.timeout = timeout or settings.SENSOR_FEED_TIMEOUT_SECONDS
        self.transport = transport

    async def fetch(self) -> list[SensorRecord]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                # httpx timeouts are per phase; this bounds the whole request
                response = await asyncio.wait_for(
                    client.get(self.url, params={"limit": self.limit}), self.timeout
                )
        except asyncio.TimeoutError as e:
            raise SensorFeedError(f"Sensor feed request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise SensorFeedError(f"Sensor feed request failed: {e}") from e

        if response.status_code != 200:
            raise SensorFeedError(f"Sensor feed returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise SensorFeedError(f"Sensor feed returned invalid JSON: {e}") from e

        records = parse_feed_payload(payload)
        if not records:
            raise SensorFeedError("Sensor feed returned no records")

        logger.info(f"[SENSORS] Fetched {len(records)} records from upstream feed")
        return records
