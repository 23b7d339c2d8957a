"""Source that polls the statistics endpoint and turns each response into a record."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta

import requests

from .config import ConfigError, Parameter, SourceConfig, config_parameters, parse_source_config
from .nba import FetchError, fetch_speed_distance_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Record:
    """A record produced by the source."""

    position: bytes
    key: bytes
    payload: bytes
    metadata: dict[str, str] = field(default_factory=dict)
    operation: str = "create"


def record_key(per_mode: str, now: datetime | None = None) -> str:
    """Key of a record: the minute it was fetched followed by the per-mode."""
    moment = now if now is not None else datetime.now()
    return f"{moment:%Y-%m-%d-%H%M}_{per_mode}"


class RateLimiter:
    """Allows one event per period, with room for a single event at once."""

    def __init__(
        self,
        period: timedelta,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._next_free: float | None = None

    def wait(self) -> float:
        """Block until the next event is allowed; return the seconds waited."""
        interval = self.period.total_seconds()
        if interval <= 0:
            return 0.0
        now = self._clock()
        start = now if self._next_free is None else max(now, self._next_free)
        self._next_free = start + interval
        delay = start - now
        if delay > 0:
            self._sleep(delay)
        return delay


class Source:
    """Produces one record with the raw statistics on every polling period."""

    def __init__(
        self,
        session: requests.Session | None = None,
        clock: Callable[[], datetime] = datetime.now,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = SourceConfig()
        self._session = session
        self._clock = clock
        self._monotonic = monotonic
        self._sleep = sleep
        self._limiter: RateLimiter | None = None

    def parameters(self) -> dict[str, Parameter]:
        """Describe the parameters the source accepts."""
        return config_parameters()

    def configure(self, cfg: Mapping[str, str]) -> None:
        """Validate and store the configuration."""
        logger.info("Configuring Source...")
        try:
            self.config = parse_source_config(cfg)
        except ConfigError as exc:
            raise ConfigError(f"invalid config: {exc}") from exc

    def open(self, position: bytes | None = None) -> None:
        """Prepare to produce records."""
        self._limiter = RateLimiter(self.config.polling_period, self._monotonic, self._sleep)

    def read(self) -> Record:
        """Wait for the polling period, then fetch and return a new record."""
        if self._limiter is None:
            raise RuntimeError("source is not open")
        self._limiter.wait()
        logger.info("Waiting for %s before next request for data", self.config.polling_period)
        try:
            return self._get_record()
        except FetchError as exc:
            raise FetchError(f"error getting the weather data: {exc}", exc.status_code) from exc

    def ack(self, position: bytes) -> None:
        """Acknowledge that a record was processed."""
        logger.debug("got ack, position=%r", position)

    def teardown(self) -> None:
        """Drop the rate limiter; the source must be opened again before reading."""
        self._limiter = None

    def _get_record(self) -> Record:
        data = fetch_speed_distance_stats(self.config.per_mode, self._session)
        logger.info("Successfully fetched the NBA Speed and Distance data...")
        key = record_key(self.config.per_mode, self._clock()).encode()
        return Record(position=key, key=key, payload=data)