"""Destination that accepts configuration but writes nothing."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from .config import ConfigError, DestinationConfig, Parameter, destination_parameters, parse_destination_config
from .source import Record

logger = logging.getLogger(__name__)


class Destination:
    """Accepts records and discards them."""

    def __init__(self) -> None:
        self.config = DestinationConfig()
        self.is_open = False
        self.discarded = 0

    def parameters(self) -> dict[str, Parameter]:
        """Describe the parameters the destination accepts."""
        return destination_parameters()

    def configure(self, cfg: Mapping[str, str]) -> None:
        """Validate and store the configuration."""
        logger.info("Configuring Destination...")
        try:
            self.config = parse_destination_config(cfg)
        except ConfigError as exc:
            raise ConfigError(f"invalid config: {exc}") from exc

    def open(self) -> None:
        """Prepare to write records."""
        self.is_open = True

    def write(self, records: Sequence[Record]) -> int:
        """Discard the records; returns how many were written, which is always none."""
        self.discarded += len(records)
        return 0

    def teardown(self) -> None:
        """Mark the destination as closed."""
        self.is_open = False