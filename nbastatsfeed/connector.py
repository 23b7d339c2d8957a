"""Entry point bundling the connector's constructors."""

from __future__ import annotations

from dataclasses import dataclass

import requests

from .destination import Destination
from .source import Source
from .spec import Specification, specification


@dataclass(frozen=True)
class Connector:
    """Creates the source, the destination and the specification."""

    session: requests.Session | None = None

    def new_source(self) -> Source:
        """Create a new, unconfigured source."""
        return Source(session=self.session)

    def new_destination(self) -> Destination:
        """Create a new, unconfigured destination."""
        return Destination()

    def new_specification(self) -> Specification:
        """Return the connector's specification."""
        return specification()


CONNECTOR = Connector()