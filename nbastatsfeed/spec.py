"""Connector specification."""

from __future__ import annotations

from dataclasses import dataclass

VERSION = "v0.1.0"


@dataclass(frozen=True)
class Specification:
    """Name, description and version of the connector."""

    name: str
    summary: str
    description: str
    version: str
    author: str


def specification() -> Specification:
    """Return the connector's specification."""
    return Specification(
        name="nba-stats",
        summary="<describe your connector>",
        description="<describe your connector in detail>",
        version=VERSION,
        author="<your name>",
    )