"""Connector configuration: parameter descriptions, defaults, validation and parsing."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum


class ConfigError(ValueError):
    """Raised when a configuration map is invalid."""


class ParameterType(Enum):
    """Kind of value a configuration parameter holds."""

    STRING = "string"
    DURATION = "duration"


@dataclass(frozen=True)
class Parameter:
    """Description of one configuration parameter."""

    default: str
    description: str
    type: ParameterType = ParameterType.STRING
    required: bool = False
    inclusion: tuple[str, ...] = ()


@dataclass(frozen=True)
class Config:
    """Settings shared by the source and the destination."""

    per_mode: str = "PerGame"
    polling_period: timedelta = timedelta(minutes=5)


@dataclass(frozen=True)
class SourceConfig(Config):
    """Settings of the source."""

    foo: str = ""


@dataclass(frozen=True)
class DestinationConfig(Config):
    """Settings of the destination."""

    destination_config_param: str = "yes"


_UNIT_NANOSECONDS = {
    "ns": Decimal(1),
    "us": Decimal(1_000),
    "µs": Decimal(1_000),
    "μs": Decimal(1_000),
    "ms": Decimal(1_000_000),
    "s": Decimal(1_000_000_000),
    "m": Decimal(60_000_000_000),
    "h": Decimal(3_600_000_000_000),
}
_COMPONENT = r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"(?:{_COMPONENT})+")
_COMPONENT_RE = re.compile(_COMPONENT)
_MAX_NANOSECONDS = 2**63 - 1


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``5m``, ``1h30m`` or ``-1.5s``."""
    sign = 1
    rest = text
    if rest[:1] in ("+", "-"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest or not _DURATION_RE.fullmatch(rest):
        raise ConfigError(f"invalid duration {text!r}")
    try:
        total = sum(
            (Decimal(number) * _UNIT_NANOSECONDS[unit] for number, unit in _COMPONENT_RE.findall(rest)),
            Decimal(0),
        )
    except InvalidOperation as exc:
        raise ConfigError(f"invalid duration {text!r}") from exc
    if total > _MAX_NANOSECONDS:
        raise ConfigError(f"invalid duration {text!r}: out of range")
    return sign * timedelta(microseconds=int(total / 1000))


def config_parameters() -> dict[str, Parameter]:
    """Parameters understood by the source."""
    return {
        "per_mode": Parameter(
            default="PerGame",
            description=(
                "per_mode determines if the stats to be queried should be the "
                "per game average or the cumulative totals"
            ),
            type=ParameterType.STRING,
            required=True,
        ),
        "pollingPeriod": Parameter(
            default="5m",
            description="how often the connector will get data from the url",
            type=ParameterType.DURATION,
        ),
    }


def destination_parameters() -> dict[str, Parameter]:
    """Parameters understood by the destination."""
    return {
        "destinationConfigParam": Parameter(
            default="yes",
            description="destinationConfigParam must be either yes or no (defaults to yes).",
            type=ParameterType.STRING,
            inclusion=("yes", "no"),
        ),
        "global_config_param_name": Parameter(
            default="",
            description=(
                "global_config_param_name is named global_config_param_name "
                "and needs to be provided by the user."
            ),
            type=ParameterType.STRING,
            required=True,
        ),
    }


def _prepare(cfg: Mapping[str, str], parameters: Mapping[str, Parameter]) -> dict[str, str]:
    settings = dict(cfg)
    for name, parameter in parameters.items():
        value = settings.get(name) or parameter.default
        settings[name] = value
        if parameter.required and not value:
            raise ConfigError(f'error validating "{name}": required parameter is not provided')
        if parameter.inclusion and value not in parameter.inclusion:
            allowed = "|".join(parameter.inclusion)
            raise ConfigError(f'error validating "{name}": value {value!r} is not one of {allowed}')
        if parameter.type is ParameterType.DURATION and value:
            try:
                parse_duration(value)
            except ConfigError as exc:
                raise ConfigError(f'error validating "{name}": {exc}') from exc
    return settings


def _common(settings: Mapping[str, str]) -> dict[str, object]:
    values: dict[str, object] = {}
    if "per_mode" in settings:
        values["per_mode"] = settings["per_mode"]
    if settings.get("pollingPeriod"):
        try:
            values["polling_period"] = parse_duration(settings["pollingPeriod"])
        except ConfigError as exc:
            raise ConfigError(f"invalid config: {exc}") from exc
    return values


def parse_source_config(cfg: Mapping[str, str]) -> SourceConfig:
    """Validate a raw map, fill in defaults and build a SourceConfig."""
    settings = _prepare(cfg, config_parameters())
    values = _common(settings)
    if "foo" in settings:
        values["foo"] = settings["foo"]
    return SourceConfig(**values)


def parse_destination_config(cfg: Mapping[str, str]) -> DestinationConfig:
    """Validate a raw map, fill in defaults and build a DestinationConfig."""
    settings = _prepare(cfg, destination_parameters())
    values = _common(settings)
    values["destination_config_param"] = settings["destinationConfigParam"]
    return DestinationConfig(**values)