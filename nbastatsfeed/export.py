"""Export the first table of the statistics response to a CSV file."""

from __future__ import annotations

import argparse
import logging
import math
from collections.abc import Sequence
from decimal import Decimal
from typing import Any, TextIO

import requests

from .nba import FetchError, ResultSet, fetch_speed_distance_stats, parse_response

logger = logging.getLogger(__name__)

_ID_COLUMNS = frozenset({0, 2})


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + int(exponent)
    exp = point - 1
    prefix = "-" if sign else ""
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{prefix}{digits}{'0' * (point - len(digits))}"
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_float(float(value))
    if isinstance(value, list):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        items = " ".join(f"{key}:{_format_value(value[key])}" for key in sorted(value))
        return f"map[{items}]"
    return str(value)


def _format_id(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.error("Error converting value to int: %r", value)
        return ""
    return str(int(value))


def format_row(row: Sequence[Any]) -> list[str]:
    """Render a row as strings; the player and team id columns become integers."""
    return [
        _format_id(value) if index in _ID_COLUMNS else _format_value(value)
        for index, value in enumerate(row)
    ]


def _quote(text: str) -> str:
    if not text:
        return text
    if text == "\\." or any(char in text for char in ',"\r\n') or text[0].isspace():
        return '"' + text.replace('"', '""') + '"'
    return text


def _write_line(stream: TextIO, values: Sequence[str]) -> None:
    stream.write(",".join(_quote(value) for value in values) + "\n")


def write_csv(result_set: ResultSet, stream: TextIO) -> int:
    """Write the headers and rows of a result set as CSV; return the rows written."""
    _write_line(stream, result_set.headers)
    for row in result_set.row_set:
        _write_line(stream, format_row(row))
    return len(result_set.row_set)


def export_stats(
    path: str,
    per_mode: str = "Totals",
    session: requests.Session | None = None,
) -> int:
    """Fetch the statistics and write their first table to ``path``; return the rows written."""
    response = parse_response(fetch_speed_distance_stats(per_mode, session))
    if not response.result_sets:
        raise ValueError("No result sets found.")
    with open(path, "w", newline="", encoding="utf-8") as stream:
        return write_csv(response.result_sets[0], stream)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Export player tracking statistics to CSV.")
    parser.add_argument("--per-mode", default="Totals", help="PerGame or Totals")
    parser.add_argument("--output", default="output-totals.csv", help="CSV file to write")
    args = parser.parse_args(argv)
    try:
        export_stats(args.output, args.per_mode)
    except FetchError as exc:
        print(exc)
        return 1
    except ValueError as exc:
        print(f"Error reading response: {exc}")
        return 1
    except OSError as exc:
        print(f"Error creating CSV file: {exc}")
        return 1
    print("CSV file created successfully.")
    return 0