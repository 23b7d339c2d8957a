"""Querying the league player-tracking statistics endpoint."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from typing import Any
from urllib.parse import urlencode

import requests

logger = logging.getLogger(__name__)

BASE_URL = "https://stats.nba.com/stats/leaguedashptstats"
REQUEST_TIMEOUT = 30
REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:72.0) Gecko/20100101 Firefox/72.0",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.5",
    "x-nba-stats-origin": "stats",
    "x-nba-stats-token": "true",
    "Connection": "keep-alive",
    "Referer": "https://stats.nba.com/",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}


class FetchError(Exception):
    """Raised when the statistics could not be fetched."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _query(name: str, default: Any = "") -> Any:
    return field(default=default, metadata={"query": name})


@dataclass
class StatsQueryParams:
    """Query string parameters of the statistics endpoint."""

    college: str = _query("College")
    conference: str = _query("Conference")
    country: str = _query("Country")
    date_from: str = _query("DateFrom")
    date_to: str = _query("DateTo")
    division: str = _query("Division")
    draft_pick: str = _query("DraftPick")
    draft_year: str = _query("DraftYear")
    game_scope: str = _query("GameScope")
    height: str = _query("Height")
    ist_round: str = _query("ISTRound")
    last_n_games: int = _query("LastNGames", 0)
    league_id: str = _query("LeagueID", "00")
    location: str = _query("Location")
    month: int = _query("Month", 0)
    opponent_team_id: int = _query("OpponentTeamID", 0)
    outcome: str = _query("Outcome")
    po_round: int = _query("PORound", 0)
    per_mode: str = _query("PerMode", "PerGame")
    player_experience: str = _query("PlayerExperience")
    player_or_team: str = _query("PlayerOrTeam", "Player")
    player_position: str = _query("PlayerPosition")
    pt_measure_type: str = _query("PtMeasureType", "SpeedDistance")
    season: str = _query("Season", "2023-24")
    season_segment: str = _query("SeasonSegment")
    season_type: str = _query("SeasonType", "Regular Season")
    starter_bench: str = _query("StarterBench")
    team_id: int = _query("TeamID", 0)
    vs_conference: str = _query("VsConference")
    vs_division: str = _query("VsDivision")
    weight: str = _query("Weight")


@dataclass
class ResultSet:
    """One table of the response: headers and rows."""

    name: str = ""
    headers: list[str] = field(default_factory=list)
    row_set: list[list[Any]] = field(default_factory=list)


@dataclass
class ResponseData:
    """Decoded body of a statistics response."""

    resource: str = ""
    parameters: Any = None
    result_sets: list[ResultSet] = field(default_factory=list)


def build_stats_url(params: StatsQueryParams) -> str:
    """Build the request URL, with the query keys in sorted order."""
    pairs = sorted((f.metadata["query"], str(getattr(params, f.name))) for f in fields(params))
    return f"{BASE_URL}?{urlencode(pairs)}"


def _expect(value: Any, kind: type, what: str, default: Any) -> Any:
    if value is None:
        return default
    if not isinstance(value, kind):
        raise ValueError(f"{what}: expected {kind.__name__}, got {type(value).__name__}")
    return value


def _parse_result_set(raw: Any) -> ResultSet:
    raw = _expect(raw, dict, "result set", {})
    headers = _expect(raw.get("headers"), list, "headers", [])
    if not all(isinstance(header, str) for header in headers):
        raise ValueError("headers: expected a list of strings")
    rows = [_expect(row, list, "row", []) for row in _expect(raw.get("rowSet"), list, "rowSet", [])]
    return ResultSet(
        name=_expect(raw.get("name"), str, "name", ""),
        headers=list(headers),
        row_set=rows,
    )


def parse_response(body: bytes | str) -> ResponseData:
    """Decode a JSON response body into a ResponseData."""
    data = json.loads(body)
    if data is None:
        return ResponseData()
    data = _expect(data, dict, "response", {})
    raw_sets = _expect(data.get("resultSets"), list, "resultSets", [])
    return ResponseData(
        resource=_expect(data.get("resource"), str, "resource", ""),
        parameters=data.get("parameters"),
        result_sets=[_parse_result_set(raw) for raw in raw_sets],
    )


def _download(session: requests.Session, url: str) -> bytes:
    try:
        response = session.get(url, headers=REQUEST_HEADERS, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise FetchError(f"request failed: {exc}") from exc
    with response:
        if response.status_code != requests.codes.ok:
            raise FetchError(f"error: status code {response.status_code}", response.status_code)
        try:
            return response.content
        except requests.RequestException as exc:
            raise FetchError(f"reading response failed: {exc}") from exc


def fetch_speed_distance_stats(per_mode: str, session: requests.Session | None = None) -> bytes:
    """Fetch the speed and distance statistics and return the raw body."""
    url = build_stats_url(StatsQueryParams(per_mode=per_mode))
    logger.info("url: %s", url)
    if session is None:
        with requests.Session() as own_session:
            return _download(own_session, url)
    return _download(session, url)