import json
from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses

from nbastatsfeed.nba import (
    BASE_URL,
    FetchError,
    ResponseData,
    ResultSet,
    StatsQueryParams,
    build_stats_url,
    fetch_speed_distance_stats,
    parse_response,
)

SAMPLE = {
    "resource": "leaguedashptstats",
    "parameters": {"PerMode": "PerGame"},
    "resultSets": [
        {
            "name": "LeagueDashPtStats",
            "headers": ["PLAYER_ID", "PLAYER_NAME", "TEAM_ID"],
            "rowSet": [[101.0, "Someone", 7.0], [102.0, "Another", 8.0]],
        }
    ],
}


def _query(url):
    return parse_qs(urlsplit(url).query, keep_blank_values=True)


def test_default_params():
    params = StatsQueryParams()
    assert params.league_id == "00"
    assert params.per_mode == "PerGame"
    assert params.player_or_team == "Player"
    assert params.pt_measure_type == "SpeedDistance"
    assert params.season == "2023-24"
    assert params.season_type == "Regular Season"
    assert params.team_id == 0


def test_build_url_default_values():
    url = build_stats_url(StatsQueryParams())
    assert url.startswith(BASE_URL + "?")
    query = _query(url)
    assert len(query) == 31
    assert query["LeagueID"] == ["00"]
    assert query["PerMode"] == ["PerGame"]
    assert query["Season"] == ["2023-24"]
    assert query["SeasonType"] == ["Regular Season"]
    assert query["LastNGames"] == ["0"]
    assert query["College"] == [""]


def test_build_url_keys_sorted():
    keys = [pair.split("=", 1)[0] for pair in urlsplit(build_stats_url(StatsQueryParams())).query.split("&")]
    assert keys == sorted(keys)


def test_build_url_encodes_space_as_plus():
    assert "SeasonType=Regular+Season" in build_stats_url(StatsQueryParams())


def test_build_url_custom_values():
    query = _query(build_stats_url(StatsQueryParams(per_mode="Totals", team_id=5, college="A&M")))
    assert query["PerMode"] == ["Totals"]
    assert query["TeamID"] == ["5"]
    assert query["College"] == ["A&M"]


def test_parse_response():
    data = parse_response(json.dumps(SAMPLE).encode())
    assert data.resource == "leaguedashptstats"
    assert data.parameters == {"PerMode": "PerGame"}
    assert data.result_sets == [
        ResultSet(
            name="LeagueDashPtStats",
            headers=["PLAYER_ID", "PLAYER_NAME", "TEAM_ID"],
            row_set=[[101.0, "Someone", 7.0], [102.0, "Another", 8.0]],
        )
    ]


def test_parse_response_missing_fields():
    assert parse_response("{}") == ResponseData()


def test_parse_response_null():
    assert parse_response("null").result_sets == []


@pytest.mark.parametrize("body", ["not json", "[1, 2]", '{"resultSets": 3}', '{"resultSets": [{"headers": [1]}]}'])
def test_parse_response_rejects_bad_bodies(body):
    with pytest.raises(ValueError):
        parse_response(body)


def test_fetch_returns_body_and_sends_headers():
    body = json.dumps(SAMPLE).encode()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE_URL, body=body, status=200)
        result = fetch_speed_distance_stats("Totals")
        request = rsps.calls[0].request
    assert result == body
    assert _query(request.url)["PerMode"] == ["Totals"]
    assert request.headers["x-nba-stats-token"] == "true"
    assert request.headers["Referer"] == "https://stats.nba.com/"


def test_fetch_with_given_session():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE_URL, body=b"{}", status=200)
        with requests.Session() as session:
            result = fetch_speed_distance_stats("PerGame", session)
    assert parse_response(result) == ResponseData()


def test_fetch_bad_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE_URL, body=b"oops", status=500)
        with pytest.raises(FetchError) as info:
            fetch_speed_distance_stats("PerGame")
    assert info.value.status_code == 500


def test_fetch_connection_error():
    with responses.RequestsMock(assert_all_requests_are_fired=False):
        with pytest.raises(FetchError, match="request failed"):
            fetch_speed_distance_stats("PerGame")