from datetime import datetime, timedelta

import pytest
import responses

from nbastatsfeed.config import ConfigError, config_parameters
from nbastatsfeed.nba import BASE_URL, FetchError
from nbastatsfeed.source import RateLimiter, Source, record_key


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_teardown_source_no_open():
    source = Source()
    assert source.teardown() is None
    with pytest.raises(RuntimeError):
        source.read()


def test_record_key_format():
    assert record_key("PerGame", datetime(2024, 1, 2, 3, 4)) == "2024-01-02-0304_PerGame"


def test_parameters_match_config():
    assert Source().parameters() == config_parameters()


def test_configure_defaults():
    source = Source()
    source.configure({})
    assert source.config.per_mode == "PerGame"
    assert source.config.polling_period == timedelta(minutes=5)


def test_configure_invalid_period():
    with pytest.raises(ConfigError, match="invalid config"):
        Source().configure({"pollingPeriod": "soon"})


def test_rate_limiter_spacing():
    clock = FakeClock()
    limiter = RateLimiter(timedelta(seconds=10), clock=clock, sleep=clock.sleep)
    assert limiter.wait() == 0
    assert limiter.wait() == 10
    clock.now += 25
    assert limiter.wait() == 0
    assert clock.sleeps == [10]


def test_rate_limiter_zero_period_never_sleeps():
    clock = FakeClock()
    limiter = RateLimiter(timedelta(0), clock=clock, sleep=clock.sleep)
    for _ in range(3):
        assert limiter.wait() == 0
    assert clock.sleeps == []


def test_read_returns_record(mocked):
    body = b'{"resource": "leaguedashptstats", "resultSets": []}'
    mocked.add(responses.GET, BASE_URL, body=body, status=200)
    source = Source(clock=lambda: datetime(2024, 1, 2, 3, 4))
    source.configure({"per_mode": "Totals", "pollingPeriod": "0s"})
    source.open()
    record = source.read()
    assert record.payload == body
    assert record.key == b"2024-01-02-0304_Totals"
    assert record.position == record.key
    assert record.operation == "create"
    assert "PerMode=Totals" in mocked.calls[0].request.url


def test_read_waits_between_polls(mocked):
    mocked.add(responses.GET, BASE_URL, body=b"{}", status=200)
    clock = FakeClock()
    source = Source(monotonic=clock, sleep=clock.sleep)
    source.configure({"pollingPeriod": "1m"})
    source.open(None)
    source.read()
    source.read()
    assert clock.sleeps == [60.0]
    assert len(mocked.calls) == 2


def test_read_wraps_fetch_error(mocked):
    mocked.add(responses.GET, BASE_URL, body=b"", status=500)
    source = Source()
    source.configure({"pollingPeriod": "0s"})
    source.open()
    with pytest.raises(FetchError, match="error getting the weather data") as info:
        source.read()
    assert info.value.status_code == 500


def test_ack_accepts_position():
    assert Source().ack(b"2024-01-02-0304_PerGame") is None