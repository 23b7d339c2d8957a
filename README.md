# nbastatsfeed

`nbastatsfeed` fetches NBA player tracking statistics of the *speed and distance* kind from the public stats endpoint. You can use it in two ways:

* as a **polling source**. It produces one record per polling period, and each record holds the raw JSON response.
* as a **CSV exporter**. It writes the first result set of a response to a file.

## Installation

```
pip install nbastatsfeed
```

To install the test dependencies as well:

```
pip install "nbastatsfeed[test]"
```

## Configuration

The source and the destination each take a plain `dict[str, str]` of settings. If a key is missing or empty, its default is used.

| key             | default   | meaning                                                               |
|-----------------|-----------|-----------------------------------------------------------------------|
| `per_mode`      | `PerGame` | `PerGame` for per-game averages, `Totals` for cumulative totals        |
| `pollingPeriod` | `5m`      | how often the source fetches data; a duration such as `30s`, `1m30s` or `1.5h` |

The source also reads an optional key `foo` and stores it as `SourceConfig.foo`.

The destination has two further keys:

* `destinationConfigParam` must be `yes` or `no`. It defaults to `yes`.
* `global_config_param_name` is required.

A configuration that is not valid raises `nbastatsfeed.config.ConfigError`, which is a subclass of `ValueError`. A missing required key raises it, and so does a value that is not allowed or a duration that cannot be read.

Durations are parsed by `nbastatsfeed.config.parse_duration`. It understands the units `ns`, `us`, `ms`, `s`, `m` and `h`, decimal fractions, a leading sign, and a bare `0`. It returns a `datetime.timedelta`.

`Source.parameters()` and `Destination.parameters()` describe the accepted keys as `Parameter` objects. `Parameter` records the default, the description, the type, whether the key is required and the allowed values.

## Using the source

```python
from nbastatsfeed.connector import Connector

connector = Connector()
source = connector.new_source()
source.configure({"per_mode": "Totals", "pollingPeriod": "5m"})
source.open(None)

record = source.read()        # first read is immediate; later reads wait out the polling period
print(record.key)             # e.g. b"2024-01-15-1830_Totals"
print(record.payload[:80])    # raw JSON bytes from the stats endpoint

source.ack(record.position)
source.teardown()
```

Calling `read()` before `open()`, or after `teardown()`, raises `RuntimeError`.

Each record's key and position have the form `YYYY-MM-DD-HHMM_<per_mode>`. You can build one yourself with `nbastatsfeed.source.record_key(per_mode, now)`.

The polling interval is enforced by `nbastatsfeed.source.RateLimiter`. It allows one event per period. `RateLimiter.wait()` returns the number of seconds it slept.

`Connector(session=...)` accepts a `requests.Session`, which the sources it creates use for their requests.

## The destination

`Destination` validates and stores its configuration. `write(records)` discards the records and always returns `0`. It keeps a running count of what it discarded in `Destination.discarded`.

## Low-level access

```python
from nbastatsfeed.nba import StatsQueryParams, build_stats_url, fetch_speed_distance_stats, parse_response

url = build_stats_url(StatsQueryParams(per_mode="Totals"))
body = fetch_speed_distance_stats("PerGame")
data = parse_response(body)
print(data.result_sets[0].headers)
```

`StatsQueryParams` holds every query parameter of the endpoint, with that parameter's default value. `build_stats_url` encodes the parameters with their keys in sorted order.

If the request fails, or the response status is not 200, `fetch_speed_distance_stats` raises `nbastatsfeed.nba.FetchError`. For a bad status, the error's `status_code` attribute holds the code. If the JSON does not have the expected shape, `parse_response` raises `ValueError`.

## Exporting to CSV

To fetch the season totals and write them to `output-totals.csv` in the current directory, run:

```
nbastatsfeed-export
```

The command has two options:

* `--per-mode` selects `PerGame` or `Totals`. The default is `Totals`.
* `--output` sets the file to write.

The command prints `CSV file created successfully.` and exits with status 0 when it succeeds. If it fails, it prints the error and exits with status 1.

In the exported file, the first and third columns (`PLAYER_ID` and `TEAM_ID`) are written as whole numbers. If a value in those columns is not a number, it is left empty. Every other value is written in its plain textual form.

From Python:

```python
from nbastatsfeed.export import export_stats, format_row, write_csv

rows_written = export_stats("output-totals.csv", "Totals")
```

If the response contains no result sets, `export_stats` raises `ValueError`.

## Specification

`nbastatsfeed.spec.specification()` returns the connector's name (`nba-stats`) and version as a `Specification`.

## What it does not do

* The destination stores nothing: records passed to it are dropped.
* The package does not run as a plugin server or a long-running service. To drive a source, call its methods from your own code.
* The source does not compare one response with the previous one. Every read produces a new record, even when the data has not changed.