"""Tests for assembling the response payload from fetched sources."""

from datetime import datetime, timezone

from sailcast.data.frames import DailyFrame, HourlyFrame, MarineFrame
from sailcast.data.open_meteo import ForecastSources
from sailcast.forecast.pipeline import assemble_payload, marine_source_label
from sailcast.forecast.request import Coordinate
from conftest import build_marine_payload, build_weather_payload, hourly_times

COORD = Coordinate(-37.8676, 144.9741)
UPDATED = datetime(2026, 2, 10, 1, 30, tzinfo=timezone.utc)


def _sources(marine_payload=None):
    weather = build_weather_payload()
    return ForecastSources(
        hourly=HourlyFrame.from_payload(weather),
        daily=DailyFrame.from_payload(weather),
        marine=MarineFrame.from_payload(marine_payload) if marine_payload else None,
    )


def test_payload_shape():
    payload = assemble_payload(_sources(build_marine_payload()), COORD, updated=UPDATED)
    assert list(payload) == ["forecast", "source", "marine_source", "updated", "location"]
    assert payload["updated"] == "2026-02-10T01:30:00Z"
    assert payload["location"] == {"lat": -37.8676, "lon": 144.9741}
    assert len(payload["forecast"]) == 3


def test_marine_source_label():
    assert marine_source_label(_sources(build_marine_payload())) == "ECMWF WAM via Open-Meteo"
    assert marine_source_label(_sources()) == "Estimated from wind speed"
    short = build_marine_payload(times=hourly_times(dates=("2026-02-10",)))
    assert marine_source_label(_sources(short)) == "Estimated from wind speed"


def test_all_null_marine_heights_reported_as_estimated():
    empty = build_marine_payload(wave_height=None, wave_period=None)
    payload = assemble_payload(_sources(empty), COORD, updated=UPDATED)

    assert payload["marine_source"] == "Estimated from wind speed"
    # 18 km/h everywhere, so every hour carries the same estimate
    assert {h["wv"] for d in payload["forecast"] for h in d["hours"]} == {0.2}


def test_same_sources_same_forecast():
    sources = _sources(build_marine_payload(wave_height=lambda i: (i % 10) / 7))
    first = assemble_payload(sources, COORD)
    second = assemble_payload(sources, COORD)
    assert first["forecast"] == second["forecast"]
