"""
Tests for day grouping and the derived day descriptions.

Covers:
- Compass mapping and wraparound
- Operating (05-22) and daylight (08-18) windows
- Wind, sky and rain descriptions
- Day labels and empty days
"""

import pytest

from sailcast.data.frames import DailyFrame, HourlyFrame
from sailcast.forecast.summary import (
    HourRecord,
    build_day_summaries,
    compass_point,
    day_label,
    describe_rain,
    describe_sky,
    describe_wind,
    group_hours,
    is_thunderstorm,
    summarize_day,
)
from sailcast.forecast.waves import merge_waves
from conftest import DATES, build_weather_payload, hourly_times


def _record(h, ws=18, wd=225, cl=40, ts=False):
    return HourRecord(h=h, t=20, ws=ws, wd=wd, gs=28, pr=0.0, cl=cl, wv=0.2, wp=5, ts=ts)


def _summaries(payload):
    hourly = HourlyFrame.from_payload(payload)
    daily = DailyFrame.from_payload(payload)
    return build_day_summaries(hourly, daily, merge_waves(hourly, None))


# ---------------------------------------------------------------------------
# Compass
# ---------------------------------------------------------------------------

class TestCompassPoint:

    @pytest.mark.parametrize("degrees,expected", [
        (0, "N"),
        (11.25, "NNE"),
        (45, "NE"),
        (90, "E"),
        (180, "S"),
        (225, "SW"),
        (270, "W"),
        (348.7, "NNW"),
        (348.75, "N"),
        (360, "N"),
    ])
    def test_mapping(self, degrees, expected):
        assert compass_point(degrees) == expected


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------

class TestDescribeSky:

    @pytest.mark.parametrize("cloud,expected", [
        (100, "Cloudy"),
        (75.1, "Cloudy"),
        (75, "Mostly cloudy"),
        (51, "Mostly cloudy"),
        (50, "Partly cloudy"),
        (26, "Partly cloudy"),
        (25, "Sunny"),
        (0, "Sunny"),
    ])
    def test_thresholds(self, cloud, expected):
        assert describe_sky(cloud) == expected


class TestDescribeRain:

    @pytest.mark.parametrize("precip,expected", [
        (0, ""),
        (None, ""),
        (0.5, ""),
        (0.6, " Chance of showers."),
        (2, " Chance of showers."),
        (2.1, " Showers likely."),
        (5, " Showers likely."),
        (5.5, " Rain likely."),
        (10, " Rain likely."),
        (10.1, " Heavy rain."),
    ])
    def test_thresholds(self, precip, expected):
        assert describe_rain(precip) == expected


class TestDescribeWind:

    def test_range_and_midpoint_direction(self):
        hours = [_record(h, ws=10 + h, wd=h * 10) for h in range(5, 23)]
        # Daylight is 08..18 (11 records); the middle one is 13:00 -> 130 deg
        # Speeds 18..28 km/h -> 9.7..15.1 kt
        assert describe_wind(hours) == "SE 10–15 kts"

    def test_ignores_hours_outside_daylight(self):
        hours = [_record(5, ws=100), _record(9, ws=20), _record(10, ws=20), _record(20, ws=90)]
        assert describe_wind(hours) == "SW 11–11 kts"

    def test_empty_without_daylight_hours(self):
        assert describe_wind([]) == ""
        assert describe_wind([_record(6), _record(19)]) == ""


class TestSummarizeDay:

    def test_sky_and_rain(self):
        hours = [_record(h, cl=40) for h in range(8, 19)]
        assert summarize_day(hours, 6.0) == "Partly cloudy. Rain likely."

    def test_cloud_average_uses_daylight_only(self):
        hours = [_record(5, cl=100), _record(12, cl=10), _record(22, cl=100)]
        assert summarize_day(hours, 0) == "Sunny."

    def test_empty_without_daylight_hours(self):
        assert summarize_day([_record(6)], 20.0) == ""


def test_thunderstorm_codes():
    assert is_thunderstorm(95)
    assert is_thunderstorm(99)
    assert not is_thunderstorm(94)
    assert not is_thunderstorm(None)


class TestDayLabel:

    def test_relative_labels(self):
        assert day_label("2026-02-10", 0) == "Today"
        assert day_label("2026-02-11", 1) == "Tomorrow"

    def test_weekday_and_day_month(self):
        assert day_label("2026-02-12", 2) == "Thu 12/2"
        assert day_label("2026-03-01", 5) == "Sun 1/3"


# ---------------------------------------------------------------------------
# Grouping and full summaries
# ---------------------------------------------------------------------------

class TestGroupHours:

    def test_every_date_grouped_and_windowed(self):
        hourly = HourlyFrame.from_payload(build_weather_payload())
        grouped = group_hours(hourly, merge_waves(hourly, None))
        assert list(grouped) == list(DATES)
        for records in grouped.values():
            assert [r.h for r in records] == list(range(5, 23))

    def test_night_only_date_has_empty_group(self):
        times = hourly_times(dates=("2026-02-10",), hours=[0, 1, 2, 3, 4, 23])
        hourly = HourlyFrame.from_payload(build_weather_payload(times=times))
        grouped = group_hours(hourly, merge_waves(hourly, None))
        assert grouped == {"2026-02-10": []}


class TestBuildDaySummaries:

    def test_one_summary_per_daily_date(self):
        summaries = _summaries(build_weather_payload())
        assert [s.date for s in summaries] == list(DATES)
        assert [s.label for s in summaries] == ["Today", "Tomorrow", "Thu 12/2"]

    def test_no_hour_outside_operating_window(self):
        for day in _summaries(build_weather_payload()):
            assert all(5 <= r.h <= 22 for r in day.hours)

    def test_rounding(self):
        payload = build_weather_payload(
            temperature=19.5,
            wind_speed=17.6,
            wind_direction=224.4,
            wind_gusts=27.5,
            precipitation=0.26,
            cloud_cover=39.5,
            temp_max=24.5,
            temp_min=13.4,
            precip_sum=3.26,
        )
        day = _summaries(payload)[0]
        assert (day.temp_max, day.temp_min, day.precip_sum) == (25, 13, 3.3)
        record = day.hours[0]
        assert (record.t, record.ws, record.wd, record.gs, record.pr, record.cl) == (20, 18, 224, 28, 0.3, 40)

    def test_precipitation_halves_round_up(self):
        day = _summaries(build_weather_payload(precipitation=0.25, precip_sum=0.25))[0]
        assert day.precip_sum == 0.3
        assert all(r.pr == 0.3 for r in day.hours)

    def test_daily_date_without_hours(self):
        payload = build_weather_payload(
            times=hourly_times(dates=DATES[:1]),
            daily_dates=DATES[:2],
        )
        summaries = _summaries(payload)
        assert len(summaries) == 2
        empty = summaries[1]
        assert empty.hours == []
        assert empty.wind_desc == ""
        assert empty.summary == ""

    def test_thunderstorm_flag_per_hour(self):
        times = hourly_times(dates=DATES[:1])
        codes = [95 if h == 15 else 3 for h in range(24)]
        day = _summaries(build_weather_payload(times=times, weather_code=codes))[0]
        flagged = [r.h for r in day.hours if r.ts]
        assert flagged == [15]

    def test_missing_weather_code_means_no_thunderstorm(self):
        day = _summaries(build_weather_payload(weather_code=None))[0]
        assert not any(r.ts for r in day.hours)

    def test_null_values_do_not_raise(self):
        times = hourly_times(dates=DATES[:1])
        payload = build_weather_payload(
            times=times,
            temperature=None,
            wind_speed=None,
            cloud_cover=None,
            temp_max=None,
            temp_min=None,
            precip_sum=None,
        )
        day = _summaries(payload)[0]
        assert day.temp_max is None
        assert day.precip_sum == 0.0
        assert day.hours[0].t == 0
        assert day.wind_desc == "SW 0–0 kts"

    def test_to_dict_keys(self):
        data = _summaries(build_weather_payload())[0].to_dict()
        assert list(data) == [
            "date", "label", "tempMax", "tempMin", "precipSum", "windDesc", "summary", "hours",
        ]
        assert list(data["hours"][0]) == ["h", "t", "ws", "wd", "gs", "pr", "cl", "wv", "wp", "ts"]

    def test_idempotent(self):
        payload = build_weather_payload(wind_speed=lambda i: (i * 7) % 40)
        first = [d.to_dict() for d in _summaries(payload)]
        second = [d.to_dict() for d in _summaries(payload)]
        assert first == second
