"""Tests for request parsing, timestamp generation and output shaping in domain/rate_series.py."""

import math
from datetime import UTC, datetime, timedelta

import pytest

from domain.constants import SERIES_WINDOW_DAYS, SUPPORTED_PAIRS, TIMEZONE_OFFSET_HOURS
from domain.enums import ChartFormat, CurrencyPair, SampleStatus
from domain.rate_series import (
    InvalidChartRequestError,
    InvalidDateError,
    SeriesEntry,
    UnsupportedPairError,
    build_candidate_timestamps,
    chronological,
    chunked,
    coerce_rate,
    format_anchor_label,
    format_axis_label,
    parse_anchor,
    parse_pair,
    parse_series_request,
    strip_format_suffix,
    to_timestamp,
)

# ---------------------------------------------------------------------------
# parse_pair
# ---------------------------------------------------------------------------


class TestParsePair:
    @pytest.mark.parametrize("token", SUPPORTED_PAIRS)
    def test_should_accept_every_supported_pair(self, token):
        assert parse_pair(token) == CurrencyPair(token)

    @pytest.mark.parametrize("token", ["xyz_jpy", "BTC_JPY", "btc_usd", ""])
    def test_should_reject_pair_outside_allow_list(self, token):
        with pytest.raises(UnsupportedPairError):
            parse_pair(token)

    def test_allow_list_should_match_enum(self):
        assert set(SUPPORTED_PAIRS) == {p.value for p in CurrencyPair}
        assert len(SUPPORTED_PAIRS) == 8


# ---------------------------------------------------------------------------
# strip_format_suffix
# ---------------------------------------------------------------------------


class TestStripFormatSuffix:
    def test_should_select_svg_for_svg_suffix(self):
        assert strip_format_suffix("2024-01-31.svg") == ("2024-01-31", ChartFormat.SVG)

    def test_should_select_png_for_png_suffix(self):
        assert strip_format_suffix("2024-01-31.png") == ("2024-01-31", ChartFormat.PNG)

    def test_should_default_to_png_without_suffix(self):
        assert strip_format_suffix("2024-01-31") == ("2024-01-31", ChartFormat.PNG)

    def test_should_keep_unknown_suffix_in_date_part(self):
        # .jpg is not stripped, so the date part stays unparseable
        assert strip_format_suffix("2024-01-31.jpg") == (
            "2024-01-31.jpg",
            ChartFormat.PNG,
        )


# ---------------------------------------------------------------------------
# parse_anchor
# ---------------------------------------------------------------------------


class TestParseAnchor:
    def test_should_shift_calendar_date_by_fixed_offset(self):
        anchor = parse_anchor("2024-01-31")
        assert anchor == datetime(2024, 1, 30, 15, 0, tzinfo=UTC)
        assert TIMEZONE_OFFSET_HOURS == 9

    def test_should_convert_aware_datetime_to_utc_before_shift(self):
        anchor = parse_anchor("2024-03-10T12:30:00+09:00")
        assert anchor == datetime(2024, 3, 9, 18, 30, tzinfo=UTC)

    @pytest.mark.parametrize(
        "token", ["not-a-date", "", "2024-02-30", "2024-13-01", "yesterday"]
    )
    def test_should_reject_unparseable_token(self, token):
        with pytest.raises(InvalidDateError):
            parse_anchor(token)

    @pytest.mark.parametrize("token", ["2024/01/31", "2024/1/31", "2024-1-31"])
    def test_should_accept_slash_and_unpadded_dates(self, token):
        assert parse_anchor(token) == parse_anchor("2024-01-31")

    @pytest.mark.parametrize("token", ["2024/02/30", "Jan 31 2024", "31/01/2024"])
    def test_should_reject_invalid_fallback_dates(self, token):
        with pytest.raises(InvalidDateError):
            parse_anchor(token)

    def test_should_reject_window_reaching_before_year_one(self):
        with pytest.raises(InvalidDateError):
            parse_anchor("0001-01-10")

    def test_invalid_date_should_be_an_invalid_request(self):
        assert issubclass(InvalidDateError, InvalidChartRequestError)
        assert issubclass(UnsupportedPairError, InvalidChartRequestError)


class TestParseSeriesRequest:
    def test_should_combine_pair_anchor_and_format(self):
        request = parse_series_request("mona_jpy", "2024-01-31.svg")

        assert request.pair is CurrencyPair.MONA_JPY
        assert request.anchor == datetime(2024, 1, 30, 15, 0, tzinfo=UTC)
        assert request.chart_format is ChartFormat.SVG

    def test_should_check_pair_before_date(self):
        with pytest.raises(UnsupportedPairError):
            parse_series_request("xyz_jpy", "not-a-date")


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


class TestBuildCandidateTimestamps:
    def test_should_return_31_daily_timestamps_most_recent_first(self):
        anchor = parse_anchor("2024-01-31")

        timestamps = build_candidate_timestamps(anchor)

        assert len(timestamps) == SERIES_WINDOW_DAYS == 31
        assert timestamps[0] == "2024-01-30T15:00:00.000Z"
        assert timestamps[1] == "2024-01-29T15:00:00.000Z"
        assert timestamps[-1] == "2023-12-31T15:00:00.000Z"
        assert len(set(timestamps)) == 31

    def test_should_step_back_exactly_one_day(self):
        anchor = parse_anchor("2024-03-01")

        timestamps = build_candidate_timestamps(anchor)

        instants = [datetime.fromisoformat(ts) for ts in timestamps]
        assert all(a - b == timedelta(days=1) for a, b in zip(instants, instants[1:]))
        # leap day is included
        assert timestamps[1] == "2024-02-28T15:00:00.000Z"
        assert timestamps[0] == "2024-02-29T15:00:00.000Z"

    def test_to_timestamp_should_use_millisecond_precision_and_z(self):
        instant = datetime(2024, 1, 2, 3, 4, 5, 678_901, tzinfo=UTC)
        assert to_timestamp(instant) == "2024-01-02T03:04:05.678Z"


class TestChunked:
    def test_should_split_31_items_into_batches_of_10(self):
        sizes = [len(batch) for batch in chunked(list(range(31)), 10)]
        assert sizes == [10, 10, 10, 1]

    def test_should_yield_nothing_for_empty_input(self):
        assert list(chunked([], 10)) == []


# ---------------------------------------------------------------------------
# Output shaping
# ---------------------------------------------------------------------------


class TestOutputShaping:
    def test_axis_label_should_use_local_calendar_day(self):
        assert format_axis_label("2024-01-30T15:00:00.000Z") == "1/31"
        assert format_axis_label("2023-12-31T15:00:00.000Z") == "1/1"

    def test_anchor_label_should_show_requested_date(self):
        assert format_anchor_label(parse_anchor("2024-01-31")) == "2024/1/31"

    def test_coerce_rate_should_parse_decimal_string(self):
        assert coerce_rate("7000000") == 7_000_000.0
        assert coerce_rate("6543210.5") == 6_543_210.5

    @pytest.mark.parametrize("rate", [None, "abc"])
    def test_coerce_rate_should_return_nan_for_missing_or_garbage(self, rate):
        assert math.isnan(coerce_rate(rate))

    def test_chronological_should_reverse_generation_order(self):
        series = {
            "2024-01-30T15:00:00.000Z": SeriesEntry("3", SampleStatus.CACHED),
            "2024-01-29T15:00:00.000Z": SeriesEntry(None, SampleStatus.UNRESOLVED),
            "2024-01-28T15:00:00.000Z": SeriesEntry("1", SampleStatus.FETCHED),
        }

        ordered = chronological(series)

        assert [ts for ts, _ in ordered] == [
            "2024-01-28T15:00:00.000Z",
            "2024-01-29T15:00:00.000Z",
            "2024-01-30T15:00:00.000Z",
        ]
