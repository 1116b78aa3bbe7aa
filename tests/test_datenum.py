"""Tests for serial date to calendar conversion."""
from datetime import date, timedelta

import pytest

from meteoclient.core.constants import SERIAL_DATE_MAX_DAYS
from meteoclient.services.binary import (
    CalendarFields,
    DateRangeError,
    datevec,
    iso_time_str,
    to_iso8601,
)
from meteoclient.services.binary.datenum import is_leap_year


def serial_of(d: date) -> float:
    # datenum counts 0000-01-01 as day 1
    return float(d.toordinal() + 366)


class TestWholeDays:

    def test_reference_day(self):
        assert datevec(730486) == CalendarFields(2000, 1, 1, 0, 0, 0)
        assert to_iso8601(730486) == "2000-01-01T00:00:00Z"

    def test_feb_29_in_2000(self):
        fields = datevec(serial_of(date(2000, 1, 1)) + 59)
        assert (fields.year, fields.month, fields.day) == (2000, 2, 29)

    @pytest.mark.parametrize("year", [1900, 2100])
    def test_same_offset_is_march_1_in_century_years(self, year):
        fields = datevec(serial_of(date(year, 1, 1)) + 59)
        assert (fields.year, fields.month, fields.day) == (year, 3, 1)

    def test_last_day_of_leap_year(self):
        # The year estimate lands one year late here and must step back
        assert to_iso8601(serial_of(date(2000, 12, 31))) == "2000-12-31T00:00:00Z"

    def test_matches_proleptic_gregorian_calendar(self):
        d = date(1899, 12, 1)
        end = date(2101, 3, 1)
        while d < end:
            fields = datevec(serial_of(d))
            assert (fields.year, fields.month, fields.day) == (d.year, d.month, d.day), d
            d += timedelta(days=17)

    @pytest.mark.parametrize("d", [date(2024, 2, 29), date(2023, 3, 1), date(1970, 1, 1), date(2038, 1, 19)])
    def test_known_dates(self, d):
        assert to_iso8601(serial_of(d)) == d.strftime("%Y-%m-%dT00:00:00Z")


class TestTimeOfDay:

    def test_noon(self, serial_2000):
        assert to_iso8601(serial_2000 + 0.5) == "2000-01-01T12:00:00Z"

    def test_quarter_day_on_next_day(self, serial_2000):
        assert to_iso8601(serial_2000 + 1.25) == "2000-01-02T06:00:00Z"

    def test_hour_minute_second(self, serial_2000):
        frac = (13 * 3600 + 45 * 60 + 30) / 86400.0
        assert datevec(serial_2000 + frac) == CalendarFields(2000, 1, 1, 13, 45, 30)

    def test_rounding_carries_into_minute(self, serial_2000):
        assert to_iso8601(serial_2000 + 59.6 / 86400.0) == "2000-01-01T00:01:00Z"

    def test_rounding_carries_into_next_day(self, serial_2000):
        assert to_iso8601(serial_2000 + 86399.6 / 86400.0) == "2000-01-02T00:00:00Z"

    def test_rounding_down_stays_on_same_second(self, serial_2000):
        assert to_iso8601(serial_2000 + 10.4 / 86400.0) == "2000-01-01T00:00:10Z"


class TestEpoch:

    def test_zero_is_the_epoch_state(self):
        fields = datevec(0)
        assert fields == CalendarFields(0, 0, 0, 0, 0, 0)
        assert fields.is_epoch
        assert to_iso8601(0.0) == "0000-00-00T00:00:00Z"

    def test_epoch_keeps_time_of_day(self):
        assert datevec(0.5) == CalendarFields(0, 0, 0, 12, 0, 0)

    def test_epoch_has_no_datetime(self):
        with pytest.raises(ValueError):
            datevec(0).to_datetime()

    def test_to_datetime(self, serial_2000):
        dt = datevec(serial_2000 + 0.5).to_datetime()
        assert dt.isoformat() == "2000-01-01T12:00:00+00:00"


class TestRange:

    @pytest.mark.parametrize("value", [SERIAL_DATE_MAX_DAYS + 1, -(SERIAL_DATE_MAX_DAYS + 1), 1.2884901888e11])
    def test_out_of_range_is_rejected(self, value):
        with pytest.raises(DateRangeError) as info:
            datevec(value)
        assert info.value.value == value
        assert info.value.bound == SERIAL_DATE_MAX_DAYS

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_is_rejected(self, value):
        with pytest.raises(DateRangeError):
            to_iso8601(value)

    def test_bound_itself_is_accepted(self):
        fields = datevec(float(int(SERIAL_DATE_MAX_DAYS)))
        assert fields.year > 4000


def test_iso_time_str_is_zero_padded():
    assert iso_time_str(5, 1, 2, 3, 4, 5) == "0005-01-02T03:04:05Z"


@pytest.mark.parametrize(
    "year, leap",
    [(2000, True), (1900, False), (2100, False), (2024, True), (2023, False)],
)
def test_leap_rule(year, leap):
    assert is_leap_year(year) is leap
