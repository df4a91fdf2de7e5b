"""Unit tests for date/time parsing and formatting."""
from datetime import datetime, timedelta, timezone

import pytest

from processor.temporal import EVENT_DURATION, end_instant, format_instant, parse_instant


class TestParseInstant:
    """Test cases for parse_instant."""

    def test_fixture_date_and_time(self):
        """Test a fixture date and time parse to a UTC instant."""
        instant = parse_instant('28/10/25', '20:30')

        assert instant == datetime(2025, 10, 28, 20, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize('date_str, time_str, expected', [
        ('28/10/25', '20:30', '20251028T203000Z'),
        ('01/01/00', '00:00', '20000101T000000Z'),
        ('31/12/99', '23:59', '20991231T235900Z'),
        ('5/3/26', '9:05', '20260305T090500Z'),
        ('29/02/28', '19:00', '20280229T190000Z'),
    ])
    def test_round_trip_to_ical_format(self, date_str, time_str, expected):
        """Test parsed instants format to the iCalendar UTC form."""
        assert format_instant(parse_instant(date_str, time_str)) == expected

    @pytest.mark.parametrize('date_str, time_str', [
        ('N/A', '20:30'),
        ('28/10/25', 'N/A'),
        ('28-10-25', '20:30'),
        ('28/10/2025/1', '20:30'),
        ('28/10/25', '20:30:00'),
        ('', ''),
    ])
    def test_wrong_part_count_returns_none(self, date_str, time_str):
        """Test malformed part counts are rejected."""
        assert parse_instant(date_str, time_str) is None

    def test_non_numeric_parts_return_none(self):
        """Test non-numeric parts are rejected."""
        assert parse_instant('dd/mm/yy', '20:30') is None
        assert parse_instant('28/10/25', 'hh:mm') is None

    def test_month_thirteen_rolls_into_next_year(self):
        """Month 13 is structurally valid and rolls over to January."""
        instant = parse_instant('05/13/25', '19:00')

        assert instant == datetime(2026, 1, 5, 19, 0, tzinfo=timezone.utc)

    def test_day_overflow_rolls_into_next_month(self):
        """Test an out-of-range day rolls into the next month."""
        assert parse_instant('31/02/25', '20:00') == datetime(
            2025, 3, 3, 20, 0, tzinfo=timezone.utc
        )

    def test_four_digit_year_is_rejected(self):
        """Years are two digits; 2025 would otherwise become 4025."""
        assert parse_instant('28/10/2025', '20:30') is None

    def test_leading_digits_are_used(self):
        """Test trailing non-digits in a part are ignored."""
        assert parse_instant('28/10/25', '20:30pm') == datetime(
            2025, 10, 28, 20, 30, tzinfo=timezone.utc
        )

    def test_result_is_utc(self):
        """Test parsed instants carry the UTC timezone."""
        assert parse_instant('28/10/25', '20:30').utcoffset() == timedelta(0)


class TestFormatInstant:
    """Test cases for format_instant."""

    def test_drops_subseconds(self):
        """Test formatting drops fractional seconds."""
        instant = datetime(2025, 10, 28, 20, 30, 15, 123456, tzinfo=timezone.utc)

        assert format_instant(instant) == '20251028T203015Z'

    def test_converts_aware_datetimes_to_utc(self):
        """Test aware datetimes are converted to UTC before formatting."""
        instant = datetime(2025, 10, 28, 21, 30, tzinfo=timezone(timedelta(hours=1)))

        assert format_instant(instant) == '20251028T203000Z'

    def test_naive_datetime_is_taken_as_utc(self):
        """Test naive datetimes are formatted as UTC."""
        assert format_instant(datetime(2025, 10, 28, 20, 30)) == '20251028T203000Z'


class TestEndInstant:
    """Test cases for the fixed event duration."""

    @pytest.mark.parametrize('start', [
        datetime(2025, 10, 28, 20, 30, tzinfo=timezone.utc),
        datetime(2025, 12, 31, 23, 0, tzinfo=timezone.utc),
        datetime(2028, 2, 28, 22, 45, tzinfo=timezone.utc),
    ])
    def test_end_is_two_hours_after_start(self, start):
        """Test events end two hours after they start."""
        assert end_instant(start) - start == timedelta(hours=2)
        assert EVENT_DURATION == timedelta(hours=2)

    def test_fixture_scenario_end(self):
        """Test the end of an evening fixture."""
        start = parse_instant('28/10/25', '20:30')

        assert format_instant(end_instant(start)) == '20251028T223000Z'
