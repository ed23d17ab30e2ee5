# tests/test_calendar_logic.py

from datetime import date, datetime, timedelta
import pytest

from timepassed.models import PeriodBreakdown
from timepassed.calendar_logic import (
    calculate_period, week_days, start_of_week, shift_week, iso_week_info, iso_weeks_in_year
)

def test_period_years_months_days():
    p = calculate_period(date(2020, 1, 15), date(2024, 3, 20))
    assert (p.years, p.months, p.days) == (4, 2, 5)
    # 1461 Tage bis 15.01.2024, dann 65 Tage bis 20.03.2024
    assert p.total_days == 1526
    assert p.total_weeks == 218

def test_same_day_is_all_zero():
    d = date(2024, 3, 20)
    assert calculate_period(d, d) == PeriodBreakdown(0, 0, 0, 0, 0)

def test_end_of_month_rollover():
    p = calculate_period(date(2023, 1, 31), date(2023, 2, 28))
    assert (p.years, p.months, p.days) == (0, 1, 0)
    assert p.total_days == 28
    assert p.total_weeks == 4

def test_days_remaining_after_short_month():
    # Februar 2024 hat 29 Tage
    p = calculate_period(date(2024, 1, 20), date(2024, 3, 10))
    assert (p.years, p.months, p.days) == (0, 1, 19)

@pytest.mark.parametrize("start,end,expected", [
    (date(2020, 2, 29), date(2024, 2, 29), (4, 0, 0)),
    (date(2020, 2, 29), date(2021, 2, 28), (1, 0, 0)),
    # Jahre zuerst abziehen: 29.02.2020 + 1 Jahr = 28.02.2021, dann + 1 Monat
    (date(2020, 2, 29), date(2021, 3, 28), (1, 1, 0)),
    (date(2019, 12, 31), date(2020, 1, 1), (0, 0, 1)),
])
def test_leap_years(start, end, expected):
    p = calculate_period(start, end)
    assert (p.years, p.months, p.days) == expected

def test_future_reference_gives_signed_values():
    p = calculate_period(date(2025, 3, 10), date(2024, 1, 5))
    assert (p.years, p.months, p.days) == (-1, -2, -5)
    assert p.total_days == -430
    # abgeschnitten, nicht abgerundet
    assert p.total_weeks == -61

def test_datetime_is_normalised_to_date():
    p = calculate_period(datetime(2024, 3, 20, 23, 59), datetime(2024, 3, 21, 0, 1))
    assert p.total_days == 1
    assert p.days == 1

@pytest.mark.parametrize("offset", range(7))
def test_week_days_monday_to_sunday(offset):
    d = date(2024, 3, 18) + timedelta(days=offset)
    days = week_days(d)
    assert len(days) == 7
    assert days[0].weekday() == 0
    assert days[-1].weekday() == 6
    assert all((days[i+1] - days[i]).days == 1 for i in range(6))
    assert d in days
    assert days[0] == start_of_week(d) == date(2024, 3, 18)

def test_week_days_across_year_boundary():
    days = week_days(date(2025, 1, 1))
    assert days[0] == date(2024, 12, 30)
    assert days[-1] == date(2025, 1, 5)

def test_shift_week():
    assert shift_week(date(2024, 3, 20), -1) == date(2024, 3, 13)
    assert shift_week(date(2024, 12, 30), 1) == date(2025, 1, 6)

@pytest.mark.parametrize("year,weeks", [(2020, 53), (2023, 52), (2024, 52), (2026, 53)])
def test_iso_weeks_in_year(year, weeks):
    assert iso_weeks_in_year(year) == weeks

def test_iso_week_info():
    info = iso_week_info(date(2024, 3, 20))
    assert info.week_number == 12
    assert info.iso_year == 2024
    assert info.weeks_in_year == 52
    assert info.days[0] == date(2024, 3, 18)
    # 1. Januar 2021 gehört zur 53. Woche von 2020
    info = iso_week_info(date(2021, 1, 1))
    assert (info.week_number, info.iso_year, info.weeks_in_year) == (53, 2020, 53)
