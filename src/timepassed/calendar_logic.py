from datetime import date, datetime, timedelta
from typing import List, Union

from dateutil.relativedelta import relativedelta

from .models import PeriodBreakdown, WeekInfo


def as_date(value: Union[date, datetime]) -> date:
    """datetime -> date (Mitternacht); reine Daten bleiben unverändert."""
    if isinstance(value, datetime):
        return value.date()
    return value


def calculate_period(reference: Union[date, datetime],
                     today: Union[date, datetime]) -> PeriodBreakdown:
    """
    Berechnet die Zeit von `reference` bis `today`:
      years       : volle Jahre
      months      : volle Monate nach Abzug der Jahre
      days        : Resttage nach Abzug von Jahren und Monaten
      total_weeks : volle 7-Tage-Perioden über die gesamte Spanne
      total_days  : Kalendertage über die gesamte Spanne
    Liegt `reference` nach `today`, sind alle Werte negativ bzw. 0.
    """
    start = as_date(reference)
    end = as_date(today)

    years = relativedelta(end, start).years
    after_years = start + relativedelta(years=years)

    delta = relativedelta(end, after_years)
    months = delta.years * 12 + delta.months
    after_months = after_years + relativedelta(months=months)

    days = (end - after_months).days
    total_days = (end - start).days
    # auf 0 hin abschneiden, auch bei negativen Spannen
    total_weeks = int(total_days / 7)

    return PeriodBreakdown(
        years=years,
        months=months,
        days=days,
        total_weeks=total_weeks,
        total_days=total_days,
    )


def start_of_week(d: Union[date, datetime]) -> date:
    """Montag der Woche, in der `d` liegt."""
    d = as_date(d)
    return d - timedelta(days=d.weekday())


def week_days(d: Union[date, datetime]) -> List[date]:
    """Die sieben Tage Montag … Sonntag rund um `d`."""
    monday = start_of_week(d)
    return [monday + timedelta(days=i) for i in range(7)]


def shift_week(d: Union[date, datetime], weeks: int) -> date:
    return as_date(d) + timedelta(weeks=weeks)


def iso_weeks_in_year(iso_year: int) -> int:
    # der 28. Dezember liegt immer in der letzten ISO-Woche
    return date(iso_year, 12, 28).isocalendar()[1]


def iso_week_info(d: Union[date, datetime]) -> WeekInfo:
    d = as_date(d)
    iso_year, week_number, _ = d.isocalendar()
    return WeekInfo(
        week_number=week_number,
        iso_year=iso_year,
        weeks_in_year=iso_weeks_in_year(iso_year),
        days=tuple(week_days(d)),
    )
