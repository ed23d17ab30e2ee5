# src/timepassed/models.py
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

@dataclass(frozen=True)
class PeriodBreakdown:
    """Vergangene Zeit zwischen zwei Daten.

    years/months/days schließen sich gegenseitig aus (größte Einheit zuerst),
    total_weeks/total_days zählen unabhängig davon über dieselbe Spanne.
    """
    years: int
    months: int
    days: int
    total_weeks: int
    total_days: int

@dataclass(frozen=True)
class WeekInfo:
    """ISO-Kalenderwoche eines Datums samt den sieben Tagen Mo … So."""
    week_number: int
    iso_year: int
    weeks_in_year: int
    days: Tuple[date, ...]

@dataclass
class AppState:
    """Zustand der Oberfläche; wird pro Benutzeraktion aktualisiert, nie gespeichert."""
    selected_date: date
    input_text: str = ""
    error: Optional[str] = None
