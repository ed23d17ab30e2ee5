import re
from datetime import date
from functools import lru_cache
from itertools import groupby
from typing import Dict, Optional, Sequence, Tuple

from babel.dates import format_date as babel_format_date, get_month_names

DEFAULT_LOCALE = "ro"

# Reihenfolge ist relevant: mehrdeutige Eingaben (01-02-2024) gewinnt das erste passende Muster.
DATE_FORMATS: Tuple[str, ...] = (
    "dd.MM.yyyy",
    "dd-MM-yyyy",
    "dd/MM/yyyy",
    "d.M.yyyy",
    "d-M-yyyy",
    "d/M/yyyy",
    "dd MMMM yyyy",
    "d MMMM yyyy",
    "yyyy-MM-dd",
    "yyyy/MM/dd",
)

INPUT_FORMAT = "dd.MM.yyyy"


@lru_cache(maxsize=None)
def _month_lookup(locale: str) -> Dict[str, int]:
    """Monatsname (volle und abgekürzte Form, kleingeschrieben) -> Monatsnummer."""
    lookup: Dict[str, int] = {}
    for width in ("abbreviated", "wide"):
        for number, name in get_month_names(width, locale=locale).items():
            lookup[name.casefold()] = number
            # Abkürzungen auch ohne Punkt: 'ian' wie 'ian.'
            lookup.setdefault(name.casefold().rstrip("."), number)
    return lookup


@lru_cache(maxsize=None)
def _compile_pattern(pattern: str, locale: str) -> "re.Pattern[str]":
    """Übersetzt ein Muster wie 'dd MMMM yyyy' in einen regulären Ausdruck."""
    # längste Namen zuerst, sonst trifft 'mai' vor 'martie' nicht zu
    names = sorted(_month_lookup(locale), key=len, reverse=True)
    parts = []
    for char, run in groupby(pattern):
        token = char * len(list(run))
        # 'dd' und 'd' (bzw. 'MM' und 'M') akzeptieren beide ein- oder zweistellige Zahlen
        if token in ("dd", "d"):
            parts.append(r"(?P<day>[0-9]{1,2})")
        elif token in ("MM", "M"):
            parts.append(r"(?P<month>[0-9]{1,2})")
        elif token == "MMMM":
            parts.append("(?P<month_name>" + "|".join(re.escape(n) for n in names) + ")")
        elif token == "yyyy":
            parts.append(r"(?P<year>[0-9]{4})")
        elif char.isspace():
            parts.append(r"\s+")
        elif char.isalpha():
            raise ValueError(f"Unsupported token {token!r} in date format {pattern!r}")
        else:
            parts.append(re.escape(token))
    return re.compile("".join(parts), re.IGNORECASE)


def parse_with_format(value: str, pattern: str, locale: str = DEFAULT_LOCALE) -> Optional[date]:
    """Parst `value` streng nach genau einem Muster.

    Liefert None, wenn der Text nicht passt oder kein gültiges Kalenderdatum
    ergibt (z. B. 31.02. oder 29.02. in einem Nicht-Schaltjahr).
    """
    match = _compile_pattern(pattern, locale).fullmatch(value)
    if match is None:
        return None
    fields = match.groupdict()
    if fields.get("month_name") is not None:
        month = _month_lookup(locale)[fields["month_name"].casefold()]
    else:
        month = int(fields["month"])
    try:
        return date(int(fields["year"]), month, int(fields["day"]))
    except ValueError:
        return None


def match_format(value: str,
                 formats: Sequence[str] = DATE_FORMATS,
                 locale: str = DEFAULT_LOCALE) -> Optional[Tuple[str, date]]:
    """Erstes passendes Muster samt Datum, oder None."""
    if not value or not value.strip():
        return None
    value = value.strip()
    for pattern in formats:
        parsed = parse_with_format(value, pattern, locale)
        if parsed is not None:
            return pattern, parsed
    return None


def parse_flexible_date(value: str,
                        formats: Sequence[str] = DATE_FORMATS,
                        locale: str = DEFAULT_LOCALE) -> Optional[date]:
    """Probiert alle Muster der Reihe nach; "kein Treffer" ist None, keine Exception."""
    result = match_format(value, formats, locale)
    return result[1] if result else None


def format_date(d: date, pattern: str, locale: str = DEFAULT_LOCALE) -> str:
    return babel_format_date(d, format=pattern, locale=locale)
