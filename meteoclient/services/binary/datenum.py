"""
Conversión de fechas seriales (días desde la época, fracción = hora del día)
a campos de calendario gregoriano y a strings ISO-8601.

La convención es la de `datenum`: el día 1 es el 1 de enero del año 0.
Un conteo de días exactamente 0 se representa como el estado "época"
(año, mes y día en 0).
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import NamedTuple

from ...core.constants import (
    CUMULATIVE_DAYS,
    CUMULATIVE_DAYS_LEAP,
    MEAN_GREGORIAN_YEAR,
    SECONDS_PER_DAY,
    SERIAL_DATE_MAX_DAYS,
)
from .errors import DateRangeError


class CalendarFields(NamedTuple):
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    @property
    def is_epoch(self) -> bool:
        return self.year == 0 and self.month == 0 and self.day == 0

    def to_datetime(self) -> datetime:
        """datetime UTC equivalente. No aplica al estado época."""
        if self.is_epoch:
            raise ValueError("Epoch calendar state has no datetime equivalent")
        return datetime(
            self.year, self.month, self.day,
            self.hour, self.minute, self.second,
            tzinfo=timezone.utc,
        )


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def _days_before_year(y: int) -> int:
    # 365·y + ⌈y/4⌉ − ⌈y/100⌉ + ⌈y/400⌉, en aritmética entera
    return 365 * y - (-y // 4) + (-y // 100) - (-y // 400)


def datevec(serial: float) -> CalendarFields:
    """
    Descompone una fecha serial en (año, mes, día, hora, minuto, segundo).

    Lanza DateRangeError si |serial| excede el límite representable o si
    el valor no es finito.
    """
    t = float(serial)
    if not math.isfinite(t) or abs(t) > SERIAL_DATE_MAX_DAYS:
        raise DateRangeError(serial, SERIAL_DATE_MAX_DAYS)

    hour = minute = second = 0
    if t != math.floor(t):
        # Redondeo a segundo entero; el orden s -> min -> h arrastra el
        # acarreo hasta el conteo de días
        t = math.floor(SECONDS_PER_DAY * t + 0.5)
        ts = t
        t = math.floor(t / 60.0)
        second = ts - 60 * t
        ts = t
        t = math.floor(t / 60.0)
        minute = ts - 60 * t
        ts = t
        t = math.floor(t / 24.0)
        hour = ts - 24 * t

    t = math.floor(t)
    if t == 0:
        return CalendarFields(0, 0, 0, int(hour), int(minute), int(second))

    y = math.floor(t / MEAN_GREGORIAN_YEAR)
    rem = t - _days_before_year(y)
    if rem <= 0:
        y -= 1
        rem = t - _days_before_year(y)

    cdm = CUMULATIVE_DAYS_LEAP if is_leap_year(y) else CUMULATIVE_DAYS
    mon = int(rem / 29.0 - 1)
    if rem > cdm[mon + 1]:
        mon += 1

    return CalendarFields(
        int(y), mon + 1, int(rem - cdm[mon]),
        int(hour), int(minute), int(second),
    )


def iso_time_str(year: int, month: int, day: int, hour: int, minute: int, second: int) -> str:
    """Formatea 6 enteros como 'YYYY-MM-DDThh:mm:ssZ'."""
    return (
        f"{int(year):04d}-{int(month):02d}-{int(day):02d}"
        f"T{int(hour):02d}:{int(minute):02d}:{int(second):02d}Z"
    )


def to_iso8601(serial: float) -> str:
    return iso_time_str(*datevec(serial))
