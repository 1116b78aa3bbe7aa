from datetime import datetime, timedelta, timezone
from typing import Tuple

from ..services.binary.datenum import iso_time_str

TimeFields = Tuple[int, int, int, int, int, int]


def time_step_str(year=0, month=0, day=0, hour=0, minute=0, second=0) -> str:
    """
    Arma el paso de tiempo en el formato de duración ISO-8601 que espera la
    API (sin la 'P' inicial, que agrega la query). Ej: (0,0,0,1,0,0) -> 'T1H'.
    Sin componentes positivos devuelve '0D'.
    """
    out = ""
    if year > 0:
        out += f"{year}Y"
    if month > 0:
        out += f"{month}M"
    if day > 0:
        out += f"{day}D"
    if hour + minute + second > 0:
        out += "T"
    if hour > 0:
        out += f"{hour}H"
    if minute > 0:
        out += f"{minute}M"
    if second > 0:
        out += f"{second}S"
    return out or "0D"


def _fields(dt: datetime) -> TimeFields:
    return (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)


def current_utc_fields() -> TimeFields:
    """(año, mes, día, hora, minuto, segundo) actuales en UTC."""
    return _fields(datetime.now(timezone.utc))


def days_from_today_fields(days: int) -> TimeFields:
    return _fields(datetime.now(timezone.utc) + timedelta(days=days))


def current_year() -> int:
    return current_utc_fields()[0]


def current_month() -> int:
    return current_utc_fields()[1]


def current_day() -> int:
    return current_utc_fields()[2]


def tomorrow() -> int:
    return days_from_today_fields(1)[2]


def tomorrows_month() -> int:
    return days_from_today_fields(1)[1]


def tomorrows_year() -> int:
    return days_from_today_fields(1)[0]


def today_iso() -> str:
    """Medianoche UTC de hoy como string ISO-8601."""
    y, m, d, *_ = current_utc_fields()
    return iso_time_str(y, m, d, 0, 0, 0)
