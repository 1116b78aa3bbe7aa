"""
Módulo de decodificación de respuestas binarias de la API.

Opera sobre un buffer ya recibido por completo; no hace I/O ni guarda
estado entre llamadas. Cada decodificación usa su propio ByteCursor.

  - ByteCursor: lector secuencial little-endian con control de desborde
  - datevec / to_iso8601: fechas seriales → calendario / ISO-8601
  - read_single_point_time_series: serie temporal de un punto
  - read_multi_point_time_series: series temporales de varios puntos
  - read_mbg_grid: grilla en formato MBG versión 2
"""

from .cursor import ByteCursor
from .datenum import CalendarFields, datevec, iso_time_str, to_iso8601
from .errors import (
    DateRangeError,
    DecodeError,
    FormatMismatchError,
    SanityBoundError,
    StructuralConstraintError,
    TruncationError,
)
from .mbg_decoder import decode_mbg_grid, read_mbg_grid, read_mbg_header
from .timeseries_decoder import (
    decode_multi_point_time_series,
    decode_single_point_time_series,
    read_multi_point_time_series,
    read_single_point_time_series,
)

__all__ = [
    "ByteCursor",
    "CalendarFields",
    "datevec",
    "iso_time_str",
    "to_iso8601",
    "DecodeError",
    "TruncationError",
    "FormatMismatchError",
    "StructuralConstraintError",
    "SanityBoundError",
    "DateRangeError",
    "read_single_point_time_series",
    "read_multi_point_time_series",
    "decode_single_point_time_series",
    "decode_multi_point_time_series",
    "read_mbg_header",
    "read_mbg_grid",
    "decode_mbg_grid",
]
