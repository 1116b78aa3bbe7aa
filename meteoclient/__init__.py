"""
Cliente de la API de Meteomatics con decodificación de respuestas binarias.
"""
from .models import Grid, MultiPointTimeSeries, TimeSeries
from .services.binary import (
    ByteCursor,
    DecodeError,
    decode_mbg_grid,
    decode_multi_point_time_series,
    decode_single_point_time_series,
    to_iso8601,
)
from .services.client import ApiError, MeteomaticsClient
from .utils.helpers import time_step_str

__version__ = "0.1.0"

__all__ = [
    'MeteomaticsClient',
    'ApiError',
    'TimeSeries',
    'MultiPointTimeSeries',
    'Grid',
    'ByteCursor',
    'DecodeError',
    'decode_single_point_time_series',
    'decode_multi_point_time_series',
    'decode_mbg_grid',
    'to_iso8601',
    'time_step_str',
]
