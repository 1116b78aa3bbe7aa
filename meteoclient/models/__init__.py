"""
Modelos de resultados decodificados.
"""
from .timeseries import TimeSeries, MultiPointTimeSeries
from .grid import Grid

__all__ = [
    # Series temporales
    'TimeSeries',
    'MultiPointTimeSeries',
    # Grillas
    'Grid',
]
