"""
Decodificadores de series temporales binarias (formato "bin" de la API).

Punto único:
    numDates:int32, numParams:int32 (peek), y por cada fecha
    numParams:int32, date:float64, numParams x float64

Múltiples puntos:
    numCoords:int32, y por cada coordenada numTimes:int32, y por cada fecha
    numParams:int32, date:float64, numParams x float64
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from ...models import MultiPointTimeSeries, TimeSeries
from .cursor import ByteCursor, BytesLike, check_count
from .datenum import to_iso8601
from .errors import DateRangeError, StructuralConstraintError, TruncationError

logger = logging.getLogger(__name__)


def _iso(date: float, index: int) -> str:
    try:
        return to_iso8601(date)
    except DateRangeError as exc:
        raise DateRangeError(exc.value, exc.bound, index=index) from exc


def _stack(rows: List[np.ndarray], n_params: int) -> np.ndarray:
    if not rows:
        return np.empty((0, n_params), dtype=np.float64)
    return np.vstack(rows)


def read_single_point_time_series(cursor: ByteCursor, max_count: Optional[int] = None) -> TimeSeries:
    """
    Lee una serie temporal de un punto.

    El campo numParams aparece antes del primer registro y otra vez al
    inicio de cada registro: el primero se lee sin avanzar (peek) para
    dimensionar, y luego se consume en cada registro. Todos los registros
    deben tener la misma cantidad de parámetros.
    """
    rows: List[np.ndarray] = []
    times: List[str] = []
    try:
        num_dates = check_count(
            cursor.read_int32("numDates"), "numDates", cursor.position - 4, max_count
        )
        if num_dates == 0:
            return TimeSeries(values=np.empty((0, 0)), times=[])
        num_params = check_count(
            cursor.peek("int32", "numParams"), "numParams", cursor.position, max_count
        )
        for i in range(num_dates):
            offset = cursor.position
            n = cursor.read_int32("numParams")
            if n != num_params:
                raise StructuralConstraintError(f"numParams[{i}]", num_params, n, offset=offset)
            date = cursor.read_float64("date")
            times.append(_iso(date, i))
            rows.append(cursor.read_array("float64", n, "values"))
    except TruncationError as exc:
        raise exc.with_records(len(rows)) from exc

    logger.debug("Serie de un punto decodificada: %d fechas x %d parámetros", num_dates, num_params)
    return TimeSeries(values=_stack(rows, num_params), times=times)


def read_multi_point_time_series(
    cursor: ByteCursor, max_count: Optional[int] = None
) -> MultiPointTimeSeries:
    """
    Lee series temporales de varias coordenadas.

    Las fechas de todas las coordenadas se devuelven en una lista plana, en
    orden de decodificación; MultiPointTimeSeries.times_for() hace el corte
    por coordenada.
    """
    series: List[np.ndarray] = []
    times: List[str] = []
    records = 0
    try:
        num_coords = check_count(
            cursor.read_int32("numCoords"), "numCoords", cursor.position - 4, max_count
        )
        for c in range(num_coords):
            num_times = check_count(
                cursor.read_int32("numTimes"), f"numTimes[{c}]", cursor.position - 4, max_count
            )
            rows: List[np.ndarray] = []
            n_params: Optional[int] = None
            for j in range(num_times):
                offset = cursor.position
                n = check_count(cursor.read_int32("numParams"), "numParams", offset, max_count)
                if n_params is None:
                    n_params = n
                elif n != n_params:
                    raise StructuralConstraintError(
                        f"numParams[{c}][{j}]", n_params, n, offset=offset
                    )
                date = cursor.read_float64("date")
                times.append(_iso(date, records))
                rows.append(cursor.read_array("float64", n, "values"))
                records += 1
            series.append(_stack(rows, n_params or 0))
    except TruncationError as exc:
        raise exc.with_records(records) from exc

    logger.debug("Series multipunto decodificadas: %d coordenadas, %d registros", num_coords, records)
    return MultiPointTimeSeries(series=series, times=times)


def decode_single_point_time_series(data: BytesLike) -> TimeSeries:
    return read_single_point_time_series(ByteCursor(data))


def decode_multi_point_time_series(data: BytesLike) -> MultiPointTimeSeries:
    return read_multi_point_time_series(ByteCursor(data))
