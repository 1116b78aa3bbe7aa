"""
Modelos de series temporales decodificadas (uno o varios puntos).
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _readonly_matrix(v) -> np.ndarray:
    arr = np.array(v, dtype=np.float64)
    if arr.size == 0 and arr.ndim < 2:
        arr = arr.reshape(0, 0)
    if arr.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


def _time_index(times: Sequence[str]) -> pd.DatetimeIndex:
    # La fecha "época" (0000-00-00) no tiene equivalente y queda como NaT
    return pd.DatetimeIndex(
        pd.to_datetime(list(times), format=ISO_FORMAT, utc=True, errors="coerce"),
        name="time",
    )


class TimeSeries(BaseModel):
    """Serie temporal de un punto: values[tiempo][parámetro]."""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    values: np.ndarray
    times: Tuple[str, ...] = Field(default=(), description="ISO-8601, una por fila")

    @field_validator("values", mode="before")
    @classmethod
    def _check_values(cls, v):
        return _readonly_matrix(v)

    @field_validator("times", mode="before")
    @classmethod
    def _check_times(cls, v):
        return tuple(v)

    @model_validator(mode="after")
    def _check_rows(self):
        if self.values.shape[0] != len(self.times):
            raise ValueError(
                f"{self.values.shape[0]} rows but {len(self.times)} timestamps"
            )
        return self

    @property
    def n_times(self) -> int:
        return int(self.values.shape[0])

    @property
    def n_params(self) -> int:
        return int(self.values.shape[1])

    def to_dataframe(self, parameters: Optional[Sequence[str]] = None) -> pd.DataFrame:
        columns = list(parameters) if parameters is not None else list(range(self.n_params))
        if len(columns) != self.n_params:
            raise ValueError(
                f"{len(columns)} parameter names for {self.n_params} columns"
            )
        return pd.DataFrame(self.values, index=_time_index(self.times), columns=columns)


class MultiPointTimeSeries(BaseModel):
    """
    Series temporales de varias coordenadas.

    `series[i]` es la matriz [tiempo][parámetro] de la coordenada i.
    `times` es una lista plana con las fechas de todas las coordenadas
    concatenadas en orden de decodificación: para obtener las fechas de la
    coordenada i hay que cortar por la cantidad de filas de cada serie
    (ver `times_for`).
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    series: Tuple[np.ndarray, ...] = Field(default=())
    times: Tuple[str, ...] = Field(default=())

    @field_validator("series", mode="before")
    @classmethod
    def _check_series(cls, v):
        return tuple(_readonly_matrix(m) for m in v)

    @field_validator("times", mode="before")
    @classmethod
    def _check_times(cls, v):
        return tuple(v)

    @model_validator(mode="after")
    def _check_total(self):
        total = sum(m.shape[0] for m in self.series)
        if total != len(self.times):
            raise ValueError(f"{total} rows in total but {len(self.times)} timestamps")
        return self

    @property
    def n_coordinates(self) -> int:
        return len(self.series)

    @property
    def times_per_coordinate(self) -> List[int]:
        return [int(m.shape[0]) for m in self.series]

    def _bounds(self, index: int) -> Tuple[int, int]:
        counts = self.times_per_coordinate
        start = sum(counts[:index])
        return start, start + counts[index]

    def times_for(self, index: int) -> Tuple[str, ...]:
        """Fechas de la coordenada `index` (corte de la lista plana)."""
        if not 0 <= index < self.n_coordinates:
            raise IndexError(f"Coordinate index {index} out of range")
        start, stop = self._bounds(index)
        return self.times[start:stop]

    def point(self, index: int) -> TimeSeries:
        return TimeSeries(values=self.series[index], times=self.times_for(index))

    def iter_coordinates(self) -> Iterator[TimeSeries]:
        for i in range(self.n_coordinates):
            yield self.point(i)

    def to_dataframe(
        self,
        parameters: Optional[Sequence[str]] = None,
        coordinates: Optional[Sequence[str]] = None,
    ) -> pd.DataFrame:
        """DataFrame largo con índice (coordinate, time); `coordinates` son etiquetas, ej. "47.4,9.3"."""
        keys = list(coordinates) if coordinates is not None else list(range(self.n_coordinates))
        if len(keys) != self.n_coordinates:
            raise ValueError(f"{len(keys)} coordinate labels for {self.n_coordinates} series")
        if not keys:
            return pd.DataFrame()
        frames = [ts.to_dataframe(parameters) for ts in self.iter_coordinates()]
        return pd.concat(frames, keys=keys, names=["coordinate", "time"])
