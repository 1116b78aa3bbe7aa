"""
Modelo de grilla lat/lon decodificada desde formato MBG.
"""
from __future__ import annotations

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _readonly(v, ndim: int) -> np.ndarray:
    arr = np.array(v, dtype=np.float64)
    if arr.size == 0 and arr.ndim < ndim:
        arr = arr.reshape((0,) * ndim)
    if arr.ndim != ndim:
        raise ValueError(f"Expected {ndim}-D array, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


class Grid(BaseModel):
    """Grilla values[lat][lon] con sus ejes."""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    lats: np.ndarray
    lons: np.ndarray
    values: np.ndarray
    forecast_date: float = Field(..., description="Fecha del pronóstico, tal cual llega (sin interpretar)")
    precision: int = Field(default=8, description="Ancho en bytes de cada valor en el buffer")
    precision_supported: bool = Field(
        default=True,
        description="False si el ancho no es 4 ni 8 y se leyó como float64 sin verificar",
    )

    @field_validator("lats", "lons", mode="before")
    @classmethod
    def _check_axis(cls, v):
        return _readonly(v, 1)

    @field_validator("values", mode="before")
    @classmethod
    def _check_values(cls, v):
        return _readonly(v, 2)

    @model_validator(mode="after")
    def _check_shape(self):
        expected = (self.lats.size, self.lons.size)
        if self.values.shape != expected:
            raise ValueError(
                f"Grid values shape {self.values.shape} does not match axes {expected}"
            )
        return self

    @property
    def shape(self):
        return self.values.shape

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.values,
            index=pd.Index(self.lats, name="lat"),
            columns=pd.Index(self.lons, name="lon"),
        )
