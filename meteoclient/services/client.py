"""
Cliente HTTP de la API de Meteomatics.

Arma las queries, pide la respuesta en formato binario ("/bin") y la pasa
a los decodificadores de meteoclient.services.binary. Los errores HTTP se lanzan
como ApiError con el mensaje devuelto por el servidor.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
import requests

from ..core.config import settings
from ..core.constants import HTTP_SUCCESS_RANGE
from ..models import Grid, MultiPointTimeSeries, TimeSeries
from .binary import ByteCursor, read_mbg_grid, read_multi_point_time_series, read_single_point_time_series
from ..utils.helpers import time_step_str

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """La API respondió con un código HTTP de error."""

    def __init__(self, status_code: int, message: str, url: str = ""):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"HTTP {status_code} for {url}: {message[:500]}")


# ------------------------------
# Armado de queries
# ------------------------------

def parameter_list_str(parameters: Sequence[str]) -> str:
    return ",".join(parameters)


def _coord(lat: float, lon: float) -> str:
    return f"{lat:g},{lon:g}"


def latlon_list_str(lats: Sequence[float], lons: Sequence[float]) -> str:
    """'lat,lon+lat,lon+...' para consultas de puntos."""
    if len(lats) != len(lons):
        raise ValueError(
            f"Different number of coordinates for lat ({len(lats)}) and lon ({len(lons)})"
        )
    if len(lats) == 0:
        raise ValueError("At least one coordinate is required")
    return "+".join(_coord(la, lo) for la, lo in zip(lats, lons))


def grid_latlon_str(lat_n: float, lon_w: float, lat_s: float, lon_e: float, n_lat: int, n_lon: int) -> str:
    """'latN,lonW_latS,lonE:{nLon}x{nLat}' para consultas de grilla."""
    return f"{_coord(lat_n, lon_w)}_{_coord(lat_s, lon_e)}:{n_lon}x{n_lat}"


def optional_select_str(optionals: Optional[Sequence[str]]) -> str:
    if not optionals:
        return ""
    return "?" + "&".join(optionals)


# ------------------------------
# Cliente
# ------------------------------

class MeteomaticsClient:
    """
    Cliente sincrónico. Cada consulta hace un request y decodifica la
    respuesta completa en memoria.
    """

    def __init__(
        self,
        user: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[int] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.user = user if user is not None else settings.API_USER
        self.password = password if password is not None else settings.API_PASSWORD
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.session = session or requests.Session()

    def request_binary(self, path: str) -> bytes:
        url = self.base_url + path
        auth = (self.user, self.password) if self.user and self.password else None
        logger.info("Requesting binary from %s", url)
        resp = self.session.get(
            url,
            auth=auth,
            timeout=self.timeout,
            headers={"Content-Type": "text/plain"},
        )
        if resp.status_code not in HTTP_SUCCESS_RANGE:
            logger.error("Server replied with code %d for %s", resp.status_code, url)
            raise ApiError(resp.status_code, resp.text, url)
        return resp.content

    def get_multi_point_time_series(
        self,
        start_time: str,
        stop_time: str,
        time_step: str,
        parameters: Sequence[str],
        lats: Sequence[float],
        lons: Sequence[float],
        optionals: Optional[Sequence[str]] = None,
    ) -> MultiPointTimeSeries:
        """
        Varias fechas en varias coordenadas. Con una sola coordenada el
        servidor responde en el formato de punto único.
        """
        path = (
            f"/{start_time}--{stop_time}:P{time_step}"
            f"/{parameter_list_str(parameters)}"
            f"/{latlon_list_str(lats, lons)}"
            f"/bin{optional_select_str(optionals)}"
        )
        cursor = ByteCursor(self.request_binary(path))
        if len(lats) == 1:
            ts = read_single_point_time_series(cursor)
            return MultiPointTimeSeries(series=[ts.values], times=ts.times)
        return read_multi_point_time_series(cursor)

    def get_time_series(
        self,
        start_time: str,
        stop_time: str,
        time_step: str,
        parameters: Sequence[str],
        lat: float,
        lon: float,
        optionals: Optional[Sequence[str]] = None,
    ) -> TimeSeries:
        result = self.get_multi_point_time_series(
            start_time, stop_time, time_step, parameters, [lat], [lon], optionals
        )
        return result.point(0)

    def get_point(
        self,
        time: str,
        parameters: Sequence[str],
        lat: float,
        lon: float,
        optionals: Optional[Sequence[str]] = None,
    ) -> np.ndarray:
        """Valores de cada parámetro en una coordenada y una fecha."""
        ts = self.get_time_series(time, time, time_step_str(), parameters, lat, lon, optionals)
        if ts.n_times == 0:
            raise ValueError(f"Empty reply for point ({lat}, {lon}) at {time}")
        return ts.values[0]

    def get_multi_points(
        self,
        time: str,
        parameters: Sequence[str],
        lats: Sequence[float],
        lons: Sequence[float],
        optionals: Optional[Sequence[str]] = None,
    ) -> np.ndarray:
        """Matriz [coordenada][parámetro] para una única fecha."""
        result = self.get_multi_point_time_series(
            time, time, time_step_str(), parameters, lats, lons, optionals
        )
        if any(n == 0 for n in result.times_per_coordinate):
            raise ValueError(f"Empty reply for one or more coordinates at {time}")
        return np.vstack([m[0] for m in result.series])

    def get_grid(
        self,
        time: str,
        parameter: str,
        lat_n: float,
        lon_w: float,
        lat_s: float,
        lon_e: float,
        n_lat: int,
        n_lon: int,
        optionals: Optional[Sequence[str]] = None,
    ) -> Grid:
        """Un parámetro sobre una grilla regular, en una fecha."""
        path = (
            f"/{time}/{parameter}"
            f"/{grid_latlon_str(lat_n, lon_w, lat_s, lon_e, n_lat, n_lon)}"
            f"/bin{optional_select_str(optionals)}"
        )
        return read_mbg_grid(ByteCursor(self.request_binary(path)))

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
