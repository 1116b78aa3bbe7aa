"""
Decodificador de grillas en formato binario MBG (solo versión 2).

Estructura, en orden:
    "MBG_"                        magic (4 bytes ASCII)
    version:int32                 == 2
    precision:int32               ancho de cada valor (4 = float32, 8 = float64)
    numPayloadsPerForecast:int32  == 1
    payloadMeta:int32             == 0
    numForecasts:int32            == 1
    forecastDate:float64
    numLat:int32, numLat x float64
    numLon:int32, numLon x float64
    numLat x numLon valores (longitud varía más rápido)

El eje de latitudes y las filas de la matriz se invierten al final para
quedar en el mismo orden que la respuesta en CSV.
"""

from __future__ import annotations

import logging
from typing import Optional

from ...core.config import settings
from ...core.constants import (
    MBG_EXPECTED_FORECASTS,
    MBG_EXPECTED_PAYLOAD_META,
    MBG_EXPECTED_PAYLOADS_PER_FORECAST,
    MBG_MAGIC,
    MBG_PAYLOAD_SANITY_LIMIT,
    MBG_VERSION,
    PRECISION_FLOAT32,
    PRECISION_FLOAT64,
)
from ...models import Grid
from .cursor import ByteCursor, BytesLike, check_count
from .errors import (
    FormatMismatchError,
    SanityBoundError,
    StructuralConstraintError,
)

logger = logging.getLogger(__name__)


def _expect(cursor: ByteCursor, field: str, expected: int) -> int:
    offset = cursor.position
    value = cursor.read_int32(field)
    if value != expected:
        raise StructuralConstraintError(field, expected, value, offset=offset)
    return value


def read_mbg_header(cursor: ByteCursor) -> dict:
    """
    Lee y valida la cabecera MBG hasta forecastDate inclusive.
    Cualquier fallo aborta la lectura en el primer campo inválido.
    """
    offset = cursor.position
    cursor.require(len(MBG_MAGIC), "magic")
    magic = cursor.read_bytes(len(MBG_MAGIC))
    if magic != MBG_MAGIC:
        raise FormatMismatchError("magic", MBG_MAGIC, magic, offset=offset)

    offset = cursor.position
    version = cursor.read_int32("version")
    if version != MBG_VERSION:
        raise FormatMismatchError("version", MBG_VERSION, version, offset=offset)

    precision = cursor.read_int32("precision")

    offset = cursor.position
    payloads = cursor.read_int32("numPayloadsPerForecast")
    if payloads > MBG_PAYLOAD_SANITY_LIMIT:
        raise SanityBoundError(
            "numPayloadsPerForecast",
            payloads,
            MBG_PAYLOAD_SANITY_LIMIT,
            diagnosis="probable byte-order mismatch (big-endian payload?)",
            offset=offset,
        )
    if payloads != MBG_EXPECTED_PAYLOADS_PER_FORECAST:
        raise StructuralConstraintError(
            "numPayloadsPerForecast", MBG_EXPECTED_PAYLOADS_PER_FORECAST, payloads, offset=offset
        )

    _expect(cursor, "payloadMeta", MBG_EXPECTED_PAYLOAD_META)
    _expect(cursor, "numForecasts", MBG_EXPECTED_FORECASTS)
    forecast_date = cursor.read_float64("forecastDate")

    return {
        "version": version,
        "precision": precision,
        "num_payloads_per_forecast": payloads,
        "forecast_date": forecast_date,
    }


def read_mbg_grid(cursor: ByteCursor, max_count: Optional[int] = None) -> Grid:
    """Lee una grilla MBG completa. Nunca devuelve una grilla parcial."""
    if max_count is None:
        max_count = settings.MAX_WIRE_COUNT

    header = read_mbg_header(cursor)
    precision = header["precision"]

    num_lat = check_count(cursor.read_int32("numLat"), "numLat", cursor.position - 4, max_count)
    lats = cursor.read_array("float64", num_lat, "lats")
    num_lon = check_count(cursor.read_int32("numLon"), "numLon", cursor.position - 4, max_count)
    lons = cursor.read_array("float64", num_lon, "lons")

    n_values = check_count(num_lat * num_lon, "numLat*numLon", cursor.position, max_count)

    supported = True
    if precision == PRECISION_FLOAT32:
        flat = cursor.read_array("float32", n_values, "values")
    else:
        if precision != PRECISION_FLOAT64:
            supported = False
            logger.warning(
                "MBG precision %d no soportada; se leen los valores como float64 sin verificar",
                precision,
            )
        flat = cursor.read_array("float64", n_values, "values")

    values = flat.reshape(num_lat, num_lon)
    logger.debug("Grilla MBG decodificada: %d lat x %d lon (precision %d)", num_lat, num_lon, precision)

    # Mismo orden que la respuesta CSV: latitudes invertidas
    return Grid(
        lats=lats[::-1],
        lons=lons,
        values=values[::-1, :],
        forecast_date=header["forecast_date"],
        precision=precision,
        precision_supported=supported,
    )


def decode_mbg_grid(data: BytesLike) -> Grid:
    return read_mbg_grid(ByteCursor(data))
