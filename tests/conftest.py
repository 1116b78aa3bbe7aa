"""
Shared pytest fixtures for the binary decoder tests.

The builders below write payloads in the exact little-endian layouts the
API uses, so each test can describe its input as plain Python values.
"""
import struct
from typing import List, Sequence, Tuple

import pytest

# datenum of 2000-01-01T00:00:00Z (Python ordinal + 366)
SERIAL_2000_01_01 = 730486.0

Record = Tuple[float, Sequence[float]]


def build_single_point(records: List[Record]) -> bytes:
    out = struct.pack("<i", len(records))
    for date, values in records:
        out += struct.pack("<i", len(values))
        out += struct.pack("<d", date)
        out += struct.pack(f"<{len(values)}d", *values)
    return out


def build_multi_point(coords: List[List[Record]]) -> bytes:
    out = struct.pack("<i", len(coords))
    for records in coords:
        out += struct.pack("<i", len(records))
        for date, values in records:
            out += struct.pack("<i", len(values))
            out += struct.pack("<d", date)
            out += struct.pack(f"<{len(values)}d", *values)
    return out


def build_mbg(
    lats: Sequence[float],
    lons: Sequence[float],
    values: Sequence[Sequence[float]],
    precision: int = 8,
    magic: bytes = b"MBG_",
    version: int = 2,
    payloads: int = 1,
    payload_meta: int = 0,
    forecasts: int = 1,
    forecast_date: float = 1_700_000_000.0,
) -> bytes:
    out = magic
    out += struct.pack("<iiiii", version, precision, payloads, payload_meta, forecasts)
    out += struct.pack("<d", forecast_date)
    out += struct.pack("<i", len(lats)) + struct.pack(f"<{len(lats)}d", *lats)
    out += struct.pack("<i", len(lons)) + struct.pack(f"<{len(lons)}d", *lons)
    fmt = "f" if precision == 4 else "d"
    for row in values:
        out += struct.pack(f"<{len(row)}{fmt}", *row)
    return out


@pytest.fixture
def single_point_payload():
    return build_single_point


@pytest.fixture
def multi_point_payload():
    return build_multi_point


@pytest.fixture
def mbg_payload():
    return build_mbg


@pytest.fixture
def serial_2000():
    return SERIAL_2000_01_01
