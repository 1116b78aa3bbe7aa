"""
Lector secuencial sobre un buffer de bytes ya recibido por completo.

Todos los decodificadores leen el buffer a través de ByteCursor; ninguna
lectura puede pasar el final del buffer sin lanzar TruncationError.
"""

from __future__ import annotations

import struct
from typing import Dict, Optional, Union

import numpy as np

from ...core.config import settings
from .errors import SanityBoundError, TruncationError

BytesLike = Union[bytes, bytearray, memoryview]

# Escalares little-endian de ancho fijo
_SCALARS: Dict[str, struct.Struct] = {
    "int32": struct.Struct("<i"),
    "float32": struct.Struct("<f"),
    "float64": struct.Struct("<d"),
}

_DTYPES: Dict[str, np.dtype] = {
    "int32": np.dtype("<i4"),
    "float32": np.dtype("<f4"),
    "float64": np.dtype("<f8"),
}


def check_count(value: int, field: str, offset: int, limit: Optional[int] = None) -> int:
    """Valida un contador leído del buffer antes de usarlo para iterar o reservar memoria."""
    if limit is None:
        limit = settings.MAX_WIRE_COUNT
    if value < 0 or value > limit:
        raise SanityBoundError(field, value, limit, offset=offset)
    return value


class ByteCursor:
    """Cursor de lectura con posición interna sobre un buffer inmutable."""

    def __init__(self, data: BytesLike):
        self._buf = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def size(self) -> int:
        return len(self._buf)

    def remaining(self) -> int:
        return len(self._buf) - self._pos

    def require(self, nbytes: int, field: str) -> None:
        if nbytes > self.remaining():
            raise TruncationError(
                field=field,
                offset=self._pos,
                needed=nbytes,
                available=self.remaining(),
                buffer_size=len(self._buf),
            )

    def peek(self, kind: str, field: str = "value"):
        """Lee un escalar sin avanzar la posición."""
        fmt = _SCALARS[kind]
        self.require(fmt.size, field)
        return fmt.unpack_from(self._buf, self._pos)[0]

    def read(self, kind: str, field: str = "value"):
        """
        Lee un escalar ('int32', 'float32' o 'float64') y avanza.
        Lanza TruncationError si no quedan suficientes bytes; en ese caso
        la posición no se modifica.
        """
        value = self.peek(kind, field)
        self._pos += _SCALARS[kind].size
        return value

    def read_int32(self, field: str = "int32") -> int:
        return self.read("int32", field)

    def read_float64(self, field: str = "float64") -> float:
        return self.read("float64", field)

    def read_float32(self, field: str = "float32") -> float:
        return self.read("float32", field)

    def read_array(self, kind: str, count: int, field: str = "array") -> np.ndarray:
        """
        Lee `count` escalares contiguos como array numpy.
        Valores float32 se convierten a float64. El array devuelto es una
        copia, sin referencias al buffer.
        """
        if count < 0:
            raise SanityBoundError(field, count, 0, diagnosis="negative element count", offset=self._pos)
        dtype = _DTYPES[kind]
        out_dtype = np.int32 if kind == "int32" else np.float64
        if count == 0:
            return np.empty(0, dtype=out_dtype)
        nbytes = dtype.itemsize * count
        self.require(nbytes, field)
        arr = np.frombuffer(self._buf, dtype=dtype, count=count, offset=self._pos)
        self._pos += nbytes
        return arr.astype(out_dtype)

    def read_bytes(self, n: int) -> bytes:
        """
        Devuelve hasta `n` bytes desde la posición actual. Si quedan menos,
        devuelve los que haya (nunca lee fuera del buffer).
        """
        n = max(0, min(n, self.remaining()))
        out = self._buf[self._pos : self._pos + n]
        self._pos += n
        return out

    def read_string(self, n: int) -> str:
        return self.read_bytes(n).decode("ascii", errors="replace")
