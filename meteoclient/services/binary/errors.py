"""
Errores de decodificación de respuestas binarias.

Cada decodificador devuelve un resultado completo o lanza exactamente uno
de estos errores, con el contexto necesario (offset, valor esperado vs.
observado) para diagnosticar sin volver a ejecutar.
"""

from __future__ import annotations

from typing import Any, Optional


class DecodeError(ValueError):
    """Base de todos los errores de decodificación."""

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.offset = offset


class TruncationError(DecodeError):
    """El buffer se agotó en medio de una lectura."""

    def __init__(
        self,
        field: str,
        offset: int,
        needed: int,
        available: int,
        buffer_size: int,
        records_decoded: Optional[int] = None,
    ):
        self.field = field
        self.needed = needed
        self.available = available
        self.buffer_size = buffer_size
        self.records_decoded = records_decoded
        super().__init__(self._format(offset), offset=offset)

    def _format(self, offset: int) -> str:
        msg = (
            f"Truncated buffer reading '{self.field}' at offset {offset}: "
            f"need {self.needed} bytes, {self.available} available "
            f"(buffer size {self.buffer_size})"
        )
        if self.records_decoded is not None:
            msg += f"; {self.records_decoded} records decoded before truncation"
        return msg

    def with_records(self, records_decoded: int) -> "TruncationError":
        """Copia del error indicando cuántos registros se alcanzaron a leer."""
        return TruncationError(
            self.field,
            self.offset,
            self.needed,
            self.available,
            self.buffer_size,
            records_decoded=records_decoded,
        )


class FormatMismatchError(DecodeError):
    """Magic o versión no soportados: el formato es otro."""

    def __init__(self, field: str, expected: Any, actual: Any, offset: Optional[int] = None):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Unsupported format: {field} is {actual!r}, expected {expected!r}",
            offset=offset,
        )


class StructuralConstraintError(DecodeError):
    """Un campo con valor obligatorio no lo cumple."""

    def __init__(self, field: str, expected: Any, actual: Any, offset: Optional[int] = None):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Structural constraint violated: {field} is {actual!r}, expected {expected!r}",
            offset=offset,
        )


class SanityBoundError(DecodeError):
    """Un contador leído excede el límite razonable."""

    def __init__(
        self,
        field: str,
        actual: int,
        bound: int,
        diagnosis: str = "corrupted or implausible count",
        offset: Optional[int] = None,
    ):
        self.field = field
        self.actual = actual
        self.bound = bound
        self.diagnosis = diagnosis
        super().__init__(
            f"{field} = {actual} outside sane bound {bound}: {diagnosis}",
            offset=offset,
        )


class DateRangeError(DecodeError):
    """Fecha serial fuera del rango representable."""

    def __init__(self, value: float, bound: float, index: Optional[int] = None):
        self.value = value
        self.bound = bound
        self.index = index
        where = f" (record {index})" if index is not None else ""
        super().__init__(
            f"Date number out of range{where}: {value!r}, |value| must be <= {bound!r}"
        )
