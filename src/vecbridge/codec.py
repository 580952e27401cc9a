"""Float32 vector (de)serialization in the sqlite-vec blob layout.

A vector is stored as its elements packed as little-endian IEEE-754 float32,
4 bytes each, with no header; the element count is ``len(blob) // 4``.
"""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np

# Explicit little-endian float32, independent of host byte order.
FLOAT32_LE = np.dtype("<f4")
BYTES_PER_ELEMENT = FLOAT32_LE.itemsize


def serialize_vector(values: Sequence[float] | np.ndarray) -> bytes:
    """Pack *values* into the blob format sqlite-vec reads.

    Values beyond float32 range overflow to +/-inf; NaN and infinities are
    stored as-is.
    """
    arr = np.asarray(values, dtype=np.float64)
    with np.errstate(over="ignore"):
        return arr.astype(FLOAT32_LE).tobytes()


def deserialize_vector(data: bytes | bytearray | memoryview) -> list[float]:
    """Unpack a sqlite-vec float32 blob into Python floats.

    A trailing partial element (``len(data) % 4`` bytes) is ignored.
    """
    count = len(data) // BYTES_PER_ELEMENT
    if count == 0:
        return []
    return np.frombuffer(data, dtype=FLOAT32_LE, count=count).astype(np.float64).tolist()
