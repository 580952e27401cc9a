"""Float32 blob codec: byte layout and round-trip behaviour."""
from __future__ import annotations

import math
import struct

import numpy as np
import pytest

from vecbridge.codec import deserialize_vector, serialize_vector


def test_layout_is_little_endian_float32_without_header():
    assert serialize_vector([1.0]) == b"\x00\x00\x80\x3f"
    assert serialize_vector([1.0, 0.0, -2.5]) == struct.pack("<3f", 1.0, 0.0, -2.5)


def test_empty_vector_is_zero_length():
    assert serialize_vector([]) == b""
    assert deserialize_vector(b"") == []


def test_round_trip_matches_float32_precision():
    values = [0.1, -2.5, 1e-3, 123456.789, 3.0]
    expected = [float(np.float32(v)) for v in values]
    assert deserialize_vector(serialize_vector(values)) == expected
    assert deserialize_vector(serialize_vector(values)) == pytest.approx(values, rel=1e-6)


def test_end_to_end_unit_vector():
    assert deserialize_vector(serialize_vector([1, 0, 0, 0])) == [1.0, 0.0, 0.0, 0.0]


def test_nan_survives_round_trip():
    out = deserialize_vector(serialize_vector([1.0, float("nan"), 2.0]))
    assert out[0] == 1.0
    assert math.isnan(out[1])
    assert out[2] == 2.0


def test_infinities_keep_their_sign():
    out = deserialize_vector(serialize_vector([float("inf"), float("-inf")]))
    assert out == [math.inf, -math.inf]


def test_signed_zero_is_preserved():
    out = deserialize_vector(serialize_vector([-0.0]))
    assert out == [0.0]
    assert math.copysign(1.0, out[0]) == -1.0


def test_values_beyond_float32_range_overflow_to_infinity():
    out = deserialize_vector(serialize_vector([1e40, -1e40]))
    assert out == [math.inf, -math.inf]


def test_trailing_partial_element_is_ignored():
    blob = serialize_vector([1.0, 2.0]) + b"\x01\x02"
    assert deserialize_vector(blob) == [1.0, 2.0]
    assert deserialize_vector(b"\x01\x02\x03") == []


def test_accepts_numpy_arrays_and_buffer_types():
    arr = np.array([0.5, -0.25], dtype=np.float32)
    blob = serialize_vector(arr)
    assert blob == arr.astype("<f4").tobytes()
    assert deserialize_vector(bytearray(blob)) == [0.5, -0.25]
    assert deserialize_vector(memoryview(blob)) == [0.5, -0.25]


def test_decoded_values_are_python_floats():
    out = deserialize_vector(serialize_vector([1, 2]))
    assert all(type(v) is float for v in out)
