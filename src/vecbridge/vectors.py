"""Pure numeric helpers for vectors held in application code.

None of these touch the database; they mirror what the vec_* SQL functions
compute so results can be checked or pre-processed client side.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from numbers import Real
from typing import Any

import numpy as np

from vecbridge.exceptions import DimensionMismatchError, InvalidVectorError

# Output sizes of common embedding models.
EMBEDDING_DIMENSIONS: dict[str, int] = {
    "OPENAI_ADA_002": 1536,
    "OPENAI_3_SMALL": 1536,
    "OPENAI_3_LARGE": 3072,
    "COHERE_V3": 1024,
    "MINILM_L6_V2": 384,
    "MPNET_BASE_V2": 768,
    "BERT_BASE": 768,
    "BGE_SMALL": 384,
    "BGE_BASE": 768,
    "BGE_LARGE": 1024,
    "JINA_V2": 768,
    "VOYAGE_2": 1024,
}


def _pair(a: Sequence[float], b: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    left = np.asarray(a, dtype=np.float64)
    right = np.asarray(b, dtype=np.float64)
    if left.shape != right.shape:
        raise DimensionMismatchError(
            f"Vectors must have the same dimensions: {len(left)} != {len(right)}"
        )
    return left, right


def typed_vector(dimensions: int, values: Sequence[float]) -> list[float]:
    """Return *values* as a list, requiring exactly *dimensions* elements."""
    if len(values) != dimensions:
        raise DimensionMismatchError(
            f"Vector dimension mismatch: expected {dimensions}, got {len(values)}"
        )
    return list(values)


def create_vector(dimensions: int, generator: Callable[[int], float]) -> list[float]:
    """Build a vector by calling ``generator(i)`` for each index."""
    return [generator(i) for i in range(dimensions)]


def zero_vector(dimensions: int) -> list[float]:
    return [0.0] * dimensions


def random_vector(dimensions: int, rng: np.random.Generator | None = None) -> list[float]:
    """Uniform values in ``[0, 1)``."""
    if rng is None:
        rng = np.random.default_rng()
    return rng.random(dimensions).tolist()


def validate_vector(value: Any, dimensions: int | None = None) -> bool:
    """Check that *value* is a list/tuple/array of real numbers without NaN.

    Infinities are accepted. Returns True or raises.

    Raises:
        InvalidVectorError: not a sequence, or an element is not a number / is NaN.
        DimensionMismatchError: *dimensions* given and the length differs.
    """
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidVectorError("Vector must be one-dimensional")
        value = value.tolist()
    if not isinstance(value, (list, tuple)):
        raise InvalidVectorError("Vector must be an array")

    for element in value:
        if isinstance(element, bool) or not isinstance(element, Real) or math.isnan(element):
            raise InvalidVectorError("Vector must contain only valid numbers")

    if dimensions is not None and len(value) != dimensions:
        raise DimensionMismatchError(
            f"Vector dimension mismatch: expected {dimensions}, got {len(value)}"
        )
    return True


def normalize_vector(vector: Sequence[float]) -> list[float]:
    """Scale to unit L2 norm; a zero vector is returned unchanged."""
    arr = np.asarray(vector, dtype=np.float64)
    magnitude = float(np.linalg.norm(arr))
    if magnitude == 0.0:
        return list(vector)
    return (arr / magnitude).tolist()


def l2_distance(a: Sequence[float], b: Sequence[float]) -> float:
    left, right = _pair(a, b)
    return float(np.linalg.norm(left - right))


def dot_product(a: Sequence[float], b: Sequence[float]) -> float:
    left, right = _pair(a, b)
    return float(np.dot(left, right))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """1 for same direction, 0 orthogonal, -1 opposite; 0.0 if either norm is zero."""
    left, right = _pair(a, b)
    denom = float(np.linalg.norm(left) * np.linalg.norm(right))
    if denom == 0.0:
        return 0.0
    return float(np.dot(left, right) / denom)


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """``1 - cosine_similarity``: 0 identical, 1 orthogonal, 2 opposite."""
    return 1.0 - cosine_similarity(a, b)
