"""Core typing contracts and shape checks for bpnn."""

from __future__ import annotations

from enum import Enum
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from ..errors import DTypeMismatch, InvalidUpdatePolicy, ShapeMismatch

Array = np.ndarray


class ParameterSet(NamedTuple):
    """Per-layer containers produced by :func:`bpnn.core.initializer.initialize`."""

    z: List[Array]
    a: List[Array]
    bias: List[Array]
    delta_bias: List[Array]
    weights: List[Array]
    delta_weights: List[Array]


class UpdatePolicy(str, Enum):
    """When gradient steps are committed to the live weights."""

    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    FLUSH = "flush"

    @classmethod
    def parse(cls, value: "UpdatePolicy | str") -> "UpdatePolicy":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            key = _LEGACY_POLICY_NAMES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        valid = ", ".join(m.value for m in cls)
        raise InvalidUpdatePolicy(f"Unknown update policy {value!r}. Expected one of: {valid}")


# Legacy selector names; the empty string is not accepted.
_LEGACY_POLICY_NAMES = {"online": "immediate", "batch": "flush"}


def check_structure(structure: Sequence[int]) -> Tuple[int, ...]:
    """Return ``structure`` as a tuple of ints or raise :class:`ShapeMismatch`."""

    dims = tuple(structure)
    if len(dims) < 2:
        raise ShapeMismatch(
            f"structure needs at least an input and an output layer, got {list(dims)}"
        )
    for idx, width in enumerate(dims):
        if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width < 1:
            raise ShapeMismatch(f"structure[{idx}] must be a positive integer, got {width!r}")
    return tuple(int(w) for w in dims)


def _check_float(name: str, idx: int, arr: Array) -> None:
    if not np.issubdtype(arr.dtype, np.floating):
        raise DTypeMismatch(f"{name}[{idx}] has dtype {arr.dtype}, expected a floating-point dtype")


def check_vectors(name: str, vectors: Sequence[Array], widths: Sequence[int]) -> None:
    """Validate a list of 1-D containers against the expected widths."""

    if len(vectors) != len(widths):
        raise ShapeMismatch(f"{name} holds {len(vectors)} layers, expected {len(widths)}")
    for idx, (vec, width) in enumerate(zip(vectors, widths)):
        if not isinstance(vec, np.ndarray) or vec.shape != (width,):
            raise ShapeMismatch(
                f"{name}[{idx}] has shape {np.shape(vec)}, expected ({width},)"
            )
        _check_float(name, idx, vec)


def check_matrices(name: str, matrices: Sequence[Array], dims: Sequence[int]) -> None:
    """Validate a list of weight-shaped containers against ``dims``."""

    if len(matrices) != len(dims) - 1:
        raise ShapeMismatch(f"{name} holds {len(matrices)} layers, expected {len(dims) - 1}")
    for idx, mat in enumerate(matrices):
        expected = (dims[idx], dims[idx + 1])
        if not isinstance(mat, np.ndarray) or mat.shape != expected:
            raise ShapeMismatch(f"{name}[{idx}] has shape {np.shape(mat)}, expected {expected}")
        _check_float(name, idx, mat)


def as_vector(name: str, values, width: int) -> Array:
    """Return ``values`` as a float vector of length ``width``."""

    vec = np.asarray(values, dtype=np.float64)
    if vec.ndim != 1 or vec.shape[0] != width:
        raise ShapeMismatch(f"{name} has shape {vec.shape}, expected ({width},)")
    return vec


__all__ = [
    "Array",
    "ParameterSet",
    "UpdatePolicy",
    "check_structure",
    "check_vectors",
    "check_matrices",
    "as_vector",
]
