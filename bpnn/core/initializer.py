"""Allocation and randomisation of the per-layer containers."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .types import Array, ParameterSet, check_structure

# Inclusive upper bound of the integer draws.
DRAW_MAX = 2**31 - 1


def make_rng(rng: np.random.Generator | int | None = None) -> np.random.Generator:
    """Return ``rng`` or a fresh generator seeded from it."""

    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def discrete_uniform(
    rng: np.random.Generator, shape, amplitude: float, finesse: int
) -> Array:
    """Draw ``amplitude * (draw mod finesse) / finesse`` for every entry of ``shape``."""

    draws = rng.integers(0, DRAW_MAX, size=shape, endpoint=True)
    return amplitude * (draws % finesse).astype(np.float64) / float(finesse)


def initialize(
    structure: Sequence[int],
    amplitude: float = 1.0,
    finesse: int = 1000,
    rng: np.random.Generator | int | None = None,
) -> ParameterSet:
    """Shape and randomise the containers for ``structure``.

    Biases and weights are drawn from a discretised uniform distribution on
    ``[0, amplitude)`` with ``finesse`` levels. Layer states and the update
    accumulators are zero-filled. ``rng`` is a ``numpy.random.Generator`` or a
    seed; the process-global numpy state is never touched.
    """

    dims = check_structure(structure)
    if isinstance(finesse, bool) or not isinstance(finesse, (int, np.integer)) or finesse < 1:
        raise ValueError(f"finesse must be a positive integer, got {finesse!r}")
    finesse = int(finesse)
    generator = make_rng(rng)

    a = [np.zeros(width, dtype=np.float64) for width in dims]
    z: list[Array] = []
    bias: list[Array] = []
    delta_bias: list[Array] = []
    weights: list[Array] = []
    delta_weights: list[Array] = []
    for in_dim, out_dim in zip(dims[:-1], dims[1:]):
        z.append(np.zeros(out_dim, dtype=np.float64))
        bias.append(discrete_uniform(generator, out_dim, amplitude, finesse))
        delta_bias.append(np.zeros(out_dim, dtype=np.float64))
        weights.append(discrete_uniform(generator, (in_dim, out_dim), amplitude, finesse))
        delta_weights.append(np.zeros((in_dim, out_dim), dtype=np.float64))

    return ParameterSet(
        z=z,
        a=a,
        bias=bias,
        delta_bias=delta_bias,
        weights=weights,
        delta_weights=delta_weights,
    )


__all__ = ["DRAW_MAX", "discrete_uniform", "initialize", "make_rng"]
