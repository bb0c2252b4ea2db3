"""Squared-error loss used to monitor training."""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from ..core.types import Array


def squared_error(prediction: Array, target: Array) -> Tuple[float, Array]:
    """Return ``sum((prediction - target)**2)`` and the error vector."""

    diff = np.asarray(prediction, dtype=np.float64) - np.asarray(target, dtype=np.float64)
    return float(np.sum(np.square(diff))), diff


def total_squared_error(predictions: Iterable[Array], targets: Iterable[Array]) -> float:
    total = 0.0
    for prediction, target in zip(predictions, targets):
        loss, _ = squared_error(prediction, target)
        total += loss
    return total


__all__ = ["squared_error", "total_squared_error"]
