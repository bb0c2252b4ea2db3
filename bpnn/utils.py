"""Small dataset helpers."""

from __future__ import annotations

from typing import Tuple

import numpy as np


def xor_dataset() -> Tuple[np.ndarray, np.ndarray]:
    """Return the four XOR examples as ``(inputs, targets)`` of shape (4, 2) and (4, 1)."""

    x = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]], dtype=np.float64)
    y = np.array([[0.0], [1.0], [1.0], [0.0]], dtype=np.float64)
    return x, y
