import numpy as np
import pytest

from bpnn.training.losses import squared_error, total_squared_error


def test_squared_error_returns_loss_and_difference():
    loss, diff = squared_error(np.array([0.5, 1.0]), np.array([0.0, 1.0]))
    assert loss == pytest.approx(0.25)
    assert np.allclose(diff, [0.5, 0.0])


def test_total_squared_error_sums_examples():
    assert total_squared_error([[1.0], [0.0]], [[0.0], [0.0]]) == pytest.approx(1.0)
    assert total_squared_error([], []) == 0.0
