import numpy as np
import pytest

from bpnn.core.activations import (
    REGISTRY,
    Activation,
    ActivationRegistry,
    resolve_activations,
    sigmoid,
    sigmoid_deriv,
)
from bpnn.errors import ShapeMismatch, UnknownActivation


def test_sigmoid_values_and_derivative():
    x = np.array([-2.0, 0.0, 3.0])
    expected = 1.0 / (1.0 + np.exp(-x))
    assert np.allclose(sigmoid(x), expected)
    assert np.allclose(sigmoid_deriv(x), expected * (1.0 - expected))
    assert sigmoid(0.0) == pytest.approx(0.5)


def test_sigmoid_is_stable_for_large_inputs():
    out = sigmoid(np.array([-1000.0, 1000.0]))
    assert np.all(np.isfinite(out))
    assert out[0] == pytest.approx(0.0)
    assert out[1] == pytest.approx(1.0)


@pytest.mark.parametrize("name", ["sigmoid", "tanh", "relu", "linear", "identity"])
def test_derivatives_match_finite_differences(name):
    entry = REGISTRY.get(name)
    x = np.array([-1.3, -0.4, 0.7, 2.1])
    eps = 1e-6
    numeric = (entry.fn(x + eps) - entry.fn(x - eps)) / (2 * eps)
    assert np.allclose(entry.deriv(x), numeric, atol=1e-5)


def test_lookup_accepts_enum_and_case_insensitive_names():
    assert REGISTRY.get(Activation.TANH).name == "tanh"
    assert REGISTRY.get(" ReLU ").name == "relu"
    assert "sigmoid" in REGISTRY
    assert "softplus" not in REGISTRY


def test_unknown_activation_is_an_error():
    with pytest.raises(UnknownActivation, match="softplus"):
        REGISTRY.get("softplus")
    with pytest.raises(UnknownActivation):
        REGISTRY.get(3)


def test_custom_registry_entries():
    registry = ActivationRegistry()
    entry = registry.register("square", lambda x: x**2, lambda x: 2 * x)
    assert registry.get("square") is entry
    assert list(registry.names()) == ["square"]
    with pytest.raises(UnknownActivation):
        registry.get("sigmoid")


def test_resolve_defaults_to_sigmoid_everywhere():
    fns = resolve_activations(None, 3)
    assert [fn.name for fn in fns] == ["sigmoid"] * 3


def test_resolve_broadcasts_single_identifier():
    fns = resolve_activations("tanh", 2)
    assert [fn.name for fn in fns] == ["tanh", "tanh"]


def test_resolve_sequence_length_must_match_depth():
    assert [fn.name for fn in resolve_activations(["relu", "linear"], 2)] == ["relu", "linear"]
    with pytest.raises(ShapeMismatch):
        resolve_activations(["relu"], 2)


def test_resolve_passes_through_resolved_functions():
    fns = resolve_activations(["tanh", "sigmoid"], 2)
    assert resolve_activations(fns, 2) == fns
