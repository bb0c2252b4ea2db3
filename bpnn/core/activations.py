"""Activation functions and the registry that resolves them by name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Sequence, Tuple, Union

import numpy as np

from ..errors import ShapeMismatch, UnknownActivation
from .types import Array

ScalarFn = Callable[[Array], Array]


class Activation(str, Enum):
    """Built-in activation identifiers."""

    SIGMOID = "sigmoid"
    TANH = "tanh"
    RELU = "relu"
    LINEAR = "linear"


DEFAULT_ACTIVATION = Activation.SIGMOID


@dataclass(frozen=True)
class ActivationFn:
    """An activation and its derivative, both taking the pre-activation."""

    name: str
    fn: ScalarFn
    deriv: ScalarFn

    def __call__(self, x: Array) -> Array:
        return self.fn(x)


def sigmoid(x: Array) -> Array:
    """Return the logistic sigmoid ``1 / (1 + e^-x)``."""

    # tanh form does not overflow for large |x|
    return 0.5 * (1.0 + np.tanh(0.5 * np.asarray(x, dtype=np.float64)))


def sigmoid_deriv(x: Array) -> Array:
    """Return the sigmoid derivative ``s(x) * (1 - s(x))``."""

    s = sigmoid(x)
    return s * (1.0 - s)


def tanh(x: Array) -> Array:
    """Return the hyperbolic tangent."""

    return np.tanh(x)


def tanh_deriv(x: Array) -> Array:
    """Return the tanh derivative ``1 - tanh(x)**2``."""

    return 1.0 - np.tanh(x) ** 2


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def relu_deriv(x: Array) -> Array:
    """Return the ReLU derivative (0 at and below zero)."""

    return (np.asarray(x) > 0).astype(np.float64)


def linear(x: Array) -> Array:
    """Return ``x`` unchanged as floats."""

    return np.asarray(x, dtype=np.float64)


def linear_deriv(x: Array) -> Array:
    """Return ones shaped like ``x``."""

    return np.ones_like(x, dtype=np.float64)


ActivationSpec = Union[str, Activation, ActivationFn]


class ActivationRegistry:
    """Central registry for activation functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, ActivationFn] = {}

    def register(self, name: str | Activation, fn: ScalarFn, deriv: ScalarFn) -> ActivationFn:
        key = _key(name)
        entry = ActivationFn(key, fn, deriv)
        self._registry[key] = entry
        return entry

    def get(self, name: ActivationSpec) -> ActivationFn:
        if isinstance(name, ActivationFn):
            return name
        if not isinstance(name, str):
            raise UnknownActivation(f"Activation identifier must be a string, got {name!r}")
        try:
            return self._registry[_key(name)]
        except KeyError as exc:
            available = ", ".join(self.names())
            raise UnknownActivation(
                f"Unknown activation {name!r}. Available activations: {available}"
            ) from exc

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _key(name) in self._registry


def _key(name: str | Activation) -> str:
    if isinstance(name, Activation):
        return name.value
    return name.strip().lower()


REGISTRY = ActivationRegistry()
REGISTRY.register(Activation.SIGMOID, sigmoid, sigmoid_deriv)
REGISTRY.register(Activation.TANH, tanh, tanh_deriv)
REGISTRY.register(Activation.RELU, relu, relu_deriv)
REGISTRY.register(Activation.LINEAR, linear, linear_deriv)
# Alias for parity with the usual "identity" naming
REGISTRY.register("identity", linear, linear_deriv)


def resolve_activations(
    activations: ActivationSpec | Sequence[ActivationSpec] | None,
    depth: int,
    registry: ActivationRegistry = REGISTRY,
) -> Tuple[ActivationFn, ...]:
    """Resolve one activation per non-input layer.

    ``None`` selects the default (sigmoid) everywhere, a single identifier is
    applied to every layer, and a sequence must name exactly ``depth`` layers.
    """

    if activations is None:
        activations = DEFAULT_ACTIVATION
    if isinstance(activations, (str, ActivationFn)):
        return tuple(registry.get(activations) for _ in range(depth))
    specs = list(activations)
    if len(specs) != depth:
        raise ShapeMismatch(
            f"Expected {depth} activation identifiers (one per non-input layer), got {len(specs)}"
        )
    return tuple(registry.get(spec) for spec in specs)


__all__ = [
    "Activation",
    "ActivationFn",
    "ActivationRegistry",
    "DEFAULT_ACTIVATION",
    "REGISTRY",
    "resolve_activations",
    "sigmoid",
    "sigmoid_deriv",
    "tanh",
    "tanh_deriv",
    "relu",
    "relu_deriv",
    "linear",
    "linear_deriv",
]
