"""Stateful wrapper bundling a topology with its containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

import numpy as np

from .core.activations import ActivationFn, resolve_activations
from .core.initializer import initialize
from .core.propagation import Activations, back_propagate, commit, forward_propagate
from .core.types import Array, ParameterSet, UpdatePolicy, check_structure
from .training.losses import total_squared_error


@dataclass
class Network:
    """Fully-connected feed-forward network over a :class:`ParameterSet`.

    Activation identifiers are resolved once at construction; every call
    afterwards dispatches through the resolved functions.
    """

    structure: Sequence[int]
    activations: Activations = None
    amplitude: float = 1.0
    finesse: int = 1000
    rng: np.random.Generator | int | None = None
    params: ParameterSet = field(init=False, repr=False)
    _fns: Tuple[ActivationFn, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.structure = check_structure(self.structure)
        self._fns = resolve_activations(self.activations, len(self.structure) - 1)
        self.reset(self.rng)

    def reset(self, rng: np.random.Generator | int | None = None) -> None:
        self.params = initialize(self.structure, self.amplitude, self.finesse, rng=rng)

    @property
    def activation_names(self) -> Tuple[str, ...]:
        return tuple(fn.name for fn in self._fns)

    def predict(self, inputs) -> Array:
        """Run a forward pass and return a copy of the output layer."""

        p = self.params
        out = forward_propagate(self.structure, inputs, p.z, p.a, p.bias, p.weights, self._fns)
        return out.copy()

    def train_example(
        self,
        inputs,
        target,
        learning_rate: float,
        momentum: float = 0.0,
        policy: UpdatePolicy | str = UpdatePolicy.IMMEDIATE,
    ) -> Array:
        """Forward ``inputs`` then backpropagate against ``target``.

        Returns the prediction made before the update.
        """

        prediction = self.predict(inputs)
        p = self.params
        back_propagate(
            self.structure,
            target,
            p.z,
            p.a,
            p.bias,
            p.delta_bias,
            p.weights,
            p.delta_weights,
            learning_rate,
            momentum,
            policy,
            self._fns,
        )
        return prediction

    def commit(self) -> None:
        """Apply and clear steps accumulated by ``DEFERRED`` training."""

        p = self.params
        commit(p.bias, p.delta_bias, p.weights, p.delta_weights)

    def zero_accumulators(self) -> None:
        """Clear the accumulators, e.g. before switching from ``IMMEDIATE`` to batches."""

        for delta in (*self.params.delta_weights, *self.params.delta_bias):
            delta.fill(0.0)

    def total_error(self, inputs: Iterable, targets: Iterable) -> float:
        """Sum of squared output errors over a dataset."""

        return total_squared_error((self.predict(x) for x in inputs), targets)

    def state_dict(self) -> dict[str, Array]:
        state: dict[str, Array] = {}
        for idx, (W, b) in enumerate(zip(self.params.weights, self.params.bias)):
            state[f"W{idx}"] = W.copy()
            state[f"b{idx}"] = b.copy()
        return state

    def parameter_count(self) -> int:
        p = self.params
        return int(sum(w.size for w in p.weights) + sum(b.size for b in p.bias))


__all__ = ["Network"]
