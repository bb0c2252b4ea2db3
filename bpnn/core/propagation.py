"""Forward inference and backpropagation over host-owned containers.

Both propagators validate every shape, activation and policy before the
first write, so a failing call leaves the containers untouched.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import DTypeMismatch, ShapeMismatch
from .activations import ActivationFn, ActivationSpec, resolve_activations
from .types import (
    Array,
    UpdatePolicy,
    as_vector,
    check_matrices,
    check_structure,
    check_vectors,
)

Activations = Optional[Union[ActivationSpec, Sequence[ActivationSpec]]]


def _check_forward_state(
    dims: Tuple[int, ...],
    z: Sequence[Array],
    a: Sequence[Array],
    bias: Sequence[Array],
    weights: Sequence[Array],
) -> None:
    check_vectors("a", a, dims)
    check_vectors("z", z, dims[1:])
    check_vectors("bias", bias, dims[1:])
    check_matrices("weights", weights, dims)


def forward_propagate(
    structure: Sequence[int],
    input_state,
    z: List[Array],
    a: List[Array],
    bias: Sequence[Array],
    weights: Sequence[Array],
    activations: Activations = None,
) -> Array:
    """Propagate ``input_state`` through the network.

    Fills ``a[0]`` with the input, then ``z[l-1]`` and ``a[l]`` for every
    following layer. Returns ``a[-1]``, the network prediction.
    """

    dims = check_structure(structure)
    x = as_vector("input_state", input_state, dims[0])
    _check_forward_state(dims, z, a, bias, weights)
    fns = resolve_activations(activations, len(dims) - 1)

    a[0][:] = x
    for layer in range(1, len(dims)):
        z[layer - 1][:] = bias[layer - 1] + a[layer - 1] @ weights[layer - 1]
        a[layer][:] = fns[layer - 1](z[layer - 1])
    return a[-1]


def _output_errors(
    dims: Tuple[int, ...],
    y: Array,
    z: Sequence[Array],
    a: Sequence[Array],
    weights: Sequence[Array],
    fns: Sequence[ActivationFn],
) -> List[Array]:
    # errors[i] is the error signal of layer i + 1
    depth = len(dims) - 1
    errors: List[Array] = [np.empty(0)] * depth
    errors[-1] = (a[-1] - y) * fns[-1].deriv(z[-1])
    for layer in range(depth - 1, 0, -1):
        errors[layer - 1] = (weights[layer] @ errors[layer]) * fns[layer - 1].deriv(z[layer - 1])
    return errors


def error_gradients(
    structure: Sequence[int],
    target,
    z: Sequence[Array],
    a: Sequence[Array],
    weights: Sequence[Array],
    activations: Activations = None,
) -> Tuple[List[Array], List[Array]]:
    """Return ``(bias_grads, weight_grads)`` of ``0.5 * sum((a[-1] - target)**2)``.

    Uses the ``z``/``a`` state of the most recent forward pass.
    """

    dims = check_structure(structure)
    y = as_vector("target", target, dims[-1])
    check_vectors("a", a, dims)
    check_vectors("z", z, dims[1:])
    check_matrices("weights", weights, dims)
    fns = resolve_activations(activations, len(dims) - 1)

    errors = _output_errors(dims, y, z, a, weights, fns)
    weight_grads = [np.outer(a[layer], errors[layer]) for layer in range(len(errors))]
    return errors, weight_grads


def back_propagate(
    structure: Sequence[int],
    target,
    z: Sequence[Array],
    a: Sequence[Array],
    bias: Sequence[Array],
    delta_bias: Sequence[Array],
    weights: Sequence[Array],
    delta_weights: Sequence[Array],
    learning_rate: float,
    momentum: float,
    policy: UpdatePolicy | str,
    activations: Activations = None,
) -> None:
    """Backpropagate the squared error against ``target`` and update parameters.

    Every call folds the new gradient step into the accumulators
    (``delta = momentum * delta - learning_rate * grad``). ``policy`` then
    decides what is committed: ``IMMEDIATE`` adds the accumulators to the
    live parameters, ``DEFERRED`` commits nothing, and ``FLUSH`` commits the
    accumulated sum and clears the accumulators.

    ``IMMEDIATE`` leaves its already-applied step in the accumulators so
    momentum can carry it into the next call. A host switching from
    ``IMMEDIATE`` to ``DEFERRED`` or ``FLUSH`` (or calling :func:`commit`)
    must first zero the accumulators, or that step is applied a second time.
    """

    dims = check_structure(structure)
    selected = UpdatePolicy.parse(policy)
    if not (np.isfinite(learning_rate) and learning_rate > 0):
        raise ValueError(f"learning_rate must be positive and finite, got {learning_rate!r}")
    if not np.isfinite(momentum):
        raise ValueError(f"momentum must be finite, got {momentum!r}")
    check_vectors("bias", bias, dims[1:])
    check_vectors("delta_bias", delta_bias, dims[1:])
    check_matrices("delta_weights", delta_weights, dims)
    bias_grads, weight_grads = error_gradients(structure, target, z, a, weights, activations)

    for layer in range(len(dims) - 1):
        delta_weights[layer][:] = momentum * delta_weights[layer] - learning_rate * weight_grads[layer]
        delta_bias[layer][:] = momentum * delta_bias[layer] - learning_rate * bias_grads[layer]

    if selected is UpdatePolicy.DEFERRED:
        return
    for layer in range(len(dims) - 1):
        weights[layer] += delta_weights[layer]
        bias[layer] += delta_bias[layer]
        if selected is UpdatePolicy.FLUSH:
            delta_weights[layer].fill(0.0)
            delta_bias[layer].fill(0.0)


def commit(
    bias: Sequence[Array],
    delta_bias: Sequence[Array],
    weights: Sequence[Array],
    delta_weights: Sequence[Array],
) -> None:
    """Apply and clear the accumulators without a new training example.

    Only meaningful after ``DEFERRED`` calls: accumulators left behind by
    ``IMMEDIATE`` hold a step that is already part of the live parameters.
    """

    counts = (len(bias), len(delta_bias), len(weights), len(delta_weights))
    if len(set(counts)) != 1:
        raise ShapeMismatch(f"Container layer counts differ: {counts}")
    for layer in range(len(weights)):
        if (
            np.shape(weights[layer]) != np.shape(delta_weights[layer])
            or np.shape(bias[layer]) != np.shape(delta_bias[layer])
        ):
            raise ShapeMismatch(f"Accumulator shapes differ from parameters at layer {layer}")
        for name, arr in (
            ("weights", weights[layer]),
            ("bias", bias[layer]),
            ("delta_weights", delta_weights[layer]),
            ("delta_bias", delta_bias[layer]),
        ):
            if not np.issubdtype(np.asarray(arr).dtype, np.floating):
                raise DTypeMismatch(
                    f"{name}[{layer}] has dtype {np.asarray(arr).dtype}, "
                    "expected a floating-point dtype"
                )
    for layer in range(len(weights)):
        weights[layer] += delta_weights[layer]
        bias[layer] += delta_bias[layer]
        delta_weights[layer].fill(0.0)
        delta_bias[layer].fill(0.0)


__all__ = ["forward_propagate", "back_propagate", "error_gradients", "commit"]
