import numpy as np
import pytest

from bpnn.core.types import UpdatePolicy
from bpnn.errors import InvalidUpdatePolicy, UnknownActivation
from bpnn.network import Network


def test_network_resolves_activations_once():
    net = Network([2, 3, 1], activations=["tanh", "sigmoid"], rng=0)
    assert net.activation_names == ("tanh", "sigmoid")
    assert net.parameter_count() == 2 * 3 + 3 + 3 * 1 + 1

    with pytest.raises(UnknownActivation):
        Network([2, 1], activations="softsign")


def test_seeded_networks_are_identical():
    first = Network([3, 4, 2], rng=123)
    second = Network([3, 4, 2], rng=123)
    for key, value in first.state_dict().items():
        assert np.array_equal(value, second.state_dict()[key])
    x = np.array([0.1, 0.2, 0.3])
    assert np.array_equal(first.predict(x), second.predict(x))


def test_predict_returns_a_copy():
    net = Network([2, 2], rng=0)
    out = net.predict([1.0, 0.0])
    out[:] = -1.0
    assert not np.array_equal(net.params.a[-1], out)


def test_deferred_training_then_commit():
    net = Network([2, 2, 1], rng=1)
    before = net.state_dict()
    net.train_example([1.0, 0.0], [1.0], learning_rate=0.5, momentum=1.0, policy="deferred")
    net.train_example([0.0, 1.0], [1.0], learning_rate=0.5, momentum=1.0, policy="deferred")
    after_deferred = net.state_dict()
    for key in before:
        assert np.array_equal(before[key], after_deferred[key])

    pending = [d.copy() for d in net.params.delta_weights]
    net.commit()
    for idx, delta in enumerate(pending):
        assert np.allclose(net.params.weights[idx], before[f"W{idx}"] + delta)
        assert not np.any(net.params.delta_weights[idx])


def test_train_example_rejects_unknown_policy():
    net = Network([2, 1], rng=0)
    with pytest.raises(InvalidUpdatePolicy):
        net.train_example([0.0, 1.0], [1.0], learning_rate=0.1, policy="minibatch")


def test_reset_reinitialises_parameters():
    net = Network([2, 2, 1], rng=5)
    initial = net.state_dict()
    for _ in range(10):
        net.train_example([1.0, 1.0], [0.0], learning_rate=0.5, policy=UpdatePolicy.IMMEDIATE)
    net.reset(5)
    for key, value in net.state_dict().items():
        assert np.array_equal(value, initial[key])
