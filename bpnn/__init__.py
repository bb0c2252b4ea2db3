"""bpnn public API."""

from .core import activations  # noqa: F401
from .core.activations import REGISTRY, Activation, ActivationFn, resolve_activations
from .core.initializer import initialize
from .core.propagation import back_propagate, commit, error_gradients, forward_propagate
from .core.types import ParameterSet, UpdatePolicy
from .errors import BPNNError, DTypeMismatch, InvalidUpdatePolicy, ShapeMismatch, UnknownActivation
from .network import Network
from .training.config import TrainConfig, load_config
from .training.trainer import Trainer, TrainResult, train_from_config
from .utils import xor_dataset

__all__ = [
    "Activation",
    "ActivationFn",
    "BPNNError",
    "DTypeMismatch",
    "InvalidUpdatePolicy",
    "Network",
    "ParameterSet",
    "REGISTRY",
    "ShapeMismatch",
    "TrainConfig",
    "TrainResult",
    "Trainer",
    "UnknownActivation",
    "UpdatePolicy",
    "activations",
    "back_propagate",
    "commit",
    "error_gradients",
    "forward_propagate",
    "initialize",
    "load_config",
    "resolve_activations",
    "train_from_config",
    "xor_dataset",
]
