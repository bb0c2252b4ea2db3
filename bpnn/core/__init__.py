"""Core numerical primitives for bpnn."""

from . import activations, initializer, propagation, types

__all__ = ["activations", "initializer", "propagation", "types"]
