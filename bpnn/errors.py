"""Exception hierarchy raised by the engine."""

from __future__ import annotations


class BPNNError(Exception):
    """Base class for all engine errors."""


class ShapeMismatch(BPNNError, ValueError):
    """A structure, vector or container has an inconsistent size."""


class DTypeMismatch(ShapeMismatch, TypeError):
    """A container does not hold floating-point values."""


class UnknownActivation(BPNNError, KeyError):
    """An activation identifier has no registry entry."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class InvalidUpdatePolicy(BPNNError, ValueError):
    """An update-policy selector is outside the defined variants."""


__all__ = [
    "BPNNError",
    "ShapeMismatch",
    "DTypeMismatch",
    "UnknownActivation",
    "InvalidUpdatePolicy",
]
