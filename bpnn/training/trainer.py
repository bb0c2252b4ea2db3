"""Host-side training loop driving the forward and back propagators."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

import numpy as np

from ..core.types import UpdatePolicy
from ..errors import ShapeMismatch
from ..network import Network
from .config import TrainConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainResult:
    """Summary returned by :meth:`Trainer.run`."""

    epochs: int
    final_error: float
    converged: bool
    history: List[float] = field(default_factory=list)


class Trainer:
    """Iterate over an in-order dataset and train ``network`` example by example.

    ``batch_size == 1`` commits every step (``IMMEDIATE``). Larger batches
    accumulate ``batch_size - 1`` examples with ``DEFERRED`` and commit the sum
    with ``FLUSH`` on the last example of each chunk; the accumulators act as a
    plain sum there, so ``momentum`` only applies to unbatched training.
    """

    def __init__(
        self,
        network: Network,
        learning_rate: float,
        momentum: float = 0.0,
        batch_size: int = 1,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        if not (np.isfinite(learning_rate) and learning_rate > 0):
            raise ValueError(f"learning_rate must be positive and finite, got {learning_rate!r}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size!r}")
        if batch_size > 1 and momentum:
            warnings.warn(
                "momentum is ignored when batch_size > 1; batch steps are summed",
                RuntimeWarning,
                stacklevel=2,
            )
        self.network = network
        self.learning_rate = learning_rate
        self.momentum = momentum
        self.batch_size = batch_size
        self.callbacks = list(callbacks or [])

    @classmethod
    def from_config(
        cls, config: TrainConfig, callbacks: Sequence[object] | None = None
    ) -> "Trainer":
        network = Network(
            config.structure,
            activations=config.activations,
            amplitude=config.amplitude,
            finesse=config.finesse,
            rng=config.seed,
        )
        return cls(
            network,
            learning_rate=config.learning_rate,
            momentum=config.momentum,
            batch_size=config.batch_size,
            callbacks=callbacks,
        )

    def run(
        self,
        inputs: Sequence,
        targets: Sequence,
        epochs: int,
        *,
        target_error: float | None = None,
        log_every: int = 100,
    ) -> TrainResult:
        """Train for up to ``epochs`` passes over ``(inputs, targets)``.

        Stops early once the total squared error drops below
        ``target_error``.
        """

        if len(inputs) != len(targets):
            raise ShapeMismatch(
                f"Got {len(inputs)} inputs but {len(targets)} targets"
            )
        if len(inputs) == 0:
            raise ValueError("Cannot train on an empty dataset")

        logger.info(
            "Training %s network on %d examples for up to %d epochs (batch_size=%d)",
            list(self.network.structure),
            len(inputs),
            epochs,
            self.batch_size,
        )
        history: List[float] = []
        converged = False
        epoch = 0
        error = self.network.total_error(inputs, targets)
        for epoch in range(1, epochs + 1):
            self.train_epoch(inputs, targets)
            error = self.network.total_error(inputs, targets)
            history.append(error)
            if not np.isfinite(error):
                logger.warning("Training diverged at epoch %d (error=%s)", epoch, error)
                break
            self._emit_epoch(epoch, {"loss": error, "mean_loss": error / len(inputs)})
            if epoch % max(1, log_every) == 0:
                logger.debug("epoch %d: total squared error %.6f", epoch, error)
            if target_error is not None and error < target_error:
                converged = True
                logger.info("Reached target error %.6g at epoch %d", target_error, epoch)
                break

        if not converged:
            logger.info("Stopped after %d epochs with total squared error %.6f", epoch, error)
        return TrainResult(epochs=epoch, final_error=error, converged=converged, history=history)

    def train_epoch(self, inputs: Sequence, targets: Sequence) -> None:
        if self.batch_size == 1:
            for x, y in zip(inputs, targets):
                self.network.train_example(
                    x, y, self.learning_rate, self.momentum, UpdatePolicy.IMMEDIATE
                )
            return
        for start in range(0, len(inputs), self.batch_size):
            stop = min(start + self.batch_size, len(inputs))
            for idx in range(start, stop):
                policy = UpdatePolicy.FLUSH if idx == stop - 1 else UpdatePolicy.DEFERRED
                self.network.train_example(
                    inputs[idx], targets[idx], self.learning_rate, 1.0, policy
                )

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


def train_from_config(
    config: TrainConfig,
    inputs: Sequence,
    targets: Sequence,
    callbacks: Sequence[object] | None = None,
) -> tuple[Network, TrainResult]:
    """Build a network from ``config`` and train it on ``(inputs, targets)``."""

    trainer = Trainer.from_config(config, callbacks=callbacks)
    result = trainer.run(
        inputs,
        targets,
        config.epochs,
        target_error=config.target_error,
        log_every=config.log_every,
    )
    for callback in trainer.callbacks:
        if hasattr(callback, "close"):
            callback.close()  # type: ignore[attr-defined]
    return trainer.network, result


__all__ = ["TrainResult", "Trainer", "train_from_config"]
