"""Training configuration loaded from mappings or JSON/YAML files."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, List, Mapping, Optional

from ..core.activations import REGISTRY as ACTIVATIONS
from ..core.types import check_structure


@dataclass
class TrainConfig:
    """Hyper-parameters for a :class:`~bpnn.training.trainer.Trainer` run."""

    structure: List[int]
    activations: Optional[List[str]] = None
    amplitude: float = 1.0
    finesse: int = 1000
    learning_rate: float = 0.5
    momentum: float = 0.0
    batch_size: int = 1
    epochs: int = 1000
    target_error: Optional[float] = None
    seed: Optional[int] = None
    log_every: int = 100

    def __post_init__(self) -> None:
        self.structure = list(check_structure(self.structure))
        if isinstance(self.activations, str):
            self.activations = [self.activations] * (len(self.structure) - 1)
        if self.activations is not None:
            self.activations = [str(name) for name in self.activations]
            for name in self.activations:
                # raises UnknownActivation
                ACTIVATIONS.get(name)
        if isinstance(self.finesse, bool) or not isinstance(self.finesse, int) or self.finesse < 1:
            raise ValueError(f"finesse must be a positive integer, got {self.finesse!r}")
        if not (math.isfinite(self.learning_rate) and self.learning_rate > 0):
            raise ValueError(f"learning_rate must be positive and finite, got {self.learning_rate}")
        if not math.isfinite(self.momentum):
            raise ValueError(f"momentum must be finite, got {self.momentum}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.epochs < 1:
            raise ValueError(f"epochs must be >= 1, got {self.epochs}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TrainConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise KeyError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        if "structure" not in data:
            raise KeyError("Config is missing required key: structure")
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _read_config_file(path: Path) -> Mapping[str, Any]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load config files in YAML format") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def load_config(path: str | Path) -> TrainConfig:
    """Read a :class:`TrainConfig` from a ``.json``, ``.yaml`` or ``.yml`` file."""

    return TrainConfig.from_mapping(_read_config_file(Path(path)))


__all__ = ["TrainConfig", "load_config"]
