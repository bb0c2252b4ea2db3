import json

import pytest

from bpnn.errors import ShapeMismatch, UnknownActivation
from bpnn.training.config import TrainConfig, load_config


def test_from_mapping_applies_defaults():
    config = TrainConfig.from_mapping({"structure": [2, 2, 1]})
    assert config.structure == [2, 2, 1]
    assert config.activations is None
    assert config.learning_rate == 0.5
    assert config.batch_size == 1
    assert config.finesse == 1000


def test_single_activation_is_broadcast():
    config = TrainConfig(structure=[2, 3, 1], activations="tanh")
    assert config.activations == ["tanh", "tanh"]


def test_unknown_keys_and_missing_structure_are_rejected():
    with pytest.raises(KeyError, match="learning_rte"):
        TrainConfig.from_mapping({"structure": [2, 1], "learning_rte": 0.1})
    with pytest.raises(KeyError, match="structure"):
        TrainConfig.from_mapping({"epochs": 3})


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"structure": [2]}, ShapeMismatch),
        ({"learning_rate": 0.0}, ValueError),
        ({"batch_size": 0}, ValueError),
        ({"epochs": 0}, ValueError),
        ({"finesse": 0}, ValueError),
        ({"finesse": 2.7}, ValueError),
        ({"learning_rate": float("inf")}, ValueError),
        ({"momentum": float("nan")}, ValueError),
        ({"activations": ["sigmoid", "cosine"]}, UnknownActivation),
    ],
)
def test_invalid_values_raise(overrides, error):
    data = {"structure": [2, 2, 1]}
    data.update(overrides)
    with pytest.raises(error):
        TrainConfig.from_mapping(data)


def test_load_json_config(tmp_path):
    path = tmp_path / "xor.json"
    path.write_text(json.dumps({"structure": [2, 2, 1], "epochs": 50, "seed": 3}))
    config = load_config(path)
    assert config.epochs == 50
    assert config.seed == 3
    assert config.to_dict()["structure"] == [2, 2, 1]


def test_load_yaml_config(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "xor.yaml"
    path.write_text(
        "structure: [2, 2, 1]\n"
        "activations: [tanh, sigmoid]\n"
        "momentum: 0.5\n"
        "target_error: 0.05\n"
    )
    config = load_config(path)
    assert config.activations == ["tanh", "sigmoid"]
    assert config.momentum == 0.5
    assert config.target_error == 0.05


def test_load_config_rejects_bad_files(tmp_path):
    txt = tmp_path / "config.txt"
    txt.write_text("structure: [2, 1]")
    with pytest.raises(ValueError, match="Unsupported"):
        load_config(txt)

    listing = tmp_path / "config.json"
    listing.write_text("[2, 1]")
    with pytest.raises(TypeError):
        load_config(listing)
