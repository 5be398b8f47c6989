import json
import logging

import numpy as np
import pytest
import yaml

from ffnet import DEFAULT_FLAT_SPOT, EngineConfig, configure_logging


def test_defaults():
    config = EngineConfig()
    assert config.flat_spot == DEFAULT_FLAT_SPOT
    assert config.performance_decimals == 4
    assert config.n_workers is None
    assert config.log_level == "WARNING"


def test_json_round_trip(tmp_path):
    config = EngineConfig(name="run", flat_spot=0.05, n_workers=2, seed=3)
    path = tmp_path / "run.json"

    config.save(path)

    assert json.loads(path.read_text())["flat_spot"] == 0.05
    assert EngineConfig.load(path) == config


@pytest.mark.parametrize("suffix", [".yaml", ".yml"])
def test_yaml_round_trip(tmp_path, suffix):
    config = EngineConfig(name="run", performance_decimals=2, n_batches=8)
    path = tmp_path / f"run{suffix}"

    config.save(path)

    assert yaml.safe_load(path.read_text())["n_batches"] == 8
    assert EngineConfig.load(path) == config


def test_copy_with_overrides():
    base = EngineConfig(name="base")
    copy = base.copy(name="derived", flat_spot=0.0)
    assert copy.name == "derived"
    assert copy.flat_spot == 0.0
    assert base.flat_spot == 0.01


def test_unknown_keys_rejected():
    with pytest.raises(ValueError):
        EngineConfig.from_dict({"flat_spot": 0.01, "learning_rate": 0.1})


@pytest.mark.parametrize("overrides", [
    {"flat_spot": -0.1},
    {"performance_decimals": -1},
    {"n_workers": 0},
    {"n_batches": -2},
    {"log_level": "LOUD"},
    {"log_level": 10},
])
def test_invalid_values(overrides):
    with pytest.raises(ValueError):
        EngineConfig(**overrides)


def test_seeded_rng():
    config = EngineConfig(seed=42)
    np.testing.assert_array_equal(config.rng().standard_normal(5),
                                  config.rng().standard_normal(5))


def test_configure_logging():
    package_logger = logging.getLogger("ffnet")
    previous = package_logger.level
    try:
        configure_logging(EngineConfig(log_level="debug"))
        assert package_logger.level == logging.DEBUG
        assert logging.getLogger("ffnet.network.utils").getEffectiveLevel() == logging.DEBUG
    finally:
        package_logger.setLevel(previous)
