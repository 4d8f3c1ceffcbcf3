"""
Tests for the Configuration module
"""

import dataclasses

import pytest
import yaml

from cputemp.config import SessionConfig, load_config
from cputemp.errors import ConfigError

TEST_CONFIG = {
    "monitoring": {
        "duration_minutes": 2,
        "interval_seconds": 5
    },
    "source": {
        "type": "ipmi",
        "ipmi": {
            "host": "10.0.0.5",
            "username": "operator"
        }
    },
    "output": {
        "path": "/tmp/cpu.txt",
        "prompt": False
    }
}


@pytest.fixture
def config_file(tmp_path):
    """Create a temporary config file"""
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(TEST_CONFIG, f)
    return str(path)


def test_defaults():
    """Test default session parameters"""
    config = SessionConfig()
    assert config.monitoring_duration_minutes == 10
    assert config.sampling_interval_seconds == 20
    assert config.total_seconds == 600
    assert config.total_ticks == 30
    assert config.source == "psutil"
    assert config.output_path is None
    assert config.prompt_for_output


def test_load_config(config_file):
    """Test values are read from the YAML file"""
    config = load_config(config_file)
    assert config.monitoring_duration_minutes == 2
    assert config.sampling_interval_seconds == 5
    assert config.total_ticks == 24
    assert config.source == "ipmi"
    assert config.source_options["host"] == "10.0.0.5"
    assert config.output_path == "/tmp/cpu.txt"
    assert not config.prompt_for_output


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(str(tmp_path / "missing.yaml"))
    assert config == SessionConfig.from_dict({})
    assert config.total_ticks == 30


def test_partial_config(tmp_path):
    """Test missing keys fall back to defaults"""
    path = tmp_path / "config.yaml"
    path.write_text("monitoring:\n  interval_seconds: 30\n")

    config = load_config(str(path))

    assert config.monitoring_duration_minutes == 10
    assert config.sampling_interval_seconds == 30
    assert config.total_ticks == 20


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(str(path)).total_ticks == 30


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("monitoring: [unclosed\n")
    with pytest.raises(ConfigError, match="Failed to load configuration"):
        load_config(str(path))


@pytest.mark.parametrize("value", [0, -5, "fast", None, True])
def test_invalid_interval(value):
    with pytest.raises(ConfigError, match="sampling_interval_seconds"):
        SessionConfig(sampling_interval_seconds=value)


def test_invalid_section():
    with pytest.raises(ConfigError, match="monitoring"):
        SessionConfig.from_dict({"monitoring": [1, 2]})


def test_replace_revalidates():
    """Test overrides go through validation"""
    config = SessionConfig()
    assert dataclasses.replace(config, monitoring_duration_minutes=1).total_ticks == 3
    with pytest.raises(ConfigError):
        dataclasses.replace(config, monitoring_duration_minutes=0)
