"""
Tests for YAML configuration loading and validation
"""

import pytest
import yaml

from cdmasim.config import SimulationConfig, create_example_config
from cdmasim.exceptions import (
    ConfigurationError,
    InvalidSeedError,
    InvalidTapError,
    InvalidWidthError,
)


def write_yaml(path, data):
    with open(path, 'w') as f:
        yaml.dump(data, f)
    return str(path)


class TestLoading:
    """Reading configuration files"""

    def test_defaults(self):
        config = SimulationConfig()
        assert config.code.n == 10
        assert config.code.code_length == 1023
        assert config.system.seed is None
        config.validate()

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = write_yaml(tmp_path / "c.yaml", {
            'code': {'n': 5, 'poly1': [0, 2], 'poly2': [0, 1, 2, 4]},
            'users': {'a': {'seed1': 3, 'seed2': 7, 'text': 'x'}},
        })
        config = SimulationConfig(path)
        assert config.code.n == 5
        assert config.user_a.text == 'x'
        assert config.user_b.seed1 == 2
        assert config.channel.noise_level == 0.0

    def test_unknown_keys_ignored(self, tmp_path):
        path = write_yaml(tmp_path / "c.yaml", {'channel': {'noise_level': 0.3, 'fading': True}})
        assert SimulationConfig(path).channel.noise_level == 0.3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SimulationConfig(str(tmp_path / "missing.yaml"))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            SimulationConfig(str(path))

    def test_example_round_trip(self, tmp_path):
        path = tmp_path / "sub" / "example.yaml"
        written = create_example_config(str(path))
        loaded = SimulationConfig(str(path))
        assert loaded.to_dict() == written.to_dict()
        assert loaded.user_a.text == "Hi"
        assert loaded.system.seed == 42
        loaded.validate()


class TestValidation:
    """Fail-fast checks"""

    def test_bad_width(self):
        config = SimulationConfig()
        config.code.n = 0
        with pytest.raises(InvalidWidthError):
            config.validate_cdma()

    def test_bad_tap(self):
        config = SimulationConfig()
        config.code.poly2 = [0, 10]
        with pytest.raises(InvalidTapError):
            config.validate_link()

    def test_bad_user_seed(self):
        config = SimulationConfig()
        config.user_b.seed2 = 0
        with pytest.raises(InvalidSeedError, match="User B"):
            config.validate_cdma()

    def test_negative_noise(self):
        config = SimulationConfig()
        config.channel.noise_level = -1
        with pytest.raises(ConfigurationError):
            config.validate_cdma()

    def test_link_checks_are_separate(self):
        config = SimulationConfig()
        config.link.error_kind = "gaussian"
        config.validate_cdma()
        with pytest.raises(ConfigurationError):
            config.validate_link()

    def test_link_needs_data(self):
        config = SimulationConfig()
        config.link.random_length = 0
        with pytest.raises(ConfigurationError):
            config.validate_link()


class TestKwargs:
    """Conversion to simulation arguments"""

    def test_cdma_kwargs(self):
        config = SimulationConfig()
        config.system.seed = 9
        kwargs = config.to_cdma_kwargs()
        assert kwargs['rng'] == 9
        assert kwargs['user_a'].seed2 == 0b1010101010
        assert kwargs['poly2'] == [0, 2, 3, 8]

    def test_link_kwargs(self):
        kwargs = SimulationConfig().to_link_kwargs()
        assert kwargs['error_kind'] == "random"
        assert kwargs['decode'] is True


class TestMalformedValues:
    """Wrongly typed YAML values"""

    def test_non_numeric_seed(self):
        config = SimulationConfig()
        config.user_a.seed1 = "0b1"
        with pytest.raises(ConfigurationError, match="User A"):
            config.validate_cdma()

    def test_non_numeric_noise(self):
        config = SimulationConfig()
        config.channel.noise_level = "loud"
        with pytest.raises(ConfigurationError):
            config.validate_cdma()

    def test_non_string_text(self):
        config = SimulationConfig()
        config.user_b.text = 12
        with pytest.raises(ConfigurationError):
            config.validate_cdma()
