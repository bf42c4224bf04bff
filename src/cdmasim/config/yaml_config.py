"""
YAML Configuration Manager for the CDMA simulator
Provides centralized configuration loading and validation
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from ..exceptions import ConfigurationError
from ..rf.cdma import UserInput
from ..rf.error_injection import parse_error_kind, validate_rate
from ..rf.gold_codes import DEFAULT_N, DEFAULT_POLY1, DEFAULT_POLY2, validate_width
from ..rf.lfsr import validate_seed, validate_taps
from ..validation import to_float, to_int


@dataclass
class SystemConfig:
    """System-wide configuration"""
    seed: Optional[int] = None  # None draws fresh entropy every run
    verbose: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> 'SystemConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass
class CodeConfig:
    """Gold code family shared by all users"""
    n: int = DEFAULT_N
    poly1: List[int] = field(default_factory=lambda: list(DEFAULT_POLY1))
    poly2: List[int] = field(default_factory=lambda: list(DEFAULT_POLY2))

    @property
    def code_length(self) -> int:
        return (1 << self.n) - 1

    @classmethod
    def from_dict(cls, d: dict) -> 'CodeConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass
class UserConfig:
    """One CDMA user"""
    seed1: int = 1
    seed2: int = 1
    text: str = ""

    def to_input(self) -> UserInput:
        return UserInput(seed1=int(self.seed1), seed2=int(self.seed2), text=self.text or "")

    @classmethod
    def from_dict(cls, d: dict) -> 'UserConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass
class ChannelConfig:
    """Channel model"""
    noise_level: float = 0.0  # AWGN standard deviation
    random_length: int = 16  # Bits per user when no text is given

    @classmethod
    def from_dict(cls, d: dict) -> 'ChannelConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass
class LinkConfig:
    """Single-user link with error injection"""
    text: str = ""
    random_length: int = 16
    seed1: int = 1
    seed2: int = 0b1010101010
    error_kind: str = "random"  # "random" or "burst"
    error_rate: float = 0.0  # percent
    decode: bool = True

    @classmethod
    def from_dict(cls, d: dict) -> 'LinkConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass
class OutputConfig:
    """Report persistence"""
    save: bool = False
    directory: str = "cdma_simulation_data"
    link_directory: str = "simulation_data"
    max_files: int = 5

    @classmethod
    def from_dict(cls, d: dict) -> 'OutputConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


class SimulationConfig:
    """Main configuration manager for the simulator"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration

        Args:
            config_path: Path to YAML config file
        """
        self.config_path = config_path
        self.raw_config: Dict[str, Any] = {}

        # Sub-configurations
        self.system = SystemConfig()
        self.code = CodeConfig()
        self.user_a = UserConfig(seed1=1, seed2=0b1010101010)
        self.user_b = UserConfig(seed1=2, seed2=0b0101010101)
        self.channel = ChannelConfig()
        self.link = LinkConfig()
        self.output = OutputConfig()

        if config_path:
            self.load(config_path)

    def load(self, config_path: str):
        """
        Load configuration from YAML file

        Args:
            config_path: Path to YAML file
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            self.raw_config = yaml.safe_load(f) or {}

        if not isinstance(self.raw_config, dict):
            raise ConfigurationError(f"Top level of {config_path} must be a mapping")

        # Parse sub-configurations
        if 'system' in self.raw_config:
            self.system = SystemConfig.from_dict(self.raw_config['system'])

        if 'code' in self.raw_config:
            self.code = CodeConfig.from_dict(self.raw_config['code'])

        users = self.raw_config.get('users', {})
        if 'a' in users:
            self.user_a = UserConfig.from_dict(users['a'])
        if 'b' in users:
            self.user_b = UserConfig.from_dict(users['b'])

        if 'channel' in self.raw_config:
            self.channel = ChannelConfig.from_dict(self.raw_config['channel'])

        if 'link' in self.raw_config:
            self.link = LinkConfig.from_dict(self.raw_config['link'])

        if 'output' in self.raw_config:
            self.output = OutputConfig.from_dict(self.raw_config['output'])

        self.config_path = str(config_path)

    def _validate_common(self) -> int:
        n = validate_width(self.code.n)
        validate_taps(self.code.poly1, n)
        validate_taps(self.code.poly2, n)
        if to_int(self.output.max_files, "max_files") < 1:
            raise ConfigurationError("max_files must be >= 1")
        return n

    def validate_cdma(self):
        """Check the parameters of the two-user simulation"""
        n = self._validate_common()
        for label, user in (("A", self.user_a), ("B", self.user_b)):
            try:
                validate_seed(user.seed1, n)
                validate_seed(user.seed2, n)
            except ConfigurationError as e:
                raise type(e)(f"User {label}: {e}") from None
            if not isinstance(user.text or "", str):
                raise ConfigurationError(f"User {label}: text must be a string, got {user.text!r}")
        if to_float(self.channel.noise_level, "noise_level") < 0:
            raise ConfigurationError("noise_level must be >= 0")
        if to_int(self.channel.random_length, "random_length") < 0:
            raise ConfigurationError("random_length must be >= 0")

    def validate_link(self):
        """Check the parameters of the single-user simulation"""
        n = self._validate_common()
        validate_seed(self.link.seed1, n)
        validate_seed(self.link.seed2, n)
        if not isinstance(self.link.text or "", str):
            raise ConfigurationError(f"link text must be a string, got {self.link.text!r}")
        parse_error_kind(self.link.error_kind)
        validate_rate(self.link.error_rate)
        if not self.link.text and to_int(self.link.random_length, "link random_length") <= 0:
            raise ConfigurationError("link needs text or a positive random_length")

    def validate(self):
        """
        Check every parameter before a simulation starts

        Raises:
            ConfigurationError: on the first invalid value
        """
        self.validate_cdma()
        self.validate_link()

    def to_cdma_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for simulate_cdma"""
        return {
            'n': self.code.n,
            'poly1': list(self.code.poly1),
            'poly2': list(self.code.poly2),
            'user_a': self.user_a.to_input(),
            'user_b': self.user_b.to_input(),
            'noise_level': float(self.channel.noise_level),
            'random_length': int(self.channel.random_length),
            'rng': self.system.seed,
        }

    def to_link_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for simulate_link"""
        return {
            'n': self.code.n,
            'poly1': list(self.code.poly1),
            'seed1': self.link.seed1,
            'poly2': list(self.code.poly2),
            'seed2': self.link.seed2,
            'text': self.link.text or "",
            'random_length': int(self.link.random_length),
            'error_kind': self.link.error_kind,
            'error_rate': float(self.link.error_rate),
            'decode': bool(self.link.decode),
            'rng': self.system.seed,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'system': {
                'seed': self.system.seed,
                'verbose': self.system.verbose
            },
            'code': {
                'n': self.code.n,
                'poly1': list(self.code.poly1),
                'poly2': list(self.code.poly2)
            },
            'users': {
                'a': {'seed1': self.user_a.seed1, 'seed2': self.user_a.seed2, 'text': self.user_a.text},
                'b': {'seed1': self.user_b.seed1, 'seed2': self.user_b.seed2, 'text': self.user_b.text}
            },
            'channel': {
                'noise_level': self.channel.noise_level,
                'random_length': self.channel.random_length
            },
            'link': {
                'text': self.link.text,
                'random_length': self.link.random_length,
                'seed1': self.link.seed1,
                'seed2': self.link.seed2,
                'error_kind': self.link.error_kind,
                'error_rate': self.link.error_rate,
                'decode': self.link.decode
            },
            'output': {
                'save': self.output.save,
                'directory': self.output.directory,
                'link_directory': self.output.link_directory,
                'max_files': self.output.max_files
            }
        }

    def save(self, output_path: Optional[str] = None):
        """
        Save configuration to YAML file

        Args:
            output_path: Path to save to (uses original path if not specified)
        """
        if output_path is None and self.config_path is None:
            raise ValueError("No output path specified")

        output_path = Path(output_path or self.config_path)

        # Write to file
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def create_example_config(output_path: str = "configs/example.yaml") -> SimulationConfig:
    """Write a working example configuration and return it"""
    config = SimulationConfig()
    config.system.seed = 42
    config.user_a.text = "Hi"
    config.user_b.text = "Yo"
    config.channel.noise_level = 0.5
    config.link.text = "A"
    config.save(output_path)
    return config
