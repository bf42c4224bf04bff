"""Configuration management for the CDMA simulator"""

from .yaml_config import (
    SimulationConfig,
    SystemConfig,
    CodeConfig,
    UserConfig,
    ChannelConfig,
    LinkConfig,
    OutputConfig,
    create_example_config
)

__all__ = [
    'SimulationConfig',
    'SystemConfig',
    'CodeConfig',
    'UserConfig',
    'ChannelConfig',
    'LinkConfig',
    'OutputConfig',
    'create_example_config'
]
