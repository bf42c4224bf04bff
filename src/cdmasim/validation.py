"""
Numeric coercion of user-supplied parameters (YAML, CLI, API)
"""

from .exceptions import ConfigurationError


def to_int(value, name: str) -> int:
    """int(value), raising ConfigurationError instead of ValueError/TypeError"""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def to_float(value, name: str) -> float:
    """float(value), raising ConfigurationError instead of ValueError/TypeError"""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
