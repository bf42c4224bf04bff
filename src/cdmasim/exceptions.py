"""
Exception hierarchy for the simulation engine
"""


class CDMASimError(Exception):
    """Base class for all simulator errors"""


class ConfigurationError(CDMASimError, ValueError):
    """Invalid simulation parameter (width, tap, seed, rate, noise, ...)"""


class InvalidLengthError(ConfigurationError):
    """Sequence length must be positive"""


class InvalidWidthError(ConfigurationError):
    """LFSR width outside [1, 64]"""


class InvalidSeedError(ConfigurationError):
    """LFSR seed is zero or does not fit in the register"""


class InvalidTapError(ConfigurationError):
    """Tap position outside the register"""


class BitIndexError(CDMASimError, IndexError):
    """Bit position outside [0, length)"""


class LengthMismatchError(CDMASimError, ValueError):
    """Operands that must have equal length do not"""


class DegenerateInputError(CDMASimError, ValueError):
    """Nothing to simulate: no user carries any data"""
