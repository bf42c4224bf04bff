"""
Bit error models: independent random flips and fixed-length bursts
"""

import logging
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from .bit_sequence import BitSequence
from ..exceptions import ConfigurationError
from ..validation import to_float

logger = logging.getLogger(__name__)

BURST_LENGTH = 3


class ErrorKind(str, Enum):
    """
    Error model selector.

    RANDOM:
        Each bit flips independently with probability rate/100.
    BURST:
        Runs of BURST_LENGTH adjacent bits flip together. Bursts may overlap,
        so the realized number of corrupted bits can be below the nominal
        count.
    """

    RANDOM = "random"
    BURST = "burst"


def parse_error_kind(kind: Union[str, ErrorKind]) -> ErrorKind:
    try:
        return ErrorKind(kind)
    except ValueError:
        choices = [k.value for k in ErrorKind]
        raise ConfigurationError(f"Unknown error type '{kind}', expected one of {choices}") from None


def validate_rate(rate: float) -> float:
    rate = to_float(rate, "Error rate")
    if not (0.0 <= rate <= 100.0):
        raise ConfigurationError(f"Error rate must be in [0, 100], got {rate}")
    return rate


class ErrorInjector:
    """Corrupts bit sequences using an owned random generator"""

    def __init__(self, rng: Optional[Union[int, np.random.Generator]] = None):
        """
        Args:
            rng: numpy Generator or integer seed (None draws fresh entropy)
        """
        self.rng = np.random.default_rng(rng)

    def add_errors(self, sequence: BitSequence, rate: float,
                   kind: Union[str, ErrorKind] = ErrorKind.RANDOM) -> Tuple[BitSequence, int]:
        """
        Return a corrupted copy of *sequence*

        Args:
            sequence: Input bits (left untouched)
            rate: Error rate in percent, 0..100
            kind: "random" or "burst"

        Returns:
            (corrupted copy, number of bit flips performed)
        """
        kind = parse_error_kind(kind)
        rate = validate_rate(rate)

        if rate <= 0:
            return sequence.copy(), 0

        bits = sequence.to_array()
        n = bits.size

        if kind == ErrorKind.RANDOM:
            mask = self.rng.random(n) < (rate / 100.0)
            bits[mask] ^= 1
            flipped = int(np.count_nonzero(mask))
        else:
            num_bursts = int(n * rate / 100.0 / BURST_LENGTH)
            # Starts where a full burst fits; short sequences clip at the end
            high = max(n - BURST_LENGTH + 1, 1)
            flipped = 0
            for start in self.rng.integers(0, high, size=num_bursts):
                stop = min(int(start) + BURST_LENGTH, n)
                bits[start:stop] ^= 1
                flipped += stop - int(start)

        logger.debug(f"Injected {flipped} {kind.value} bit flips into {n} bits at {rate:.2f}%")
        return BitSequence.from_bits(bits), flipped
