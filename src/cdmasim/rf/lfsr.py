"""
Linear Feedback Shift Register (Fibonacci form) over arbitrary tap sets
"""

import numpy as np
from typing import Iterable, Tuple

from ..exceptions import ConfigurationError, InvalidSeedError, InvalidTapError, InvalidWidthError
from ..validation import to_int

MAX_WIDTH = 64


def validate_taps(taps: Iterable[int], width: int) -> Tuple[int, ...]:
    """
    Check a tap set against a register width

    Args:
        taps: Tap bit positions (0-based from the LSB)
        width: Register width in bits

    Returns:
        Taps as a tuple of ints, in the given order
    """
    if isinstance(taps, (str, bytes)) or not hasattr(taps, "__iter__"):
        raise ConfigurationError(f"Tap list must be a sequence of integers, got {taps!r}")
    taps = tuple(to_int(t, "Tap position") for t in taps)
    if not taps:
        raise ConfigurationError("Tap list must not be empty")
    for t in taps:
        if t < 0 or t >= width:
            raise InvalidTapError(f"Tap position {t} outside register of width {width}")
    return taps


def validate_seed(seed: int, width: int) -> int:
    seed = to_int(seed, "Seed")
    if seed <= 0 or seed >= (1 << width):
        raise InvalidSeedError(f"Seed must be non-zero and fit in {width} bits, got {seed:#x}")
    return seed


class LFSR:
    """
    N-bit linear feedback shift register

    Each shift moves the state one bit left and inserts the feedback bit
    (XOR of the tapped state bits) at the LSB. The returned bit is the
    feedback that was consumed.
    """

    def __init__(self, seed: int, taps: Iterable[int], width: int):
        """
        Initialize the register

        Args:
            seed: Initial state, nonzero and < 2^width
            taps: Tap positions (0-based from the LSB), each < width
            width: Register width in bits, 1..64
        """
        width = to_int(width, "LFSR width")
        if width < 1 or width > MAX_WIDTH:
            raise InvalidWidthError(f"LFSR width must be between 1 and {MAX_WIDTH} bits, got {width}")

        self.width = width
        self.taps = validate_taps(taps, width)
        self.mask = (1 << width) - 1
        self.state = validate_seed(seed, width)
        self.initial_state = self.state

    def feedback(self) -> int:
        """XOR of the tapped state bits; does not change the state"""
        fb = 0
        for t in self.taps:
            fb ^= (self.state >> t) & 1
        return fb

    def shift(self) -> int:
        """Advance one step and return the feedback bit"""
        fb = self.feedback()
        self.state = ((self.state << 1) | fb) & self.mask
        return fb

    def reset(self):
        """Return to the seed state"""
        self.state = self.initial_state

    def generate(self, length: int) -> np.ndarray:
        """
        Shift *length* times from the current state

        Args:
            length: Number of shifts

        Returns:
            uint8 array of feedback bits
        """
        out = np.zeros(int(length), dtype=np.uint8)
        for i in range(out.size):
            out[i] = self.shift()
        return out

    def __repr__(self) -> str:
        return f"LFSR(width={self.width}, taps={list(self.taps)}, state={self.state:#x})"
