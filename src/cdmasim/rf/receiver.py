"""
Correlation receiver (matched filter) for direct-sequence spread signals

Each data bit occupies one full code period of L chips. The receiver
correlates every L-chip segment of the received signal with the user's own
antipodal code and decides bit 1 when the correlation sum is positive,
bit 0 otherwise (a sum of exactly 0 decodes to 0).
"""

from typing import Tuple

import numpy as np

from .bit_sequence import BitSequence
from ..exceptions import LengthMismatchError


class CorrelationReceiver:
    """Despreads a received chip stream with a single user's code"""

    def __init__(self, code_signal: np.ndarray):
        """
        Args:
            code_signal: The user's Gold code in antipodal (+1/-1) form
        """
        self.code_signal = np.asarray(code_signal, dtype=float)
        if self.code_signal.size == 0:
            raise LengthMismatchError("Code signal must not be empty")

    @property
    def chips_per_bit(self) -> int:
        return int(self.code_signal.size)

    def correlation_sums(self, received: np.ndarray, n_bits: int) -> np.ndarray:
        """
        Per-bit correlation sums over the first n_bits code periods

        Args:
            received: Received samples, at least n_bits * L long
            n_bits: Number of data bits to despread

        Returns:
            Array of n_bits correlation sums
        """
        received = np.asarray(received, dtype=float)
        L = self.chips_per_bit
        if received.size < n_bits * L:
            raise LengthMismatchError(
                f"Received signal has {received.size} samples, need {n_bits * L}")

        segments = received[:n_bits * L].reshape(n_bits, L)
        return segments @ self.code_signal

    def decode(self, received: np.ndarray, n_bits: int) -> Tuple[BitSequence, np.ndarray]:
        """
        Hard decisions on the correlation sums

        Returns:
            (decoded bits, correlation sums)
        """
        sums = self.correlation_sums(received, n_bits)
        bits = BitSequence.from_bits(sums > 0.0)
        return bits, sums
