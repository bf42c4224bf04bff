"""
Correlation analysis of spreading codes and antipodal signals
"""

import numpy as np
from typing import Sequence, Union

from .bit_sequence import BitSequence
from ..exceptions import LengthMismatchError

SignalLike = Union[np.ndarray, Sequence[float]]


def periodic_autocorrelation(seq: BitSequence) -> np.ndarray:
    """
    Compute CIRCULAR autocorrelation of a bit sequence

    For every cyclic shift s the value is (agreements - disagreements) / L,
    comparing seq[i] with seq[(i + s) mod L].

    Args:
        seq: Input bits

    Returns:
        Array of L normalized values; index 0 is always 1.0
    """
    signal = bits_to_signal(seq)
    n = signal.size
    autocorr = np.zeros(n)

    for shift in range(n):
        # np.roll by -shift aligns element i with element (i + shift) mod n
        autocorr[shift] = np.dot(signal, np.roll(signal, -shift))

    return autocorr / n


def max_absolute_off_peak(values: SignalLike) -> float:
    """
    Largest |values[i]| for i >= 1 (0.0 when there is no off-peak value)

    Lower is better: the code looks less like its own shifts.
    """
    values = np.asarray(values, dtype=float)
    if values.size <= 1:
        return 0.0
    return float(np.max(np.abs(values[1:])))


def bits_to_signal(seq: BitSequence) -> np.ndarray:
    """Antipodal mapping: bit 1 -> +1.0, bit 0 -> -1.0"""
    return seq.to_array().astype(float) * 2.0 - 1.0


def _check_pair(sig1: SignalLike, sig2: SignalLike):
    sig1 = np.asarray(sig1, dtype=float)
    sig2 = np.asarray(sig2, dtype=float)
    if sig1.shape != sig2.shape:
        raise LengthMismatchError(f"Signals must have equal length, got {sig1.size} and {sig2.size}")
    if sig1.size == 0:
        raise LengthMismatchError("Signals must not be empty")
    return sig1, sig2


def correlation_sum(sig1: SignalLike, sig2: SignalLike) -> float:
    """Unnormalized correlation sum(sig1[i] * sig2[i]); the receiver's decision statistic"""
    sig1, sig2 = _check_pair(sig1, sig2)
    return float(np.dot(sig1, sig2))


def normalized_cross_correlation(sig1: SignalLike, sig2: SignalLike) -> float:
    """
    Zero-shift cross-correlation normalized by length

    Args:
        sig1, sig2: Signals of equal, nonzero length

    Returns:
        (1/L) * sum(sig1[i] * sig2[i])
    """
    sig1, sig2 = _check_pair(sig1, sig2)
    return float(np.dot(sig1, sig2)) / sig1.size
