"""
Bit error rate between an original and a decoded sequence
"""

import numpy as np

from .bit_sequence import BitSequence
from ..exceptions import LengthMismatchError


def count_bit_errors(original: BitSequence, decoded: BitSequence) -> int:
    """Number of positions where the two sequences differ"""
    if len(original) != len(decoded):
        raise LengthMismatchError(
            f"Original length {len(original)} not equal to decoded length {len(decoded)}")
    return int(np.count_nonzero(original.to_array() != decoded.to_array()))


def calculate_ber(original: BitSequence, decoded: BitSequence) -> float:
    """Fraction of mismatched bits, in [0, 1]"""
    return count_bit_errors(original, decoded) / len(original)
