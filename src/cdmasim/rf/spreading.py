"""
XOR spreading and despreading with a Gold code
"""

import numpy as np

from .bit_sequence import BitSequence


def _xor_cyclic(data: BitSequence, code: BitSequence) -> BitSequence:
    bits = data.to_array()
    chips = code.to_array()
    # Repeat the code when the data is longer than one period
    reps = -(-bits.size // chips.size)
    return BitSequence.from_bits(bits ^ np.tile(chips, reps)[:bits.size])


def encode_with_gold(data: BitSequence, code: BitSequence) -> BitSequence:
    """
    Spread *data* with *code*: out[i] = data[i] XOR code[i mod len(code)]

    Args:
        data: Data bits
        code: Spreading code (repeats cyclically)

    Returns:
        Encoded sequence of the same length as *data*
    """
    return _xor_cyclic(data, code)


def decode_with_gold(encoded: BitSequence, code: BitSequence) -> BitSequence:
    """Inverse of encode_with_gold (XOR is an involution)"""
    return _xor_cyclic(encoded, code)
