"""
Data sources: random bits, random text, and text <-> bit conversion
Text is encoded as UTF-8 bytes, most significant bit first per byte
"""

from typing import Optional, Union

import numpy as np

from .bit_sequence import BitSequence

RngLike = Optional[Union[int, np.random.Generator]]


def random_sequence(length: int, rng: RngLike = None) -> BitSequence:
    """
    Uniformly random bit sequence

    Args:
        length: Number of bits (> 0)
        rng: numpy Generator or seed

    Returns:
        BitSequence of exactly *length* bits
    """
    rng = np.random.default_rng(rng)
    if length <= 0:
        return BitSequence(length)  # raises InvalidLengthError
    return BitSequence.from_bits(rng.integers(0, 2, size=int(length), dtype=np.uint8))


def random_text(n_bits: int, rng: RngLike = None) -> str:
    """Random lowercase text of n_bits // 8 characters ('a'..'y')"""
    rng = np.random.default_rng(rng)
    num_chars = int(n_bits) // 8
    if num_chars <= 0:
        return ""
    codes = rng.integers(ord("a"), ord("z"), size=num_chars)
    return "".join(chr(c) for c in codes)


def string_as_sequence(text: str) -> BitSequence:
    """Bits of the UTF-8 encoding of *text*, MSB first per byte"""
    data = np.frombuffer(text.encode("utf-8"), dtype=np.uint8)
    return BitSequence.from_bits(np.unpackbits(data))


def bits_to_ascii(bits: Union[BitSequence, str]) -> str:
    """
    Pack bits (MSB first) back into text

    Args:
        bits: BitSequence or '0'/'1' string whose length is a multiple of 8

    Returns:
        Decoded text; undecodable bytes become U+FFFD
    """
    if isinstance(bits, str):
        bits = BitSequence.from_string(bits) if bits else None
    if bits is None or len(bits) % 8 != 0:
        raise ValueError("Bit length must be a non-zero multiple of 8")
    return np.packbits(bits.to_array()).tobytes().decode("utf-8", errors="replace")
