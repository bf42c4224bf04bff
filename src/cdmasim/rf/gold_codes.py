#!/usr/bin/env python3
"""
Gold Code Generator using two Linear Feedback Shift Registers (LFSRs)
Each chip is the XOR of the feedback bits of both registers
"""

import logging
from typing import Dict, Iterable, List, Tuple

from .bit_sequence import BitSequence
from .lfsr import LFSR, MAX_WIDTH, validate_seed, validate_taps
from ..exceptions import InvalidWidthError
from ..validation import to_int

logger = logging.getLogger(__name__)

# Default register pair for 10-bit codes (length 1023)
DEFAULT_N = 10
DEFAULT_POLY1 = (0, 3)
DEFAULT_POLY2 = (0, 2, 3, 8)


def code_length(n: int) -> int:
    """Gold code length for n-bit registers: 2^n - 1"""
    return (1 << int(n)) - 1


def validate_width(n: int) -> int:
    n = to_int(n, "Code width n")
    if n < 1 or n > MAX_WIDTH:
        raise InvalidWidthError(f"Code width n must be between 1 and {MAX_WIDTH}, got {n}")
    return n


def generate_gold_code(n: int, poly1: Iterable[int], seed1: int,
                       poly2: Iterable[int], seed2: int) -> BitSequence:
    """
    Generate a Gold code of length 2^n - 1

    Both registers are shifted once per chip and their feedback bits XORed.
    The result depends only on the five arguments.

    Args:
        n: Register width in bits
        poly1: Tap positions of the first register
        seed1: Initial state of the first register
        poly2: Tap positions of the second register
        seed2: Initial state of the second register

    Returns:
        Gold code as a BitSequence
    """
    n = validate_width(n)
    lfsr1 = LFSR(seed1, poly1, n)
    lfsr2 = LFSR(seed2, poly2, n)

    length = code_length(n)
    chips = lfsr1.generate(length) ^ lfsr2.generate(length)

    logger.debug(f"Generated Gold code n={n} seeds=({seed1:#x}, {seed2:#x})")
    return BitSequence.from_bits(chips)


class GoldCodeGenerator:
    """
    Gold code family for a fixed register pair

    Users sharing the polynomials but holding different seed pairs get
    different members of the same family.
    """

    def __init__(self, n: int = DEFAULT_N,
                 poly1: Iterable[int] = DEFAULT_POLY1,
                 poly2: Iterable[int] = DEFAULT_POLY2):
        """
        Initialize generator

        Args:
            n: Register width in bits
            poly1: Tap positions of the first register
            poly2: Tap positions of the second register
        """
        self.n = validate_width(n)
        self.poly1 = validate_taps(poly1, self.n)
        self.poly2 = validate_taps(poly2, self.n)
        self.length = code_length(self.n)
        self._cache: Dict[Tuple[int, int], BitSequence] = {}

    def get_code(self, seed1: int, seed2: int) -> BitSequence:
        """
        Get the family member for a seed pair

        Args:
            seed1: Seed of the first register
            seed2: Seed of the second register

        Returns:
            A fresh copy of the Gold code
        """
        key = (validate_seed(seed1, self.n), validate_seed(seed2, self.n))
        if key not in self._cache:
            self._cache[key] = generate_gold_code(self.n, self.poly1, key[0], self.poly2, key[1])
        return self._cache[key].copy()

    def get_codes(self, seed_pairs: Iterable[Tuple[int, int]]) -> List[BitSequence]:
        """Generate one code per seed pair"""
        return [self.get_code(s1, s2) for s1, s2 in seed_pairs]
