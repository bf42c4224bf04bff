"""
Fixed-length bit vector used by every stage of the simulator
"""

import numpy as np
from typing import Iterable, Iterator

from ..exceptions import BitIndexError, InvalidLengthError


class BitSequence:
    """
    Ordered, fixed-length sequence of bits

    The length is fixed at construction; individual bits are mutable.
    All bits start at 0.
    """

    __slots__ = ("_bits",)

    def __init__(self, length: int):
        """
        Args:
            length: Number of bits (must be > 0)
        """
        if length <= 0:
            raise InvalidLengthError(f"BitSequence length must be positive, got {length}")
        self._bits = np.zeros(int(length), dtype=np.uint8)

    @classmethod
    def from_bits(cls, bits: Iterable[int]) -> 'BitSequence':
        """Build a sequence from an iterable (or array) of 0/1 values"""
        arr = np.asarray(list(bits) if not isinstance(bits, np.ndarray) else bits)
        seq = cls(arr.size)
        seq._bits[:] = (arr.reshape(-1) != 0)
        return seq

    @classmethod
    def from_string(cls, text: str) -> 'BitSequence':
        """Parse a string of '0'/'1' characters"""
        if any(ch not in "01" for ch in text):
            raise ValueError("Bit string may only contain '0' and '1'")
        return cls.from_bits(ch == "1" for ch in text)

    def _check(self, pos: int):
        if pos < 0 or pos >= self._bits.size:
            raise BitIndexError(f"Bit index {pos} out of range [0, {self._bits.size})")

    def get(self, pos: int) -> int:
        """Return the bit at position *pos*"""
        self._check(pos)
        return int(self._bits[pos])

    def set(self, pos: int, bit: int):
        """Set the bit at position *pos* (any nonzero value sets it to 1)"""
        self._check(pos)
        self._check_writeable()
        self._bits[pos] = 1 if bit else 0

    def flip(self, pos: int):
        self._check(pos)
        self._check_writeable()
        self._bits[pos] ^= 1

    def _check_writeable(self):
        if not self._bits.flags.writeable:
            raise TypeError("BitSequence is read-only")

    @property
    def readonly(self) -> bool:
        return not self._bits.flags.writeable

    def frozen(self) -> 'BitSequence':
        """Read-only copy, used for result snapshots"""
        seq = self.copy()
        seq._bits.setflags(write=False)
        return seq

    def copy(self) -> 'BitSequence':
        """Writable copy"""
        return BitSequence.from_bits(self._bits)

    def complement(self) -> 'BitSequence':
        """Return a new sequence with every bit inverted"""
        return BitSequence.from_bits(1 - self._bits)

    def to_array(self) -> np.ndarray:
        """Copy of the bits as a uint8 array"""
        return self._bits.copy()

    def __len__(self) -> int:
        return int(self._bits.size)

    def __getitem__(self, pos: int) -> int:
        return self.get(pos)

    def __setitem__(self, pos: int, bit: int):
        self.set(pos, bit)

    def __iter__(self) -> Iterator[int]:
        return (int(b) for b in self._bits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitSequence):
            return NotImplemented
        return np.array_equal(self._bits, other._bits)

    __hash__ = None

    def __str__(self) -> str:
        return (self._bits + ord("0")).tobytes().decode("ascii")

    def __repr__(self) -> str:
        text = str(self)
        if len(text) > 32:
            text = text[:32] + "..."
        return f"BitSequence(len={len(self)}, bits={text})"
