"""
Unit tests for correlation analysis
"""

import numpy as np
import pytest

from cdmasim.exceptions import LengthMismatchError
from cdmasim.rf import (
    BitSequence,
    bits_to_signal,
    correlation_sum,
    generate_gold_code,
    max_absolute_off_peak,
    normalized_cross_correlation,
    periodic_autocorrelation,
)


class TestAutocorrelation:
    """Circular autocorrelation"""

    def test_known_sequence(self):
        acf = periodic_autocorrelation(BitSequence.from_string("1100"))
        np.testing.assert_allclose(acf, [1.0, 0.0, -1.0, 0.0])

    def test_peak_is_one(self):
        code = generate_gold_code(7, [0, 6], 5, [0, 3, 5, 6], 9)
        acf = periodic_autocorrelation(code)
        assert acf.size == 127
        assert acf[0] == pytest.approx(1.0)
        assert np.all(np.abs(acf) <= 1.0 + 1e-12)

    def test_m_sequence_is_two_valued(self):
        # Single register (second one degenerate) gives an m-sequence: off-peak -1/L
        code = generate_gold_code(4, [0, 3], 1, [0], 1)
        acf = periodic_autocorrelation(code)
        np.testing.assert_allclose(acf[1:], -1.0 / 15)

    def test_symmetric(self, rng):
        seq = BitSequence.from_bits(rng.integers(0, 2, size=31))
        acf = periodic_autocorrelation(seq)
        np.testing.assert_allclose(acf[1:], acf[1:][::-1])

    def test_max_off_peak(self):
        assert max_absolute_off_peak([1.0, -0.5, 0.25]) == 0.5
        assert max_absolute_off_peak([1.0]) == 0.0


class TestCrossCorrelation:
    """Zero-shift correlation of antipodal signals"""

    def test_antipodal_mapping(self):
        np.testing.assert_array_equal(
            bits_to_signal(BitSequence.from_string("1001")), [1.0, -1.0, -1.0, 1.0])

    def test_identical_and_opposite(self):
        sig = bits_to_signal(BitSequence.from_string("10110"))
        assert normalized_cross_correlation(sig, sig) == pytest.approx(1.0)
        assert normalized_cross_correlation(sig, -sig) == pytest.approx(-1.0)

    def test_correlation_sum(self):
        assert correlation_sum([1, -1, 1], [1, 1, 1]) == pytest.approx(1.0)

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            normalized_cross_correlation([1.0, -1.0], [1.0])
        with pytest.raises(LengthMismatchError):
            correlation_sum([], [])
