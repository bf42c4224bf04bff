"""
Unit tests for the channel model and the correlation receiver
"""

import numpy as np
import pytest

from cdmasim.exceptions import ConfigurationError, LengthMismatchError
from cdmasim.rf import (
    AWGNChannel,
    BitSequence,
    CorrelationReceiver,
    bits_to_signal,
    combine_signals,
    generate_gold_code,
)
from cdmasim.rf.cdma import spread_signal


class TestChannel:
    """Superposition and AWGN"""

    def test_combine(self):
        np.testing.assert_array_equal(
            combine_signals([1.0, -1.0], [1.0, 1.0]), [2.0, 0.0])

    def test_combine_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            combine_signals([1.0, 1.0], [1.0])

    def test_zero_noise_is_exact(self):
        signal = np.array([2.0, 0.0, -2.0])
        np.testing.assert_array_equal(AWGNChannel(0.0, 1).add_noise(signal), signal)

    def test_noise_statistics(self):
        noisy = AWGNChannel(0.5, 3).add_noise(np.zeros(20000))
        assert abs(noisy.mean()) < 0.02
        assert noisy.std() == pytest.approx(0.5, rel=0.05)

    @pytest.mark.parametrize("std", [-0.1, float("nan"), float("inf")])
    def test_invalid_noise(self, std):
        with pytest.raises(ConfigurationError):
            AWGNChannel(std)


class TestCorrelationReceiver:
    """Despreading and hard decisions"""

    def setup_method(self):
        self.code = generate_gold_code(5, [0, 2], 3, [0, 1, 2, 4], 21)
        self.code_signal = bits_to_signal(self.code)

    def test_spread_layout(self):
        data = BitSequence.from_string("10")
        chips = spread_signal(data, self.code_signal)
        assert chips.size == 2 * 31
        np.testing.assert_array_equal(chips[:31], self.code_signal)
        np.testing.assert_array_equal(chips[31:], -self.code_signal)

    def test_clean_decode(self, rng):
        data = BitSequence.from_bits(rng.integers(0, 2, size=20))
        received = spread_signal(data, self.code_signal)
        decoded, sums = CorrelationReceiver(self.code_signal).decode(received, len(data))
        assert decoded == data
        np.testing.assert_allclose(np.abs(sums), 31.0)

    def test_zero_sum_decodes_to_zero(self):
        decoded, sums = CorrelationReceiver(self.code_signal).decode(np.zeros(31), 1)
        assert sums[0] == 0.0
        assert decoded[0] == 0

    def test_received_too_short(self):
        with pytest.raises(LengthMismatchError):
            CorrelationReceiver(self.code_signal).correlation_sums(np.zeros(40), 2)
