"""
Unit tests for random and burst error injection
"""

import numpy as np
import pytest

from cdmasim.exceptions import ConfigurationError
from cdmasim.rf import BURST_LENGTH, BitSequence, ErrorInjector, ErrorKind


class TestErrorInjector:
    """Error models"""

    @pytest.mark.parametrize("kind", ["random", "burst"])
    def test_zero_rate_is_identity(self, kind):
        seq = BitSequence.from_string("10110")
        corrupted, flipped = ErrorInjector(0).add_errors(seq, 0.0, kind)
        assert corrupted == seq
        assert flipped == 0
        assert corrupted is not seq

    def test_full_random_rate_flips_everything(self):
        seq = BitSequence.from_string("10110")
        corrupted, flipped = ErrorInjector(0).add_errors(seq, 100.0, ErrorKind.RANDOM)
        assert corrupted == seq.complement()
        assert flipped == 5

    def test_random_count_matches_differences(self, rng):
        seq = BitSequence(2000)
        corrupted, flipped = ErrorInjector(rng).add_errors(seq, 10.0, "random")
        assert flipped == int(corrupted.to_array().sum())
        # Binomial(2000, 0.1): mean 200, std ~13
        assert 120 < flipped < 280

    def test_input_left_untouched(self):
        seq = BitSequence.from_string("0000")
        ErrorInjector(1).add_errors(seq, 100.0, "random")
        assert str(seq) == "0000"

    def test_burst_on_exact_length(self):
        seq = BitSequence(BURST_LENGTH)
        corrupted, flipped = ErrorInjector(3).add_errors(seq, 100.0, "burst")
        assert str(corrupted) == "111"
        assert flipped == 3

    def test_burst_count_is_number_of_flips(self):
        seq = BitSequence(300)
        corrupted, flipped = ErrorInjector(5).add_errors(seq, 10.0, ErrorKind.BURST)
        # int(300 * 0.10 / 3) bursts of 3 flips each
        assert flipped == 30
        # Overlapping bursts can cancel, never add
        assert int(corrupted.to_array().sum()) <= flipped

    def test_burst_flips_are_adjacent(self):
        seq = BitSequence(200)
        corrupted, _ = ErrorInjector(11).add_errors(seq, 1.5, "burst")
        ones = np.flatnonzero(corrupted.to_array())
        assert ones.size == BURST_LENGTH
        np.testing.assert_array_equal(np.diff(ones), [1, 1])

    def test_too_short_for_a_burst(self):
        seq = BitSequence(2)
        corrupted, flipped = ErrorInjector(0).add_errors(seq, 100.0, "burst")
        assert flipped == 0
        assert corrupted == seq

    def test_seeded_injector_is_reproducible(self):
        seq = BitSequence(500)
        c1, f1 = ErrorInjector(99).add_errors(seq, 20.0, "random")
        c2, f2 = ErrorInjector(99).add_errors(seq, 20.0, "random")
        assert c1 == c2 and f1 == f2

    @pytest.mark.parametrize("rate", [-0.1, 100.5])
    def test_rate_out_of_range(self, rate):
        with pytest.raises(ConfigurationError):
            ErrorInjector(0).add_errors(BitSequence(8), rate, "random")

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError):
            ErrorInjector(0).add_errors(BitSequence(8), 5.0, "gaussian")
