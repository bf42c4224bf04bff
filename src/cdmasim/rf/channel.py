"""
Multi-access channel: linear superposition of user signals plus real AWGN
"""

from __future__ import annotations

import numpy as np

from ..exceptions import ConfigurationError, LengthMismatchError
from ..validation import to_float


def combine_signals(*signals: np.ndarray) -> np.ndarray:
    """
    Sum simultaneously transmitted chip streams sample by sample

    All signals must have the same length.
    """
    if not signals:
        raise LengthMismatchError("At least one signal is required")
    arrays = [np.asarray(s, dtype=float) for s in signals]
    n = arrays[0].size
    for a in arrays[1:]:
        if a.size != n:
            raise LengthMismatchError(f"Signals must have equal length, got {n} and {a.size}")
    return np.sum(arrays, axis=0)


class AWGNChannel:
    """
    Adds real-valued AWGN to a chip-rate signal (one sample per chip).

    Noise is specified directly by its standard deviation; each sample gets
    an independent draw from N(0, noise_std^2).
    """

    def __init__(self, noise_std: float, rng: int | np.random.Generator | None = None):
        self.noise_std = to_float(noise_std, "Noise standard deviation")
        if not np.isfinite(self.noise_std) or self.noise_std < 0:
            raise ConfigurationError(f"Noise standard deviation must be >= 0, got {noise_std}")
        self.rng = np.random.default_rng(rng)

    # ------------------------------------------------------------------
    def add_noise(self, signal: np.ndarray) -> np.ndarray:
        """Returns noisy_signal = signal + w, where w ~ N(0, noise_std^2)."""
        signal = np.asarray(signal, dtype=float)
        if signal.size == 0:
            raise LengthMismatchError("Empty signal")

        # Always draw so the generator advances identically for any noise level
        noise = self.noise_std * self.rng.standard_normal(size=signal.shape)
        return signal + noise
