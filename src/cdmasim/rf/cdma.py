"""
Two-user CDMA channel simulation

Pipeline per user: data -> Gold code -> spread -> combine -> AWGN ->
correlate -> decide -> trim -> metrics. Every run is a pure function of its
arguments and the random generator passed in; nothing is kept between runs.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from .ber import calculate_ber, count_bit_errors
from .bit_sequence import BitSequence
from .channel import AWGNChannel, combine_signals
from .correlation import (
    bits_to_signal,
    max_absolute_off_peak,
    normalized_cross_correlation,
    periodic_autocorrelation,
)
from .gold_codes import code_length, generate_gold_code, validate_width
from .lfsr import validate_seed, validate_taps
from .receiver import CorrelationReceiver
from .sequences import bits_to_ascii, random_sequence, string_as_sequence
from .spreading import encode_with_gold
from ..exceptions import ConfigurationError, DegenerateInputError
from ..validation import to_float, to_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserInput:
    """What one user transmits: its seed pair and optional text"""
    seed1: int
    seed2: int
    text: str = ""


@dataclass(frozen=True)
class UserResult:
    """
    Per-user slice of a CDMA run

    A user that sent no data (no text and no random bits while the other user
    had data) still transmits an all-zero padding run: ``encoded`` and
    ``transmitted`` are populated, ``original`` and ``decoded`` are None,
    ``correlation_sums`` is empty and ``ber`` / ``error_count`` are 0.
    """
    label: str
    seed1: int  # effective seeds, after the collision guard
    seed2: int
    input_text: str
    gold_code: BitSequence
    original: Optional[BitSequence]
    encoded: BitSequence
    decoded: Optional[BitSequence]
    transmitted: np.ndarray
    correlation_sums: np.ndarray
    ber: float
    error_count: int
    decoded_text: str
    max_off_peak_autocorrelation: float

    @property
    def is_text(self) -> bool:
        return self.input_text != ""

    @property
    def has_data(self) -> bool:
        return self.original is not None

    @property
    def data_length(self) -> int:
        return len(self.original) if self.original is not None else 0


@dataclass(frozen=True)
class CDMAResult:
    """Immutable snapshot of one two-user simulation run"""
    n: int
    poly1: Tuple[int, ...]
    poly2: Tuple[int, ...]
    noise_level: float
    random_length: int
    user_a: UserResult
    user_b: UserResult
    combined: np.ndarray
    received: np.ndarray
    cross_correlation: float
    autocorrelation_peak: int
    simulation_length: int
    code_length: int
    timestamp: datetime

    @property
    def users(self) -> Tuple[UserResult, UserResult]:
        return self.user_a, self.user_b

    def received_segment(self, user: UserResult) -> np.ndarray:
        """Received samples covering the user's real (unpadded) data bits"""
        return self.received[:user.data_length * self.code_length]


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr = np.array(arr, dtype=float)
    arr.setflags(write=False)
    return arr


def separate_seeds(seeds_a: Tuple[int, int], seeds_b: Tuple[int, int]) -> Tuple[int, int]:
    """
    Make user B's seed pair differ from user A's

    Best effort, single pass: decrement B's second seed (increment it when it
    is 1); if the pairs still collide, increment B's first seed.

    Returns:
        The (possibly adjusted) seed pair of user B
    """
    b1, b2 = seeds_b
    if tuple(seeds_a) == (b1, b2):
        b2 = b2 - 1 if b2 > 1 else b2 + 1
        if tuple(seeds_a) == (b1, b2):
            b1 += 1
        logger.warning(f"Users share seeds {seeds_b}; user B adjusted to ({b1}, {b2})")
    return b1, b2


def spread_signal(data: BitSequence, code_signal: np.ndarray) -> np.ndarray:
    """
    Spread each data bit over a full code period in the antipodal domain

    Returns:
        len(data) * L chips: chip[i*L + j] = antipodal(data[i]) * code[j]
    """
    return np.outer(bits_to_signal(data), code_signal).reshape(-1)


def _pad(seq: Optional[BitSequence], length: int) -> BitSequence:
    """Zero-pad to *length* bits; a missing sequence becomes all zeros"""
    padded = np.zeros(length, dtype=np.uint8)
    if seq is not None:
        padded[:len(seq)] = seq.to_array()
    return BitSequence.from_bits(padded)


class CDMAChannelSimulator:
    """
    Two-user CDMA link sharing one Gold code family

    The simulator only stores the validated code-family parameters, so one
    instance can serve any number of independent runs.
    """

    def __init__(self, n: int, poly1: Iterable[int], poly2: Iterable[int]):
        """
        Args:
            n: Register width; codes have 2^n - 1 chips
            poly1: Tap positions of the first register (shared by both users)
            poly2: Tap positions of the second register (shared by both users)
        """
        self.n = validate_width(n)
        self.poly1 = validate_taps(poly1, self.n)
        self.poly2 = validate_taps(poly2, self.n)
        self.code_length = code_length(self.n)

    def _validate_user(self, user: UserInput, label: str):
        try:
            validate_seed(user.seed1, self.n)
            validate_seed(user.seed2, self.n)
        except ConfigurationError as e:
            raise type(e)(f"User {label}: {e}") from None

    def _user_data(self, user: UserInput, random_length: int,
                   rng: np.random.Generator) -> Optional[BitSequence]:
        if user.text:
            return string_as_sequence(user.text)
        if random_length > 0:
            return random_sequence(random_length, rng)
        return None

    def simulate(self, user_a: UserInput, user_b: UserInput,
                 noise_level: float = 0.0, random_length: int = 0,
                 rng: Optional[Union[int, np.random.Generator]] = None,
                 timestamp: Optional[datetime] = None,
                 allow_empty_fallback: bool = True) -> CDMAResult:
        """
        Run one simulation

        Args:
            user_a: Seeds and text of user A
            user_b: Seeds and text of user B
            noise_level: Standard deviation of the channel AWGN (>= 0)
            random_length: Random bits per user when the user has no text
            rng: numpy Generator or seed driving data and noise
            timestamp: Time stamped on the result (defaults to now)
            allow_empty_fallback: When neither user has data, give each one random bit
                instead of raising DegenerateInputError

        Returns:
            CDMAResult snapshot
        """
        # Validate everything before doing any work
        self._validate_user(user_a, "A")
        self._validate_user(user_b, "B")
        noise_level = to_float(noise_level, "Noise level")
        if not np.isfinite(noise_level) or noise_level < 0:
            raise ConfigurationError(f"Noise level must be >= 0, got {noise_level}")
        random_length = to_int(random_length, "Random sequence length")
        if random_length < 0:
            raise ConfigurationError(f"Random sequence length must be >= 0, got {random_length}")

        seeds_a = (int(user_a.seed1), int(user_a.seed2))
        seeds_b = separate_seeds(seeds_a, (int(user_b.seed1), int(user_b.seed2)))
        try:
            validate_seed(seeds_b[0], self.n)
            validate_seed(seeds_b[1], self.n)
        except ConfigurationError:
            raise ConfigurationError(
                f"Cannot derive distinct seeds for user B from {seeds_a} with n={self.n}") from None

        rng = np.random.default_rng(rng)
        L = self.code_length

        # Codes and their quality metrics
        code_a = generate_gold_code(self.n, self.poly1, seeds_a[0], self.poly2, seeds_a[1])
        code_b = generate_gold_code(self.n, self.poly1, seeds_b[0], self.poly2, seeds_b[1])
        code_signal_a = bits_to_signal(code_a)
        code_signal_b = bits_to_signal(code_b)
        off_peak_a = max_absolute_off_peak(periodic_autocorrelation(code_a))
        off_peak_b = max_absolute_off_peak(periodic_autocorrelation(code_b))
        cross = normalized_cross_correlation(code_signal_a, code_signal_b)

        # Data
        data_a = self._user_data(user_a, random_length, rng)
        data_b = self._user_data(user_b, random_length, rng)
        if data_a is None and data_b is None:
            if not allow_empty_fallback:
                raise DegenerateInputError("Neither user has text or a random sequence length")
            data_a = random_sequence(1, rng)
            data_b = random_sequence(1, rng)
            logger.info("No data requested by either user; falling back to one random bit each")

        M = max(len(d) for d in (data_a, data_b) if d is not None)
        padded_a = _pad(data_a, M)
        padded_b = _pad(data_b, M)
        encoded_a = encode_with_gold(padded_a, code_a)
        encoded_b = encode_with_gold(padded_b, code_b)

        # Physical layer
        tx_a = spread_signal(padded_a, code_signal_a)
        tx_b = spread_signal(padded_b, code_signal_b)
        combined = combine_signals(tx_a, tx_b)
        received = AWGNChannel(noise_level, rng).add_noise(combined)

        logger.debug(f"CDMA run: n={self.n} L={L} M={M} samples={received.size} noise={noise_level}")

        users = []
        for label, user, seeds, code, code_signal, data, encoded, tx, off_peak in (
            ("A", user_a, seeds_a, code_a, code_signal_a, data_a, encoded_a, tx_a, off_peak_a),
            ("B", user_b, seeds_b, code_b, code_signal_b, data_b, encoded_b, tx_b, off_peak_b),
        ):
            decoded_full, sums = CorrelationReceiver(code_signal).decode(received, M)

            decoded = None
            ber = 0.0
            error_count = 0
            decoded_text = ""
            data_length = 0
            if data is not None:
                data_length = len(data)
                decoded = BitSequence.from_bits(decoded_full.to_array()[:data_length])
                ber = calculate_ber(data, decoded)
                error_count = count_bit_errors(data, decoded)
                if user.text and data_length % 8 == 0:
                    decoded_text = bits_to_ascii(decoded)

            users.append(UserResult(
                label=label,
                seed1=seeds[0],
                seed2=seeds[1],
                input_text=user.text,
                gold_code=code.frozen(),
                original=data.frozen() if data is not None else None,
                encoded=encoded.frozen(),
                decoded=decoded.frozen() if decoded is not None else None,
                transmitted=_readonly(tx),
                correlation_sums=_readonly(sums[:data_length]),
                ber=ber,
                error_count=error_count,
                decoded_text=decoded_text,
                max_off_peak_autocorrelation=off_peak,
            ))

        result = CDMAResult(
            n=self.n,
            poly1=self.poly1,
            poly2=self.poly2,
            noise_level=noise_level,
            random_length=random_length,
            user_a=users[0],
            user_b=users[1],
            combined=_readonly(combined),
            received=_readonly(received),
            cross_correlation=cross,
            autocorrelation_peak=L,
            simulation_length=M,
            code_length=L,
            timestamp=timestamp or datetime.now(),
        )
        logger.info(f"CDMA simulation done: BER A={result.user_a.ber:.4f}, BER B={result.user_b.ber:.4f}")
        return result


def simulate_cdma(n: int, poly1: Iterable[int], poly2: Iterable[int],
                  user_a: UserInput, user_b: UserInput,
                  noise_level: float = 0.0, random_length: int = 0,
                  rng: Optional[Union[int, np.random.Generator]] = None,
                  timestamp: Optional[datetime] = None,
                  allow_empty_fallback: bool = True) -> CDMAResult:
    """Convenience wrapper: build a CDMAChannelSimulator and run it once"""
    simulator = CDMAChannelSimulator(n, poly1, poly2)
    return simulator.simulate(user_a, user_b, noise_level=noise_level,
                              random_length=random_length, rng=rng,
                              timestamp=timestamp,
                              allow_empty_fallback=allow_empty_fallback)
