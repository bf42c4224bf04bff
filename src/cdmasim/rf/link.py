"""
Single-user link simulation in the bit domain

data -> Gold code -> XOR encode -> error injection -> XOR decode -> BER
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from .ber import calculate_ber, count_bit_errors
from .bit_sequence import BitSequence
from .correlation import max_absolute_off_peak, periodic_autocorrelation
from .error_injection import ErrorInjector, ErrorKind, parse_error_kind, validate_rate
from .gold_codes import generate_gold_code, validate_width
from .lfsr import validate_seed, validate_taps
from .sequences import bits_to_ascii, random_sequence, string_as_sequence
from .spreading import decode_with_gold, encode_with_gold
from ..exceptions import ConfigurationError
from ..validation import to_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkResult:
    """Immutable snapshot of one single-user run"""
    input_text: str
    n: int
    poly1: Tuple[int, ...]
    poly2: Tuple[int, ...]
    seed1: int
    seed2: int
    error_kind: ErrorKind
    error_rate: float
    original: BitSequence
    gold_code: BitSequence
    encoded: BitSequence
    corrupted: BitSequence
    decoded: Optional[BitSequence]  # None when decoding is disabled
    errors_introduced: int
    ber: Optional[float]
    error_count: Optional[int]
    original_autocorrelation: float
    encoded_autocorrelation: float
    corrupted_autocorrelation: float
    decoded_text: str
    timestamp: datetime


def simulate_link(n: int, poly1: Iterable[int], seed1: int,
                  poly2: Iterable[int], seed2: int,
                  text: str = "", random_length: int = 0,
                  error_kind: Union[str, ErrorKind] = ErrorKind.RANDOM,
                  error_rate: float = 0.0, decode: bool = True,
                  rng: Optional[Union[int, np.random.Generator]] = None,
                  timestamp: Optional[datetime] = None) -> LinkResult:
    """
    Spread one user's data with a Gold code, corrupt it and despread it

    Args:
        n: Register width
        poly1, seed1: First register taps and seed
        poly2, seed2: Second register taps and seed
        text: Input text (takes precedence over random_length)
        random_length: Number of random data bits when text is empty
        error_kind: "random" or "burst"
        error_rate: Error rate in percent, 0..100
        decode: Run the decoder and compute BER
        rng: numpy Generator or seed for data and errors
        timestamp: Time stamped on the result (defaults to now)

    Returns:
        LinkResult snapshot
    """
    n = validate_width(n)
    poly1 = validate_taps(poly1, n)
    poly2 = validate_taps(poly2, n)
    seed1 = validate_seed(seed1, n)
    seed2 = validate_seed(seed2, n)
    error_kind = parse_error_kind(error_kind)
    error_rate = validate_rate(error_rate)
    random_length = to_int(random_length, "Random sequence length")
    if not text and random_length <= 0:
        raise ConfigurationError("Either text or a positive random_length is required")

    rng = np.random.default_rng(rng)

    original = string_as_sequence(text) if text else random_sequence(random_length, rng)
    gold = generate_gold_code(n, poly1, seed1, poly2, seed2)
    encoded = encode_with_gold(original, gold)
    corrupted, introduced = ErrorInjector(rng).add_errors(encoded, error_rate, error_kind)

    decoded = None
    ber = None
    error_count = None
    decoded_text = ""
    if decode:
        decoded = decode_with_gold(corrupted, gold)
        ber = calculate_ber(original, decoded)
        error_count = count_bit_errors(original, decoded)
        if text:
            decoded_text = bits_to_ascii(decoded)

    logger.info(f"Link simulation: {len(original)} bits, {introduced} flips, BER={ber}")

    return LinkResult(
        input_text=text,
        n=n,
        poly1=poly1,
        poly2=poly2,
        seed1=seed1,
        seed2=seed2,
        error_kind=error_kind,
        error_rate=error_rate,
        original=original.frozen(),
        gold_code=gold.frozen(),
        encoded=encoded.frozen(),
        corrupted=corrupted.frozen(),
        decoded=decoded.frozen() if decoded is not None else None,
        errors_introduced=introduced,
        ber=ber,
        error_count=error_count,
        original_autocorrelation=max_absolute_off_peak(periodic_autocorrelation(original)),
        encoded_autocorrelation=max_absolute_off_peak(periodic_autocorrelation(encoded)),
        corrupted_autocorrelation=max_absolute_off_peak(periodic_autocorrelation(corrupted)),
        decoded_text=decoded_text,
        timestamp=timestamp or datetime.now(),
    )
