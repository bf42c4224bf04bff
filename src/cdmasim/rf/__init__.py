"""Spread spectrum engine: codes, spreading, channel and receivers"""

from .bit_sequence import BitSequence
from .lfsr import LFSR
from .gold_codes import GoldCodeGenerator, generate_gold_code, code_length
from .spreading import encode_with_gold, decode_with_gold
from .error_injection import ErrorInjector, ErrorKind, BURST_LENGTH
from .correlation import (
    periodic_autocorrelation,
    max_absolute_off_peak,
    bits_to_signal,
    normalized_cross_correlation,
    correlation_sum
)
from .ber import calculate_ber, count_bit_errors
from .sequences import random_sequence, random_text, string_as_sequence, bits_to_ascii
from .channel import AWGNChannel, combine_signals
from .receiver import CorrelationReceiver
from .cdma import CDMAChannelSimulator, CDMAResult, UserInput, UserResult, simulate_cdma
from .link import LinkResult, simulate_link

__all__ = [
    'BitSequence',
    'LFSR',
    'GoldCodeGenerator',
    'generate_gold_code',
    'code_length',
    'encode_with_gold',
    'decode_with_gold',
    'ErrorInjector',
    'ErrorKind',
    'BURST_LENGTH',
    'periodic_autocorrelation',
    'max_absolute_off_peak',
    'bits_to_signal',
    'normalized_cross_correlation',
    'correlation_sum',
    'calculate_ber',
    'count_bit_errors',
    'random_sequence',
    'random_text',
    'string_as_sequence',
    'bits_to_ascii',
    'AWGNChannel',
    'combine_signals',
    'CorrelationReceiver',
    'CDMAChannelSimulator',
    'CDMAResult',
    'UserInput',
    'UserResult',
    'simulate_cdma',
    'LinkResult',
    'simulate_link'
]
