"""
Human-readable text reports for simulation results
"""

from typing import Sequence

import numpy as np

from ..rf.cdma import CDMAResult, UserResult
from ..rf.link import LinkResult
from ..rf.sequences import bits_to_ascii

SIGNAL_DISPLAY_LIMIT = 40
CORRELATION_DISPLAY_LIMIT = 20

RULE = "=" * 54
TIMESTAMP_FORMAT = "%a, %d %b %Y %H:%M:%S"


def format_signal(values: Sequence[float], limit: int = SIGNAL_DISPLAY_LIMIT) -> str:
    """
    Render samples as "%.2f" joined by ", "

    Args:
        values: Samples
        limit: Maximum number of samples shown, -1 for all; "..." marks truncation
    """
    values = np.asarray(values, dtype=float)
    shown = values if limit == -1 else values[:limit]
    text = ", ".join(f"{v:.2f}" for v in shown)
    if limit != -1 and values.size > limit:
        text += "..."
    return text


def _ascii_or_note(bits) -> str:
    if len(bits) % 8 != 0:
        return "(bit length is not a multiple of 8)"
    return bits_to_ascii(bits)


NO_DATA = "(no data)"


def _bits_or_note(bits) -> str:
    return NO_DATA if bits is None else str(bits)


def _user_path(user: UserResult) -> list:
    return [
        f"\nUser {user.label} Path:",
        f"  Original {user.label}: {_bits_or_note(user.original)}",
        f"  Encoded {user.label}: {user.encoded}",
        f"  Transmitted {user.label} (trunc): {format_signal(user.transmitted)}",
    ]


def _user_decoding(user: UserResult) -> list:
    return [
        f"\nUser {user.label} Decoding:",
        f"  Correlated {user.label} (trunc): "
        f"{format_signal(user.correlation_sums, CORRELATION_DISPLAY_LIMIT)}",
        f"  Decoded {user.label}: {_bits_or_note(user.decoded)}",
        f"  Decoded Text {user.label}: \"{user.decoded_text}\"",
        f"  BER {user.label}: {user.ber * 100:.2f}%, "
        f"Errors {user.label}: {user.error_count}/{user.data_length}",
    ]


def format_cdma_report(result: CDMAResult) -> str:
    """Full text report of a two-user run"""
    a, b = result.users
    lines = [
        f"CDMA Simulation Results - Timestamp: {result.timestamp.strftime(TIMESTAMP_FORMAT)}",
        RULE,
        "",
        "Input Parameters:",
        f"  Gold Code N: {result.n}",
        f"  Poly1 Taps: {list(result.poly1)}, Poly2 Taps: {list(result.poly2)}",
        f"  User A Seeds (L1/L2): 0x{a.seed1:X} / 0x{a.seed2:X}",
        f"  User B Seeds (L1/L2): 0x{b.seed1:X} / 0x{b.seed2:X}",
        f"  Noise Level: {result.noise_level:.4f}",
        f"  Input Text A: \"{a.input_text}\", Input Text B: \"{b.input_text}\"",
    ]
    if not a.is_text and not b.is_text:
        lines.append(f"  Random Seq Length: {result.random_length} bits")

    lines += [
        "",
        "Data Lengths & Codes:",
        f"  User A Data Bits: {a.data_length}, User B Data Bits: {b.data_length}",
        f"  Gold Code Length: {result.code_length}",
        f"  User A Gold Code: {a.gold_code}",
        f"  User B Gold Code: {b.gold_code}",
        "",
        "Code Properties:",
        f"  Autocorr Peak: {result.autocorrelation_peak}, "
        f"Max Off-Peak A: {a.max_off_peak_autocorrelation:.4f}, "
        f"Max Off-Peak B: {b.max_off_peak_autocorrelation:.4f}",
        f"  Cross-Correlation (A vs B): {result.cross_correlation:.4f}",
    ]
    lines += _user_path(a)
    lines += _user_path(b)
    lines += [
        "",
        "Channel & Reception:",
        f"  Combined (trunc): {format_signal(result.combined)}",
        f"  Received (trunc): {format_signal(result.received)}",
        f"  Rx Segment A (trunc): {format_signal(result.received_segment(a))}, "
        f"Rx Segment B (trunc): {format_signal(result.received_segment(b))}",
    ]
    lines += _user_decoding(a)
    lines += _user_decoding(b)
    lines += ["", RULE, "End of CDMA Report", ""]
    return "\n".join(lines)


def format_link_report(result: LinkResult) -> str:
    """Full text report of a single-user run"""
    lines = [
        f"Simulation Results - Timestamp: {result.timestamp.strftime(TIMESTAMP_FORMAT)}",
        RULE,
        "",
        "Input Parameters:",
        f"  Input Text: {result.input_text}",
        f"  Gold Code N: {result.n}",
        f"  Gold Taps1: {list(result.poly1)}",
        f"  Gold Taps2: {list(result.poly2)}",
        f"  Decoder: {'enabled' if result.decoded is not None else 'disabled'}",
        f"  Error Type: {result.error_kind.value}",
        f"  Error Rate: {result.error_rate:.2f}%",
        "",
        "Generated/Processed Sequences:",
        f"  Original (len {len(result.original)}): {result.original}",
    ]
    if result.input_text:
        lines.append(f"  Original ASCII: {_ascii_or_note(result.original)}")
    lines += [
        f"  Gold Code (len {len(result.gold_code)}): {result.gold_code}",
        f"  Encoded (len {len(result.encoded)}): {result.encoded}",
        f"  Corrupted (len {len(result.corrupted)}): {result.corrupted}",
        f"  Errors Introduced: {result.errors_introduced}",
    ]
    if result.decoded is not None:
        lines.append(f"  Decoded (len {len(result.decoded)}): {result.decoded}")
        if result.input_text:
            lines.append(f"  Decoded ASCII: {_ascii_or_note(result.decoded)}")
    else:
        lines.append("  Decoded Sequence: Not available / Decoder disabled")

    lines += ["", "Analysis Results:"]
    if result.ber is not None:
        lines += [
            f"  BER: {result.ber:.4f} ({result.ber * 100:.2f}%)",
            f"  Error Count (vs Original): {result.error_count} / {len(result.original)} bits",
        ]
    else:
        lines.append("  BER: Not calculated / Decoder disabled")

    lines += [
        "",
        "Autocorrelation (Max Absolute Off-Peak):",
        f"  Original: {result.original_autocorrelation:.4f}",
        f"  Encoded: {result.encoded_autocorrelation:.4f}",
        f"  Corrupted: {result.corrupted_autocorrelation:.4f}",
        "",
        RULE,
        "End of Report",
        "",
    ]
    return "\n".join(lines)
