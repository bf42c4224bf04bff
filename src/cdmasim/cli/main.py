#!/usr/bin/env python3
"""
Main CLI entry point for the Gold Code CDMA Simulator
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import SimulationConfig, create_example_config
from ..exceptions import CDMASimError
from ..reporting import (
    CDMA_PREFIX,
    LINK_PREFIX,
    ResultStore,
    format_cdma_report,
    format_link_report,
)
from ..rf.cdma import simulate_cdma
from ..rf.link import simulate_link

logger = logging.getLogger(__name__)


def _parse_taps(text: str) -> List[int]:
    """Parse "0,3" or "0 3" into [0, 3]"""
    parts = text.replace(",", " ").split()
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid tap list: {text!r}") from None


def _int_auto(text: str) -> int:
    """Integer in any Python literal base (0x.., 0b.., decimal)"""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer: {text!r}") from None


def _load_config(args) -> SimulationConfig:
    config = SimulationConfig(args.config) if args.config else SimulationConfig()

    # Command-line overrides
    if args.n is not None:
        config.code.n = args.n
    if args.poly1 is not None:
        config.code.poly1 = args.poly1
    if args.poly2 is not None:
        config.code.poly2 = args.poly2
    if args.seed is not None:
        config.system.seed = args.seed
    if args.save:
        config.output.save = True
    if config.system.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    return config


def cmd_cdma(args):
    """Run the two-user CDMA simulation"""
    config = _load_config(args)
    for user, prefix in ((config.user_a, "a"), (config.user_b, "b")):
        for attr in ("seed1", "seed2", "text"):
            value = getattr(args, f"{prefix}_{attr}")
            if value is not None:
                setattr(user, attr, value)
    if args.noise is not None:
        config.channel.noise_level = args.noise
    if args.length is not None:
        config.channel.random_length = args.length
    config.validate_cdma()

    result = simulate_cdma(**config.to_cdma_kwargs())
    report = format_cdma_report(result)
    print(report)

    if config.output.save:
        store = ResultStore(config.output.directory, CDMA_PREFIX, config.output.max_files)
        store.save(report, result.timestamp)


def cmd_link(args):
    """Run the single-user spreading / error injection simulation"""
    config = _load_config(args)
    for attr in ("text", "seed1", "seed2", "error_kind", "error_rate"):
        value = getattr(args, attr)
        if value is not None:
            setattr(config.link, attr, value)
    if args.length is not None:
        config.link.random_length = args.length
    if args.no_decode:
        config.link.decode = False
    config.validate_link()

    result = simulate_link(**config.to_link_kwargs())
    report = format_link_report(result)
    print(report)

    if config.output.save:
        store = ResultStore(config.output.link_directory, LINK_PREFIX, config.output.max_files)
        store.save(report, result.timestamp)


def cmd_init_config(args):
    """Write an example YAML configuration"""
    create_example_config(args.output)
    print(f"Example configuration written to {args.output}")


def _add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--n", type=int, help="LFSR width (code length 2^n - 1)")
    parser.add_argument("--poly1", type=_parse_taps, help="Taps of the first LFSR, e.g. \"0,3\"")
    parser.add_argument("--poly2", type=_parse_taps, help="Taps of the second LFSR, e.g. \"0,2,3,8\"")
    parser.add_argument("--seed", type=int, help="Random generator seed (reproducible runs)")
    parser.add_argument("--save", action="store_true", help="Save the report to the output directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gold Code CDMA Simulator - Command Line Interface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two users sending text over a noisy channel
  %(prog)s cdma --a-text Hi --b-text Yo --noise 0.5 --seed 1

  # Single user with 5%% burst errors
  %(prog)s link --text A --error-kind burst --error-rate 5

  # Write an example configuration
  %(prog)s init-config configs/example.yaml
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Gold Code CDMA Simulator v1.0.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # CDMA command
    parser_cdma = subparsers.add_parser(
        "cdma",
        help="Run the two-user CDMA simulation"
    )
    _add_common(parser_cdma)
    for prefix in ("a", "b"):
        label = prefix.upper()
        parser_cdma.add_argument(f"--{prefix}-seed1", type=_int_auto, help=f"User {label} first seed")
        parser_cdma.add_argument(f"--{prefix}-seed2", type=_int_auto, help=f"User {label} second seed")
        parser_cdma.add_argument(f"--{prefix}-text", help=f"User {label} text")
    parser_cdma.add_argument("--noise", type=float, help="AWGN standard deviation")
    parser_cdma.add_argument("--length", type=int, help="Random bits per user without text")
    parser_cdma.set_defaults(func=cmd_cdma)

    # Link command
    parser_link = subparsers.add_parser(
        "link",
        help="Run the single-user spreading simulation"
    )
    _add_common(parser_link)
    parser_link.add_argument("--text", help="Input text")
    parser_link.add_argument("--length", type=int, help="Random bits when no text is given")
    parser_link.add_argument("--seed1", type=_int_auto, help="First LFSR seed")
    parser_link.add_argument("--seed2", type=_int_auto, help="Second LFSR seed")
    parser_link.add_argument(
        "--error-kind",
        choices=["random", "burst"],
        help="Error model"
    )
    parser_link.add_argument("--error-rate", type=float, help="Error rate in percent")
    parser_link.add_argument("--no-decode", action="store_true", help="Skip decoding and BER")
    parser_link.set_defaults(func=cmd_link)

    # Init-config command
    parser_init = subparsers.add_parser(
        "init-config",
        help="Write an example YAML configuration"
    )
    parser_init.add_argument(
        "output",
        nargs="?",
        default="configs/example.yaml",
        help="Output file path"
    )
    parser_init.set_defaults(func=cmd_init_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    try:
        args.func(args)
    except (CDMASimError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
