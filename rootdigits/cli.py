#!/usr/bin/env python3
"""
Command line front end: print square or cube roots to any number of digits.

- Digits are exact and truncated (floored), never rounded.
- Optionally searches the printed digits for a pattern.

Examples:
  rootdigits 2
  rootdigits 2 --digits 10K
  rootdigits 3/7 --cube -d 1e4
  rootdigits 2 -d 1M --find 999999 --count 5
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

import yaml

from rootdigits.config import ConfigManager
from rootdigits.find import find_first_n
from rootdigits.logging_config import setup_logging
from rootdigits.number import FiniteNumber, cube_root, square_root

logger = logging.getLogger("rootdigits")

# Radicands can be huge integers given on the command line
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)


# =========================
# Digit specification parser
# =========================


def parse_digit_spec(spec: str) -> int:
    """
    Parse a digit specification like:
      "123", "1K", "10M", "2g", "132876K", "1e6", "3E7"

    Suffixes (case-insensitive):
      K = 1_000 (10^3)
      M = 1_000_000 (10^6)
      G = 1_000_000_000 (10^9)
      T = 1_000_000_000_000 (10^12)

    Scientific notation:
      "<int>e<int>", e.g. "1e6".

    Returns: number of digits as Python int (unbounded).
    Raises ValueError on invalid input.
    """
    s = spec.strip()
    if not s:
        raise ValueError("Empty digits specification")

    # 1) Scientific notation: "<int>e<int>" or "<int>E<int>"
    mantissa_str, sep, exp_str = s.lower().partition("e")
    if sep:
        if not mantissa_str or not exp_str:
            raise ValueError(f"Invalid scientific notation: {spec!r}")
        exp = int(exp_str)
        if exp < 0:
            raise ValueError(f"Negative exponent not supported in {spec!r}")
        value = int(mantissa_str) * (10 ** exp)
        if value <= 0:
            raise ValueError(f"Digits must be positive: {spec!r}")
        return value

    # 2) Suffix-based notation: K, M, G, T
    multipliers = {"k": 1_000, "m": 1_000_000, "g": 1_000_000_000, "t": 1_000_000_000_000}
    multiplier = multipliers.get(s[-1].lower(), 1)
    if multiplier != 1:
        s = s[:-1].strip()
        if not s:
            raise ValueError(f"Missing number before suffix in {spec!r}")

    base = int(s)
    if base <= 0:
        raise ValueError(f"Digits must be positive: {spec!r}")

    return base * multiplier


def parse_pattern(text: str) -> List[int]:
    """'1415' -> [1, 4, 1, 5]. Raises ValueError on non-digits."""
    if not text.isdigit():
        raise ValueError(f"Pattern must be decimal digits: {text!r}")
    return [int(ch) for ch in text]


# =========================
# Output
# =========================


def truncated_string(number: FiniteNumber) -> str:
    """
    Plain decimal form of a finite number, e.g. "1.414213562".

    Uses exactly the digits number has, so the result is truncated toward
    zero wherever the number was.
    """
    if number.is_zero():
        return "0"
    digits = "".join(map(str, number.digits()))
    exp = number.exponent
    if exp <= 0:
        return "0." + "0" * -exp + digits
    int_part = digits[:exp].ljust(exp, "0")
    frac_part = digits[exp:]
    if not frac_part:
        return int_part
    return f"{int_part}.{frac_part}"


# =========================
# Main
# =========================


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rootdigits",
        description="Square and cube roots to arbitrary precision, truncated not rounded.",
    )
    parser.add_argument("radicand", help='non-negative rational, e.g. "2", "3/7", "0.026"')
    parser.add_argument("--cube", action="store_true", help="cube root instead of square root")
    parser.add_argument("-d", "--digits", "-c", "--calculate", dest="digits",
                        help="significant digits, e.g. 1000, 10K, 1e6")
    parser.add_argument("--find", metavar="PATTERN", help="report where PATTERN occurs in the digits")
    parser.add_argument("--count", type=int, default=3, help="matches to report with --find")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG")
    parser.add_argument("--quiet", action="store_true", help="print only the digits")
    return parser.parse_args(argv)


def main(argv: List[str]) -> int:
    prog = argv[0] if argv else "rootdigits"
    args = parse_args(argv[1:])

    try:
        config = ConfigManager(args.config)
        setup_logging(config.get("logging.file"), level=args.log_level or config.get("logging.level", "INFO"))
        chunk_size = int(config.get("memoizer.chunk_size", 100))
        digits = parse_digit_spec(args.digits) if args.digits else int(config.get("cli.digits", 1000))
        pattern = parse_pattern(args.find) if args.find is not None else None
        factory = cube_root if args.cube else square_root
        number = factory(args.radicand, chunk_size=chunk_size)
    except (ValueError, ZeroDivisionError, yaml.YAMLError) as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.stderr.write("Usage examples:\n")
        sys.stderr.write(f"  {prog} 2\n")
        sys.stderr.write(f"  {prog} 2 --digits 10K\n")
        sys.stderr.write(f"  {prog} 3/7 --cube -d 1e4\n")
        sys.stderr.write(f"  {prog} 2 -d 1M --find 999999\n")
        return 1

    kind = "cube" if args.cube else "square"
    logger.info(f"Calculating {kind} root of {args.radicand} to {digits} digits...")

    start = time.perf_counter()
    truncated = number.with_significant(digits)
    text = truncated_string(truncated)
    elapsed = time.perf_counter() - start

    if not args.quiet:
        print(f"Time: {elapsed:.6f} s")
    print(text)

    if pattern is not None:
        hits = find_first_n(truncated, pattern, args.count)
        logger.info(f"Pattern {args.find} found {len(hits)} time(s) in {digits} digits")
        print(f"{args.find}: {', '.join(map(str, hits)) if hits else 'not found'}")
    return 0


def run() -> None:
    raise SystemExit(main(sys.argv))


if __name__ == "__main__":
    run()
