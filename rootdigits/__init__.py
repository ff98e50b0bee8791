"""
rootdigits - square and cube roots to arbitrary precision.

Digits are computed exactly, one at a time, only when asked for, and are
memoized so repeated lookups and searches are cheap and thread safe.

Quick start:
    from rootdigits import square_root, find_first_n

    n = square_root(2)
    n.exponent                       # 1, i.e. 0.1414... * 10**1
    n.first_n(10)                    # [1, 4, 1, 4, 2, 1, 3, 5, 6, 2]
    n.at(1000)                       # any single digit
    find_first_n(n, [1, 4], 3)       # [0, 2, 144]
"""

__version__ = "0.3.0"

from rootdigits.codec import decode_binary, decode_text, encode_binary, encode_text
from rootdigits.digits import Digits, DigitsBuilder, all_digits, get_digits
from rootdigits.errors import DecodeError, DigitSourceError
from rootdigits.find import (
    backward_matches,
    find_all,
    find_first,
    find_first_n,
    find_last,
    find_last_n,
    matches,
)
from rootdigits.memoizer import Memoizer
from rootdigits.number import (
    ZERO,
    FiniteNumber,
    Number,
    cube_root,
    from_digits,
    from_fraction,
    new_number,
    square_root,
)
from rootdigits.positions import PositionRange, Positions, PositionsBuilder, between, up_to
from rootdigits.roots import RootKind
from rootdigits.sequence import UNKNOWN, Digit, FiniteSequence, Sequence

__all__ = [
    "UNKNOWN",
    "ZERO",
    "DecodeError",
    "Digit",
    "DigitSourceError",
    "Digits",
    "DigitsBuilder",
    "FiniteNumber",
    "FiniteSequence",
    "Memoizer",
    "Number",
    "PositionRange",
    "Positions",
    "PositionsBuilder",
    "RootKind",
    "Sequence",
    "all_digits",
    "backward_matches",
    "between",
    "cube_root",
    "decode_binary",
    "decode_text",
    "encode_binary",
    "encode_text",
    "find_all",
    "find_first",
    "find_first_n",
    "find_last",
    "find_last_n",
    "from_digits",
    "from_fraction",
    "get_digits",
    "matches",
    "new_number",
    "square_root",
    "up_to",
]
