"""
Binary and text encodings of Digits.

Binary layout: a version byte, then unsigned LEB128 varints.
  v >= 110        skip v - 109 positions
  100 <= v < 110  one digit, v - 100
  v < 100         two consecutive digits, v // 10 then v % 10

Text layout: "v1:" followed by digit characters. "[n]" before a digit
means that digit is at position n instead of right after the previous one.
  v1:[3]14[10]1 -> 1 at 3, 4 at 4, 1 at 10
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from rootdigits.digits import Digits, DigitsBuilder
from rootdigits.errors import DecodeError

BINARY_VERSION = 187
TEXT_VERSION = "v1"

_UNEXPECTED_END = "rootdigits: text digits hit unexpected end of text"


# =========================
# Varints
# =========================


def _append_uvarint(out: bytearray, value: int) -> None:
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)


def _read_uvarints(data: bytes) -> Iterator[int]:
    value = 0
    shift = 0
    for byte in data:
        if shift >= 64:
            raise DecodeError("rootdigits: varint overflows 64 bits")
        value |= (byte & 0x7F) << shift
        if byte & 0x80:
            shift += 7
            continue
        yield value
        value = 0
        shift = 0
    if shift:
        raise DecodeError("rootdigits: binary digits truncated mid varint")


# =========================
# Binary
# =========================


def encode_binary(digits: Digits) -> bytes:
    """Encode digits losslessly, pairing neighbours and skipping gaps."""
    result = bytearray([BINARY_VERSION])
    next_posit = 0
    pending = None
    for digit in digits.items():
        delta = digit.position - next_posit
        if delta > 0:
            if pending is not None:
                _append_uvarint(result, 100 + pending)
                pending = None
            _append_uvarint(result, delta + 109)
        next_posit = digit.position + 1
        if pending is None:
            pending = digit.value
        else:
            _append_uvarint(result, 10 * pending + digit.value)
            pending = None
    if pending is not None:
        _append_uvarint(result, 100 + pending)
    return bytes(result)


def decode_binary(data: bytes) -> Digits:
    """Inverse of encode_binary. Raises DecodeError on malformed input."""
    if not data or data[0] != BINARY_VERSION:
        raise DecodeError("rootdigits: bad binary digits version")
    builder = DigitsBuilder()
    posit = 0
    try:
        for value in _read_uvarints(data[1:]):
            if value >= 110:
                posit += value - 109
            elif value >= 100:
                builder.add_digit(posit, value - 100)
                posit += 1
            else:
                builder.add_digit(posit, value // 10)
                builder.add_digit(posit + 1, value % 10)
                posit += 2
    except DecodeError:
        raise
    except ValueError as e:
        raise DecodeError(str(e)) from e
    return builder.build()


# =========================
# Text
# =========================


def encode_text(digits: Digits) -> str:
    parts: List[str] = [TEXT_VERSION, ":"]
    next_posit = 0
    for digit in digits.items():
        if digit.position > next_posit:
            parts.append(f"[{digit.position}]")
        parts.append(str(digit.value))
        next_posit = digit.position + 1
    return "".join(parts)


def _read_position(text: str, i: int) -> Tuple[int, int]:
    # i is just past '['; returns (position, index just past ']')
    result = 0
    while i < len(text):
        ch = text[i]
        if ch == "]":
            if i + 1 == len(text):
                raise DecodeError(_UNEXPECTED_END)
            return result, i + 1
        if not "0" <= ch <= "9":
            raise DecodeError(f"rootdigits: unexpected character in text digits: {ch!r}")
        result = result * 10 + ord(ch) - ord("0")
        i += 1
    raise DecodeError(_UNEXPECTED_END)


def decode_text(text: str) -> Digits:
    """Inverse of encode_text. Raises DecodeError on malformed input."""
    version, sep, body = text.partition(":")
    if not sep or version != TEXT_VERSION:
        raise DecodeError("rootdigits: bad text digits version")
    builder = DigitsBuilder()
    posit = 0
    i = 0
    try:
        while i < len(body):
            if body[i] == "[":
                posit, i = _read_position(body, i + 1)
            ch = body[i]
            if not "0" <= ch <= "9":
                raise DecodeError(f"rootdigits: unexpected character in text digits: {ch!r}")
            builder.add_digit(posit, ord(ch) - ord("0"))
            posit += 1
            i += 1
    except DecodeError:
        raise
    except ValueError as e:
        raise DecodeError(str(e)) from e
    return builder.build()
