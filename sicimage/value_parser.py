"""Parsing of image operation arguments from sequences of strings.

Each parser takes an iterable of string values, as given on a command line or
taken from a script, and turns them into the typed inputs of one operation.
Every value must be used: leftover values are an error, as are missing ones.
"""

from __future__ import annotations

import math
import re
import struct
from pathlib import Path
from typing import Callable, Iterable, Iterator, TypeVar

from .errors import ValueParsingError
from .named_value import parse_named_value

T = TypeVar("T")

_TOO_MANY_ARGUMENTS = "Too many arguments found for image operation"

_UNSIGNED_RE = re.compile(r"\+?[0-9]+", re.ASCII)
_SIGNED_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def _integer_parser(
    pattern: re.Pattern[str], low: int, high: int, type_name: str
) -> Callable[[str], int]:
    def parse(value: str) -> int:
        if not pattern.fullmatch(value):
            raise ValueError(f"invalid digit found in {value!r} for type {type_name}")
        number = int(value)
        if not low <= number <= high:
            raise ValueError(f"number {value!r} out of range for type {type_name}")
        return number

    return parse


_to_u32 = _integer_parser(_UNSIGNED_RE, 0, 2**32 - 1, "u32")
_to_i32 = _integer_parser(_SIGNED_RE, -(2**31), 2**31 - 1, "i32")
_to_i64 = _integer_parser(_SIGNED_RE, -(2**63), 2**63 - 1, "i64")


def _to_f32(value: str) -> float:
    if not _FLOAT_RE.fullmatch(value):
        raise ValueError(f"invalid float literal {value!r}")
    number = float(value)
    try:
        return struct.unpack("f", struct.pack("f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _to_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"provided string {value!r} was not `true` or `false`")


class _Inputs:
    """Consumes values one by one and checks that none are left over."""

    def __init__(self, values: Iterable[str]) -> None:
        self._values: Iterator[str] = iter(values)

    def raw(self, missing_message: str) -> str:
        try:
            return next(self._values)
        except StopIteration:
            raise ValueParsingError(missing_message) from None

    def take(self, convert: Callable[[str], T], message: str) -> T:
        value = self.raw(message)
        try:
            return convert(value)
        except Exception as err:
            raise ValueParsingError(message, err) from err

    def finish(self, result: T) -> T:
        if next(self._values, None) is not None:
            raise ValueParsingError(_TOO_MANY_ARGUMENTS)
        return result


def parse_f32(values: Iterable[str]) -> float:
    """Parse exactly one single precision floating point value."""
    inputs = _Inputs(values)
    return inputs.finish(inputs.take(_to_f32, "Unable to map a value to f32. v2"))


def parse_i32(values: Iterable[str]) -> int:
    """Parse exactly one signed 32 bit integer."""
    inputs = _Inputs(values)
    return inputs.finish(inputs.take(_to_i32, "Unable to map a value to i32. v2"))


def parse_u32(values: Iterable[str]) -> int:
    """Parse exactly one unsigned 32 bit integer."""
    inputs = _Inputs(values)
    return inputs.finish(inputs.take(_to_u32, "Unable to map a value to u32. v2"))


def parse_bool(values: Iterable[str]) -> bool:
    """Parse exactly one boolean, written ``true`` or ``false``."""
    inputs = _Inputs(values)
    return inputs.finish(inputs.take(_to_bool, "Unable to map a value to bool. v2"))


def parse_string(values: Iterable[str]) -> str:
    """Take exactly one value as is."""
    inputs = _Inputs(values)
    return inputs.finish(inputs.raw("Unable to map a value to string"))


def parse_crop(values: Iterable[str]) -> tuple[int, int, int, int]:
    """Parse the four unsigned coordinates of a crop."""
    message = "Unable to map a value to (u32, u32, u32, u32). v2"
    inputs = _Inputs(values)
    result = tuple(inputs.take(_to_u32, message) for _ in range(4))
    return inputs.finish(result)  # type: ignore[return-value]


def parse_resize(values: Iterable[str]) -> tuple[int, int]:
    """Parse the unsigned width and height of a resize."""
    message = "Unable to map a value to (u32, u32). v2"
    inputs = _Inputs(values)
    width = inputs.take(_to_u32, message)
    height = inputs.take(_to_u32, message)
    return inputs.finish((width, height))


def parse_unsharpen(values: Iterable[str]) -> tuple[float, int]:
    """Parse the sigma and threshold of an unsharpen."""
    message = "Unable to map a value to (f32, i32). v2"
    inputs = _Inputs(values)
    sigma = inputs.take(_to_f32, message)
    threshold = inputs.take(_to_i32, message)
    return inputs.finish((sigma, threshold))


def parse_filter3x3(values: Iterable[str]) -> tuple[float, ...]:
    """Parse the nine floating point values of a 3x3 kernel."""
    message = "Unable to map a value to [f32; 9]. v2"
    inputs = _Inputs(values)
    kernel = tuple(inputs.take(_to_f32, message) for _ in range(9))
    return inputs.finish(kernel)


def parse_position(values: Iterable[str]) -> tuple[int, int]:
    """Parse a signed 64 bit x and y position."""
    message = "Unable to map a value to (u32, u32). v2"
    inputs = _Inputs(values)
    x = inputs.take(_to_i64, message)
    y = inputs.take(_to_i64, message)
    return inputs.finish((x, y))


def parse_path(values: Iterable[str]) -> Path:
    """Take exactly one value as a file system path."""
    inputs = _Inputs(values)
    path = Path(inputs.raw("A path was expected but none was found."))
    return inputs.finish(path)


def _to_rgba(value: str) -> tuple[int, int, int, int]:
    return parse_named_value(value).extract_rgba()


def parse_gradient(
    values: Iterable[str],
) -> tuple[tuple[int, int, int, int], tuple[int, int, int, int]]:
    """Parse the two ``rgba(...)`` colours of a gradient."""
    inputs = _Inputs(values)
    first = inputs.take(parse_named_value, "Rgba")
    second = inputs.take(parse_named_value, "Rgba")
    return inputs.finish((first.extract_rgba(), second.extract_rgba()))