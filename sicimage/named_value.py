"""Named values of the form ``ident(a, b, ...)``, such as ``rgba(4, 255, 0, 255)``.

A named value consists of an identifier followed by a comma separated list of
arguments wrapped in parentheses. Dangling commas are not supported.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

from .errors import NamedValueError

_UNSIGNED_RE = re.compile(r"\+?[0-9]+", re.ASCII)
_SIGNED_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class Ident(enum.Enum):
    """The identifiers a named value may carry."""

    RGBA = "rgba"
    SIZE = "size"
    FONT = "font"
    COORD = "coord"

    def __str__(self) -> str:
        return self.value.capitalize()


def parse_ident(name: str) -> Ident:
    """Return the identifier for ``name``; it must match exactly and in lower case."""
    try:
        return Ident(name)
    except ValueError:
        raise NamedValueError(
            f"Found an unknown identifier for named value '{name}'"
        ) from None


def _unable_to_parse(value: str, type_name: str) -> NamedValueError:
    return NamedValueError(f"Unable to parse value '{value}', with type '{type_name}'")


def _no_matching_args(ident: Ident) -> NamedValueError:
    return NamedValueError(
        "Unable to create named value: no matching arguments for identifier "
        f"'{ident}' found"
    )


def _parse_byte(value: str) -> int:
    if _UNSIGNED_RE.fullmatch(value):
        number = int(value)
        if number <= 255:
            return number
    raise _unable_to_parse(value, "Byte")


def _parse_integer(value: str) -> int:
    if _SIGNED_RE.fullmatch(value):
        number = int(value)
        if _I32_MIN <= number <= _I32_MAX:
            return number
    raise _unable_to_parse(value, "Integer")


def _parse_float(value: str) -> float:
    if _FLOAT_RE.fullmatch(value):
        return float(value)
    raise _unable_to_parse(value, "Float")


def _parse_string(value: str) -> str:
    quoted = len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'"
    if not quoted:
        raise NamedValueError(
            f"Named value argument expected a string, but given value `{value}` is not "
            "valid (note: the value of the string should be wrapped in either single or "
            "double quotation marks, e.g. 'hello' or \"hello\")"
        )
    return value[1:-1]


_ARG_PARSERS: dict[Ident, Callable[[str], Union[int, float, str]]] = {
    Ident.RGBA: _parse_byte,
    Ident.SIZE: _parse_float,
    Ident.COORD: _parse_integer,
    Ident.FONT: _parse_string,
}


class NamedValue:
    """Base class of the parsed named values."""

    _type_name = "NamedValue"

    def _mismatch(self, expected: str) -> NamedValueError:
        return NamedValueError(
            f"Unable to extract value: expected value of type '{expected}' but found "
            f"'{self._type_name}'"
        )

    def extract_rgba(self) -> tuple[int, int, int, int]:
        """Return the colour channels, or raise if this is not an ``rgba`` value."""
        if isinstance(self, Rgba):
            return (self.r, self.g, self.b, self.a)
        raise self._mismatch("Rgba")

    def extract_size(self) -> float:
        """Return the size, or raise if this is not a ``size`` value."""
        if isinstance(self, Size):
            return self.value
        raise self._mismatch("Size")

    def extract_font(self) -> Path:
        """Return the font path, or raise if this is not a ``font`` value."""
        if isinstance(self, Font):
            return Path(self.path)
        raise self._mismatch("Font")

    def extract_coord(self) -> tuple[int, int]:
        """Return the coordinate, or raise if this is not a ``coord`` value."""
        if isinstance(self, Coord):
            return (self.x, self.y)
        raise self._mismatch("Coord")


@dataclass(frozen=True)
class Rgba(NamedValue):
    """A colour: ``rgba(r, g, b, a)`` with bytes as channels."""

    r: int
    g: int
    b: int
    a: int

    _type_name = "Rgba"


@dataclass(frozen=True)
class Size(NamedValue):
    """A size: ``size(v)`` with a floating point value."""

    value: float

    _type_name = "Size"


@dataclass(frozen=True)
class Font(NamedValue):
    """A font file: ``font("path")`` with a quoted path."""

    path: Path

    _type_name = "Font"


@dataclass(frozen=True)
class Coord(NamedValue):
    """A coordinate: ``coord(x, y)`` with integer values."""

    x: int
    y: int

    _type_name = "Coord"


def _build(ident: Ident, args: list) -> NamedValue:
    if ident is Ident.RGBA and len(args) == 4:
        return Rgba(*args)
    if ident is Ident.SIZE and len(args) == 1:
        return Size(args[0])
    if ident is Ident.FONT and len(args) == 1:
        return Font(Path(args[0]))
    if ident is Ident.COORD and len(args) == 2:
        return Coord(*args)
    raise _no_matching_args(ident)


def parse_named_value(text: str) -> NamedValue:
    """Parse a named value such as ``rgba(10, 10, 255, 255)`` or ``font("a.ttf")``."""
    name, paren, rest = text.partition("(")
    ident = parse_ident(name)
    if not paren:
        raise _no_matching_args(ident)

    inner, _, _ = rest.rpartition(")")
    if ")" not in rest:
        inner = rest

    parser = _ARG_PARSERS[ident]
    args = [parser(arg.strip()) for arg in inner.split(",")]
    return _build(ident, args)