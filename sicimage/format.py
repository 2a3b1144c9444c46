"""Selection of an image output format from identifiers and file extensions."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field

from .errors import (
    JpegQualityNotInRange,
    JpegQualityNotSet,
    PnmSampleEncodingNotSet,
    UnableToDetermineImageFormat,
    UnknownImageIdentifier,
)


class SampleEncoding(enum.Enum):
    """How PNM samples are written."""

    BINARY = "binary"
    ASCII = "ascii"


class FormatKind(enum.Enum):
    """The supported output image formats."""

    AVIF = "avif"
    BMP = "bmp"
    FARBFELD = "farbfeld"
    GIF = "gif"
    ICO = "ico"
    JPEG = "jpeg"
    PNG = "png"
    PBM = "pbm"
    PGM = "pgm"
    PPM = "ppm"
    PAM = "pam"
    TGA = "tga"

    @property
    def is_pnm(self) -> bool:
        return self in _PNM_KINDS


_PNM_KINDS = frozenset(
    {FormatKind.PBM, FormatKind.PGM, FormatKind.PPM, FormatKind.PAM}
)


@dataclass(frozen=True)
class OutputFormat:
    """An output format together with the settings it carries.

    ``quality`` is set for JPEG only; ``encoding`` for PBM, PGM and PPM only.
    """

    kind: FormatKind
    quality: int | None = None
    encoding: SampleEncoding | None = None


@dataclass(frozen=True, order=True)
class JpegQuality:
    """A JPEG quality level, guaranteed to lie between 1 and 100 inclusive."""

    value: int = 80

    def __post_init__(self) -> None:
        if not 1 <= self.value <= 100:
            raise JpegQualityNotInRange(self.value)

    def __int__(self) -> int:
        return self.value


_SIMPLE_KINDS = {
    "avif": FormatKind.AVIF,
    "bmp": FormatKind.BMP,
    "farbfeld": FormatKind.FARBFELD,
    "gif": FormatKind.GIF,
    "ico": FormatKind.ICO,
    "pam": FormatKind.PAM,
    "png": FormatKind.PNG,
    "tga": FormatKind.TGA,
}

_ENCODED_KINDS = {
    "pbm": FormatKind.PBM,
    "pgm": FormatKind.PGM,
    "ppm": FormatKind.PPM,
}


def _extension(path: str) -> str | None:
    name = os.path.basename(path)
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


@dataclass
class DetermineEncodingFormat:
    """Determines output formats, using the configured JPEG and PNM settings."""

    pnm_sample_encoding: SampleEncoding | None = SampleEncoding.BINARY
    jpeg_quality: JpegQuality | None = field(default_factory=JpegQuality)

    def by_extension(self, path: str | os.PathLike[str]) -> OutputFormat:
        """Determine the output format from the extension of ``path``."""
        ext = _extension(os.fspath(path))
        if ext is None:
            raise UnableToDetermineImageFormat(path)
        return self.by_identifier(ext)

    def by_identifier(self, identifier: str) -> OutputFormat:
        """Determine the output format from an identifier such as ``"png"``."""
        key = identifier.lower()
        if key in _SIMPLE_KINDS:
            return OutputFormat(_SIMPLE_KINDS[key])
        if key in ("jpeg", "jpg"):
            return OutputFormat(FormatKind.JPEG, quality=self.require_jpeg_quality().value)
        if key in _ENCODED_KINDS:
            return OutputFormat(_ENCODED_KINDS[key], encoding=self.require_pnm_encoding())
        raise UnknownImageIdentifier(identifier)

    def require_jpeg_quality(self) -> JpegQuality:
        """Return the configured JPEG quality, or raise if none is set."""
        if self.jpeg_quality is None:
            raise JpegQualityNotSet()
        return self.jpeg_quality

    def require_pnm_encoding(self) -> SampleEncoding:
        """Return the configured PNM sample encoding, or raise if none is set."""
        if self.pnm_sample_encoding is None:
            raise PnmSampleEncodingNotSet()
        return self.pnm_sample_encoding