"""Converting images to an output format and writing them out."""

from __future__ import annotations

import enum
import re
import struct
import sys
from dataclasses import dataclass, field
from typing import BinaryIO

from PIL import Image

from .errors import GifRepeatInvalidValue, SicIoError
from .format import FormatKind, OutputFormat, SampleEncoding
from .importing import AnimatedImage, Frame, SicImage

_U16_RE = re.compile(r"\+?[0-9]+", re.ASCII)
_U16_MAX = 65535


class AutomaticColorTypeAdjustment(enum.Enum):
    """Whether a static image's color type is adapted to what the output format needs."""

    ENABLED = "enabled"
    DISABLED = "disabled"


class _RepeatKind(enum.Enum):
    FINITE = "finite"
    INFINITE = "infinite"
    NEVER = "never"


@dataclass(frozen=True)
class RepeatAnimation:
    """How often an animated GIF repeats: a finite count, forever, or not at all."""

    kind: _RepeatKind = _RepeatKind.INFINITE
    count: int = 0

    @classmethod
    def finite(cls, count: int) -> RepeatAnimation:
        if not 0 <= count <= _U16_MAX:
            raise GifRepeatInvalidValue(str(count))
        return cls(_RepeatKind.FINITE, count)

    @classmethod
    def infinite(cls) -> RepeatAnimation:
        return cls(_RepeatKind.INFINITE)

    @classmethod
    def never(cls) -> RepeatAnimation:
        return cls(_RepeatKind.NEVER)

    @classmethod
    def from_str(cls, text: str) -> RepeatAnimation:
        """Parse ``infinite``, ``never`` or a repeat count below 65536."""
        if text == "infinite":
            return cls.infinite()
        if text == "never":
            return cls.never()
        if _U16_RE.fullmatch(text) and int(text) <= _U16_MAX:
            return cls.finite(int(text))
        raise GifRepeatInvalidValue(text)


@dataclass
class ExportSettings:
    """Settings which influence how an image is exported."""

    adjust_color_type: AutomaticColorTypeAdjustment = AutomaticColorTypeAdjustment.ENABLED
    gif_repeat: RepeatAnimation = field(default_factory=RepeatAnimation.infinite)


# Pillow format name, the modes it accepts as is, and the mode to convert others to.
_PILLOW_FORMATS: dict[FormatKind, tuple[str, frozenset[str] | None, str]] = {
    FormatKind.AVIF: ("AVIF", frozenset({"RGB", "RGBA"}), "RGBA"),
    FormatKind.BMP: ("BMP", frozenset({"1", "L", "P", "RGB", "RGBA"}), "RGBA"),
    FormatKind.GIF: ("GIF", None, "RGBA"),
    FormatKind.ICO: ("ICO", frozenset({"RGBA"}), "RGBA"),
    FormatKind.JPEG: ("JPEG", frozenset({"L", "RGB", "CMYK"}), "RGB"),
    FormatKind.PNG: (
        "PNG",
        frozenset({"1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"}),
        "RGBA",
    ),
    FormatKind.TGA: ("TGA", frozenset({"1", "L", "LA", "P", "RGB", "RGBA"}), "RGBA"),
}

_ADJUSTED_MODES = {
    FormatKind.FARBFELD: "RGBA",
    FormatKind.PBM: "L",
    FormatKind.PGM: "L",
    FormatKind.PPM: "RGB",
}

_PAM_TUPLE_TYPES = {
    "L": (1, "GRAYSCALE"),
    "LA": (2, "GRAYSCALE_ALPHA"),
    "RGB": (3, "RGB"),
    "RGBA": (4, "RGB_ALPHA"),
}


def _unsupported(kind: FormatKind, mode: str) -> SicIoError:
    return SicIoError(
        f"The {kind.value} format does not support images with color type {mode}"
    )


def _rows(image: Image.Image) -> list[bytes]:
    raw = image.tobytes()
    stride = len(raw) // image.height if image.height else 0
    return [raw[y * stride:(y + 1) * stride] for y in range(image.height)]


def _encode_farbfeld(writer: BinaryIO, image: Image.Image) -> None:
    if image.mode != "RGBA":
        raise _unsupported(FormatKind.FARBFELD, image.mode)
    raw = image.tobytes()
    # An 8 bit sample v becomes the 16 bit sample v * 257, i.e. the bytes (v, v).
    wide = bytearray(len(raw) * 2)
    wide[0::2] = raw
    wide[1::2] = raw
    writer.write(b"farbfeld" + struct.pack(">II", image.width, image.height))
    writer.write(bytes(wide))


def _pack_bits(row: bytes) -> bytes:
    packed = bytearray((len(row) + 7) // 8)
    for i, value in enumerate(row):
        if value < 128:
            packed[i // 8] |= 0x80 >> (i % 8)
    return bytes(packed)


def _encode_pnm(writer: BinaryIO, image: Image.Image, output_format: OutputFormat) -> None:
    kind = output_format.kind
    if kind is FormatKind.PAM:
        _encode_pam(writer, image)
        return

    ascii_samples = output_format.encoding is SampleEncoding.ASCII
    if kind is FormatKind.PBM:
        if image.mode not in ("1", "L"):
            raise _unsupported(kind, image.mode)
        gray = image.convert("L")
        magic = "P1" if ascii_samples else "P4"
        header = f"{magic}\n{gray.width} {gray.height}\n".encode("ascii")
        writer.write(header)
        for row in _rows(gray):
            if ascii_samples:
                bits = ("1" if value < 128 else "0" for value in row)
                writer.write((" ".join(bits) + "\n").encode("ascii"))
            else:
                writer.write(_pack_bits(row))
        return

    required = "L" if kind is FormatKind.PGM else "RGB"
    if image.mode != required:
        raise _unsupported(kind, image.mode)
    if kind is FormatKind.PGM:
        magic = "P2" if ascii_samples else "P5"
    else:
        magic = "P3" if ascii_samples else "P6"
    writer.write(f"{magic}\n{image.width} {image.height}\n255\n".encode("ascii"))
    if ascii_samples:
        for row in _rows(image):
            writer.write((" ".join(str(value) for value in row) + "\n").encode("ascii"))
    else:
        writer.write(image.tobytes())


def _encode_pam(writer: BinaryIO, image: Image.Image) -> None:
    if image.mode not in _PAM_TUPLE_TYPES:
        image = image.convert("RGBA")
    depth, tuple_type = _PAM_TUPLE_TYPES[image.mode]
    header = (
        f"P7\nWIDTH {image.width}\nHEIGHT {image.height}\nDEPTH {depth}\n"
        f"MAXVAL 255\nTUPLTYPE {tuple_type}\nENDHDR\n"
    )
    writer.write(header.encode("ascii"))
    writer.write(image.tobytes())


def _encode_with_pillow(
    writer: BinaryIO, image: Image.Image, output_format: OutputFormat
) -> None:
    name, modes, fallback = _PILLOW_FORMATS[output_format.kind]
    if modes is not None and image.mode not in modes:
        image = image.convert(fallback)

    options: dict[str, object] = {}
    if output_format.kind is FormatKind.JPEG and output_format.quality is not None:
        options["quality"] = output_format.quality
    if output_format.kind is FormatKind.ICO:
        options["sizes"] = [(min(image.width, 256), min(image.height, 256))]

    try:
        image.save(writer, format=name, **options)
    except (OSError, ValueError, KeyError) as err:
        raise SicIoError(f"Unable to encode image as {output_format.kind.value}: {err}") from err


def _encode_static(writer: BinaryIO, image: Image.Image, output_format: OutputFormat) -> None:
    kind = output_format.kind
    if kind is FormatKind.FARBFELD:
        _encode_farbfeld(writer, image)
    elif kind.is_pnm:
        _encode_pnm(writer, image, output_format)
    else:
        _encode_with_pillow(writer, image, output_format)


def _encode_animated_gif(
    writer: BinaryIO, frames: list[Frame], repeat: RepeatAnimation
) -> None:
    images = []
    for frame in frames:
        copy = frame.image.copy()
        copy.info.pop("loop", None)
        images.append(copy)

    options: dict[str, object] = {
        "save_all": True,
        "append_images": images[1:],
        "duration": [frame.duration for frame in frames],
    }
    if repeat.kind is _RepeatKind.FINITE:
        options["loop"] = repeat.count
    elif repeat.kind is _RepeatKind.INFINITE:
        options["loop"] = 0

    try:
        images[0].save(writer, format="GIF", **options)
    except (OSError, ValueError, KeyError) as err:
        raise SicIoError(f"Unable to encode animated image as gif: {err}") from err


def _encode_animated(
    writer: BinaryIO,
    image: AnimatedImage,
    output_format: OutputFormat,
    settings: ExportSettings,
) -> None:
    if output_format.kind is FormatKind.GIF:
        _encode_animated_gif(writer, image.frames, settings.gif_repeat)
        return
    print(
        "WARN: The animated image buffer could not be encoded to the "
        f"{output_format.kind.value} format; encoding only the first frame",
        file=sys.stderr,
    )
    _encode_static(writer, image.try_into_static_image(0), output_format)


def _adjust_color_type(
    image: SicImage, output_format: OutputFormat, adjustment: AutomaticColorTypeAdjustment
) -> SicImage:
    if adjustment is AutomaticColorTypeAdjustment.DISABLED or isinstance(image, AnimatedImage):
        return image
    mode = _ADJUSTED_MODES.get(output_format.kind)
    if mode is None or image.mode == mode:
        return image
    return image.convert(mode)


@dataclass
class ConversionWriter:
    """Converts an image to an output format and writes it to a binary writer."""

    image: SicImage

    def write_all(
        self,
        writer: BinaryIO,
        output_format: OutputFormat,
        export_settings: ExportSettings | None = None,
    ) -> None:
        """Encode the image in ``output_format`` and write it to ``writer``."""
        settings = export_settings or ExportSettings()
        image = _adjust_color_type(self.image, output_format, settings.adjust_color_type)
        if isinstance(image, AnimatedImage):
            _encode_animated(writer, image, output_format, settings)
        else:
            _encode_static(writer, image, output_format)


def export(
    image: SicImage,
    writer: BinaryIO,
    output_format: OutputFormat,
    export_settings: ExportSettings | None = None,
) -> None:
    """Encode ``image`` in ``output_format`` and write it to ``writer``."""
    ConversionWriter(image).write_all(writer, output_format, export_settings)