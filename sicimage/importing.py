"""Loading images, including selecting a single frame from animated images."""

from __future__ import annotations

import enum
import io
import os
import sys
from dataclasses import dataclass, field
from typing import BinaryIO, Union

from PIL import Image, ImageSequence, UnidentifiedImageError

from .errors import NoSuchFrame, SicIoError


class _FrameKind(enum.Enum):
    FIRST = "first"
    LAST = "last"
    NTH = "nth"


@dataclass(frozen=True)
class FrameIndex:
    """A zero-based frame index: the first, the last or the n-th frame."""

    kind: _FrameKind
    n: int = 0

    @classmethod
    def first(cls) -> FrameIndex:
        return cls(_FrameKind.FIRST)

    @classmethod
    def last(cls) -> FrameIndex:
        return cls(_FrameKind.LAST)

    @classmethod
    def nth(cls, n: int) -> FrameIndex:
        if n < 0:
            raise ValueError("a frame index can not be negative")
        return cls(_FrameKind.NTH, n)

    def as_number(self, frame_count: int) -> int:
        """Resolve this index against an image with ``frame_count`` frames."""
        if self.kind is _FrameKind.FIRST:
            return 0
        if self.kind is _FrameKind.LAST:
            return frame_count - 1
        return self.n


@dataclass
class Frame:
    """A single RGBA frame of an animated image."""

    image: Image.Image
    duration: int = 0


@dataclass
class AnimatedImage:
    """An image made of several frames."""

    frames: list[Frame] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.frames)

    def try_into_static_image(self, index: int) -> Image.Image:
        """Return the frame at ``index`` as a static image."""
        if not 0 <= index < len(self.frames):
            raise NoSuchFrame(index, max(len(self.frames) - 1, 0))
        return self.frames[index].image


SicImage = Union[Image.Image, AnimatedImage]


@dataclass
class ImportConfig:
    """Settings for loading; ``selected_frame`` picks a frame of animated images."""

    selected_frame: FrameIndex | None = None


def stdin_reader() -> BinaryIO:
    """Return a binary reader of the standard input."""
    return sys.stdin.buffer


def file_reader(path: str | os.PathLike[str]) -> BinaryIO:
    """Open ``path`` for binary reading."""
    try:
        return open(path, "rb")
    except OSError as err:
        raise SicIoError(str(err)) from err


def _collect_frames(image: Image.Image) -> SicImage:
    frames = [
        Frame(frame.convert("RGBA"), int(frame.info.get("duration", 0) or 0))
        for frame in ImageSequence.Iterator(image)
    ]
    if len(frames) == 1:
        return frames[0].image
    return AnimatedImage(frames)


def _select_frame(image: SicImage, frame_index: FrameIndex | None) -> SicImage:
    if isinstance(image, AnimatedImage) and frame_index is not None:
        return image.try_into_static_image(frame_index.as_number(len(image)))
    return image


def load_image(reader: BinaryIO, config: ImportConfig | None = None) -> SicImage:
    """Read all bytes from ``reader`` and decode them into an image."""
    config = config or ImportConfig()
    try:
        data = reader.read()
    except OSError as err:
        raise SicIoError(str(err)) from err

    try:
        image = Image.open(io.BytesIO(data))
        fmt = image.format
        if fmt == "GIF" or (fmt == "PNG" and getattr(image, "is_animated", False)):
            return _select_frame(_collect_frames(image), config.selected_frame)
        image.load()
        return image
    except UnidentifiedImageError as err:
        raise SicIoError("The image format could not be determined") from err
    except (OSError, SyntaxError, ValueError) as err:
        raise SicIoError(str(err)) from err