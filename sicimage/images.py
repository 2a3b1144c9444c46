"""Helpers for opening images and comparing them."""

from __future__ import annotations

import os

from PIL import Image

from .errors import SicIoError
from .importing import AnimatedImage, SicImage


def open_image(path: str | os.PathLike[str]) -> Image.Image:
    """Open and fully decode the image at ``path``."""
    try:
        with Image.open(path) as image:
            image.load()
            return image.copy()
    except OSError as err:
        raise SicIoError(str(err)) from err


def _static_eq(left: Image.Image, right: Image.Image) -> bool:
    return (
        left.size == right.size
        and left.mode == right.mode
        and left.tobytes() == right.tobytes()
    )


def image_eq(left: SicImage, right: SicImage) -> bool:
    """Whether two images have the same dimensions and the same pixels."""
    if isinstance(left, AnimatedImage) or isinstance(right, AnimatedImage):
        if not (isinstance(left, AnimatedImage) and isinstance(right, AnimatedImage)):
            return False
        return len(left) == len(right) and all(
            _static_eq(a.image, b.image) for a, b in zip(left.frames, right.frames)
        )
    return _static_eq(left, right)