import pytest
from PIL import Image

from sicimage.errors import SicIoError
from sicimage.images import image_eq, open_image
from sicimage.importing import AnimatedImage, Frame


def test_open_image_round_trip(tmp_path):
    original = Image.new("RGB", (4, 3), (12, 34, 56))
    original.putpixel((1, 1), (200, 100, 50))
    path = tmp_path / "img.png"
    original.save(path)
    assert image_eq(open_image(path), original)


def test_open_image_missing(tmp_path):
    with pytest.raises(SicIoError):
        open_image(tmp_path / "nope.png")


def test_image_eq_detects_pixel_difference():
    left = Image.new("RGB", (2, 2), (0, 0, 0))
    right = left.copy()
    right.putpixel((1, 0), (255, 255, 255))
    assert not image_eq(left, right)
    assert image_eq(left, left.copy())


def test_image_eq_detects_dimension_difference():
    assert not image_eq(Image.new("L", (2, 3)), Image.new("L", (3, 2)))


def test_image_eq_animated():
    frames = [Frame(Image.new("RGBA", (1, 1), (i, 0, 0, 255))) for i in range(3)]
    a = AnimatedImage(list(frames))
    b = AnimatedImage(list(frames))
    assert image_eq(a, b)
    assert not image_eq(a, AnimatedImage(frames[:2]))
    assert not image_eq(a, frames[0].image)