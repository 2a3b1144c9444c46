import io

import pytest
from PIL import Image

from sicimage.errors import NoSuchFrame, SicIoError
from sicimage.importing import (
    AnimatedImage,
    Frame,
    FrameIndex,
    ImportConfig,
    file_reader,
    load_image,
)

XY = 10

FRAME_COLORS = [
    (254, 0, 0, 255),
    (254, 165, 0, 255),
    (255, 255, 0, 255),
    (0, 128, 1, 255),
    (0, 0, 254, 255),
    (75, 0, 129, 255),
    (238, 130, 239, 255),
    (0, 0, 0, 255),
]


def _write_gif(path, loop):
    frames = [Image.new("RGB", (20, 20), color[:3]) for color in FRAME_COLORS]
    kwargs = {"save_all": True, "append_images": frames[1:], "duration": 100}
    if loop:
        kwargs["loop"] = 0
    frames[0].save(path, **kwargs)
    return path


@pytest.fixture(params=[True, False], ids=["loop", "noloop"])
def gif_path(request, tmp_path):
    return _write_gif(tmp_path / "anim.gif", request.param)


@pytest.fixture
def apng_path(tmp_path):
    colors = [(255, 255, 255), (237, 28, 36), (0, 0, 0)]
    frames = [Image.new("RGB", (4, 4), c) for c in colors]
    path = tmp_path / "apng_sample.png"
    frames[0].save(path, save_all=True, append_images=frames[1:], duration=100)
    return path


def _load(path, frame):
    with file_reader(path) as reader:
        return load_image(reader, ImportConfig(selected_frame=frame))


def test_first_frame_is_red(gif_path):
    image = _load(gif_path, FrameIndex.first())
    assert image.getpixel((XY, XY)) == (254, 0, 0, 255)


def test_first_is_zero(gif_path):
    first = _load(gif_path, FrameIndex.first())
    zero = _load(gif_path, FrameIndex.nth(0))
    assert first.getpixel((XY, XY)) == zero.getpixel((XY, XY))


@pytest.mark.parametrize("index", range(8))
def test_nth_frame_colors(gif_path, index):
    image = _load(gif_path, FrameIndex.nth(index))
    assert image.getpixel((XY, XY)) == FRAME_COLORS[index]


def test_nth_beyond_length(gif_path):
    with pytest.raises(NoSuchFrame):
        _load(gif_path, FrameIndex.nth(8))


def test_last_is_seven(gif_path):
    last = _load(gif_path, FrameIndex.last())
    seven = _load(gif_path, FrameIndex.nth(7))
    assert last.getpixel((XY, XY)) == seven.getpixel((XY, XY))


def test_no_selection_keeps_animation(gif_path):
    image = _load(gif_path, None)
    assert isinstance(image, AnimatedImage)
    assert len(image) == 8


@pytest.mark.parametrize("fmt", ["BMP", "PNG", "JPEG"])
def test_load_not_gif_formatted(tmp_path, fmt):
    path = tmp_path / f"img.{fmt.lower()}"
    Image.new("RGB", (3, 2), (10, 20, 30)).save(path, format=fmt)
    image = _load(path, None)
    assert image.size == (3, 2)


@pytest.mark.parametrize(
    "frame, expected",
    [
        (FrameIndex.first(), (255, 255, 255, 255)),
        (FrameIndex.nth(0), (255, 255, 255, 255)),
        (FrameIndex.nth(1), (237, 28, 36, 255)),
        (FrameIndex.nth(2), (0, 0, 0, 255)),
        (FrameIndex.last(), (0, 0, 0, 255)),
    ],
)
def test_apng(apng_path, frame, expected):
    image = _load(apng_path, frame)
    assert image.getpixel((0, 0)) == expected


def test_apng_out_of_range(apng_path):
    with pytest.raises(NoSuchFrame):
        _load(apng_path, FrameIndex.nth(3))


def test_single_frame_gif_is_static_rgba(tmp_path):
    path = tmp_path / "one.gif"
    Image.new("RGB", (5, 5), (0, 0, 0)).save(path)
    image = _load(path, FrameIndex.first())
    assert image.mode == "RGBA"
    assert image.getpixel((1, 1)) == (0, 0, 0, 255)


def test_unknown_format_raises():
    with pytest.raises(SicIoError):
        load_image(io.BytesIO(b"definitely not an image"), ImportConfig())


def test_file_reader_missing_file(tmp_path):
    with pytest.raises(SicIoError):
        file_reader(tmp_path / "missing.png")


@pytest.mark.parametrize(
    "index, count, expected",
    [(FrameIndex.first(), 8, 0), (FrameIndex.last(), 8, 7), (FrameIndex.nth(3), 8, 3)],
)
def test_frame_index_as_number(index, count, expected):
    assert index.as_number(count) == expected


def test_try_into_static_image_bounds():
    frames = [Frame(Image.new("RGBA", (1, 1), (i, 0, 0, 255))) for i in range(2)]
    animated = AnimatedImage(frames)
    assert animated.try_into_static_image(1).getpixel((0, 0)) == (1, 0, 0, 255)
    with pytest.raises(NoSuchFrame) as info:
        animated.try_into_static_image(2)
    assert info.value.max_index == 1