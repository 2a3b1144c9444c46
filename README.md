# sicimage

A library for loading images (static and animated), choosing an output
format from a file extension or identifier, adapting the color type where
the target format needs it, and writing the result out. It also parses the
textual arguments of image operations and named values such as
`rgba(255, 0, 0, 255)`.

## Installation

```
pip install sicimage
```

To run the test suite:

```
pip install "sicimage[test]"
pytest
```

## Loading an image

```python
from sicimage.importing import FrameIndex, ImportConfig, file_reader, load_image

with file_reader("animation.gif") as reader:
    image = load_image(reader, ImportConfig(selected_frame=FrameIndex.last()))
```

`load_image` reads all bytes from the reader and decodes them with Pillow.
GIF files and animated PNG files are split into RGBA frames: a single frame
is returned as a static `PIL.Image.Image`, several frames as an
`AnimatedImage`. When `ImportConfig.selected_frame` is set
(`FrameIndex.first()`, `FrameIndex.last()` or `FrameIndex.nth(n)`), the
chosen frame of an animated image is returned as a static image; asking for
a frame that does not exist raises `NoSuchFrame`. Data that cannot be
decoded raises `SicIoError`. `stdin_reader()` returns standard input as a
binary reader.

`sicimage.images` has two small helpers: `open_image(path)` opens and fully
decodes an image file, and `image_eq(left, right)` tells whether two images
(or two animated images, frame by frame) have the same size, mode and pixels.

## Choosing an output format

```python
from sicimage.format import DetermineEncodingFormat, JpegQuality, SampleEncoding

formats = DetermineEncodingFormat(
    pnm_sample_encoding=SampleEncoding.ASCII,
    jpeg_quality=JpegQuality(90),
)
formats.by_extension("out.jpg")      # OutputFormat(FormatKind.JPEG, quality=90)
formats.by_identifier("PPM")         # OutputFormat(FormatKind.PPM, encoding=SampleEncoding.ASCII)
```

Recognised identifiers are `avif`, `bmp`, `farbfeld`, `gif`, `ico`,
`jpeg`/`jpg`, `pam`, `pbm`, `pgm`, `png`, `ppm` and `tga`, matched without
regard to case. The defaults are binary PNM samples and a JPEG quality of 80.
An unknown identifier raises `UnknownImageIdentifier`; a path without an
extension raises `UnableToDetermineImageFormat`. A JPEG quality outside
1–100 raises `JpegQualityNotInRange`; asking for JPEG or PBM/PGM/PPM when
the matching setting is `None` raises `JpegQualityNotSet` or
`PnmSampleEncodingNotSet`.

## Writing an image

```python
from sicimage.conversion import ExportSettings, RepeatAnimation, export

with open("out.gif", "wb") as out:
    export(image, out, formats.by_identifier("gif"),
           ExportSettings(gif_repeat=RepeatAnimation.from_str("3")))
```

`ConversionWriter(image).write_all(writer, output_format, settings)` does
the same as `export`. With `AutomaticColorTypeAdjustment.ENABLED` (the
default), static images are converted to the mode the target needs: RGBA
for Farbfeld (written with 16-bit samples), grayscale for PBM and PGM, RGB
for PPM. With `DISABLED`, an image in an unsuitable mode for Farbfeld, PBM,
PGM or PPM raises `SicIoError`. Farbfeld and the PNM family (including PAM)
are encoded by the package itself; the other formats are written through
Pillow, so AVIF output works only where the installed Pillow can write it.

Animated images keep all frames when written as GIF, with the repeat
setting applied; for any other format only the first frame is written and a
warning is printed to standard error. `RepeatAnimation.from_str` accepts
`infinite`, `never` or a count from 0 to 65535, and raises
`GifRepeatInvalidValue` otherwise.

## Parsing operation arguments

```python
from sicimage.value_parser import parse_crop, parse_gradient
from sicimage.named_value import parse_named_value

parse_crop(["0", "0", "10", "20"])                    # (0, 0, 10, 20)
parse_gradient(["rgba(0, 0, 0, 255)", "rgba(255, 255, 255, 255)"])
parse_named_value("coord(3, 4)").extract_coord()      # (3, 4)
```

`sicimage.value_parser` has `parse_f32`, `parse_i32`, `parse_u32`,
`parse_bool`, `parse_string`, `parse_crop`, `parse_resize`,
`parse_unsharpen`, `parse_filter3x3`, `parse_position`, `parse_path` and
`parse_gradient`. Each takes an iterable of strings and requires exactly the
number of values it needs. Named values are `rgba(r, g, b, a)` (bytes),
`size(v)` (float), `coord(x, y)` (32-bit integers) and `font("path")`
(a quoted path). Every parser raises a `SicParserError` subclass
(`ValueParsingError` or `NamedValueError`) when a value is missing,
malformed or out of range, or when too many values are given.

## What this package does not do

There is no command-line program, no parser for whole operation scripts, and
no image operations themselves (blur, resize, crop and so on): the package
only parses the arguments such operations take, and handles loading,
format selection and writing.