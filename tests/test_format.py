import pytest

from sicimage.errors import (
    JpegQualityNotInRange,
    JpegQualityNotSet,
    PnmSampleEncodingNotSet,
    SicIoError,
    UnableToDetermineImageFormat,
    UnknownImageIdentifier,
)
from sicimage.format import (
    DetermineEncodingFormat,
    FormatKind,
    JpegQuality,
    OutputFormat,
    SampleEncoding,
)

CASES = [
    ("avif", OutputFormat(FormatKind.AVIF)),
    ("bmp", OutputFormat(FormatKind.BMP)),
    ("farbfeld", OutputFormat(FormatKind.FARBFELD)),
    ("gif", OutputFormat(FormatKind.GIF)),
    ("ico", OutputFormat(FormatKind.ICO)),
    ("jpg", OutputFormat(FormatKind.JPEG, quality=80)),
    ("jpeg", OutputFormat(FormatKind.JPEG, quality=80)),
    ("png", OutputFormat(FormatKind.PNG)),
    ("pbm", OutputFormat(FormatKind.PBM, encoding=SampleEncoding.BINARY)),
    ("pgm", OutputFormat(FormatKind.PGM, encoding=SampleEncoding.BINARY)),
    ("ppm", OutputFormat(FormatKind.PPM, encoding=SampleEncoding.BINARY)),
    ("pam", OutputFormat(FormatKind.PAM)),
    ("tga", OutputFormat(FormatKind.TGA)),
]


@pytest.fixture
def determiner():
    return DetermineEncodingFormat(
        pnm_sample_encoding=SampleEncoding.BINARY, jpeg_quality=JpegQuality(80)
    )


@pytest.mark.parametrize("ext, expected", CASES)
def test_extension_with_defaults(determiner, ext, expected):
    assert determiner.by_extension(f"w_ext.{ext}") == expected


@pytest.mark.parametrize("ident, expected", CASES)
def test_identifier_with_defaults(determiner, ident, expected):
    assert determiner.by_identifier(ident) == expected


@pytest.mark.parametrize("ident, expected", CASES)
def test_uppercase_formats(determiner, ident, expected):
    assert determiner.by_identifier(ident.upper()) == expected


def test_default_determiner_matches_explicit(determiner):
    assert DetermineEncodingFormat().by_identifier("jpg") == determiner.by_identifier("jpg")


def test_extension_unknown_extension(determiner):
    with pytest.raises(UnknownImageIdentifier):
        determiner.by_extension("w_ext.h")


@pytest.mark.parametrize("path", ["png", ".png"])
def test_extension_missing(determiner, path):
    with pytest.raises(UnableToDetermineImageFormat):
        determiner.by_extension(path)


def test_identifier_unknown_identifier(determiner):
    with pytest.raises(UnknownImageIdentifier) as info:
        determiner.by_identifier("")
    assert isinstance(info.value, SicIoError)


@pytest.mark.parametrize(
    "ident, kind",
    [("pbm", FormatKind.PBM), ("pgm", FormatKind.PGM), ("ppm", FormatKind.PPM)],
)
def test_identifier_custom_pnm_sample_encoding_ascii(ident, kind):
    det = DetermineEncodingFormat(pnm_sample_encoding=SampleEncoding.ASCII, jpeg_quality=None)
    assert det.by_identifier(ident) == OutputFormat(kind, encoding=SampleEncoding.ASCII)


@pytest.mark.parametrize("quality", [1, 100])
def test_identifier_custom_jpeg_quality_in_range(quality):
    det = DetermineEncodingFormat(pnm_sample_encoding=None, jpeg_quality=JpegQuality(quality))
    assert det.by_identifier("jpg") == OutputFormat(FormatKind.JPEG, quality=quality)


@pytest.mark.parametrize("quality", [1, 100])
def test_jpeg_quality_in_range(quality):
    assert JpegQuality(quality).value == quality
    assert int(JpegQuality(quality)) == quality


@pytest.mark.parametrize("quality", [0, 101])
def test_jpeg_quality_out_of_range(quality):
    with pytest.raises(JpegQualityNotInRange):
        JpegQuality(quality)


def test_jpeg_quality_default():
    assert JpegQuality() == JpegQuality(80)


@pytest.mark.parametrize("ident", ["pbm", "pgm", "ppm"])
def test_identifier_requires_pnm_sample_encoding(ident):
    det = DetermineEncodingFormat(pnm_sample_encoding=None, jpeg_quality=None)
    with pytest.raises(PnmSampleEncodingNotSet):
        det.by_identifier(ident)


def test_identifier_requires_jpeg_quality():
    det = DetermineEncodingFormat(pnm_sample_encoding=None, jpeg_quality=None)
    with pytest.raises(JpegQualityNotSet):
        det.by_identifier("jpg")


def test_require_methods_return_configured_values():
    det = DetermineEncodingFormat(
        pnm_sample_encoding=SampleEncoding.ASCII, jpeg_quality=JpegQuality(42)
    )
    assert det.require_pnm_encoding() is SampleEncoding.ASCII
    assert det.require_jpeg_quality() == JpegQuality(42)


def test_pam_does_not_need_encoding():
    det = DetermineEncodingFormat(pnm_sample_encoding=None, jpeg_quality=None)
    result = det.by_identifier("pam")
    assert result == OutputFormat(FormatKind.PAM)
    assert result.kind.is_pnm