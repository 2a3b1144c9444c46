"""Exceptions raised while reading, converting and writing images and parsing inputs."""

from __future__ import annotations

import os


class SicIoError(Exception):
    """Base class for errors raised while importing, converting or exporting images."""


class FormatError(SicIoError):
    """Base class for errors about the chosen output format or its settings."""


class JpegQualityNotSet(FormatError):
    """A JPEG output was requested, but no quality level was configured."""

    def __init__(self) -> None:
        super().__init__("Unable to determine JPEG quality.")


class JpegQualityNotInRange(FormatError):
    """A JPEG quality level outside 1..=100 was given."""

    def __init__(self, quality: int | None = None) -> None:
        self.quality = quality
        super().__init__("JPEG Quality should range between 1 and 100 (inclusive).")


class GifRepeatInvalidValue(FormatError):
    """A GIF repeat value was not a count, 'infinite' or 'never'."""

    def __init__(self, value: str | None = None) -> None:
        self.value = value
        super().__init__(
            "The GIF repeat value has to be either a positive integer < 65536, "
            "'infinite' or 'never'"
        )


class PnmSampleEncodingNotSet(FormatError):
    """A PNM output was requested, but no sample encoding was configured."""

    def __init__(self) -> None:
        super().__init__("Using PNM requires the sample encoding to be set.")


class NoInputImage(SicIoError):
    """Neither an input path nor piped image data was provided."""

    def __init__(self) -> None:
        super().__init__(
            "An input image should be given by providing a path using the input argument "
            "or by piping an image to the stdin."
        )


class NoSuchFrame(SicIoError):
    """A frame index beyond the frames of an animated image was requested."""

    def __init__(self, index: int, max_index: int) -> None:
        self.index = index
        self.max_index = max_index
        super().__init__(
            f"Unable to extract frame {index} from the (animated) image; please use a "
            f"frame index between 0 and {max_index}."
        )


class NotAnAnimatedImage(SicIoError):
    """An animated image was expected, but a static one was given."""

    def __init__(self) -> None:
        super().__init__("An animated image was expected, but a static image was given")


class UnknownImageIdentifier(SicIoError):
    """No supported output format matches the given identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            "No supported image output format was found. The following identifier was "
            f"provided: {identifier}."
        )


class UnableToDetermineImageFormat(SicIoError):
    """The output format could not be derived from a path's extension."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        super().__init__(
            "Unable to determine the image format from the file extension. The following "
            f"path was given: {self.path}."
        )


class SicParserError(Exception):
    """Base class for errors raised while parsing image operation inputs."""


class ValueParsingError(SicParserError):
    """A value could not be parsed, optionally because of an underlying error."""

    def __init__(self, message: str, inner: BaseException | None = None) -> None:
        self.message = message
        self.inner = inner
        if inner is None:
            text = f"unable to parse value '{message}'"
        else:
            text = f"unable to parse value '{message}', error:\n\t{inner}"
        super().__init__(text)


class ExpectedValue(SicParserError):
    """A value of some type was expected, but the inputs ran out."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(
            f"expected value with of type '{type_name}', but got no more inputs"
        )


class NamedValueError(SicParserError):
    """A named value such as ``rgba(...)`` could not be parsed or extracted."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)