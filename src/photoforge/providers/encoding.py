"""Conversions between local images and inline request payloads.

The encoder works on ``data:`` URLs: an :class:`ImageResource` is rendered
as ``data:<type>;base64,<body>`` and then split back into its media type
and body. Callers validate media types with :func:`load_image` before
encoding; :func:`encode_image` does not re-check them.
"""

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from pathlib import Path  # noqa: TC003 - used at runtime

from photoforge.providers.image import EncodedImagePart, ImageResource

_MIME_PATTERN = re.compile(r":(.*?);")

# mimetypes misses this on some platforms
mimetypes.add_type("image/webp", ".webp")


class MalformedResourceError(ValueError):
    """Raised when an image cannot be split into media type and payload."""


class InvalidImageFileError(ValueError):
    """Raised when a user-selected file is missing or is not an image."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Please choose a valid image file ({path}: {reason})")


def data_url_to_parts(data_url: str) -> EncodedImagePart:
    """Split a ``data:`` URL into media type and base64 body.

    Raises:
        MalformedResourceError: If the separator or the media type is missing.
    """
    header, sep, body = data_url.partition(",")
    if not sep:
        raise MalformedResourceError("Invalid data URL")

    match = _MIME_PATTERN.search(header)
    if not match or not match.group(1):
        raise MalformedResourceError("Could not parse MIME type from data URL")

    return EncodedImagePart(mime_type=match.group(1), data=body)


def encode_image(resource: ImageResource) -> EncodedImagePart:
    """Encode an image resource as an inline request part."""
    return data_url_to_parts(resource.to_data_url())


def decode_part(part: EncodedImagePart) -> ImageResource:
    """Decode an inline part back into an image resource.

    Raises:
        MalformedResourceError: If the body is not valid base64.
    """
    try:
        data = base64.b64decode(part.data, validate=True)
    except binascii.Error as e:
        raise MalformedResourceError(f"Invalid base64 payload: {e}") from e
    return ImageResource(data=data, mime_type=part.mime_type)


def guess_image_type(path: Path) -> str | None:
    """Guess an ``image/*`` media type from a file name, or None."""
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type and mime_type.startswith("image/"):
        return mime_type
    return None


def load_image(path: Path) -> ImageResource:
    """Read a user-selected image file.

    Args:
        path: Image file on disk.

    Returns:
        ImageResource with the file bytes and guessed media type.

    Raises:
        InvalidImageFileError: If the file is missing or not an image.
    """
    if not path.is_file():
        raise InvalidImageFileError(path, "file not found")

    mime_type = guess_image_type(path)
    if mime_type is None:
        raise InvalidImageFileError(path, "not an image/* file")

    return ImageResource(data=path.read_bytes(), mime_type=mime_type)
