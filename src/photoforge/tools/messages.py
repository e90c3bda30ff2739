"""User-facing error messages.

Every failure a tool run can raise is turned into one readable sentence
here, at the boundary to whatever presents it.
"""

from __future__ import annotations

from pydantic import ValidationError

from photoforge.providers.encoding import InvalidImageFileError, MalformedResourceError
from photoforge.providers.image import (
    ImageBlockedError,
    ImageEmptyResponseError,
    ImageProviderError,
    ImageRefusedError,
    ImageTransportError,
)


def friendly_error_message(error: BaseException, context: str) -> str:
    """Describe ``error`` for display, prefixed by ``context``.

    Args:
        error: Exception raised by a tool run.
        context: Lead-in such as "Could not restore the photo".

    Returns:
        A single human-readable sentence or two.
    """
    if isinstance(error, (ImageBlockedError, ImageRefusedError, ImageEmptyResponseError)):
        return f"{context}. {error.message}"

    if isinstance(error, ImageTransportError):
        return f"{context}. The image service could not be reached ({error.message})."

    if isinstance(error, ImageProviderError):
        return f"{context}. {error.message}"

    if isinstance(error, ValidationError):
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in error.errors()
        )
        return f"{context}. Invalid options: {problems}"

    if isinstance(error, (InvalidImageFileError, MalformedResourceError)):
        return f"{context}. {error}"

    return f"{context}. Unexpected error: {error}"
