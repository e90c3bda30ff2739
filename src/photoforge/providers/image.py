"""Image editing provider protocol and types.

Defines the value types that flow between the tools and a hosted image
model, the ``ImageEditProvider`` protocol every backend implements, and
the provider error hierarchy.

Implementations:
    - GeminiImageProvider (image_gemini.py) - gemini-2.5-flash-image-preview
    - PlaceholderImageProvider (image_placeholder.py) - offline solid-color PNGs
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from photoforge.providers.response import ModelResponse

IMAGE_MODALITY = "IMAGE"
TEXT_MODALITY = "TEXT"


@dataclass(frozen=True)
class ImageResource:
    """Image bytes plus their media type.

    Attributes:
        data: Raw image bytes.
        mime_type: Media type (e.g., ``image/png``).
    """

    data: bytes
    mime_type: str = "image/png"

    @property
    def size_bytes(self) -> int:
        """Size of image data in bytes."""
        return len(self.data)

    def to_data_url(self) -> str:
        """Render as an inline ``data:`` URL suitable for direct display."""
        body = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{body}"

    @classmethod
    def from_base64(cls, b64_data: str, mime_type: str = "image/png") -> ImageResource:
        """Create from base64-encoded image data."""
        return cls(data=base64.b64decode(b64_data), mime_type=mime_type)


@dataclass(frozen=True)
class EncodedImagePart:
    """Transport-ready inline image: media type and base64 body."""

    mime_type: str
    data: str


@dataclass(frozen=True)
class GenerationRequest:
    """One round trip to the image model.

    Attributes:
        parts: Encoded input images, in the order the instruction refers to them.
        instruction: Natural-language instruction sent after the images.
        response_modalities: Content kinds the model may answer with.
    """

    parts: tuple[EncodedImagePart, ...]
    instruction: str
    response_modalities: tuple[str, ...] = (IMAGE_MODALITY, TEXT_MODALITY)


@runtime_checkable
class ImageEditProvider(Protocol):
    """Protocol for image editing backends.

    Providers only dispatch; interpreting the reply is left to
    :func:`photoforge.providers.decoder.decode_response`.
    """

    @property
    def name(self) -> str:
        """Short provider identifier used in errors and logs."""
        ...

    async def generate(self, request: GenerationRequest) -> ModelResponse:
        """Send one request to the model.

        Args:
            request: Images and instruction to send.

        Returns:
            Provider-neutral view of the model's reply.

        Raises:
            ImageTransportError: If the model could not be reached or
                answered with a non-success status.
        """
        ...


class ImageProviderError(Exception):
    """Base exception for image provider errors."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        self.message = message
        super().__init__(f"[{provider}] {message}")


class ImageBlockedError(ImageProviderError):
    """Raised when the model refused the request on policy grounds."""

    def __init__(self, provider: str, reason: str, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail
        message = f"Request was blocked. Reason: {reason}. {detail or ''}".rstrip()
        super().__init__(provider, message)


class ImageRefusedError(ImageProviderError):
    """Raised when generation stopped for a reason other than normal completion."""

    def __init__(self, provider: str, finish_reason: str) -> None:
        self.finish_reason = finish_reason
        super().__init__(
            provider,
            f"Image generation stopped unexpectedly. Reason: {finish_reason}. "
            "This is often related to safety settings.",
        )


class ImageEmptyResponseError(ImageProviderError):
    """Raised when the model finished normally but returned no image."""

    def __init__(self, provider: str, text: str | None = None) -> None:
        self.text = text
        if text:
            hint = f'The model responded with text: "{text}"'
        else:
            hint = (
                "This can happen because of safety filters or if the request is "
                "too complex. Please try a different image."
            )
        super().__init__(provider, f"The AI model did not return an image. {hint}")


class ImageTransportError(ImageProviderError):
    """Raised when the call itself failed (non-success status, bad reply)."""

    def __init__(self, provider: str, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(provider, message)


class ImageProviderConnectionError(ImageTransportError):
    """Raised when the image provider is unreachable or timed out."""
