"""Gemini image editing provider.

Sends images plus an instruction to a Gemini image model through the
``google-genai`` async client and translates the reply into a
:class:`~photoforge.providers.response.ModelResponse`.

Requests carry every input image first, in order, followed by the
instruction text, and ask for both IMAGE and TEXT modalities so the
model can explain itself when it declines to draw.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, NoReturn

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from photoforge.observability.logging import get_logger
from photoforge.providers.encoding import decode_part
from photoforge.providers.image import (
    GenerationRequest,
    ImageProviderConnectionError,
    ImageProviderError,
    ImageTransportError,
)
from photoforge.providers.response import (
    Candidate,
    ContentPart,
    InlineData,
    ModelResponse,
    PromptFeedback,
)

if TYPE_CHECKING:
    from google.genai import Client

log = get_logger(__name__)

DEFAULT_GEMINI_IMAGE_MODEL = "gemini-2.5-flash-image-preview"

# Checked in order; API_KEY is the legacy name
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def resolve_api_key(api_key: str | None = None) -> str | None:
    """Return the explicit key or the first one set in the environment."""
    if api_key:
        return api_key
    for env_var in API_KEY_ENV_VARS:
        value = os.getenv(env_var)
        if value:
            return value
    return None


def _enum_value(value: Any) -> str | None:
    """Unwrap SDK enums (FinishReason, BlockedReason) to their string value."""
    if value is None:
        return None
    return str(getattr(value, "value", value))


def to_model_response(response: types.GenerateContentResponse) -> ModelResponse:
    """Translate an SDK response into the provider-neutral model."""
    feedback = None
    if response.prompt_feedback is not None:
        feedback = PromptFeedback(
            block_reason=_enum_value(response.prompt_feedback.block_reason),
            block_reason_message=response.prompt_feedback.block_reason_message,
        )

    candidates: list[Candidate] = []
    for candidate in response.candidates or []:
        parts: list[ContentPart] = []
        sdk_parts = candidate.content.parts if candidate.content else None
        for part in sdk_parts or []:
            inline = None
            if part.inline_data is not None and part.inline_data.data is not None:
                inline = InlineData(
                    mime_type=part.inline_data.mime_type or "image/png",
                    data=part.inline_data.data,
                )
            # Thought summaries are not part of the answer
            text = None if part.thought else part.text
            parts.append(ContentPart(text=text, inline_data=inline))
        candidates.append(
            Candidate(parts=parts, finish_reason=_enum_value(candidate.finish_reason))
        )

    return ModelResponse(candidates=candidates, prompt_feedback=feedback)


class GeminiImageProvider:
    """Image editing via the Gemini ``generate_content`` API.

    Args:
        model: Model name (e.g., ``gemini-2.5-flash-image-preview``).
        api_key: Gemini API key. Falls back to GEMINI_API_KEY, GOOGLE_API_KEY,
            then API_KEY.
        timeout: Optional per-request timeout in seconds.
    """

    def __init__(
        self,
        model: str = DEFAULT_GEMINI_IMAGE_MODEL,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._model = model
        self._api_key = resolve_api_key(api_key)
        self._timeout = timeout

        if not self._api_key:
            raise ImageProviderError(
                "gemini",
                "API key required. Set GEMINI_API_KEY environment variable.",
            )

        # Create client once, reuse across calls
        self._client: Client = self._create_client()

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self._model

    def _create_client(self) -> Client:
        http_options = None
        if self._timeout is not None:
            # SDK timeouts are in milliseconds
            http_options = types.HttpOptions(timeout=int(self._timeout * 1000))
        return genai.Client(api_key=self._api_key, http_options=http_options)

    def _build_contents(self, request: GenerationRequest) -> list[types.Content]:
        parts = []
        for encoded in request.parts:
            image = decode_part(encoded)
            parts.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
        parts.append(types.Part.from_text(text=request.instruction))
        return [types.Content(role="user", parts=parts)]

    async def generate(self, request: GenerationRequest) -> ModelResponse:
        """Send one request to Gemini.

        Raises:
            ImageTransportError: On a non-success API status.
            ImageProviderConnectionError: On network errors or timeouts.
        """
        log.debug(
            "image_request_start",
            model=self._model,
            images=len(request.parts),
            instruction_length=len(request.instruction),
        )

        contents = self._build_contents(request)
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_modalities=list(request.response_modalities),
                ),
            )
        except Exception as e:
            self._handle_error(e)

        result = to_model_response(response)
        log.debug(
            "image_request_complete",
            model=self._model,
            candidates=len(result.candidates),
        )
        return result

    def _handle_error(self, error: Exception) -> NoReturn:
        """Convert SDK and transport exceptions to provider exceptions."""
        if isinstance(error, genai_errors.APIError):
            raise ImageTransportError(
                self.name,
                f"API error (HTTP {error.code}): {error.message}",
                status_code=error.code,
            ) from error

        if isinstance(error, httpx.TimeoutException):
            raise ImageProviderConnectionError(self.name, f"Connection timeout: {error}") from error

        if isinstance(error, (httpx.TransportError, ConnectionError)):
            raise ImageProviderConnectionError(self.name, f"Connection error: {error}") from error

        raise ImageTransportError(self.name, f"Image request failed: {error}") from error
