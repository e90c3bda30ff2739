"""Interpretation of model replies.

:func:`decode_response` classifies a reply into exactly one outcome. The
checks run in a fixed priority order, since the message shown to the user
depends on which one fires first:

1. prompt blocked by moderation
2. first inline image across candidates and parts
3. explicit non-STOP finish reason on the first candidate
4. explanatory text without an image
5. nothing at all
"""

from __future__ import annotations

from dataclasses import dataclass

from photoforge.providers.image import (
    ImageBlockedError,
    ImageEmptyResponseError,
    ImageRefusedError,
    ImageResource,
)
from photoforge.providers.response import STOP_FINISH_REASON, ModelResponse


@dataclass(frozen=True)
class ImageGenerated:
    image: ImageResource


@dataclass(frozen=True)
class PromptBlocked:
    reason: str
    message: str | None = None


@dataclass(frozen=True)
class GenerationRefused:
    finish_reason: str


@dataclass(frozen=True)
class NoImageReturned:
    text: str | None = None


GenerationOutcome = ImageGenerated | PromptBlocked | GenerationRefused | NoImageReturned


def decode_response(response: ModelResponse) -> GenerationOutcome:
    """Classify a model reply.

    Args:
        response: Reply for one generation request.

    Returns:
        Exactly one outcome variant.
    """
    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        return PromptBlocked(feedback.block_reason, feedback.block_reason_message)

    for candidate in response.candidates:
        for part in candidate.parts:
            if part.inline_data is not None:
                inline = part.inline_data
                return ImageGenerated(ImageResource(data=inline.data, mime_type=inline.mime_type))

    if response.candidates:
        finish_reason = response.candidates[0].finish_reason
        if finish_reason and finish_reason != STOP_FINISH_REASON:
            return GenerationRefused(finish_reason)

    text = (response.text or "").strip()
    return NoImageReturned(text or None)


def unwrap_outcome(outcome: GenerationOutcome, *, provider: str) -> ImageResource:
    """Return the generated image or raise the matching provider error.

    Raises:
        ImageBlockedError: The prompt was blocked.
        ImageRefusedError: Generation stopped early.
        ImageEmptyResponseError: No image came back.
    """
    if isinstance(outcome, ImageGenerated):
        return outcome.image
    if isinstance(outcome, PromptBlocked):
        raise ImageBlockedError(provider, outcome.reason, outcome.message)
    if isinstance(outcome, GenerationRefused):
        raise ImageRefusedError(provider, outcome.finish_reason)
    raise ImageEmptyResponseError(provider, outcome.text)
