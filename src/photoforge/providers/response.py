"""Provider-neutral model reply.

Providers translate their SDK responses into these models so the decoder
never depends on a particular client library.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

STOP_FINISH_REASON = "STOP"


class InlineData(BaseModel):
    """Image bytes embedded directly in a reply part."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(default="image/png", min_length=1)
    data: bytes


class ContentPart(BaseModel):
    """One part of a candidate: text, inline image data, or neither."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    inline_data: InlineData | None = None


class Candidate(BaseModel):
    """One alternative output for a request."""

    model_config = ConfigDict(frozen=True)

    parts: list[ContentPart] = Field(default_factory=list)
    finish_reason: str | None = Field(
        default=None,
        description="Why the model stopped (STOP, SAFETY, MAX_TOKENS, ...)",
    )


class PromptFeedback(BaseModel):
    """Top-level moderation signal, set when the prompt itself was refused."""

    model_config = ConfigDict(frozen=True)

    block_reason: str | None = None
    block_reason_message: str | None = None


class ModelResponse(BaseModel):
    """Reply to a single :class:`~photoforge.providers.image.GenerationRequest`."""

    model_config = ConfigDict(frozen=True)

    candidates: list[Candidate] = Field(default_factory=list)
    prompt_feedback: PromptFeedback | None = None

    @property
    def text(self) -> str | None:
        """Concatenated text parts of the first candidate, or None."""
        if not self.candidates:
            return None
        texts = [part.text for part in self.candidates[0].parts if part.text]
        return "".join(texts) if texts else None
