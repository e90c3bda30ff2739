"""Tests for model reply decoding."""

from __future__ import annotations

import pytest

from photoforge.providers.decoder import (
    GenerationRefused,
    ImageGenerated,
    NoImageReturned,
    PromptBlocked,
    decode_response,
    unwrap_outcome,
)
from photoforge.providers.image import (
    ImageBlockedError,
    ImageEmptyResponseError,
    ImageRefusedError,
    ImageResource,
)
from photoforge.providers.response import (
    Candidate,
    ContentPart,
    InlineData,
    ModelResponse,
    PromptFeedback,
)
from tests.fixtures.fake_provider import blocked_response, image_response, text_response


def _image_part(data: bytes, mime_type: str = "image/png") -> ContentPart:
    return ContentPart(inline_data=InlineData(mime_type=mime_type, data=data))


class TestDecodeResponse:
    def test_image_is_success(self) -> None:
        outcome = decode_response(image_response(b"OUT", "image/webp"))
        assert outcome == ImageGenerated(ImageResource(data=b"OUT", mime_type="image/webp"))

    def test_block_reason_beats_image(self) -> None:
        response = ModelResponse(
            prompt_feedback=PromptFeedback(block_reason="PROHIBITED_CONTENT"),
            candidates=[Candidate(parts=[_image_part(b"OUT")])],
        )
        assert decode_response(response) == PromptBlocked("PROHIBITED_CONTENT", None)

    def test_block_message_is_kept(self) -> None:
        outcome = decode_response(blocked_response("SAFETY", "Unsafe prompt"))
        assert outcome == PromptBlocked("SAFETY", "Unsafe prompt")

    def test_empty_block_reason_is_ignored(self) -> None:
        response = ModelResponse(
            prompt_feedback=PromptFeedback(block_reason=None),
            candidates=[Candidate(parts=[_image_part(b"OUT")])],
        )
        assert isinstance(decode_response(response), ImageGenerated)

    def test_first_image_across_candidates_and_parts(self) -> None:
        response = ModelResponse(
            candidates=[
                Candidate(parts=[ContentPart(text="thinking about it")]),
                Candidate(parts=[ContentPart(text="here you go"), _image_part(b"SECOND")]),
                Candidate(parts=[_image_part(b"THIRD")]),
            ]
        )
        outcome = decode_response(response)
        assert outcome == ImageGenerated(ImageResource(data=b"SECOND"))

    def test_first_part_wins_within_candidate(self) -> None:
        response = ModelResponse(
            candidates=[Candidate(parts=[_image_part(b"A"), _image_part(b"B")])]
        )
        outcome = decode_response(response)
        assert isinstance(outcome, ImageGenerated)
        assert outcome.image.data == b"A"

    def test_finish_reason_beats_text(self) -> None:
        outcome = decode_response(text_response("I can't help with that.", "SAFETY"))
        assert outcome == GenerationRefused("SAFETY")

    def test_only_first_candidate_finish_reason_counts(self) -> None:
        response = ModelResponse(
            candidates=[
                Candidate(parts=[ContentPart(text="no")], finish_reason="STOP"),
                Candidate(parts=[], finish_reason="SAFETY"),
            ]
        )
        assert decode_response(response) == NoImageReturned("no")

    def test_stop_with_text_is_empty_with_text(self) -> None:
        outcome = decode_response(text_response("  Please upload a clearer photo.  "))
        assert outcome == NoImageReturned("Please upload a clearer photo.")

    def test_missing_finish_reason_with_text(self) -> None:
        outcome = decode_response(text_response("hmm", finish_reason=None))
        assert outcome == NoImageReturned("hmm")

    def test_blank_text_is_generic_empty(self) -> None:
        assert decode_response(text_response("   ")) == NoImageReturned(None)

    def test_no_candidates_is_generic_empty(self) -> None:
        assert decode_response(ModelResponse()) == NoImageReturned(None)

    def test_text_concatenates_first_candidate_parts(self) -> None:
        response = ModelResponse(
            candidates=[
                Candidate(parts=[ContentPart(text="Hello, "), ContentPart(text="world")]),
                Candidate(parts=[ContentPart(text="ignored")]),
            ]
        )
        assert response.text == "Hello, world"


class TestUnwrapOutcome:
    def test_success_returns_image(self) -> None:
        image = ImageResource(data=b"OUT")
        assert unwrap_outcome(ImageGenerated(image), provider="fake") is image

    def test_blocked_raises_with_reason_and_message(self) -> None:
        with pytest.raises(ImageBlockedError) as exc_info:
            unwrap_outcome(PromptBlocked("SAFETY", "Unsafe prompt"), provider="fake")

        err = exc_info.value
        assert err.reason == "SAFETY"
        assert err.message == "Request was blocked. Reason: SAFETY. Unsafe prompt"
        assert str(err).startswith("[fake] ")

    def test_blocked_without_message(self) -> None:
        with pytest.raises(ImageBlockedError) as exc_info:
            unwrap_outcome(PromptBlocked("OTHER"), provider="fake")
        assert exc_info.value.message == "Request was blocked. Reason: OTHER."

    def test_refused_raises_with_finish_reason(self) -> None:
        with pytest.raises(ImageRefusedError, match="Reason: MAX_TOKENS") as exc_info:
            unwrap_outcome(GenerationRefused("MAX_TOKENS"), provider="fake")
        assert exc_info.value.finish_reason == "MAX_TOKENS"

    def test_empty_with_text_quotes_model(self) -> None:
        with pytest.raises(ImageEmptyResponseError) as exc_info:
            unwrap_outcome(NoImageReturned("Try a brighter photo"), provider="fake")
        assert 'The model responded with text: "Try a brighter photo"' in exc_info.value.message

    def test_empty_without_text_gives_generic_hint(self) -> None:
        with pytest.raises(ImageEmptyResponseError, match="safety filters") as exc_info:
            unwrap_outcome(NoImageReturned(None), provider="fake")
        assert exc_info.value.text is None
