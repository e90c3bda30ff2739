"""Tests for PlaceholderImageProvider."""

from __future__ import annotations

import pytest

from photoforge.providers.decoder import ImageGenerated, decode_response
from photoforge.providers.image import GenerationRequest, ImageEditProvider
from photoforge.providers.image_placeholder import PlaceholderImageProvider, _make_png

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestMakePng:
    """Test the pure-Python PNG generator."""

    def test_produces_valid_png_signature(self) -> None:
        assert _make_png(2, 2, 128, 128, 128)[:8] == PNG_SIGNATURE

    def test_different_sizes_produce_different_lengths(self) -> None:
        assert len(_make_png(100, 100, 0, 0, 0)) > len(_make_png(1, 1, 0, 0, 0))

    def test_different_colors_produce_different_data(self) -> None:
        assert _make_png(4, 4, 255, 0, 0) != _make_png(4, 4, 0, 0, 255)


class TestPlaceholderImageProvider:
    def test_conforms_to_protocol(self) -> None:
        provider = PlaceholderImageProvider()
        assert isinstance(provider, ImageEditProvider)
        assert provider.name == "placeholder"

    @pytest.mark.asyncio()
    async def test_reply_decodes_to_png(self) -> None:
        provider = PlaceholderImageProvider()
        response = await provider.generate(GenerationRequest(parts=(), instruction="restore"))

        outcome = decode_response(response)

        assert isinstance(outcome, ImageGenerated)
        assert outcome.image.mime_type == "image/png"
        assert outcome.image.data[:8] == PNG_SIGNATURE

    @pytest.mark.asyncio()
    async def test_identical_requests_give_identical_images(self) -> None:
        provider = PlaceholderImageProvider()
        request = GenerationRequest(parts=(), instruction="same")

        first = await provider.generate(request)
        second = await provider.generate(request)

        assert first == second

    @pytest.mark.asyncio()
    async def test_custom_size_changes_payload(self) -> None:
        request = GenerationRequest(parts=(), instruction="size")

        small = await PlaceholderImageProvider(width=8, height=8).generate(request)
        large = await PlaceholderImageProvider(width=64, height=64).generate(request)

        small_data = small.candidates[0].parts[0].inline_data
        large_data = large.candidates[0].parts[0].inline_data
        assert small_data is not None and large_data is not None
        assert len(large_data.data) > len(small_data.data)
