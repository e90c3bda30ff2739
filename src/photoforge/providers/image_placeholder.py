"""Placeholder image provider for testing.

Answers every request with a minimal solid-color PNG and no external
dependencies. Zero cost, instant generation - ideal for development and CI.
"""

from __future__ import annotations

import hashlib
import struct
import zlib

from photoforge.providers.image import GenerationRequest
from photoforge.providers.response import (
    STOP_FINISH_REASON,
    Candidate,
    ContentPart,
    InlineData,
    ModelResponse,
)

# Rotate through muted colors for visual distinction between placeholders.
_PALETTE: list[tuple[int, int, int]] = [
    (88, 101, 130),  # slate blue
    (130, 88, 101),  # dusty rose
    (101, 130, 88),  # sage green
    (130, 118, 88),  # warm sand
    (88, 130, 125),  # teal
    (118, 88, 130),  # muted purple
]


def _make_png(width: int, height: int, r: int, g: int, b: int) -> bytes:
    """Generate a minimal solid-color RGB PNG in pure Python."""

    def _chunk(chunk_type: bytes, data: bytes) -> bytes:
        payload = chunk_type + data
        crc = struct.pack(">I", zlib.crc32(payload) & 0xFFFFFFFF)
        return struct.pack(">I", len(data)) + payload + crc

    sig = b"\x89PNG\r\n\x1a\n"

    # IHDR: width, height, 8-bit depth, RGB (color type 2)
    ihdr = _chunk(b"IHDR", struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0))

    # filter byte 0 + RGB triplets per row
    row = bytes([0]) + bytes([r, g, b]) * width
    idat = _chunk(b"IDAT", zlib.compress(row * height))

    return sig + ihdr + idat + _chunk(b"IEND", b"")


def _request_digest(request: GenerationRequest) -> str:
    digest = hashlib.md5(request.instruction.encode())
    for part in request.parts:
        digest.update(part.mime_type.encode())
        digest.update(part.data.encode())
    return digest.hexdigest()


class PlaceholderImageProvider:
    """Zero-cost provider that answers with solid-color PNGs.

    The color is chosen from a rotating palette by hashing the request,
    so identical requests always produce identical images.

    Args:
        width: Width of the returned PNG.
        height: Height of the returned PNG.
    """

    def __init__(self, width: int = 256, height: int = 256) -> None:
        self._width = width
        self._height = height

    @property
    def name(self) -> str:
        return "placeholder"

    async def generate(self, request: GenerationRequest) -> ModelResponse:
        idx = int(_request_digest(request), 16) % len(_PALETTE)
        r, g, b = _PALETTE[idx]
        png = _make_png(self._width, self._height, r, g, b)

        return ModelResponse(
            candidates=[
                Candidate(
                    parts=[ContentPart(inline_data=InlineData(mime_type="image/png", data=png))],
                    finish_reason=STOP_FINISH_REASON,
                )
            ]
        )
