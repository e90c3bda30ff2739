"""Request assembly for the editing tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from photoforge.providers.encoding import encode_image
from photoforge.providers.image import GenerationRequest
from photoforge.tools.prompts import build_instruction

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photoforge.providers.image import ImageResource
    from photoforge.tools.options import ToolOptions


def build_request(options: ToolOptions, images: Sequence[ImageResource]) -> GenerationRequest:
    """Bundle the encoded images and the tool instruction into one request.

    Args:
        options: Tool options; their type selects the instruction template.
        images: Input images in the order the instruction refers to them.

    Raises:
        ValueError: If the number of images does not match the tool.
    """
    if len(images) != options.image_count:
        raise ValueError(
            f"{options.kind} expects {options.image_count} image(s), got {len(images)}"
        )

    parts = tuple(encode_image(image) for image in images)
    return GenerationRequest(parts=parts, instruction=build_instruction(options))


def build_requests(
    options: ToolOptions, images: Sequence[ImageResource]
) -> list[GenerationRequest]:
    """Build one request per output image the options ask for.

    Requests in the batch are identical; nothing is deduplicated, each is
    sent as its own round trip.

    Raises:
        ValueError: If the image count is wrong or fewer than one output is requested.
    """
    count = options.requested_images
    if count < 1:
        raise ValueError(f"number_of_images must be at least 1, got {count}")

    request = build_request(options, images)
    return [request] * count
