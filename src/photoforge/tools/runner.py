"""Running the editing tools against an image provider.

A run builds the tool's requests, dispatches them concurrently, decodes
each reply and returns the images in request order. Nothing is retried;
any failure rejects the whole run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from photoforge.observability.logging import get_logger
from photoforge.providers.decoder import decode_response, unwrap_outcome
from photoforge.tools.batching import gather_fail_fast
from photoforge.tools.builder import build_requests
from photoforge.tools.options import (
    IdPhotoOptions,
    ObjectRemovalOptions,
    OfficeHeadshotOptions,
    ProductShowcaseOptions,
    RestorationOptions,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photoforge.providers.image import GenerationRequest, ImageEditProvider, ImageResource
    from photoforge.tools.options import ToolOptions

log = get_logger(__name__)


async def generate_one(provider: ImageEditProvider, request: GenerationRequest) -> ImageResource:
    """Dispatch a single request and return the image it produced.

    Raises:
        ImageProviderError: For transport failures and for blocked, refused
            or empty replies.
    """
    response = await provider.generate(request)
    outcome = decode_response(response)
    log.debug("image_outcome", provider=provider.name, outcome=type(outcome).__name__)
    return unwrap_outcome(outcome, provider=provider.name)


async def run_tool(
    provider: ImageEditProvider,
    options: ToolOptions,
    images: Sequence[ImageResource],
    *,
    max_concurrency: int | None = None,
) -> list[ImageResource]:
    """Run a tool and return every generated image.

    Args:
        provider: Backend to dispatch to.
        options: Tool options; their type selects the tool.
        images: Input images for the tool.
        max_concurrency: Optional cap on in-flight requests.

    Returns:
        One image per requested output, in request order.
    """
    requests = build_requests(options, images)

    log.info(
        "tool_run_start",
        tool=str(options.kind),
        provider=provider.name,
        requests=len(requests),
    )

    async def _call(request: GenerationRequest) -> ImageResource:
        return await generate_one(provider, request)

    results = await gather_fail_fast(requests, _call, max_concurrency=max_concurrency)

    log.info("tool_run_complete", tool=str(options.kind), images=len(results))
    return results


async def restore_photo(
    provider: ImageEditProvider, image: ImageResource, options: RestorationOptions
) -> ImageResource:
    results = await run_tool(provider, options, [image])
    return results[0]


async def generate_id_photos(
    provider: ImageEditProvider, image: ImageResource, options: IdPhotoOptions
) -> list[ImageResource]:
    return await run_tool(provider, options, [image])


async def generate_product_showcase(
    provider: ImageEditProvider,
    subject: ImageResource,
    product: ImageResource,
    options: ProductShowcaseOptions,
) -> list[ImageResource]:
    """Compose ``subject`` and ``product`` into new scenes."""
    return await run_tool(provider, options, [subject, product])


async def remove_object(
    provider: ImageEditProvider, image: ImageResource, options: ObjectRemovalOptions
) -> ImageResource:
    results = await run_tool(provider, options, [image])
    return results[0]


async def generate_office_headshots(
    provider: ImageEditProvider, image: ImageResource, options: OfficeHeadshotOptions
) -> list[ImageResource]:
    return await run_tool(provider, options, [image])
