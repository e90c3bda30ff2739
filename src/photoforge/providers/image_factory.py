"""Image provider factory.

Creates image provider instances from spec strings (e.g.,
``gemini/gemini-2.5-flash-image-preview``). Provider implementations are
imported lazily so the placeholder works without credentials.
"""

from __future__ import annotations

from typing import Any

from photoforge.providers.image import ImageEditProvider, ImageProviderError


def create_image_provider(provider_spec: str, **kwargs: Any) -> ImageEditProvider:
    """Create an image provider from a spec string.

    Args:
        provider_spec: Format ``provider/model`` (e.g., ``gemini/gemini-2.5-flash-image``).
            If no model is specified, a provider-specific default is used.
        **kwargs: Additional provider options forwarded to the constructor.

    Returns:
        Configured image provider.

    Raises:
        ImageProviderError: If provider is unknown.
    """
    if "/" in provider_spec:
        provider, model = provider_spec.split("/", 1)
    else:
        provider = provider_spec
        model = None

    provider_lower = provider.lower()

    if provider_lower == "placeholder":
        from photoforge.providers.image_placeholder import PlaceholderImageProvider

        return PlaceholderImageProvider(**kwargs)

    if provider_lower in ("gemini", "google"):
        from photoforge.providers.image_gemini import GeminiImageProvider

        if model:
            return GeminiImageProvider(model=model, **kwargs)
        return GeminiImageProvider(**kwargs)

    raise ImageProviderError(provider_lower, f"Unknown image provider: {provider_lower}")
