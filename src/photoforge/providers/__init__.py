"""Image model integrations: payload encoding, dispatch and reply decoding."""

from photoforge.providers.decoder import (
    GenerationOutcome,
    GenerationRefused,
    ImageGenerated,
    NoImageReturned,
    PromptBlocked,
    decode_response,
    unwrap_outcome,
)
from photoforge.providers.encoding import (
    InvalidImageFileError,
    MalformedResourceError,
    data_url_to_parts,
    decode_part,
    encode_image,
    load_image,
)
from photoforge.providers.image import (
    EncodedImagePart,
    GenerationRequest,
    ImageBlockedError,
    ImageEditProvider,
    ImageEmptyResponseError,
    ImageProviderConnectionError,
    ImageProviderError,
    ImageRefusedError,
    ImageResource,
    ImageTransportError,
)
from photoforge.providers.image_factory import create_image_provider
from photoforge.providers.response import (
    Candidate,
    ContentPart,
    InlineData,
    ModelResponse,
    PromptFeedback,
)

__all__ = [
    "Candidate",
    "ContentPart",
    "EncodedImagePart",
    "GenerationOutcome",
    "GenerationRefused",
    "GenerationRequest",
    "ImageBlockedError",
    "ImageEditProvider",
    "ImageEmptyResponseError",
    "ImageGenerated",
    "ImageProviderConnectionError",
    "ImageProviderError",
    "ImageRefusedError",
    "ImageResource",
    "ImageTransportError",
    "InlineData",
    "InvalidImageFileError",
    "MalformedResourceError",
    "ModelResponse",
    "NoImageReturned",
    "PromptBlocked",
    "PromptFeedback",
    "create_image_provider",
    "data_url_to_parts",
    "decode_part",
    "decode_response",
    "encode_image",
    "load_image",
    "unwrap_outcome",
]
