"""Editing tools: options, instruction templates, request building and runs."""

from photoforge.tools.builder import build_request, build_requests
from photoforge.tools.catalog import TOOLS, ToolInfo, get_tool
from photoforge.tools.messages import friendly_error_message
from photoforge.tools.options import (
    MAX_IMAGES,
    HeadshotBackground,
    IdPhotoBackground,
    IdPhotoOptions,
    ObjectRemovalOptions,
    OfficeHeadshotOptions,
    Orientation,
    ProductShowcaseOptions,
    RestorationOptions,
    ShowcaseAspectRatio,
    ToolKind,
    ToolOptions,
)
from photoforge.tools.prompts import build_instruction
from photoforge.tools.runner import (
    generate_id_photos,
    generate_office_headshots,
    generate_one,
    generate_product_showcase,
    remove_object,
    restore_photo,
    run_tool,
)

__all__ = [
    "MAX_IMAGES",
    "TOOLS",
    "HeadshotBackground",
    "IdPhotoBackground",
    "IdPhotoOptions",
    "ObjectRemovalOptions",
    "OfficeHeadshotOptions",
    "Orientation",
    "ProductShowcaseOptions",
    "RestorationOptions",
    "ShowcaseAspectRatio",
    "ToolInfo",
    "ToolKind",
    "ToolOptions",
    "build_instruction",
    "build_request",
    "build_requests",
    "friendly_error_message",
    "generate_id_photos",
    "generate_office_headshots",
    "generate_one",
    "generate_product_showcase",
    "get_tool",
    "remove_object",
    "restore_photo",
    "run_tool",
]
