"""Display metadata for the editing tools."""

from __future__ import annotations

from dataclasses import dataclass

from photoforge.tools.options import (
    IdPhotoOptions,
    ObjectRemovalOptions,
    OfficeHeadshotOptions,
    ProductShowcaseOptions,
    RestorationOptions,
    ToolKind,
    ToolOptions,
)


@dataclass(frozen=True)
class ToolInfo:
    """Catalogue entry for one tool.

    Attributes:
        kind: Tool identifier.
        name: Display name.
        description: One-sentence summary shown in listings.
        options_type: Option record the tool is configured with.
        failure_context: Lead-in for error messages ("Could not ...").
    """

    kind: ToolKind
    name: str
    description: str
    options_type: type[ToolOptions]
    failure_context: str

    @property
    def image_count(self) -> int:
        return self.options_type.image_count


TOOLS: dict[ToolKind, ToolInfo] = {
    ToolKind.RESTORATION: ToolInfo(
        kind=ToolKind.RESTORATION,
        name="Photo restoration",
        description="Restore old, blurry or damaged photos to their original state.",
        options_type=RestorationOptions,
        failure_context="Could not restore the photo",
    ),
    ToolKind.ID_PHOTO: ToolInfo(
        kind=ToolKind.ID_PHOTO,
        name="Professional ID photo",
        description="Create standard ID photos (3x4, 4x6) with studio lighting and attire.",
        options_type=IdPhotoOptions,
        failure_context="Could not create the ID photo",
    ),
    ToolKind.PRODUCT: ToolInfo(
        kind=ToolKind.PRODUCT,
        name="Product showcase",
        description="Compose a person and a product into a professional advertising shot.",
        options_type=ProductShowcaseOptions,
        failure_context="Could not create the product image",
    ),
    ToolKind.REMOVE_OBJECT: ToolInfo(
        kind=ToolKind.REMOVE_OBJECT,
        name="Object removal",
        description="Remove unwanted objects, people or text from any image.",
        options_type=ObjectRemovalOptions,
        failure_context="Could not remove the object",
    ),
    ToolKind.OFFICE_PHOTO: ToolInfo(
        kind=ToolKind.OFFICE_PHOTO,
        name="Office headshot",
        description="Turn everyday photos into professional corporate portraits.",
        options_type=OfficeHeadshotOptions,
        failure_context="Could not create the headshot",
    ),
}


def get_tool(kind: ToolKind | str) -> ToolInfo:
    """Look up a tool by kind or by its string identifier.

    Raises:
        KeyError: If the identifier is unknown.
    """
    try:
        return TOOLS[ToolKind(kind)]
    except ValueError:
        raise KeyError(f"Unknown tool: {kind}") from None
