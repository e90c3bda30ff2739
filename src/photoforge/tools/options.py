"""Per-tool option records.

Each tool is configured by one immutable pydantic model. Values are
validated when the record is built, so the request builder only ever sees
sane counts and non-empty free text.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

# Largest batch the tools offer for a single run
MAX_IMAGES = 10


class ToolKind(StrEnum):
    """Closed set of editing tools."""

    RESTORATION = "restoration"
    ID_PHOTO = "id-photo"
    PRODUCT = "product"
    REMOVE_OBJECT = "remove-object"
    OFFICE_PHOTO = "office-photo"


class Orientation(StrEnum):
    """Orientation names used by the portrait tools."""

    PORTRAIT = "Portrait"
    SQUARE = "Square"
    LANDSCAPE = "Landscape"


class ShowcaseAspectRatio(StrEnum):
    """Numeric aspect ratios used by the product showcase."""

    PORTRAIT = "9:16"
    SQUARE = "1:1"
    LANDSCAPE = "16:9"


class IdPhotoBackground(StrEnum):
    WHITE = "White"
    LIGHT_BLUE = "Light Blue"
    GRAY = "Gray"


class HeadshotBackground(StrEnum):
    MODERN_OFFICE = "Modern Office"
    PLAIN_WALL = "Plain Wall"
    OUTDOOR_CORPORATE = "Outdoor Corporate"
    BOOKSHELF = "Elegant bookshelf"
    OFFICE_WINDOW = "Soft light from a large office window"
    BRICK_WALL = "Modern exposed brick wall"
    CONFERENCE_ROOM = "Blurred modern conference room"
    HALLWAY = "Bright corporate hallway"
    GRADIENT = "Subtle professional gradient"
    MINIMALIST = "Minimalist wall with a single plant"
    COFFEE_SHOP = "Upscale coffee shop"
    COWORKING = "Vibrant co-working space"
    CITY_VIEW = "Skyscraper window view of a city"


IdPhotoSize = Literal["3x4 cm", "4x6 cm"]


class ToolOptions(BaseModel):
    """Base class for tool option records."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    kind: ClassVar[ToolKind]
    image_count: ClassVar[int] = 1

    @property
    def requested_images(self) -> int:
        """How many output images a run of this tool produces."""
        return 1


class BatchToolOptions(ToolOptions):
    """Options for tools that can produce several images per run."""

    number_of_images: int = Field(
        default=1,
        ge=1,
        le=MAX_IMAGES,
        description="Independent generations to run in parallel",
    )

    @property
    def requested_images(self) -> int:
        return self.number_of_images


class RestorationOptions(ToolOptions):
    kind: ClassVar[ToolKind] = ToolKind.RESTORATION

    fix_damage: bool = True
    enhance_colors: bool = True
    sharpen_details: bool = True


class IdPhotoOptions(BatchToolOptions):
    kind: ClassVar[ToolKind] = ToolKind.ID_PHOTO

    size: IdPhotoSize = "3x4 cm"
    background: IdPhotoBackground = IdPhotoBackground.WHITE
    aspect_ratio: Orientation = Orientation.PORTRAIT


class ProductShowcaseOptions(BatchToolOptions):
    """Options for compositing a person (first image) and a product (second image)."""

    kind: ClassVar[ToolKind] = ToolKind.PRODUCT
    image_count: ClassVar[int] = 2

    scene_description: str = Field(min_length=1, description="Scene to place both subjects in")
    aspect_ratio: ShowcaseAspectRatio = ShowcaseAspectRatio.SQUARE


class ObjectRemovalOptions(ToolOptions):
    kind: ClassVar[ToolKind] = ToolKind.REMOVE_OBJECT

    object_to_remove: str = Field(min_length=1, description="Free-text description of the target")


class OfficeHeadshotOptions(BatchToolOptions):
    kind: ClassVar[ToolKind] = ToolKind.OFFICE_PHOTO

    background: HeadshotBackground = HeadshotBackground.MODERN_OFFICE
    aspect_ratio: Orientation = Orientation.PORTRAIT
