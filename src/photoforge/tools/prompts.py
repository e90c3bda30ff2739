"""Instruction templates for the editing tools.

Each template is fixed text with a few interpolated options. The
constraint sentences (keep the face, keep the product branding, touch
nothing else, return only the image) are what the model is held to, so
they are kept word for word; edit them only deliberately.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from photoforge.tools.options import (
    IdPhotoOptions,
    ObjectRemovalOptions,
    OfficeHeadshotOptions,
    ProductShowcaseOptions,
    RestorationOptions,
    ToolOptions,
)

RESTORATION_INTRO = (
    "You are an expert in photo restoration. Your task is to restore this old, blurry, "
    "or damaged photo. The goal is a realistic restoration that preserves the original "
    "character of the photo."
)
FIX_DAMAGE_INSTRUCTION = (
    "Fix physical damage such as scratches, tears, dust, and other blemishes."
)
ENHANCE_COLORS_INSTRUCTION = (
    "Correct color fading and discoloration. Restore natural and vibrant colors, "
    "and adjust the white balance if needed."
)
SHARPEN_DETAILS_INSTRUCTION = (
    "Enhance the sharpness and clarity of blurry details. Pay special attention to "
    "faces, ensuring they are clear while remaining natural."
)
GENERAL_RESTORATION_INSTRUCTION = (
    "Perform a general-purpose restoration, improving clarity and quality."
)
RESTORATION_OUTRO = "Return ONLY the restored image."

FACE_PRESERVATION = (
    "- IMPORTANT: You MUST NOT alter, modify, or airbrush the person's face. The facial "
    "features, skin texture, marks, and scars must be preserved exactly as they are in "
    "the original image."
)

ID_PHOTO_TEMPLATE = """\
You are an expert in creating professional ID photos. You will be given an image of a person. \
Your task is to transform it into a standard ID photo with the following specifications:
- Background Color: {background}
- Attire: The person should be wearing professional business attire (e.g., a dark suit jacket \
over a light-colored collared shirt). You MUST replace their current clothing.
- Pose & Expression: Maintain the person's head and shoulders view. The expression should be \
neutral and forward-facing.
- Lighting: Ensure the lighting is even and without harsh shadows, typical of a studio setting.
- Output: The final image must have a {aspect_ratio} aspect ratio. The common size for this \
photo is {size}.
{face_preservation}
Return ONLY the final, edited image."""

PRODUCT_SHOWCASE_TEMPLATE = """\
You are an expert commercial photographer. Your task is to seamlessly combine a person and a \
product into a new scene.
- First, isolate the person from their background in the first image.
- Second, isolate the product from its background in the second image.
- Then, place both the isolated person and the product into a new, realistic, high-quality \
scene described as: "{scene_description}".
- Ensure the lighting, shadows, and reflections on both the person and the product look \
natural and consistent with the new scene.
- The final image should be a professional, appealing advertisement or product shot.
- The final image must have a {aspect_ratio} aspect ratio.
- IMPORTANT: You MUST NOT alter or modify the person or the product themselves. Their \
appearance, shape, colors, and any text or logos must be preserved exactly as they are in \
the original images.
Return ONLY the final composite image."""

OBJECT_REMOVAL_TEMPLATE = """\
You are an expert photo editor. Your task is to remove an object from the provided image based \
on the user's request.
User's request: "Remove {object_to_remove}".
Carefully identify the object described and remove it seamlessly. Fill in the background \
intelligently, ensuring the result looks natural and realistic. Do not alter any other part \
of the image.
Return ONLY the edited image with the object removed."""

OFFICE_HEADSHOT_TEMPLATE = """\
You are an expert in creating professional corporate headshots. Transform the provided image \
into a high-quality headshot.
- Background: Change the background to a professional '{background}' setting.
- Attire: The person should be wearing professional business attire (e.g., a suit jacket or \
blazer). You MUST replace their current clothing.
- Pose & Expression: Maintain the person's head and shoulders view. The expression should be \
confident and professional.
- Lighting: Ensure the lighting is even, flattering, and studio-quality.
- Output: The final image must have a {aspect_ratio} aspect ratio.
{face_preservation}
Return ONLY the final, edited image."""


def restoration_prompt(options: RestorationOptions) -> str:
    """Build the restoration instruction, one line per enabled option."""
    instructions: list[str] = []
    if options.fix_damage:
        instructions.append(FIX_DAMAGE_INSTRUCTION)
    if options.enhance_colors:
        instructions.append(ENHANCE_COLORS_INSTRUCTION)
    if options.sharpen_details:
        instructions.append(SHARPEN_DETAILS_INSTRUCTION)

    prompt = RESTORATION_INTRO
    if instructions:
        prompt += "\n\nSpecifically, perform the following actions:\n- " + "\n- ".join(instructions)
    else:
        prompt += "\n\n" + GENERAL_RESTORATION_INSTRUCTION

    return prompt + "\n\n" + RESTORATION_OUTRO


def id_photo_prompt(options: IdPhotoOptions) -> str:
    return ID_PHOTO_TEMPLATE.format(
        background=options.background.value,
        aspect_ratio=options.aspect_ratio.value,
        size=options.size,
        face_preservation=FACE_PRESERVATION,
    )


def product_showcase_prompt(options: ProductShowcaseOptions) -> str:
    return PRODUCT_SHOWCASE_TEMPLATE.format(
        scene_description=options.scene_description,
        aspect_ratio=options.aspect_ratio.value,
    )


def object_removal_prompt(options: ObjectRemovalOptions) -> str:
    return OBJECT_REMOVAL_TEMPLATE.format(object_to_remove=options.object_to_remove)


def office_headshot_prompt(options: OfficeHeadshotOptions) -> str:
    return OFFICE_HEADSHOT_TEMPLATE.format(
        background=options.background.value,
        aspect_ratio=options.aspect_ratio.value,
        face_preservation=FACE_PRESERVATION,
    )


_PROMPT_BUILDERS: dict[type[ToolOptions], Callable[[Any], str]] = {
    RestorationOptions: restoration_prompt,
    IdPhotoOptions: id_photo_prompt,
    ProductShowcaseOptions: product_showcase_prompt,
    ObjectRemovalOptions: object_removal_prompt,
    OfficeHeadshotOptions: office_headshot_prompt,
}


def build_instruction(options: ToolOptions) -> str:
    """Return the instruction text for a tool's options.

    Raises:
        TypeError: If no template is registered for the options type.
    """
    builder = _PROMPT_BUILDERS.get(type(options))
    if builder is None:
        raise TypeError(f"No instruction template for {type(options).__name__}")
    return builder(options)
