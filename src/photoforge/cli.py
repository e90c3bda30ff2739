"""Photoforge CLI - typer application entry point."""

from __future__ import annotations

import asyncio
import atexit
import mimetypes
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, TypeVar

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from photoforge.observability import close_file_logging, configure_logging, get_logger
from photoforge.tools.options import (
    MAX_IMAGES,
    HeadshotBackground,
    IdPhotoBackground,
    Orientation,
    ShowcaseAspectRatio,
    ToolKind,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from photoforge.config import AppConfig
    from photoforge.providers.image import ImageEditProvider, ImageResource
    from photoforge.tools.options import ToolOptions

# Load environment variables (API keys) from .env file
load_dotenv()

E = TypeVar("E", bound=Enum)

app = typer.Typer(
    name="photoforge",
    help="Photoforge: restore, stylize and recompose photos with a hosted image model.",
    no_args_is_help=True,
)
console = Console()

# Global state for logging/config flags (set by callback, used by commands)
_verbose: int = 0
_log_enabled: bool = False
_config_path: Path | None = None
_provider_override: str | None = None


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log: Annotated[
        bool,
        typer.Option(
            "--log",
            help="Enable file logging to {output}/logs/debug.jsonl.",
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file (default: ./photoforge.yaml if present).",
            envvar="PHOTOFORGE_CONFIG",
        ),
    ] = None,
    provider: Annotated[
        str | None,
        typer.Option(
            "--provider",
            help="Image provider (e.g., gemini/gemini-2.5-flash-image-preview, placeholder).",
        ),
    ] = None,
) -> None:
    """Photoforge: restore, stylize and recompose photos with a hosted image model."""
    global _verbose, _log_enabled, _config_path, _provider_override
    _verbose = verbose
    _log_enabled = log
    _config_path = config
    _provider_override = provider

    # File logging is configured later, once the output directory is known
    configure_logging(verbosity=verbose)


def _load_app_config() -> AppConfig:
    from photoforge.config import ConfigError, load_config

    try:
        return load_config(_config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None


def _configure_output_logging(output_dir: Path) -> None:
    """Configure file logging if --log flag was set."""
    if _log_enabled:
        configure_logging(verbosity=_verbose, log_to_file=True, log_dir=output_dir / "logs")
        atexit.register(close_file_logging)


def _parse_choice(enum_cls: type[E], value: str) -> E:
    """Resolve a CLI choice by member name (any case, dashes allowed) or by value."""
    key = value.strip().upper().replace("-", "_").replace(" ", "_")
    for member in enum_cls:
        if member.name == key or str(member.value).lower() == value.strip().lower():
            return member
    choices = ", ".join(m.name.lower().replace("_", "-") for m in enum_cls)
    raise typer.BadParameter(f"'{value}' is not one of: {choices}")


def _extension_for(mime_type: str) -> str:
    return mimetypes.guess_extension(mime_type) or ".png"


def _save_images(
    images: Sequence[ImageResource],
    output_dir: Path,
    name_for: Callable[[int], str],
) -> list[Path]:
    """Write images to ``output_dir``; ``name_for`` gets the 1-based index."""
    output_dir.mkdir(parents=True, exist_ok=True)
    paths: list[Path] = []
    for index, image in enumerate(images, start=1):
        path = output_dir / f"{name_for(index)}{_extension_for(image.mime_type)}"
        path.write_bytes(image.data)
        paths.append(path)
    return paths


def _create_provider(config: AppConfig) -> ImageEditProvider:
    from photoforge.providers.image_factory import create_image_provider

    spec = _provider_override or config.get_provider()
    kwargs = {}
    if config.request_timeout is not None and not spec.startswith("placeholder"):
        kwargs["timeout"] = config.request_timeout
    return create_image_provider(spec, **kwargs)


def _run_tool_command(
    kind: ToolKind,
    build_options: Callable[[], ToolOptions],
    image_paths: Sequence[Path],
    output: Path | None,
    name_for: Callable[[int], str],
) -> None:
    """Shared body of the tool commands: load, run, save, report."""
    from photoforge.providers.encoding import load_image
    from photoforge.providers.image import ImageProviderError
    from photoforge.tools.catalog import get_tool
    from photoforge.tools.messages import friendly_error_message
    from photoforge.tools.runner import run_tool

    info = get_tool(kind)
    config = _load_app_config()
    output_dir = output or config.get_output_dir()
    _configure_output_logging(output_dir)

    log = get_logger(__name__)

    try:
        options = build_options()
        images = [load_image(path) for path in image_paths]
        provider = _create_provider(config)

        console.print(
            f"[dim]Running {info.name} with {provider.name} "
            f"({options.requested_images} image(s))...[/dim]"
        )
        results = asyncio.run(
            run_tool(provider, options, images, max_concurrency=config.max_concurrency)
        )
    except (ValueError, ImageProviderError) as e:
        log.error("tool_run_failed", tool=str(kind), error=str(e))
        message = friendly_error_message(e, info.failure_context)
        console.print(f"[red]Error:[/red] {escape(message)}")
        raise typer.Exit(1) from None

    for path in _save_images(results, output_dir, name_for):
        console.print(f"  [green]✓[/green] Saved {path}")

    if _log_enabled:
        console.print(f"  Logs: [dim]{output_dir / 'logs'}[/dim]")


ImageArg = Annotated[
    Path,
    typer.Argument(help="Image file to edit.", show_default=False),
]
OutputOpt = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Output directory (default: ./output)."),
]
CountOpt = Annotated[
    int,
    typer.Option(
        "--count",
        "-n",
        help=f"Number of images to generate in parallel (1-{MAX_IMAGES}).",
    ),
]


@app.command()
def version() -> None:
    """Show version information."""
    from photoforge import __version__

    console.print(f"Photoforge v{__version__}")


@app.command("tools")
def list_tools() -> None:
    """List the available editing tools."""
    from photoforge.tools.catalog import TOOLS

    table = Table(title="Tools")
    table.add_column("Command", style="cyan")
    table.add_column("Name")
    table.add_column("Images", justify="right")
    table.add_column("Description")

    commands = {
        ToolKind.RESTORATION: "restore",
        ToolKind.ID_PHOTO: "id-photo",
        ToolKind.PRODUCT: "showcase",
        ToolKind.REMOVE_OBJECT: "remove-object",
        ToolKind.OFFICE_PHOTO: "headshot",
    }
    for kind, info in TOOLS.items():
        table.add_row(commands[kind], info.name, str(info.image_count), info.description)

    console.print(table)


@app.command()
def restore(
    image: ImageArg,
    fix_damage: Annotated[
        bool, typer.Option("--fix-damage/--no-fix-damage", help="Repair scratches and tears.")
    ] = True,
    enhance_colors: Annotated[
        bool,
        typer.Option("--enhance-colors/--no-enhance-colors", help="Correct faded colors."),
    ] = True,
    sharpen_details: Annotated[
        bool,
        typer.Option("--sharpen-details/--no-sharpen-details", help="Sharpen blurry details."),
    ] = True,
    output: OutputOpt = None,
) -> None:
    """Restore an old, blurry or damaged photo.

    With every option disabled a general-purpose restoration is requested.
    """
    from photoforge.tools.options import RestorationOptions

    _run_tool_command(
        ToolKind.RESTORATION,
        lambda: RestorationOptions(
            fix_damage=fix_damage,
            enhance_colors=enhance_colors,
            sharpen_details=sharpen_details,
        ),
        [image],
        output,
        lambda _: f"restored_{image.stem}",
    )


@app.command("id-photo")
def id_photo(
    image: ImageArg,
    size: Annotated[str, typer.Option("--size", help="Photo size: 3x4 or 4x6 (cm).")] = "3x4",
    background: Annotated[
        str, typer.Option("--background", "-b", help="white, light-blue or gray.")
    ] = "white",
    aspect_ratio: Annotated[
        str, typer.Option("--aspect-ratio", "-a", help="portrait, square or landscape.")
    ] = "portrait",
    count: CountOpt = 1,
    output: OutputOpt = None,
) -> None:
    """Create professional ID photos from a portrait.

    Examples:
        photoforge id-photo me.jpg --size 4x6 --background light-blue -n 3
    """
    from photoforge.tools.options import IdPhotoOptions

    size_value = size.strip()
    if not size_value.endswith("cm"):
        size_value = f"{size_value} cm"
    bg = _parse_choice(IdPhotoBackground, background)
    ratio = _parse_choice(Orientation, aspect_ratio)

    _run_tool_command(
        ToolKind.ID_PHOTO,
        lambda: IdPhotoOptions(
            size=size_value,
            background=bg,
            aspect_ratio=ratio,
            number_of_images=count,
        ),
        [image],
        output,
        lambda i: f"id_photo_{i}_{image.stem}",
    )


@app.command()
def showcase(
    subject: Annotated[Path, typer.Argument(help="Photo of the person.", show_default=False)],
    product: Annotated[Path, typer.Argument(help="Photo of the product.", show_default=False)],
    scene: Annotated[
        str, typer.Option("--scene", "-s", help="Description of the new scene.")
    ] = "",
    aspect_ratio: Annotated[
        str, typer.Option("--aspect-ratio", "-a", help="portrait, square or landscape.")
    ] = "square",
    count: CountOpt = 1,
    output: OutputOpt = None,
) -> None:
    """Compose a person and a product into an advertising shot.

    Examples:
        photoforge showcase model.jpg bottle.png --scene "a sunny beach bar" -a landscape
    """
    from photoforge.tools.options import ProductShowcaseOptions

    ratio = _parse_choice(ShowcaseAspectRatio, aspect_ratio)

    _run_tool_command(
        ToolKind.PRODUCT,
        lambda: ProductShowcaseOptions(
            scene_description=scene,
            aspect_ratio=ratio,
            number_of_images=count,
        ),
        [subject, product],
        output,
        lambda i: f"product_showcase_{i}_generated",
    )


@app.command("remove-object")
def remove_object(
    image: ImageArg,
    target: Annotated[
        str, typer.Option("--target", "-t", help="What to remove, e.g. 'a red car'.")
    ] = "",
    output: OutputOpt = None,
) -> None:
    """Remove an object, person or text from a photo."""
    from photoforge.tools.options import ObjectRemovalOptions

    _run_tool_command(
        ToolKind.REMOVE_OBJECT,
        lambda: ObjectRemovalOptions(object_to_remove=target),
        [image],
        output,
        lambda _: f"edited_{image.stem}",
    )


@app.command()
def headshot(
    image: ImageArg,
    background: Annotated[
        str,
        typer.Option(
            "--background",
            "-b",
            help="Setting, e.g. modern-office, plain-wall, bookshelf, city-view.",
        ),
    ] = "modern-office",
    aspect_ratio: Annotated[
        str, typer.Option("--aspect-ratio", "-a", help="portrait, square or landscape.")
    ] = "portrait",
    count: CountOpt = 1,
    output: OutputOpt = None,
) -> None:
    """Turn an everyday photo into a corporate headshot."""
    from photoforge.tools.options import OfficeHeadshotOptions

    bg = _parse_choice(HeadshotBackground, background)
    ratio = _parse_choice(Orientation, aspect_ratio)

    _run_tool_command(
        ToolKind.OFFICE_PHOTO,
        lambda: OfficeHeadshotOptions(
            background=bg,
            aspect_ratio=ratio,
            number_of_images=count,
        ),
        [image],
        output,
        lambda i: f"headshot_{i}_{image.stem}",
    )


@app.command()
def doctor() -> None:
    """Check configuration and provider connectivity."""
    console.print("[bold]Photoforge Doctor[/bold]")
    console.print()

    all_ok = True
    all_ok &= _check_configuration()
    all_ok &= asyncio.run(_check_gemini())

    console.print()
    if all_ok:
        console.print("[green]All checks passed![/green]")
    else:
        console.print("[yellow]Some checks failed or were skipped.[/yellow]")
        raise typer.Exit(1)


def _check_configuration() -> bool:
    """Check config file and API key presence."""
    import os

    from photoforge.config import ConfigError, load_config
    from photoforge.providers.image_gemini import API_KEY_ENV_VARS

    console.print("[bold]Configuration[/bold]")

    all_ok = True
    try:
        config = load_config(_config_path)
        provider = _provider_override or config.get_provider()
        console.print(f"  [green]✓[/green] provider: {provider}")
        console.print(f"  [green]✓[/green] output: {config.get_output_dir()}")
    except ConfigError as e:
        console.print(f"  [red]✗[/red] config: {escape(str(e))}")
        all_ok = False

    any_key = False
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            display = f"{value[:7]}...{value[-3:]}" if len(value) > 10 else "(set)"
            console.print(f"  [green]✓[/green] {name}: {display}")
            any_key = True
        else:
            console.print(f"  [dim]○[/dim] {name}: not configured")

    console.print()
    return all_ok and any_key


async def _check_gemini() -> bool:
    """Check Gemini API key validity by listing models."""
    import httpx

    from photoforge.providers.image_gemini import resolve_api_key

    console.print("[bold]Provider Connectivity[/bold]")

    api_key = resolve_api_key()
    if not api_key:
        console.print("  [dim]○[/dim] gemini: Skipped (no API key)")
        return False

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(
                "https://generativelanguage.googleapis.com/v1beta/models",
                headers={"x-goog-api-key": api_key},
            )
    except httpx.TimeoutException:
        console.print("  [red]✗[/red] gemini: Connection timeout")
        return False
    except httpx.RequestError as e:
        console.print(f"  [red]✗[/red] gemini: Request error - {escape(str(e))}")
        return False

    if response.status_code == 200:
        console.print("  [green]✓[/green] gemini: Connected (API key valid)")
        return True
    if response.status_code in (400, 401, 403):
        console.print("  [red]✗[/red] gemini: Invalid API key")
        return False
    console.print(f"  [red]✗[/red] gemini: HTTP {response.status_code}")
    return False


if __name__ == "__main__":
    app()
