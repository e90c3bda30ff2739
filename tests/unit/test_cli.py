"""Test CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from photoforge import __version__
from photoforge.cli import app
from photoforge.observability import close_file_logging
from tests.fixtures.fake_provider import FakeImageProvider, blocked_response

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture(autouse=True)
def _in_tmp_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ./photoforge.yaml and ./output lookups inside the test directory."""
    monkeypatch.chdir(tmp_path)


def _invoke(*args: str):
    return runner.invoke(app, ["--provider", "placeholder", *args])


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"v{__version__}" in result.stdout


def test_no_args_shows_help() -> None:
    result = runner.invoke(app, [])
    assert result.exit_code == 2
    assert "Photoforge" in result.stdout


def test_tools_lists_commands() -> None:
    result = runner.invoke(app, ["tools"])
    assert result.exit_code == 0
    assert "restore" in result.stdout
    assert "Tools" in result.stdout


# --- Tool commands ---


def test_restore_writes_image(png_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = _invoke("restore", str(png_file), "--no-fix-damage", "-o", str(out))

    assert result.exit_code == 0, result.stdout
    saved = out / "restored_portrait.png"
    assert saved.read_bytes()[:8] == PNG_SIGNATURE
    assert "Saved" in result.stdout


def test_restore_default_output_dir(png_file: Path, tmp_path: Path) -> None:
    result = _invoke("restore", str(png_file))

    assert result.exit_code == 0, result.stdout
    assert (tmp_path / "output" / "restored_portrait.png").exists()


def test_id_photo_writes_requested_count(png_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = _invoke(
        "id-photo", str(png_file), "--size", "4x6", "-b", "light-blue", "-n", "3", "-o", str(out)
    )

    assert result.exit_code == 0, result.stdout
    assert sorted(p.name for p in out.iterdir()) == [
        "id_photo_1_portrait.png",
        "id_photo_2_portrait.png",
        "id_photo_3_portrait.png",
    ]


def test_showcase_takes_two_images(png_file: Path, tmp_path: Path) -> None:
    product = tmp_path / "bottle.png"
    product.write_bytes(png_file.read_bytes())
    out = tmp_path / "out"

    result = _invoke(
        "showcase",
        str(png_file),
        str(product),
        "--scene",
        "a sunny beach bar",
        "-a",
        "landscape",
        "-n",
        "2",
        "-o",
        str(out),
    )

    assert result.exit_code == 0, result.stdout
    assert (out / "product_showcase_1_generated.png").exists()
    assert (out / "product_showcase_2_generated.png").exists()


def test_remove_object_writes_edited_image(png_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = _invoke("remove-object", str(png_file), "-t", "a red car", "-o", str(out))

    assert result.exit_code == 0, result.stdout
    assert (out / "edited_portrait.png").exists()


def test_headshot_accepts_background_by_name(png_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = _invoke("headshot", str(png_file), "-b", "city-view", "-n", "2", "-o", str(out))

    assert result.exit_code == 0, result.stdout
    assert (out / "headshot_2_portrait.png").exists()


def test_headshot_accepts_background_by_value(png_file: Path, tmp_path: Path) -> None:
    result = _invoke(
        "headshot", str(png_file), "-b", "Plain Wall", "-o", str(tmp_path / "out")
    )

    assert result.exit_code == 0, result.stdout


# --- Failures ---


def test_remove_object_without_target_fails(png_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = _invoke("remove-object", str(png_file), "-o", str(out))

    assert result.exit_code == 1
    assert "Could not remove the object" in result.stdout
    assert not out.exists()


def test_count_out_of_range_fails(png_file: Path) -> None:
    result = _invoke("id-photo", str(png_file), "-n", "0")

    assert result.exit_code == 1
    assert "Invalid options" in result.stdout


def test_unknown_choice_is_usage_error(png_file: Path) -> None:
    result = _invoke("headshot", str(png_file), "-b", "beach")

    assert result.exit_code == 2


def test_missing_image_fails() -> None:
    result = _invoke("restore", "nope.png")

    assert result.exit_code == 1
    assert "Could not restore the photo" in result.stdout


def test_non_image_file_fails(tmp_path: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("hello")

    result = _invoke("restore", notes.name)

    assert result.exit_code == 1
    assert "valid image file" in result.stdout


def test_blocked_request_reported(png_file: Path, tmp_path: Path) -> None:
    provider = FakeImageProvider(responses=[blocked_response("SAFETY")])

    with patch("photoforge.cli._create_provider", return_value=provider):
        result = runner.invoke(app, ["restore", str(png_file), "-o", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "Request was blocked" in result.stdout
    assert len(provider.requests) == 1


def test_missing_api_key_reported(png_file: Path) -> None:
    result = runner.invoke(app, ["--provider", "gemini", "restore", str(png_file)])

    assert result.exit_code == 1
    assert "API key required" in result.stdout


# --- Config and logging ---


def test_provider_from_config_file(png_file: Path, tmp_path: Path) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("provider: placeholder\noutput_dir: renders\n")

    result = runner.invoke(app, ["--config", str(config), "restore", str(png_file)])

    assert result.exit_code == 0, result.stdout
    assert (tmp_path / "renders" / "restored_portrait.png").exists()


def test_missing_config_file_fails(png_file: Path) -> None:
    result = runner.invoke(
        app, ["--config", "missing.yaml", "restore", str(png_file)]
    )

    assert result.exit_code == 1
    assert "File not found" in result.stdout


def test_log_flag_writes_jsonl(png_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = runner.invoke(
        app, ["--provider", "placeholder", "--log", "restore", str(png_file), "-o", str(out)]
    )
    close_file_logging()

    assert result.exit_code == 0, result.stdout
    assert (out / "logs" / "debug.jsonl").exists()


# --- Doctor ---


def test_doctor_without_api_key_fails() -> None:
    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
    assert "Skipped" in result.stdout
