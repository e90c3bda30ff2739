"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from photoforge.providers.image import ImageResource
from photoforge.providers.image_placeholder import _make_png

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "API_KEY",
    "PHOTOFORGE_PROVIDER",
    "PHOTOFORGE_OUTPUT_DIR",
    "PHOTOFORGE_CONFIG",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and overrides from leaking into tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def png_bytes() -> bytes:
    return _make_png(2, 2, 200, 30, 30)


@pytest.fixture
def png_image(png_bytes: bytes) -> ImageResource:
    return ImageResource(data=png_bytes, mime_type="image/png")


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    path = tmp_path / "portrait.png"
    path.write_bytes(png_bytes)
    return path
