"""Photoforge: photo restoration and recomposition on hosted image models."""

__version__ = "0.1.0"
