"""Web geometry → TikZ code generation helpers."""

from .generator import (
    generate_tikz_code,
    generate_tikz_document,
)

__all__ = [
    "generate_tikz_code",
    "generate_tikz_document",
]
