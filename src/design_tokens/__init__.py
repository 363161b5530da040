"""Design Tokens - color, contrast and typography tokens for a design system."""

__version__ = "1.0.0"
__author__ = "Design Tokens Team"

from .engine import (
    TokenEngine,
    RGBA,
    ColorScheme,
    ThemeMode,
    FontFamily,
    TextStyleToken,
)

__all__ = ["TokenEngine", "RGBA", "ColorScheme", "ThemeMode", "FontFamily", "TextStyleToken", "__version__"]
