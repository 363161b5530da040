"""Design Token Engine Package.

This package resolves the design system's tokens: hex color parsing, palette
families with light/dark tone maps, theme-mode driven scheme selection,
black/white label contrast, typography presets and font face resolution.
"""

from .core import TokenEngine
from .registry import PaletteRegistry
from .palette import PaletteFamily, PaletteIntegrityError
from .scheme import ColorSchemeResolver, ThemeModeState, ThemeModeSchemeProvider, default_theme_state
from .schema import (
    # Core models
    RGBA,
    TypographySpec,
    PaletteFamilyDefinition,
    FamilyAssetEntry,
    ColorRef,

    # Fixed colors
    BLACK,
    WHITE,
    TRANSPARENT,

    # Enums
    ColorScheme,
    ThemeMode,
    FontWeight,
    FontSlant,
    FontFamily,
)
from .hexcodec import (
    HexColorError,
    InvalidLength,
    InvalidScan,
    parse,
    try_parse,
    format_hex,
    normalize,
)
from .contrast import (
    label_color,
    perceived_luminance,
    relative_luminance,
    contrast_ratio,
    meets_wcag_contrast,
    audit_family_contrast,
)
from .typography import TextStyleToken, TypographyTokenProvider, FontFamilyProvider
from .fonts import FontFaceResolver, ResolvedFont
from .text_style import ResolvedTextStyle, compute_text_style, style_for_token
from .buttons import ButtonVariant, ButtonType, ButtonState, ButtonPalette

__version__ = "1.0.0"

__all__ = [
    # Main classes
    "TokenEngine",
    "PaletteRegistry",
    "PaletteFamily",
    "PaletteIntegrityError",
    "ColorSchemeResolver",
    "ThemeModeState",
    "ThemeModeSchemeProvider",
    "default_theme_state",

    # Schema models
    "RGBA",
    "TypographySpec",
    "PaletteFamilyDefinition",
    "FamilyAssetEntry",
    "ColorRef",
    "BLACK",
    "WHITE",
    "TRANSPARENT",

    # Enums
    "ColorScheme",
    "ThemeMode",
    "FontWeight",
    "FontSlant",
    "FontFamily",

    # Hex codec
    "HexColorError",
    "InvalidLength",
    "InvalidScan",
    "parse",
    "try_parse",
    "format_hex",
    "normalize",

    # Contrast
    "label_color",
    "perceived_luminance",
    "relative_luminance",
    "contrast_ratio",
    "meets_wcag_contrast",
    "audit_family_contrast",

    # Typography
    "TextStyleToken",
    "TypographyTokenProvider",
    "FontFamilyProvider",
    "FontFaceResolver",
    "ResolvedFont",
    "ResolvedTextStyle",
    "compute_text_style",
    "style_for_token",

    # Buttons
    "ButtonVariant",
    "ButtonType",
    "ButtonState",
    "ButtonPalette",
]
