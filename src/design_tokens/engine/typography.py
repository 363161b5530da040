"""Typography token presets.

Design supplies font sizes and line heights in pixels, letter spacing as a
percent of the font size and numeric weights. Each ``TextStyleToken`` maps to
an immutable ``TypographySpec`` built from those design values.
"""

from enum import Enum
from typing import Dict, Optional

from .schema import FontFamily, FontSlant, FontWeight, TypographySpec


class TextStyleToken(str, Enum):
    """Named typography presets"""
    H1_BOLD = "h1-bold"
    H1_MEDIUM = "h1-medium"
    H1_REGULAR = "h1-regular"
    H2_BOLD = "h2-bold"
    H2_MEDIUM = "h2-medium"
    H2_REGULAR = "h2-regular"
    H3_BOLD = "h3-bold"
    H3_MEDIUM = "h3-medium"
    H3_REGULAR = "h3-regular"
    H4_BOLD = "h4-bold"
    H4_MEDIUM = "h4-medium"
    H4_REGULAR = "h4-regular"
    H5_BOLD = "h5-bold"
    H5_MEDIUM = "h5-medium"
    H5_REGULAR = "h5-regular"
    BUTTON_M = "button-m"
    BUTTON_S = "button-s"
    BODY = "body"
    CAPTION = "caption"
    CODE = "code"


def _spec(size_px: float, weight_number: int, line_height_px: float,
          letter_spacing_percent: float) -> TypographySpec:
    return TypographySpec(
        design_size_px=size_px,
        weight=FontWeight.from_number(weight_number),
        slant=FontSlant.NORMAL,
        line_height_px=line_height_px,
        letter_spacing_percent=letter_spacing_percent,
    )


# Heading sizes follow a 1.25 modular scale from a 16px body
TEXT_STYLE_SPECS: Dict[TextStyleToken, TypographySpec] = {
    TextStyleToken.H1_BOLD: _spec(48.83, 700, 56, 0.75),
    TextStyleToken.H1_MEDIUM: _spec(48.83, 500, 56, 0.75),
    TextStyleToken.H1_REGULAR: _spec(48.83, 400, 56, 0.75),

    TextStyleToken.H2_BOLD: _spec(39.06, 700, 46, 0.75),
    TextStyleToken.H2_MEDIUM: _spec(39.06, 500, 46, 0.75),
    TextStyleToken.H2_REGULAR: _spec(39.06, 400, 46, 0.75),

    TextStyleToken.H3_BOLD: _spec(31.25, 700, 37, 0.75),
    TextStyleToken.H3_MEDIUM: _spec(31.25, 500, 37, 0.75),
    TextStyleToken.H3_REGULAR: _spec(31.25, 400, 37, 0.75),

    TextStyleToken.H4_BOLD: _spec(25, 700, 30, 0.75),
    TextStyleToken.H4_MEDIUM: _spec(25, 500, 30, 0.75),
    TextStyleToken.H4_REGULAR: _spec(25, 400, 30, 0.75),

    TextStyleToken.H5_BOLD: _spec(20, 700, 24, 0.75),
    TextStyleToken.H5_MEDIUM: _spec(20, 500, 24, 0.75),
    TextStyleToken.H5_REGULAR: _spec(20, 400, 24, 0.75),

    TextStyleToken.BUTTON_M: _spec(16, 500, 24, 0.5),
    TextStyleToken.BUTTON_S: _spec(14, 500, 22, 0.5),

    TextStyleToken.BODY: _spec(16, 400, 24, 0.5),
    TextStyleToken.CAPTION: _spec(12.8, 400, 16.2, 0.0),
    TextStyleToken.CODE: _spec(12, 400, 16, 0.0),
}


def spec_for(token: TextStyleToken) -> TypographySpec:
    """Return the preset spec for a token."""
    return TEXT_STYLE_SPECS[TextStyleToken(token)]


def preferred_family_for(token: TextStyleToken) -> Optional[FontFamily]:
    return spec_for(token).preferred_family


class TypographyTokenProvider:
    """Default token source backed by the preset table.

    Subclass and override ``spec`` to plug a different token source, e.g. a
    brand-specific table.
    """

    def spec(self, token: TextStyleToken) -> TypographySpec:
        return spec_for(token)


class FontFamilyProvider:
    """Default family source: the token's preferred family, else a fallback."""

    def __init__(self, fallback: FontFamily = FontFamily.SYSTEM):
        self.fallback = FontFamily(fallback)

    def resolve_preferred_family(self, token: TextStyleToken) -> FontFamily:
        return preferred_family_for(token) or self.fallback
