"""Label-color selection and contrast helpers.

``label_color`` chooses black or white text over a background from a simple
luminance estimate. The WCAG helpers below use the gamma-corrected relative
luminance and are meant for auditing palettes, not for the label decision.
"""

from typing import List, Union

from .schema import RGBA, BLACK, WHITE
from .hexcodec import parse

DEFAULT_THRESHOLD = 0.57

ColorLike = Union[RGBA, str]


def _as_color(color: ColorLike) -> RGBA:
    return parse(color) if isinstance(color, str) else color


def perceived_luminance(color: ColorLike) -> float:
    """Weighted sum of the sRGB channels; alpha is ignored.

    Args:
        color: RGBA value or hex string

    Returns:
        Luminance 0.0-1.0
    """
    c = _as_color(color)
    return 0.2126 * c.r + 0.7152 * c.g + 0.0722 * c.b


def label_color(background: ColorLike, threshold: float = DEFAULT_THRESHOLD) -> RGBA:
    """Return black or white, whichever reads better over ``background``.

    White is chosen when the luminance is at or below ``threshold``, black
    above it. Translucent and opaque variants of a hue select the same label.
    The result never shares the background's RGB: if the threshold would pick
    the background itself, the other label is returned.
    """
    bg = _as_color(background)
    chosen = BLACK if perceived_luminance(bg) > threshold else WHITE
    if chosen.same_rgb(bg):
        chosen = WHITE if chosen is BLACK else BLACK
    return chosen


def relative_luminance(color: ColorLike) -> float:
    """Calculate WCAG relative luminance of a color.

    Args:
        color: RGBA value or hex string

    Returns:
        Relative luminance 0.0-1.0
    """
    def gamma_correct(value: float) -> float:
        if value <= 0.03928:
            return value / 12.92
        return ((value + 0.055) / 1.055) ** 2.4

    c = _as_color(color)
    return 0.2126 * gamma_correct(c.r) + 0.7152 * gamma_correct(c.g) + 0.0722 * gamma_correct(c.b)


def contrast_ratio(color1: ColorLike, color2: ColorLike) -> float:
    """Calculate WCAG contrast ratio between two colors.

    Returns:
        Contrast ratio 1.0-21.0 (higher is more contrast)
    """
    lum1 = relative_luminance(color1)
    lum2 = relative_luminance(color2)

    # Ensure lighter color is in numerator
    if lum1 < lum2:
        lum1, lum2 = lum2, lum1

    return (lum1 + 0.05) / (lum2 + 0.05)


def meets_wcag_contrast(fg_color: ColorLike, bg_color: ColorLike, level: str = 'AA') -> bool:
    """Check if color combination meets WCAG contrast requirements.

    Args:
        fg_color: Foreground color
        bg_color: Background color
        level: 'AA' (4.5:1) or 'AAA' (7:1)
    """
    ratio = contrast_ratio(fg_color, bg_color)

    if level == 'AAA':
        return ratio >= 7.0
    return ratio >= 4.5


def audit_family_contrast(family, threshold: float = DEFAULT_THRESHOLD,
                          level: str = 'AA') -> List[str]:
    """List the tones of a palette family whose label misses ``level``.

    Args:
        family: PaletteFamily to audit (light values)
        threshold: Label-selection threshold
        level: WCAG level to check against

    Returns:
        List of accessibility warnings
    """
    warnings = []
    for tone, background in sorted(family.light.items(), reverse=True):
        label = label_color(background, threshold)
        if not meets_wcag_contrast(label, background, level):
            ratio = contrast_ratio(label, background)
            name = "black" if label == BLACK else "white"
            warnings.append(
                f"Low contrast for {name} label on {family.name}.{tone} "
                f"({background.to_hex()}): {ratio:.1f}:1"
            )
    return warnings
