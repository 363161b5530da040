"""Hex color codec.

Pure conversions between textual hex notation and normalized RGBA values.
Supported forms (case-insensitive, leading ``#`` optional):

- ``RGB``      12-bit, e.g. ``#1A2``
- ``RGBA``     16-bit, e.g. ``#1A2F``
- ``RRGGBB``   24-bit, e.g. ``#11AA22``
- ``RRGGBBAA`` 32-bit, e.g. ``#11AA22FF``

This module knows nothing about schemes, palettes or theme modes.
"""

import string
import logging
from typing import Optional, Tuple

from .schema import RGBA

logger = logging.getLogger(__name__)

SUPPORTED_LENGTHS = (3, 4, 6, 8)
_HEX_DIGITS = frozenset(string.hexdigits)


class HexColorError(ValueError):
    """Base error for hex parsing failures."""


class InvalidLength(HexColorError):
    """Input length is not one of 3, 4, 6 or 8 hex digits."""

    def __init__(self, actual: int):
        self.actual = actual
        super().__init__(
            f"Invalid hex color length {actual}, expected one of {SUPPORTED_LENGTHS}"
        )


class InvalidScan(HexColorError):
    """A one- or two-character chunk is not valid hex."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid hex digits '{token}'")


def _scan(chunk: str) -> int:
    if not chunk or any(c not in _HEX_DIGITS for c in chunk):
        raise InvalidScan(chunk)
    return int(chunk, 16)


def _nibble(c: str) -> int:
    # 0xA expands to 0xAA
    v = _scan(c)
    return (v << 4) | v


def parse_bytes(text: str) -> Tuple[int, int, int, int]:
    """Parse a hex string into 0-255 channels ``(r, g, b, a)``.

    Raises:
        InvalidLength: If the digit count is not 3, 4, 6 or 8
        InvalidScan: If a chunk contains non-hex characters
    """
    s = text.strip()
    if s.startswith('#'):
        s = s[1:]

    length = len(s)
    if length not in SUPPORTED_LENGTHS:
        raise InvalidLength(length)

    # Chunks are scanned case-insensitively in the caller's own text
    a = 0xFF
    if length in (3, 4):
        r, g, b = _nibble(s[0]), _nibble(s[1]), _nibble(s[2])
        if length == 4:
            a = _nibble(s[3])
    else:
        r, g, b = _scan(s[0:2]), _scan(s[2:4]), _scan(s[4:6])
        if length == 8:
            a = _scan(s[6:8])
    return (r, g, b, a)


def parse(text: str) -> RGBA:
    """Parse a hex string into an RGBA color with channels in [0, 1].

    Alpha defaults to 1.0 when the input has no alpha digits.
    """
    r, g, b, a = parse_bytes(text)
    return RGBA.from_bytes(r, g, b, a)


def try_parse(text: str) -> Optional[RGBA]:
    """Parse a hex string, logging and returning None on failure."""
    try:
        return parse(text)
    except HexColorError as e:
        logger.warning(f"Hex color parse error for {text!r}: {e}")
        return None


def quantize(channel: float) -> int:
    """Clamp a channel to [0, 1] and round half-up to 0-255."""
    clamped = max(0.0, min(1.0, float(channel)))
    return int(clamped * 255.0 + 0.5)


def format_hex(r: float, g: float, b: float, a: float = 1.0,
               include_alpha: bool = False) -> str:
    """Format channels into ``#RRGGBB`` or ``#RRGGBBAA``.

    Channels are clamped to [0, 1], scaled by 255 and rounded, not truncated.
    """
    R, G, B, A = quantize(r), quantize(g), quantize(b), quantize(a)
    if include_alpha:
        return f"#{R:02X}{G:02X}{B:02X}{A:02X}"
    return f"#{R:02X}{G:02X}{B:02X}"


def normalize(text: str, include_alpha: Optional[bool] = None) -> str:
    """Canonicalize any supported hex form to uppercase ``#RRGGBB[AA]``.

    When ``include_alpha`` is None the alpha digits are kept only if the
    color is not fully opaque.
    """
    color = parse(text)
    if include_alpha is None:
        include_alpha = color.a < 1.0
    return color.to_hex(include_alpha=include_alpha)
