"""Schema definitions for the design-token engine.

This module defines the Pydantic models and enums shared by every part of the
engine: RGBA color values, light/dark schemes, theme modes, typography specs,
palette family definitions loaded from YAML presets, and font asset entries.
"""

from typing import Dict, Any, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from enum import Enum


class ColorScheme(str, Enum):
    """Ambient rendering scheme supplied by the host per draw"""
    LIGHT = "light"
    DARK = "dark"


class ThemeMode(str, Enum):
    """Process-wide override applied on top of the ambient scheme"""
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @property
    def title(self) -> str:
        """Human-readable label for settings menus."""
        return self.value.title()

    @property
    def preferred_override(self) -> Optional[ColorScheme]:
        """Scheme forced by this mode, or None when the host decides."""
        if self == ThemeMode.SYSTEM:
            return None
        return ColorScheme(self.value)

    def resolve(self, view_scheme: ColorScheme) -> ColorScheme:
        """Return the effective scheme for the caller's ambient scheme."""
        override = self.preferred_override
        return override if override is not None else ColorScheme(view_scheme)


class FontWeight(str, Enum):
    """Weight buckets used by typography tokens and font asset tables"""
    LIGHT = "light"
    REGULAR = "regular"
    MEDIUM = "medium"
    BOLD = "bold"
    BLACK = "black"

    @classmethod
    def from_number(cls, number: int) -> "FontWeight":
        """Map a numeric design weight (100..1000) to a bucket.

        The mapping is total: anything below 400 is light, exactly 400 is
        regular, 401-599 medium, 600-899 bold and 900 or above black.
        """
        if number < 400:
            return cls.LIGHT      # thin, extra light and light
        if number == 400:
            return cls.REGULAR
        if number < 600:
            return cls.MEDIUM
        if number < 900:
            return cls.BOLD       # 600 semibold approximates bold
        return cls.BLACK


class FontSlant(str, Enum):
    """Font slant options"""
    NORMAL = "normal"
    ITALIC = "italic"


class FontFamily(str, Enum):
    """Font families known to the asset table"""
    SYSTEM = "system"
    HELVETICA_NEUE_LT_PRO = "helvetica_neue_lt_pro"
    OPEN_SANS = "open_sans"
    ROBOTO = "roboto"

    @property
    def is_system(self) -> bool:
        return self == FontFamily.SYSTEM


class RGBA(BaseModel):
    """Immutable color with four channels normalized to [0, 1].

    Equality and hashing use the 8-bit quantized channels, the same rounding
    the hex formatter applies, so two colors are equal exactly when they
    export to the same ``#RRGGBBAA`` string.
    """

    model_config = ConfigDict(frozen=True)

    r: float = Field(..., ge=0.0, le=1.0, description="Red channel")
    g: float = Field(..., ge=0.0, le=1.0, description="Green channel")
    b: float = Field(..., ge=0.0, le=1.0, description="Blue channel")
    a: float = Field(1.0, ge=0.0, le=1.0, description="Alpha channel")

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int, a: int = 255) -> "RGBA":
        """Build a color from 0-255 channel values."""
        return cls(r=r / 255.0, g=g / 255.0, b=b / 255.0, a=a / 255.0)

    def to_bytes(self) -> Tuple[int, int, int, int]:
        """Quantize to 0-255 channels using round-half-up."""
        from .hexcodec import quantize
        return (quantize(self.r), quantize(self.g), quantize(self.b), quantize(self.a))

    def to_hex(self, include_alpha: bool = False) -> str:
        """Export as ``#RRGGBB`` or ``#RRGGBBAA``."""
        from .hexcodec import format_hex
        return format_hex(self.r, self.g, self.b, self.a, include_alpha=include_alpha)

    def with_alpha(self, alpha: float) -> "RGBA":
        return self.model_copy(update={"a": min(1.0, max(0.0, alpha))})

    def same_rgb(self, other: "RGBA") -> bool:
        """True when both colors share the same quantized RGB, ignoring alpha."""
        return self.to_bytes()[:3] == other.to_bytes()[:3]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RGBA):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __str__(self) -> str:
        return self.to_hex(include_alpha=self.a < 1.0)


# Fixed colors used across the engine
BLACK = RGBA(r=0.0, g=0.0, b=0.0, a=1.0)
WHITE = RGBA(r=1.0, g=1.0, b=1.0, a=1.0)
TRANSPARENT = RGBA(r=0.0, g=0.0, b=0.0, a=0.0)


class TypographySpec(BaseModel):
    """Immutable, design-driven text specification.

    Sizes are expressed in design pixels; ``point_size_override`` skips the
    px to pt conversion entirely when present.
    """

    model_config = ConfigDict(frozen=True)

    design_size_px: Optional[float] = Field(None, description="Design font size in px")
    point_size_override: Optional[float] = Field(None, description="Explicit point size, wins over px")
    weight: FontWeight = FontWeight.REGULAR
    slant: FontSlant = FontSlant.NORMAL
    line_height_px: Optional[float] = Field(None, description="Design line height in px")
    letter_spacing_percent: Optional[float] = Field(None, description="Letter spacing as % of point size")
    preferred_family: Optional[FontFamily] = Field(None, description="Token-level family override")

    def base_point_size(self, scale: Optional[float] = None) -> float:
        """Point size before any host-side dynamic scaling.

        ``point_size_override`` wins unconditionally. Otherwise the design
        size is divided by ``scale``; a missing or non-positive scale counts
        as 1.0. A spec with neither size resolves to 0.
        """
        if self.point_size_override is not None:
            return float(self.point_size_override)
        if self.design_size_px is None:
            return 0.0
        if scale is None or scale <= 0:
            scale = 1.0
        return self.design_size_px / scale

    def line_height_multiple(self) -> Optional[float]:
        """Scale-independent ratio of line height to font size."""
        if self.line_height_px is None or self.design_size_px is None:
            return None
        if self.design_size_px <= 0:
            return None
        return self.line_height_px / self.design_size_px

    def kerning(self, scale: Optional[float] = None) -> float:
        percent = self.letter_spacing_percent or 0.0
        return percent / 100.0 * self.base_point_size(scale)

    def line_spacing(self, scale: Optional[float] = None) -> float:
        """Extra leading in points on top of the base point size."""
        base = self.base_point_size(scale)
        multiple = self.line_height_multiple()
        if multiple is None:
            multiple = 1.0
        return multiple * base - base

    def with_slant(self, slant: FontSlant) -> "TypographySpec":
        return self.model_copy(update={"slant": FontSlant(slant)})

    def with_weight(self, weight: FontWeight) -> "TypographySpec":
        return self.model_copy(update={"weight": FontWeight(weight)})

    def with_weight_number(self, weight_number: int) -> "TypographySpec":
        return self.model_copy(update={"weight": FontWeight.from_number(weight_number)})

    def with_family(self, family: Optional[FontFamily]) -> "TypographySpec":
        return self.model_copy(update={"preferred_family": family})


class PaletteFamilyDefinition(BaseModel):
    """Raw palette family as declared in a YAML preset"""

    name: str = Field(..., description="Registry key, e.g. 'dark_blue'")
    display_name: str = Field("", description="Human-readable family name")
    group: str = Field("", description="Grouping such as primary, secondary or support")
    description: str = ""
    light: Dict[int, str] = Field(..., description="Tone to hex color for the light scheme")
    dark: Optional[Dict[int, str]] = Field(None, description="Tone to hex color for the dark scheme")
    pending_dark: bool = Field(False, description="Dark values not designed yet; light is reused")
    single_tone: bool = False

    @field_validator('light', 'dark')
    @classmethod
    def validate_hex_values(cls, v):
        """Every tone must carry a parseable hex string"""
        if v is None:
            return v
        from .hexcodec import parse
        for tone, value in v.items():
            try:
                parse(value)
            except ValueError as e:
                raise ValueError(f"tone {tone}: {e}") from e
        return v

    @model_validator(mode='after')
    def validate_tone_sets(self):
        """Light and dark mappings must cover exactly the same tones"""
        if not self.light:
            raise ValueError(f"Color family '{self.name}' declares no tones")
        if self.dark is None and not self.pending_dark:
            raise ValueError(
                f"Color family '{self.name}' misconfigured: no dark values and not marked pending_dark"
            )
        if self.dark is not None and self.pending_dark:
            raise ValueError(
                f"Color family '{self.name}' misconfigured: dark values given but marked pending_dark"
            )
        if self.dark is not None and set(self.dark) != set(self.light):
            missing = sorted(set(self.light) ^ set(self.dark))
            raise ValueError(
                f"Color family '{self.name}' misconfigured: tones {missing} missing from one scheme"
            )
        if self.single_tone and len(self.light) != 1:
            raise ValueError(f"Single-tone family '{self.name}' must declare exactly one tone")
        if not self.display_name:
            self.display_name = self.name.replace('_', ' ').title()
        return self


class FamilyAssetEntry(BaseModel):
    """Face identifiers bundled for one (family, weight) pair"""

    model_config = ConfigDict(frozen=True)

    upright: str
    italic: Optional[str] = None


class ColorRef(BaseModel):
    """Reference to a palette entry, resolved lazily against a scheme"""

    model_config = ConfigDict(frozen=True)

    family: str
    tone: Optional[int] = None

    def __str__(self) -> str:
        return self.family if self.tone is None else f"{self.family}.{self.tone}"


# Type aliases for convenience
ToneMap = Dict[int, RGBA]
PresetDict = Dict[str, Any]
