"""Concrete text metrics from a typography spec.

Family precedence, highest first:

1. explicit family passed by the call site
2. the token's ``preferred_family``
3. the ambient default family (configuration or provider)
4. the system family
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .schema import FontFamily, FontSlant, TypographySpec
from .fonts import FontFaceResolver, ResolvedFont
from .typography import TextStyleToken, TypographyTokenProvider


class ResolvedTextStyle(BaseModel):
    """Rendering metrics for one piece of text, in points"""

    model_config = ConfigDict(frozen=True)

    font: ResolvedFont
    point_size: float
    kerning: float
    line_spacing: float
    line_height_multiple: Optional[float] = None
    needs_view_italic: bool = False

    @property
    def face(self) -> str:
        return self.font.face


def resolve_family(explicit: Optional[FontFamily], spec: TypographySpec,
                   default: Optional[FontFamily] = None) -> FontFamily:
    """Pick the effective family: explicit > preferred > default > system."""
    for candidate in (explicit, spec.preferred_family, default):
        if candidate is not None:
            return FontFamily(candidate)
    return FontFamily.SYSTEM


def compute_text_style(spec: TypographySpec, family: Union[FontFamily, str],
                       design_scale: Optional[float] = None,
                       fonts: Optional[FontFaceResolver] = None) -> ResolvedTextStyle:
    """Compute point size, face, kerning and line spacing for ``spec``."""
    fonts = fonts or FontFaceResolver()
    base = spec.base_point_size(design_scale)
    resolved = fonts.resolve(spec, family=family, base_point_size=base)
    return ResolvedTextStyle(
        font=resolved,
        point_size=base,
        kerning=spec.kerning(design_scale),
        line_spacing=spec.line_spacing(design_scale),
        line_height_multiple=spec.line_height_multiple(),
        needs_view_italic=resolved.needs_view_italic,
    )


def style_for_token(token: Union[TextStyleToken, str],
                    slant: Optional[Union[FontSlant, str]] = None,
                    family: Optional[Union[FontFamily, str]] = None,
                    default_family: Optional[Union[FontFamily, str]] = None,
                    design_scale: Optional[float] = None,
                    fonts: Optional[FontFaceResolver] = None,
                    provider: Optional[TypographyTokenProvider] = None) -> ResolvedTextStyle:
    """Resolve a preset token, applying an optional slant override."""
    provider = provider or TypographyTokenProvider()
    spec = provider.spec(TextStyleToken(token))
    if slant is not None:
        spec = spec.with_slant(FontSlant(slant))
    effective = resolve_family(
        FontFamily(family) if family is not None else None,
        spec,
        FontFamily(default_family) if default_family is not None else None,
    )
    return compute_text_style(spec, effective, design_scale, fonts)
