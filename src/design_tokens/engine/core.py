"""Token engine facade.

This module provides the TokenEngine class that wires the theme-mode state,
scheme resolver, palette registry and font resolver together and exposes the
resolution operations used by rendering code.
"""

import random
import logging
from pathlib import Path
from typing import Dict, Optional, Any, List, Union

from .schema import RGBA, ColorRef, ColorScheme, FontFamily, FontSlant, ThemeMode
from .scheme import ColorSchemeResolver, ThemeModeState
from .registry import PaletteRegistry
from .contrast import DEFAULT_THRESHOLD, label_color
from .fonts import FontFaceResolver
from .text_style import ResolvedTextStyle, style_for_token
from .typography import TextStyleToken, TypographyTokenProvider
from .buttons import ButtonPalette, ButtonState, ButtonType, ButtonVariant, palette_spec, resolve_palette

logger = logging.getLogger(__name__)

SchemeLike = Union[ColorScheme, str]


class TokenEngine:
    """Resolves color and typography tokens for one theme context."""

    def __init__(self, theme_mode: Union[ThemeMode, str] = ThemeMode.SYSTEM,
                 font_family: Union[FontFamily, str] = FontFamily.SYSTEM,
                 design_scale: Optional[float] = None,
                 contrast_threshold: float = DEFAULT_THRESHOLD,
                 palette_dirs: Optional[List[Path]] = None,
                 strict_integrity: Optional[bool] = None,
                 registry: Optional[PaletteRegistry] = None,
                 fonts: Optional[FontFaceResolver] = None,
                 typography: Optional[TypographyTokenProvider] = None,
                 seed: Optional[int] = None):
        """Initialize the token engine.

        Args:
            theme_mode: Initial theme mode for this engine's state cell
            font_family: Ambient default font family
            design_scale: Design px to pt scale (None means 1.0)
            contrast_threshold: Default luminance threshold for labels
            palette_dirs: Extra directories with user palette files
            strict_integrity: Raise on missing tones instead of placeholder
            registry: Prebuilt palette registry
            fonts: Prebuilt font resolver
            typography: Token provider for text style presets
            seed: Seed for random color sampling
        """
        self.theme_state = ThemeModeState(theme_mode)
        self.schemes = ColorSchemeResolver(self.theme_state)
        self.registry = registry or PaletteRegistry(palette_dirs, strict=strict_integrity, seed=seed)
        self.fonts = fonts or FontFaceResolver()
        self.typography = typography or TypographyTokenProvider()
        self.font_family = FontFamily(font_family)
        self.design_scale = design_scale
        self.contrast_threshold = contrast_threshold

        self._style_cache: Dict[tuple, ResolvedTextStyle] = {}

        logger.debug(f"TokenEngine initialized with mode: {self.theme_state.get().value}")

    @classmethod
    def from_config(cls, config) -> 'TokenEngine':
        """Create a token engine from application config.

        Args:
            config: DesignTokensConfig instance
        """
        return cls(
            theme_mode=config.theme_mode,
            font_family=config.font_family,
            design_scale=config.design_scale,
            contrast_threshold=config.contrast_threshold,
            palette_dirs=config.get_palette_dirs(),
            strict_integrity=config.strict_integrity,
        )

    # Theme mode

    @property
    def theme_mode(self) -> ThemeMode:
        return self.theme_state.get()

    def set_theme_mode(self, mode: Union[ThemeMode, str]) -> ThemeMode:
        """Change the theme mode; returns the previous mode."""
        return self.theme_state.set(mode)

    def effective_scheme(self, view_scheme: SchemeLike) -> ColorScheme:
        return self.schemes.effective_scheme(view_scheme)

    # Colors

    def color(self, family: str, tone: Optional[int] = None,
              scheme: SchemeLike = ColorScheme.LIGHT) -> RGBA:
        """Resolve a palette color for the caller's ambient scheme.

        Raises:
            KeyError: If the family is not registered
            PaletteIntegrityError: If the tone is missing and the family is strict
        """
        return self.registry.get_family(family).resolve(tone, scheme, self.schemes)

    def resolve_ref(self, ref: ColorRef, scheme: SchemeLike = ColorScheme.LIGHT) -> RGBA:
        return self.color(ref.family, ref.tone, scheme)

    def hex(self, family: str, tone: Optional[int] = None,
            scheme: SchemeLike = ColorScheme.LIGHT, include_alpha: bool = False) -> str:
        return self.color(family, tone, scheme).to_hex(include_alpha=include_alpha)

    def label_color(self, background: Union[RGBA, str],
                    threshold: Optional[float] = None) -> RGBA:
        """Black or white label over ``background`` using the engine threshold."""
        if threshold is None:
            threshold = self.contrast_threshold
        return label_color(background, threshold)

    def random_color(self, scheme: SchemeLike = ColorScheme.LIGHT,
                     rng: Optional[random.Random] = None) -> RGBA:
        """Uniformly sample one tone across every registered family."""
        return self.registry.random_color(ColorScheme(scheme), self.schemes, rng)

    def button_palette(self, variant: Union[ButtonVariant, str],
                       type: Union[ButtonType, str] = ButtonType.DEFAULT,
                       state: Union[ButtonState, str] = ButtonState.NORMAL,
                       scheme: SchemeLike = ColorScheme.LIGHT) -> ButtonPalette:
        spec = palette_spec(variant, type, state)
        return resolve_palette(spec, self.resolve_ref, ColorScheme(scheme))

    # Typography

    def text_style(self, token: Union[TextStyleToken, str],
                   slant: Optional[Union[FontSlant, str]] = None,
                   family: Optional[Union[FontFamily, str]] = None,
                   design_scale: Optional[float] = None) -> ResolvedTextStyle:
        """Resolve a typography token into face and metrics.

        Family precedence is explicit ``family``, then the token's preferred
        family, then the engine's default family.
        """
        scale = design_scale if design_scale is not None else self.design_scale
        cache_key = (TextStyleToken(token), slant, family, scale, self.font_family)
        if cache_key in self._style_cache:
            return self._style_cache[cache_key]

        style = style_for_token(
            token,
            slant=slant,
            family=family,
            default_family=self.font_family,
            design_scale=scale,
            fonts=self.fonts,
            provider=self.typography,
        )
        self._style_cache[cache_key] = style
        return style

    def set_font_family(self, family: Union[FontFamily, str]) -> None:
        self.font_family = FontFamily(family)

    # Catalog

    def list_families(self) -> List[Dict[str, Any]]:
        return self.registry.list_families()

    def validate(self) -> List[str]:
        """Integrity issues of the loaded palettes (empty if valid)."""
        return self.registry.validate()

    def clear_cache(self) -> None:
        """Clear cached text styles and reload palettes."""
        self._style_cache.clear()
        self.registry.clear_cache()
        logger.debug("Token engine cache cleared")
