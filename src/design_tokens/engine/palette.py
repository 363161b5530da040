"""Palette families keyed by tone.

A family holds two tone maps, one per scheme, with identical key sets. The
family never decides which map to use; that policy belongs to
``ColorSchemeResolver``. Families whose dark values are not designed yet are
flagged ``pending_dark`` and reuse the light map.
"""

import logging
from typing import Dict, List, Optional, Union

from .schema import (
    RGBA,
    TRANSPARENT,
    ColorScheme,
    PaletteFamilyDefinition,
    ToneMap,
)
from .hexcodec import parse
from .scheme import ColorSchemeResolver

logger = logging.getLogger(__name__)


class PaletteIntegrityError(LookupError):
    """A tone is missing from a family's light or dark map."""

    def __init__(self, family: str, tone: Optional[int]):
        self.family = family
        self.tone = tone
        super().__init__(f"Color family '{family}' misconfigured: missing tone {tone}")


class PaletteFamily:
    """Static, read-only tone table for one color family."""

    def __init__(self, name: str, light: ToneMap, dark: Optional[ToneMap] = None,
                 display_name: str = "", group: str = "",
                 single_tone: bool = False, strict: Optional[bool] = None):
        """Create a family from already-parsed tone maps.

        Args:
            name: Registry key of the family
            light: Tone to color map for the light scheme
            dark: Tone to color map for the dark scheme; None marks the
                family as pending dark values and reuses ``light``
            display_name: Human-readable name
            group: Grouping such as primary or support
            single_tone: Family exposes exactly one color
            strict: Raise on missing tones instead of returning the
                transparent placeholder (defaults to ``__debug__``)
        """
        self.name = name
        self.display_name = display_name or name.replace('_', ' ').title()
        self.group = group
        self.single_tone = single_tone
        self.pending_dark = dark is None
        self.strict = __debug__ if strict is None else strict
        self._light: Dict[int, RGBA] = dict(light)
        self._dark: Dict[int, RGBA] = dict(light) if dark is None else dict(dark)

    @classmethod
    def from_definition(cls, definition: PaletteFamilyDefinition,
                        strict: Optional[bool] = None) -> "PaletteFamily":
        light = {tone: parse(value) for tone, value in definition.light.items()}
        dark = None
        if definition.dark is not None:
            dark = {tone: parse(value) for tone, value in definition.dark.items()}
        return cls(
            name=definition.name,
            light=light,
            dark=dark,
            display_name=definition.display_name,
            group=definition.group,
            single_tone=definition.single_tone,
            strict=strict,
        )

    @property
    def tones(self) -> List[int]:
        """Tones in descending order (100 first)."""
        return sorted(self._light, reverse=True)

    @property
    def light(self) -> Dict[int, RGBA]:
        return dict(self._light)

    @property
    def dark(self) -> Dict[int, RGBA]:
        return dict(self._dark)

    @property
    def default_tone(self) -> int:
        return self.tones[0]

    def has_tone(self, tone: int) -> bool:
        return tone in self._light and tone in self._dark

    def resolve(self, tone: Optional[int], scheme: Union[ColorScheme, str],
                resolver: ColorSchemeResolver) -> RGBA:
        """Resolve ``tone`` for the caller's scheme.

        Single-tone families accept ``tone=None``. A tone absent from either
        map raises ``PaletteIntegrityError`` in strict mode; otherwise the
        problem is logged and the transparent placeholder is returned.
        """
        if tone is None and self.single_tone:
            tone = self.default_tone

        light = self._light.get(tone)
        dark = self._dark.get(tone)
        if light is None or dark is None:
            error = PaletteIntegrityError(self.name, tone)
            if self.strict:
                raise error
            logger.error(f"{error}; using transparent placeholder")
            return TRANSPARENT

        return resolver.pick(light, dark, scheme)

    def replace_dark(self, dark: ToneMap) -> "PaletteFamily":
        """Return a copy with designed dark values, clearing ``pending_dark``.

        Raises:
            ValueError: If the dark tones differ from the light tones
        """
        if set(dark) != set(self._light):
            missing = sorted(set(dark) ^ set(self._light))
            raise ValueError(
                f"Color family '{self.name}' misconfigured: tones {missing} missing from one scheme"
            )
        return PaletteFamily(
            name=self.name,
            light=self._light,
            dark=dark,
            display_name=self.display_name,
            group=self.group,
            single_tone=self.single_tone,
            strict=self.strict,
        )

    def __repr__(self) -> str:
        flag = ", pending_dark" if self.pending_dark else ""
        return f"PaletteFamily({self.name!r}, tones={self.tones}{flag})"
