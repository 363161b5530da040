"""Button color tokens.

Palettes are looked up by the tagged triple ``(variant, type, state)``.
``loading`` shares the ``disabled`` visuals, alternative buttons reuse the
primary/default palettes except in the normal state, and any triple without
an entry (alternative text links do not exist in the design) falls back to
``FALLBACK_KEY``.
"""

import logging
from enum import Enum
from typing import Dict, NamedTuple, Union

from pydantic import BaseModel, ConfigDict

from .schema import RGBA, ColorRef, ColorScheme

logger = logging.getLogger(__name__)


class ButtonVariant(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ALTERNATIVE = "alternative"


class ButtonType(str, Enum):
    DEFAULT = "default"
    TEXT_LINK = "text_link"


class ButtonState(str, Enum):
    NORMAL = "normal"
    HIGHLIGHTED = "highlighted"
    DISABLED = "disabled"
    LOADING = "loading"
    CONFIRMED = "confirmed"


class ButtonKey(NamedTuple):
    variant: ButtonVariant
    type: ButtonType
    state: ButtonState


class ButtonPaletteSpec(BaseModel):
    """Color references for one button appearance"""

    model_config = ConfigDict(frozen=True)

    background: ColorRef
    border: ColorRef
    selection: ColorRef
    underline: bool = False


class ButtonPalette(BaseModel):
    """Resolved button colors for a scheme"""

    model_config = ConfigDict(frozen=True)

    background: RGBA
    border: RGBA
    selection: RGBA
    underline: bool = False


DARK_BLUE = ColorRef(family="dark_blue", tone=100)
LIGHT_BLUE = ColorRef(family="light_blue", tone=100)
HOVER_BLUE = ColorRef(family="hover_blue")
GREEN = ColorRef(family="green", tone=100)
DISABLED_GRAY = ColorRef(family="dark_text_gray", tone=60)
TEXT_GRAY = ColorRef(family="text_gray", tone=60)
WHITE = ColorRef(family="white")


def _filled(fill: ColorRef, label: ColorRef = WHITE) -> ButtonPaletteSpec:
    return ButtonPaletteSpec(background=fill, border=fill, selection=label)


def _outlined(accent: ColorRef) -> ButtonPaletteSpec:
    return ButtonPaletteSpec(background=WHITE, border=accent, selection=accent)


def _link(accent: ColorRef, underline: bool) -> ButtonPaletteSpec:
    return ButtonPaletteSpec(background=WHITE, border=WHITE, selection=accent, underline=underline)


_P, _S, _A = ButtonVariant.PRIMARY, ButtonVariant.SECONDARY, ButtonVariant.ALTERNATIVE
_DEF, _LINK = ButtonType.DEFAULT, ButtonType.TEXT_LINK
_N, _H, _D, _L, _C = (ButtonState.NORMAL, ButtonState.HIGHLIGHTED, ButtonState.DISABLED,
                      ButtonState.LOADING, ButtonState.CONFIRMED)

BUTTON_PALETTES: Dict[ButtonKey, ButtonPaletteSpec] = {
    ButtonKey(_P, _DEF, _N): _filled(DARK_BLUE),
    ButtonKey(_P, _DEF, _H): _filled(HOVER_BLUE),
    ButtonKey(_P, _DEF, _D): _filled(DISABLED_GRAY),
    ButtonKey(_P, _DEF, _L): _filled(DISABLED_GRAY),
    ButtonKey(_P, _DEF, _C): _filled(GREEN),

    ButtonKey(_P, _LINK, _N): _link(LIGHT_BLUE, underline=True),
    ButtonKey(_P, _LINK, _H): _link(HOVER_BLUE, underline=True),
    ButtonKey(_P, _LINK, _D): _link(TEXT_GRAY, underline=True),
    ButtonKey(_P, _LINK, _L): _link(TEXT_GRAY, underline=True),
    ButtonKey(_P, _LINK, _C): _link(GREEN, underline=True),

    ButtonKey(_S, _DEF, _N): _outlined(DARK_BLUE),
    ButtonKey(_S, _DEF, _H): _outlined(HOVER_BLUE),
    ButtonKey(_S, _DEF, _D): _outlined(TEXT_GRAY),
    ButtonKey(_S, _DEF, _L): _outlined(TEXT_GRAY),
    ButtonKey(_S, _DEF, _C): _outlined(GREEN),

    ButtonKey(_S, _LINK, _N): _link(DARK_BLUE, underline=False),
    ButtonKey(_S, _LINK, _H): _link(HOVER_BLUE, underline=False),
    ButtonKey(_S, _LINK, _D): _link(TEXT_GRAY, underline=False),
    ButtonKey(_S, _LINK, _L): _link(TEXT_GRAY, underline=False),
    ButtonKey(_S, _LINK, _C): _link(GREEN, underline=False),

    ButtonKey(_A, _DEF, _N): _filled(LIGHT_BLUE),
    ButtonKey(_A, _DEF, _H): _filled(HOVER_BLUE),
    ButtonKey(_A, _DEF, _D): _filled(DISABLED_GRAY),
    ButtonKey(_A, _DEF, _L): _filled(DISABLED_GRAY),
    ButtonKey(_A, _DEF, _C): _filled(GREEN),
}

FALLBACK_KEY = ButtonKey(_P, _DEF, _N)


def palette_spec(variant: Union[ButtonVariant, str], type: Union[ButtonType, str],
                 state: Union[ButtonState, str]) -> ButtonPaletteSpec:
    """Look up the palette spec for a triple, using the documented fallback."""
    key = ButtonKey(ButtonVariant(variant), ButtonType(type), ButtonState(state))
    spec = BUTTON_PALETTES.get(key)
    if spec is None:
        logger.debug(f"No button palette for {key}; using {FALLBACK_KEY}")
        spec = BUTTON_PALETTES[FALLBACK_KEY]
    return spec


def resolve_palette(spec: ButtonPaletteSpec, resolve_ref, scheme: ColorScheme) -> ButtonPalette:
    """Resolve every reference of ``spec`` with ``resolve_ref(ref, scheme)``."""
    return ButtonPalette(
        background=resolve_ref(spec.background, scheme),
        border=resolve_ref(spec.border, scheme),
        selection=resolve_ref(spec.selection, scheme),
        underline=spec.underline,
    )
