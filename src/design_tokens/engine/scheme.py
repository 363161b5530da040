"""Scheme resolution for light/dark color variants.

The theme mode is held in a ``ThemeModeState`` cell instead of a bare global
so that every engine (and every test) can carry its own value. A process-wide
default cell exists for callers that want the classic single-setting app
behaviour.
"""

import threading
import logging
from typing import Optional, Union, TypeVar

from .schema import ColorScheme, ThemeMode

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ThemeModeState:
    """Lock-guarded holder for the current theme mode."""

    def __init__(self, mode: Union[ThemeMode, str] = ThemeMode.SYSTEM):
        self._lock = threading.Lock()
        self._mode = ThemeMode(mode)

    def get(self) -> ThemeMode:
        with self._lock:
            return self._mode

    def set(self, mode: Union[ThemeMode, str]) -> ThemeMode:
        """Replace the current mode and return the previous one.

        Raises:
            ValueError: If ``mode`` is not a known theme mode
        """
        new_mode = ThemeMode(mode)
        with self._lock:
            previous, self._mode = self._mode, new_mode
        if previous != new_mode:
            logger.debug(f"Theme mode changed: {previous.value} -> {new_mode.value}")
        return previous

    def reset(self) -> None:
        self.set(ThemeMode.SYSTEM)

    def __repr__(self) -> str:
        return f"ThemeModeState({self.get().value!r})"


# Process-wide default, initialised to system
default_theme_state = ThemeModeState()


class ThemeModeSchemeProvider:
    """Default provider that bridges a ThemeModeState to scheme resolution."""

    def __init__(self, state: Optional[ThemeModeState] = None):
        self.state = state if state is not None else default_theme_state

    def effective_scheme(self, view_scheme: ColorScheme) -> ColorScheme:
        # Single read so one resolution never observes two modes
        return self.state.get().resolve(view_scheme)


class ColorSchemeResolver:
    """Picks light or dark variants honoring the theme mode override.

    The effective scheme comes from a pluggable provider: any object with an
    ``effective_scheme(view_scheme)`` method. By default that is a
    ``ThemeModeSchemeProvider`` over the given state.
    """

    def __init__(self, state: Optional[ThemeModeState] = None, provider=None):
        self.state = state if state is not None else default_theme_state
        self._default_provider = ThemeModeSchemeProvider(self.state)
        self._provider = provider if provider is not None else self._default_provider

    @property
    def mode(self) -> ThemeMode:
        return self.state.get()

    def set_mode(self, mode: Union[ThemeMode, str]) -> ThemeMode:
        return self.state.set(mode)

    def use(self, provider) -> None:
        """Swap the scheme provider, e.g. for tests or custom policies."""
        self._provider = provider

    def use_default_provider(self) -> None:
        self._provider = self._default_provider

    def effective_scheme(self, view_scheme: Union[ColorScheme, str]) -> ColorScheme:
        """Scheme used for token resolution given the caller's ambient scheme."""
        return ColorScheme(self._provider.effective_scheme(ColorScheme(view_scheme)))

    def pick(self, light: T, dark: T, view_scheme: Union[ColorScheme, str]) -> T:
        """Return ``dark`` iff the effective scheme is dark, else ``light``."""
        if self.effective_scheme(view_scheme) == ColorScheme.DARK:
            return dark
        return light
