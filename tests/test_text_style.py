"""Tests for text style computation."""

import pytest

from design_tokens.engine import (
    FontFamily, FontSlant, TypographySpec, TextStyleToken, compute_text_style, style_for_token
)
from design_tokens.engine.text_style import resolve_family


class TestResolveFamily:
    """Test family precedence."""

    def setup_method(self):
        self.plain = TypographySpec(design_size_px=16)
        self.preferring = self.plain.with_family(FontFamily.OPEN_SANS)

    def test_explicit_wins(self):
        """Test an explicit family beats everything."""
        assert resolve_family(FontFamily.ROBOTO, self.preferring, FontFamily.HELVETICA_NEUE_LT_PRO) \
            == FontFamily.ROBOTO

    def test_preferred_beats_default(self):
        """Test the token's family beats the ambient default."""
        assert resolve_family(None, self.preferring, FontFamily.ROBOTO) == FontFamily.OPEN_SANS

    def test_default_used(self):
        """Test the ambient default applies when nothing else is set."""
        assert resolve_family(None, self.plain, FontFamily.ROBOTO) == FontFamily.ROBOTO

    def test_system_last(self):
        """Test system is the final fallback."""
        assert resolve_family(None, self.plain, None) == FontFamily.SYSTEM


class TestComputeTextStyle:
    """Test concrete metrics."""

    def test_metrics(self):
        """Test point size, kerning and spacing for a 25/30 spec."""
        spec = TypographySpec(design_size_px=25, line_height_px=30, letter_spacing_percent=0.75)
        style = compute_text_style(spec, FontFamily.ROBOTO, design_scale=2.0)
        assert style.point_size == 12.5
        assert style.kerning == pytest.approx(0.09375)
        assert style.line_spacing == pytest.approx(2.5)
        assert style.line_height_multiple == pytest.approx(1.2)
        assert style.face == "Roboto-Regular"

    def test_token_with_slant(self):
        """Test a slant override on a preset token."""
        style = style_for_token(TextStyleToken.H4_BOLD, slant=FontSlant.ITALIC, family=FontFamily.ROBOTO)
        assert style.face == "Roboto-BoldItalic"
        assert style.point_size == 25
        assert not style.needs_view_italic

    def test_token_system_italic(self):
        """Test system italic is delegated to the view."""
        style = style_for_token("body", slant="italic")
        assert style.font.is_system
        assert style.needs_view_italic

    def test_default_family(self):
        """Test the ambient default family is used for plain tokens."""
        style = style_for_token("button-m", default_family=FontFamily.OPEN_SANS)
        assert style.face == "OpenSans-Medium"
