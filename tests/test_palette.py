"""Tests for palette families."""

import logging

import pytest

from design_tokens.engine import (
    ColorScheme, ThemeMode, PaletteFamily, PaletteIntegrityError,
    PaletteFamilyDefinition, TRANSPARENT, parse
)


def tones(*pairs):
    return {tone: parse(value) for tone, value in pairs}


class TestPaletteFamily:
    """Test tone resolution on a family."""

    def setup_method(self):
        self.family = PaletteFamily(
            "brand",
            light=tones((100, "#003766"), (50, "#7F9AB2")),
            dark=tones((100, "#E6EBF0"), (50, "#335F85")),
            strict=True,
        )

    def test_resolve_light(self, resolver):
        """Test the light map is used for a light ambient scheme."""
        assert self.family.resolve(100, ColorScheme.LIGHT, resolver).to_hex() == "#003766"

    def test_resolve_dark(self, resolver):
        """Test the dark map is used for a dark ambient scheme."""
        assert self.family.resolve(100, ColorScheme.DARK, resolver).to_hex() == "#E6EBF0"

    def test_resolve_honors_theme_mode(self, resolver):
        """Test the mode override beats the ambient scheme."""
        resolver.set_mode(ThemeMode.DARK)
        assert self.family.resolve(50, ColorScheme.LIGHT, resolver).to_hex() == "#335F85"
        resolver.set_mode(ThemeMode.LIGHT)
        assert self.family.resolve(50, ColorScheme.DARK, resolver).to_hex() == "#7F9AB2"

    def test_tones_descending(self):
        """Test tone listing order."""
        assert self.family.tones == [100, 50]
        assert self.family.default_tone == 100

    def test_not_pending_with_dark_values(self):
        """Test a family with dark values is not pending."""
        assert not self.family.pending_dark

    def test_missing_tone_raises_when_strict(self, resolver):
        """Test strict families raise on unknown tones."""
        with pytest.raises(PaletteIntegrityError) as exc_info:
            self.family.resolve(70, ColorScheme.LIGHT, resolver)
        assert exc_info.value.family == "brand"
        assert exc_info.value.tone == 70
        assert "misconfigured" in str(exc_info.value)

    def test_integrity_error_is_lookup_error(self):
        """Test the error hierarchy."""
        assert issubclass(PaletteIntegrityError, LookupError)

    def test_missing_tone_placeholder_when_lenient(self, resolver, caplog):
        """Test lenient families log and return the placeholder."""
        family = PaletteFamily("brand", light=tones((100, "#003766")), strict=False)
        with caplog.at_level(logging.ERROR):
            result = family.resolve(70, ColorScheme.LIGHT, resolver)
        assert result == TRANSPARENT
        assert "missing tone 70" in caplog.text

    def test_tone_missing_from_one_map(self, resolver):
        """Test a tone known to only one scheme is an integrity failure."""
        family = PaletteFamily(
            "broken",
            light=tones((100, "#003766"), (50, "#7F9AB2")),
            dark=tones((100, "#E6EBF0")),
            strict=True,
        )
        assert not family.has_tone(50)
        with pytest.raises(PaletteIntegrityError):
            family.resolve(50, ColorScheme.DARK, resolver)


class TestPendingDark:
    """Test families without designed dark values."""

    def test_pending_dark_reuses_light(self, resolver):
        """Test dark resolution falls back to the light values."""
        family = PaletteFamily("green", light=tones((100, "#407A26")))
        assert family.pending_dark
        assert family.resolve(100, ColorScheme.DARK, resolver).to_hex() == "#407A26"

    def test_replace_dark(self, resolver):
        """Test supplying dark values clears the pending flag."""
        family = PaletteFamily("green", light=tones((100, "#407A26")))
        designed = family.replace_dark(tones((100, "#8CAF7D")))
        assert not designed.pending_dark
        assert designed.resolve(100, ColorScheme.DARK, resolver).to_hex() == "#8CAF7D"
        assert family.pending_dark

    def test_replace_dark_requires_same_tones(self):
        """Test mismatched dark tones are rejected."""
        family = PaletteFamily("green", light=tones((100, "#407A26")))
        with pytest.raises(ValueError):
            family.replace_dark(tones((90, "#8CAF7D")))


class TestSingleTone:
    """Test single-tone families."""

    def test_resolve_without_tone(self, resolver):
        """Test the only tone is used when none is given."""
        family = PaletteFamily("white", light=tones((100, "#FFFFFF")), single_tone=True)
        assert family.resolve(None, ColorScheme.LIGHT, resolver).to_hex() == "#FFFFFF"

    def test_multi_tone_requires_tone(self, resolver):
        """Test a multi-tone family rejects a missing tone."""
        family = PaletteFamily("brand", light=tones((100, "#003766"), (50, "#7F9AB2")), strict=True)
        with pytest.raises(PaletteIntegrityError):
            family.resolve(None, ColorScheme.LIGHT, resolver)


class TestPaletteFamilyDefinition:
    """Test validation of declared families."""

    def test_valid_definition(self):
        """Test a consistent definition."""
        definition = PaletteFamilyDefinition(
            name="dark_blue",
            light={100: "#003766"},
            dark={100: "#E6EBF0"},
        )
        assert definition.display_name == "Dark Blue"

    def test_mismatched_tones_rejected(self):
        """Test light and dark must declare the same tones."""
        with pytest.raises(ValueError, match="misconfigured"):
            PaletteFamilyDefinition(
                name="broken",
                light={100: "#003766", 50: "#7F9AB2"},
                dark={100: "#E6EBF0"},
            )

    def test_missing_dark_requires_pending_flag(self):
        """Test absent dark values must be declared pending."""
        with pytest.raises(ValueError, match="pending_dark"):
            PaletteFamilyDefinition(name="broken", light={100: "#003766"})

    def test_dark_and_pending_conflict(self):
        """Test dark values and the pending flag are exclusive."""
        with pytest.raises(ValueError):
            PaletteFamilyDefinition(
                name="broken",
                light={100: "#003766"},
                dark={100: "#E6EBF0"},
                pending_dark=True,
            )

    def test_bad_hex_rejected(self):
        """Test unparsable hex values fail validation."""
        with pytest.raises(ValueError):
            PaletteFamilyDefinition(name="broken", light={100: "#XYZ"}, pending_dark=True)

    def test_single_tone_needs_one_tone(self):
        """Test single-tone families declare exactly one tone."""
        with pytest.raises(ValueError):
            PaletteFamilyDefinition(
                name="broken",
                light={100: "#FFFFFF", 50: "#EEEEEE"},
                pending_dark=True,
                single_tone=True,
            )
