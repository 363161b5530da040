"""Tests for the palette registry."""

import json
import random
from collections import Counter

import pytest
import yaml

from design_tokens.engine import ColorScheme, PaletteRegistry, TRANSPARENT


def write_preset(directory, name, families, group=None):
    data = {"families": families}
    if group:
        data["group"] = group
    path = directory / f"{name}.yaml"
    path.write_text(yaml.dump(data), encoding="utf-8")
    return path


class TestBuiltinPresets:
    """Test the bundled palette presets."""

    def test_builtin_families_load(self, registry):
        """Test all bundled families are registered."""
        names = {info["name"] for info in registry.list_families()}
        assert {"dark_blue", "light_blue", "green", "white", "black", "hover_blue"} <= names
        assert len(names) == 17

    def test_groups(self, registry):
        """Test families are grouped by preset file."""
        assert set(registry.groups()) == {"primary", "secondary", "support"}
        assert {f.name for f in registry.families("primary")} == {
            "dark_blue", "light_blue", "dark_text_gray"
        }

    def test_builtin_is_consistent(self, registry):
        """Test bundled presets pass integrity validation."""
        assert registry.validate() == []

    def test_builtin_dark_pending(self, registry):
        """Test every bundled family still waits for dark values."""
        assert len(registry.pending_dark_families()) == 17

    def test_known_value(self, registry, resolver):
        """Test a documented brand value."""
        green = registry.get_family("green")
        assert green.resolve(100, ColorScheme.LIGHT, resolver).to_hex() == "#407A26"

    def test_unknown_family(self, registry):
        """Test unknown names raise KeyError."""
        with pytest.raises(KeyError):
            registry.get_family("chartreuse")
        assert not registry.family_exists("chartreuse")

    def test_family_info(self, registry):
        """Test detailed info for one family."""
        info = registry.get_family_info("white")
        assert info["single_tone"] is True
        assert info["light"] == {100: "#FFFFFF"}
        assert "error" in registry.get_family_info("chartreuse")


class TestUserPalettes:
    """Test loading user palette directories."""

    def test_user_yaml_overrides_builtin(self, tmp_path, resolver):
        """Test user families replace built-in ones of the same name."""
        write_preset(tmp_path, "custom", {
            "green": {"light": {100: "#000001"}, "dark": {100: "#000002"}},
        })
        registry = PaletteRegistry(extra_dirs=[tmp_path], strict=True)

        green = registry.get_family("green")
        assert not green.pending_dark
        assert green.resolve(100, ColorScheme.DARK, resolver).to_hex() == "#000002"
        info = {i["name"]: i for i in registry.list_families()}
        assert info["green"]["type"] == "user"
        assert info["dark_blue"]["type"] == "builtin"

    def test_user_json(self, tmp_path, resolver):
        """Test JSON presets with string tone keys."""
        data = {"group": "brand", "families": {
            "brand_red": {"light": {"100": "#C82D15"}, "dark": {"100": "#DE8173"}},
        }}
        (tmp_path / "brand.json").write_text(json.dumps(data), encoding="utf-8")
        registry = PaletteRegistry(extra_dirs=[tmp_path], strict=True)

        family = registry.get_family("brand_red")
        assert family.tones == [100]
        assert family.group == "brand"
        assert family.resolve(100, ColorScheme.LIGHT, resolver).to_hex() == "#C82D15"

    def test_misconfigured_family_reported(self, tmp_path, caplog):
        """Test a user family with mismatched tones is skipped and reported."""
        write_preset(tmp_path, "broken", {
            "broken": {"light": {100: "#000000", 50: "#777777"}, "dark": {100: "#FFFFFF"}},
        })
        registry = PaletteRegistry(extra_dirs=[tmp_path])

        assert not registry.family_exists("broken")
        assert registry.family_exists("green")
        issues = registry.validate()
        assert len(issues) == 1
        assert "broken" in issues[0]
        assert "Error loading palette file" in caplog.text

    def test_valid_families_load_beside_broken_file(self, tmp_path):
        """Test one broken user file does not hide other user files."""
        write_preset(tmp_path, "a_broken", {"broken": {"light": {100: "#000000"}}})
        write_preset(tmp_path, "b_good", {"good": {"light": {100: "#123456"}, "pending_dark": True}})
        registry = PaletteRegistry(extra_dirs=[tmp_path])
        assert registry.family_exists("good")
        assert len(registry.validate()) == 1

    def test_invalid_yaml_reported(self, tmp_path):
        """Test unreadable user YAML is reported by validate."""
        (tmp_path / "bad.yaml").write_text("families: [unclosed", encoding="utf-8")
        registry = PaletteRegistry(extra_dirs=[tmp_path])
        assert any("Invalid YAML" in issue for issue in registry.validate())

    def test_non_mapping_json_reported(self, tmp_path):
        """Test a JSON file that is not an object is reported."""
        (tmp_path / "list.json").write_text("[1, 2, 3]", encoding="utf-8")
        registry = PaletteRegistry(extra_dirs=[tmp_path])
        assert any("expected a mapping" in issue for issue in registry.validate())

    def test_broken_builtin_preset_raises(self, tmp_path):
        """Test packaged presets must be valid."""
        write_preset(tmp_path, "builtin", {"broken": {"light": {100: "#000000"}}})
        with pytest.raises(ValueError, match="broken"):
            PaletteRegistry(builtin_dir=tmp_path)

    def test_reload_clears_errors(self, tmp_path):
        """Test fixing a file and reloading clears its issue."""
        path = write_preset(tmp_path, "fixme", {"fixme": {"light": {100: "#000000"}}})
        registry = PaletteRegistry(extra_dirs=[tmp_path])
        assert registry.validate()
        path.unlink()
        registry.clear_cache()
        assert registry.validate() == []

    def test_missing_directory_ignored(self, tmp_path):
        """Test absent user directories are skipped."""
        registry = PaletteRegistry(extra_dirs=[tmp_path / "nope"])
        assert registry.family_exists("green")

    def test_clear_cache_reloads(self, tmp_path):
        """Test new preset files are picked up after a reload."""
        registry = PaletteRegistry(extra_dirs=[tmp_path])
        assert not registry.family_exists("late")
        write_preset(tmp_path, "late", {"late": {"light": {100: "#123456"}, "pending_dark": True}})
        registry.clear_cache()
        assert registry.family_exists("late")


class TestRandomColor:
    """Test uniform random sampling."""

    def test_never_transparent(self, registry, resolver):
        """Test samples always come from the palette."""
        palette = {c for f in registry.families() for c in f.light.values()}
        rng = random.Random(7)
        for _ in range(300):
            color = registry.random_color(ColorScheme.LIGHT, resolver, rng)
            assert color != TRANSPARENT
            assert color in palette

    def test_uniform_over_tones(self, tmp_path, resolver):
        """Test each (family, tone) pair is equally likely."""
        write_preset(tmp_path, "sample", {
            "wide": {"light": {100: "#111111", 50: "#222222", 10: "#333333"}, "pending_dark": True},
            "narrow": {"light": {100: "#444444"}, "pending_dark": True, "single_tone": True},
        })
        registry = PaletteRegistry(builtin_dir=tmp_path, strict=True)
        rng = random.Random(42)

        counts = Counter(
            registry.random_color(ColorScheme.LIGHT, resolver, rng).to_hex()
            for _ in range(4000)
        )
        assert set(counts) == {"#111111", "#222222", "#333333", "#444444"}
        for count in counts.values():
            assert 850 < count < 1150

    def test_empty_registry(self, tmp_path, resolver):
        """Test an empty registry yields the placeholder."""
        registry = PaletteRegistry(builtin_dir=tmp_path)
        assert registry.random_color(ColorScheme.LIGHT, resolver) == TRANSPARENT

    def test_seeded_registry_is_reproducible(self, resolver):
        """Test the registry's own generator honors its seed."""
        first = PaletteRegistry(seed=99)
        second = PaletteRegistry(seed=99)
        a = [first.random_color(ColorScheme.LIGHT, resolver) for _ in range(10)]
        b = [second.random_color(ColorScheme.LIGHT, resolver) for _ in range(10)]
        assert a == b


class TestContrastAudit:
    """Test palette-wide contrast warnings."""

    def test_warnings_are_strings(self, registry):
        """Test audit output format."""
        warnings = registry.contrast_warnings()
        assert all(w.startswith("Low contrast") for w in warnings)
