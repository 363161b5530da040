"""Palette registry for built-in and user color families.

This module provides the PaletteRegistry class for discovering, loading, and
caching palette family definitions from the packaged YAML presets and from
optional user palette directories.
"""

import json
import random
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any, Iterable, Tuple
import logging

from .schema import RGBA, TRANSPARENT, ColorScheme, PaletteFamilyDefinition
from .palette import PaletteFamily
from .scheme import ColorSchemeResolver

logger = logging.getLogger(__name__)

BUILTIN_PRESETS_DIR = Path(__file__).parent.parent / "palette_presets"


class PaletteRegistry:
    """Registry of palette families, loaded once and read-only afterwards."""

    def __init__(self, extra_dirs: Optional[Iterable[Path]] = None,
                 strict: Optional[bool] = None,
                 builtin_dir: Optional[Path] = None,
                 seed: Optional[int] = None):
        """Initialize the palette registry.

        Args:
            extra_dirs: Additional directories with user palette files;
                families found there override built-in ones of the same name
            strict: Integrity policy handed to every family
            builtin_dir: Override for the packaged presets directory
            seed: Seed for the random-sample generator
        """
        self.builtin_dir = Path(builtin_dir) if builtin_dir else BUILTIN_PRESETS_DIR
        self.extra_dirs = [Path(d).expanduser() for d in (extra_dirs or [])]
        self.strict = strict

        self._families: Dict[str, PaletteFamily] = {}
        self._sources: Dict[str, str] = {}
        self._load_errors: List[str] = []
        self._providers: Optional[List[Tuple[str, int]]] = None
        self._rng = random.Random(seed)

        self._load_all()

    def _load_all(self) -> None:
        """Load every preset file; user directories are applied last."""
        self._families.clear()
        self._sources.clear()
        self._load_errors.clear()
        self._providers = None

        if not self.builtin_dir.exists():
            logger.warning(f"Built-in palette directory not found: {self.builtin_dir}")
        else:
            for preset in sorted(self.builtin_dir.glob("*.yaml")):
                self._register_file(preset, source='builtin')

        for directory in self.extra_dirs:
            if not directory.exists():
                logger.debug(f"User palette directory not found: {directory}")
                continue
            for preset in sorted(directory.glob("*.yaml")) + sorted(directory.glob("*.json")):
                self._register_file(preset, source='user')

    def _register_file(self, file_path: Path, source: str) -> None:
        """Register every family of one preset file.

        Broken user files are logged and recorded for ``validate`` instead of
        aborting the load; broken built-in presets still raise.
        """
        try:
            data = self._load_file(file_path)
            definitions = self._parse_preset_data(data, file_path)
        except ValueError as e:
            if source == 'builtin':
                raise
            logger.error(f"Error loading palette file {file_path}: {e}")
            self._load_errors.append(f"{file_path}: {e}")
            return

        for definition in definitions:
            if definition.name in self._families:
                logger.info(f"{source} palette '{definition.name}' overrides {self._sources[definition.name]}")
            self._families[definition.name] = PaletteFamily.from_definition(definition, strict=self.strict)
            self._sources[definition.name] = source
            logger.debug(f"Loaded {source} palette family: {definition.name}")

    def _load_file(self, file_path: Path) -> Dict[str, Any]:
        if file_path.suffix.lower() == '.json':
            return self._load_json_file(file_path)
        return self._load_yaml_file(file_path)

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML file safely."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {file_path}: {e}")
        except OSError as e:
            raise ValueError(f"Error reading {file_path}: {e}")

    def _load_json_file(self, file_path: Path) -> Dict[str, Any]:
        """Load JSON file safely."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}")
        except OSError as e:
            raise ValueError(f"Error reading {file_path}: {e}")
        if not isinstance(data, dict):
            return data
        # JSON object keys are always strings; tones are ints
        families = data.get('families')
        for family in (families.values() if isinstance(families, dict) else []):
            for scheme in ('light', 'dark'):
                if isinstance(family, dict) and isinstance(family.get(scheme), dict):
                    try:
                        family[scheme] = {int(k): v for k, v in family[scheme].items()}
                    except ValueError:
                        raise ValueError(f"Invalid JSON in {file_path}: tone keys must be integers")
        return data

    def _parse_preset_data(self, data: Dict[str, Any],
                           file_path: Path) -> List[PaletteFamilyDefinition]:
        """Parse raw preset data into family definitions.

        Raises:
            ValueError: If any family in the file is misconfigured
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid palette preset {file_path}: expected a mapping")
        group = data.get('group', file_path.stem)
        families = data.get('families') or {}
        if not isinstance(families, dict):
            raise ValueError(f"Invalid palette preset {file_path}: 'families' must be a mapping")

        definitions = []
        for name, body in families.items():
            try:
                body = dict(body or {})
                body.setdefault('name', name)
                body.setdefault('group', group)
                definitions.append(PaletteFamilyDefinition(**body))
            except Exception as e:
                raise ValueError(f"Invalid palette family '{name}' in {file_path}: {e}")
        return definitions

    # Lookup

    def family_exists(self, name: str) -> bool:
        return name in self._families

    def get_family(self, name: str) -> PaletteFamily:
        """Return a registered family.

        Raises:
            KeyError: If no family with that name is registered
        """
        try:
            return self._families[name]
        except KeyError:
            raise KeyError(f"Palette family '{name}' not found") from None

    def families(self, group: Optional[str] = None) -> List[PaletteFamily]:
        return [f for f in self._families.values() if group is None or f.group == group]

    def groups(self) -> List[str]:
        seen: List[str] = []
        for family in self._families.values():
            if family.group not in seen:
                seen.append(family.group)
        return seen

    def list_families(self) -> List[Dict[str, Any]]:
        """List all families with metadata."""
        return [
            {
                'name': family.name,
                'display_name': family.display_name,
                'group': family.group,
                'tones': family.tones,
                'single_tone': family.single_tone,
                'pending_dark': family.pending_dark,
                'type': self._sources.get(family.name, 'builtin'),
            }
            for family in self._families.values()
        ]

    def pending_dark_families(self) -> List[str]:
        """Families still waiting for designed dark values."""
        return [f.name for f in self._families.values() if f.pending_dark]

    # Random sampling

    def _build_providers(self) -> List[Tuple[str, int]]:
        providers = []
        for family in self._families.values():
            for tone in family.tones:
                if family.has_tone(tone):
                    providers.append((family.name, tone))
        logger.debug(f"Built {len(providers)} random-sample providers")
        return providers

    def random_color(self, scheme: ColorScheme, resolver: ColorSchemeResolver,
                     rng: Optional[random.Random] = None) -> RGBA:
        """Uniform sample over every (family, tone) pair.

        The flat provider list is built once; each call is a single index.
        """
        if self._providers is None:
            self._providers = self._build_providers()
        if not self._providers:
            return TRANSPARENT
        rng = rng or self._rng
        name, tone = self._providers[rng.randrange(len(self._providers))]
        return self._families[name].resolve(tone, scheme, resolver)

    # Validation

    def validate(self) -> List[str]:
        """Validate loaded families and return integrity issues (empty if valid).

        Preset files that failed to load are reported first.
        """
        issues = list(self._load_errors)
        for family in self._families.values():
            light_tones, dark_tones = set(family.light), set(family.dark)
            for tone in sorted(light_tones ^ dark_tones, reverse=True):
                issues.append(f"Color family '{family.name}' misconfigured: missing tone {tone}")
        return issues

    def contrast_warnings(self, threshold: float = 0.57, level: str = 'AA') -> List[str]:
        """Label-contrast warnings for every tone of every family."""
        from .contrast import audit_family_contrast

        warnings = []
        for family in self._families.values():
            warnings.extend(audit_family_contrast(family, threshold, level))
        return warnings

    def clear_cache(self) -> None:
        """Reload every preset file."""
        self._load_all()

    def get_family_info(self, name: str) -> Dict[str, Any]:
        try:
            family = self.get_family(name)
            return {
                'name': family.name,
                'display_name': family.display_name,
                'group': family.group,
                'single_tone': family.single_tone,
                'pending_dark': family.pending_dark,
                'type': self._sources.get(name, 'builtin'),
                'light': {tone: c.to_hex() for tone, c in family.light.items()},
                'dark': {tone: c.to_hex() for tone, c in family.dark.items()},
            }
        except KeyError as e:
            return {'name': name, 'error': str(e)}
