"""Font face resolution with slant support.

System family
    A generic system face is returned; italic can only be applied by the
    presentation layer, so ``needs_view_italic`` mirrors the requested slant.

Custom families (Helvetica Neue LT Pro, Open Sans, Roboto)
    The (family, weight) pair is looked up in the bundled asset table. An
    italic face listed in the table is trusted to exist and is returned with
    ``needs_view_italic=False``. A weight whose entry lists no italic face
    falls back to the upright face and asks the view to slant it. A weight
    with no entry at all resolves to ``DEFAULT_FACE``.

Resolution never raises: missing table data degrades to a safe default face.
"""

import yaml
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from .schema import FamilyAssetEntry, FontFamily, FontSlant, FontWeight, TypographySpec

logger = logging.getLogger(__name__)

FONT_ASSETS_FILE = Path(__file__).parent.parent / "font_assets" / "families.yaml"
DEFAULT_FACE = "Roboto-Regular"
SYSTEM_FACE = "system-ui"

AssetTable = Dict[FontFamily, Dict[FontWeight, FamilyAssetEntry]]


class ResolvedFont(BaseModel):
    """Face chosen for a spec, plus whether the view must slant it."""

    model_config = ConfigDict(frozen=True)

    face: str
    family: FontFamily
    weight: FontWeight
    point_size: float
    is_system: bool = False
    has_italic_face: bool = False
    needs_view_italic: bool = False


def _parse_asset_table(data: Dict) -> Tuple[AssetTable, str]:
    table: AssetTable = {}
    for family_name, weights in (data.get('families') or {}).items():
        family = FontFamily(family_name)
        table[family] = {
            FontWeight(weight): FamilyAssetEntry(**entry)
            for weight, entry in (weights or {}).items()
        }
    return table, data.get('default_face', DEFAULT_FACE)


@lru_cache(maxsize=4)
def load_asset_table(path: Path = FONT_ASSETS_FILE) -> Tuple[AssetTable, str]:
    """Load the bundled asset table once per path.

    Returns:
        Tuple of (table, default face id)

    Raises:
        ValueError: If the asset file cannot be read or is malformed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        table, default_face = _parse_asset_table(data)
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Error reading font assets {path}: {e}")
    except Exception as e:
        raise ValueError(f"Invalid font asset table {path}: {e}")
    logger.debug(f"Loaded font assets for {len(table)} families from {path}")
    return table, default_face


class FontFaceResolver:
    """Resolves face identifiers from the static (family, weight) table."""

    def __init__(self, assets: Optional[AssetTable] = None,
                 default_face: Optional[str] = None):
        """Initialize the resolver.

        Args:
            assets: Asset table override; the bundled table is used when None
            default_face: Face used when a weight has no table entry
        """
        if assets is None:
            assets, bundled_default = load_asset_table()
            default_face = default_face or bundled_default
        self._assets = assets
        self.default_face = default_face or DEFAULT_FACE

    def entry(self, family: FontFamily, weight: FontWeight) -> Optional[FamilyAssetEntry]:
        return self._assets.get(FontFamily(family), {}).get(FontWeight(weight))

    def face_name(self, family: Union[FontFamily, str], weight: Union[FontWeight, str],
                  slant: Union[FontSlant, str]) -> Tuple[str, bool]:
        """Face identifier for a family/weight/slant and whether it is a real italic face.

        The system family returns the generic system face and False, since
        system text is not rendered from a named face.
        """
        family, weight, slant = FontFamily(family), FontWeight(weight), FontSlant(slant)
        if family.is_system:
            return SYSTEM_FACE, False

        entry = self.entry(family, weight)
        if entry is None:
            logger.warning(f"No font asset for {family.value}/{weight.value}; using {self.default_face}")
            return self.default_face, False

        if slant == FontSlant.ITALIC and entry.italic:
            return entry.italic, True
        return entry.upright, False

    def resolve(self, spec: TypographySpec, family: Union[FontFamily, str] = FontFamily.SYSTEM,
                base_point_size: float = 0.0) -> ResolvedFont:
        """Resolve the face for ``spec`` rendered in ``family``."""
        family = FontFamily(family)
        italic_requested = spec.slant == FontSlant.ITALIC

        if family.is_system:
            return ResolvedFont(
                face=SYSTEM_FACE,
                family=family,
                weight=spec.weight,
                point_size=base_point_size,
                is_system=True,
                needs_view_italic=italic_requested,
            )

        name, has_italic = self.face_name(family, spec.weight, spec.slant)
        entry = self.entry(family, spec.weight)
        # Only an upright face from a real table entry needs a synthetic slant
        needs_view_italic = italic_requested and not has_italic and entry is not None
        return ResolvedFont(
            face=name,
            family=family,
            weight=spec.weight,
            point_size=base_point_size,
            has_italic_face=has_italic,
            needs_view_italic=needs_view_italic,
        )

    def coverage(self) -> Dict[str, Dict[str, bool]]:
        """Per family, which weights have an entry in the table."""
        return {
            family.value: {w.value: self.entry(family, w) is not None for w in FontWeight}
            for family in FontFamily if not family.is_system
        }
