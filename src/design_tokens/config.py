"""Configuration management for the design-token engine."""

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import List, Optional
import yaml

from .engine.schema import FontFamily, ThemeMode

logger = logging.getLogger(__name__)


@dataclass
class DesignTokensConfig:
    """Global configuration model for token resolution."""

    # Scheme resolution
    theme_mode: ThemeMode = ThemeMode.SYSTEM

    # Typography
    font_family: FontFamily = FontFamily.SYSTEM
    design_scale: Optional[float] = None  # px per pt; None means 1.0

    # Contrast
    contrast_threshold: float = 0.57

    # Palettes
    strict_integrity: bool = __debug__  # raise on missing tones instead of placeholder
    palette_dirs: List[str] = field(default_factory=list)

    # File paths
    data_dir: str = "~/.design_tokens"

    def __post_init__(self):
        """Coerce loose values to their types; bad values fall back to defaults."""
        self.data_dir = os.path.expanduser(self.data_dir)
        try:
            self.contrast_threshold = float(self.contrast_threshold)
        except (TypeError, ValueError):
            logger.warning(f"Invalid contrast_threshold {self.contrast_threshold!r}, using 0.57")
            self.contrast_threshold = 0.57
        if self.design_scale is not None:
            try:
                self.design_scale = float(self.design_scale)
            except (TypeError, ValueError):
                logger.warning(f"Invalid design_scale {self.design_scale!r}, using none")
                self.design_scale = None
        self.strict_integrity = bool(self.strict_integrity)
        if not isinstance(self.palette_dirs, list):
            logger.warning(f"Invalid palette_dirs {self.palette_dirs!r}, ignoring")
            self.palette_dirs = []
        try:
            self.theme_mode = ThemeMode(self.theme_mode)
        except ValueError:
            logger.warning(f"Unknown theme_mode {self.theme_mode!r}, using system")
            self.theme_mode = ThemeMode.SYSTEM
        try:
            self.font_family = FontFamily(self.font_family)
        except ValueError:
            logger.warning(f"Unknown font_family {self.font_family!r}, using system")
            self.font_family = FontFamily.SYSTEM

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "theme_mode": self.theme_mode.value,
            "font_family": self.font_family.value,
            "design_scale": self.design_scale,
            "contrast_threshold": self.contrast_threshold,
            "strict_integrity": self.strict_integrity,
            "palette_dirs": list(self.palette_dirs),
            "data_dir": self.data_dir,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "DesignTokensConfig":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_palette_dirs(self) -> List[Path]:
        """User palette directories, including ``<data_dir>/palettes``."""
        dirs = [Path(self.data_dir) / "palettes"]
        dirs.extend(Path(os.path.expanduser(d)) for d in self.palette_dirs)
        return dirs


class Config:
    """Configuration manager for the token engine."""

    _instance: Optional[DesignTokensConfig] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> DesignTokensConfig:
        """Load configuration from file or fall back to defaults."""
        if cls._instance is not None and config_path is None:
            return cls._instance

        config = DesignTokensConfig()

        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    config = DesignTokensConfig.from_yaml(f.read())
                logger.debug(f"Loaded configuration from {config_path}")
            except (OSError, yaml.YAMLError, TypeError, AttributeError, ValueError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")
        else:
            logger.debug(f"No configuration at {config_path}; using defaults")

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: DesignTokensConfig, config_path: Optional[Path] = None) -> Path:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write(config.to_yaml())
        logger.info(f"Configuration saved to {config_path}")
        return config_path

    @classmethod
    def get(cls) -> DesignTokensConfig:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> DesignTokensConfig:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)


def get_config() -> DesignTokensConfig:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> DesignTokensConfig:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: DesignTokensConfig, config_path: Optional[Path] = None) -> Path:
    """Save configuration to file."""
    return Config.save(config, config_path)
