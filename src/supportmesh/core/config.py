"""
Configuration management for supportmesh.

Support profiles are small YAML files that fix the overhang angle and the
tolerance used for "approximately zero" comparisons::

    support:
      name: "FDM default"
      support_angle: 30.0
      precision_factor: 1.0e-6
      dtype: float32
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from supportmesh.core.exceptions import ConfigurationError

#: Faces tilted more than this many degrees past vertical need support.
DEFAULT_SUPPORT_ANGLE = 30.0

#: Relative tolerance used when a mesh carries no explicit precision.
DEFAULT_PRECISION_FACTOR = 1e-6


class SupportConfig(BaseModel):
    """Support generation profile."""

    name: str = "default"
    support_angle: float = Field(default=DEFAULT_SUPPORT_ANGLE, gt=0.0, lt=90.0)
    precision: Optional[float] = Field(default=None, ge=0.0)
    precision_factor: float = Field(default=DEFAULT_PRECISION_FACTOR, ge=0.0)
    dtype: Literal["float32", "float64"] = "float32"

    @property
    def support_threshold(self) -> float:
        """Normal z-component above which a face needs no support."""
        return -math.sin(math.radians(self.support_angle))


def load_profile(path: str | Path) -> SupportConfig:
    """
    Load a single support profile from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        SupportConfig instance

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Profile file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse profile: {path}",
            details={"error": str(e)},
        )

    if not data or "support" not in data:
        raise ConfigurationError(
            f"Profile has no 'support' section: {path}",
            details={"keys": sorted(data) if isinstance(data, dict) else []},
        )

    section = dict(data["support"] or {})
    section.setdefault("name", path.stem)
    try:
        return SupportConfig(**section)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid support profile: {path}",
            details={"error": str(e)},
        )


@dataclass
class ConfigManager:
    """
    Central configuration manager for supportmesh.

    Loads support profiles from ``<config_dir>/profiles/*.yaml``.

    Example:
        >>> config = ConfigManager(config_dir=Path("config"))
        >>> profile = config.get_profile("fdm_strict")
    """

    config_dir: Path
    _profiles: dict[str, SupportConfig] = field(default_factory=dict, init=False)
    _loaded: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.config_dir = Path(self.config_dir)
        if not self.config_dir.exists():
            raise ConfigurationError(
                f"Configuration directory not found: {self.config_dir}"
            )

    def load(self) -> None:
        """Load all profiles from disk."""
        profiles_dir = self.config_dir / "profiles"
        self._profiles = {}
        if profiles_dir.exists():
            for config_file in sorted(profiles_dir.glob("*.yaml")):
                self._profiles[config_file.stem] = load_profile(config_file)
        self._loaded = True

    def get_profile(self, name: str) -> SupportConfig:
        """
        Get a support profile by name.

        Args:
            name: Profile name (file name without .yaml extension)

        Returns:
            SupportConfig instance

        Raises:
            ConfigurationError: If the profile is not found
        """
        if not self._loaded:
            self.load()

        if name not in self._profiles:
            raise ConfigurationError(
                f"Support profile not found: {name}",
                details={"available": list(self._profiles.keys())},
            )
        return self._profiles[name]

    def list_profiles(self) -> list[str]:
        """List available profile names."""
        if not self._loaded:
            self.load()
        return list(self._profiles.keys())
