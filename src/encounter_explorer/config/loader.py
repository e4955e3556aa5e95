"""
Analysis settings from YAML.

A base file such as ``config/default.yaml`` may be combined with a named
profile from ``config/profiles/<name>.yaml``. The profile only lists what
it changes: nested sections are merged key by key, while lists (group
keys, predicates, category orders) are replaced whole. The merged mapping
is validated as an ``AnalysisConfig``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from encounter_explorer.config.models import AnalysisConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Reads base files and profiles relative to one directory."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Args:
            base_path: Directory holding ``config/profiles``; relative
                config paths resolve against it (default: cwd)
        """
        self._base_path = Path(base_path) if base_path else Path(".")

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> AnalysisConfig:
        """
        Read a base file, apply an optional profile and validate.

        Args:
            config_path: Base YAML file
            profile: Profile name, e.g. ``"readmissions"``

        Returns:
            AnalysisConfig

        Raises:
            FileNotFoundError: If the base file or the profile is missing
            ValueError: If a file's top level is not a mapping
            pydantic.ValidationError: If a setting is invalid
        """
        path = self._resolve_path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        settings = self._load_yaml(path)

        if profile:
            settings = self._merge_configs(settings, self._load_profile(profile))
            logger.debug(f"Applied profile '{profile}' to {path}")

        return AnalysisConfig.model_validate(settings)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> AnalysisConfig:
        return AnalysisConfig.model_validate(config_dict)

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self._base_path / p

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config root must be a mapping: {path}")
        return loaded

    def _load_profile(self, profile: str) -> Dict[str, Any]:
        profile_path = self._base_path / "config" / "profiles" / f"{profile}.yaml"
        if not profile_path.exists():
            raise FileNotFoundError(f"Profile not found: {profile}")
        return self._load_yaml(profile_path)

    def _merge_configs(
        self,
        base: Dict[str, Any],
        overlay: Dict[str, Any],
    ) -> Dict[str, Any]:
        # sections merge recursively; any other value in overlay wins
        result = dict(base)
        for key, value in overlay.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        return result


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
) -> AnalysisConfig:
    """Shorthand for ``ConfigLoader(base_path).load(config_path, profile)``."""
    return ConfigLoader(base_path=base_path).load(config_path, profile)
