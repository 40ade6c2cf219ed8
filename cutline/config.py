"""
cutline.config - YAML config loading, profile merging, validation.

Handles loading cutline.yaml from an editor directory, applying profile
defaults (snapping, overlap policy, export presets), and validating all
parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cutline.exceptions import ConfigError

CONFIG_FILENAME = "cutline.yaml"

# Output frame size per resolution preset; None keeps the source size.
RESOLUTION_PRESETS: dict[str, tuple[int, int] | None] = {
    "source": None,
    "1080p": (1920, 1080),
    "720p": (1280, 720),
    "480p": (640, 480),
}

QUALITY_CRF: dict[str, int] = {
    "high": 18,
    "medium": 23,
    "low": 28,
}

CONTAINERS = {"mp4", "mov"}
OVERLAP_POLICIES = {"allow", "reject"}


class SnapSettings(BaseModel):
    """Grid and edge snapping used when placing or moving clips."""

    enabled: bool = True
    grid_interval: float = Field(default=1.0, gt=0.0)
    threshold: float = Field(default=0.5, ge=0.0)


class ExportSettings(BaseModel):
    """Render options handed to the encoder along with the plan."""

    resolution: str = "source"
    quality: str = "high"
    container: str = "mp4"
    fps: float = Field(default=30.0, gt=0.0)

    @field_validator("resolution")
    @classmethod
    def validate_resolution(cls, v: str) -> str:
        if v not in RESOLUTION_PRESETS:
            raise ValueError(f"resolution must be one of: {set(RESOLUTION_PRESETS)}")
        return v

    @field_validator("quality")
    @classmethod
    def validate_quality(cls, v: str) -> str:
        if v not in QUALITY_CRF:
            raise ValueError(f"quality must be one of: {set(QUALITY_CRF)}")
        return v

    @field_validator("container")
    @classmethod
    def validate_container(cls, v: str) -> str:
        v = v.lower().lstrip(".")
        if v not in CONTAINERS:
            raise ValueError(f"container must be one of: {CONTAINERS}")
        return v

    @property
    def frame_size(self) -> tuple[int, int] | None:
        return RESOLUTION_PRESETS[self.resolution]

    @property
    def crf(self) -> int:
        return QUALITY_CRF[self.quality]


class EditorConfig(BaseModel):
    """Resolved configuration for an editing session."""

    editor_profile: str = "standard"
    snap: SnapSettings = Field(default_factory=SnapSettings)
    overlap_policy: str = "allow"
    min_display_duration: float = Field(default=60.0, ge=0.0)
    export: ExportSettings = Field(default_factory=ExportSettings)

    config_path: Path | None = None

    @field_validator("overlap_policy")
    @classmethod
    def validate_overlap_policy(cls, v: str) -> str:
        if v not in OVERLAP_POLICIES:
            raise ValueError(f"overlap_policy must be one of: {OVERLAP_POLICIES}")
        return v

    @field_validator("editor_profile")
    @classmethod
    def validate_profile(cls, v: str) -> str:
        if not v:
            raise ValueError("editor_profile must not be empty")
        return v


BUILTIN_PROFILES: dict[str, dict[str, Any]] = {
    "standard": {
        "snap": {"enabled": True, "grid_interval": 1.0, "threshold": 0.5},
        "overlap_policy": "allow",
        "min_display_duration": 60.0,
    },
    "precise": {
        "snap": {"enabled": True, "grid_interval": 0.1, "threshold": 0.05},
        "overlap_policy": "allow",
        "min_display_duration": 60.0,
    },
    "strict": {
        "snap": {"enabled": True, "grid_interval": 1.0, "threshold": 0.5},
        "overlap_policy": "reject",
        "min_display_duration": 60.0,
    },
}

_NESTED_KEYS = ("snap", "export")


def load_profile(name: str, profiles_dir: Path | None = None) -> dict[str, Any]:
    """Load a profile by name, checking custom profiles first."""
    if profiles_dir and profiles_dir.exists():
        profile_file = profiles_dir / f"{name}.yaml"
        if profile_file.exists():
            with open(profile_file, encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
    if name in BUILTIN_PROFILES:
        return _copy_profile(BUILTIN_PROFILES[name])
    raise ValueError(f"Unknown profile: {name}")


def _copy_profile(profile: dict[str, Any]) -> dict[str, Any]:
    copied = profile.copy()
    for key in _NESTED_KEYS:
        if isinstance(copied.get(key), dict):
            copied[key] = dict(copied[key])
        elif copied.get(key) is None:
            # An empty YAML table ("snap:") loads as None.
            copied.pop(key, None)
    return copied


def merge_config(project_config: dict[str, Any], profile: dict[str, Any]) -> dict[str, Any]:
    """Merge editor config with profile defaults. Editor config takes precedence."""
    merged = _copy_profile(profile)
    for key, value in project_config.items():
        if key in _NESTED_KEYS and isinstance(value, dict):
            if not isinstance(merged.get(key), dict):
                merged[key] = {}
            merged[key].update(value)
        elif value is not None:
            merged[key] = value
    return merged


def load_config(config_dir: Path) -> EditorConfig:
    """Load and validate configuration from a directory holding cutline.yaml."""
    config_file = config_dir / CONFIG_FILENAME
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found in {config_dir}")

    with open(config_file, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f) or {}

    profile_name = raw_config.get("editor_profile", "standard")
    profiles_dir = config_dir / "profiles"
    profile = load_profile(profile_name, profiles_dir if profiles_dir.exists() else None)

    if "inherits" in profile:
        parent = load_profile(profile.pop("inherits"), profiles_dir if profiles_dir.exists() else None)
        profile = merge_config(profile, parent)

    merged = merge_config(raw_config, profile)
    merged["config_path"] = config_file

    try:
        return EditorConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e


def create_default_config(profile: str = "standard") -> dict[str, Any]:
    """Create a default config for a new editor directory."""
    defaults: dict[str, Any] = {
        "editor_profile": profile,
        "export": ExportSettings().model_dump(),
    }
    if profile in BUILTIN_PROFILES:
        defaults = merge_config(defaults, BUILTIN_PROFILES[profile])
    return defaults


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
