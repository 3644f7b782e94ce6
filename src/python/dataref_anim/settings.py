# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Editor configuration, read from TOML."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict

try:
    import tomllib
except ImportError:
    import tomli as tomllib

SECTION = "dataref_anim"
PACKAGE_LOGGER = "dataref_anim"


@dataclass
class AnimationSettings:
    #: printf-style format for driver values shown next to the preview slider.
    preview_format: str = "%.6g"
    #: Range given to newly inserted hide/show rules.
    hide_show_from: str = "0.0"
    hide_show_to: str = "1.0"
    #: Driver values of the two keyframes a new animation starts with.
    first_frame_value: str = "0.0"
    last_frame_value: str = "1.0"
    #: Keyframes can only be deleted while there are more than this many.
    min_deletable_frames: int = 2
    log_level: str = "INFO"

    def __post_init__(self):
        if self.min_deletable_frames < 2:
            raise ValueError("min_deletable_frames must be at least 2; a channel needs two keyframes")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log_level: {self.log_level}")

    def format_value(self, value: float) -> str:
        return self.preview_format % value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationSettings":
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")
        kwargs = {}
        for name, value in data.items():
            kwargs[name] = int(value) if name == "min_deletable_frames" else str(value)
        return cls(**kwargs)


def load_settings(path: str | Path) -> AnimationSettings:
    """Load settings from *path*.

    A ``pyproject.toml`` is read from its ``[tool.dataref_anim]`` table (defaults
    if absent); any other file is read as a flat table of settings.
    """
    path = Path(path)
    with open(path, "rb") as f:
        data = tomllib.load(f)
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get(SECTION, {})
    return AnimationSettings.from_dict(data)


def configure_logging(settings: AnimationSettings) -> None:
    logging.getLogger(PACKAGE_LOGGER).setLevel(settings.log_level.upper())
