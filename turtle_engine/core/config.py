"""
Game configuration.

One place for the paths and defaults the core needs: where the save
file lives, the starting location and the save-format version.
"""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "TurtleHero"


def default_save_dir() -> Path:
    """Per-user application data directory for save files."""
    base = os.environ.get("LOCALAPPDATA") or os.environ.get("XDG_DATA_HOME")
    if base:
        root = Path(base)
    else:
        root = Path.home() / ".local" / "share"
    return root / APP_NAME / "Saves"


class GameConfig:
    """Configuration for the game core."""

    def __init__(
        self,
        save_dir: str | Path | None = None,
        save_filename: str = "savegame.json",
        default_location: str = "forest",
        version: str = "1.0.0",
    ):
        self.save_dir = Path(save_dir) if save_dir else default_save_dir()
        self.save_filename = save_filename
        self.default_location = default_location
        self.version = version

    @property
    def save_file_path(self) -> Path:
        """Full path of the single save file."""
        return self.save_dir / self.save_filename
