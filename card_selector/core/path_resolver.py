"""Runtime path resolution for card library, NVRAM data and settings.

Two roots matter at runtime:

    base directory    where relative folder settings are anchored.  In a
                      development checkout this is the working directory;
                      in a frozen build (PyInstaller) it is the folder
                      holding the executable, so ``./cards`` sits next to
                      the ``.exe``.
    app data folder   per-user folder that holds ``settings.json`` and
                      the log files.

Layout of the two user-configured folders::

    {cards_root}/{game}/{card}          : library card (binary)
    {nvram_root}/{game}{suffix}         : active card the emulator uses
    {nvram_root}/{game}.txt             : marker naming the active card
"""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from card_selector.config import Settings

APP_NAME = "initiald-card-selector"
MARKER_SUFFIX = ".txt"


def get_base_dir() -> Path:
    """Return the directory relative folder settings are resolved against."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path.cwd()


def get_app_data_dir(app_name: str = APP_NAME) -> Path:
    """Return the per-user application data directory for *app_name*."""
    system = platform.system()
    if system == "Windows":
        env = os.environ.get("APPDATA")
        root = Path(env) if env else Path.home() / "AppData" / "Roaming"
    elif system == "Darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        env = os.environ.get("XDG_CONFIG_HOME")
        root = Path(env) if env else Path.home() / ".config"
    return root / app_name


def get_settings_path(app_name: str = APP_NAME) -> Path:
    return get_app_data_dir(app_name) / "settings.json"


def resolve_folder(folder: str, base_dir: Path) -> Path:
    """Turn a folder setting into an absolute path.

    ``~`` and environment variables are expanded first.  Absolute paths
    are kept as-is, relative ones are joined onto *base_dir*.
    """
    expanded = Path(os.path.expandvars(os.path.expanduser(folder)))
    if expanded.is_absolute():
        return expanded
    return (base_dir / expanded).absolute()


@dataclass(frozen=True)
class CardPaths:
    """Absolute locations derived from the folder settings."""

    cards_root: Path
    """Library root; one sub-folder per game."""

    nvram_root: Path
    """Emulator data folder holding active cards and markers."""

    suffix: str = ".zip.card"
    """File-name suffix of the active card (``{game}{suffix}``)."""

    @classmethod
    def from_settings(cls, settings: Settings, base_dir: Path | None = None) -> CardPaths:
        base = base_dir if base_dir is not None else get_base_dir()
        paths = cls(
            cards_root=resolve_folder(settings.cards_folder, base),
            nvram_root=resolve_folder(settings.nvram_folder, base),
            suffix=settings.card_file_name_suffix,
        )
        logger.debug(
            "Resolved paths: cards={} nvram={} suffix={}",
            paths.cards_root, paths.nvram_root, paths.suffix,
        )
        return paths

    def game_dir(self, game: str) -> Path:
        return self.cards_root / game

    def library_card(self, game: str, card: str) -> Path:
        return self.cards_root / game / card

    def marker_file(self, game: str) -> Path:
        return self.nvram_root / f"{game}{MARKER_SUFFIX}"

    def active_card_file(self, game: str) -> Path:
        return self.nvram_root / f"{game}{self.suffix}"
