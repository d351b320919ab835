"""Application settings persisted as a small JSON document."""

import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from card_selector.core.errors import SettingsError
from card_selector.core.path_resolver import get_settings_path


_DEFAULT_SETTINGS: dict[str, Any] = {
    "game": "initdv3",
    "cardsFolder": "./cards",
    "nvramFolder": "./data",
    "cardFileNameSuffix": ".zip.card",
}


class Settings:
    """User-configurable folders, suffix and last selected game.

    Every setter writes the file immediately so the on-disk state always
    matches the last user action.  Keys other than the four known ones are
    kept untouched across saves.
    """

    _data: dict[str, Any]
    _path: Path

    def __init__(self, path: Path, data: Optional[dict[str, Any]] = None) -> None:
        self._path = path
        self._data = dict(data or {})
        for key, value in _DEFAULT_SETTINGS.items():
            self._data.setdefault(key, value)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        """Read settings from *path*, applying defaults for missing fields.

        A malformed file raises :class:`SettingsError`; defaults are never
        merged into JSON that could not be parsed.
        """
        path = path or get_settings_path()
        saved: dict[str, Any] = {}
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    saved = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error("Settings file {} is malformed: {}", path, e)
                raise SettingsError(path, str(e)) from e
            if not isinstance(saved, dict):
                raise SettingsError(path, "top-level value must be an object")
            logger.info("Settings loaded from {}", path)

        settings = cls(path, saved)
        if any(key not in saved for key in _DEFAULT_SETTINGS):
            settings.save()
        return settings

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def game(self) -> str:
        return self._data["game"]

    @game.setter
    def game(self, value: str) -> None:
        self._set("game", value)

    @property
    def cards_folder(self) -> str:
        return self._data["cardsFolder"]

    @cards_folder.setter
    def cards_folder(self, value: str) -> None:
        self._set("cardsFolder", value)

    @property
    def nvram_folder(self) -> str:
        return self._data["nvramFolder"]

    @nvram_folder.setter
    def nvram_folder(self, value: str) -> None:
        self._set("nvramFolder", value)

    @property
    def card_file_name_suffix(self) -> str:
        return self._data["cardFileNameSuffix"]

    @card_file_name_suffix.setter
    def card_file_name_suffix(self, value: str) -> None:
        self._set("cardFileNameSuffix", value)

    @property
    def language(self) -> str:
        return self._data.get("language", "en_US")

    def update(self, **fields: str) -> None:
        """Change several settings and write them with a single save.

        Accepts the JSON key names (``cardsFolder`` …).
        """
        for key in fields:
            if key not in _DEFAULT_SETTINGS:
                raise KeyError(f"Unknown setting: {key}")
        self._data.update(fields)
        self.save()

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)
        logger.debug("Settings saved to {}", self._path)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.save()
