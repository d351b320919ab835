"""Card repository: lists games and cards, reads markers and card bytes.

Every read here is fail-soft: a missing folder or unreadable file is an
expected state (paths not configured yet, card never saved) and resolves
to an empty list or ``None`` with a logged warning.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from card_selector.core.path_resolver import CardPaths
from card_selector.models.card import CardEntry


def _list_directory(source: Path, include_files: bool, include_dirs: bool) -> list[str]:
    logger.debug("Listing directory: {}", source)
    try:
        return [
            entry.name
            for entry in source.iterdir()
            if (include_files and entry.is_file()) or (include_dirs and entry.is_dir())
        ]
    except OSError as e:
        logger.warning("Error reading directory {}: {}", source, e)
        return []


def _read_bytes(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Error reading {}: {}", path, e)
        return None


class CardRepository:
    """Read-side access to the card library and the NVRAM folder."""

    def __init__(self, paths: CardPaths) -> None:
        self._paths = paths

    @property
    def paths(self) -> CardPaths:
        return self._paths

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def list_games(self) -> list[str]:
        """Return the sub-folder names of the library root, unsorted."""
        return _list_directory(self._paths.cards_root, False, True)

    def list_cards(self, game: str) -> list[str]:
        """Return the file names inside ``{cards_root}/{game}``, unsorted."""
        return _list_directory(self._paths.game_dir(game), True, False)

    def list_card_entries(self, game: str) -> list[CardEntry]:
        return [CardEntry(name) for name in self.list_cards(game)]

    # ------------------------------------------------------------------
    # Marker and contents
    # ------------------------------------------------------------------

    def get_active_card_name(self, game: str) -> str | None:
        """Return the card named by the game's marker file, if any.

        "Never set" and "unreadable" both give ``None``.  Trailing line
        breaks are ignored so a marker written by hand still matches.
        """
        marker = self._paths.marker_file(game)
        try:
            name = marker.read_text(encoding="utf-8").rstrip("\r\n")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Error reading marker {}: {}", marker, e)
            return None
        return name or None

    def write_marker(self, game: str, card: str) -> None:
        """Record *card* as the active card of *game*; errors propagate."""
        marker = self._paths.marker_file(game)
        marker.parent.mkdir(parents=True, exist_ok=True)
        marker.write_text(card, encoding="utf-8")

    def has_active_card(self, game: str) -> bool:
        return self._paths.active_card_file(game).is_file()

    def read_active_contents(self, game: str) -> bytes | None:
        return _read_bytes(self._paths.active_card_file(game))

    def read_saved_contents(self, game: str, card: str) -> bytes | None:
        path = self._paths.library_card(game, card)
        data = _read_bytes(path)
        if data is None:
            logger.warning("Saved card not readable: {}", path)
        return data
