"""Selector session: settings, derived paths and the card services in one place.

The UI talks to a single :class:`SelectorSession`.  It owns the
:class:`~card_selector.config.Settings` object and rebuilds the derived
:class:`CardPaths`, repository and engine through :meth:`refresh_paths`
whenever a folder setting changes.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from card_selector.config import Settings
from card_selector.core.path_resolver import CardPaths, get_base_dir
from card_selector.core.repository import CardRepository
from card_selector.core.transfer import TransferEngine
from card_selector.models.card import ActiveCardState, CardEntry, TransferResult


class SelectorSession:
    """Application state shared by the selector and settings pages."""

    def __init__(self, settings: Settings, base_dir: Path | None = None) -> None:
        self._settings = settings
        self._base_dir = base_dir if base_dir is not None else get_base_dir()
        self._paths: CardPaths
        self._repo: CardRepository
        self._engine: TransferEngine
        self.refresh_paths()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def paths(self) -> CardPaths:
        return self._paths

    @property
    def engine(self) -> TransferEngine:
        return self._engine

    @property
    def current_game(self) -> str:
        return self._settings.game

    def refresh_paths(self) -> None:
        """Recompute paths and services from the current settings."""
        self._paths = CardPaths.from_settings(self._settings, self._base_dir)
        self._repo = CardRepository(self._paths)
        self._engine = TransferEngine(self._repo)

    def update_folders(self, cards_folder: str, nvram_folder: str, suffix: str) -> str:
        """Persist new folder settings, refresh paths and reconcile the game.

        Returns the game selected afterwards.
        """
        self._settings.update(
            cardsFolder=cards_folder,
            nvramFolder=nvram_folder,
            cardFileNameSuffix=suffix,
        )
        self.refresh_paths()
        logger.info("Folder settings updated: cards={} nvram={}", cards_folder, nvram_folder)
        return self.reconcile_game()

    def reconcile_game(self, games: list[str] | None = None) -> str:
        """Fall back to the first listed game if the configured one is gone.

        When the library lists no games at all the setting is left alone.
        """
        if games is None:
            games = self.list_games()
        if games and self._settings.game not in games:
            logger.info(
                "Configured game {} not in library, switching to {}",
                self._settings.game, games[0],
            )
            self._settings.game = games[0]
        return self._settings.game

    def select_game(self, game: str) -> None:
        if game != self._settings.game:
            self._settings.game = game

    # ------------------------------------------------------------------
    # Boundary operations
    # ------------------------------------------------------------------

    def list_games(self) -> list[str]:
        return self._repo.list_games()

    def list_cards(self, game: str) -> list[str]:
        return self._repo.list_cards(game)

    def list_card_entries(self, game: str) -> list[CardEntry]:
        return self._repo.list_card_entries(game)

    def get_active_card_name(self, game: str) -> str | None:
        return self._repo.get_active_card_name(game)

    def get_active_state(self, game: str) -> ActiveCardState:
        return self._engine.get_active_state(game)

    def is_active_card_saved(self, game: str) -> bool:
        return self._engine.is_active_card_saved(game)

    def load_card(self, game: str, card: str, force: bool = False) -> TransferResult:
        return self._engine.load_card(game, card, force=force)

    def save_card(self, game: str) -> TransferResult:
        return self._engine.save_card(game)
