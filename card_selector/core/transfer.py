"""Transfer engine — loads library cards into the emulator and saves them back.

A game's active card is either *saved* (the NVRAM file matches the library
card named by the marker) or *dirty* (the emulator has written to it since).
The state is never stored; it is recomputed from disk on every call.

Two rules hold after every operation:

* the marker is only written once the card bytes have been copied, so it
  never names a card whose data did not arrive;
* copies go through a temporary file and an atomic replace, so a failed
  copy leaves the previous destination intact.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from loguru import logger

from card_selector.core.errors import (
    CardCopyError,
    MissingMarkerError,
    NothingToSaveError,
    TransferError,
)
from card_selector.core.repository import CardRepository
from card_selector.models.card import ActiveCardState, TransferResult, TransferStatus


def _copy_replace(source: Path, destination: Path) -> None:
    """Copy *source* over *destination* without exposing a partial file."""
    with open(source, "rb") as src:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent,
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as dst:
                shutil.copyfileobj(src, dst)
            shutil.copymode(source, tmp_path)
            os.replace(tmp_path, destination)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


class TransferEngine:
    """Dirty-check, load and save for the active card of each game."""

    def __init__(self, repository: CardRepository) -> None:
        self._repo = repository

    @property
    def repository(self) -> CardRepository:
        return self._repo

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def is_active_card_saved(self, game: str) -> bool:
        """Return ``True`` unless the tracked active card has unsaved changes.

        Without a marker nothing is tracked, so there is nothing to lose.
        Otherwise the active data must equal the library card byte for
        byte; if only one side can be read they are treated as different,
        if neither can they are treated as equal.
        """
        card = self._repo.get_active_card_name(game)
        if card is None:
            return True
        active = self._repo.read_active_contents(game)
        saved = self._repo.read_saved_contents(game, card)
        return active == saved

    def get_active_state(self, game: str) -> ActiveCardState:
        return ActiveCardState(
            game=game,
            marker=self._repo.get_active_card_name(game),
            saved=self.is_active_card_saved(game),
        )

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def load_card(self, game: str, card: str, force: bool = False) -> TransferResult:
        """Copy library *card* into the emulator's data folder for *game*.

        Parameters
        ----------
        game : str
            Game folder name.
        card : str
            Card file name inside the game's library folder.
        force : bool
            Load even if the current active card has unsaved changes.  When
            False and the card is dirty, nothing is touched and the result
            status is ``UNSAVED_CHANGES`` so the caller can ask the user.

        Raises
        ------
        CardCopyError
            The card could not be copied; the marker is left as it was.
        """
        if not force and not self.is_active_card_saved(game):
            logger.info("Load of {}/{} held back: active card has unsaved changes", game, card)
            return TransferResult(TransferStatus.UNSAVED_CHANGES, game, card)

        paths = self._repo.paths
        source = paths.library_card(game, card)
        destination = paths.active_card_file(game)
        try:
            _copy_replace(source, destination)
        except OSError as e:
            logger.error("Failed to load card {} → {}: {}", source, destination, e)
            raise CardCopyError(game, source, destination, e) from e

        try:
            self._repo.write_marker(game, card)
        except OSError as e:
            logger.error("Card {} copied but marker could not be written: {}", card, e)
            raise TransferError(
                game, f"Card copied but marker {paths.marker_file(game)} could not be written: {e}"
            ) from e

        logger.info("Loaded card {} for {}", card, game)
        return TransferResult(TransferStatus.LOADED, game, card)

    def save_card(self, game: str) -> TransferResult:
        """Copy the active card back into the library under the marker's name.

        Raises
        ------
        NothingToSaveError
            The game has no active card file.
        MissingMarkerError
            No marker names the destination card.
        CardCopyError
            The copy failed; the library card is left as it was.
        """
        paths = self._repo.paths
        source = paths.active_card_file(game)
        logger.info("Saving active card {}", source)
        if not self._repo.has_active_card(game):
            raise NothingToSaveError(game, source)

        card = self._repo.get_active_card_name(game)
        if card is None:
            raise MissingMarkerError(game, paths.marker_file(game))

        destination = paths.library_card(game, card)
        try:
            _copy_replace(source, destination)
        except OSError as e:
            logger.error("Failed to save card {} → {}: {}", source, destination, e)
            raise CardCopyError(game, source, destination, e) from e

        logger.info("Saved active card of {} as {}", game, card)
        return TransferResult(TransferStatus.SAVED, game, card)
