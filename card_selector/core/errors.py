"""Exceptions raised by the settings store and the transfer engine."""

from __future__ import annotations

from pathlib import Path


class CardSelectorError(Exception):
    """Base class for every error the application reports to the user."""


class SettingsError(CardSelectorError):
    """The settings file exists but cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid settings file {path}: {reason}")
        self.path = path
        self.reason = reason


class TransferError(CardSelectorError):
    """A load or save could not be carried out."""

    def __init__(self, game: str, message: str) -> None:
        super().__init__(message)
        self.game = game


class NothingToSaveError(TransferError):
    """There is no active card file for the game."""

    def __init__(self, game: str, path: Path) -> None:
        super().__init__(game, f"No active card to save: {path}")
        self.path = path


class MissingMarkerError(TransferError):
    """The marker naming the active card is missing, so there is no destination."""

    def __init__(self, game: str, marker: Path) -> None:
        super().__init__(
            game, f"Unable to determine card name. Create {marker.name} file."
        )
        self.marker = marker


class CardCopyError(TransferError):
    """Copying card bytes failed; the destination is left untouched."""

    def __init__(self, game: str, source: Path, destination: Path, cause: OSError) -> None:
        super().__init__(game, f"Failed to copy {source} to {destination}: {cause}")
        self.source = source
        self.destination = destination
        self.cause = cause
