"""Data models for library cards and transfer outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CardEntry:
    """A card file in a game's library folder."""

    name: str
    """File name inside ``{cards_root}/{game}/``; also what the marker stores."""

    @property
    def display_name(self) -> str:
        """File name without its last extension (``alice.card`` → ``alice``)."""
        stem, dot, _ = self.name.rpartition(".")
        return stem if dot and stem else self.name


@dataclass(frozen=True)
class ActiveCardState:
    """Snapshot of a game's active card, recomputed on every query."""

    game: str
    """Game the snapshot belongs to."""

    marker: str | None
    """Card name from the marker file, ``None`` if nothing is tracked."""

    saved: bool
    """Whether the active data matches the library copy named by *marker*."""

    @property
    def is_dirty(self) -> bool:
        return not self.saved


class TransferStatus(str, Enum):
    """Outcome of a load or save request."""

    LOADED = "loaded"
    SAVED = "saved"
    UNSAVED_CHANGES = "unsaved_changes"   # load refused, confirmation needed


@dataclass(frozen=True)
class TransferResult:
    """What a transfer request did, or what it needs before it can run."""

    status: TransferStatus
    game: str
    card: str | None = None

    @property
    def needs_confirmation(self) -> bool:
        return self.status is TransferStatus.UNSAVED_CHANGES
