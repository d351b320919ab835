"""Selector page — pick a game and card, load it or save the active card back."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout
from qfluentwidgets import (
    SubtitleLabel, BodyLabel, CaptionLabel, StrongBodyLabel,
    ComboBox, PrimaryPushButton, PushButton, CardWidget,
    FluentIcon as FIF, InfoBar, InfoBarPosition, MessageBox,
    setFont,
)
from loguru import logger

from card_selector.i18n import t
from card_selector.core.errors import (
    MissingMarkerError,
    NothingToSaveError,
    TransferError,
)
from card_selector.core.session import SelectorSession


class _ActiveCardBanner(CardWidget):
    """Shows which card is active for the selected game and whether it is saved."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFixedHeight(64)

        root = QHBoxLayout(self)
        root.setContentsMargins(20, 12, 20, 12)
        root.setSpacing(12)

        self._name_label = StrongBodyLabel("", self)
        setFont(self._name_label, 14, QFont.Weight.DemiBold)
        root.addWidget(self._name_label, 1)

        self._status_label = CaptionLabel("", self)
        self._status_label.setFixedHeight(20)
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._status_label)

    def set_state(self, card: str | None, saved: bool) -> None:
        if card is None:
            self._name_label.setText(t("selector.no_active_card"))
            self._status_label.hide()
            return
        self._name_label.setText(t("selector.active_card", card=card))
        color = "#107c10" if saved else "#d83b01"
        text = t("selector.status_saved") if saved else t("selector.status_dirty")
        self._status_label.setText(text)
        self._status_label.setStyleSheet(
            f"background:{color}; color:white; border-radius:9px; padding:0 8px;"
        )
        self._status_label.show()


class SelectorPage(QWidget):
    """Game and card dropdowns with Load / Save actions."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("selector_page")
        self._session: SelectorSession | None = None
        self._init_ui()

    def set_session(self, session: SelectorSession) -> None:
        self._session = session
        self.refresh_games()

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(36, 20, 36, 20)
        layout.setSpacing(12)

        title = SubtitleLabel(t("selector.title"), self)
        desc = BodyLabel(t("selector.description"), self)
        desc.setWordWrap(True)
        layout.addWidget(title)
        layout.addWidget(desc)

        form = QVBoxLayout()
        form.setSpacing(6)

        form.addWidget(BodyLabel(t("selector.game"), self))
        game_row = QHBoxLayout()
        self._game_combo = ComboBox(self)
        self._game_combo.setMinimumWidth(280)
        self._game_combo.currentIndexChanged.connect(self._on_game_changed)
        game_row.addWidget(self._game_combo, 1)
        refresh_btn = PushButton(FIF.SYNC, t("common.refresh"), self)
        refresh_btn.clicked.connect(self.refresh_games)
        game_row.addWidget(refresh_btn)
        form.addLayout(game_row)

        form.addWidget(BodyLabel(t("selector.card"), self))
        self._card_combo = ComboBox(self)
        self._card_combo.setMinimumWidth(280)
        form.addWidget(self._card_combo)
        layout.addLayout(form)

        self._active_card = _ActiveCardBanner(self)
        layout.addWidget(self._active_card)

        actions = QHBoxLayout()
        actions.setSpacing(12)
        self._load_btn = PrimaryPushButton(FIF.DOWNLOAD, t("selector.load"), self)
        self._load_btn.clicked.connect(self._on_load_clicked)
        actions.addWidget(self._load_btn)
        self._save_btn = PushButton(FIF.SAVE, t("selector.save"), self)
        self._save_btn.clicked.connect(self._on_save_clicked)
        actions.addWidget(self._save_btn)
        actions.addStretch()
        layout.addLayout(actions)

        self._empty_label = BodyLabel("", self)
        self._empty_label.setStyleSheet("color: #888;")
        self._empty_label.hide()
        layout.addWidget(self._empty_label)

        layout.addStretch()

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh_games(self) -> None:
        """Re-list games (after start-up or a settings change)."""
        if self._session is None:
            return
        games = self._session.list_games()
        current = self._session.reconcile_game(games)

        self._game_combo.blockSignals(True)
        self._game_combo.clear()
        for game in games:
            self._game_combo.addItem(game, userData=game)
        if current in games:
            self._game_combo.setCurrentIndex(games.index(current))
        self._game_combo.blockSignals(False)

        has_games = bool(games)
        self._load_btn.setEnabled(has_games)
        self._save_btn.setEnabled(has_games)
        if has_games:
            self._empty_label.hide()
        else:
            self._empty_label.setText(
                t("selector.no_games", folder=str(self._session.paths.cards_root))
            )
            self._empty_label.show()

        self._refresh_cards()

    def _refresh_cards(self) -> None:
        self._card_combo.clear()
        game = self._selected_game()
        if self._session is None or game is None:
            self._active_card.set_state(None, True)
            return

        entries = self._session.list_card_entries(game)
        for entry in entries:
            self._card_combo.addItem(entry.display_name, userData=entry.name)

        state = self._session.get_active_state(game)
        if state.marker is not None:
            names = [entry.name for entry in entries]
            if state.marker in names:
                self._card_combo.setCurrentIndex(names.index(state.marker))
        self._active_card.set_state(state.marker, state.saved)

    def _selected_game(self) -> str | None:
        index = self._game_combo.currentIndex()
        if index < 0:
            return None
        return self._game_combo.itemData(index)

    def _selected_card(self) -> str | None:
        index = self._card_combo.currentIndex()
        if index < 0:
            return None
        return self._card_combo.itemData(index)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_game_changed(self, index: int) -> None:
        game = self._selected_game()
        if self._session is not None and game is not None:
            self._session.select_game(game)
        self._refresh_cards()

    def _on_load_clicked(self) -> None:
        game = self._selected_game()
        card = self._selected_card()
        if self._session is None or game is None:
            return
        if card is None:
            self._warn(t("selector.no_card_selected"))
            return

        try:
            result = self._session.load_card(game, card)
            if result.needs_confirmation:
                box = MessageBox(
                    t("selector.confirm_title"),
                    t("selector.unsaved_warning"),
                    self,
                )
                box.yesButton.setText(t("common.confirm"))
                box.cancelButton.setText(t("common.cancel"))
                if not box.exec():
                    logger.info("Load of {} cancelled by user", card)
                    return
                result = self._session.load_card(game, card, force=True)
        except TransferError as e:
            self._error(str(e))
            self._refresh_cards()
            return

        self._refresh_cards()
        InfoBar.success(
            title=t("selector.card_loaded"),
            content=result.card or "",
            parent=self, position=InfoBarPosition.TOP, duration=3000,
        )

    def _on_save_clicked(self) -> None:
        game = self._selected_game()
        if self._session is None or game is None:
            return
        try:
            result = self._session.save_card(game)
        except NothingToSaveError:
            self._warn(t("selector.no_active_to_save"))
            return
        except MissingMarkerError as e:
            self._warn(t("selector.create_marker", marker=e.marker.name))
            return
        except TransferError as e:
            self._error(str(e))
            return

        self._refresh_cards()
        InfoBar.success(
            title=t("selector.card_saved"),
            content=result.card or "",
            parent=self, position=InfoBarPosition.TOP, duration=3000,
        )

    def _warn(self, message: str) -> None:
        InfoBar.warning(
            title=message, content="",
            parent=self, position=InfoBarPosition.TOP, duration=4000,
        )

    def _error(self, message: str) -> None:
        InfoBar.error(
            title=t("selector.transfer_failed"), content=message,
            parent=self, position=InfoBarPosition.TOP, duration=-1,
        )
