"""Settings page — card library folder, NVRAM folder and card file suffix.

Each value is edited in a Fluent-style card; the *Save settings* button
writes all three at once, then the selector page reloads its game list.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFileDialog,
)
from qfluentwidgets import (
    SubtitleLabel, BodyLabel, CaptionLabel, StrongBodyLabel,
    SettingCardGroup, CardWidget, LineEdit, PushButton, PrimaryPushButton,
    FluentIcon as FIF, InfoBar, InfoBarPosition, IconWidget,
    SmoothScrollArea, setFont,
)
from loguru import logger

from card_selector.i18n import t
from card_selector.core.session import SelectorSession


class _AboutCard(CardWidget):
    """Simple card showing app name, version and description."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFixedHeight(100)

        root = QHBoxLayout(self)
        root.setContentsMargins(20, 16, 20, 16)
        root.setSpacing(16)

        icon = IconWidget(FIF.INFO, self)
        icon.setFixedSize(36, 36)
        root.addWidget(icon, 0, Qt.AlignmentFlag.AlignVCenter)

        col = QVBoxLayout()
        col.setSpacing(4)
        col.setContentsMargins(0, 0, 0, 0)

        name = StrongBodyLabel(t("app.name"), self)
        setFont(name, 15, QFont.Weight.DemiBold)
        col.addWidget(name)

        ver = CaptionLabel(f"v{t('app.version')}", self)
        ver.setStyleSheet("color:#888;")
        col.addWidget(ver)

        desc = CaptionLabel(t("settings.about_desc"), self)
        desc.setStyleSheet("color:#666;")
        col.addWidget(desc)

        root.addLayout(col, 1)


class _TextSettingCard(CardWidget):
    """Icon, title, description and a line edit; optionally a folder picker."""

    def __init__(
        self,
        icon: FIF,
        title: str,
        description: str,
        pick_folder: bool = False,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._title = title
        self.setFixedHeight(72)

        root = QHBoxLayout(self)
        root.setContentsMargins(20, 12, 20, 12)
        root.setSpacing(12)

        icon_widget = IconWidget(icon, self)
        icon_widget.setFixedSize(20, 20)
        root.addWidget(icon_widget, 0, Qt.AlignmentFlag.AlignVCenter)

        title_col = QVBoxLayout()
        title_col.setSpacing(2)
        title_col.setContentsMargins(0, 0, 0, 0)
        title_col.addWidget(BodyLabel(title, self))
        desc_label = CaptionLabel(description, self)
        desc_label.setStyleSheet("color:#888;")
        title_col.addWidget(desc_label)
        root.addLayout(title_col, 1)

        self._edit = LineEdit(self)
        self._edit.setMinimumWidth(260)
        root.addWidget(self._edit, 0, Qt.AlignmentFlag.AlignVCenter)

        if pick_folder:
            browse_btn = PushButton(FIF.FOLDER, t("settings.browse"), self)
            browse_btn.clicked.connect(self._on_browse)
            root.addWidget(browse_btn, 0, Qt.AlignmentFlag.AlignVCenter)

    def text(self) -> str:
        return self._edit.text().strip()

    def set_text(self, value: str) -> None:
        self._edit.setText(value)

    def _on_browse(self) -> None:
        folder = QFileDialog.getExistingDirectory(self, self._title, self.text())
        if folder:
            self._edit.setText(folder)


class SettingsPage(QWidget):
    """Settings page with Fluent-style setting cards inside a scroll area."""

    settings_saved = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("settings_page")
        self._session: SelectorSession | None = None
        self._init_ui()

    def set_session(self, session: SelectorSession) -> None:
        self._session = session
        self._sync_from_settings()

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------

    def _init_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = SmoothScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setStyleSheet("QScrollArea { border: none; background: transparent; }")

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(36, 20, 36, 20)
        layout.setSpacing(20)

        title = SubtitleLabel(t("settings.title"), container)
        desc = BodyLabel(t("settings.description"), container)
        desc.setWordWrap(True)
        layout.addWidget(title)
        layout.addWidget(desc)

        # --- Folders group ---
        folders_group = SettingCardGroup(t("settings.folders_group"), container)

        self._cards_folder_card = _TextSettingCard(
            FIF.LIBRARY,
            t("settings.cards_folder"),
            t("settings.cards_folder_desc"),
            pick_folder=True,
            parent=folders_group,
        )
        folders_group.addSettingCard(self._cards_folder_card)

        self._nvram_folder_card = _TextSettingCard(
            FIF.FOLDER,
            t("settings.nvram_folder"),
            t("settings.nvram_folder_desc"),
            pick_folder=True,
            parent=folders_group,
        )
        folders_group.addSettingCard(self._nvram_folder_card)

        self._suffix_card = _TextSettingCard(
            FIF.DOCUMENT,
            t("settings.suffix"),
            t("settings.suffix_desc"),
            parent=folders_group,
        )
        folders_group.addSettingCard(self._suffix_card)

        layout.addWidget(folders_group)

        save_row = QHBoxLayout()
        save_btn = PrimaryPushButton(FIF.SAVE, t("settings.save"), container)
        save_btn.clicked.connect(self._on_save)
        save_row.addWidget(save_btn)
        save_row.addStretch()
        layout.addLayout(save_row)

        # --- About ---
        about_group = SettingCardGroup(t("settings.about"), container)
        about_group.addSettingCard(_AboutCard(about_group))
        layout.addWidget(about_group)

        layout.addStretch()

        scroll.setWidget(container)
        outer.addWidget(scroll)

    # ------------------------------------------------------------------
    # Sync settings → UI
    # ------------------------------------------------------------------

    def _sync_from_settings(self) -> None:
        if self._session is None:
            return
        settings = self._session.settings
        self._cards_folder_card.set_text(settings.cards_folder)
        self._nvram_folder_card.set_text(settings.nvram_folder)
        self._suffix_card.set_text(settings.card_file_name_suffix)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_save(self) -> None:
        if self._session is None:
            return
        try:
            self._session.update_folders(
                self._cards_folder_card.text(),
                self._nvram_folder_card.text(),
                self._suffix_card.text(),
            )
        except OSError as e:
            logger.error("Failed to save settings: {}", e)
            InfoBar.error(
                title=t("common.error"), content=str(e),
                parent=self, position=InfoBarPosition.TOP, duration=-1,
            )
            return

        InfoBar.success(
            title=t("settings.saved"),
            content="",
            parent=self,
            position=InfoBarPosition.TOP,
            duration=2000,
        )
        self.settings_saved.emit()
