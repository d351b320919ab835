"""Main application window using PySide6-Fluent-Widgets FluentWindow."""

from __future__ import annotations

from PySide6.QtCore import QSize
from PySide6.QtWidgets import QApplication

from qfluentwidgets import (
    FluentWindow,
    NavigationItemPosition,
    FluentIcon as FIF,
)

from card_selector.core.session import SelectorSession
from card_selector.i18n import t
from card_selector.ui.pages.selector_page import SelectorPage
from card_selector.ui.pages.settings_page import SettingsPage


class MainWindow(FluentWindow):
    """Fluent-style window with the selector and settings pages."""

    def __init__(self, session: SelectorSession) -> None:
        super().__init__()
        self._session = session
        self._init_window()
        self._init_pages()

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _init_window(self) -> None:
        self.setWindowTitle(t("app.name"))
        self.setMinimumSize(QSize(720, 480))
        self.resize(820, 560)

        # Center on screen
        desktop = QApplication.primaryScreen().availableGeometry()
        x = (desktop.width() - self.width()) // 2
        y = (desktop.height() - self.height()) // 2
        self.move(x, y)

    def _init_pages(self) -> None:
        self.selector_page = SelectorPage(self)
        self.settings_page = SettingsPage(self)

        self.addSubInterface(self.selector_page, FIF.GAME, t("nav.selector"))
        self.addSubInterface(
            self.settings_page,
            FIF.SETTING,
            t("nav.settings"),
            position=NavigationItemPosition.BOTTOM,
        )

        self.selector_page.set_session(self._session)
        self.settings_page.set_session(self._session)
        self.settings_page.settings_saved.connect(self.selector_page.refresh_games)
