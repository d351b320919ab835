"""Card Selector — entry point."""

import sys

from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import Qt
from loguru import logger

from card_selector.config import Settings
from card_selector.core.errors import SettingsError
from card_selector.logger import setup_logger
from card_selector.i18n import init as i18n_init, t
from card_selector.core.session import SelectorSession
from card_selector.ui.main_window import MainWindow


def main() -> None:
    # ---- 1. Logger ----
    setup_logger(debug="--debug" in sys.argv)
    logger.info("Card Selector starting…")

    # ---- 2. Qt Application ----
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough,
    )
    app = QApplication(sys.argv)

    # ---- 3. Settings (a malformed file stops start-up) ----
    try:
        settings = Settings.load()
    except SettingsError as e:
        i18n_init()
        QMessageBox.critical(None, t("app.name"), str(e))
        sys.exit(1)

    # ---- 4. i18n ----
    i18n_init(settings.language)
    logger.info("Language: {}", settings.language)

    # ---- 5. Session ----
    session = SelectorSession(settings)
    session.reconcile_game()
    logger.info("Cards: {} | NVRAM: {}", session.paths.cards_root, session.paths.nvram_root)

    # ---- 6. Main Window ----
    window = MainWindow(session)
    window.show()
    logger.info("Window shown, entering event loop")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
