import logging
from pathlib import Path

import pytest
from loguru import logger

from card_selector.config import Settings
from card_selector.core.path_resolver import CardPaths
from card_selector.core.repository import CardRepository
from card_selector.core.transfer import TransferEngine


@pytest.fixture
def caplog(caplog):
    """Forward loguru records into pytest's caplog."""

    class PropagateHandler(logging.Handler):
        def emit(self, record):
            logging.getLogger(record.name).handle(record)

    handler_id = logger.add(PropagateHandler(), format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def paths(tmp_path):
    cards = tmp_path / "cards"
    nvram = tmp_path / "data"
    (cards / "initdv3").mkdir(parents=True)
    nvram.mkdir()
    (cards / "initdv3" / "alice.card").write_bytes(b"alice-bytes")
    (cards / "initdv3" / "bob.card").write_bytes(b"bob-bytes")
    return CardPaths(cards_root=cards, nvram_root=nvram, suffix=".zip.card")


@pytest.fixture
def repo(paths):
    return CardRepository(paths)


@pytest.fixture
def engine(repo):
    return TransferEngine(repo)


@pytest.fixture
def settings_path(tmp_path) -> Path:
    return tmp_path / "appdata" / "settings.json"


@pytest.fixture
def settings(settings_path):
    return Settings.load(settings_path)
