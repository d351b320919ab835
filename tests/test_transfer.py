import stat
import sys

import pytest

from card_selector.core.errors import (
    CardCopyError,
    MissingMarkerError,
    NothingToSaveError,
    TransferError,
)
from card_selector.core import transfer
from card_selector.models.card import TransferStatus


def test_no_marker_means_saved(engine):
    assert engine.is_active_card_saved("initdv3") is True


def test_untracked_active_file_is_never_at_risk(engine, paths):
    paths.active_card_file("initdv3").write_bytes(b"anything")

    assert engine.is_active_card_saved("initdv3") is True


def test_load_scenario_updates_marker_and_active_bytes(engine, repo, paths):
    result = engine.load_card("initdv3", "bob.card")

    assert result.status is TransferStatus.LOADED
    assert repo.get_active_card_name("initdv3") == "bob.card"
    assert paths.active_card_file("initdv3").read_bytes() == b"bob-bytes"
    assert engine.is_active_card_saved("initdv3") is True


def test_load_twice_is_idempotent(engine, repo, paths):
    engine.load_card("initdv3", "alice.card")
    first = (paths.active_card_file("initdv3").read_bytes(), repo.get_active_card_name("initdv3"))

    engine.load_card("initdv3", "alice.card")

    assert (paths.active_card_file("initdv3").read_bytes(), repo.get_active_card_name("initdv3")) == first
    assert sorted(p.name for p in paths.nvram_root.iterdir()) == ["initdv3.txt", "initdv3.zip.card"]


def test_external_write_makes_card_dirty_and_load_asks_first(engine, repo, paths):
    engine.load_card("initdv3", "bob.card")
    paths.active_card_file("initdv3").write_bytes(b"played")

    assert engine.is_active_card_saved("initdv3") is False
    result = engine.load_card("initdv3", "alice.card")

    assert result.needs_confirmation
    assert result.status is TransferStatus.UNSAVED_CHANGES
    assert repo.get_active_card_name("initdv3") == "bob.card"
    assert paths.active_card_file("initdv3").read_bytes() == b"played"


def test_forced_load_discards_unsaved_changes(engine, repo, paths):
    engine.load_card("initdv3", "bob.card")
    paths.active_card_file("initdv3").write_bytes(b"played")

    result = engine.load_card("initdv3", "alice.card", force=True)

    assert result.status is TransferStatus.LOADED
    assert repo.get_active_card_name("initdv3") == "alice.card"
    assert engine.is_active_card_saved("initdv3") is True


def test_dangling_marker_is_dirty(engine, paths):
    paths.marker_file("initdv3").write_text("gone.card")
    paths.active_card_file("initdv3").write_bytes(b"data")

    assert engine.is_active_card_saved("initdv3") is False


def test_marker_with_both_sides_missing_is_saved(engine, paths):
    paths.marker_file("initdv3").write_text("gone.card")

    assert engine.is_active_card_saved("initdv3") is True


def test_failed_load_keeps_previous_marker(engine, repo, paths):
    engine.load_card("initdv3", "alice.card")

    with pytest.raises(CardCopyError) as excinfo:
        engine.load_card("initdv3", "missing.card")

    assert excinfo.value.game == "initdv3"
    assert repo.get_active_card_name("initdv3") == "alice.card"
    assert paths.active_card_file("initdv3").read_bytes() == b"alice-bytes"


def test_failed_load_never_creates_marker(engine, repo):
    with pytest.raises(CardCopyError):
        engine.load_card("initdv3", "missing.card")

    assert repo.get_active_card_name("initdv3") is None


def test_copy_error_mid_write_leaves_destination_and_no_temp(engine, repo, paths, mocker):
    engine.load_card("initdv3", "alice.card")
    mocker.patch.object(transfer.shutil, "copyfileobj", side_effect=OSError("disk full"))

    with pytest.raises(CardCopyError):
        engine.load_card("initdv3", "bob.card")

    assert repo.get_active_card_name("initdv3") == "alice.card"
    assert paths.active_card_file("initdv3").read_bytes() == b"alice-bytes"
    assert sorted(p.name for p in paths.nvram_root.iterdir()) == ["initdv3.txt", "initdv3.zip.card"]


def test_load_creates_missing_nvram_folder(engine, paths):
    paths.nvram_root.rmdir()

    engine.load_card("initdv3", "bob.card")

    assert paths.active_card_file("initdv3").read_bytes() == b"bob-bytes"


def test_save_copies_active_data_back_under_marker_name(engine, paths):
    engine.load_card("initdv3", "bob.card")
    paths.active_card_file("initdv3").write_bytes(b"progress")

    result = engine.save_card("initdv3")

    assert result.status is TransferStatus.SAVED
    assert result.card == "bob.card"
    assert paths.library_card("initdv3", "bob.card").read_bytes() == b"progress"
    assert paths.library_card("initdv3", "alice.card").read_bytes() == b"alice-bytes"
    assert engine.is_active_card_saved("initdv3") is True


def test_save_without_active_data_is_nothing_to_save(engine, paths):
    paths.marker_file("initdv3").write_text("bob.card")

    with pytest.raises(NothingToSaveError):
        engine.save_card("initdv3")

    assert paths.library_card("initdv3", "bob.card").read_bytes() == b"bob-bytes"


def test_save_without_marker_cannot_determine_destination(engine, paths):
    paths.active_card_file("initdv3").write_bytes(b"progress")

    with pytest.raises(MissingMarkerError) as excinfo:
        engine.save_card("initdv3")

    assert excinfo.value.marker.name == "initdv3.txt"
    assert "initdv3.txt" in str(excinfo.value)


def test_active_state_snapshot(engine, paths):
    engine.load_card("initdv3", "alice.card")
    paths.active_card_file("initdv3").write_bytes(b"played")

    state = engine.get_active_state("initdv3")

    assert state.marker == "alice.card"
    assert state.is_dirty


def test_custom_suffix_is_used(tmp_path, paths):
    from card_selector.core.path_resolver import CardPaths
    from card_selector.core.repository import CardRepository
    from card_selector.core.transfer import TransferEngine

    custom = CardPaths(paths.cards_root, paths.nvram_root, suffix=".bin")
    engine = TransferEngine(CardRepository(custom))
    engine.load_card("initdv3", "alice.card")

    assert (paths.nvram_root / "initdv3.bin").read_bytes() == b"alice-bytes"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
def test_load_and_save_keep_the_source_file_mode(engine, paths):
    library_card = paths.library_card("initdv3", "bob.card")
    library_card.chmod(0o644)

    engine.load_card("initdv3", "bob.card")
    active = paths.active_card_file("initdv3")
    assert stat.S_IMODE(active.stat().st_mode) == 0o644

    active.write_bytes(b"progress")
    engine.save_card("initdv3")
    assert stat.S_IMODE(library_card.stat().st_mode) == 0o644


def test_copy_error_during_save_keeps_library_card(engine, repo, paths, mocker):
    engine.load_card("initdv3", "bob.card")
    paths.active_card_file("initdv3").write_bytes(b"progress")
    mocker.patch.object(transfer.shutil, "copyfileobj", side_effect=OSError("disk full"))

    with pytest.raises(CardCopyError) as excinfo:
        engine.save_card("initdv3")

    assert excinfo.value.destination == paths.library_card("initdv3", "bob.card")
    assert paths.library_card("initdv3", "bob.card").read_bytes() == b"bob-bytes"
    assert repo.get_active_card_name("initdv3") == "bob.card"
    assert not list(paths.game_dir("initdv3").glob("*.tmp"))


def test_marker_write_failure_after_copy_is_reported(engine, repo, paths, mocker):
    mocker.patch.object(repo, "write_marker", side_effect=OSError("read-only"))

    with pytest.raises(TransferError) as excinfo:
        engine.load_card("initdv3", "alice.card")

    assert not isinstance(excinfo.value, CardCopyError)
    assert "initdv3.txt" in str(excinfo.value)
    assert repo.get_active_card_name("initdv3") is None
