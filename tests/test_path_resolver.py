import sys
from pathlib import Path

from card_selector.config import Settings
from card_selector.core import path_resolver
from card_selector.core.path_resolver import CardPaths, get_base_dir, resolve_folder


def test_relative_folder_is_joined_onto_base_dir(tmp_path):
    assert resolve_folder("./cards", tmp_path) == tmp_path / "cards"


def test_absolute_folder_is_kept(tmp_path):
    target = tmp_path / "elsewhere"
    assert resolve_folder(str(target), Path("/unused")) == target


def test_environment_variables_are_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("CARD_ROOT", str(tmp_path))
    assert resolve_folder("$CARD_ROOT/cards", Path("/unused")) == tmp_path / "cards"


def test_base_dir_is_cwd_in_development(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delattr(sys, "frozen", raising=False)
    assert get_base_dir() == Path.cwd()


def test_base_dir_is_executable_folder_when_frozen(tmp_path, monkeypatch):
    exe = tmp_path / "dist" / "card-selector.exe"
    exe.parent.mkdir()
    exe.write_bytes(b"")
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(exe))
    assert get_base_dir() == exe.parent.resolve()


def test_app_data_dir_follows_xdg_on_linux(tmp_path, monkeypatch):
    monkeypatch.setattr(path_resolver.platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert path_resolver.get_settings_path() == tmp_path / "initiald-card-selector" / "settings.json"


def test_app_data_dir_uses_appdata_on_windows(tmp_path, monkeypatch):
    monkeypatch.setattr(path_resolver.platform, "system", lambda: "Windows")
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert path_resolver.get_app_data_dir() == tmp_path / "initiald-card-selector"


def test_card_paths_layout(tmp_path, settings_path):
    settings = Settings.load(settings_path)
    paths = CardPaths.from_settings(settings, tmp_path)

    assert paths.library_card("initdv3", "bob.card") == tmp_path / "cards" / "initdv3" / "bob.card"
    assert paths.marker_file("initdv3") == tmp_path / "data" / "initdv3.txt"
    assert paths.active_card_file("initdv3") == tmp_path / "data" / "initdv3.zip.card"
