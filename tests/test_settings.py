import tomllib
from pathlib import Path

import pytest

from emucli import create_context
from emucli.cli import main
from emucli.models import ConfigMode, InstallDir, Settings
from emucli.settings import load_settings, save_context, save_settings


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "config.toml") == Settings()


def test_corrupt_file_gives_defaults(tmp_path):
    f = tmp_path / "config.toml"
    f.write_text("[GUI\ninstallDirs = ", encoding="utf-8")
    assert load_settings(f) == Settings()


def test_saved_layout(tmp_path):
    f = tmp_path / "nested" / "config.toml"
    save_settings(f, Settings(
        install_dirs=[InstallDir(Path("/games")), InstallDir(Path("/old"), enabled=False)],
        addon_dir=Path("/addons"),
        core_executable=Path("/opt/emu/core"),
    ))
    data = tomllib.loads(f.read_text("utf-8"))
    assert data["GUI"]["installDirs"] == [str(Path("/games")), str(Path("/old"))]
    assert data["GUI"]["installDirsEnabled"] == [True, False]
    assert data["GUI"]["addonInstallDir"] == str(Path("/addons"))
    assert data["Launcher"]["coreExecutable"] == str(Path("/opt/emu/core"))
    assert data["General"]["isFullscreen"] is False

    loaded = load_settings(f)
    assert [d.enabled for d in loaded.install_dirs] == [True, False]
    assert loaded.addon_dir == Path("/addons")


def test_enabled_list_shorter_than_dirs(tmp_path):
    f = tmp_path / "config.toml"
    f.write_text('[GUI]\ninstallDirs = ["/a", "/b"]\ninstallDirsEnabled = [false]\n', encoding="utf-8")
    dirs = load_settings(f).install_dirs
    assert [(d.path, d.enabled) for d in dirs] == [(Path("/a"), False), (Path("/b"), True)]


def test_context_uses_user_dir(tmp_path):
    save_settings(tmp_path / "config.toml", Settings(install_dirs=[InstallDir(Path("/games"))]))
    ctx = create_context(tmp_path)
    assert ctx.settings_file == tmp_path / "config.toml"
    assert ctx.game_install_dirs() == [Path("/games")]


def test_user_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("EMUCLI_USER_DIR", str(tmp_path / "env"))
    assert create_context().user_dir == tmp_path / "env"


def test_session_overrides(context):
    context.settings.fullscreen = True
    context.settings.show_fps = True
    assert context.effective_fullscreen() is True
    assert context.effective_show_fps() is True

    context.fullscreen = False
    assert context.effective_fullscreen() is False

    context.fullscreen = None
    context.config_mode = ConfigMode.CLEAN
    assert context.effective_fullscreen() is False
    assert context.effective_show_fps() is False

    context.show_fps = True
    assert context.effective_show_fps() is True


@pytest.mark.parametrize("text", [
    "General = 5\n",
    'GUI = "oops"\n',
    '[GUI]\ninstallDirs = "/games"\n',
    '[GUI]\ninstallDirs = ["/games"]\ninstallDirsEnabled = true\n',
    '[GUI]\naddonInstallDir = 3\n',
    '[Launcher]\ncoreExecutable = ["/opt/core"]\n',
])
def test_wrong_types_give_defaults(tmp_path, text):
    f = tmp_path / "config.toml"
    f.write_text(text, encoding="utf-8")
    assert load_settings(f) == Settings()


def test_broken_config_does_not_block_commands(tmp_path, capsys):
    (tmp_path / "config.toml").write_text("General = 5\n", encoding="utf-8")
    games = tmp_path / "games"
    games.mkdir()

    assert main(["emucli", "--help"], user_dir=tmp_path) == 0
    assert main(["emucli", "--add-game-folder", str(games)], user_dir=tmp_path) == 0
    assert load_settings(tmp_path / "config.toml").install_dirs[0].path == games


def test_save_context_writes_settings_file(context, tmp_path):
    context.add_game_install_dir(tmp_path)
    context.set_addon_dir(tmp_path / "addons")
    save_context(context)
    loaded = load_settings(context.settings_file)
    assert [d.path for d in loaded.install_dirs] == [tmp_path]
    assert loaded.addon_dir == tmp_path / "addons"
    assert not hasattr(context, "save")
