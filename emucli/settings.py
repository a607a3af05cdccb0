import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List

import tomli_w

from .models import InstallDir, RuntimeConfig, Settings

log = logging.getLogger(__name__)


def _table(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ValueError(f"[{name}] must be a table")
    return value


def _list(table: Dict[str, Any], key: str) -> List[Any]:
    value = table.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"{key} must be an array")
    return value


def _text(table: Dict[str, Any], key: str) -> str:
    value = table.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _install_dirs_from(gui: Dict[str, Any]) -> List[InstallDir]:
    paths = _list(gui, "installDirs")
    enabled = _list(gui, "installDirsEnabled")
    dirs: List[InstallDir] = []
    for i, p in enumerate(paths):
        if not isinstance(p, str) or not p:
            continue
        on = enabled[i] if i < len(enabled) and isinstance(enabled[i], bool) else True
        dirs.append(InstallDir(path=Path(p), enabled=on))
    return dirs


def load_settings(settings_file: Path) -> Settings:
    default = Settings()
    if not settings_file.exists():
        return default
    try:
        with open(settings_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.warning("Could not read %s, using defaults: %s", settings_file, e)
        return default

    try:
        general = _table(data, "General")
        gui = _table(data, "GUI")
        launcher = _table(data, "Launcher")
        install_dirs = _install_dirs_from(gui)
        addon = _text(gui, "addonInstallDir")
        core = _text(launcher, "coreExecutable")
    except ValueError as e:
        log.warning("Invalid settings in %s, using defaults: %s", settings_file, e)
        return default

    return Settings(
        install_dirs=install_dirs,
        addon_dir=Path(addon) if addon else None,
        fullscreen=bool(general.get("isFullscreen", default.fullscreen)),
        show_fps=bool(general.get("showFpsCounter", default.show_fps)),
        core_executable=Path(core) if core else None,
        log_level=str(general.get("logLevel", default.log_level)),
    )


def save_settings(settings_file: Path, settings: Settings) -> None:
    data = {
        "General": {
            "isFullscreen": settings.fullscreen,
            "showFpsCounter": settings.show_fps,
            "logLevel": settings.log_level,
        },
        "GUI": {
            "installDirs": [str(d.path) for d in settings.install_dirs],
            "installDirsEnabled": [d.enabled for d in settings.install_dirs],
            "addonInstallDir": str(settings.addon_dir) if settings.addon_dir else "",
        },
        "Launcher": {
            "coreExecutable": str(settings.core_executable) if settings.core_executable else "",
        },
    }
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    settings_file.write_text(tomli_w.dumps(data), encoding="utf-8")
    log.info("Saved settings to %s", settings_file)


def save_context(context: RuntimeConfig) -> None:
    save_settings(context.settings_file, context.settings)
