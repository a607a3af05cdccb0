from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple


class FlagKind(Enum):
    NONE = "none"       # effect-only, consumes nothing
    TEXT = "text"
    BOOL = "bool"       # literal "true" / "false"
    INT = "int"
    DIR = "dir"         # must be an existing directory


class FlagEffect(Enum):
    HELP = "help"
    SET_GAME = "set_game"
    SET_PATCH_FILE = "set_patch_file"
    IGNORE_GAME_PATCH = "ignore_game_patch"
    SET_FULLSCREEN = "set_fullscreen"
    ADD_GAME_FOLDER = "add_game_folder"
    SET_ADDON_FOLDER = "set_addon_folder"
    LOG_APPEND = "log_append"
    OVERRIDE_ROOT = "override_root"
    WAIT_FOR_DEBUGGER = "wait_for_debugger"
    WAIT_FOR_PID = "wait_for_pid"
    CONFIG_CLEAN = "config_clean"
    CONFIG_GLOBAL = "config_global"
    SHOW_FPS = "show_fps"


class ConfigMode(Enum):
    DEFAULT = "default"
    CLEAN = "clean"     # ignore the config file entirely
    GLOBAL = "global"   # base config only, no per-game configs


class GameSource(Enum):
    DIRECT_PATH = "direct_path"
    ID_LOOKUP = "id_lookup"


@dataclass(frozen=True)
class FlagSpec:
    name: str
    aliases: FrozenSet[str]
    arity: int
    kind: FlagKind
    effect: FlagEffect
    help: str
    metavar: str = ""


@dataclass(frozen=True)
class ParsedInvocation:
    game_path: Optional[str] = None
    game_args: Tuple[str, ...] = ()
    game_folder_override: Optional[Path] = None
    wait_for_debugger: bool = False
    wait_pid: Optional[int] = None

    @property
    def has_game_argument(self) -> bool:
        return self.game_path is not None


@dataclass(frozen=True)
class SplashInfo:
    path: Path
    width: int
    height: int


@dataclass(frozen=True)
class ResolvedGame:
    executable_path: Path
    game_folder: Path
    source: GameSource
    raw: str
    splash: Optional[SplashInfo] = None


@dataclass
class InstallDir:
    path: Path
    enabled: bool = True


@dataclass
class Settings:
    install_dirs: List[InstallDir] = field(default_factory=list)
    addon_dir: Optional[Path] = None
    fullscreen: bool = False
    show_fps: bool = False
    core_executable: Optional[Path] = None
    log_level: str = "INFO"


@dataclass
class RuntimeConfig:
    """Everything the flags can touch for one process run.

    Built once in the entry point and passed to the parser, the locator and
    the launcher. ``fullscreen`` and ``show_fps`` are session overrides and
    never written back to the config file.
    """
    settings: Settings
    settings_file: Path
    user_dir: Path
    patch_file: Optional[str] = None
    ignore_game_patches: bool = False
    fullscreen: Optional[bool] = None
    log_append: bool = False
    config_mode: ConfigMode = ConfigMode.DEFAULT
    show_fps: bool = False

    def game_install_dirs(self) -> List[Path]:
        return [d.path for d in self.settings.install_dirs if d.enabled]

    def add_game_install_dir(self, path: Path) -> bool:
        for d in self.settings.install_dirs:
            if d.path == path:
                return False
        self.settings.install_dirs.append(InstallDir(path=path, enabled=True))
        return True

    def set_addon_dir(self, path: Path) -> None:
        self.settings.addon_dir = path

    def effective_fullscreen(self) -> bool:
        if self.fullscreen is not None:
            return self.fullscreen
        if self.config_mode is ConfigMode.CLEAN:
            return Settings().fullscreen
        return self.settings.fullscreen

    def effective_show_fps(self) -> bool:
        if self.show_fps:
            return True
        if self.config_mode is ConfigMode.CLEAN:
            return Settings().show_fps
        return self.settings.show_fps
