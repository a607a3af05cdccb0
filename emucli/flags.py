"""Table of every flag the front end understands.

Each entry says how many tokens the flag consumes, how its value is checked
(``FlagKind``) and what it changes (``FlagEffect``). The parser walks this
table; nothing here touches state.
"""
from typing import Dict, Optional, Tuple

from .models import FlagEffect, FlagKind, FlagSpec

PROG = "emucli"
SEPARATOR = "--"


def _flag(names: Tuple[str, ...], kind: FlagKind, effect: FlagEffect,
          help: str, metavar: str = "") -> FlagSpec:
    return FlagSpec(
        name=names[-1],
        aliases=frozenset(names),
        arity=0 if kind is FlagKind.NONE else 1,
        kind=kind,
        effect=effect,
        help=help,
        metavar=metavar,
    )


FLAGS: Tuple[FlagSpec, ...] = (
    _flag(("-g", "--game"), FlagKind.TEXT, FlagEffect.SET_GAME,
          "Specify game path to launch", "<path|ID>"),
    _flag(("-p", "--patch"), FlagKind.TEXT, FlagEffect.SET_PATCH_FILE,
          "Apply specified patch file", "<patch_file>"),
    _flag(("-i", "--ignore-game-patch"), FlagKind.NONE, FlagEffect.IGNORE_GAME_PATCH,
          "Disable automatic loading of game patch"),
    _flag(("-f", "--fullscreen"), FlagKind.BOOL, FlagEffect.SET_FULLSCREEN,
          "Specify window initial fullscreen state. Does not overwrite the config file.",
          "<true|false>"),
    _flag(("--add-game-folder",), FlagKind.DIR, FlagEffect.ADD_GAME_FOLDER,
          "Adds a new game folder to the config.", "<folder>"),
    _flag(("--set-addon-folder",), FlagKind.DIR, FlagEffect.SET_ADDON_FOLDER,
          "Sets the addon folder to the config.", "<folder>"),
    _flag(("--log-append",), FlagKind.NONE, FlagEffect.LOG_APPEND,
          "Append log output to file instead of overwriting it."),
    _flag(("--override-root",), FlagKind.DIR, FlagEffect.OVERRIDE_ROOT,
          "Override the game root folder. Default is the parent of game path", "<folder>"),
    _flag(("--wait-for-debugger",), FlagKind.NONE, FlagEffect.WAIT_FOR_DEBUGGER,
          "Wait for debugger to attach"),
    _flag(("--wait-for-pid",), FlagKind.INT, FlagEffect.WAIT_FOR_PID,
          "Wait for process with specified PID to stop", "<pid>"),
    _flag(("--config-clean",), FlagKind.NONE, FlagEffect.CONFIG_CLEAN,
          "Run the emulator with the default config values, ignores the config file(s) entirely."),
    _flag(("--config-global",), FlagKind.NONE, FlagEffect.CONFIG_GLOBAL,
          "Run the emulator with the base config file only, ignores game specific configs."),
    _flag(("--show-fps",), FlagKind.NONE, FlagEffect.SHOW_FPS,
          "Enable FPS counter display at startup"),
    _flag(("-h", "--help"), FlagKind.NONE, FlagEffect.HELP,
          "Display this help message"),
)

_BY_SPELLING: Dict[str, FlagSpec] = {alias: spec for spec in FLAGS for alias in spec.aliases}


def lookup(token: str) -> Optional[FlagSpec]:
    return _BY_SPELLING.get(token)


def _spellings(spec: FlagSpec) -> str:
    # short spelling first: "-g, --game"
    names = sorted(spec.aliases, key=lambda s: (len(s), s))
    text = ", ".join(names)
    return f"{text} {spec.metavar}" if spec.metavar else text


def usage_text() -> str:
    lines = [
        f"Usage: {PROG} [options] <elf or eboot.bin path>",
        "Options:",
    ]
    rows = [(_spellings(s), s.help) for s in FLAGS]
    rows.insert(1, (f"{SEPARATOR} ...",
                    'Parameters passed to the game ELF. Needs to be at the end of the line, '
                    'and everything after "--" is a game argument.'))
    width = max(len(left) for left, _ in rows) + 2
    for left, text in rows:
        lines.append(f"  {left.ljust(width)}{text}")
    return "\n".join(lines)
