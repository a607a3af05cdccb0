"""Single-pass interpreter for the command line.

``ArgInterpreter.parse`` walks the tokens left to right once. Flags are looked
up in ``flags.FLAGS``; value flags take exactly the next token. Failures are
raised as the exceptions in ``errors`` and never exit the process, so callers
(and tests) decide what a failure means.
"""
import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from . import flags
from .errors import (
    ArgumentWarning, EarlyExit, NoArgumentsError, PathValidationError, UsageError, UnknownFlagWarning,
)
from .models import ConfigMode, FlagEffect, FlagKind, FlagSpec, ParsedInvocation, RuntimeConfig
from .settings import save_context

_INT_RE = re.compile(r"[+-]?[0-9]+")
MAX_PID = 2**31 - 1

WarningSink = Callable[[ArgumentWarning], None]


class ArgInterpreter:
    def __init__(self, context: RuntimeConfig, on_warning: Optional[WarningSink] = None):
        self.context = context
        self.on_warning = on_warning
        self.warnings: List[ArgumentWarning] = []

    def _warn(self, message: str, category: type = ArgumentWarning) -> None:
        w = category(message)
        self.warnings.append(w)
        if self.on_warning is not None:
            self.on_warning(w)

    # ── value checks ──────────────────────────────────────────────────────

    @staticmethod
    def _convert(spec: FlagSpec, flag: str, value: str):
        if spec.kind is FlagKind.BOOL:
            if value == "true":
                return True
            if value == "false":
                return False
            raise UsageError(f"Invalid argument for {flag}. Use 'true' or 'false'.", flag)
        if spec.kind is FlagKind.INT:
            if not _INT_RE.fullmatch(value) or not 1 <= int(value, 10) <= MAX_PID:
                raise UsageError(f"Invalid PID argument: {value}", flag)
            return int(value, 10)
        if spec.kind is FlagKind.DIR:
            folder = Path(value)
            if not folder.is_dir():
                raise PathValidationError(f"Folder does not exist: {value}", value)
            return folder
        return value

    # ── main loop ─────────────────────────────────────────────────────────

    def parse(self, tokens: Sequence[str]) -> ParsedInvocation:
        """Interpret ``tokens`` (``tokens[0]`` is the program name)."""
        if len(tokens) <= 1:
            raise NoArgumentsError()

        game_path: Optional[str] = None
        game_args: List[str] = []
        override: Optional[Path] = None
        wait_for_debugger = False
        wait_pid: Optional[int] = None

        i = 1
        n = len(tokens)
        while i < n:
            cur = tokens[i]

            if cur == flags.SEPARATOR:
                if i + 1 == n:
                    self._warn("-- is set, but no game arguments are added!")
                game_args.extend(tokens[i + 1:])
                break

            spec = flags.lookup(cur)
            if spec is None:
                # bare token: positional game path, first one wins
                if game_path is None and cur and not cur.startswith("-"):
                    game_path = cur
                else:
                    self._warn(f"Unknown argument: {cur}, see --help for info.", UnknownFlagWarning)
                i += 1
                continue

            value = None
            if spec.arity == 1:
                if i + 1 >= n:
                    raise UsageError(f"Missing argument for {cur}", cur)
                i += 1
                value = self._convert(spec, cur, tokens[i])
            i += 1

            effect = spec.effect
            if effect is FlagEffect.HELP:
                raise EarlyExit(flags.usage_text())
            elif effect is FlagEffect.SET_GAME:
                game_path = value
            elif effect is FlagEffect.SET_PATCH_FILE:
                self.context.patch_file = value
            elif effect is FlagEffect.IGNORE_GAME_PATCH:
                self.context.ignore_game_patches = True
            elif effect is FlagEffect.SET_FULLSCREEN:
                self.context.fullscreen = value
            elif effect is FlagEffect.ADD_GAME_FOLDER:
                self.context.add_game_install_dir(value)
                save_context(self.context)
                raise EarlyExit("Game folder successfully saved.")
            elif effect is FlagEffect.SET_ADDON_FOLDER:
                self.context.set_addon_dir(value)
                save_context(self.context)
                raise EarlyExit("Addon folder successfully saved.")
            elif effect is FlagEffect.LOG_APPEND:
                self.context.log_append = True
            elif effect is FlagEffect.OVERRIDE_ROOT:
                override = value
            elif effect is FlagEffect.WAIT_FOR_DEBUGGER:
                wait_for_debugger = True
            elif effect is FlagEffect.WAIT_FOR_PID:
                wait_pid = value
            elif effect is FlagEffect.CONFIG_CLEAN:
                self.context.config_mode = ConfigMode.CLEAN
            elif effect is FlagEffect.CONFIG_GLOBAL:
                self.context.config_mode = ConfigMode.GLOBAL
            elif effect is FlagEffect.SHOW_FPS:
                self.context.show_fps = True

        return ParsedInvocation(
            game_path=game_path,
            game_args=tuple(game_args),
            game_folder_override=override,
            wait_for_debugger=wait_for_debugger,
            wait_pid=wait_pid,
        )


def parse_args(tokens: Sequence[str], context: RuntimeConfig,
               on_warning: Optional[WarningSink] = None) -> ParsedInvocation:
    return ArgInterpreter(context, on_warning).parse(tokens)
