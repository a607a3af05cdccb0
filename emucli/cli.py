"""Command-line entry point.

This is the only place that turns errors into exit codes:
0 for success and for commands that finish during parsing (help, saving a
folder), 1 for everything else.
"""
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from rich.console import Console

from . import LOG_DIRNAME, create_context, ensure_user_dir
from .errors import ArgumentWarning, EarlyExit, EmuCliError, NoArgumentsError
from .flags import PROG, usage_text
from .launch import run_game
from .logging_setup import setup_logging
from .models import ParsedInvocation, ResolvedGame, RuntimeConfig
from .parser import ArgInterpreter
from .scanning import resolve_game

log = logging.getLogger(__name__)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

Launcher = Callable[[ResolvedGame, ParsedInvocation, RuntimeConfig], Tuple[bool, str, int]]

NO_ARGUMENT_INFO = (
    "This is a CLI application. Pass a game path or ID, "
    f"or run '{PROG} --help' for the list of options."
)


def _error(message: str) -> None:
    err_console.print(f"Error: {message}", style="red", markup=False)


def _warning(warning: ArgumentWarning) -> None:
    err_console.print(f"Warning: {warning}", style="yellow", markup=False)


def main(argv: Optional[Sequence[str]] = None, *,
         user_dir: Optional[Path] = None,
         launcher: Launcher = run_game) -> int:
    tokens = list(sys.argv if argv is None else argv)
    context = create_context(user_dir)
    interpreter = ArgInterpreter(context, on_warning=_warning)

    try:
        invocation = interpreter.parse(tokens)
    except EarlyExit as e:
        if e.message:
            console.print(e.message, markup=False)
        return e.exit_code
    except NoArgumentsError as e:
        err_console.print(NO_ARGUMENT_INFO, markup=False)
        console.print(usage_text(), markup=False)
        return e.exit_code
    except EmuCliError as e:
        _error(str(e))
        return e.exit_code

    ensure_user_dir(context.user_dir)
    log_file = setup_logging(context.user_dir / LOG_DIRNAME,
                             append=context.log_append,
                             level=context.settings.log_level)
    log.info("Logging to %s (append=%s)", log_file, context.log_append)
    for w in interpreter.warnings:
        log.warning("%s", w)

    if not invocation.has_game_argument:
        _error("Please provide a game path or ID.")
        return 1

    if not context.game_install_dirs():
        err_console.print(
            f"Warning: No game folder set. Please set it using:\n"
            f"  {PROG} --add-game-folder <folder_name>",
            style="yellow", markup=False,
        )

    try:
        game = resolve_game(invocation, context)
    except EmuCliError as e:
        log.error("%s", e)
        _error(str(e))
        return e.exit_code

    ok, msg, code = launcher(game, invocation, context)
    if not ok:
        log.error("%s", msg)
        _error(msg)
        return code or 1
    log.info("%s", msg)
    return code
