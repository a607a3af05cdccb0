# emucli/launch.py
from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .models import ParsedInvocation, ResolvedGame, RuntimeConfig
from .utils import pid_alive

log = logging.getLogger(__name__)

MAX_GAME_ARGS = 32

# ──────────────────────────────────────────────────────────────────────────────
# Small helpers
# ──────────────────────────────────────────────────────────────────────────────

def _flag(value: bool) -> str:
    return "1" if value else "0"

def log_game_arguments(args: Sequence[str]) -> List[str]:
    """Log the game arguments and return the ones that are passed on."""
    passed = list(args[:MAX_GAME_ARGS])
    for i, arg in enumerate(passed):
        log.info("Game argument %d: %s", i, arg)
    if len(args) > MAX_GAME_ARGS:
        log.error("Too many game arguments, only passing the first %d", MAX_GAME_ARGS)
    return passed

def wait_for_pid(pid: int, poll_interval: float = 0.1) -> None:
    """Block until process ``pid`` is gone."""
    log.info("Waiting for process %d to stop", pid)
    while pid_alive(pid):
        time.sleep(poll_interval)
    log.info("Process %d stopped", pid)

def build_environment(
    game: ResolvedGame,
    invocation: ParsedInvocation,
    context: RuntimeConfig,
    base: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Session state for the core, passed as environment variables only."""
    env = dict(os.environ if base is None else base)
    env["EMUCLI_GAME_FOLDER"] = str(game.game_folder)
    env["EMUCLI_FULLSCREEN"] = _flag(context.effective_fullscreen())
    env["EMUCLI_SHOW_FPS"] = _flag(context.effective_show_fps())
    env["EMUCLI_IGNORE_GAME_PATCH"] = _flag(context.ignore_game_patches)
    env["EMUCLI_WAIT_FOR_DEBUGGER"] = _flag(invocation.wait_for_debugger)
    env["EMUCLI_CONFIG_MODE"] = context.config_mode.value
    if context.patch_file:
        env["EMUCLI_PATCH_FILE"] = context.patch_file
    if context.settings.addon_dir:
        env["EMUCLI_ADDON_DIR"] = str(context.settings.addon_dir)
    if game.splash:
        env["EMUCLI_SPLASH"] = str(game.splash.path)
    return env

def _spawn_and_wait(argv: List[str], cwd: str, env: Dict[str, str]) -> Tuple[bool, str, int]:
    try:
        p = subprocess.Popen(argv, cwd=cwd, env=env)
    except OSError as e:
        return False, str(e), 1

    # Only wait if the object looks like a real Popen (has .wait())
    if hasattr(p, "wait"):
        code = p.wait()
        return code == 0, f"Core exited with code {code}.", code
    return True, "Launched.", 0

# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

def run_game(
    game: ResolvedGame,
    invocation: ParsedInvocation,
    context: RuntimeConfig,
) -> Tuple[bool, str, int]:
    """
    Hand the resolved game to the emulator core.

    argv is ``[core, executable, *game_args]`` with the game folder as cwd;
    everything else travels in ``EMUCLI_*`` environment variables.
    Returns (ok, message, exit code).
    """
    core = context.settings.core_executable
    if core is None:
        return False, "No emulator core configured (set [Launcher] coreExecutable in config.toml).", 1
    if not Path(core).is_file():
        return False, f"Emulator core not found: {core}", 1

    if invocation.wait_pid is not None:
        wait_for_pid(invocation.wait_pid)

    args = log_game_arguments(invocation.game_args)
    argv = [str(core), str(game.executable_path)] + args
    env = build_environment(game, invocation, context)
    log.info("Starting core: %s", argv)
    return _spawn_and_wait(argv, cwd=str(game.game_folder), env=env)
