import logging
from collections import deque
from pathlib import Path
from typing import Optional, Sequence

from .errors import GameNotFoundError
from .models import GameSource, ParsedInvocation, ResolvedGame, RuntimeConfig
from .utils import probe_splash

log = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 5
EXECUTABLE_NAME = "eboot.bin"
PARAM_SFO = Path("sce_sys") / "param.sfo"
FOLDER_SUFFIXES = ("-UPDATE", "-patch")


def is_game_dir(path: Path, game_id: str) -> bool:
    return (path.name == game_id
            and (path / PARAM_SFO).is_file()
            and (path / EXECUTABLE_NAME).is_file())


def find_game_by_id(root: Path, game_id: str, max_depth: int = MAX_SEARCH_DEPTH) -> Optional[Path]:
    """Breadth-first search below ``root`` for a folder named ``game_id``.

    The folder must look like a dumped game (``sce_sys/param.sfo`` and
    ``eboot.bin``); the returned path is its ``eboot.bin``. ``root`` itself is
    depth 0. Unreadable directories are skipped.
    """
    q = deque([(root, 0)])
    while q:
        cur, depth = q.popleft()
        if depth > max_depth:
            continue
        if is_game_dir(cur, game_id):
            return cur / EXECUTABLE_NAME
        try:
            entries = sorted(cur.iterdir(), key=lambda p: p.name)
        except OSError:
            continue
        for d in entries:
            if d.is_dir():
                q.append((d, depth + 1))
    return None


def resolve_game_path(raw: str, install_dirs: Sequence[Path],
                      max_depth: int = MAX_SEARCH_DEPTH) -> Optional[Path]:
    """Existing path -> returned as is. Otherwise ``raw`` is a game ID and
    each install dir is searched in order; ``None`` when nothing matches."""
    direct = Path(raw)
    if direct.exists():
        return direct

    for install_dir in install_dirs:
        found = find_game_by_id(Path(install_dir), raw, max_depth)
        if found is not None:
            log.info("Found game %s in %s", raw, install_dir)
            return found
    return None


def resolve_game_folder(executable: Path, override: Optional[Path] = None) -> Path:
    if override is not None:
        return override

    game_folder = executable.parent
    name = game_folder.name
    # patches and updates ship next to the base game: CUSA00001-UPDATE -> CUSA00001
    if name.endswith(FOLDER_SUFFIXES):
        base_name = name[:name.rfind("-")]
        if base_name and game_folder.with_name(base_name).is_dir():
            return game_folder.with_name(base_name)
    return game_folder


def resolve_game(invocation: ParsedInvocation, context: RuntimeConfig) -> ResolvedGame:
    raw = invocation.game_path or ""
    if not raw:
        # Path("") is ".", which always exists
        raise GameNotFoundError(raw)
    direct = Path(raw)
    source = GameSource.DIRECT_PATH if direct.exists() else GameSource.ID_LOOKUP

    executable = resolve_game_path(raw, context.game_install_dirs())
    if executable is None or not executable.exists():
        raise GameNotFoundError(raw)

    if executable.is_dir() and (executable / EXECUTABLE_NAME).is_file():
        executable = executable / EXECUTABLE_NAME

    game_folder = resolve_game_folder(executable, invocation.game_folder_override)
    log.info("Game executable: %s (%s)", executable, source.value)
    log.info("Game folder: %s", game_folder)
    return ResolvedGame(
        executable_path=executable,
        game_folder=game_folder,
        source=source,
        raw=raw,
        splash=probe_splash(game_folder),
    )
