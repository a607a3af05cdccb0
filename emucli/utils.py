import csv
import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from PIL import Image

from .models import SplashInfo

log = logging.getLogger(__name__)

SPLASH_RELPATH = Path("sce_sys") / "pic1.png"


def is_windows() -> bool:
    return os.name == "nt"


def default_user_dir() -> Path:
    env = os.environ.get("EMUCLI_USER_DIR")
    if env:
        return Path(env)
    return Path.home() / ".config" / "emucli"


def ensure_directory(path: Path, context: str = "") -> bool:
    if path.exists():
        return True
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        if context:
            log.error("Failed to create %s directory: %s (%s)", context, path, e)
        else:
            log.error("Failed to create directory: %s (%s)", path, e)
        return False
    return True


def probe_splash(game_folder: Path) -> Optional[SplashInfo]:
    """Return the size of the game's splash image, or None if there is no usable one."""
    f = game_folder / SPLASH_RELPATH
    if not f.is_file():
        return None
    try:
        with Image.open(f) as im:
            w, h = im.size
    except OSError as e:
        log.warning("Ignoring unreadable splash %s: %s", f, e)
        return None
    if w <= 0 or h <= 0:
        return None
    return SplashInfo(path=f, width=w, height=h)


def pid_alive(pid: int) -> bool:
    if is_windows():
        # os.kill(pid, 0) terminates the process on Windows
        out = subprocess.run(
            ["tasklist", "/FI", f"PID eq {pid}", "/FO", "CSV", "/NH"],
            capture_output=True, text=True, check=False,
        ).stdout
        # "name.exe","1234","Console",...; PID is the second column
        return any(len(row) > 1 and row[1] == str(pid) for row in csv.reader(out.splitlines()))
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # exists, owned by someone else
        return True
    return True
