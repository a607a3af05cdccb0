from pathlib import Path
from typing import Optional

from .models import RuntimeConfig
from .settings import load_settings
from .utils import default_user_dir, ensure_directory

CONFIG_FILENAME = "config.toml"
LOG_DIRNAME = "log"

def ensure_user_dir(user_dir: Path) -> None:
    if not ensure_directory(user_dir, "user"):
        raise SystemExit(f"User directory could not be created: {user_dir}")

def create_context(user_dir: Optional[Path] = None) -> RuntimeConfig:
    user_dir = Path(user_dir) if user_dir else default_user_dir()
    settings_file = user_dir / CONFIG_FILENAME
    return RuntimeConfig(
        settings=load_settings(settings_file),
        settings_file=settings_file,
        user_dir=user_dir,
    )
