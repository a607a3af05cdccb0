import logging
from pathlib import Path

import pytest

from emucli import create_context


def _touch(p: Path, data: bytes = b""):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data or b"stub")


def make_game(parent: Path, name: str) -> Path:
    """Lay out a dumped game folder and return its eboot.bin."""
    folder = parent / name
    _touch(folder / "sce_sys" / "param.sfo")
    _touch(folder / "eboot.bin")
    return folder / "eboot.bin"


@pytest.fixture
def user_dir(tmp_path):
    return tmp_path / "user"


@pytest.fixture
def context(user_dir):
    return create_context(user_dir)


@pytest.fixture(autouse=True)
def _close_log_files():
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def game_factory():
    return make_game


@pytest.fixture
def touch():
    return _touch
