#!/usr/bin/env python3
"""
Smoke test for the emucli front end.

Checks:
- --add-game-folder persists the install dir
- ID lookup across install dirs
- -UPDATE folder resolves to the base game folder
- splash probe
- launch hand-off (Popen mocked)
- -- game arguments reach the core verbatim
"""
import shutil, tempfile
from pathlib import Path

from emucli.cli import main
from emucli.settings import load_settings


def _touch(p: Path, data: bytes = b""):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data or b"stub")


def _png(w=1920, h=1080):
    from PIL import Image
    import io
    buf = io.BytesIO()
    Image.new("RGB", (w, h), (12, 34, 56)).save(buf, format="PNG")
    return buf.getvalue()


def mock_popen_calls():
    calls = []
    class _P:
        def __init__(self, *a, **kw):
            calls.append((a, kw))
    return _P, calls


def test_smoke():
    tmp = Path(tempfile.mkdtemp(prefix="emucli_test_"))
    try:
        user = tmp / "user"
        games = tmp / "Games"
        games.mkdir()

        # Base game + update dumped side by side
        base = games / "ps4" / "CUSA00001"
        _touch(base / "sce_sys" / "param.sfo")
        _touch(base / "sce_sys" / "pic1.png", _png())
        _touch(base / "eboot.bin")
        update = games / "ps4" / "CUSA00001-UPDATE"
        _touch(update / "sce_sys" / "param.sfo")
        _touch(update / "eboot.bin")

        core = tmp / "core"
        _touch(core)

        assert main(["emucli", "--add-game-folder", str(games)], user_dir=user) == 0
        settings = load_settings(user / "config.toml")
        assert [d.path for d in settings.install_dirs] == [games], "install dir not saved"

        # point the launcher at our fake core
        from emucli.settings import save_settings
        settings.core_executable = core
        save_settings(user / "config.toml", settings)

        # Mock Popen (1): launch by ID
        import emucli.launch as L
        PopenSaved = L.subprocess.Popen
        FakePopen, calls = mock_popen_calls()
        L.subprocess.Popen = FakePopen  # type: ignore
        try:
            code = main(["emucli", "-g", "CUSA00001", "--show-fps", "--", "--verbose", "-x"], user_dir=user)
            assert code == 0, f"launch by ID failed: {code}"
            assert calls, "no Popen call captured for ID launch"
            argv = calls[0][0][0]
            env = calls[0][1]["env"]
            assert argv == [str(core), str(base / "eboot.bin"), "--verbose", "-x"]
            assert env["EMUCLI_SHOW_FPS"] == "1"
            assert env["EMUCLI_SPLASH"].endswith("pic1.png")
        finally:
            L.subprocess.Popen = PopenSaved

        # Mock Popen (2): update folder launched directly
        FakePopen, calls = mock_popen_calls()
        L.subprocess.Popen = FakePopen  # type: ignore
        try:
            code = main(["emucli", str(update / "eboot.bin")], user_dir=user)
            assert code == 0
            assert calls[0][1]["cwd"] == str(base), "update did not resolve to base folder"
        finally:
            L.subprocess.Popen = PopenSaved

        # Unknown ID
        assert main(["emucli", "CUSA99999"], user_dir=user) == 1

        print("[OK] Install dir saved:", settings.install_dirs[0].path)
        print("[OK] ID lookup + splash + game args dispatched (mocked).")
        print("[OK] -UPDATE folder resolved to base game.")
        print("[OK] Unknown ID exits 1.")

    finally:
        import logging
        root = logging.getLogger()
        for h in root.handlers[:]:
            if isinstance(h, logging.FileHandler):
                root.removeHandler(h)
                h.close()
        shutil.rmtree(tmp, ignore_errors=True)


if __name__ == "__main__":
    test_smoke()
