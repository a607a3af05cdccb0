"""Log sink for one run.

The log file is truncated on every start unless ``--log-append`` was given.
"""
import logging
from pathlib import Path

LOG_FILENAME = "emucli.log"
LOG_FORMAT = "%(asctime)s [%(levelname)5s] %(name)s: %(message)s"


def setup_logging(log_dir: Path, append: bool = False, level: str = "INFO") -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # drop handlers from an earlier call so records are not written twice
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_file, mode="a" if append else "w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    return log_file
