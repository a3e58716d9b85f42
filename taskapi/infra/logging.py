from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from taskapi.config import SETTINGS, PROJECT_ROOT

NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


def setup_logging() -> None:
    log_dir = PROJECT_ROOT / SETTINGS.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskapi.log"

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    level = SETTINGS.log_level.upper()
    logging.basicConfig(level=level, handlers=[file_handler, console_handler], force=True)

    # uvicorn runs with log_config=None, so its loggers propagate here.
    if level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger(__name__).info("Logging to %s at %s", log_file, level)
