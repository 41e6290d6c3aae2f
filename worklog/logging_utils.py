from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def init_logger(name: str, log_dir: Path | None, level: str = "INFO") -> logging.Logger:
    """Configure the ``worklog`` logger tree for a CLI entry point.

    Library modules log through ``logging.getLogger(__name__)`` and inherit the
    handlers attached here. ``log_dir=None`` keeps output on the console only.
    """
    root = logging.getLogger("worklog")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not root.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_dir / f"{name}.log", maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    return root.getChild(name)
