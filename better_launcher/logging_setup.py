from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from better_launcher.paths import get_paths


def setup_logging(*, level: str | None = None, name: str = "better_launcher") -> logging.Logger:
    level_name = (os.environ.get("LAUNCHER_LOG_LEVEL") or level or "INFO").upper().strip()
    lvl = getattr(logging, level_name, logging.INFO)

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = logging.getLogger()
    root.setLevel(lvl)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler) for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setLevel(lvl)
        sh.setFormatter(fmt)
        root.addHandler(sh)

    try:
        log_path = get_paths().log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            fh = RotatingFileHandler(
                str(log_path),
                maxBytes=1_000_000,
                backupCount=3,
                encoding="utf-8",
            )
            fh.setLevel(lvl)
            fh.setFormatter(fmt)
            root.addHandler(fh)
    except OSError:
        # read-only home: console logging only
        pass

    return logging.getLogger(name)
