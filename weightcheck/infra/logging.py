# weightcheck/infra/logging.py
# -*- coding: utf-8 -*-

"""
Logging setup for weightcheck entry points.

Library modules only call `get_logger(__name__)`. Handlers are attached
here by whichever entry point runs (a script, the presets smoke CLI, a
test), so importing the package never configures logging.

    from weightcheck.infra.logging import init_logging, get_logger

    init_logging(level="INFO", write_output=True)   # logs/<script>__<ts>.log
    log = get_logger(__name__)

WEIGHTCHECK_LOG_LEVEL, if set, wins over the `level` argument.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_LEVEL_ENV = "WEIGHTCHECK_LOG_LEVEL"

_DEFAULT_LOGS_DIR = Path("logs")
_LOG_FORMAT = "[{asctime}][{levelname}][{name}] {message}"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# set by init_logging() when a file handler is attached
_current_log_file: Optional[Path] = None


def _run_log_path(logs_dir: Optional[Path]) -> Path:
    """
    logs/<script>__YYYYmmdd-HHMMSS.log for the running script
    (e.g. bulk_compliance__20260119-174709.log).
    """
    base_dir = Path(logs_dir) if logs_dir is not None else _DEFAULT_LOGS_DIR
    script = Path(sys.argv[0] or "").stem
    if script in {"", "-m", "-c", "__main__"}:
        script = "weightcheck"
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    return base_dir / f"{script}__{ts}.log"


def get_current_log_path() -> Optional[Path]:
    """
    Absolute path of the file the last `init_logging()` writes to, or None
    when output goes to stdout only.
    """
    return _current_log_file


def init_logging(
      level: str = "INFO"
    , *
    , force: bool = True
    , write_output: bool = False
    , log_file: Optional[Path] = None
    , logs_dir: Optional[Path] = None
) -> None:
    """
    Configure the root logger: stdout always, plus a file when asked.

    Parameters
    ----------
    level : str, default "INFO"
        Level name; WEIGHTCHECK_LOG_LEVEL overrides it.
    force : bool, default True
        Drop handlers left by an earlier call first.
    write_output : bool, default False
        Write a per-run file under `logs_dir` (default `logs/`).
    log_file : Optional[Path]
        Explicit file to write to; implies file output.
    logs_dir : Optional[Path]
        Directory for the per-run file.
    """
    global _current_log_file

    level = os.getenv(LOG_LEVEL_ENV) or level
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    root = logging.getLogger()
    if force:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT, style="{")

    stream_handler = logging.StreamHandler(stream=sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    _current_log_file = None
    if write_output or log_file is not None:
        path = Path(log_file) if log_file is not None else _run_log_path(logs_dir)
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        _current_log_file = path.resolve()

    get_logger(__name__).debug("Logging configured (level=%s)", logging.getLevelName(numeric_level))


def log_banner(
      log: logging.Logger
    , msg: str
    , *
    , char: str = "="
    , width: int = 60
) -> None:
    """Log `msg` between two bars, for run summaries."""
    bar = char * width
    log.info(bar)
    log.info(msg)
    log.info(bar)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name is not None else "weightcheck")
