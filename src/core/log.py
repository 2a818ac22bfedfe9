from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "quantity_split"

_formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger under the project root logger."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)

def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level.upper())

    # avoid duplicate handlers if called more than once
    if not root.handlers:
        console = logging.StreamHandler()
        console.setFormatter(_formatter)
        root.addHandler(console)
        if log_file is not None:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(_formatter)
            root.addHandler(fh)
    return root
