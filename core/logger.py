"""
Logging configuration for Coin Dashboard.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path


def default_log_dir() -> Path:
    """Per-user log directory."""
    if os.name == "nt":  # Windows
        return Path(os.environ.get("APPDATA", "")) / "coin-dashboard" / "logs"
    return Path.home() / ".config" / "coin-dashboard" / "logs"


def setup_logging(log_dir: Path | None = None, log_level: int = logging.INFO) -> None:
    """
    Setup logging configuration.

    Args:
        log_dir: Directory to save log files. If None, uses default user data directory.
        log_level: Logging level (default: logging.INFO)
    """
    if log_dir is None:
        log_dir = default_log_dir()

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"

    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))

    logging.info(f"Logging initialized. Log file: {log_file}")
