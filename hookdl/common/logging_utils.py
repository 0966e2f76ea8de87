"""Logging utilities for consistent logging across modules."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def setup_logging(log_dir: Optional[str] = None) -> None:
    """Setup logging configuration."""
    log_dir = log_dir or os.getenv("HOOKDL_LOG_DIR", "logs")
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_path / "hookdl.log"),
            logging.StreamHandler()
        ]
    )


def log_server_message(message: str, log: Optional[logging.Logger] = None) -> None:
    """Log server-related messages."""
    (log or logging.getLogger()).info(f"[SERVER] {message}")
