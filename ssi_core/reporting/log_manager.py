# ssi_core/reporting/log_manager.py
"""
Log management component.

Handles per-run log files and routing of log lines to file + console.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path


class LogManager:
    """Manages logging setup and cleanup for interpreter runs."""

    @staticmethod
    def setup_run_log(
        run_name: str, log_dir: Path, log_callback: Callable[[str], None]
    ) -> tuple[logging.Logger, logging.FileHandler, Callable[[str], None]]:
        """
        Sets up logging for a run.

        Args:
            run_name: Name of the run (used for log filename and logger name)
            log_dir: Directory where log file will be created
            log_callback: Callback receiving every log line (console, UI)

        Returns:
            Tuple of (logger, handler, log_to_all_function)
        """
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{run_name}.log"
        logger = logging.getLogger(f"ssi_run_{run_name}")
        logger.setLevel(logging.INFO)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

        def log_to_all(message: str):
            logger.info(message.strip())
            log_callback(message)

        return logger, handler, log_to_all

    @staticmethod
    def cleanup_log(logger: logging.Logger, handler: logging.FileHandler):
        handler.close()
        logger.removeHandler(handler)

    @staticmethod
    def run_name(source: Path) -> str:
        """Log name for a run on `source`: <stem>_<YYYYmmdd-HHMMSS>."""
        return f"{Path(source).stem}_{datetime.now().strftime('%Y%m%d-%H%M%S')}"

    @staticmethod
    def archive_log(handler: logging.FileHandler, archive_dir: Path) -> Path:
        """Move a closed run log into `archive_dir`."""
        source = Path(handler.baseFilename)
        archive_dir = Path(archive_dir)
        archive_dir.mkdir(parents=True, exist_ok=True)
        target = archive_dir / source.name
        source.replace(target)
        return target
