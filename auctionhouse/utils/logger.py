"""
Centralized logging configuration for the auction house.

Provides colored console output, an optional log file under the
configured ``log_dir``, and one child logger per subsystem (registry,
escrow, settlement, events, ledgers).
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import colorlog

ROOT_LOGGER = "auctionhouse"
LOG_FILE_NAME = "auctionhouse.log"

_FORMAT = "%(asctime)s [%(name)s] %(levelname)-8s %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class AuctionLogger:
    """Owns the handlers of the ``auctionhouse`` logger tree"""

    _console: Optional[logging.Handler] = None
    _file: Optional[logging.Handler] = None

    @classmethod
    def setup(
        cls,
        level: int = logging.INFO,
        log_dir: Optional[str] = None,
        log_to_file: bool = False,
    ):
        """
        Setup logging configuration.

        The console handler is installed once. Later calls only change the
        level and attach the file log when asked, so every CLI invocation
        may call this.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_dir: Directory for the log file. If None, uses ./logs
            log_to_file: Whether to also write logs to LOG_FILE_NAME
        """
        root_logger = logging.getLogger(ROOT_LOGGER)
        root_logger.setLevel(level)

        if cls._console is None:
            cls._console = colorlog.StreamHandler(sys.stdout)
            cls._console.setFormatter(colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s",
                datefmt=_DATEFMT,
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            ))
            root_logger.addHandler(cls._console)
        cls._console.setLevel(level)

        if log_to_file and cls._file is None:
            directory = Path(log_dir) if log_dir else Path("logs")
            directory.mkdir(exist_ok=True, parents=True)
            cls._file = logging.FileHandler(directory / LOG_FILE_NAME)
            cls._file.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
            root_logger.addHandler(cls._file)
        if cls._file is not None:
            cls._file.setLevel(level)

    @classmethod
    def close_file_log(cls):
        """Detach and close the log file, if one is open."""
        if cls._file is None:
            return
        logging.getLogger(ROOT_LOGGER).removeHandler(cls._file)
        cls._file.close()
        cls._file = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger for a specific subsystem.

        Args:
            name: Subsystem name (e.g., 'registry', 'escrow', 'settlement')

        Returns:
            Logger instance
        """
        if cls._console is None:
            cls.setup()

        return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific subsystem"""
    return AuctionLogger.get_logger(name)


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    log_to_file: bool = False,
):
    """Setup logging configuration"""
    AuctionLogger.setup(level=level, log_dir=log_dir, log_to_file=log_to_file)
