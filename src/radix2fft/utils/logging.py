"""
Logging utilities for the FFT engine and benchmark runs.

Every module logs under the ``radix2fft`` package logger, so configuring that
one logger captures the engine's DEBUG records (transform sizes, rejected
calls) together with the benchmark's own messages.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime

PACKAGE_LOGGER = 'radix2fft'

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: str = None,
    name: str = PACKAGE_LOGGER
) -> logging.Logger:
    """
    Configure a logger, the ``radix2fft`` package logger by default.

    Args:
        log_file: Path to log file (if None, only console output)
        level: Level of the logger and of the file handler
        format_string: Custom format string
        name: Logger name

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring replaces the previous handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # rich owns the terminal; only warnings go to stdout
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Logger for a module; names outside the package are nested under it."""
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f'{PACKAGE_LOGGER}.{name}'
    return logging.getLogger(name)


class RunLogger:
    """
    One timestamped DEBUG log file per benchmark run.

    The file handler sits on the package logger, so engine records land in the
    same file as the run's configuration and results banners.
    """

    def __init__(
        self,
        run_name: str,
        log_dir: str = 'logs',
        console_level: int = logging.WARNING
    ):
        self.run_name = run_name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        self.log_file = self.log_dir / f'{run_name}_{timestamp}.log'

        self._package_logger = setup_logging(log_file=str(self.log_file), level=logging.DEBUG)
        for handler in self._package_logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(console_level)

        self.logger = get_logger(run_name)

    def info(self, msg: str):
        self.logger.info(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def log_config(self, config: dict):
        """Log run configuration."""
        self.logger.info("=" * 60)
        self.logger.info("BENCHMARK CONFIGURATION")
        self.logger.info("=" * 60)
        for key, value in config.items():
            self.logger.info(f"  {key}: {value}")
        self.logger.info("=" * 60)

    def log_results(self, results: dict, title: str = "RESULTS"):
        """Log run results."""
        self.logger.info("=" * 60)
        self.logger.info(title)
        self.logger.info("=" * 60)
        self._log_dict(results, indent=2)
        self.logger.info("=" * 60)

    def _log_dict(self, d: dict, indent: int = 0):
        prefix = " " * indent
        for key, value in d.items():
            if isinstance(value, dict):
                self.logger.info(f"{prefix}{key}:")
                self._log_dict(value, indent + 2)
            elif isinstance(value, float):
                self.logger.info(f"{prefix}{key}: {value:.4e}")
            else:
                self.logger.info(f"{prefix}{key}: {value}")

    def close(self):
        """Detach and close the run's handlers from the package logger."""
        for handler in list(self._package_logger.handlers):
            self._package_logger.removeHandler(handler)
            handler.close()
        self._package_logger.setLevel(logging.NOTSET)
