# Path: acc_hier/core/logger/ipo_logging.py
"""
IPO-Aware Logging for acc_hier (Account Hierarchy Engine)

Input-Process-Output separated logging for report validation.

This module sets up logging with separate files for:
- INPUT layer (row loading, code parsing, rule manager reads)
- PROCESS layer (level/parent resolution, family validation, reconciliation)
- OUTPUT layer (formatters for diagnostic views)
- Full activity (everything combined)
"""

import logging
import sys
from pathlib import Path


LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LAYER_LOG_FILES = {
    'input': 'input_activity.log',
    'process': 'process_activity.log',
    'output': 'output_activity.log',
}


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name.startswith(self.layer)


def setup_ipo_logging(
    log_dir: Path,
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for acc_hier.

    Creates separate log files for:
    - input_activity.log (INPUT layer)
    - process_activity.log (PROCESS layer)
    - output_activity.log (OUTPUT layer)
    - full_activity.log (all activities combined)

    Args:
        log_dir: Directory for log files
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/acc_hier'),
            log_level='INFO',
            console_output=True
        )
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Full activity log (everything)
    full_handler = logging.FileHandler(log_dir / 'full_activity.log')
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(formatter)
    root_logger.addHandler(full_handler)

    # One file per layer
    for layer, filename in LAYER_LOG_FILES.items():
        handler = logging.FileHandler(log_dir / filename)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        handler.addFilter(IPOFilter(layer))
        root_logger.addHandler(handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'report_rows', 'account_code')

    Returns:
        Logger configured for INPUT layer

    Example:
        logger = get_input_logger('report_rows')
        logger.info("Loading report rows")
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer.

    Args:
        name: Logger name (e.g., 'hierarchy_builder', 'family_validator')

    Returns:
        Logger configured for PROCESS layer

    Example:
        logger = get_process_logger('family_validator')
        logger.info("Validating families")
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'json_formatter')

    Returns:
        Logger configured for OUTPUT layer
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
