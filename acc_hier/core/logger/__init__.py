# Path: acc_hier/core/logger/__init__.py
"""
acc_hier Logger Package

IPO-aware logging for the Account Hierarchy Engine.

Provides separate log streams for:
- INPUT layer (row loading, rule lookups)
- PROCESS layer (hierarchy, validation, reconciliation)
- OUTPUT layer (formatters)
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
