# Path: acc_hier/output/formatters/__init__.py
"""
Result Formatters

Each formatter renders a ReportValidationResult into a specific output
format. Formatters know nothing about validation logic.
"""

from .base_formatter import BaseFormatter, FormatterRegistry
from .json_formatter import JsonFormatter
from .text_formatter import TextFormatter
from .csv_formatter import CsvFormatter

__all__ = [
    'BaseFormatter',
    'FormatterRegistry',
    'JsonFormatter',
    'TextFormatter',
    'CsvFormatter',
]
