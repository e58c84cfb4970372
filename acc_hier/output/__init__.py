# Path: acc_hier/output/__init__.py
"""
Output Module for acc_hier

Generates human-readable and machine-readable outputs from
validation results.

Architecture:
    ReportWriter      - Main entry point for writing results
    FormatterRegistry - Register new output formats

Extensibility:
    - New output formats: subclass BaseFormatter, register with FormatterRegistry
"""

from .formatters import (
    BaseFormatter,
    FormatterRegistry,
    JsonFormatter,
    TextFormatter,
    CsvFormatter,
)
from .report_writer import ReportWriter


__all__ = [
    'BaseFormatter',
    'FormatterRegistry',
    'JsonFormatter',
    'TextFormatter',
    'CsvFormatter',
    'ReportWriter',
]
