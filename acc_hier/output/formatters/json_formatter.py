# Path: acc_hier/output/formatters/json_formatter.py
"""
JSON Formatter

Renders a ReportValidationResult as structured JSON: nodes, issues,
family recommendations and the reconciliation summary. Decimals are
written as strings so amounts survive the round trip exactly.
"""

import json

from acc_hier.process.engine import ReportValidationResult
from .base_formatter import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Renders result as JSON."""

    @property
    def format_name(self) -> str:
        return 'json'

    @property
    def file_extension(self) -> str:
        return '.json'

    def format_result(self, result: ReportValidationResult) -> str:
        """Serialize result to JSON string."""
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str)


__all__ = ['JsonFormatter']
