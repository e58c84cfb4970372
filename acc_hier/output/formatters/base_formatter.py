# Path: acc_hier/output/formatters/base_formatter.py
"""
Base Formatter and Formatter Registry

Abstract base class for output formatters and a registry
to look them up by format name.

To add a new format (e.g., HTML, Excel):
1. Subclass BaseFormatter
2. Implement format_result()
3. Register via FormatterRegistry.register()
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Type

from acc_hier.process.engine import ReportValidationResult


class BaseFormatter(ABC):
    """
    Abstract base for result formatters.

    Each subclass renders a ReportValidationResult into a specific format.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Short name for this format (e.g., 'json', 'text')."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension including dot (e.g., '.json', '.txt')."""

    @abstractmethod
    def format_result(self, result: ReportValidationResult) -> str:
        """
        Render result to string.

        Args:
            result: ReportValidationResult to render

        Returns:
            Formatted string representation
        """

    def write_result(self, result: ReportValidationResult, output_path: Path) -> Path:
        """
        Write result to file.

        Args:
            result: ReportValidationResult to render
            output_path: Directory to write into

        Returns:
            Path to the written file
        """
        output_path.mkdir(parents=True, exist_ok=True)
        filepath = output_path / self._build_filename(result)

        content = self.format_result(result)
        filepath.write_text(content, encoding='utf-8')
        return filepath

    def _build_filename(self, result: ReportValidationResult) -> str:
        """Build output filename from the report id."""
        report_id = (result.report_id or 'report').replace(' ', '_').replace('/', '-')
        return f"validation_{report_id}{self.file_extension}"


class FormatterRegistry:
    """
    Registry of available formatters.

    Lookup by format name. The ReportWriter uses this to
    find the right formatter for each requested output format.
    """

    _formatters: Dict[str, Type[BaseFormatter]] = {}

    @classmethod
    def register(cls, formatter_class: Type[BaseFormatter]) -> None:
        """Register a formatter class."""
        instance = formatter_class()
        cls._formatters[instance.format_name] = formatter_class

    @classmethod
    def get(cls, format_name: str) -> Optional[BaseFormatter]:
        """Get a formatter instance by name."""
        formatter_class = cls._formatters.get(format_name)
        if formatter_class:
            return formatter_class()
        return None

    @classmethod
    def get_available(cls) -> list[str]:
        """Return list of registered format names."""
        return list(cls._formatters.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations (for testing)."""
        cls._formatters.clear()


__all__ = ['BaseFormatter', 'FormatterRegistry']
