# Path: acc_hier/output/report_writer.py
"""
Report Writer

Writes ReportValidationResults through the registered formatters.

Usage:
    from acc_hier.output import ReportWriter

    writer = ReportWriter()
    paths = writer.write(result, formats=['json', 'text'])
    print(writer.to_console(result))
"""

from pathlib import Path
from typing import Optional

from acc_hier.config_loader import ConfigLoader
from acc_hier.core.errors import ConfigurationError
from acc_hier.core.logger.ipo_logging import get_output_logger
from acc_hier.process.engine import ReportValidationResult

from .formatters import (
    FormatterRegistry,
    JsonFormatter,
    TextFormatter,
    CsvFormatter,
)


def _register_defaults() -> None:
    """Register built-in formatters."""
    FormatterRegistry.register(JsonFormatter)
    FormatterRegistry.register(TextFormatter)
    FormatterRegistry.register(CsvFormatter)


# Auto-register on module import
_register_defaults()


class ReportWriter:
    """
    Writes validation results to files in one or more formats.

    Example:
        writer = ReportWriter(config)
        paths = writer.write(result)
        console_text = writer.to_console(result)
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize report writer.

        Args:
            config: ConfigLoader instance (creates one if not provided)
        """
        self.config = config or ConfigLoader()
        self.logger = get_output_logger('report_writer')

    def write(
        self,
        result: ReportValidationResult,
        output_dir: Optional[Path] = None,
        formats: Optional[list[str]] = None,
    ) -> list[Path]:
        """
        Write result in each requested format.

        Args:
            result: Result to write
            output_dir: Target directory (defaults to ACC_HIER_OUTPUT_DIR)
            formats: Format names (defaults to ACC_HIER_OUTPUT_FORMATS)

        Returns:
            Paths of the written files

        Raises:
            ConfigurationError: If no output directory is known
        """
        output_dir = output_dir or self.config.get('output_dir')
        if output_dir is None:
            raise ConfigurationError("No output directory: pass output_dir or set ACC_HIER_OUTPUT_DIR")
        formats = formats or self.config.get('output_formats') or ['json']

        paths = []
        for format_name in formats:
            formatter = FormatterRegistry.get(format_name)
            if formatter is None:
                self.logger.warning(f"Unknown output format '{format_name}', skipped")
                continue
            path = formatter.write_result(result, Path(output_dir))
            self.logger.info(f"Wrote {format_name} output: {path}")
            paths.append(path)
        return paths

    def to_console(self, result: ReportValidationResult) -> str:
        """Render result as console text (without the full tree)."""
        return TextFormatter(show_tree=False).format_result(result)


__all__ = ['ReportWriter']
