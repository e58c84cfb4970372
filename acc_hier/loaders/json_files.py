# Path: acc_hier/loaders/json_files.py
"""
JSON File Loader for acc_hier

Reads report rows and rule tables from JSON files.

Report file: either a list of row mappings, or
    {"report_id": "2024-01", "rows": [...]}
Rule file: mapping code -> {tipo, categoria_1, sub_categoria, clasificacion}
"""

import json
from pathlib import Path
from typing import Any

from acc_hier.core.errors import AccHierError
from acc_hier.core.logger.ipo_logging import get_input_logger


logger = get_input_logger('json_files')


class InputFileError(AccHierError):
    """Input file missing or not in the expected shape."""


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise InputFileError(f"File not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InputFileError(f"Invalid JSON in {path}: {e}") from e


def read_report_file(path: Path) -> tuple[str, list[dict[str, Any]]]:
    """
    Read one report file.

    Args:
        path: JSON file path

    Returns:
        Tuple of (report_id, rows); report_id defaults to the file stem

    Raises:
        InputFileError: If the file is missing or malformed
    """
    path = Path(path)
    data = _read_json(path)

    if isinstance(data, dict):
        report_id = str(data.get('report_id') or path.stem)
        rows = data.get('rows')
    else:
        report_id = path.stem
        rows = data

    if not isinstance(rows, list):
        raise InputFileError(f"{path}: expected a list of rows")

    logger.info(f"Read {len(rows)} rows for report {report_id} from {path.name}")
    return report_id, rows


def read_rules_file(path: Path) -> dict[str, Any]:
    """
    Read a rule table file.

    Args:
        path: JSON file path

    Returns:
        Mapping code -> classification dict

    Raises:
        InputFileError: If the file is missing or not a JSON object
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise InputFileError(f"{path}: expected an object mapping code -> classification")
    logger.info(f"Read {len(data)} classification rules from {path.name}")
    return data


__all__ = ['InputFileError', 'read_report_file', 'read_rules_file']
