#!/usr/bin/env python3
# Path: acc_hier/main.py
"""
Account Hierarchy Engine (acc_hier) - Main Entry Point

Validates the classification of financial reports against a rule table.

Data Flow:
    INPUT:   report JSON files + rule table JSON
    PROCESS: hierarchy building, family validation, reconciliation
    OUTPUT:  console summary, optional JSON/text/CSV files

Usage:
    acc-hier report.json --rules rules.json
    acc-hier 2024-*.json --rules rules.json --output-dir out/ --format json --format csv
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from acc_hier.config_loader import ConfigLoader
from acc_hier.core.errors import AccHierError
from acc_hier.core.logger import setup_ipo_logging, get_input_logger
from acc_hier.loaders.json_files import read_report_file, read_rules_file
from acc_hier.loaders.rule_manager import InMemoryRuleManager
from acc_hier.output.report_writer import ReportWriter
from acc_hier.process.engine import ReportValidationEngine
from acc_hier.process.revalidation.revalidator import RetroactiveRevalidator
from acc_hier.process.settings import EngineSettings
from acc_hier.constants import (
    STATUS_OK, STATUS_FAIL,
    MENU_HEADER,
)


def print_banner() -> None:
    """Print application banner."""
    print()
    print(MENU_HEADER)
    print("  ACC_HIER - Account Hierarchy Engine")
    print("  Classification Validation for Financial Reports")
    print(MENU_HEADER)
    print()


def initialize_system(config: ConfigLoader) -> EngineSettings:
    """
    Set up logging and build engine settings.

    Args:
        config: ConfigLoader instance

    Returns:
        EngineSettings
    """
    log_dir = config.get('log_dir')
    if log_dir is not None:
        setup_ipo_logging(
            log_dir=log_dir,
            log_level=config.get('log_level'),
            console_output=config.get('log_console'),
        )
    return EngineSettings.from_config(config)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='acc-hier',
        description='acc_hier - Account Hierarchy Engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  acc-hier report.json --rules rules.json
  acc-hier jan.json feb.json --rules rules.json --output-dir out --format json
        """
    )

    parser.add_argument(
        'reports',
        nargs='+',
        type=Path,
        help='Report JSON files (list of rows or {"report_id", "rows"})'
    )

    parser.add_argument(
        '--rules', '-r',
        type=Path,
        help='Rule table JSON (code -> classification)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=Path,
        help='Write result files into this directory'
    )

    parser.add_argument(
        '--format', '-f',
        action='append',
        dest='formats',
        help='Output format (json, text, csv); repeatable'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress banner and per-report console output'
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for acc_hier.

    Returns:
        Exit code (0 all reports valid, 1 some failed, 2 input error)
    """
    args = build_parser().parse_args(argv)

    if not args.quiet:
        print_banner()

    try:
        config = ConfigLoader()
        settings = initialize_system(config)
        logger = get_input_logger('main')

        rules = read_rules_file(args.rules) if args.rules else {}
        manager = InMemoryRuleManager(rules)
        reports = [read_report_file(path) for path in args.reports]
        logger.info(f"Validating {len(reports)} reports against {len(manager)} rules")

        if len(reports) == 1:
            report_id, rows = reports[0]
            results = [ReportValidationEngine(settings).validate_report(rows, manager, report_id)]
        else:
            results = RetroactiveRevalidator(settings).revalidate(reports, manager).results

        writer = ReportWriter(config)
        for result in results:
            if not args.quiet:
                print(writer.to_console(result))
            if args.output_dir or config.get('output_dir'):
                for path in writer.write(result, args.output_dir, args.formats):
                    print(f"{STATUS_OK} Wrote {path}")

        failing = [r.report_id for r in results if not r.is_valid]
        if failing:
            print(f"{STATUS_FAIL} {len(failing)} of {len(results)} reports need attention")
            return 1
        print(f"{STATUS_OK} All {len(results)} reports valid")
        return 0

    except AccHierError as e:
        print(f"\n{STATUS_FAIL} Error: {e}")
        return 2

    except KeyboardInterrupt:
        print("\n[Interrupted]")
        return 130


if __name__ == '__main__':
    sys.exit(main())
