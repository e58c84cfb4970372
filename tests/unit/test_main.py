# Path: tests/unit/test_main.py
"""
Unit Tests for main.py

Tests the CLI entry point functionality including:
- Banner
- Argument parsing
- Single-report and batch runs
- Exit codes
"""

from unittest.mock import patch

import pytest

from acc_hier.main import build_parser, initialize_system, main, print_banner
from acc_hier.process.settings import EngineSettings


@pytest.fixture
def cli_env(mock_env_vars, reset_singletons):
    """Test environment with file logging switched off."""
    with patch('acc_hier.main.setup_ipo_logging') as mock_setup:
        yield mock_setup


@pytest.fixture
def report_files(write_json, sample_report_rows, sample_classifications):
    rules = {code: state.to_dict() for code, state in sample_classifications.items()}
    return {
        'report': write_json('2024-01.json', sample_report_rows),
        'rules': write_json('rules.json', rules),
    }


class TestPrintBanner:
    """Test banner printing."""

    def test_print_banner_outputs_text(self, capsys):
        """print_banner should output text."""
        print_banner()
        captured = capsys.readouterr()

        assert 'ACC_HIER' in captured.out
        assert 'Account Hierarchy Engine' in captured.out

    def test_banner_is_ascii_only(self, capsys):
        """Banner should contain only ASCII characters."""
        print_banner()
        captured = capsys.readouterr()

        for char in captured.out:
            assert ord(char) < 128, f"Non-ASCII character found: {char}"


class TestArgumentParsing:
    """Test command line argument parsing."""

    def test_reports_are_required(self):
        """At least one report path is needed."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_repeatable_format(self):
        """--format can be given several times."""
        args = build_parser().parse_args(['a.json', '-f', 'json', '-f', 'csv', '-q'])

        assert args.formats == ['json', 'csv']
        assert args.quiet is True
        assert args.rules is None


class TestInitializeSystem:
    """System initialization."""

    def test_logging_configured_when_log_dir_set(self, mock_config, temp_dir):
        """File logging is set up from config."""
        mock_config.get.side_effect = lambda key, default=None: {
            'log_dir': temp_dir / 'logs', 'log_level': 'INFO', 'log_console': False,
        }.get(key, default)

        with patch('acc_hier.main.setup_ipo_logging') as mock_setup, \
                patch('acc_hier.main.EngineSettings.from_config', return_value=EngineSettings()):
            initialize_system(mock_config)

        mock_setup.assert_called_once_with(
            log_dir=temp_dir / 'logs', log_level='INFO', console_output=False
        )

    def test_returns_settings(self, mock_config):
        """Settings are built from the same config."""
        with patch('acc_hier.main.setup_ipo_logging') as mock_setup:
            settings = initialize_system(mock_config)

        mock_setup.assert_not_called()
        assert settings.max_workers == 2


class TestMain:
    """End-to-end CLI runs."""

    def test_valid_report_exit_zero(self, cli_env, report_files, capsys, temp_dir):
        """A valid report returns 0 and writes configured outputs."""
        code = main([str(report_files['report']), '--rules', str(report_files['rules'])])
        out = capsys.readouterr().out

        assert code == 0
        assert 'All 1 reports valid' in out
        assert (temp_dir / 'output' / 'validation_2024-01.json').exists()
        assert (temp_dir / 'output' / 'validation_2024-01.txt').exists()

    def test_missing_rules_exit_one(self, cli_env, report_files, capsys):
        """Without rules nothing reconciles."""
        code = main([str(report_files['report']), '-q'])

        assert code == 1
        assert '1 of 1 reports need attention' in capsys.readouterr().out

    def test_batch_run(self, cli_env, report_files, write_json, capsys):
        """Several reports go through the revalidator."""
        empty = write_json('empty.json', [])
        code = main([
            str(report_files['report']), str(empty),
            '--rules', str(report_files['rules']), '-q',
        ])

        assert code == 1
        assert '1 of 2 reports need attention' in capsys.readouterr().out

    def test_explicit_output_dir_and_format(self, cli_env, report_files, temp_dir):
        """--output-dir and --format override configuration."""
        target = temp_dir / 'custom'
        main([
            str(report_files['report']), '--rules', str(report_files['rules']),
            '-o', str(target), '-f', 'csv', '-q',
        ])

        assert [p.name for p in target.iterdir()] == ['validation_2024-01.csv']

    def test_missing_file_exit_two(self, cli_env, temp_dir, capsys):
        """Input errors return 2."""
        code = main([str(temp_dir / 'nope.json'), '-q'])

        assert code == 2
        assert 'File not found' in capsys.readouterr().out
