"""
Unit Tests for the Command-Line Interface

Tests argument validation and single-pass execution.

Author: foldersync Project
License: MIT
"""

import pytest
from unittest.mock import patch

from foldersync.cli import build_parser, main

from conftest import write, tree_contents


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from SYNC_* variables and any .env file."""
    for name in ("SYNC_CONFIG_PATH", "SYNC_INTERVAL", "SYNC_LOG_LEVEL", "SYNC_JSON_LOGS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestArguments:
    """Test suite for argument validation."""

    def test_missing_arguments_prints_usage(self, capsys):
        """Test that too few arguments exit with usage."""
        with patch("foldersync.cli.Orchestrator") as orchestrator:
            with pytest.raises(SystemExit) as exc_info:
                main(["/src", "/dst", "10"])

        assert exc_info.value.code == 2
        assert "usage:" in capsys.readouterr().err
        orchestrator.assert_not_called()

    def test_non_numeric_interval_prints_usage(self, capsys):
        """Test that a non-integer interval exits with usage."""
        with patch("foldersync.cli.Orchestrator") as orchestrator:
            with pytest.raises(SystemExit) as exc_info:
                main(["/src", "/dst", "ten", "/tmp/log.txt"])

        assert exc_info.value.code == 2
        assert "usage:" in capsys.readouterr().err
        orchestrator.assert_not_called()

    def test_invalid_configuration_exits(self, tmp_path, capsys):
        """Test that a zero interval is reported without starting the loop."""
        with patch("foldersync.cli.Orchestrator") as orchestrator:
            code = main([
                str(tmp_path / "src"), str(tmp_path / "dst"), "0", str(tmp_path / "log.txt")
            ])

        assert code == 2
        err = capsys.readouterr().err
        assert "usage:" in err
        assert "invalid configuration" in err
        orchestrator.assert_not_called()

    def test_parser_normalizes_choices(self):
        """Test case-insensitive option values."""
        args = build_parser().parse_args([
            "/src", "/dst", "5", "/log", "--log-level", "debug", "--hash-algorithm", "MD5"
        ])

        assert args.log_level == "DEBUG"
        assert args.hash_algorithm == "md5"
        assert args.json_logs is None
        assert args.once is False


class TestExecution:
    """Test suite for running the CLI."""

    def test_once_runs_single_pass(self, tmp_path):
        """Test --once mirrors the tree and writes the log file."""
        source = tmp_path / "source"
        replica = tmp_path / "replica"
        log_file = tmp_path / "logs" / "nested" / "sync.log"
        write(source, "a/b.txt", "x")

        code = main([str(source), str(replica), "10", str(log_file), "--once"])

        assert code == 0
        assert tree_contents(replica) == {"a/b.txt": b"x"}
        log_text = log_file.read_text()
        assert "INFO" in log_text
        assert "File created:" in log_text

    def test_once_reports_failure(self, tmp_path):
        """Test --once exits non-zero and logs ERROR when the pass fails."""
        log_file = tmp_path / "sync.log"

        code = main([
            str(tmp_path / "missing"), str(tmp_path / "replica"), "10", str(log_file), "--once"
        ])

        assert code == 1
        log_text = log_file.read_text()
        assert "ERROR" in log_text
        assert "An error occurred during synchronization" in log_text

    def test_loop_started_with_interval(self, tmp_path):
        """Test that without --once the periodic loop is started."""
        with patch("foldersync.cli.Orchestrator") as orchestrator, \
                patch("foldersync.cli.signal.signal"):
            code = main([
                str(tmp_path / "src"), str(tmp_path / "dst"), "30", str(tmp_path / "log.txt")
            ])

        assert code == 0
        config = orchestrator.call_args[0][0]
        assert config.scheduling.interval_seconds == 30
        orchestrator.return_value.run_forever.assert_called_once()

    def test_keyboard_interrupt_stops_cleanly(self, tmp_path):
        """Test that Ctrl-C ends the loop without a traceback."""
        with patch("foldersync.cli.Orchestrator") as orchestrator, \
                patch("foldersync.cli.signal.signal"):
            orchestrator.return_value.run_forever.side_effect = KeyboardInterrupt
            code = main([
                str(tmp_path / "src"), str(tmp_path / "dst"), "30", str(tmp_path / "log.txt")
            ])

        assert code == 0
        orchestrator.return_value.stop.assert_called_once()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
