"""
Unit tests for logging configuration.

Tests cover:
- File logging with the API call audit file
- JSON output on the console and in log files
"""
import json

import pytest
from loguru import logger

from reservations_client.error_handling.logging_config import configure_logging, log_api_call


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by configure_logging once the test finishes."""
    yield
    logger.remove()


def _read_log(log_dir, pattern):
    files = list(log_dir.glob(pattern))
    assert len(files) == 1, f"expected one {pattern} file, found {files}"
    return files[0].read_text(encoding="utf8")


class TestFileLogging:
    """Test log files written when log_to_file is enabled."""

    def test_log_directory_created(self, tmp_path):
        """Test that a missing log directory is created."""
        log_dir = tmp_path / "logs" / "client"

        configure_logging(log_to_file=True, log_dir=str(log_dir))

        assert log_dir.is_dir()

    def test_api_calls_file_only_gets_api_calls(self, tmp_path):
        """Test that the audit file receives log_api_call lines and nothing else."""
        configure_logging(log_level="DEBUG", log_to_file=True, log_dir=str(tmp_path))

        logger.info("Unrelated application message")
        log_api_call(
            "list_tables", "GET", "http://reservations.test/tables",
            True, 0.012, {"status_code": 200}
        )
        logger.warning("Another unrelated message")
        log_api_call(
            "read_reservation", "GET", "http://reservations.test/reservations/9",
            False, 0.004, {"status_code": 404}
        )

        api_lines = _read_log(tmp_path, "api_calls_*.log").splitlines()

        assert len(api_lines) == 2
        assert "API list_tables GET http://reservations.test/tables" in api_lines[0]
        assert "success=True" in api_lines[0]
        assert "API read_reservation GET" in api_lines[1]
        assert "success=False" in api_lines[1]
        assert not any("unrelated" in line.lower() for line in api_lines)

    def test_general_file_gets_everything_at_level(self, tmp_path):
        """Test that the main log file gets application and API messages."""
        configure_logging(log_level="INFO", log_to_file=True, log_dir=str(tmp_path))

        logger.debug("Below the configured level")
        logger.info("Unrelated application message")
        log_api_call("list_tables", "GET", "http://reservations.test/tables", True, 0.01)

        general = _read_log(tmp_path, "reservations_client_*.log")

        assert "Unrelated application message" in general
        assert "API list_tables GET" in general
        assert "Below the configured level" not in general

    def test_no_files_without_file_logging(self, tmp_path):
        """Test that console-only logging writes no files."""
        configure_logging(log_to_file=False, log_dir=str(tmp_path / "logs"))

        log_api_call("list_tables", "GET", "http://reservations.test/tables", True, 0.01)

        assert not (tmp_path / "logs").exists()


class TestJsonFormat:
    """Test the json format type."""

    def test_console_records_are_json(self, capsys):
        """Test that json mode writes one parseable record per console line."""
        configure_logging(format_type="json")

        log_api_call(
            "create_table", "POST", "http://reservations.test/tables",
            True, 0.02, {"status_code": 201}
        )

        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        records = [json.loads(line) for line in lines]

        messages = [record["record"]["message"] for record in records]
        assert any(m.startswith("API create_table POST") for m in messages)
        api_record = next(r for r in records if r["record"]["message"].startswith("API "))
        assert api_record["record"]["extra"]["category"] == "API"
        assert api_record["record"]["level"]["name"] == "INFO"

    def test_file_records_are_json(self, tmp_path):
        """Test that json mode also serializes the main log file."""
        configure_logging(format_type="json", log_to_file=True, log_dir=str(tmp_path))

        logger.warning("Backend slow to respond")

        lines = _read_log(tmp_path, "reservations_client_*.log").splitlines()
        records = [json.loads(line) for line in lines]

        assert any(
            r["record"]["message"] == "Backend slow to respond"
            and r["record"]["level"]["name"] == "WARNING"
            for r in records
        )
