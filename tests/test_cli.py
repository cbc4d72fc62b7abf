"""
Test suite for the command line entry point

Tests input loading, output formats, and exit codes.
"""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from banking_processor.cli import main, load_batches


SAMPLE_FILE = Path(__file__).resolve().parent.parent / "examples" / "sample_batches.json"


def write_json(tmp_path, data, name="batch.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestLoadBatches:
    """Test JSON input loading"""

    def test_single_batch_wrapped_in_list(self, tmp_path):
        """Test a single batch object is returned as a one-element list"""
        path = write_json(tmp_path, {"account_number": "ACC001"})

        assert load_batches(path) == [{"account_number": "ACC001"}]

    def test_floats_read_as_decimal(self, tmp_path):
        """Test JSON floats keep their exact decimal value"""
        path = tmp_path / "batch.json"
        path.write_text('{"initial_balance": 750.25}', encoding="utf-8")

        assert load_batches(str(path))[0]["initial_balance"] == Decimal('750.25')


class TestMain:
    """Test the CLI end to end"""

    def test_sample_batches_text_report(self, capsys):
        """Test the bundled samples produce three reports"""
        exit_code = main([str(SAMPLE_FILE), "--log-level", "CRITICAL"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert out.count("BANKING SYSTEM - SUMMARY REPORT") == 3
        assert "  Final Balance: 1600" in out
        assert "  Final Balance: 2500" in out
        assert "  Final Balance: 1.00" in out

    def test_json_output(self, tmp_path, capsys):
        """Test --format json prints the serialized result"""
        path = write_json(tmp_path, {
            "account_number": "ACC001",
            "account_holder": "John Doe",
            "initial_balance": 10,
            "currency": "USD",
            "transactions": [{"type": "Deposit", "amount": 5}],
        })

        exit_code = main([path, "--format", "json", "--log-level", "CRITICAL"])
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert data["account"]["balance"] == "15"
        assert data["summary"] == "Completed: 1 applied, 0 rejected."

    def test_structural_failure_exit_code(self, tmp_path, capsys):
        """Test a batch that aborts makes the CLI exit with 1"""
        path = write_json(tmp_path, [{"account_number": "ACC001"}])

        exit_code = main([path, "--log-level", "CRITICAL"])

        assert exit_code == 1
        assert "System Error: Missing account holder" in capsys.readouterr().out

    @pytest.mark.parametrize("content", [None, "{not json"])
    def test_unreadable_input_exit_code(self, tmp_path, capsys, content):
        """Test missing files and invalid JSON exit with 2"""
        path = tmp_path / "input.json"
        if content is not None:
            path.write_text(content, encoding="utf-8")

        exit_code = main([str(path), "--log-level", "CRITICAL"])

        assert exit_code == 2
        assert "Cannot read input" in capsys.readouterr().err

    def test_unknown_log_level_rejected_by_parser(self, tmp_path, capsys):
        """Test an unknown --log-level is a usage error, not a traceback"""
        path = write_json(tmp_path, [])

        with pytest.raises(SystemExit) as exc_info:
            main([path, "--log-level", "verbose"])

        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_log_level_case_insensitive(self, tmp_path, capsys):
        """Test --log-level accepts lower-case names"""
        path = write_json(tmp_path, [])

        assert main([path, "--log-level", "critical"]) == 0
