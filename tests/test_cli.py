"""
Tests for the command line interface.
"""
import json
from unittest.mock import Mock

import pytest

from clonesweep.cli import CLIApplication, main
from clonesweep.core import ScanMode, DeleteOutcome
from clonesweep.services import file_service


class TestArgumentParsing:

    def test_defaults(self):
        args = CLIApplication.parse_args(["-i", "/tmp"])

        assert args.input == "/tmp"
        assert args.mode == "strict"
        assert args.min_size == "0"
        assert not args.keep_largest and not args.force and not args.json

    def test_rejects_unknown_mode(self):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(["-i", "/tmp", "--mode", "fuzzy"])

    def test_input_is_required(self):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args([])

    def test_create_params(self, temp_dir):
        app = CLIApplication()
        args = app.parse_args(["-i", str(temp_dir), "--mode", "size_only", "-m", "1K", "-w", "2"])

        params = app.create_params(args)

        assert params.mode is ScanMode.SIZE_ONLY
        assert params.min_size_bytes == 1024
        assert params.max_workers == 2

    def test_force_requires_keep_largest(self, temp_dir):
        app = CLIApplication()
        with pytest.raises(SystemExit):
            app.validate_args(app.parse_args(["-i", str(temp_dir), "--force"]))

    def test_invalid_size_exits(self, temp_dir):
        app = CLIApplication()
        with pytest.raises(SystemExit):
            app.create_params(app.parse_args(["-i", str(temp_dir), "-m", "lots"]))

    def test_non_finite_size_is_a_parameter_error(self, temp_dir, capsys):
        app = CLIApplication()
        with pytest.raises(SystemExit) as exc_info:
            app.create_params(app.parse_args(["-i", str(temp_dir), "-m", "infKB"]))

        assert exc_info.value.code == 1
        assert "Parameter error" in capsys.readouterr().err


class TestRun:

    def test_text_output(self, hi_bye_files, temp_dir, capsys):
        main(["-i", str(temp_dir)])

        out = capsys.readouterr().out
        assert "Found 1 duplicate groups (2 files)" in out
        assert str(hi_bye_files["a"]) in out
        assert str(hi_bye_files["c"]) not in out

    def test_json_output(self, hi_bye_files, temp_dir, capsys):
        main(["-i", str(temp_dir), "--json", "--mode", "size_only"])

        groups = json.loads(capsys.readouterr().out)
        assert len(groups) == 1
        assert groups[0]["hash"] == "size_2"

    def test_missing_directory_exits_with_error(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-i", str(temp_dir / "missing")])

        assert exc_info.value.code == 1
        assert "does not exist" in capsys.readouterr().err

    def test_keep_largest_force_trashes_all_but_one(self, hi_bye_files, temp_dir, monkeypatch, capsys):
        trashed = []
        monkeypatch.setattr(file_service, "send2trash", trashed.append)

        main(["-i", str(temp_dir), "--keep-largest", "--force"])

        assert len(trashed) == 1
        assert trashed[0] in {str(hi_bye_files["a"]), str(hi_bye_files["b"])}
        assert "Successfully moved 1 files to trash." in capsys.readouterr().out

    def test_keep_largest_reports_partial_failure(self, hi_bye_files, temp_dir, capsys):
        deletion = Mock()
        deletion.delete.return_value = DeleteOutcome(deleted=[], failed={str(hi_bye_files["b"]): "Permission denied"})
        app = CLIApplication(deletion_service=deletion)
        groups = app.coordinator.scan(str(temp_dir))

        app.execute_keep_largest(groups, force=True)

        out = capsys.readouterr().out
        assert "Partial success: 0/1" in out
        assert "Permission denied" in out

    def test_keep_largest_size_only_warns_unverified(self, temp_dir, monkeypatch, capsys):
        (temp_dir / "x.txt").write_bytes(b"aa")
        (temp_dir / "y.txt").write_bytes(b"bb")
        monkeypatch.setattr(file_service, "send2trash", lambda path: None)

        main(["-i", str(temp_dir), "--mode", "size_only", "--keep-largest", "--force"])

        out = capsys.readouterr().out
        assert "not content-verified" in out
        assert "were not compared by content" in out
