"""Tests for the score_snapshot script."""

import json
from pathlib import Path

import pytest

from scripts.score_snapshot import main


class TestScoreSnapshotCli:
    """Tests for score_snapshot.main."""

    def test_leaderboard_table(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]):
        exit_code = main(["--snapshot", str(snapshot_file)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "LEADERBOARD" in out
        assert "Golden coverage: 3/50 queries" in out
        assert "Libby" in out
        assert "5.5/6" in out

    def test_leaderboard_json(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]):
        exit_code = main(["--snapshot", str(snapshot_file), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert data["max_possible_score"] == 6.0
        assert [a["rank"] for a in data["apps"]] == [1, 2, 2, 4]

    def test_app_report(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]):
        exit_code = main(["--snapshot", str(snapshot_file), "--app", "libby"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "APP REPORT: Libby (libby)" in out
        assert "BY CATEGORY" in out
        assert "typo" in out

    def test_app_report_json(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]):
        main(["--snapshot", str(snapshot_file), "--app", "kindle", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert data["app_id"] == "kindle"
        assert data["total_score"] == 0
        assert "rank" not in data

    def test_unknown_app(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]):
        exit_code = main(["--snapshot", str(snapshot_file), "--app", "nope"])

        assert exit_code == 1
        assert "App with id 'nope' not found" in capsys.readouterr().err

    def test_invalid_snapshot(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        path = tmp_path / "broken.json"
        path.write_text("[", encoding="utf-8")

        assert main(["--snapshot", str(path)]) == 1
        assert "not valid JSON" in capsys.readouterr().err

    def test_snapshot_not_utf8(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe")

        assert main(["--snapshot", str(path)]) == 1
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_app_report_shows_matched_rows(
        self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ):
        main(["--snapshot", str(snapshot_file), "--app", "goodreads"])

        out = capsys.readouterr().out
        assert "hits 2/2  matched 2" in out
