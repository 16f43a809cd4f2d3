"""Tests for the command-line interface."""

import json

import pytest
from conftest import AUDIO_STREAM, VIDEO_STREAM, sample_bytes

from ffprint.cli import main
from ffprint.config import reset_config


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    """Keep user config files out of the CLI tests."""
    monkeypatch.setattr("ffprint.config.CONFIG_LOCATIONS", [tmp_path / "absent.yaml"])
    reset_config()


@pytest.fixture
def movie(make_media):
    return make_media(
        "movie.mkv",
        [VIDEO_STREAM, AUDIO_STREAM],
        {0: sample_bytes(5000), 1: sample_bytes(3000, 7)},
    )


@pytest.fixture
def tool_args(fake_tool):
    return ["-m", fake_tool, "-p", fake_tool, "--skip-mediainfo", "--skip-versions", "-q"]


def test_only_hash(movie, tool_args, capsys):
    """Test printing only the fingerprint."""
    assert main([*tool_args, "--only-hash", movie]) == 0
    out = capsys.readouterr().out.strip()
    assert len(out) == 64
    assert all(c in "0123456789abcdef" for c in out)


def test_json_report(movie, tool_args, capsys):
    """Test the default JSON report."""
    assert main([*tool_args, movie, "--types", "audio"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["file_identity"]["name"] == "movie.mkv"
    assert report["provenance"] == ["s:1", "format"]
    assert report["hash_config"]["stream_types"] == ["audio"]


def test_json_report_without_probe_data(movie, tool_args, capsys):
    """Test leaving the probed descriptors out of the report."""
    assert main([*tool_args, "--no-probe-data", "--compact", movie]) == 0
    out = capsys.readouterr().out
    assert out.count("\n") == 1
    report = json.loads(out)
    assert "streams" not in report
    assert "format" not in report
    assert len(report["stream_hashes"]) == 2


def test_output_file(movie, tool_args, tmp_path, capsys):
    """Test saving the report to a file."""
    output = tmp_path / "report.json"
    assert main([*tool_args, "-o", str(output), movie]) == 0

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Report saved to" in captured.err
    reports = json.loads(output.read_text())
    assert len(reports) == 1
    assert reports[0]["composite_digest"]


def test_summary(movie, tool_args, capsys):
    """Test the readable summary."""
    assert main([*tool_args, "--summary", movie]) == 0
    out = capsys.readouterr().out
    assert "File: movie.mkv" in out
    assert "## FINGERPRINT" in out
    assert "## STREAMS" in out


def test_missing_file(tool_args, tmp_path, capsys):
    """Test that a missing file is reported and counted as an error."""
    assert main([*tool_args, str(tmp_path / "nope.mkv")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_unreadable_file(movie, tool_args, monkeypatch, capsys):
    """Test that OS errors are reported per file instead of aborting."""

    def refuse(path, config):
        raise PermissionError(f"Permission denied: {path}")

    monkeypatch.setattr("ffprint.cli.fingerprint_file", refuse)
    assert main([*tool_args, movie, movie]) == 1
    assert capsys.readouterr().err.count("Permission denied") == 2


def test_extraction_error(make_media, tool_args, capsys):
    """Test that a failing file is reported and counted as an error."""
    broken = make_media("broken.mkv", [VIDEO_STREAM], {})
    assert main([*tool_args, broken]) == 1
    assert "Error fingerprinting" in capsys.readouterr().err


def test_invalid_option(movie, tool_args, capsys):
    """Test that an invalid configuration exits with an error."""
    assert main([*tool_args, "--parallel", "0", movie]) == 1
    assert "Error:" in capsys.readouterr().err


def test_status(capsys):
    """Test the dependency status report."""
    assert main(["--status", "-m", "/nonexistent/ffmpeg"]) == 0
    out = capsys.readouterr().out
    assert "ffprint dependency status:" in out
    assert "✗ ffmpeg" in out


def test_files_required(capsys):
    """Test that files are required unless --status is given."""
    with pytest.raises(SystemExit):
        main([])
