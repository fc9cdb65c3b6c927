from pathlib import Path

import pytest

from webmshrink.cli import main as cli


@pytest.fixture
def tools_ok(monkeypatch):
    monkeypatch.setattr(cli, "check_tools", lambda: (True, []))


def test_bad_mode_rejected_before_any_work(tmp_path: Path, fake_ffmpeg, input_video, tools_ok, capsys):
    out = tmp_path / "new" / "out.webm"

    code = cli.main([str(input_video), "-m", "3", "-o", str(out)])

    assert code == 1
    assert fake_ffmpeg.calls == []
    assert not out.parent.exists()
    assert "Mode must be 1 or 2" in capsys.readouterr().err


def test_wrong_extension_rejected_before_any_work(tmp_path: Path, fake_ffmpeg, input_video, tools_ok, capsys):
    out = tmp_path / "new" / "out.mp4"

    code = cli.main([str(input_video), "-o", str(out)])

    assert code == 1
    assert fake_ffmpeg.calls == []
    assert not out.parent.exists()
    assert ".webm" in capsys.readouterr().err


def test_missing_ffmpeg_reported(tmp_path: Path, fake_ffmpeg, input_video, monkeypatch, capsys):
    monkeypatch.setattr(cli, "check_tools", lambda: (False, ["ffmpeg not found in PATH"]))

    code = cli.main([str(input_video), "-o", str(tmp_path / "o.webm")])

    assert code == 1
    assert fake_ffmpeg.calls == []
    assert "ffmpeg not found" in capsys.readouterr().err


def test_successful_run(tmp_path: Path, fake_ffmpeg, input_video, tools_ok, capsys):
    out = tmp_path / "deep" / "out.webm"
    log_file = tmp_path / "run.log"

    code = cli.main([str(input_video), "-m", "2", "-o", str(out), "--log-file", str(log_file)])

    assert code == 0
    assert out.exists()
    stdout = capsys.readouterr().out
    assert "Extracting frames..." in stdout
    assert "Concatenating WebMs..." in stdout
    assert "Session started:" in log_file.read_text()
    assert "Wrote" in log_file.read_text()


def test_ffmpeg_failure_prints_diagnostics(tmp_path: Path, fake_ffmpeg, input_video, tools_ok, capsys):
    fake_ffmpeg.fail_on = "extract"

    code = cli.main([str(input_video), "-o", str(tmp_path / "o.webm")])

    assert code == 1
    err = capsys.readouterr().err
    assert "ExtractionError" in err
    assert "Invalid data found" in err


def test_check_tools_flag(monkeypatch, capsys):
    monkeypatch.setattr(cli, "check_tools", lambda: (True, []))
    assert cli.main(["--check-tools"]) == 0
    assert "Tools OK" in capsys.readouterr().out

    monkeypatch.setattr(cli, "check_tools", lambda: (False, ["ffmpeg not found in PATH"]))
    assert cli.main(["--check-tools"]) == 1
    assert "Missing: ffmpeg not found in PATH" in capsys.readouterr().err


def test_output_required():
    with pytest.raises(SystemExit):
        cli.parse_args(["input.mp4"])
