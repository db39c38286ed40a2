import sys

import pytest

import main


def parse(argv):
    parser = main.build_parser()
    return parser, parser.parse_args(argv)


def test_request_defaults_to_first_container_of_mode():
    parser, args = parse(["-i", "https://example.com/v", "-od", "/tmp/out", "-m", "audio"])
    request = main.request_from_args(parser, args)

    assert request.container == "mp3"
    assert request.quality == "Best"
    assert request.custom_name is None


def test_container_must_match_mode():
    parser, args = parse(["-i", "https://example.com/v", "-od", "/tmp/out", "-m", "audio", "-f", "mp4"])
    with pytest.raises(SystemExit):
        main.request_from_args(parser, args)


def test_quality_must_match_mode():
    parser, args = parse(["-i", "https://example.com/v", "-od", "/tmp/out", "-q", "192k"])
    with pytest.raises(SystemExit):
        main.request_from_args(parser, args)


def test_invalid_url_exits_with_error(qapp, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    code = main.run_cli(["-i", "ftp://example.com/v", "-od", str(tmp_path / "out"), "--deps-dir", str(tmp_path)])

    assert code == 1
    assert "Invalid URL" in capsys.readouterr().err


@pytest.mark.skipif(sys.platform == "win32", reason="fake executables rely on shebang scripts")
def test_cli_streams_output_and_returns_exit_code(qapp, deps_dir, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    code = main.run_cli([
        "-i", "https://example.com/watch?exit=4",
        "-od", str(tmp_path / "out"),
        "-q", "720p",
        "--deps-dir", str(deps_dir),
    ])

    captured = capsys.readouterr()
    assert code == 4
    assert "[download] partial line" in captured.out
    assert "Running command:" in captured.err
