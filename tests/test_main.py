"""Tests for the command-line entry point."""

import io

import pytest

from peakdetect.main import (
    EXIT_BAD_INPUT,
    EXIT_BAD_MODE,
    EXIT_BAD_OPTION,
    EXIT_OK,
    EXIT_OPEN_FAILED,
    EXIT_TOO_MANY_PEAKS,
    main,
)

SCENARIO_CSV = "".join(f"{i},{y}\n" for i, y in enumerate([0, 1, 0.5, 2, 1, 3, 0.5]))

EXPECTED_OUTPUT = (
    "3.000000e+00,2.000000e+00\n"
    "5.000000e+00,3.000000e+00\n"
    "\n"
    "0.000000e+00,0.000000e+00\n"
    "4.000000e+00,1.000000e+00\n"
)


@pytest.fixture
def wave(tmp_path):
    path = tmp_path / "wave.csv"
    path.write_text(SCENARIO_CSV)
    return path


def test_file_to_file(wave, tmp_path) -> None:
    out = tmp_path / "out.csv"
    code = main(["-i", str(wave), "-o", str(out), "-d", "0.8", "-m", "a"])
    assert code == EXIT_OK
    assert out.read_text() == EXPECTED_OUTPUT


def test_stdin_to_stdout(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(SCENARIO_CSV))
    code = main(["-d", "0.8", "-m", "e"])
    assert code == EXIT_OK
    assert capsys.readouterr().out == (
        "3.000000e+00,2.000000e+00\n"
        "5.000000e+00,3.000000e+00\n"
        "\n"
        "4.000000e+00,1.000000e+00\n"
    )


def test_mode_defaults_from_env(monkeypatch, wave, capsys) -> None:
    monkeypatch.setenv("PEAKDETECT_MODE", "e")
    monkeypatch.setenv("PEAKDETECT_DELTA", "0.8")
    assert main(["-i", str(wave)]) == EXIT_OK
    assert capsys.readouterr().out.endswith("\n\n4.000000e+00,1.000000e+00\n")


def test_too_many_peaks(wave, tmp_path, caplog) -> None:
    out = tmp_path / "out.csv"
    code = main(["-i", str(wave), "-o", str(out), "-d", "0.8", "-n", "1"])
    assert code == EXIT_TOO_MANY_PEAKS
    assert not out.exists()
    assert "too many peaks" in caplog.text


def test_missing_input_file(tmp_path, caplog) -> None:
    code = main(["-i", str(tmp_path / "missing.csv")])
    assert code == EXIT_OPEN_FAILED
    assert "Failed to open file" in caplog.text


def test_unwritable_output(wave, tmp_path) -> None:
    code = main(["-i", str(wave), "-o", str(tmp_path / "no" / "such" / "out.csv")])
    assert code == EXIT_OPEN_FAILED


def test_unknown_option() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--frobnicate"])
    assert excinfo.value.code == EXIT_BAD_OPTION


def test_non_numeric_delta_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-d", "tiny"])
    assert excinfo.value.code == EXIT_BAD_OPTION


def test_unknown_mode(wave, caplog) -> None:
    assert main(["-i", str(wave), "-m", "x"]) == EXIT_BAD_MODE
    assert 'Unknown mode "x"' in caplog.text


def test_malformed_input(tmp_path) -> None:
    path = tmp_path / "bad.csv"
    path.write_text("0,1\nnot,a number\n")
    assert main(["-i", str(path)]) == EXIT_BAD_INPUT


def test_invalid_env_config(monkeypatch, wave) -> None:
    monkeypatch.setenv("PEAKDETECT_DELTA", "abc")
    assert main(["-i", str(wave)]) == EXIT_BAD_INPUT


def test_empty_input_writes_separator(tmp_path, capsys) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("")
    assert main(["-i", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == "\n"


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "peakdetect version" in capsys.readouterr().out


def test_plot_option_saves_figure(wave, tmp_path) -> None:
    image = tmp_path / "peaks.png"
    code = main(["-i", str(wave), "-o", str(tmp_path / "out.csv"), "-d", "0.8", "--plot", str(image)])
    assert code == EXIT_OK
    assert image.exists()


def test_undecodable_input(tmp_path, caplog) -> None:
    path = tmp_path / "binary.csv"
    path.write_bytes(b"0,1\n1,\xff\xfe\n")
    assert main(["-i", str(path)]) == EXIT_BAD_INPUT
    assert "Malformed input" in caplog.text


def test_oversized_field(tmp_path) -> None:
    path = tmp_path / "wide.csv"
    path.write_text("0," + "1" * 200000 + "\n")
    assert main(["-i", str(path)]) == EXIT_BAD_INPUT


def test_unwritable_plot_path(wave, tmp_path, caplog) -> None:
    out = tmp_path / "out.csv"
    image = tmp_path / "no" / "such" / "peaks.png"
    code = main(["-i", str(wave), "-o", str(out), "-d", "0.8", "--plot", str(image)])
    assert code == EXIT_OPEN_FAILED
    assert out.read_text() == EXPECTED_OUTPUT
    assert "Failed to open file" in caplog.text
