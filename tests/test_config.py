"""Tests for environment configuration."""

import os

import pytest

from peakdetect.config import Config, plotting_disabled
from peakdetect.detection.peaks import Mode


def test_defaults() -> None:
    config = Config.from_env(load_files=False)
    assert config.delta == 1e-6
    assert config.mode is Mode.MINIMA_FIRST
    assert config.max_peaks == 200
    assert config.log_level == "WARNING"
    assert config.plot is False


def test_values_from_env(monkeypatch) -> None:
    monkeypatch.setenv("PEAKDETECT_DELTA", "0.25")
    monkeypatch.setenv("PEAKDETECT_MODE", "e")
    monkeypatch.setenv("PEAKDETECT_MAX_PEAKS", "10")
    monkeypatch.setenv("PEAKDETECT_LOG_LEVEL", "debug")
    monkeypatch.setenv("PEAKDETECT_PLOT", "yes")
    config = Config.from_env(load_files=False)
    assert config == Config(
        delta=0.25, mode=Mode.MAXIMA_FIRST, max_peaks=10, log_level="DEBUG", plot=True
    )


def test_values_from_dotenv_file(tmp_path) -> None:
    (tmp_path / ".env").write_text("PEAKDETECT_DELTA=0.5\n")
    try:
        config = Config.from_env()
    finally:
        os.environ.pop("PEAKDETECT_DELTA", None)
    assert config.delta == 0.5


@pytest.mark.parametrize(
    "name,value",
    [
        ("PEAKDETECT_DELTA", "abc"),
        ("PEAKDETECT_MODE", "x"),
        ("PEAKDETECT_MAX_PEAKS", "-1"),
        ("PEAKDETECT_MAX_PEAKS", "many"),
        ("PEAKDETECT_LOG_LEVEL", "loud"),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        Config.from_env(load_files=False)


def test_plotting_disabled() -> None:
    assert plotting_disabled({"PEAKDETECT_NO_PLOT": "true"})
    assert not plotting_disabled({})
