"""Shared test setup."""

import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in list(os.environ):
        if name.startswith("PEAKDETECT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
