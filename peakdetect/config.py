"""Configuration loading for peakdetect."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from peakdetect.detection.peaks import DEFAULT_DELTA, DEFAULT_MAX_PEAKS, Mode
from peakdetect.logging_config import resolve_level


def _load_env_files() -> None:
    """Load environment variables from a .env file if present."""

    load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    """Default run parameters, overridable from the command line."""

    delta: float = DEFAULT_DELTA
    mode: Mode = Mode.MINIMA_FIRST
    max_peaks: int = DEFAULT_MAX_PEAKS
    log_level: str = "WARNING"
    plot: bool = False

    @staticmethod
    def _get_env_bool(name: str, default: bool = False) -> bool:
        value = os.getenv(name)
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}

    @staticmethod
    def _get_env_float(name: str, default: float) -> float:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{name} must be a number, got {value!r}") from None

    @staticmethod
    def _get_env_int(name: str, default: int) -> int:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        try:
            parsed = int(value)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {value!r}") from None
        if parsed < 0:
            raise ValueError(f"{name} must be >= 0")
        return parsed

    @classmethod
    def from_env(cls, load_files: bool = True) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If a variable holds an unusable value.
        """

        if load_files:
            _load_env_files()

        delta = cls._get_env_float("PEAKDETECT_DELTA", DEFAULT_DELTA)
        mode_flag = os.getenv("PEAKDETECT_MODE", Mode.MINIMA_FIRST.value).strip()
        try:
            mode = Mode.from_flag(mode_flag)
        except ValueError as exc:
            raise ValueError(f"PEAKDETECT_MODE: {exc}") from None
        max_peaks = cls._get_env_int("PEAKDETECT_MAX_PEAKS", DEFAULT_MAX_PEAKS)
        log_level = os.getenv("PEAKDETECT_LOG_LEVEL", "WARNING").strip().upper()
        try:
            resolve_level(log_level)
        except ValueError as exc:
            raise ValueError(f"PEAKDETECT_LOG_LEVEL: {exc}") from None
        plot = cls._get_env_bool("PEAKDETECT_PLOT", default=False)

        return cls(
            delta=delta,
            mode=mode,
            max_peaks=max_peaks,
            log_level=log_level,
            plot=plot,
        )


def plotting_disabled(environ: Optional[dict] = None) -> bool:
    """Return True when PEAKDETECT_NO_PLOT is set to a truthy value."""

    env = os.environ if environ is None else environ
    return env.get("PEAKDETECT_NO_PLOT", "").strip().lower() in {"1", "true", "yes"}
