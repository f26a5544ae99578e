"""Sample ingestion from comma-separated text."""

from __future__ import annotations

import csv
from dataclasses import dataclass
import math
import sys
from typing import Iterable, List, Optional

from peakdetect.logging_config import get_logger


class SampleParseError(ValueError):
    """Raised when an input record cannot be read as an (x, y) pair."""

    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


@dataclass(frozen=True)
class Sample:
    """A single (x, y) point of the signal."""

    x: float
    y: float


@dataclass(frozen=True)
class SampleSeries:
    """Ordered samples with column views for detection and reporting."""

    samples: List[Sample]

    @property
    def x(self) -> List[float]:
        return [sample.x for sample in self.samples]

    @property
    def y(self) -> List[float]:
        return [sample.y for sample in self.samples]

    def point(self, index: int) -> Sample:
        return self.samples[index]

    def __len__(self) -> int:
        return len(self.samples)


def _parse_value(raw: str, line_number: int) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise SampleParseError(line_number, f'"{raw.strip()}" is not a number') from None
    if not math.isfinite(value):
        raise SampleParseError(line_number, f'"{raw.strip()}" is not finite')
    return value


def read_samples(lines: Iterable[str]) -> SampleSeries:
    """Parse ``x,y`` records into a SampleSeries.

    Blank lines and ``#`` comments are skipped; columns past the second are
    ignored.

    Raises:
        SampleParseError: If a record is short, holds a non-numeric value, or
            the input cannot be decoded or tokenized.
    """

    samples: List[Sample] = []
    reader = csv.reader(lines)
    try:
        for row in reader:
            line_number = reader.line_num
            if not row or (len(row) == 1 and not row[0].strip()):
                continue
            if row[0].lstrip().startswith("#"):
                continue
            if len(row) < 2:
                raise SampleParseError(line_number, "expected two comma-separated columns")
            samples.append(
                Sample(
                    x=_parse_value(row[0], line_number),
                    y=_parse_value(row[1], line_number),
                )
            )
    except csv.Error as exc:
        raise SampleParseError(reader.line_num, str(exc)) from None
    except UnicodeDecodeError:
        raise SampleParseError(reader.line_num + 1, "input is not valid UTF-8") from None
    return SampleSeries(samples=samples)


def load_samples(path: Optional[str] = None) -> SampleSeries:
    """Read samples from ``path``, or from stdin when it is None or "-".

    Raises:
        OSError: If the file cannot be opened.
        SampleParseError: If a record is malformed.
    """

    logger = get_logger(__name__)
    if path is None or path == "-":
        series = read_samples(sys.stdin)
        source = "<stdin>"
    else:
        with open(path, "r", encoding="utf-8", newline="") as handle:
            series = read_samples(handle)
        source = path
    logger.info("Read %s samples from %s", len(series), source)
    return series
