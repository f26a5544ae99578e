"""Delta-threshold peak detection (after Eli Billauer's peakdet)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

from peakdetect.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DELTA = 1e-6
DEFAULT_MAX_PEAKS = 200


class Mode(Enum):
    """Which peak kind the scan looks for first."""

    MAXIMA_FIRST = "e"
    MINIMA_FIRST = "a"

    @classmethod
    def from_flag(cls, value: str) -> "Mode":
        """Parse a mode letter: "e" (emission first) or "a" (absorption first).

        Raises:
            ValueError: If the letter is not a known mode.
        """

        for mode in cls:
            if mode.value == value:
                return mode
        raise ValueError(f'Unknown mode "{value}"')


class TooManyPeaksError(Exception):
    """Raised when a peak list would grow past its capacity."""

    kind = "peaks"

    def __init__(self, capacity: int) -> None:
        super().__init__(f"More than {capacity} {self.kind} found")
        self.capacity = capacity


class TooManyMaximaError(TooManyPeaksError):
    kind = "maxima"


class TooManyMinimaError(TooManyPeaksError):
    kind = "minima"


@dataclass(frozen=True)
class PeakResult:
    """Indices of the confirmed maxima and minima."""

    maxima: List[int] = field(default_factory=list)
    minima: List[int] = field(default_factory=list)
    mode: Mode = Mode.MINIMA_FIRST

    def events(self) -> List[Tuple[int, str]]:
        """Return peaks in confirmation order, tagged "max" or "min".

        Confirmation alternates strictly, so the order is rebuilt by
        interleaving the two lists starting with the kind ``mode`` selects.
        """

        first, second = ("max", "min") if self.mode is Mode.MAXIMA_FIRST else ("min", "max")
        lists = {"max": self.maxima, "min": self.minima}
        events: List[Tuple[int, str]] = []
        for n in range(max(len(self.maxima), len(self.minima))):
            for kind in (first, second):
                if n < len(lists[kind]):
                    events.append((lists[kind][n], kind))
        return events


def detect_peaks(
    samples: Sequence[float],
    delta: float = DEFAULT_DELTA,
    mode: Mode = Mode.MINIMA_FIRST,
    max_maxima: int = DEFAULT_MAX_PEAKS,
    max_minima: int = DEFAULT_MAX_PEAKS,
) -> PeakResult:
    """Find alternating maxima and minima separated by more than ``delta``.

    A maximum is confirmed once the signal falls more than ``delta`` below the
    highest value seen since the previous peak; a minimum once it rises more
    than ``delta`` above the lowest. After each confirmation the scan resumes
    from the confirmed peak so the samples in between are re-examined for the
    opposite extremum.

    A non-positive ``delta`` is accepted but degenerate: nearly every sample
    becomes a peak and, for a negative delta, the run ends only through a
    capacity error.

    Args:
        samples: Y values, at least one.
        delta: Minimum reversal needed to confirm a peak.
        mode: Whether to look for a maximum or a minimum first.
        max_maxima: Capacity of the maxima list.
        max_minima: Capacity of the minima list.

    Raises:
        ValueError: If ``samples`` is empty or a capacity is negative.
        TooManyMaximaError: If more than ``max_maxima`` maxima are confirmed.
        TooManyMinimaError: If more than ``max_minima`` minima are confirmed.
    """

    if len(samples) == 0:
        raise ValueError("samples must not be empty")
    if max_maxima < 0 or max_minima < 0:
        raise ValueError("peak capacities must be >= 0")
    if delta <= 0:
        logger.warning("Non-positive delta %s gives degenerate peak counts", delta)

    maxima: List[int] = []
    minima: List[int] = []

    mx = mn = samples[0]
    mx_pos = mn_pos = 0
    seeking_max = mode is Mode.MAXIMA_FIRST

    i = 1
    while i < len(samples):
        value = samples[i]
        if value > mx:
            mx, mx_pos = value, i
        if value < mn:
            mn, mn_pos = value, i

        if seeking_max and value < mx - delta:
            if len(maxima) >= max_maxima:
                raise TooManyMaximaError(max_maxima)
            maxima.append(mx_pos)
            logger.debug("Maximum at %s (%s), confirmed at %s", mx_pos, mx, i)
            seeking_max = False
            mn, mn_pos = samples[mx_pos], mx_pos
            # rescan from the peak itself
            i = mx_pos
            continue

        if not seeking_max and value > mn + delta:
            if len(minima) >= max_minima:
                raise TooManyMinimaError(max_minima)
            minima.append(mn_pos)
            logger.debug("Minimum at %s (%s), confirmed at %s", mn_pos, mn, i)
            seeking_max = True
            mx, mx_pos = samples[mn_pos], mn_pos
            i = mn_pos
            continue

        i += 1

    return PeakResult(maxima=maxima, minima=minima, mode=mode)
