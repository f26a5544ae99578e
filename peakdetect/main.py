"""Command-line entry point for peak detection."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
import logging
import sys
from typing import List, NoReturn, Optional

from peakdetect.config import Config
from peakdetect.data.samples import SampleParseError, SampleSeries, load_samples
from peakdetect.detection.peaks import Mode, PeakResult, TooManyPeaksError, detect_peaks
from peakdetect.logging_config import get_logger, setup_logging
from peakdetect.ui.report import plot_peak_report, write_peaks

VERSION = "0.2.0"

EXIT_OK = 0
EXIT_TOO_MANY_PEAKS = 1
EXIT_OPEN_FAILED = 2
EXIT_BAD_OPTION = 3
EXIT_BAD_MODE = 4
EXIT_BAD_INPUT = 5

_DESCRIPTION = """\
Peak detection in a wave.

The input is CSV whose first column is X and second column is Y.
Emission peaks are written first, followed by absorption peaks after an
empty line."""

_EPILOG = """\
e.g.
  peakdetect -i input.csv -o output.csv -d 1e-7 -m a
  peakdetect <input.csv -d 0.1 -m e | tee out.csv"""

_VERSION_TEXT = f"""\
peakdetect version {VERSION}
Originally inspired by Eli Billauer's peakdet for MATLAB:
http://billauer.co.il/peakdet.html"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with the tool's own usage error code."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_BAD_OPTION, f"{self.prog}: error: {message}\n")


@dataclass(frozen=True)
class RunOptions:
    """Resolved parameters for one run."""

    input_path: Optional[str]
    output_path: Optional[str]
    delta: float
    mode: Mode
    max_peaks: int
    plot: bool
    plot_path: Optional[str]


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="peakdetect",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-i", dest="input", metavar="inputfile", help="Input file (default: stdin)")
    parser.add_argument("-o", dest="output", metavar="outfile", help="Output file (default: stdout)")
    parser.add_argument(
        "-d", dest="delta", metavar="deltavalue", type=float, help="Delta used to determine peaks"
    )
    parser.add_argument(
        "-m",
        dest="mode",
        metavar="mode",
        help='"a" (detect absorption peak first) or "e" (detect emission peak first)',
    )
    parser.add_argument(
        "-n",
        "--max-peaks",
        dest="max_peaks",
        metavar="count",
        type=int,
        help="Maximum number of peaks of each kind",
    )
    parser.add_argument(
        "--plot",
        nargs="?",
        const="",
        metavar="PATH",
        help="Plot the peaks; save to PATH if given",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=_VERSION_TEXT)
    return parser


def _resolve_options(args: argparse.Namespace, config: Config) -> RunOptions:
    """Merge parsed flags over configuration defaults.

    Raises:
        ValueError: If the mode letter is unknown.
    """

    mode = Mode.from_flag(args.mode) if args.mode is not None else config.mode
    return RunOptions(
        input_path=args.input,
        output_path=args.output,
        delta=args.delta if args.delta is not None else config.delta,
        mode=mode,
        max_peaks=args.max_peaks if args.max_peaks is not None else config.max_peaks,
        plot=args.plot is not None or config.plot,
        plot_path=args.plot or None,
    )


def _emit(options: RunOptions, series: SampleSeries, result: PeakResult) -> None:
    if options.output_path is None or options.output_path == "-":
        write_peaks(sys.stdout, series, result)
        return
    with open(options.output_path, "w") as out:
        write_peaks(out, series, result)


def run(options: RunOptions) -> int:
    """Run detection with resolved options and return the exit code."""

    logger = get_logger(__name__)

    try:
        series = load_samples(options.input_path)
    except OSError as exc:
        logger.error('Failed to open file "%s": %s', options.input_path, exc.strerror or exc)
        return EXIT_OPEN_FAILED
    except SampleParseError as exc:
        logger.error("Malformed input: %s", exc)
        return EXIT_BAD_INPUT

    if len(series) == 0:
        logger.warning("No samples read; nothing to detect.")
        result = PeakResult(mode=options.mode)
    else:
        try:
            result = detect_peaks(
                series.y,
                delta=options.delta,
                mode=options.mode,
                max_maxima=options.max_peaks,
                max_minima=options.max_peaks,
            )
        except TooManyPeaksError as exc:
            logger.error("There are too many peaks: %s.", exc)
            return EXIT_TOO_MANY_PEAKS

    logger.info(
        "Found %s emission and %s absorption peaks (delta=%g, mode=%s)",
        len(result.maxima),
        len(result.minima),
        options.delta,
        options.mode.value,
    )

    try:
        _emit(options, series, result)
    except OSError as exc:
        logger.error('Failed to open file "%s": %s', options.output_path, exc.strerror or exc)
        return EXIT_OPEN_FAILED

    if options.plot:
        try:
            plot_peak_report(series, result, options.plot_path)
        except OSError as exc:
            logger.error('Failed to open file "%s": %s', options.plot_path, exc.strerror or exc)
            return EXIT_OPEN_FAILED
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    logger = get_logger(__name__)

    try:
        config = Config.from_env()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_BAD_INPUT
    if not args.verbose:
        setup_logging(config.log_level)

    try:
        options = _resolve_options(args, config)
    except ValueError as exc:
        logger.error("Argument parsing error: %s", exc)
        return EXIT_BAD_MODE

    if options.max_peaks < 0:
        logger.error("Argument parsing error: max peaks must be >= 0")
        return EXIT_BAD_OPTION

    return run(options)


if __name__ == "__main__":
    sys.exit(main())
