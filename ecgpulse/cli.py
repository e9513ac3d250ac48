"""Command line: read raw pulse samples and report beats per minute."""

from __future__ import annotations

import argparse
import contextlib
import sys
from collections.abc import Iterable, Iterator
from typing import IO, TextIO

from ecgpulse.detector import BPM_PERIOD_SECONDS, SAMPLE_RATE_HZ, BpmMonitor
from ecgpulse.trace import TraceDisplay


def read_samples(stream: Iterable[str]) -> Iterator[float]:
    """Yield numbers separated by whitespace; ``#`` starts a comment."""
    for lineno, line in enumerate(stream, 1):
        for token in line.split("#", 1)[0].split():
            try:
                yield float(token)
            except ValueError:
                raise ValueError(f"line {lineno}: not a number: {token!r}") from None


@contextlib.contextmanager
def _open_input(path: str) -> Iterator[TextIO | IO[str]]:
    if path == "-":
        yield sys.stdin
    else:
        with open(path, encoding="utf-8") as handle:
            yield handle


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecgpulse", description="Detect heart beats in raw pulse sensor samples."
    )
    parser.add_argument("file", nargs="?", default="-", help="sample file, '-' for stdin")
    parser.add_argument(
        "--rate", type=_positive_int, default=SAMPLE_RATE_HZ, help="samples per second"
    )
    parser.add_argument(
        "--period", type=_positive_int, default=BPM_PERIOD_SECONDS, help="seconds per BPM update"
    )
    parser.add_argument("--trace", action="store_true", help="print the signal trace at the end")
    parser.add_argument(
        "--plot-every", type=_positive_int, default=10, help="samples between trace points"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the monitor over the samples and print each BPM update."""
    args = _parser().parse_args(argv)
    monitor = BpmMonitor(args.rate, args.period)
    display = TraceDisplay() if args.trace else None
    try:
        with _open_input(args.file) as stream:
            for index, reading in enumerate(monitor.run(read_samples(stream))):
                if reading.updated:
                    print(f"BPM: {reading.bpm}")
                if (
                    display is not None
                    and index % args.plot_every == 0
                    and reading.window_max > reading.window_min
                ):
                    display.plot(reading.value, reading.window_min, reading.window_max, reading.bpm)
    except (OSError, ValueError) as exc:
        print(f"ecgpulse: {exc}", file=sys.stderr)
        return 1
    if display is not None:
        print(display.render())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())