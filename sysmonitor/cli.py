"""Command-line entry point: plain report loop or curses dashboard."""

from __future__ import annotations

import argparse
import curses
import locale
import os
import sys
import time
from contextlib import suppress
from typing import TextIO

from .collectors import (
    Runner,
    run_command,
    update_cpu_info,
    update_disk_info,
    update_gpu_info,
    update_memory_info,
    update_network_info,
)
from .display import basic_report, init_screen, render
from .models import REFRESH_RATE, SystemInfo
from .snapshot import take_snapshot

CLEAR_SCREEN = "\033[2J\033[H"
NETWORK_PERIOD = 1.0


def run_plain(
    stream: TextIO | None = None,
    interval: float = REFRESH_RATE,
    iterations: int | None = None,
    root: str | os.PathLike[str] = "/",
    run: Runner = run_command,
) -> SystemInfo:
    """Print the summary report repeatedly; forever when ``iterations`` is None."""
    out = sys.stdout if stream is None else stream
    info = SystemInfo()
    last_network_update: float | None = None
    done = 0
    while iterations is None or done < iterations:
        update_cpu_info(info, root)
        update_memory_info(info, root)
        update_disk_info(info, root)
        update_gpu_info(info, run)

        now = time.monotonic()
        if last_network_update is None or now - last_network_update >= NETWORK_PERIOD:
            update_network_info(info, root)
            last_network_update = now

        out.write(CLEAR_SCREEN + basic_report(info))
        out.flush()
        done += 1
        if iterations is None or done < iterations:
            time.sleep(interval)
    return info


def _dashboard(screen: curses.window, interval: float) -> None:
    init_screen(screen)
    while True:
        render(screen, take_snapshot())
        if screen.getch() in (ord("q"), ord("Q")):
            break
        time.sleep(interval)


def run_curses(interval: float = REFRESH_RATE) -> None:
    """Show the full-screen dashboard until 'q' is pressed."""
    with suppress(locale.Error):
        locale.setlocale(locale.LC_ALL, "")
    curses.wrapper(_dashboard, interval)


def _non_negative(text: str) -> float:
    value = float(text)
    if value < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return value


def _positive(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysmonitor", description="Show CPU, memory, disk, GPU and network usage."
    )
    parser.add_argument(
        "--plain", action="store_true", help="print a plain report instead of the dashboard"
    )
    parser.add_argument(
        "--interval",
        type=_non_negative,
        default=float(REFRESH_RATE),
        help="seconds between refreshes",
    )
    parser.add_argument(
        "--iterations", type=_positive, default=None, help="stop after this many reports"
    )
    parser.add_argument(
        "--root", default="/", help="directory holding proc and sys (plain mode)"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the monitor; returns the exit status."""
    args = _parser().parse_args(argv)
    try:
        if args.plain:
            run_plain(interval=args.interval, iterations=args.iterations, root=args.root)
        else:
            run_curses(args.interval)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())