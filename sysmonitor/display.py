"""Text layout and curses rendering of the collected figures."""

from __future__ import annotations

import curses
from contextlib import suppress
from enum import IntEnum

from .models import MAX_PROCESSES, Snapshot, SystemInfo

_BYTES_PER_MIB = 1024.0 * 1024.0
_EXIT_HINT = "Press 'q' to exit"


class Color(IntEnum):
    """Colour pairs used by the dashboard."""

    DEFAULT = 0
    HEADER = 1
    VALUE = 2
    WARNING = 3
    EXTRA = 4
    PROCESS = 5
    NETWORK = 6


_FOREGROUND = {
    Color.HEADER: curses.COLOR_CYAN,
    Color.VALUE: curses.COLOR_WHITE,
    Color.WARNING: curses.COLOR_RED,
    Color.EXTRA: curses.COLOR_GREEN,
    Color.PROCESS: curses.COLOR_YELLOW,
    Color.NETWORK: curses.COLOR_MAGENTA,
}


def format_uptime(seconds: int) -> str:
    """Uptime as days, hours and minutes."""
    days, rest = divmod(seconds, 24 * 3600)
    hours = rest // 3600
    minutes = (seconds % 3600) // 60
    return f"{days} days, {hours} hours, {minutes} minutes"


def format_clock(seconds: int) -> str:
    """Uptime as HH:MM:SS, hours not wrapped at a day."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours:02d}:{minutes:02d}:{seconds % 60:02d}"


def format_traffic(nbytes: int) -> str:
    """Byte count in megabytes, or gigabytes above 1024 MB."""
    amount = nbytes / _BYTES_PER_MIB
    unit = "MB"
    if amount > 1024:
        amount /= 1024.0
        unit = "GB"
    return f"{amount:.2f} {unit}"


def basic_report(info: SystemInfo) -> str:
    """Plain-text report of the summary figures."""
    parts = [
        "System Monitor\n",
        "==============\n\n",
        "CPU:\n",
        f"  Usage: {info.cpu_usage:.1f}%\n",
        f"  Temperature: {info.cpu_temp:.1f}°C\n",
        f"  Load: {info.load_1min:.2f} {info.load_5min:.2f} {info.load_15min:.2f}"
        " (1min 5min 15min)\n\n",
        "Memory:\n",
        f"  Total: {info.memory_total:.1f} GB\n",
        f"  Used:  {info.memory_used:.1f} GB\n",
        f"  Free:  {info.memory_free:.1f} GB\n",
        f"  Cached: {info.memory_cached:.1f} GB\n\n",
        "Disk:\n",
        f"  Total: {info.disk_total:.1f} GB\n",
        f"  Used:  {info.disk_used:.1f} GB\n",
        f"  Free:  {info.disk_free:.1f} GB\n\n",
    ]
    if info.gpu_usage > 0:
        parts += [
            "GPU:\n",
            f"  Usage: {info.gpu_usage:d}%\n",
            f"  Memory: {info.gpu_mem_used:.1f}/{info.gpu_mem_total:.1f} GB\n",
            f"  Temperature: {info.gpu_temp:.1f}°C\n\n",
        ]
    parts += [
        "Network:\n",
        f"  RX: {info.network_rx / _BYTES_PER_MIB:.2f} MB\n",
        f"  TX: {info.network_tx / _BYTES_PER_MIB:.2f} MB\n",
    ]
    return "".join(parts)


def snapshot_lines(snapshot: Snapshot, lines: int) -> list[tuple[int, int, str, Color]]:
    """Every piece of dashboard text as (row, column, text, colour)."""
    out: list[tuple[int, int, str, Color]] = []

    def put(row: int, col: int, text: str, color: Color) -> None:
        out.append((row, col, text, color))

    uptime_label = "System Uptime: "
    put(0, 0, uptime_label, Color.HEADER)
    put(0, len(uptime_label), format_clock(snapshot.uptime), Color.VALUE)
    load_label = "System Load: "
    put(0, 30, load_label, Color.HEADER)
    one, five, fifteen = snapshot.system_load
    put(0, 30 + len(load_label), f"{one:.2f} {five:.2f} {fifteen:.2f}", Color.VALUE)

    cores = snapshot.cpu_cores
    put(2, 0, "CPU Information:", Color.HEADER)
    put(3, 2, f"Total Usage: {snapshot.cpu_usage:.1f}%", Color.VALUE)
    put(4, 2, f"Temperature: {snapshot.cpu_temp:.1f}°C", Color.VALUE)
    put(5, 2, "Per-core Usage:", Color.EXTRA)
    for index, usage in enumerate(snapshot.cpu_per_core[:cores]):
        put(6 + index, 4, f"Core {index}: {usage:5.1f}%", Color.DEFAULT)

    put(8 + cores, 0, "Memory Information:", Color.HEADER)
    put(9 + cores, 2, f"Total: {snapshot.mem_total:.1f} GB", Color.VALUE)
    put(
        10 + cores,
        2,
        f"Used:  {snapshot.mem_used:.1f} GB ({snapshot.mem_usage:.1f}%)",
        Color.VALUE,
    )
    put(11 + cores, 2, f"Buffers: {snapshot.mem_buffers:.1f} GB", Color.VALUE)
    put(12 + cores, 2, f"Cached:  {snapshot.mem_cached:.1f} GB", Color.VALUE)

    put(2, 40, "Disk Usage:", Color.HEADER)
    for index, disk in enumerate(snapshot.disks):
        put(
            3 + index,
            42,
            f"{disk.name}: {disk.used:.1f} GB / {disk.total:.1f} GB ({disk.usage:.1f}%)",
            Color.VALUE,
        )

    disk_count = len(snapshot.disks)
    put(8 + disk_count, 40, "Network Interfaces:", Color.HEADER)
    for index, iface in enumerate(snapshot.net_interfaces):
        if iface.is_loopback():
            continue
        row = 9 + disk_count + index
        put(row, 42, f"{iface.name}:", Color.NETWORK)
        put(row, 55, f"Received: {iface.rx_bytes / _BYTES_PER_MIB:.2f} MB", Color.VALUE)
        put(row, 85, f"Sent: {iface.tx_bytes / _BYTES_PER_MIB:.2f} MB", Color.VALUE)

    bottom = snapshot.bottom_start()
    if snapshot.battery_capacity > 0:
        put(bottom, 0, "Battery Status:", Color.HEADER)
        put(bottom + 1, 2, f"Charge: {snapshot.battery_capacity:d}%", Color.VALUE)
        put(bottom + 2, 2, f"Status: {snapshot.battery_status}", Color.VALUE)

    gpu = snapshot.gpu
    if gpu.usage > 0:
        put(bottom, 30, "GPU Information:", Color.HEADER)
        put(bottom + 1, 32, f"Usage: {gpu.usage:.1f}%", Color.VALUE)
        put(
            bottom + 2,
            32,
            f"Memory: {gpu.mem_used:.1f} MB / {gpu.mem_total:.1f} MB",
            Color.VALUE,
        )
        put(bottom + 3, 32, f"Temperature: {gpu.temp:.1f}°C", Color.VALUE)

    put(bottom, 60, "Top Processes:", Color.HEADER)
    put(bottom + 1, 62, "PID     CPU%   MEM%   COMMAND", Color.EXTRA)
    for index, proc in enumerate(snapshot.processes[:MAX_PROCESSES]):
        if proc.pid > 0:
            put(
                bottom + 2 + index,
                62,
                f"{proc.pid:<6d} {proc.cpu:6.1f} {proc.mem:6.1f}   {proc.name}",
                Color.PROCESS,
            )

    put(lines - 1, 0, _EXIT_HINT, Color.WARNING)
    return out


def init_screen(screen: curses.window) -> None:
    """Set up colours and input modes of a curses screen."""
    curses.start_color()
    curses.use_default_colors()
    for color, foreground in _FOREGROUND.items():
        curses.init_pair(color, foreground, -1)
    curses.noecho()
    with suppress(curses.error):
        curses.curs_set(0)
    screen.timeout(100)
    curses.cbreak()
    screen.keypad(True)


def render(screen: curses.window, snapshot: Snapshot) -> None:
    """Draw the snapshot onto the screen; text off the edge is dropped."""
    screen.erase()
    height, _ = screen.getmaxyx()
    for row, col, text, color in snapshot_lines(snapshot, height):
        with suppress(curses.error):
            screen.addstr(row, col, text, curses.color_pair(color))
    screen.refresh()