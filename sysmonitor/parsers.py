"""Parsers for kernel files and command output describing the system."""

from __future__ import annotations

import re
from collections.abc import Iterator
from itertools import takewhile

from .models import (
    BATTERY_STATUS_LIMIT,
    DISK_NAME_LIMIT,
    INTERFACE_NAME_LIMIT,
    MAX_CPU_CORES,
    MAX_DISKS,
    MAX_NET_INTERFACES,
    MAX_PROCESSES,
    MAX_CPU_STATS,
    PROCESS_NAME_LIMIT,
    DiskUsage,
    GpuInfo,
    NetInterface,
    ProcessEntry,
)

_INT = r"[+-]?\d+"
_FLOAT = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"

_CPU_TOTAL = re.compile(r"cpu\s*(\d+)" + r"\s+(\d+)" * 9)
_CPU_CORE = re.compile(rf"cpu\s*({_INT})" + r"\s+(\d+)" * MAX_CPU_STATS)
_LEADING_INT = re.compile(rf"\s*({_INT})")
_LEADING_FLOAT = re.compile(rf"\s*({_FLOAT})")
_LOADAVG = re.compile(rf"\s*({_FLOAT})\s+({_FLOAT})\s+({_FLOAT})")
_MEMINFO_LINE = re.compile(r"([^:\s]+):\s*(\d+)")
_PS_LINE = re.compile(rf"\s*({_INT})\s+({_FLOAT})\s+({_FLOAT})\s+(\S+)")
_NVIDIA_LINE = re.compile(rf"\s*({_INT}),\s*({_INT}),\s*({_INT}),\s*({_INT})")

_NET_DEV_HEADER_LINES = 2


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def _atof(token: str) -> float:
    """Leading numeric part of a token, or 0.0 when there is none."""
    match = _LEADING_FLOAT.match(token)
    return float(match.group(1)) if match else 0.0


def _idle_share(stats: list[int]) -> float:
    return 100.0 * (1.0 - stats[3] / sum(stats))


def cpu_usage_from_stat(text: str) -> float | None:
    """Overall CPU usage in percent from the aggregate line of /proc/stat.

    Returns None when the line does not carry all ten counters.
    """
    match = _CPU_TOTAL.match(_first_line(text))
    if match is None:
        return None
    stats = [int(value) for value in match.groups()[:8]]
    if sum(stats) == 0:
        return None
    return _idle_share(stats)


def _core_usage(line: str) -> float:
    match = _CPU_CORE.match(line)
    if match is None:
        return 0.0
    stats = [int(value) for value in match.groups()[1:]]
    return _idle_share(stats) if sum(stats) > 0 else 0.0


def core_usage_from_stat(text: str, cores: int) -> list[float]:
    """Usage in percent of each core, read from the lines after the aggregate one."""
    count = max(0, min(cores, MAX_CPU_CORES))
    lines = text.splitlines()[1 : count + 1]
    usage = [_core_usage(line) for line in lines]
    return usage + [0.0] * (count - len(usage))


def count_processors(text: str) -> int:
    """Number of processor entries in /proc/cpuinfo."""
    return sum(1 for line in text.splitlines() if line.startswith("processor"))


def parse_temperature(text: str) -> float | None:
    """Degrees Celsius from a thermal zone reading in millidegrees."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) / 1000.0 if match else None


def parse_loadavg(text: str) -> tuple[float, float, float]:
    """The 1, 5 and 15 minute load averages; zeros when unreadable."""
    match = _LOADAVG.match(text)
    if match is None:
        return (0.0, 0.0, 0.0)
    one, five, fifteen = (float(value) for value in match.groups())
    return (one, five, fifteen)


def parse_meminfo(text: str) -> dict[str, int]:
    """Every numeric field of /proc/meminfo, keyed by name, in kilobytes."""
    result: dict[str, int] = {}
    for line in text.splitlines():
        match = _MEMINFO_LINE.match(line)
        if match:
            result[match.group(1)] = int(match.group(2))
    return result


def _net_dev_rows(text: str) -> Iterator[tuple[str, list[int]]]:
    for line in text.splitlines()[_NET_DEV_HEADER_LINES:]:
        name, sep, rest = line.partition(":")
        name = name.strip()
        if not sep or not name:
            continue
        numbers = [int(token) for token in takewhile(str.isdigit, rest.split())]
        yield name[:INTERFACE_NAME_LIMIT], numbers


def parse_net_dev(text: str, limit: int = MAX_NET_INTERFACES) -> list[NetInterface]:
    """Interfaces listed in /proc/net/dev, at most ``limit`` of them."""
    interfaces: list[NetInterface] = []
    for name, numbers in _net_dev_rows(text):
        if len(interfaces) >= limit:
            break
        if len(numbers) < 10:
            continue
        interfaces.append(
            NetInterface(
                name=name,
                rx_bytes=numbers[0],
                rx_packets=numbers[1],
                tx_bytes=numbers[8],
                tx_packets=numbers[9],
            )
        )
    return interfaces


def first_external_interface(text: str) -> NetInterface | None:
    """The first interface whose name does not start with ``lo``."""
    for name, numbers in _net_dev_rows(text):
        if len(numbers) < 9:
            continue
        if name.startswith("lo"):
            continue
        return NetInterface(name=name, rx_bytes=numbers[0], tx_bytes=numbers[8])
    return None


def parse_ps_output(text: str, limit: int = MAX_PROCESSES) -> list[ProcessEntry]:
    """Rows of ``ps -eo pid,%cpu,%mem,comm``, skipping the header."""
    entries: list[ProcessEntry] = []
    for line in text.splitlines():
        if len(entries) >= limit:
            break
        if "PID" in line:
            continue
        match = _PS_LINE.match(line)
        if match is None:
            continue
        pid, cpu, mem, command = match.groups()
        entries.append(
            ProcessEntry(
                pid=int(pid),
                cpu=float(cpu),
                mem=float(mem),
                name=command[:PROCESS_NAME_LIMIT],
            )
        )
    return entries


def parse_df_output(text: str, limit: int = MAX_DISKS) -> list[DiskUsage]:
    """Block devices from ``df -h`` output, at most ``limit`` of them."""
    disks: list[DiskUsage] = []
    for line in text.splitlines():
        if len(disks) >= limit:
            break
        if not line.startswith("/dev/"):
            continue
        tokens = line.split()
        if len(tokens) < 6:
            continue
        name, size, used, avail, percent = tokens[:5]
        disks.append(
            DiskUsage(
                name=name[:DISK_NAME_LIMIT],
                total=_atof(size),
                used=_atof(used),
                free=_atof(avail),
                usage=_atof(percent),
            )
        )
    return disks


def parse_nvidia_smi(text: str) -> GpuInfo | None:
    """Usage, memory used, memory total and temperature from nvidia-smi CSV."""
    match = _NVIDIA_LINE.match(_first_line(text))
    if match is None:
        return None
    usage, mem_used, mem_total, temp = (int(value) for value in match.groups())
    return GpuInfo(usage=usage, mem_used=mem_used, mem_total=mem_total, temp=temp)


def parse_battery_capacity(text: str) -> int:
    """Battery charge in percent; 0 when unreadable."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_battery_status(text: str) -> str:
    """First line of the battery status file; ``Unknown`` when empty."""
    if not text:
        return "Unknown"
    return text[:BATTERY_STATUS_LIMIT].split("\n", 1)[0]