"""Gathering of the full dashboard snapshot in one pass."""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from .collectors import (
    BATTERY_CAPACITY,
    BATTERY_STATUS,
    NVIDIA_SMI_COMMAND,
    PS_COMMAND,
    THERMAL_ZONE,
    Runner,
    run_command,
)
from .models import BATTERY_STATUS_LIMIT, MAX_CPU_STATS, Snapshot
from .parsers import (
    core_usage_from_stat,
    count_processors,
    parse_battery_capacity,
    parse_df_output,
    parse_loadavg,
    parse_meminfo,
    parse_net_dev,
    parse_nvidia_smi,
    parse_ps_output,
    parse_temperature,
)

DF_COMMAND = "df -h | grep '^/dev/'"

_BYTES_PER_GIB = 1024.0 * 1024.0 * 1024.0
_CPU_AGGREGATE = re.compile(r"cpu" + r"\s+(\d+)" * MAX_CPU_STATS)
_UPTIME = re.compile(r"\s*(\d+(?:\.\d*)?)")


class KernelMemory(NamedTuple):
    """Memory counters of the kernel, in bytes."""

    total: int
    free: int
    swap_total: int
    swap_free: int
    buffers: int
    cached: int


def _read(root: str | os.PathLike[str], relative: str) -> str | None:
    try:
        return (Path(root) / relative).read_text(errors="replace")
    except OSError:
        return None


def _aggregate_usage(stat: str) -> float:
    match = _CPU_AGGREGATE.match(stat.split("\n", 1)[0])
    if match is None:
        return 0.0
    stats = [int(value) for value in match.groups()]
    total = sum(stats)
    return 100.0 * (1.0 - stats[3] / total) if total else 0.0


def read_kernel_memory(root: str | os.PathLike[str] = "/") -> KernelMemory | None:
    """RAM and swap counters from /proc/meminfo, or None when unavailable."""
    text = _read(root, "proc/meminfo")
    if text is None:
        return None
    fields = parse_meminfo(text)
    if "MemTotal" not in fields:
        return None

    def in_bytes(name: str) -> int:
        return fields.get(name, 0) * 1024

    return KernelMemory(
        total=in_bytes("MemTotal"),
        free=in_bytes("MemFree"),
        swap_total=in_bytes("SwapTotal"),
        swap_free=in_bytes("SwapFree"),
        buffers=in_bytes("Buffers"),
        cached=in_bytes("Cached"),
    )


def read_uptime(root: str | os.PathLike[str] = "/") -> int | None:
    """Whole seconds since boot, or None when /proc/uptime is unreadable."""
    text = _read(root, "proc/uptime")
    if text is None:
        return None
    match = _UPTIME.match(text)
    return int(float(match.group(1))) if match else None


def _fill_memory(snap: Snapshot, memory: KernelMemory) -> None:
    snap.mem_total = memory.total / _BYTES_PER_GIB
    snap.mem_used = (memory.total - memory.free) / _BYTES_PER_GIB
    snap.mem_usage = snap.mem_used / snap.mem_total * 100 if snap.mem_total else 0.0
    snap.mem_buffers = memory.buffers / _BYTES_PER_GIB
    snap.mem_cached = memory.cached / _BYTES_PER_GIB
    snap.swap_total = memory.swap_total / _BYTES_PER_GIB
    snap.swap_used = (memory.swap_total - memory.swap_free) / _BYTES_PER_GIB
    snap.swap_usage = snap.swap_used / snap.swap_total * 100 if snap.swap_total > 0 else 0.0


def _run(run: Runner, command: str) -> str | None:
    try:
        return run(command)
    except OSError:
        return None


def take_snapshot(
    root: str | os.PathLike[str] = "/",
    run: Runner = run_command,
    which: Callable[[str], str | None] = shutil.which,
) -> Snapshot:
    """Collect everything the dashboard shows into a fresh Snapshot."""
    snap = Snapshot()

    cpuinfo = _read(root, "proc/cpuinfo")
    if cpuinfo is not None:
        snap.cpu_cores = count_processors(cpuinfo)

    stat = _read(root, "proc/stat")
    if stat is not None:
        snap.cpu_usage = _aggregate_usage(stat)
        snap.cpu_per_core = core_usage_from_stat(stat, snap.cpu_cores)

    temperature_text = _read(root, THERMAL_ZONE)
    if temperature_text is not None:
        temperature = parse_temperature(temperature_text)
        if temperature is not None:
            snap.cpu_temp = temperature

    memory = read_kernel_memory(root)
    if memory is not None:
        _fill_memory(snap, memory)

    loadavg = _read(root, "proc/loadavg")
    if loadavg is not None:
        snap.system_load = parse_loadavg(loadavg)

    uptime = read_uptime(root)
    if uptime is not None:
        snap.uptime = uptime

    ps_output = _run(run, PS_COMMAND)
    if ps_output is not None:
        snap.processes = parse_ps_output(ps_output)

    net_dev = _read(root, "proc/net/dev")
    if net_dev is not None:
        snap.net_interfaces = parse_net_dev(net_dev)

    df_output = _run(run, DF_COMMAND)
    if df_output is not None:
        snap.disks = parse_df_output(df_output)

    capacity = _read(root, BATTERY_CAPACITY)
    if capacity is not None:
        snap.battery_capacity = parse_battery_capacity(capacity)
        status = _read(root, BATTERY_STATUS)
        if status:
            snap.battery_status = status[:BATTERY_STATUS_LIMIT].split("\n", 1)[0]

    if which("nvidia-smi") is not None:
        gpu_output = _run(run, NVIDIA_SMI_COMMAND)
        if gpu_output is not None:
            gpu = parse_nvidia_smi(gpu_output)
            if gpu is not None:
                snap.gpu = gpu

    return snap