"""Collectors that fill the records from kernel files and system commands."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable
from pathlib import Path

from .models import Snapshot, SystemInfo
from .parsers import (
    cpu_usage_from_stat,
    first_external_interface,
    parse_battery_capacity,
    parse_battery_status,
    parse_loadavg,
    parse_meminfo,
    parse_nvidia_smi,
    parse_ps_output,
    parse_temperature,
)

PS_COMMAND = "ps -eo pid,%cpu,%mem,comm --sort=-%cpu | head -n 6"
NVIDIA_SMI_COMMAND = (
    "nvidia-smi --query-gpu=utilization.gpu,memory.used,memory.total,temperature.gpu"
    " --format=csv,noheader,nounits"
)

THERMAL_ZONE = "sys/class/thermal/thermal_zone0/temp"
BATTERY_CAPACITY = "sys/class/power_supply/BAT0/capacity"
BATTERY_STATUS = "sys/class/power_supply/BAT0/status"

_BYTES_PER_GIB = 1024.0 * 1024.0 * 1024.0
_KIB_PER_GIB = 1024.0 * 1024.0

Runner = Callable[[str], str]


def run_command(command: str) -> str:
    """Run a shell command line and return what it wrote to standard output."""
    completed = subprocess.run(
        command, shell=True, capture_output=True, text=True, check=False
    )
    return completed.stdout


def _read(root: str | os.PathLike[str], relative: str) -> str | None:
    try:
        return (Path(root) / relative).read_text(errors="replace")
    except OSError:
        return None


def update_cpu_info(info: SystemInfo, root: str | os.PathLike[str] = "/") -> None:
    """Refresh overall CPU usage, temperature and load averages."""
    stat = _read(root, "proc/stat")
    if stat is not None:
        usage = cpu_usage_from_stat(stat)
        if usage is not None:
            info.cpu_usage = usage

    temperature_text = _read(root, THERMAL_ZONE)
    if temperature_text is not None:
        temperature = parse_temperature(temperature_text)
        if temperature is not None:
            info.cpu_temp = temperature

    loadavg = _read(root, "proc/loadavg")
    if loadavg is not None:
        info.load_1min, info.load_5min, info.load_15min = parse_loadavg(loadavg)


def update_memory_info(info: SystemInfo, root: str | os.PathLike[str] = "/") -> None:
    """Refresh memory totals, in gigabytes, from /proc/meminfo."""
    text = _read(root, "proc/meminfo")
    if text is None:
        info.memory_total = info.memory_free = 0.0
        info.memory_used = info.memory_cached = 0.0
        return
    fields = parse_meminfo(text)
    info.memory_total = fields.get("MemTotal", 0) / _KIB_PER_GIB
    info.memory_free = fields.get("MemFree", 0) / _KIB_PER_GIB
    info.memory_used = info.memory_total - info.memory_free
    cached = fields.get("Buffers", 0) + fields.get("Cached", 0)
    info.memory_cached = cached / _KIB_PER_GIB


def update_disk_info(info: SystemInfo, path: str | os.PathLike[str] = "/") -> None:
    """Refresh size and free space, in gigabytes, of the file system at ``path``."""
    try:
        stat = os.statvfs(path)
    except OSError:
        info.disk_total = info.disk_free = info.disk_used = 0.0
        return
    info.disk_total = stat.f_blocks * stat.f_frsize / _BYTES_PER_GIB
    info.disk_free = stat.f_bfree * stat.f_frsize / _BYTES_PER_GIB
    info.disk_used = info.disk_total - info.disk_free


def update_gpu_info(info: SystemInfo, run: Runner = run_command) -> None:
    """Refresh GPU figures from nvidia-smi; memory is stored in gigabytes."""
    try:
        output = run(NVIDIA_SMI_COMMAND)
    except OSError:
        info.gpu_usage = 0
        info.gpu_mem_used = info.gpu_mem_total = info.gpu_temp = 0.0
        return
    gpu = parse_nvidia_smi(output)
    if gpu is None:
        return
    info.gpu_usage = int(gpu.usage)
    info.gpu_mem_used = gpu.mem_used / 1024.0
    info.gpu_mem_total = gpu.mem_total / 1024.0
    info.gpu_temp = gpu.temp


def update_network_info(info: SystemInfo, root: str | os.PathLike[str] = "/") -> None:
    """Refresh traffic counters from the first non-loopback interface."""
    text = _read(root, "proc/net/dev")
    if text is None:
        return
    interface = first_external_interface(text)
    if interface is not None:
        info.network_rx = interface.rx_bytes
        info.network_tx = interface.tx_bytes


def update_battery_info(info: Snapshot, root: str | os.PathLike[str] = "/") -> None:
    """Refresh battery charge and status of the first battery."""
    capacity = _read(root, BATTERY_CAPACITY)
    info.battery_capacity = 0 if capacity is None else parse_battery_capacity(capacity)

    status = _read(root, BATTERY_STATUS)
    info.battery_status = "Unknown" if status is None else parse_battery_status(status)


def update_process_info(info: Snapshot, run: Runner = run_command) -> None:
    """Refresh the table of processes using the most CPU."""
    try:
        output = run(PS_COMMAND)
    except OSError:
        return
    info.processes = parse_ps_output(output)