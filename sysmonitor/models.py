"""Data records describing the state of the machine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

MAX_CPU_STATS = 7
REFRESH_RATE = 1  # seconds
MAX_PROCESSES = 5
MAX_CPU_CORES = 32
MAX_NET_INTERFACES = 8
MAX_DISKS = 8

# Width limits of the text fields, in characters.
INTERFACE_NAME_LIMIT = 31
DISK_NAME_LIMIT = 31
PROCESS_NAME_LIMIT = 255
BATTERY_STATUS_LIMIT = 31


@dataclass
class SystemInfo:
    """Summary figures shown by the plain-text report."""

    cpu_usage: float = 0.0
    cpu_temp: float = 0.0
    load_1min: float = 0.0
    load_5min: float = 0.0
    load_15min: float = 0.0

    memory_total: float = 0.0
    memory_used: float = 0.0
    memory_free: float = 0.0
    memory_cached: float = 0.0

    disk_total: float = 0.0
    disk_used: float = 0.0
    disk_free: float = 0.0

    gpu_usage: int = 0
    gpu_mem_used: float = 0.0
    gpu_mem_total: float = 0.0
    gpu_temp: float = 0.0

    network_rx: int = 0
    network_tx: int = 0

    def reset(self) -> None:
        """Put every figure back to its zero default."""
        for item in fields(self):
            setattr(self, item.name, item.default)


@dataclass
class NetInterface:
    """Traffic counters of one network interface."""

    name: str
    rx_bytes: int = 0
    tx_bytes: int = 0
    rx_packets: int = 0
    tx_packets: int = 0

    def is_loopback(self) -> bool:
        """True for the local loopback interface."""
        return self.name == "lo"


@dataclass
class DiskUsage:
    """Usage of one mounted block device, as reported by df."""

    name: str
    total: float = 0.0
    used: float = 0.0
    free: float = 0.0
    usage: float = 0.0


@dataclass
class ProcessEntry:
    """One line of the top-processes table."""

    pid: int
    cpu: float
    mem: float
    name: str


@dataclass
class GpuInfo:
    """Utilisation, memory and temperature of the graphics card."""

    usage: float = 0.0
    mem_used: float = 0.0
    mem_total: float = 0.0
    temp: float = 0.0


@dataclass
class Snapshot:
    """Full view of the machine shown by the curses dashboard."""

    cpu_usage: float = 0.0
    cpu_temp: float = 0.0
    cpu_cores: int = 0
    cpu_per_core: list[float] = field(default_factory=list)

    mem_usage: float = 0.0
    mem_used: float = 0.0
    mem_total: float = 0.0
    mem_buffers: float = 0.0
    mem_cached: float = 0.0
    swap_usage: float = 0.0
    swap_used: float = 0.0
    swap_total: float = 0.0

    system_load: tuple[float, float, float] = (0.0, 0.0, 0.0)

    processes: list[ProcessEntry] = field(default_factory=list)

    battery_capacity: int = 0
    battery_status: str = ""

    gpu: GpuInfo = field(default_factory=GpuInfo)

    net_interfaces: list[NetInterface] = field(default_factory=list)
    disks: list[DiskUsage] = field(default_factory=list)

    uptime: int = 0

    def bottom_start(self) -> int:
        """First screen row below both the CPU and the disk columns."""
        return 14 + max(self.cpu_cores, len(self.disks))