import pytest

from sysmonitor.models import GpuInfo, Snapshot
from sysmonitor.parsers import (
    core_usage_from_stat,
    cpu_usage_from_stat,
    parse_df_output,
    parse_loadavg,
    parse_net_dev,
    parse_nvidia_smi,
    parse_ps_output,
)
from sysmonitor.snapshot import (
    DF_COMMAND,
    read_kernel_memory,
    read_uptime,
    take_snapshot,
)

CPUINFO = "processor\t: 0\nmodel name\t: Test\n\nprocessor\t: 1\nmodel name\t: Test\n"
STAT = (
    "cpu  100 0 100 800 0 0 0 0 0 0\n"
    "cpu0 50 0 50 400 0 0 0 0 0 0\n"
    "cpu1 30 0 20 150 0 0 0 0 0 0\n"
    "intr 12345\n"
)
MEMINFO = (
    "MemTotal:        4194304 kB\n"
    "MemFree:         1048576 kB\n"
    "Buffers:          262144 kB\n"
    "Cached:           524288 kB\n"
    "SwapCached:            0 kB\n"
    "SwapTotal:       2097152 kB\n"
    "SwapFree:        1048576 kB\n"
)
LOADAVG = "0.50 1.25 1.75 1/100 1234\n"
NET_DEV = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|"
    "bytes    packets errs drop fifo colls carrier compressed\n"
    "    lo:  5000      50    0    0    0     0          0         0"
    "     5000      50    0    0    0     0       0          0\n"
    "  eth0: 123456    789    0    0    0     0          0         0"
    "    654321     987    0    0    0     0       0          0\n"
)
PS_OUTPUT = "    PID %CPU %MEM COMMAND\n   1234 25.0  1.5 python3\n   2345 10.0  0.5 bash\n"
DF_OUTPUT = (
    "/dev/sda1        50G   20G   28G  42% /\n"
    "/dev/sdb1       100G   10G   90G  10% /data\n"
)
GPU_OUTPUT = "35, 2048, 8192, 60\n"


def _write(root, relative, text):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def _fake_run(command):
    if command.startswith("ps"):
        return PS_OUTPUT
    if command == DF_COMMAND:
        return DF_OUTPUT
    if command.startswith("nvidia-smi"):
        return GPU_OUTPUT
    raise FileNotFoundError(command)


def _failing_run(command):
    raise OSError(command)


@pytest.fixture
def machine(tmp_path):
    _write(tmp_path, "proc/cpuinfo", CPUINFO)
    _write(tmp_path, "proc/stat", STAT)
    _write(tmp_path, "proc/meminfo", MEMINFO)
    _write(tmp_path, "proc/loadavg", LOADAVG)
    _write(tmp_path, "proc/uptime", "12345.67 54321.00\n")
    _write(tmp_path, "proc/net/dev", NET_DEV)
    _write(tmp_path, "sys/class/thermal/thermal_zone0/temp", "45000\n")
    _write(tmp_path, "sys/class/power_supply/BAT0/capacity", "87\n")
    _write(tmp_path, "sys/class/power_supply/BAT0/status", "Discharging\n")
    return tmp_path


def test_snapshot_cpu(machine):
    snap = take_snapshot(machine, _fake_run, lambda name: "/usr/bin/" + name)
    assert snap.cpu_cores == 2
    assert snap.cpu_usage == pytest.approx(cpu_usage_from_stat(STAT))
    assert snap.cpu_per_core == core_usage_from_stat(STAT, 2)
    assert snap.cpu_temp * 1000 == pytest.approx(45000)


def test_snapshot_memory(machine):
    snap = take_snapshot(machine, _fake_run, lambda name: None)
    assert snap.mem_usage == pytest.approx(75.0)
    assert snap.swap_usage == pytest.approx(50.0)
    assert snap.mem_used < snap.mem_total
    assert snap.mem_buffers < snap.mem_cached


def test_snapshot_load_uptime_and_tables(machine):
    snap = take_snapshot(machine, _fake_run, lambda name: None)
    assert snap.system_load == parse_loadavg(LOADAVG)
    assert snap.uptime == 12345
    assert snap.processes == parse_ps_output(PS_OUTPUT)
    assert snap.disks == parse_df_output(DF_OUTPUT)
    assert snap.net_interfaces == parse_net_dev(NET_DEV)


def test_snapshot_battery(machine):
    snap = take_snapshot(machine, _fake_run, lambda name: None)
    assert snap.battery_capacity == 87
    assert snap.battery_status == "Discharging"


def test_snapshot_battery_without_status_file(tmp_path):
    _write(tmp_path, "sys/class/power_supply/BAT0/capacity", "60\n")
    snap = take_snapshot(tmp_path, _failing_run, lambda name: None)
    assert snap.battery_capacity == 60
    assert snap.battery_status == ""


def test_snapshot_gpu_when_tool_present(machine):
    snap = take_snapshot(machine, _fake_run, lambda name: "/usr/bin/" + name)
    assert snap.gpu == parse_nvidia_smi(GPU_OUTPUT)


def test_snapshot_gpu_skipped_when_tool_absent(machine):
    snap = take_snapshot(machine, _fake_run, lambda name: None)
    assert snap.gpu == GpuInfo()


def test_snapshot_of_empty_root_is_default(tmp_path):
    assert take_snapshot(tmp_path, _failing_run, lambda name: None) == Snapshot()


def test_snapshot_zero_swap_has_zero_usage(tmp_path):
    _write(tmp_path, "proc/meminfo", "MemTotal: 1024 kB\nMemFree: 512 kB\nSwapTotal: 0 kB\n")
    snap = take_snapshot(tmp_path, _failing_run, lambda name: None)
    assert snap.swap_usage == 0.0
    assert snap.swap_total == 0.0


def test_read_kernel_memory_in_bytes(machine):
    memory = read_kernel_memory(machine)
    assert memory.total == 4194304 * 1024
    assert memory.free == 1048576 * 1024
    assert memory.swap_total == 2097152 * 1024
    assert memory.cached == 524288 * 1024


def test_read_kernel_memory_missing(tmp_path):
    assert read_kernel_memory(tmp_path) is None
    _write(tmp_path, "proc/meminfo", "MemFree: 10 kB\n")
    assert read_kernel_memory(tmp_path) is None


def test_read_uptime(tmp_path):
    assert read_uptime(tmp_path) is None
    _write(tmp_path, "proc/uptime", "garbage\n")
    assert read_uptime(tmp_path) is None
    _write(tmp_path, "proc/uptime", "987.99 100.00\n")
    assert read_uptime(tmp_path) == 987