from sysmonitor.models import (
    DiskUsage,
    GpuInfo,
    NetInterface,
    ProcessEntry,
    Snapshot,
    SystemInfo,
)


def test_reset_restores_defaults():
    info = SystemInfo()
    info.cpu_usage = 42.5
    info.gpu_usage = 7
    info.network_rx = 123456
    info.memory_cached = 3.5
    info.reset()
    assert info == SystemInfo()


def test_reset_clears_every_field():
    info = SystemInfo(cpu_temp=50.0, disk_total=100.0, load_15min=2.0)
    info.reset()
    assert info.cpu_temp == 0
    assert info.disk_total == 0
    assert info.load_15min == 0


def test_loopback_detection():
    assert NetInterface("lo").is_loopback() is True
    assert NetInterface("eth0").is_loopback() is False
    assert NetInterface("lo0").is_loopback() is False


def test_bottom_start_default_row():
    assert Snapshot().bottom_start() == 14


def test_bottom_start_follows_cpu_cores():
    base = Snapshot().bottom_start()
    assert Snapshot(cpu_cores=4).bottom_start() - base == 4


def test_bottom_start_follows_disk_count_when_larger():
    disks = [DiskUsage(f"/dev/sd{letter}") for letter in "abc"]
    snapshot = Snapshot(cpu_cores=1, disks=disks)
    assert snapshot.bottom_start() - Snapshot().bottom_start() == len(disks)


def test_snapshot_lists_not_shared():
    first = Snapshot()
    second = Snapshot()
    first.processes.append(ProcessEntry(1, 0.5, 0.1, "init"))
    first.net_interfaces.append(NetInterface("eth0"))
    assert second.processes == []
    assert second.net_interfaces == []
    assert first.gpu is not second.gpu


def test_gpu_defaults_compare_equal():
    assert Snapshot().gpu == GpuInfo(usage=0, mem_used=0, mem_total=0, temp=0)