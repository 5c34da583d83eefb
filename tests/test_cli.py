import io

import pytest

from sysmonitor.cli import CLEAR_SCREEN, main, run_plain
from sysmonitor.display import basic_report

NET_DEV = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed\n"
    "    lo:  500  5 0 0 0 0 0 0  500  5 0 0 0 0 0 0\n"
    "  eth0: 7000 70 0 0 0 0 0 0 9000 90 0 0 0 0 0 0\n"
)


@pytest.fixture
def root(tmp_path):
    files = {
        "proc/stat": "cpu  10 0 10 80 0 0 0 0 0 0\ncpu0 10 0 10 80 0 0 0\n",
        "proc/meminfo": "MemTotal: 2097152 kB\nMemFree: 1048576 kB\nBuffers: 0 kB\nCached: 0 kB\n",
        "proc/loadavg": "0.50 0.25 0.10 1/100 1234\n",
        "proc/net/dev": NET_DEV,
        "sys/class/thermal/thermal_zone0/temp": "45000\n",
    }
    for relative, content in files.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return tmp_path


def _gpu_runner(command):
    if "nvidia-smi" in command:
        return "45, 2048, 8192, 60\n"
    return ""


def test_run_plain_writes_reports(root):
    stream = io.StringIO()
    info = run_plain(stream, interval=0, iterations=2, root=root, run=_gpu_runner)
    output = stream.getvalue()
    assert output.count(CLEAR_SCREEN) == 2
    assert output.startswith(CLEAR_SCREEN)
    assert output.endswith(CLEAR_SCREEN + basic_report(info))


def test_run_plain_reads_files(root):
    info = run_plain(io.StringIO(), interval=0, iterations=1, root=root, run=_gpu_runner)
    assert info.network_rx == 7000
    assert info.network_tx == 9000
    assert info.gpu_usage == 45
    assert (info.load_1min, info.load_5min, info.load_15min) == pytest.approx((0.5, 0.25, 0.1))
    assert info.memory_used == pytest.approx(info.memory_total - info.memory_free)


def test_run_plain_without_gpu(root):
    stream = io.StringIO()
    info = run_plain(stream, interval=0, iterations=1, root=root, run=lambda command: "")
    assert info.gpu_usage == 0
    assert "GPU:" not in stream.getvalue()


def test_run_plain_missing_root(tmp_path):
    info = run_plain(
        io.StringIO(), interval=0, iterations=1, root=tmp_path / "absent", run=lambda c: ""
    )
    assert info.memory_total == 0.0
    assert info.disk_total == 0.0
    assert info.network_rx == 0


def test_main_plain(root, capsys):
    status = main(["--plain", "--iterations", "1", "--interval", "0", "--root", str(root)])
    out = capsys.readouterr().out
    assert status == 0
    assert out.startswith(CLEAR_SCREEN + "System Monitor")
    assert out.count(CLEAR_SCREEN) == 1


@pytest.mark.parametrize(
    "argv",
    [["--interval", "-1"], ["--iterations", "0"], ["--interval", "soon"]],
)
def test_main_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2