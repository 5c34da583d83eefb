# sysmonitor

A small terminal monitor for Linux. It reads `/proc` and `/sys`, and it runs
`ps`, `df` and `nvidia-smi` through the shell. It has no dependencies outside
the Python standard library.

## Installation

```
pip install .
```

## Usage

Start the full-screen curses dashboard:

```
sysmonitor
```

The dashboard refreshes once a second. Press `q` to exit. It shows:

- system uptime as `HH:MM:SS` and the 1, 5 and 15 minute load averages
- overall CPU usage, temperature (from `thermal_zone0`) and per-core usage
- total, used, buffered and cached memory
- devices under `/dev/` as listed by `df -h`, up to eight
- received and sent megabytes for each network interface except `lo`
- battery charge and status of `BAT0`, when it reports a charge above zero
- GPU usage, memory and temperature, when `nvidia-smi` is on the `PATH` and
  reports a usage above zero
- the five processes that use the most CPU

Options:

| Option | Meaning |
| --- | --- |
| `--plain` | Print a plain-text report in a loop instead of the dashboard. Each report clears the terminal first. |
| `--interval SECONDS` | Seconds between refreshes (default 1, must not be negative). |
| `--iterations N` | Stop after N reports (at least 1). Without it the report repeats until interrupted. |
| `--root DIR` | Read `proc` and `sys` below `DIR` instead of `/`. Used in plain mode only. |

The plain report shows overall CPU usage, temperature and load averages. It
also shows memory totals, the size and free space of the file system at the
root directory, GPU figures when there are any, and the traffic of the first
network interface whose name does not start with `lo`.

Ctrl+C ends either mode quietly.

## Using it as a library

The parsers in `sysmonitor.parsers` work on plain text, so you can use them on
captured files:

```python
from sysmonitor.parsers import parse_loadavg, parse_meminfo

print(parse_loadavg("0.52 0.58 0.59 1/467 12345\n"))  # (0.52, 0.58, 0.59)
print(parse_meminfo("MemTotal: 16384 kB\n")["MemTotal"])  # 16384
```

Other modules:

- `sysmonitor.snapshot.take_snapshot(root, run, which)` collects everything
  the dashboard shows into a `sysmonitor.models.Snapshot`. `root` is the
  directory that holds `proc` and `sys`. `run` takes a shell command line and
  returns its output. `which` locates `nvidia-smi`. You can replace each of
  them for testing or for reading captured data.
- `sysmonitor.collectors` has the `update_*_info` functions. Each one
  refreshes part of a `SystemInfo` record, or, for battery and processes,
  part of a `Snapshot`.
- `sysmonitor.display.snapshot_lines(snapshot, lines)` lays a snapshot out as
  `(row, column, text, colour)` tuples for a screen `lines` rows high.
  `basic_report(info)` returns the plain-text report as a string.
  `format_uptime`, `format_clock` and `format_traffic` format single values.

## Limitations

- It works on Linux only, because it relies on `/proc`, `/sys` and
  `os.statvfs`.
- It shows the current state only. It keeps no history, writes no logs and
  stores nothing on disk.
- It only watches the machine. It cannot act on processes or devices.
- CPU usage is worked out from the counters since boot, not from the change
  since the last refresh.
- Swap figures are collected into the snapshot but the dashboard does not
  show them.
- GPU figures come from `nvidia-smi` only, so other graphics cards are not
  shown.

## Running the tests

```
pip install .[test]
pytest
```