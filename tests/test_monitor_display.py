from dataclasses import dataclass

import pytest

from planmon.format import elapsed_time
from planmon.monitor_display import display_processes, display_system, progress_bar


class FakeWindow:
    def __init__(self, height=20, width=80):
        self.height = height
        self.width = width
        self.writes = []
        self.refreshes = 0

    def addstr(self, row, col, text, attr=0):
        self.writes.append((row, col, text))

    def getmaxyx(self):
        return (self.height, self.width)

    def refresh(self):
        self.refreshes += 1

    def texts_at(self, row, col):
        return [text for r, c, text in self.writes if r == row and c == col]


class FakeCpu:
    def __init__(self, value):
        self.value = value

    def utilization(self):
        return self.value


class FakeSystem:
    def __init__(self):
        self.cpu = FakeCpu(0.5)

    def operating_system(self):
        return "Example OS"

    def kernel(self):
        return "6.1.0-test"

    def memory_utilization(self):
        return 0.25

    def total_processes(self):
        return 42

    def running_processes(self):
        return 3

    def uptime(self):
        return 3661


@dataclass
class FakeProcess:
    pid: int
    user: str
    command: str
    cpu_utilization: float
    ram_mb: str = "512"
    started: int = 100

    def ram(self):
        return self.ram_mb

    def uptime(self):
        return self.started


@pytest.mark.parametrize("percent", [0.0, 0.05, 0.15, 0.5, 0.73, 0.99, 1.0])
def test_progress_bar_shape(percent):
    bar = progress_bar(percent)
    assert bar.startswith("0%")
    assert bar.endswith("/100%")
    assert len(bar) == 62


def test_progress_bar_half():
    bar = progress_bar(0.5)
    assert bar[2:52] == "|" * 26 + " " * 24
    assert bar[52:] == " 50.0/100%"


def test_progress_bar_full_uses_short_label():
    bar = progress_bar(1.0)
    assert bar[2:52] == "|" * 50
    assert bar[52:] == "  100/100%"


def test_progress_bar_grows_with_percent():
    counts = [progress_bar(p / 10).count("|") for p in range(11)]
    assert counts == sorted(counts)
    assert counts[-1] == 50


def test_display_system_writes_rows():
    window = FakeWindow()
    system = FakeSystem()
    display_system(system, window)
    assert window.texts_at(1, 2) == ["OS: Example OS"]
    assert window.texts_at(2, 2) == ["Kernel: 6.1.0-test"]
    assert window.texts_at(3, 10) == [progress_bar(0.5)]
    assert window.texts_at(4, 10) == [progress_bar(0.25)]
    assert window.texts_at(5, 2) == ["Total Processes: 42"]
    assert window.texts_at(6, 2) == ["Running Processes: 3"]
    assert window.texts_at(7, 2) == ["Up Time: " + elapsed_time(3661)]
    assert window.refreshes == 1


def test_display_processes_header():
    window = FakeWindow(width=80)
    display_processes([], window, 10)
    assert window.texts_at(1, 2) == ["PID"]
    assert window.texts_at(1, 9) == ["USER"]
    assert window.texts_at(1, 16) == ["CPU[%]"]
    assert window.texts_at(1, 26) == ["RAM[MB]"]
    assert window.texts_at(1, 35) == ["TIME+"]
    assert window.texts_at(1, 46) == ["COMMAND"]


def test_display_processes_row_contents():
    window = FakeWindow(width=80)
    process = FakeProcess(pid=123, user="alice", command="/usr/bin/demo", cpu_utilization=0.5)
    display_processes([process], window, 10)
    assert window.texts_at(2, 2) == [" " * 77, "123"]
    assert window.texts_at(2, 9) == ["alice"]
    assert window.texts_at(2, 16) == ["50.0"]
    assert window.texts_at(2, 26) == ["512"]
    assert window.texts_at(2, 35) == [elapsed_time(100)]
    assert window.texts_at(2, 46) == ["/usr/bin/demo"]


def test_display_processes_truncates_command_to_window():
    window = FakeWindow(width=80)
    command = "x" * 60
    display_processes([FakeProcess(1, "root", command, 0.0)], window, 10)
    (written,) = window.texts_at(2, 46)
    assert written == command[:33]


def test_display_processes_narrow_window_keeps_command():
    window = FakeWindow(width=40)
    command = "y" * 60
    display_processes([FakeProcess(1, "root", command, 0.0)], window, 10)
    assert window.texts_at(2, 46) == [command]


def test_display_processes_limits_rows():
    window = FakeWindow(width=80)
    processes = [FakeProcess(pid, "user", "cmd", 0.1) for pid in range(1, 8)]
    display_processes(processes, window, 3)
    rows = {row for row, _col, _text in window.writes}
    assert rows == {1, 2, 3, 4}
    assert [window.texts_at(row, 2)[-1] for row in (2, 3, 4)] == ["1", "2", "3"]