"""A single process as shown by the monitor."""

from __future__ import annotations

import math
import re

from planmon.linux_parser import LinuxParser

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class Process:
    """A snapshot of one process; ordering puts higher CPU usage first."""

    def __init__(self, pid: int, parser: LinuxParser | None = None) -> None:
        self._parser = parser if parser is not None else LinuxParser()
        self.pid = pid
        self.user = self._parser.user(pid)
        self.command = self._parser.command(pid)
        self.cpu_utilization = self._calculate_cpu_utilization()

    def __repr__(self) -> str:
        return f"Process(pid={self.pid}, cpu_utilization={self.cpu_utilization!r})"

    def _calculate_cpu_utilization(self) -> float:
        uptime = self._parser.uptime()
        times = self._parser.process_cpu_times(self.pid)
        if len(times) != 5:
            return 0.0
        *busy, start = times
        total = sum(busy)
        seconds = uptime - start
        if seconds:
            return total / seconds
        return math.copysign(math.inf, total) if total else math.nan

    def ram(self) -> str:
        """Virtual memory size in whole megabytes, '0' if unreadable."""
        match = _LEADING_INT.match(self._parser.ram(self.pid))
        if match is None:
            return "0"
        return str(int(int(match.group()) / 1024))

    def uptime(self) -> int:
        """The process's start time as read from its stat file."""
        return self._parser.process_uptime(self.pid)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Process):
            return NotImplemented
        return self.cpu_utilization > other.cpu_utilization