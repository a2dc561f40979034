"""Aggregate CPU utilization between successive samples."""

from __future__ import annotations

import math

from planmon.linux_parser import CPUState, LinuxParser

_COUNTED = (
    CPUState.USER,
    CPUState.NICE,
    CPUState.SYSTEM,
    CPUState.IDLE,
    CPUState.IOWAIT,
    CPUState.IRQ,
    CPUState.SOFTIRQ,
    CPUState.STEAL,
)


class Processor:
    """The machine's CPU; each reading compares with the previous one."""

    def __init__(self, parser: LinuxParser | None = None) -> None:
        self._parser = parser if parser is not None else LinuxParser()
        self._prev_total = 0.0
        self._prev_idle = 0.0

    def utilization(self) -> float:
        """Busy fraction of CPU time since the last call (or since boot)."""
        cpus = self._parser.cpu_utilization()
        if not cpus:
            return 0.0
        total = sum(float(cpus[state]) for state in _COUNTED)
        idle = float(cpus[CPUState.IDLE]) + float(cpus[CPUState.IOWAIT])

        total_diff = total - self._prev_total
        idle_diff = idle - self._prev_idle
        busy = total_diff - idle_diff
        if total_diff:
            result = busy / total_diff
        else:
            result = math.copysign(math.inf, busy) if busy else math.nan
        self._prev_total = total
        self._prev_idle = idle
        return result