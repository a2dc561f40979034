"""The machine as a whole: CPU, memory, processes and identification."""

from __future__ import annotations

from planmon.linux_parser import LinuxParser
from planmon.process import Process
from planmon.processor import Processor


class System:
    """System-wide figures, read fresh on each call."""

    def __init__(self, parser: LinuxParser | None = None) -> None:
        self.parser = parser if parser is not None else LinuxParser()
        self.cpu = Processor(self.parser)

    def processes(self) -> list[Process]:
        """All current processes, highest CPU utilization first."""
        return sorted(Process(pid, self.parser) for pid in self.parser.pids())

    def memory_utilization(self) -> float:
        return self.parser.memory_utilization()

    def uptime(self) -> int:
        return self.parser.uptime()

    def total_processes(self) -> int:
        return self.parser.total_processes()

    def running_processes(self) -> int:
        return self.parser.running_processes()

    def kernel(self) -> str:
        return self.parser.kernel()

    def operating_system(self) -> str:
        return self.parser.operating_system()