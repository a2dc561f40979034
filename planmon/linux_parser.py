"""Reads system and process statistics from procfs-style files."""

from __future__ import annotations

import os
import re
from enum import IntEnum
from pathlib import Path

_WORD = re.compile(r"[^ \t\n\v\f\r]+")
_LEADING_FLOAT = re.compile(r"[ \t\n\v\f\r]*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*[+-]?\d+")

_ACCOUNTS_FILE = Path("/etc/passwd")
_OS_RELEASE_FILE = Path("/etc/os-release")
_PROC_DIR = Path("/proc")


class CPUState(IntEnum):
    """Column positions of the aggregate ``cpu`` line in ``/proc/stat``."""

    USER = 0
    NICE = 1
    SYSTEM = 2
    IDLE = 3
    IOWAIT = 4
    IRQ = 5
    SOFTIRQ = 6
    STEAL = 7
    GUEST = 8
    GUEST_NICE = 9


# 1-based field positions in /proc/<pid>/stat.
_UTIME = 14
_STIME = 15
_CUTIME = 16
_CSTIME = 17
_STARTTIME = 22
_PROCESS_CPU_FIELDS = (_UTIME, _STIME, _CUTIME, _CSTIME, _STARTTIME)


def _words(line: str) -> list[str]:
    return _WORD.findall(line)


def _pairs(words: list[str]):
    it = iter(words)
    return zip(it, it)


def _to_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group())


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group())


def _nth_word(words: list[str], n: int) -> str:
    """The n-th word (1-based); past the end, the last one read, else ''."""
    if len(words) >= n:
        return words[n - 1]
    return words[-1] if words else ""


def _second_word(line: str, current: str) -> str:
    words = _words(line)
    return words[1] if len(words) > 1 else current


def _read_lines(path: Path) -> list[str] | None:
    """The file's lines without newlines, or None if it cannot be opened."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="\n") as stream:
            return [line.rstrip("\n") for line in stream]
    except OSError:
        return None


def _first_line(path: Path) -> str | None:
    lines = _read_lines(path)
    if lines is None:
        return None
    return lines[0] if lines else ""


def _clock_ticks() -> int:
    try:
        return os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError):
        return 100


class LinuxParser:
    """Parses the files under a proc directory and a few files under /etc."""

    def __init__(
        self,
        proc_dir: str | Path = _PROC_DIR,
        os_release_path: str | Path = _OS_RELEASE_FILE,
        passwd_path: str | Path = _ACCOUNTS_FILE,
    ) -> None:
        self.proc_dir = Path(proc_dir)
        self.os_release_path = Path(os_release_path)
        self.passwd_path = Path(passwd_path)
        self.clock_ticks = _clock_ticks()

    def _proc(self, *parts: object) -> Path:
        return self.proc_dir.joinpath(*(str(part) for part in parts))

    def _last_second_word(self, path: Path, prefix: str) -> str:
        value = ""
        for line in _read_lines(path) or ():
            if line.startswith(prefix):
                value = _second_word(line, value)
        return value

    def operating_system(self) -> str:
        """The PRETTY_NAME from the os-release file."""
        value = ""
        for line in _read_lines(self.os_release_path) or ():
            line = line.replace(" ", "_").replace("=", " ").replace('"', " ")
            for key, value in _pairs(_words(line)):
                if key == "PRETTY_NAME":
                    return value.replace("_", " ")
        return value

    def kernel(self) -> str:
        """The kernel release, the third word of the version file."""
        words = _words(_first_line(self._proc("version")) or "")
        return words[2] if len(words) >= 3 else ""

    def pids(self) -> list[int]:
        """Ids of the processes: the all-digit directory names, sorted."""
        with os.scandir(self.proc_dir) as entries:
            return sorted(
                int(entry.name)
                for entry in entries
                if entry.is_dir() and entry.name.isascii() and entry.name.isdigit()
            )

    def memory_utilization(self) -> float:
        """Fraction of total memory that is not free."""
        total = free = ""
        for line in _read_lines(self._proc("meminfo")) or ():
            if line.startswith("MemTotal"):
                total = _second_word(line, total)
            elif line.startswith("MemFree"):
                free = _second_word(line, free)
            elif total and free:
                break
        total_kb = _to_float(total)
        return (total_kb - _to_float(free)) / total_kb

    def uptime(self) -> int:
        """Whole seconds since boot."""
        words = _words(_first_line(self._proc("uptime")) or "")
        return _to_int(words[0] if words else "")

    def cpu_utilization(self) -> list[str]:
        """The ten jiffy counters of the aggregate cpu line, or [] if absent."""
        words = iter(_words(_first_line(self._proc("stat")) or ""))
        for chunk in zip(*[words] * 11):
            if chunk[0] == "cpu":
                return list(chunk[1:])
        return []

    def total_processes(self) -> int:
        """Number of processes created since boot."""
        return _to_int(self._last_second_word(self._proc("stat"), "processes"))

    def running_processes(self) -> int:
        """Number of processes currently running."""
        return _to_int(self._last_second_word(self._proc("stat"), "procs_running"))

    def process_cpu_times(self, pid: int) -> list[float]:
        """utime, stime, cutime, cstime and starttime of a process, in seconds."""
        times: list[float] = []
        value = ""
        for line in _read_lines(self._proc(pid, "stat")) or ():
            words = _words(line)[:_STARTTIME]
            fields = words + [words[-1] if words else value] * (_STARTTIME - len(words))
            times.extend(_to_float(fields[n - 1]) / self.clock_ticks for n in _PROCESS_CPU_FIELDS)
            value = fields[-1]
        return times

    def command(self, pid: int) -> str:
        """The first word of the process's command line."""
        words = _words(_first_line(self._proc(pid, "cmdline")) or "")
        return words[0] if words else ""

    def ram(self, pid: int) -> str:
        """The VmSize of a process, in kB, as text."""
        value = ""
        for line in _read_lines(self._proc(pid, "status")) or ():
            for key, value in _pairs(_words(line.replace(":", " "))):
                if key == "VmSize":
                    return value
        return value

    def uid(self, pid: int) -> str:
        """The real user id of a process, as text."""
        return self._last_second_word(self._proc(pid, "status"), "Uid")

    def user(self, pid: int) -> str:
        """The name of the user owning a process, or '' if unknown."""
        uid = self.uid(pid)
        fields = ["", "", ""]
        for line in _read_lines(self.passwd_path) or ():
            head = _words(line.replace(":", " "))[:3]
            fields[: len(head)] = head
            if fields[2] == uid:
                return fields[0]
        return ""

    def process_uptime(self, pid: int) -> int:
        """The starttime field of a process's stat file; 0 if it cannot be read."""
        line = _first_line(self._proc(pid, "stat"))
        if line is None:
            return 0
        return _to_int(_nth_word(_words(line), _STARTTIME))