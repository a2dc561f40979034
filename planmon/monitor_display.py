"""Terminal display of the system monitor."""

from __future__ import annotations

import argparse
import curses
import math
import struct
import time
from collections.abc import Sequence

from planmon.format import elapsed_time
from planmon.system import System

BAR_SIZE = 50
REFRESH_SECONDS = 1.0

PID_COLUMN = 2
USER_COLUMN = 9
CPU_COLUMN = 16
RAM_COLUMN = 26
TIME_COLUMN = 35
COMMAND_COLUMN = 46


def _f32(value: float) -> float:
    """Round a value to single precision."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _fixed(value: float) -> str:
    """Six-decimal fixed notation of a value."""
    return f"{value:f}"


def _pair(number: int) -> int:
    """The attribute of a colour pair, or plain text where colours are unavailable."""
    try:
        return curses.color_pair(number)
    except curses.error:
        return curses.A_NORMAL


def _put(window, row: int, col: int, text: str, attr: int = curses.A_NORMAL) -> None:
    """Write text at a position; text falling outside the window is dropped."""
    try:
        window.addstr(row, col, text, attr)
    except curses.error:
        pass


def progress_bar(percent: float) -> str:
    """A 50-bar gauge for a fraction between 0 and 1, followed by its percentage."""
    bars = _f32(percent * BAR_SIZE)
    gauge = "".join("|" if i <= bars else " " for i in range(BAR_SIZE))
    shown = _fixed(_f32(percent * 100))
    label = shown[:4]
    if percent < 0.1 or percent == 1.0:
        label = " " + shown[:3]
    return f"0%{gauge} {label}/100%"


def display_system(system: System, window) -> None:
    """Draw the system summary into a window."""
    bar_attr = _pair(1)
    row = 1
    _put(window, row, 2, "OS: " + system.operating_system())
    row += 1
    _put(window, row, 2, "Kernel: " + system.kernel())
    row += 1
    _put(window, row, 2, "CPU: ")
    _put(window, row, 10, progress_bar(system.cpu.utilization()), bar_attr)
    row += 1
    _put(window, row, 2, "Memory: ")
    _put(window, row, 10, progress_bar(system.memory_utilization()), bar_attr)
    row += 1
    _put(window, row, 2, f"Total Processes: {system.total_processes()}")
    row += 1
    _put(window, row, 2, f"Running Processes: {system.running_processes()}")
    row += 1
    _put(window, row, 2, "Up Time: " + elapsed_time(system.uptime()))
    window.refresh()


def display_processes(processes: Sequence, window, n: int) -> None:
    """Draw a header and the first ``n`` processes into a window."""
    header_attr = _pair(2)
    max_x = window.getmaxyx()[1] - 1
    row = 1
    for col, title in (
        (PID_COLUMN, "PID"),
        (USER_COLUMN, "USER"),
        (CPU_COLUMN, "CPU[%]"),
        (RAM_COLUMN, "RAM[MB]"),
        (TIME_COLUMN, "TIME+"),
        (COMMAND_COLUMN, "COMMAND"),
    ):
        _put(window, row, col, title, header_attr)

    command_width = max_x - COMMAND_COLUMN
    for process in processes[:n]:
        row += 1
        _put(window, row, PID_COLUMN, " " * max(max_x - 2, 0))
        _put(window, row, PID_COLUMN, str(process.pid))
        _put(window, row, USER_COLUMN, process.user)
        cpu = _f32(process.cpu_utilization * 100)
        _put(window, row, CPU_COLUMN, _fixed(cpu)[:4])
        _put(window, row, RAM_COLUMN, process.ram())
        _put(window, row, TIME_COLUMN, elapsed_time(process.uptime()))
        command = process.command if command_width < 0 else process.command[:command_width]
        _put(window, row, COMMAND_COLUMN, command)


def _run(stdscr, system: System, n: int) -> None:
    x_max = stdscr.getmaxyx()[1]
    system_window = curses.newwin(9, x_max - 1, 0, 0)
    process_window = curses.newwin(3 + n, x_max - 1, system_window.getmaxyx()[0], 0)
    while True:
        curses.init_pair(1, curses.COLOR_BLUE, curses.COLOR_BLACK)
        curses.init_pair(2, curses.COLOR_GREEN, curses.COLOR_BLACK)
        system_window.box()
        process_window.box()
        display_system(system, system_window)
        display_processes(system.processes(), process_window, n)
        system_window.refresh()
        process_window.refresh()
        stdscr.refresh()
        time.sleep(REFRESH_SECONDS)


def display(system: System, n: int = 10) -> None:
    """Show the monitor in the terminal, refreshing every second until interrupted."""
    curses.wrapper(_run, system, n)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the system monitor."""
    parser = argparse.ArgumentParser(prog="monitor", description="Show system and process statistics.")
    parser.parse_args(argv)
    try:
        display(System())
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())