"""A* route planning over OpenStreetMap data, and a curses system monitor for Linux."""

__version__ = "0.1.0"