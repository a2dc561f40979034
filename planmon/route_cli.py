"""Command line entry point: plan a route on an OSM map."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from planmon.render import Render
from planmon.route_model import RouteModel
from planmon.route_planner import RoutePlanner

DEFAULT_MAP = "../map.osm"
IMAGE_SIZE = 400


def read_file(path: str) -> bytes | None:
    """Return the file's bytes, or None if it cannot be read or is empty."""
    try:
        with open(path, "rb") as stream:
            contents = stream.read()
    except OSError:
        return None
    return contents or None


def _parse_args(args: Sequence[str]) -> tuple[str, str | None]:
    osm_file = ""
    output: str | None = None
    tokens = iter(args)
    for token in tokens:
        if token == "-f":
            osm_file = next(tokens, osm_file)
        elif token == "-o":
            output = next(tokens, output)
    return osm_file, output


def _read_coordinates() -> tuple[float, float, float, float]:
    tokens = sys.stdin.read().split()
    if len(tokens) < 4:
        raise ValueError("expected four coordinates: start_x start_y end_x end_y")
    start_x, start_y, end_x, end_y = (float(token) for token in tokens[:4])
    return start_x, start_y, end_x, end_y


def main(argv: Sequence[str] | None = None) -> int:
    """Read a map and four coordinates, search a route and report its length.

    Usage: ``[-f filename.osm] [-o image.png]``; coordinates come from stdin.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    osm_file, output = _parse_args(args)
    if not args:
        print("To specify a map file use the following format: ")
        print("Usage: [executable] [-f filename.osm]")
        osm_file = DEFAULT_MAP

    osm_data = b""
    if osm_file:
        print(f"Reading OpenStreetMap data from the following file: {osm_file}")
        data = read_file(osm_file)
        if data is None:
            print("Failed to read.")
        else:
            osm_data = data

    try:
        start_x, start_y, end_x, end_y = _read_coordinates()
        model = RouteModel(osm_data)
        planner = RoutePlanner(model, start_x, start_y, end_x, end_y)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    planner.a_star_search()
    print(f"Distance: {planner.distance:g} meters. ")

    if output:
        Render(model).display(IMAGE_SIZE, IMAGE_SIZE).save(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())