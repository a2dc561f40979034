"""Draws a route model and its found path onto a Pillow image."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from PIL import Image, ImageDraw

from planmon.model import LanduseType, Model, Multipolygon, RoadType, Way

Color = tuple[int, int, int]
Dashes = tuple[float, tuple[float, ...]]
Point = tuple[float, float]

BACKGROUND_COLOR: Color = (238, 235, 227)
BUILDING_FILL: Color = (208, 197, 190)
BUILDING_OUTLINE: Color = (181, 167, 154)
LEISURE_FILL: Color = (189, 252, 193)
LEISURE_OUTLINE: Color = (160, 248, 162)
WATER_FILL: Color = (155, 201, 215)
RAILWAY_STROKE: Color = (93, 93, 93)
RAILWAY_DASH: Color = (255, 255, 255)
RAILWAY_DASHES: Dashes = (0.0, (3.0, 3.0))
RAILWAY_OUTER_WIDTH = 3.0
RAILWAY_INNER_WIDTH = 2.0
PATH_COLOR: Color = (255, 165, 0)
PATH_WIDTH = 5.0
START_COLOR: Color = (0, 128, 0)
END_COLOR: Color = (255, 0, 0)
MARKER_SIZE = 0.01
GREY: Color = (128, 128, 128)
NO_DASHES: Dashes = (0.0, ())

LANDUSE_COLORS: dict[LanduseType, Color] = {
    LanduseType.COMMERCIAL: (233, 195, 196),
    LanduseType.CONSTRUCTION: (187, 188, 165),
    LanduseType.GRASS: (197, 236, 148),
    LanduseType.FOREST: (158, 201, 141),
    LanduseType.INDUSTRIAL: (223, 197, 220),
    LanduseType.RAILWAY: (223, 197, 220),
    LanduseType.RESIDENTIAL: (209, 209, 209),
}

_ROAD_WIDTHS = {
    RoadType.MOTORWAY: 6.0,
    RoadType.TRUNK: 6.0,
    RoadType.PRIMARY: 5.0,
    RoadType.SECONDARY: 5.0,
    RoadType.TERTIARY: 4.0,
    RoadType.RESIDENTIAL: 2.5,
    RoadType.UNCLASSIFIED: 2.5,
    RoadType.SERVICE: 1.0,
    RoadType.FOOTWAY: 0.0,
}

_ROAD_COLORS = {
    RoadType.MOTORWAY: (226, 122, 143),
    RoadType.TRUNK: (245, 161, 136),
    RoadType.PRIMARY: (249, 207, 144),
    RoadType.SECONDARY: (244, 251, 173),
    RoadType.TERTIARY: (244, 251, 173),
    RoadType.RESIDENTIAL: (254, 254, 254),
    RoadType.SERVICE: (254, 254, 254),
    RoadType.FOOTWAY: (241, 106, 96),
    RoadType.UNCLASSIFIED: (254, 254, 254),
}

_DRAWN_ROADS = (
    RoadType.MOTORWAY,
    RoadType.TRUNK,
    RoadType.PRIMARY,
    RoadType.SECONDARY,
    RoadType.TERTIARY,
    RoadType.RESIDENTIAL,
    RoadType.SERVICE,
    RoadType.UNCLASSIFIED,
    RoadType.FOOTWAY,
)


def road_metric_width(road_type: RoadType) -> float:
    """Road width in metres; 0 means a one-pixel line."""
    return _ROAD_WIDTHS.get(road_type, 1.0)


def road_color(road_type: RoadType) -> Color:
    """Stroke colour of a road type."""
    return _ROAD_COLORS.get(road_type, GREY)


def road_dashes(road_type: RoadType) -> Dashes:
    """Dash offset and pattern of a road type; an empty pattern is a solid line."""
    return (0.0, (1.0, 2.0)) if road_type == RoadType.FOOTWAY else NO_DASHES


@dataclass(frozen=True)
class RoadRep:
    """How one road type is drawn."""

    color: Color = (0, 0, 0)
    dashes: Dashes = NO_DASHES
    metric_width: float = 1.0


def _dash_runs(points: Sequence[Point], dashes: Dashes) -> Iterator[list[Point]]:
    """Split a polyline into the visible pieces of a dash pattern."""
    offset, pattern = dashes
    total = sum(pattern)
    if not pattern or total <= 0:
        yield list(points)
        return

    index, on, remaining = 0, True, pattern[0]
    skip = offset % total
    while skip > 0:
        if skip >= remaining:
            skip -= remaining
            index = (index + 1) % len(pattern)
            on = not on
            remaining = pattern[index]
        else:
            remaining -= skip
            skip = 0

    run: list[Point] = [points[0]] if on else []
    for start, end in zip(points, points[1:]):
        length = math.dist(start, end)
        pos = 0.0
        while length - pos > remaining:
            pos += remaining
            t = pos / length
            point = (start[0] + (end[0] - start[0]) * t, start[1] + (end[1] - start[1]) * t)
            if on:
                run.append(point)
                if len(run) > 1:
                    yield run
                run = []
            else:
                run = [point]
            on = not on
            index = (index + 1) % len(pattern)
            remaining = pattern[index]
        remaining -= length - pos
        if on:
            run.append(end)
    if on and len(run) > 1:
        yield run


class _Canvas:
    """An image with the model-to-pixel transform of one display call."""

    def __init__(self, model: Model, width: int, height: int) -> None:
        self.model = model
        self.image = Image.new("RGB", (width, height), BACKGROUND_COLOR)
        self.draw = ImageDraw.Draw(self.image)
        self.height = height
        self.scale = float(min(width, height))
        self.pixels_in_meter = self.scale / model.metric_scale

    def point(self, x: float, y: float) -> Point:
        return (x * self.scale, self.height - y * self.scale)

    def way_points(self, way: Way) -> list[Point]:
        nodes = self.model.nodes
        return [self.point(nodes[i].x, nodes[i].y) for i in way.nodes]

    def stroke(self, points: Sequence[Point], color: Color, width: float,
               dashes: Dashes = NO_DASHES) -> None:
        if len(points) < 2:
            return
        pixels = max(1, round(width))
        for run in _dash_runs(points, dashes):
            self.draw.line(run, fill=color, width=pixels, joint="curve")

    def rings(self, way_nums: Sequence[int]) -> Iterator[list[Point]]:
        for num in way_nums:
            points = self.way_points(self.model.ways[num])
            if len(points) >= 2:
                yield points

    def fill_multipolygon(self, mp: Multipolygon, color: Color) -> None:
        inner = list(self.rings(mp.inner))
        if not inner:
            for ring in self.rings(mp.outer):
                self.draw.polygon(ring, fill=color)
            return
        mask = Image.new("L", self.image.size, 0)
        mask_draw = ImageDraw.Draw(mask)
        for ring in self.rings(mp.outer):
            mask_draw.polygon(ring, fill=255)
        for ring in inner:
            mask_draw.polygon(ring, fill=0)
        self.image.paste(color, mask=mask)

    def stroke_multipolygon(self, mp: Multipolygon, color: Color, width: float) -> None:
        for ring in self.rings([*mp.outer, *mp.inner]):
            self.stroke([*ring, ring[0]], color, width)


class Render:
    """Renders the map layers, the found path and its end markers."""

    def __init__(self, model: Model) -> None:
        self.model = model
        self.road_reps = {
            road_type: RoadRep(road_color(road_type), road_dashes(road_type), road_metric_width(road_type))
            for road_type in _DRAWN_ROADS
        }
        self.landuse_colors = dict(LANDUSE_COLORS)

    def display(self, width: int, height: int) -> Image.Image:
        """Draw everything onto a new ``width`` x ``height`` RGB image."""
        canvas = _Canvas(self.model, width, height)
        self._draw_landuses(canvas)
        self._draw_leisure(canvas)
        self._draw_water(canvas)
        self._draw_railways(canvas)
        self._draw_highways(canvas)
        self._draw_buildings(canvas)
        self._draw_path(canvas)
        path = getattr(self.model, "path", [])
        if path:
            self._draw_marker(canvas, path[0], START_COLOR)
            self._draw_marker(canvas, path[-1], END_COLOR)
        return canvas.image

    def _draw_landuses(self, canvas: _Canvas) -> None:
        for landuse in self.model.landuses:
            color = self.landuse_colors.get(landuse.type)
            if color is not None:
                canvas.fill_multipolygon(landuse, color)

    def _draw_leisure(self, canvas: _Canvas) -> None:
        for leisure in self.model.leisures:
            canvas.fill_multipolygon(leisure, LEISURE_FILL)
            canvas.stroke_multipolygon(leisure, LEISURE_OUTLINE, 1.0)

    def _draw_water(self, canvas: _Canvas) -> None:
        for water in self.model.waters:
            canvas.fill_multipolygon(water, WATER_FILL)

    def _draw_railways(self, canvas: _Canvas) -> None:
        for railway in self.model.railways:
            points = canvas.way_points(self.model.ways[railway.way])
            canvas.stroke(points, RAILWAY_STROKE, RAILWAY_OUTER_WIDTH * canvas.pixels_in_meter)
            canvas.stroke(points, RAILWAY_DASH, RAILWAY_INNER_WIDTH * canvas.pixels_in_meter,
                          RAILWAY_DASHES)

    def _draw_highways(self, canvas: _Canvas) -> None:
        for road in self.model.roads:
            rep = self.road_reps.get(road.type)
            if rep is None:
                continue
            width = rep.metric_width * canvas.pixels_in_meter if rep.metric_width > 0 else 1.0
            points = canvas.way_points(self.model.ways[road.way])
            canvas.stroke(points, rep.color, width, rep.dashes)

    def _draw_buildings(self, canvas: _Canvas) -> None:
        for building in self.model.buildings:
            canvas.fill_multipolygon(building, BUILDING_FILL)
            canvas.stroke_multipolygon(building, BUILDING_OUTLINE, 1.0)

    def _draw_path(self, canvas: _Canvas) -> None:
        path = getattr(self.model, "path", [])
        points = [canvas.point(node.x, node.y) for node in path]
        canvas.stroke(points, PATH_COLOR, PATH_WIDTH)

    @staticmethod
    def _draw_marker(canvas: _Canvas, node, color: Color) -> None:
        x, y = node.x, node.y
        corners = [
            canvas.point(x, y),
            canvas.point(x + MARKER_SIZE, y),
            canvas.point(x + MARKER_SIZE, y + MARKER_SIZE),
            canvas.point(x, y + MARKER_SIZE),
        ]
        canvas.draw.polygon(corners, fill=color, outline=color)