"""OpenStreetMap data model: nodes, ways and the map features built on them."""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import IntEnum

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_EARTH_RADIUS = 6378137.0
_DEG_TO_RAD = 2.0 * math.pi / 360.0


def _atof(text: str | None) -> float:
    """Parse the leading number of ``text``, or 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text or "")
    return float(match.group()) if match else 0.0


@dataclass
class Node:
    """A map point; after loading, in map-relative metric units."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Way:
    """An ordered list of node indices."""

    nodes: list[int] = field(default_factory=list)


class RoadType(IntEnum):
    INVALID = 0
    UNCLASSIFIED = 1
    SERVICE = 2
    RESIDENTIAL = 3
    TERTIARY = 4
    SECONDARY = 5
    PRIMARY = 6
    TRUNK = 7
    MOTORWAY = 8
    FOOTWAY = 9


@dataclass
class Road:
    way: int
    type: RoadType


@dataclass
class Railway:
    way: int


@dataclass
class Multipolygon:
    """Outer and inner rings, each given as way indices."""

    outer: list[int] = field(default_factory=list)
    inner: list[int] = field(default_factory=list)


@dataclass
class Building(Multipolygon):
    pass


@dataclass
class Leisure(Multipolygon):
    pass


@dataclass
class Water(Multipolygon):
    pass


class LanduseType(IntEnum):
    INVALID = 0
    COMMERCIAL = 1
    CONSTRUCTION = 2
    GRASS = 3
    FOREST = 4
    INDUSTRIAL = 5
    RAILWAY = 6
    RESIDENTIAL = 7


@dataclass
class Landuse(Multipolygon):
    type: LanduseType = LanduseType.INVALID


_ROAD_TYPES = {
    "motorway": RoadType.MOTORWAY,
    "trunk": RoadType.TRUNK,
    "primary": RoadType.PRIMARY,
    "secondary": RoadType.SECONDARY,
    "tertiary": RoadType.TERTIARY,
    "residential": RoadType.RESIDENTIAL,
    "living_street": RoadType.RESIDENTIAL,
    "service": RoadType.SERVICE,
    "unclassified": RoadType.UNCLASSIFIED,
    "footway": RoadType.FOOTWAY,
    "bridleway": RoadType.FOOTWAY,
    "steps": RoadType.FOOTWAY,
    "path": RoadType.FOOTWAY,
    "pedestrian": RoadType.FOOTWAY,
}

_LANDUSE_TYPES = {
    "commercial": LanduseType.COMMERCIAL,
    "construction": LanduseType.CONSTRUCTION,
    "grass": LanduseType.GRASS,
    "forest": LanduseType.FOREST,
    "industrial": LanduseType.INDUSTRIAL,
    "railway": LanduseType.RAILWAY,
    "residential": LanduseType.RESIDENTIAL,
}

_LEISURE_NATURALS = frozenset({"wood", "tree_row", "scrub", "grassland"})


def road_type_from_string(value: str) -> RoadType:
    """Map an OSM ``highway`` value to a road type."""
    return _ROAD_TYPES.get(value, RoadType.INVALID)


def landuse_type_from_string(value: str) -> LanduseType:
    """Map an OSM ``landuse`` value to a landuse type."""
    return _LANDUSE_TYPES.get(value, LanduseType.INVALID)


def _is_closed(way: Way) -> bool:
    return len(way.nodes) > 1 and way.nodes[0] == way.nodes[-1]


def _lat_to_metres(lat: float) -> float:
    return math.log(math.tan(lat * _DEG_TO_RAD / 2 + math.pi / 4)) / 2 * _EARTH_RADIUS


def _lon_to_metres(lon: float) -> float:
    return lon * _DEG_TO_RAD / 2 * _EARTH_RADIUS


class Model:
    """A map loaded from OSM XML, with coordinates scaled to the map bounds."""

    def __init__(self, xml: bytes | str) -> None:
        self.nodes: list[Node] = []
        self.ways: list[Way] = []
        self.roads: list[Road] = []
        self.railways: list[Railway] = []
        self.buildings: list[Building] = []
        self.leisures: list[Leisure] = []
        self.waters: list[Water] = []
        self.landuses: list[Landuse] = []
        self.metric_scale = 1.0
        self._min_lat = self._max_lat = 0.0
        self._min_lon = self._max_lon = 0.0

        self._load_data(xml)
        self._adjust_coordinates()
        self.roads.sort(key=lambda road: road.type)

    def _load_data(self, xml: bytes | str) -> None:
        try:
            root = ET.fromstring(xml)
        except ET.ParseError as exc:
            raise ValueError("failed to parse the xml file") from exc

        bounds = root.find("bounds") if root.tag == "osm" else None
        if bounds is None:
            raise ValueError("map's bounds are not defined")
        self._min_lat = _atof(bounds.get("minlat"))
        self._max_lat = _atof(bounds.get("maxlat"))
        self._min_lon = _atof(bounds.get("minlon"))
        self._max_lon = _atof(bounds.get("maxlon"))

        node_ids: dict[str, int] = {}
        for element in root.findall("node"):
            node_ids[element.get("id", "")] = len(self.nodes)
            self.nodes.append(Node(x=_atof(element.get("lon")), y=_atof(element.get("lat"))))

        way_ids: dict[str, int] = {}
        for element in root.findall("way"):
            way_num = len(self.ways)
            way_ids[element.get("id", "")] = way_num
            new_way = Way()
            self.ways.append(new_way)
            for child in element:
                if child.tag == "nd":
                    index = node_ids.get(child.get("ref", ""))
                    if index is not None:
                        new_way.nodes.append(index)
                elif child.tag == "tag":
                    self._classify_way(way_num, child.get("k", ""), child.get("v", ""))

        for element in root.findall("relation"):
            self._load_relation(element, way_ids)

    def _classify_way(self, way_num: int, category: str, kind: str) -> None:
        if category == "highway":
            road_type = road_type_from_string(kind)
            if road_type != RoadType.INVALID:
                self.roads.append(Road(way=way_num, type=road_type))
        if category == "railway":
            self.railways.append(Railway(way=way_num))
        elif category == "building":
            self.buildings.append(Building(outer=[way_num]))
        elif (
            category == "leisure"
            or (category == "natural" and kind in _LEISURE_NATURALS)
            or (category == "landcover" and kind == "grass")
        ):
            self.leisures.append(Leisure(outer=[way_num]))
        elif category == "natural" and kind == "water":
            self.waters.append(Water(outer=[way_num]))
        elif category == "landuse":
            landuse_type = landuse_type_from_string(kind)
            if landuse_type != LanduseType.INVALID:
                self.landuses.append(Landuse(outer=[way_num], type=landuse_type))

    def _load_relation(self, element: ET.Element, way_ids: dict[str, int]) -> None:
        outer: list[int] = []
        inner: list[int] = []
        for child in element:
            if child.tag == "member":
                if child.get("type", "") != "way":
                    continue
                way_num = way_ids.get(child.get("ref", ""))
                if way_num is None:
                    continue
                (outer if child.get("role", "") == "outer" else inner).append(way_num)
            elif child.tag == "tag":
                category, kind = child.get("k", ""), child.get("v", "")
                if category == "building":
                    self.buildings.append(Building(outer=outer, inner=inner))
                    return
                if category == "natural" and kind == "water":
                    water = Water(outer=outer, inner=inner)
                    self.waters.append(water)
                    self._build_rings(water)
                    return
                if category == "landuse":
                    landuse_type = landuse_type_from_string(kind)
                    if landuse_type != LanduseType.INVALID:
                        landuse = Landuse(outer=outer, inner=inner, type=landuse_type)
                        self.landuses.append(landuse)
                        self._build_rings(landuse)
                    return

    def _adjust_coordinates(self) -> None:
        dx = _lon_to_metres(self._max_lon) - _lon_to_metres(self._min_lon)
        dy = _lat_to_metres(self._max_lat) - _lat_to_metres(self._min_lat)
        min_y = _lat_to_metres(self._min_lat)
        min_x = _lon_to_metres(self._min_lon)
        self.metric_scale = min(dx, dy)
        for node in self.nodes:
            node.x = (_lon_to_metres(node.x) - min_x) / self.metric_scale
            node.y = (_lat_to_metres(node.y) - min_y) / self.metric_scale

    def _track_rec(self, open_ways: list[int], used: list[bool], nodes: list[int]) -> bool:
        if not nodes:
            for i, way_num in enumerate(open_ways):
                if used[i]:
                    continue
                used[i] = True
                nodes[:] = self.ways[way_num].nodes
                if self._track_rec(open_ways, used, nodes):
                    return True
                nodes.clear()
                used[i] = False
            return False

        if nodes[0] == nodes[-1] and len(nodes) > 1:
            return True
        tail = nodes[-1]
        for i, way_num in enumerate(open_ways):
            if used[i]:
                continue
            way_nodes = self.ways[way_num].nodes
            if not way_nodes:
                continue
            if way_nodes[0] == tail:
                extension = way_nodes
            elif way_nodes[-1] == tail:
                extension = way_nodes[::-1]
            else:
                continue
            used[i] = True
            length = len(nodes)
            nodes.extend(extension)
            if self._track_rec(open_ways, used, nodes):
                return True
            del nodes[length:]
            used[i] = False
        return False

    def _track(self, open_ways: list[int]) -> tuple[list[int], list[int]]:
        """Chain open ways into one ring; return it and the ways left unused."""
        used = [False] * len(open_ways)
        nodes: list[int] = []
        if self._track_rec(open_ways, used, nodes):
            return nodes, [way for way, taken in zip(open_ways, used) if not taken]
        return nodes, open_ways

    def _close_rings(self, way_nums: list[int]) -> list[int]:
        closed = [num for num in way_nums if _is_closed(self.ways[num])]
        open_ways = [num for num in way_nums if not _is_closed(self.ways[num])]
        while open_ways:
            ring, open_ways = self._track(open_ways)
            if not ring:
                break
            closed.append(len(self.ways))
            self.ways.append(Way(nodes=ring))
        return closed

    def _build_rings(self, mp: Multipolygon) -> None:
        mp.outer = self._close_rings(mp.outer)
        mp.inner = self._close_rings(mp.inner)