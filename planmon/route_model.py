"""Routing layer over the map model: search nodes and neighbour lookup."""

from __future__ import annotations

import math

from planmon.model import Model, Road, RoadType

FLT_MAX = 3.4028234663852886e38


class RouteNode:
    """A map node carrying A* search state."""

    def __init__(self, index: int, model: RouteModel | None, x: float, y: float) -> None:
        self.index = index
        self.x = x
        self.y = y
        self.parent: RouteNode | None = None
        self.h_value = FLT_MAX
        self.g_value = 0.0
        self.visited = False
        self.neighbors: list[RouteNode] = []
        self._model = model

    def __repr__(self) -> str:
        return f"RouteNode(index={self.index}, x={self.x!r}, y={self.y!r})"

    def distance(self, other: RouteNode) -> float:
        """Euclidean distance to another node."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def _find_neighbor(self, node_indices: list[int]) -> RouteNode | None:
        candidates = (
            candidate
            for candidate in (self._model.route_nodes[i] for i in node_indices)
            if self.distance(candidate) != 0 and not candidate.visited
        )
        return min(candidates, key=self.distance, default=None)

    def find_neighbors(self) -> None:
        """Append the closest unvisited node of each road through this node."""
        for road in self._model._node_to_road.get(self.index, ()):
            neighbor = self._find_neighbor(self._model.ways[road.way].nodes)
            if neighbor is not None:
                self.neighbors.append(neighbor)


class RouteModel(Model):
    """A map model with search nodes and a node-to-road index."""

    def __init__(self, xml: bytes | str) -> None:
        super().__init__(xml)
        self.route_nodes = [
            RouteNode(index, self, node.x, node.y) for index, node in enumerate(self.nodes)
        ]
        self.path: list[RouteNode] = []
        self._node_to_road: dict[int, list[Road]] = {}
        for road in self._drivable_roads():
            for node_index in self.ways[road.way].nodes:
                self._node_to_road.setdefault(node_index, []).append(road)

    def _drivable_roads(self):
        return (road for road in self.roads if road.type != RoadType.FOOTWAY)

    def find_closest_node(self, x: float, y: float) -> RouteNode:
        """Return the road node (footways excluded) nearest to (x, y)."""
        target = RouteNode(-1, self, x, y)
        candidates = (
            self.route_nodes[index]
            for road in self._drivable_roads()
            for index in self.ways[road.way].nodes
        )
        closest = min(candidates, key=target.distance, default=None)
        if closest is None:
            raise ValueError("the map has no road nodes")
        return closest