"""A* search between two points of a route model."""

from __future__ import annotations

from planmon.route_model import RouteModel, RouteNode


class RoutePlanner:
    """Finds a route between the road nodes closest to two map positions.

    Positions are given in percent of the map's extent (0 to 100).
    """

    def __init__(
        self,
        model: RouteModel,
        start_x: float,
        start_y: float,
        end_x: float,
        end_y: float,
    ) -> None:
        self.model = model
        self.open_list: list[RouteNode] = []
        self.distance = 0.0
        self.start_node = model.find_closest_node(start_x * 0.01, start_y * 0.01)
        self.end_node = model.find_closest_node(end_x * 0.01, end_y * 0.01)

    def calculate_h_value(self, node: RouteNode) -> float:
        """Heuristic: straight-line distance to the end node."""
        return node.distance(self.end_node)

    def add_neighbors(self, current_node: RouteNode) -> None:
        """Expand ``current_node``, pushing its unvisited neighbours on the open list."""
        current_node.find_neighbors()
        for neighbor in current_node.neighbors:
            neighbor.h_value = self.calculate_h_value(neighbor)
            neighbor.g_value = current_node.g_value + current_node.distance(neighbor)
            neighbor.parent = current_node
            neighbor.visited = True
            self.open_list.append(neighbor)

    def next_node(self) -> RouteNode:
        """Remove and return the open node with the lowest g + h."""
        if not self.open_list:
            raise IndexError("the open list is empty")
        self.open_list.sort(key=lambda node: node.h_value + node.g_value, reverse=True)
        return self.open_list.pop()

    def construct_final_path(self, current_node: RouteNode) -> list[RouteNode]:
        """Follow parents back to the start; set ``distance`` in metres."""
        self.distance = 0.0
        path: list[RouteNode] = []
        node = current_node
        while node.parent is not None:
            path.append(node)
            self.distance += node.distance(node.parent)
            node = node.parent
        path.append(node)
        path.reverse()
        self.distance *= self.model.metric_scale
        return path

    def a_star_search(self) -> list[RouteNode]:
        """Run the search; store the found path on the model and return it."""
        self.start_node.visited = True
        self.open_list.append(self.start_node)
        while self.open_list:
            current = self.next_node()
            if current.distance(self.end_node) == 0:
                self.model.path = self.construct_final_path(current)
                return self.model.path
            self.add_neighbors(current)
        return []