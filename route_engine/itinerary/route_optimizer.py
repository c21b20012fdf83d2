from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from ..models import Activity, Coordinate
from .distance import DistanceModel, haversine_distance, travel_minutes


@dataclass
class RouteSolution:
    route: List[Hashable]
    total_distance: float
    total_time: float
    metadata: Dict[str, object]


@dataclass
class Leg:
    from_id: str
    to_id: str
    distance_km: float
    minutes: int
    confidence: str


def build_graph(stops: Sequence[Activity], model: DistanceModel) -> nx.Graph:
    """Create a complete weighted graph over location-bearing activities.

    Nodes are positions in ``stops`` so duplicate ids can never collapse two
    activities into one node. Edge ``time`` is in minutes.
    """
    graph = nx.Graph(average_speed_kmh=model.config.average_speed_kmh)
    for position, activity in enumerate(stops):
        graph.add_node(position, activity=activity, label=activity.title or activity.id, location=activity.location)

    nodes = list(graph.nodes)
    for idx, source in enumerate(nodes):
        for target in nodes[idx + 1 :]:
            estimate = model.estimate(graph.nodes[source]["location"], graph.nodes[target]["location"])
            graph.add_edge(
                source,
                target,
                distance=estimate.distance_km,
                time=model.duration_minutes(estimate.distance_km),
                confidence=estimate.confidence.value,
            )
    return graph


def build_coordinate_graph(
    points: Iterable[Dict[str, object]],
    *,
    average_speed_kmh: float = 40.0,
) -> nx.Graph:
    """Create a complete weighted graph from ``{"id", "coords", "label"}`` descriptors."""
    graph = nx.Graph(average_speed_kmh=average_speed_kmh)
    for descriptor in points:
        _add_coordinate_node(graph, descriptor)

    nodes = list(graph.nodes)
    for idx, source in enumerate(nodes):
        for target in nodes[idx + 1 :]:
            distance = haversine_distance(graph.nodes[source]["coords"], graph.nodes[target]["coords"])
            graph.add_edge(
                source,
                target,
                distance=distance,
                time=travel_minutes(distance, average_speed_kmh),
                confidence="resolved",
            )
    return graph


def nearest_neighbor_route(
    graph: nx.Graph,
    start: Hashable,
    *,
    end: Optional[Hashable] = None,
    weight: str = "distance",
) -> RouteSolution:
    """Greedy tour from ``start``: always move to the closest unvisited node.

    Ties go to the node inserted first. When ``end`` is given it is held back
    and appended last.
    """
    remaining = [node for node in graph.nodes if node != start and node != end]
    route: List[Hashable] = [start]
    current = start

    while remaining:
        nearest = min(remaining, key=lambda node: graph[current][node][weight])
        remaining.remove(nearest)
        route.append(nearest)
        current = nearest

    if end is not None and end != start:
        route.append(end)

    total_distance, _ = _measure_route(graph, route)
    speed = float(graph.graph.get("average_speed_kmh", 40.0))
    metadata = {"algorithm": "nearest_neighbor", "weight": weight, "fixed_end": end is not None}
    return RouteSolution(
        route=route,
        total_distance=total_distance,
        total_time=float(travel_minutes(total_distance, speed)),
        metadata=metadata,
    )


def optimize_activities(
    activities: Sequence[Activity],
    model: DistanceModel,
    *,
    keep_last: bool = False,
    min_stops: int = 3,
) -> List[Activity]:
    """Reorder the location-bearing activities of a day by nearest neighbour.

    The first stop stays first. Activities without a location keep their
    slots; stops are written back into the slots stops occupied.
    """
    slots = [index for index, activity in enumerate(activities) if activity.has_location]
    if len(slots) < min_stops:
        return list(activities)

    stops = [activities[index] for index in slots]
    graph = build_graph(stops, model)
    solution = nearest_neighbor_route(graph, 0, end=len(stops) - 1 if keep_last else None)

    reordered = list(activities)
    for slot, node in zip(slots, solution.route):
        reordered[slot] = graph.nodes[node]["activity"]
    return reordered


def optimize_coordinates(
    origin: Coordinate,
    destination: Optional[Coordinate],
    waypoints: Sequence[Coordinate],
    *,
    average_speed_kmh: float = 40.0,
) -> Tuple[nx.Graph, RouteSolution]:
    """Order ``waypoints`` between a fixed origin and an optional fixed destination."""
    points: List[Dict[str, object]] = [{"id": "origin", "coords": origin, "label": "Origin"}]
    for index, coords in enumerate(waypoints):
        points.append({"id": f"waypoint-{index}", "coords": coords, "label": f"Waypoint {index + 1}"})
    if destination is not None:
        points.append({"id": "destination", "coords": destination, "label": "Destination"})

    graph = build_coordinate_graph(points, average_speed_kmh=average_speed_kmh)
    solution = nearest_neighbor_route(graph, "origin", end="destination" if destination is not None else None)
    return graph, solution


def route_legs(stops: Sequence[Activity], model: DistanceModel) -> List[Leg]:
    """Leg-by-leg estimates between consecutive stops, in the given order."""
    legs: List[Leg] = []
    for current, nxt in zip(stops[:-1], stops[1:]):
        estimate = model.estimate(current.location, nxt.location)
        legs.append(
            Leg(
                from_id=current.id,
                to_id=nxt.id,
                distance_km=estimate.distance_km,
                minutes=model.duration_minutes(estimate.distance_km),
                confidence=estimate.confidence.value,
            )
        )
    return legs


def route_distance(stops: Sequence[Activity], model: DistanceModel) -> float:
    return float(sum(leg.distance_km for leg in route_legs(stops, model)))


def visualize_route(graph: nx.Graph, solution: RouteSolution) -> Dict[str, object]:
    """Return a lightweight structure for drawing the route externally."""
    nodes_payload: List[Dict[str, object]] = []
    for node in solution.route:
        data = graph.nodes[node]
        nodes_payload.append({"id": str(node), "coords": data.get("coords"), "label": data.get("label", str(node))})

    edges_payload: List[Dict[str, object]] = []
    for current, nxt in zip(solution.route[:-1], solution.route[1:]):
        edge_data = graph.get_edge_data(current, nxt, default={})
        edges_payload.append(
            {
                "from": str(current),
                "to": str(nxt),
                "distance": float(edge_data.get("distance", 0.0)),
                "time": float(edge_data.get("time", 0.0)),
            }
        )

    return {
        "nodes": nodes_payload,
        "edges": edges_payload,
        "total_distance": float(solution.total_distance),
        "total_time": float(solution.total_time),
        "metadata": solution.metadata,
    }


def _add_coordinate_node(graph: nx.Graph, descriptor: Dict[str, object]) -> None:
    if "id" not in descriptor:
        raise ValueError("Node descriptor requires 'id'.")
    node_id = str(descriptor["id"])

    coords = descriptor.get("coords")
    if coords is None:
        raise ValueError(f"Node '{node_id}' is missing 'coords'.")
    if len(coords) != 2:
        raise ValueError(f"Coordinates for node '{node_id}' must be a pair.")

    graph.add_node(
        node_id,
        coords=(float(coords[0]), float(coords[1])),
        label=descriptor.get("label") or node_id,
    )


def _measure_route(graph: nx.Graph, sequence: Sequence[Hashable]) -> Tuple[float, float]:
    total_distance = 0.0
    total_time = 0.0
    for current, nxt in zip(sequence[:-1], sequence[1:]):
        data = graph.get_edge_data(current, nxt)
        if data is None:
            raise ValueError(f"Missing edge between {current} and {nxt}.")
        total_distance += float(data.get("distance", 0.0))
        total_time += float(data.get("time", 0.0))
    return total_distance, total_time
