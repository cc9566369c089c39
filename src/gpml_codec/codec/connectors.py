"""
Connector routing geometry.

The route of a line is the polyline it is drawn along. It depends on the
connector type and on how the endpoints are attached, so it is recomputed
once all endpoints have been resolved.
"""
import math
from typing import List, Optional, Tuple

from gpml_codec.models.graphics import ConnectorType
from gpml_codec.models.pathway import LineElement, LinePoint

Waypoint = Tuple[float, float]


def _starts_horizontal(point: LinePoint, toward: Waypoint) -> bool:
    """Leave an attached point perpendicular to the side it sits on."""
    if point.relative_set and point.element_ref:
        return abs(point.rel_x) >= abs(point.rel_y)
    return abs(toward[0] - point.x) >= abs(toward[1] - point.y)


def _elbow(waypoints: List[Waypoint], horizontal: bool) -> List[Waypoint]:
    route = [waypoints[0]]
    for target in waypoints[1:]:
        current = route[-1]
        corner = (target[0], current[1]) if horizontal else (current[0], target[1])
        if corner != current and corner != target:
            route.append(corner)
        route.append(target)
        horizontal = not horizontal
    return _dedupe(route)


def _dedupe(route: List[Waypoint]) -> List[Waypoint]:
    result: List[Waypoint] = []
    for waypoint in route:
        if not result or result[-1] != waypoint:
            result.append(waypoint)
    return result


def compute_route(line: LineElement) -> List[Waypoint]:
    """Polyline for a line, according to its connector type.

    Args:
        line: A line whose points carry absolute coordinates

    Returns:
        The waypoints from start to end
    """
    waypoints = [(p.x, p.y) for p in line.points]
    connector = line.line_style.connector_type

    if connector == ConnectorType.STRAIGHT:
        return [waypoints[0], waypoints[-1]]
    if connector == ConnectorType.ELBOW:
        return _elbow(waypoints, _starts_horizontal(line.start_point, waypoints[1]))
    # Segmented and curved connectors pass through every point
    return _dedupe(waypoints)


def route_length(route: List[Waypoint]) -> float:
    return sum(math.dist(a, b) for a, b in zip(route, route[1:]))


def point_at(route: List[Waypoint], fraction: float) -> Optional[Waypoint]:
    """Position at ``fraction`` (0 to 1) of the route's length."""
    if not route:
        return None
    total = route_length(route)
    if total == 0:
        return route[0]

    remaining = max(0.0, min(1.0, fraction)) * total
    for a, b in zip(route, route[1:]):
        segment = math.dist(a, b)
        if remaining <= segment and segment > 0:
            t = remaining / segment
            return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)
        remaining -= segment
    return route[-1]


def refresh_route(line: LineElement) -> List[Waypoint]:
    line.route = compute_route(line)
    return line.route
