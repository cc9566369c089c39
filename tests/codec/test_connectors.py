import pytest

from gpml_codec.codec.connectors import compute_route, point_at, refresh_route, route_length
from gpml_codec.models.graphics import ConnectorType, LineStyleProperty
from gpml_codec.models.pathway import GraphicalLine, LinePoint


def make_line(connector, *coordinates):
    return GraphicalLine(
        element_id="line",
        points=[LinePoint(x=x, y=y) for x, y in coordinates],
        line_style=LineStyleProperty(connector_type=connector),
    )


def test_straight_route_ignores_intermediate_points():
    line = make_line(ConnectorType.STRAIGHT, (0, 0), (50, 50), (100, 0))

    assert compute_route(line) == [(0, 0), (100, 0)]


def test_elbow_route_inserts_corner():
    """Test that an elbow connector turns at a right angle"""
    line = make_line(ConnectorType.ELBOW, (0, 0), (100, 50))

    assert compute_route(line) == [(0, 0), (100, 0), (100, 50)]


def test_segmented_route_passes_through_points():
    line = make_line(ConnectorType.SEGMENTED, (0, 0), (0, 0), (50, 50), (100, 0))

    assert compute_route(line) == [(0, 0), (50, 50), (100, 0)]


def test_point_at_fraction_of_length():
    route = [(0, 0), (100, 0), (100, 100)]

    assert route_length(route) == 200
    assert point_at(route, 0.25) == (50, 0)
    assert point_at(route, 0.75) == (100, 50)
    assert point_at(route, 1.5) == (100, 100)


def test_point_at_empty_route():
    assert point_at([], 0.5) is None


def test_refresh_route_stores_route():
    line = make_line(ConnectorType.STRAIGHT, (0, 0), (10, 0))

    refresh_route(line)

    assert line.route == [(0, 0), (10, 0)]
    assert "route" not in line.model_dump()


@pytest.mark.parametrize("connector", list(ConnectorType))
def test_every_route_starts_and_ends_at_endpoints(connector):
    line = make_line(connector, (0, 0), (30, 40), (60, 0))

    route = compute_route(line)

    assert route[0] == (0, 0)
    assert route[-1] == (60, 0)
