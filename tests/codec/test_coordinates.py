import pytest

from gpml_codec.codec.coordinates import CoordinateResolver, to_absolute, to_relative
from gpml_codec.models.graphics import ConnectorType, RectProperty
from gpml_codec.models.pathway import (
    Anchor,
    Citation,
    DataNode,
    GraphicalLine,
    Group,
    Interaction,
    LinePoint,
    PathwayModel,
)
from gpml_codec.utils.validation import IssueCategory, ValidationCollector, ValidationLevel


@pytest.fixture
def collector():
    return ValidationCollector(ValidationLevel.LENIENT)


@pytest.fixture
def model():
    """A box centered at (100, 100) with an interaction leaving its right side"""
    model = PathwayModel()
    model.add(DataNode(
        element_id="box",
        text_label="Box",
        rect=RectProperty(center_x=100, center_y=100, width=80, height=40),
    ))
    model.add(Interaction(
        element_id="line",
        points=[LinePoint(x=140, y=100, element_ref="box"), LinePoint(x=300, y=100)],
    ))
    return model


def test_right_center_point_is_half_width(model, collector):
    """Test that the right-center point of a box resolves to (0.5, 0)"""
    CoordinateResolver(collector).resolve(model)

    start = model.interactions[0].start_point
    assert (start.rel_x, start.rel_y) == (0.5, 0.0)
    assert not collector.warnings


def test_resolve_is_idempotent(model, collector):
    """Test that a second run finds nothing to do"""
    resolver = CoordinateResolver(collector)
    resolver.resolve(model)
    before = model.model_dump()

    warnings = resolver.resolve(model)

    assert warnings == []
    assert model.model_dump() == before


def test_existing_relative_position_is_kept(model):
    start = model.interactions[0].start_point
    start.set_relative(-0.5, 0.25)

    CoordinateResolver().resolve(model)

    assert (start.rel_x, start.rel_y) == (-0.5, 0.25)


def test_dangling_reference_keeps_absolute_position(model, collector):
    """Test that an unknown target is reported and the point detached"""
    end = model.interactions[0].end_point
    end.element_ref = "nowhere"

    warnings = CoordinateResolver(collector).resolve(model)

    assert len(warnings) == 1
    assert warnings[0].category == IssueCategory.DANGLING_REFERENCE
    assert warnings[0].element_id == "line"
    assert end.element_ref is None
    assert (end.x, end.y) == (300, 100)


def test_point_on_anchor_is_offset_from_anchor(collector):
    """Test that anchors are measured as positions along their line"""
    model = PathwayModel()
    model.add(Interaction(
        element_id="main",
        points=[LinePoint(x=0, y=0), LinePoint(x=100, y=0)],
        anchors=[Anchor(element_id="mid", position=0.5)],
    ))
    model.add(GraphicalLine(
        element_id="branch",
        points=[LinePoint(x=50, y=80), LinePoint(x=50, y=10, element_ref="mid")],
    ))

    CoordinateResolver(collector).resolve(model)

    end = model.graphical_lines[0].end_point
    assert (end.rel_x, end.rel_y) == (0.0, 10.0)
    assert not collector.warnings


def test_relative_position_requires_reference():
    with pytest.raises(ValueError):
        LinePoint(x=0, y=0, rel_x=0.5, rel_y=0.0)


def test_to_absolute_inverts_to_relative():
    rect = RectProperty(center_x=10, center_y=20, width=40, height=10)

    rel = to_relative(rect, 25, 15)

    assert rel == (0.375, -0.5)
    assert to_absolute(rect, *rel) == (25, 15)


def test_zero_size_rect_resolves_to_center():
    assert to_relative(RectProperty(center_x=5, center_y=5), 9, 9) == (0.0, 0.0)


def test_intermediate_waypoint_is_resolved(model, collector):
    """Test that attached waypoints between the endpoints get a relative position"""
    interaction = model.interactions[0]
    interaction.line_style.connector_type = ConnectorType.SEGMENTED
    interaction.points.insert(1, LinePoint(x=100, y=120, element_ref="box"))

    CoordinateResolver(collector).resolve(model)

    middle = interaction.points[1]
    assert middle.element_ref == "box"
    assert (middle.rel_x, middle.rel_y) == (0.0, 0.5)
    assert not collector.warnings


def test_point_on_empty_group_is_not_dangling(model, collector):
    """Test that an existing group without area resolves to its center"""
    model.add(Group(element_id="grp"))
    end = model.interactions[0].end_point
    end.element_ref = "grp"

    CoordinateResolver(collector).resolve(model)

    assert end.element_ref == "grp"
    assert (end.rel_x, end.rel_y) == (0.0, 0.0)
    assert not collector.get_results_by_category(IssueCategory.DANGLING_REFERENCE)


def test_point_on_element_without_position_is_detached(model, collector):
    model.add(Citation(element_id="c1"))
    end = model.interactions[0].end_point
    end.element_ref = "c1"

    warnings = CoordinateResolver(collector).resolve(model)

    assert warnings == []
    assert end.element_ref is None
    assert "has no position" in collector.warnings[0].message
    assert collector.warnings[0].category == IssueCategory.GENERAL
