import pytest

from gpml_codec.codec.references import (
    ReferenceGraph,
    check_citation_references,
    check_group_references,
    prune_empty_groups,
)
from gpml_codec.models.graphics import RectProperty
from gpml_codec.models.pathway import Citation, DataNode, Group, Interaction, LinePoint, PathwayModel
from gpml_codec.utils.validation import IssueCategory, ValidationCollector, ValidationLevel


@pytest.fixture
def collector():
    return ValidationCollector(ValidationLevel.LENIENT)


@pytest.fixture
def model():
    """Two nodes in group g1, an empty group g2 nested in g1's parent g0"""
    model = PathwayModel()
    model.add(Group(element_id="g0"))
    model.add(Group(element_id="g1", group_ref="g0"))
    model.add(Group(element_id="g2"))
    model.add(DataNode(element_id="a", text_label="A", group_ref="g1",
                       rect=RectProperty(center_x=10, center_y=10, width=10, height=10)))
    model.add(DataNode(element_id="b", text_label="B", group_ref="g1",
                       rect=RectProperty(center_x=50, center_y=10, width=10, height=10)))
    return model


def test_reference_graph_counts_members(model):
    graph = ReferenceGraph(model)

    assert graph.member_count("g1") == 2
    assert graph.member_count("g0") == 1
    assert graph.member_count("g2") == 0
    assert graph.dangling() == []


def test_reference_graph_finds_dangling_endpoints(model):
    model.add(Interaction(element_id="i", points=[
        LinePoint(x=0, y=0, element_ref="a"), LinePoint(x=5, y=5, element_ref="ghost"),
    ]))

    dangling = ReferenceGraph(model).dangling()

    assert [(d.source, d.target, d.relation) for d in dangling] == [("i", "ghost", "attached")]


def test_dangling_group_reference_is_cleared(model, collector):
    """Test that unknown groups are reported and membership dropped"""
    model.data_nodes[0].group_ref = "missing"

    warnings = check_group_references(model, collector)

    assert len(warnings) == 1
    assert warnings[0].category == IssueCategory.DANGLING_REFERENCE
    assert model.data_nodes[0].group_ref is None


def test_dangling_alias_reference_is_cleared(model, collector):
    model.data_nodes[1].alias_ref = "missing"

    check_group_references(model, collector)

    assert model.data_nodes[1].alias_ref is None


def test_prune_removes_only_empty_groups(model, collector):
    """Test that a group without members is removed and reported"""
    removed = prune_empty_groups(model, collector)

    assert [g.element_id for g in removed] == ["g2"]
    assert [g.element_id for g in model.groups] == ["g0", "g1"]
    assert collector.get_results_by_category(IssueCategory.PRUNED_GROUP)


def test_prune_cascades_to_parent_groups(model):
    """Test that a parent emptied by pruning is pruned as well"""
    for node in model.data_nodes:
        node.group_ref = None

    removed = prune_empty_groups(model)

    assert {g.element_id for g in removed} == {"g0", "g1", "g2"}
    assert model.groups == []


def test_prune_clears_alias_of_removed_group(model):
    model.data_nodes[0].alias_ref = "g2"

    prune_empty_groups(model)

    assert model.data_nodes[0].alias_ref is None


def test_unknown_citation_is_reported_but_kept(model, collector):
    model.add(Citation(element_id="c1"))
    model.data_nodes[0].citation_refs = ["c1", "c9"]

    warnings = check_citation_references(model, collector)

    assert len(warnings) == 1
    assert warnings[0].element_id == "a"
    assert model.data_nodes[0].citation_refs == ["c1", "c9"]


def test_prune_detaches_points_on_removed_group(model):
    model.add(Interaction(element_id="i", points=[
        LinePoint(x=0, y=0, element_ref="g2", rel_x=0.0, rel_y=0.0), LinePoint(x=5, y=5),
    ]))

    prune_empty_groups(model)

    start = model.interactions[0].start_point
    assert start.element_ref is None
    assert not start.relative_set
