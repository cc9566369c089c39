import pytest
from lxml import etree as ET

from gpml_codec.codec.ordering import CURRENT_ORDERING, LEGACY_ORDERING, local_name, sort_biopax
from gpml_codec.exceptions.codec import UnorderedTagError

GPML2013A = "http://pathvisio.org/GPML/2013a"


def children_names(parent):
    return [local_name(child) for child in parent]


def test_data_nodes_precede_interactions():
    """Test that a writer's emission order is corrected"""
    root = ET.Element(f"{{{GPML2013A}}}Pathway")
    for tag in ("Interaction", "Group", "DataNode", "Graphics", "Comment", "DataNode"):
        ET.SubElement(root, f"{{{GPML2013A}}}{tag}")

    LEGACY_ORDERING.sort_children(root)

    assert children_names(root) == ["Comment", "Graphics", "DataNode", "DataNode", "Interaction", "Group"]


def test_sort_is_stable():
    root = ET.Element("Pathway")
    first = ET.SubElement(root, "Label", name="first")
    ET.SubElement(root, "DataNode")
    second = ET.SubElement(root, "Label", name="second")

    ordered = LEGACY_ORDERING.sort(list(root))

    assert ordered.index(first) < ordered.index(second)


def test_current_containers_follow_pathway_info():
    root = ET.Element("Pathway")
    for tag in ("Citations", "DataNodes", "Graphics", "Xref", "Groups"):
        ET.SubElement(root, tag)

    CURRENT_ORDERING.sort_children(root)

    assert children_names(root) == ["Xref", "Graphics", "DataNodes", "Groups", "Citations"]


def test_unordered_tag_raises():
    with pytest.raises(UnorderedTagError) as exc_info:
        LEGACY_ORDERING.position("Unexpected")

    assert exc_info.value.tag == "Unexpected"


def test_sort_biopax_by_first_attribute():
    block = ET.Element("Biopax")
    for rdf_id in ("c3", "c1", "c2"):
        ET.SubElement(block, "PublicationXref", id=rdf_id)

    sort_biopax(block)

    assert [child.get("id") for child in block] == ["c1", "c2", "c3"]
