import math

import pytest
from lxml import etree as ET

from gpml_codec.core.dialects.base import Dialect
from gpml_codec.core.dialects.legacy import (
    INFOBOX_CENTER_X,
    PATHWAY_AUTHOR,
    PATHWAY_LAST_MODIFIED,
    group_graphics,
)
from gpml_codec.exceptions.codec import MissingRequiredAttributeError
from gpml_codec.models.graphics import Color, LIGHT_GRAY, LineStyleType, RectProperty
from gpml_codec.models.pathway import DataNode, Group, Pathway, PathwayModel
from gpml_codec.utils.validation import IssueCategory, ValidationCollector, ValidationLevel

NS = {"g": "http://pathvisio.org/GPML/2013a"}


def legacy_doc(body: str) -> str:
    """Wrap elements in a minimal 2013a pathway"""
    return f'''<Pathway xmlns="http://pathvisio.org/GPML/2013a" Name="Test">
        <Graphics BoardWidth="400.0" BoardHeight="400.0"/>
        {body}
    </Pathway>'''


NODE = '''<DataNode TextLabel="{label}" GraphId="{graph_id}"{extra}>
    <Graphics CenterX="{x}" CenterY="100.0" Width="80.0" Height="40.0"/>
    <Xref Database="" ID=""/>
</DataNode>'''


def node(graph_id, x, label="Node", extra=""):
    return NODE.format(graph_id=graph_id, x=x, label=label, extra=extra)


def local_names(root):
    return [ET.QName(child).localname for child in root]


def test_read_pathway_metadata(codec, legacy_xml):
    """Test that 2013a-only pathway attributes become dynamic properties"""
    model, collector = codec.read_string(legacy_xml)

    pathway = model.pathway
    assert pathway.title == "Legacy"
    assert pathway.description == "A legacy pathway"
    assert [c.text for c in pathway.comments] == ["Imported"]
    assert pathway.dynamic_properties[PATHWAY_AUTHOR] == "Jane"
    assert pathway.dynamic_properties[PATHWAY_LAST_MODIFIED] == "20200101"
    assert pathway.dynamic_properties[INFOBOX_CENTER_X] == "0.0"
    assert pathway.citation_refs == ["c1"]
    assert not collector.warnings


def test_read_data_node_style_attributes(codec, legacy_xml):
    model, _ = codec.read_string(legacy_xml)

    tp53 = model.get_element("n1")
    assert tp53.shape_style.border_style == LineStyleType.DOUBLE
    assert tp53.shape_style.fill_color == Color.rgb(255, 0, 0)
    assert tp53.shape_style.z_order == 32768
    assert tp53.dynamic_properties == {}
    assert tp53.xref.identifier == "7157"
    assert model.get_element("n2").xref is None
    assert model.get_element("n2").type == "Undefined"


def test_states_attach_to_their_data_node(codec, legacy_xml):
    """Test that flat State elements end up nested in their parent"""
    model, _ = codec.read_string(legacy_xml)

    states = model.get_element("n1").states
    assert len(states) == 1
    assert states[0].type == "ProteinModification"
    assert (states[0].rel_x, states[0].rel_y) == (1.0, -1.0)
    assert states[0].element_id.startswith("id")


def test_group_graphics_follow_style(codec, legacy_xml):
    """Test that a group's box is derived from its members"""
    model, _ = codec.read_string(legacy_xml)

    group = model.get_element("grp1")
    assert isinstance(group, Group)
    assert group.type == "Complex"
    assert group.shape_style.shape_type == "Octagon"
    assert group.rect == RectProperty(center_x=200.0, center_y=100.0, width=296.0, height=56.0)
    assert [m.element_id for m in model.members_of(group)] == ["n1", "n2"]


def test_read_lines_and_shapes(codec, legacy_xml):
    model, _ = codec.read_string(legacy_xml)

    interaction = model.interactions[0]
    assert interaction.element_id.startswith("id")
    assert interaction.end_arrow_head == "Inhibition"
    assert (interaction.start_point.rel_x, interaction.start_point.rel_y) == (0.5, 0.0)
    assert (interaction.end_point.rel_x, interaction.end_point.rel_y) == (-0.5, 0.0)
    assert interaction.anchors[0].shape_type == "None"
    assert model.get_element("sh1").shape_style.rotation == pytest.approx(math.pi / 2)


def test_publication_xrefs_become_citations(codec, legacy_xml):
    model, _ = codec.read_string(legacy_xml)

    citation = model.get_element("c1")
    assert citation.title == "A paper"
    assert citation.year == "2001"
    assert (citation.xref.identifier, citation.xref.data_source) == ("123", "PubMed")
    assert len(model.biopax) == 1


def test_legacy_round_trip(codec, legacy_xml):
    """Test that reading what was written reproduces the model"""
    model, _ = codec.read_string(legacy_xml)

    again, collector = codec.read_string(codec.write_string(model, Dialect.GPML2013A))

    assert again == model
    assert not collector.warnings


def test_write_legacy_layout(codec, legacy_xml):
    model, _ = codec.read_string(legacy_xml)

    root = codec.write_element(model, Dialect.GPML2013A)

    names = local_names(root)
    assert names.index("DataNode") < names.index("State") < names.index("Interaction")
    assert names[-1] == "Biopax"
    group = root.find("g:Group", NS)
    assert (group.get("GroupId"), group.get("GraphId"), group.get("Style")) == ("grp1", "grp1", "Complex")
    assert root.find("g:DataNode[@GraphId='n1']/g:Attribute", NS).get("Value") == "Double"
    assert root.find("g:State", NS).get("GraphRef") == "n1"
    assert root.get("Author") == "Jane"


def test_fill_color_written_only_when_not_default(codec):
    """Test FillColor elision for white and ``#ff0000`` for red"""
    model = PathwayModel(pathway=Pathway(title="Colors", board_width=200, board_height=200))
    model.add(DataNode(element_id="white", text_label="W",
                       rect=RectProperty(center_x=50, center_y=50, width=40, height=20)))
    red = DataNode(element_id="red", text_label="R",
                   rect=RectProperty(center_x=150, center_y=50, width=40, height=20))
    red.shape_style.fill_color = Color.rgb(255, 0, 0)
    model.add(red)

    root = codec.write_element(model, Dialect.GPML2013A)

    assert root.find("g:DataNode[@GraphId='white']/g:Graphics", NS).get("FillColor") is None
    assert root.find("g:DataNode[@GraphId='red']/g:Graphics", NS).get("FillColor") == "#ff0000"


def test_points_may_reference_group_graph_id(codec):
    """Test that a GraphRef naming a group's GraphId is mapped to the group"""
    xml = legacy_doc(node("a", 100.0, extra=' GroupRef="grp"') + '''
        <Group GroupId="grp" GraphId="grpGraph"/>
        <GraphicalLine GraphId="line">
            <Graphics>
                <Point X="0.0" Y="0.0"/>
                <Point X="52.0" Y="100.0" GraphRef="grpGraph"/>
            </Graphics>
        </GraphicalLine>''')

    model, collector = codec.read_string(xml)

    end = model.get_element("line").end_point
    assert end.element_ref == "grp"
    assert (end.rel_x, end.rel_y) == (-0.5, 0.0)
    assert not collector.warnings


def test_point_on_group_without_members_stays_attached(codec):
    """Test that an existing but empty group is not reported as unknown"""
    xml = legacy_doc('''
        <Group GroupId="grp" GraphId="gg"/>
        <GraphicalLine GraphId="l1">
            <Graphics>
                <Point X="0.0" Y="0.0" GraphRef="gg"/>
                <Point X="10.0" Y="10.0"/>
            </Graphics>
        </GraphicalLine>''')

    model, collector = codec.read_string(xml)

    start = model.get_element("l1").start_point
    assert (start.element_ref, start.rel_x, start.rel_y) == ("grp", 0.0, 0.0)
    assert not collector.get_results_by_category(IssueCategory.DANGLING_REFERENCE)


def test_clashing_group_id_is_replaced(codec):
    """Test that a GroupId already used as a GraphId gets a new ID"""
    xml = legacy_doc(node("dup", 100.0, extra=' GroupRef="dup"') + '<Group GroupId="dup"/>')

    model, _ = codec.read_string(xml)

    group = model.groups[0]
    assert group.element_id not in (None, "dup")
    assert model.get_element("dup").group_ref == group.element_id


def test_state_without_parent_is_dropped(codec):
    xml = legacy_doc('''<State GraphRef="missing" TextLabel="P">
        <Graphics RelX="0.0" RelY="1.0" Width="5.0" Height="5.0"/>
    </State>''')

    model, collector = codec.read_string(xml)

    assert list(model.iter_states()) == []
    assert collector.get_results_by_category(IssueCategory.DANGLING_REFERENCE)


@pytest.mark.parametrize("shape_type, expected", [
    ("Cell", "RoundedRectangle"),
    ("Nucleus", "Oval"),
    ("Ribosome", "Hexagon"),
])
def test_retired_shapes_are_migrated(codec, shape_type, expected):
    xml = legacy_doc(f'''<Shape GraphId="s">
        <Graphics CenterX="50.0" CenterY="50.0" Width="20.0" Height="20.0" ShapeType="{shape_type}"/>
    </Shape>''')

    model, _ = codec.read_string(xml)

    assert model.get_element("s").shape_style.shape_type == expected


def test_retired_container_shape_gets_double_border(codec):
    xml = legacy_doc('''<Shape GraphId="s">
        <Graphics CenterX="50.0" CenterY="50.0" Width="20.0" Height="20.0" ShapeType="Cell"/>
    </Shape>''')

    model, _ = codec.read_string(xml)

    style = model.get_element("s").shape_style
    assert style.border_style == LineStyleType.DOUBLE
    assert style.border_width == 3.0
    assert style.border_color == LIGHT_GRAY


def test_spaced_shape_names_become_camel_case(codec):
    """Test the conversion in both directions"""
    xml = legacy_doc('''<Shape GraphId="s">
        <Graphics CenterX="50.0" CenterY="50.0" Width="20.0" Height="20.0" ShapeType="Golgi Apparatus"/>
    </Shape>''')

    model, _ = codec.read_string(xml)
    root = codec.write_element(model, Dialect.GPML2013A)

    assert model.get_element("s").shape_style.shape_type == "GolgiApparatus"
    assert root.find("g:Shape/g:Graphics", NS).get("ShapeType") == "Golgi Apparatus"


def test_unknown_arrowhead_is_kept(codec):
    xml = legacy_doc('''<Interaction GraphId="i">
        <Graphics>
            <Point X="0.0" Y="0.0"/>
            <Point X="10.0" Y="0.0" ArrowHead="mim-unheard-of"/>
        </Graphics>
    </Interaction>''')

    model, collector = codec.read_string(xml)
    root = codec.write_element(model, Dialect.GPML2013A)

    assert model.get_element("i").end_arrow_head == "mim-unheard-of"
    assert collector.get_results_by_category(IssueCategory.GENERAL)
    assert root.findall("g:Interaction/g:Graphics/g:Point", NS)[-1].get("ArrowHead") == "mim-unheard-of"


def test_missing_text_label_raises(codec):
    xml = legacy_doc('''<DataNode GraphId="a">
        <Graphics CenterX="10.0" CenterY="10.0" Width="10.0" Height="10.0"/>
    </DataNode>''')

    with pytest.raises(MissingRequiredAttributeError) as exc_info:
        codec.read_string(xml)

    assert exc_info.value.attribute == "TextLabel"


def test_line_needs_two_points(codec):
    xml = legacy_doc('''<Interaction GraphId="i">
        <Graphics><Point X="0.0" Y="0.0"/></Graphics>
    </Interaction>''')

    with pytest.raises(MissingRequiredAttributeError):
        codec.read_string(xml)


def test_current_model_written_as_legacy(codec, current_xml):
    """Test the mapping of 2021 concepts onto 2013a"""
    model, _ = codec.read_string(current_xml)
    collector = ValidationCollector(ValidationLevel.LENIENT)

    root = codec.write_element(model, Dialect.GPML2013A, collector)

    assert root.get("Author") == "Ada"
    description = root.find("g:Comment[@Source='WikiPathways-description']", NS)
    assert description.text == "A small test pathway"
    assert root.find("g:Attribute", NS).get("Key") == "color-scheme"
    assert root.find("g:State", NS).get("GraphRef") == "n1"
    assert root.find("g:Group", NS).get("GroupId") == "g1"
    assert root.find("g:Biopax", NS) is not None
    lossy = collector.get_results_by_category(IssueCategory.LOSSY_CONVERSION)
    assert [r.message for r in lossy] == ["Xref of pathway cannot be written in GPML 2013a and is dropped."]


def test_alias_is_lost_in_legacy(codec):
    model = PathwayModel(pathway=Pathway(title="Alias", board_width=100, board_height=100))
    model.add(Group(element_id="grp"))
    model.add(DataNode(element_id="member", text_label="M", group_ref="grp",
                       rect=RectProperty(center_x=10, center_y=10, width=10, height=10)))
    model.add(DataNode(element_id="alias", text_label="A", alias_ref="grp",
                       rect=RectProperty(center_x=50, center_y=10, width=10, height=10)))
    collector = ValidationCollector(ValidationLevel.LENIENT)

    codec.write_element(model, Dialect.GPML2013A, collector)

    lossy = collector.get_results_by_category(IssueCategory.LOSSY_CONVERSION)
    assert [r.element_id for r in lossy] == ["alias"]


def test_legacy_model_written_as_current(codec, legacy_xml):
    """Test that 2013a-only information stays out of 2021 output"""
    model, _ = codec.read_string(legacy_xml)
    collector = ValidationCollector(ValidationLevel.LENIENT)

    root = codec.write_element(model, Dialect.GPML2021, collector)

    ns = {"g": Dialect.GPML2021.namespace}
    assert root.findall("g:Property", ns) == []
    assert root.find("g:Citations/g:Citation", ns).get("elementId") == "c1"
    state = root.find("g:DataNodes/g:DataNode[@elementId='n1']/g:States/g:State", ns)
    assert state is not None
    assert collector.get_results_by_category(IssueCategory.LOSSY_CONVERSION)


def test_group_graphics_by_type():
    _, transparent = group_graphics("Transparent")
    font, complex_style = group_graphics("Complex")

    assert transparent.border_color.transparent
    assert complex_style.shape_type == "Octagon"
    assert font.text_color == Color.rgb(128, 128, 128)
