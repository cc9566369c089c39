import logging

import pytest
from lxml import etree as ET
from pydantic import ValidationError

from gpml_codec.core.codec import CodecConfig, GpmlCodec
from gpml_codec.core.dialects.base import Dialect
from gpml_codec.exceptions.codec import (
    EscalatedIssueError,
    MalformedXmlError,
    MissingRequiredAttributeError,
    UnsupportedDialectError,
)
from gpml_codec.models.graphics import Color, RectProperty
from gpml_codec.models.pathway import (
    Anchor,
    DataNode,
    GraphicalLine,
    Group,
    LinePoint,
    Pathway,
    PathwayModel,
)
from gpml_codec.utils.validation import (
    IssueCategory,
    ValidationCollector,
    ValidationLevel,
    ValidationSeverity,
)

NS_2021 = {"g": "http://pathvisio.org/GPML/2021"}


def test_read_current_document(codec, current_xml):
    """Test that a 2021 document maps onto the model"""
    model, collector = codec.read_string(current_xml)

    assert model.pathway.title == "Sample"
    assert model.pathway.organism == "Homo sapiens"
    assert model.pathway.xref.identifier == "WP1"
    assert model.pathway.description == "A small test pathway"
    assert [(a.name, a.order) for a in model.pathway.authors] == [("Ada", 1)]
    assert model.pathway.dynamic_properties == {"color-scheme": "default"}
    assert model.pathway.citation_refs == ["c1"]
    assert not collector.warnings

    tp53 = model.get_element("n1")
    assert tp53.type == "GeneProduct"
    assert tp53.xref.data_source == "Entrez Gene"
    assert tp53.shape_style.fill_color == Color.rgb(255, 0, 0)
    assert [s.element_id for s in tp53.states] == ["s1"]
    assert tp53.states[0].shape_style.shape_type == "Oval"

    label = model.get_element("l1")
    assert label.font.font_weight
    assert label.href == "https://example.org"


def test_read_resolves_endpoint_coordinates(codec, current_xml):
    model, _ = codec.read_string(current_xml)

    interaction = model.get_element("i1")
    assert (interaction.start_point.rel_x, interaction.start_point.rel_y) == (0.5, 0.0)
    assert (interaction.end_point.rel_x, interaction.end_point.rel_y) == (-0.5, 0.0)
    assert interaction.end_arrow_head == "Inhibition"
    assert interaction.route == [(140.0, 100.0), (260.0, 100.0)]


def test_current_round_trip(codec, current_xml):
    """Test that reading what was written reproduces the model"""
    model, _ = codec.read_string(current_xml)

    again, collector = codec.read_string(codec.write_string(model))

    assert again == model
    assert not collector.warnings


def test_write_is_stable(codec, current_xml):
    model, _ = codec.read_string(current_xml)
    text = codec.write_string(model)

    assert codec.write_string(codec.read_string(text)[0]) == text


def test_write_orders_containers(codec, current_xml):
    model, _ = codec.read_string(current_xml)

    root = codec.write_element(model)

    names = [ET.QName(child).localname for child in root]
    assert names == ["Xref", "Description", "Authors", "Comment", "Property", "CitationRef",
                     "Graphics", "DataNodes", "Interactions", "Labels", "Groups", "Citations"]


def test_write_elides_default_attributes(codec, current_xml):
    model, _ = codec.read_string(current_xml)

    root = codec.write_element(model)

    n1 = root.find("g:DataNodes/g:DataNode[@elementId='n1']/g:Graphics", NS_2021)
    n2 = root.find("g:DataNodes/g:DataNode[@elementId='n2']/g:Graphics", NS_2021)
    assert n1.get("fillColor") == "ff0000"
    assert n2.get("fillColor") is None
    assert n2.get("fontName") is None


def test_write_does_not_modify_model(codec):
    """Test that IDs and pruning are applied to a copy only"""
    model = PathwayModel(pathway=Pathway(title="Copy", board_width=100, board_height=100))
    model.add(DataNode(text_label="A", rect=RectProperty(center_x=10, center_y=10, width=10, height=10)))
    model.add(Group(element_id="empty"))
    collector = ValidationCollector(ValidationLevel.LENIENT)

    root = codec.write_element(model, Dialect.GPML2021, collector)

    assert model.data_nodes[0].element_id is None
    assert [g.element_id for g in model.groups] == ["empty"]
    assert root.find("g:Groups", NS_2021) is None
    assert root.find("g:DataNodes/g:DataNode", NS_2021).get("elementId").startswith("id")
    assert collector.get_results_by_category(IssueCategory.PRUNED_GROUP)


def test_write_defaults_to_configured_dialect(current_xml):
    codec = GpmlCodec(CodecConfig(default_dialect=Dialect.GPML2013A))
    model, _ = codec.read_string(current_xml)

    root = codec.write_element(model)

    assert ET.QName(root).namespace == Dialect.GPML2013A.namespace


def test_detect_dialect(codec):
    for dialect in Dialect:
        root = ET.Element(f"{{{dialect.namespace}}}Pathway")
        assert codec.detect_dialect(root) == dialect


def test_unknown_namespace_raises(codec):
    """Test that documents of other schemas are rejected"""
    with pytest.raises(UnsupportedDialectError) as exc_info:
        codec.read_string('<Pathway xmlns="http://example.org/other" title="x"/>')

    assert exc_info.value.namespace == "http://example.org/other"


def test_non_pathway_root_raises(codec):
    with pytest.raises(UnsupportedDialectError):
        codec.read_string('<DataNode xmlns="http://pathvisio.org/GPML/2021"/>')


def test_unknown_target_dialect_raises(codec):
    with pytest.raises(UnsupportedDialectError):
        codec.write_string(PathwayModel(), "2008a")


def test_malformed_xml_raises(codec):
    with pytest.raises(MalformedXmlError):
        codec.read_string("<Pathway><DataNode></Pathway>")


def test_missing_required_attribute_raises(codec):
    """Test that a 2021 pathway without title is rejected"""
    xml = '''<Pathway xmlns="http://pathvisio.org/GPML/2021">
        <Graphics boardWidth="10.0" boardHeight="10.0"/>
    </Pathway>'''

    with pytest.raises(MissingRequiredAttributeError) as exc_info:
        codec.read_string(xml)

    assert exc_info.value.attribute == "title"


def test_dangling_references_are_warnings():
    """Test that unresolved references never abort a read"""
    xml = '''<Pathway xmlns="http://pathvisio.org/GPML/2021" title="Dangling">
        <Graphics boardWidth="100.0" boardHeight="100.0"/>
        <DataNodes>
            <DataNode elementId="n1" textLabel="A" groupRef="nogroup">
                <Graphics centerX="10.0" centerY="10.0" width="10.0" height="10.0"/>
            </DataNode>
        </DataNodes>
        <Interactions>
            <Interaction elementId="i1">
                <Waypoints>
                    <Point elementId="p1" x="0.0" y="0.0" elementRef="ghost"/>
                    <Point elementId="p2" x="10.0" y="10.0" elementRef="n1"/>
                </Waypoints>
                <Graphics/>
            </Interaction>
        </Interactions>
    </Pathway>'''

    model, collector = GpmlCodec(CodecConfig(validation_level=ValidationLevel.STRICT)).read_string(xml)

    dangling = collector.get_results_by_category(IssueCategory.DANGLING_REFERENCE)
    assert len(dangling) == 2
    assert model.get_element("n1").group_ref is None
    assert model.get_element("i1").start_point.element_ref is None


def test_invalid_color_is_recovered(codec):
    xml = '''<Pathway xmlns="http://pathvisio.org/GPML/2021" title="Colors">
        <Graphics boardWidth="100.0" boardHeight="100.0" backgroundColor="bluish"/>
    </Pathway>'''

    model, collector = codec.read_string(xml)

    assert model.pathway.background_color == Color.rgb(0, 0, 0)
    assert collector.get_results_by_category(IssueCategory.INVALID_COLOR_LITERAL)


def test_datasource_lookup_is_applied(current_xml):
    codec = GpmlCodec(datasource_lookup=lambda name: {"Entrez Gene": "NCBI Gene"}.get(name, name))

    model, _ = codec.read_string(current_xml)

    assert model.get_element("n1").xref.data_source == "NCBI Gene"
    assert model.pathway.xref.data_source == "WikiPathways"


def test_file_round_trip_saves_report(tmp_path, current_xml):
    """Test reading and writing files, with a report after reading"""
    source = tmp_path / "in.gpml"
    target = tmp_path / "out.gpml"
    report = tmp_path / "reports" / "read.txt"
    source.write_text(current_xml, encoding="utf-8")
    codec = GpmlCodec(CodecConfig(report_path=report))

    model, _ = codec.read_file(source)
    codec.write_file(model, target, Dialect.GPML2013A)

    assert report.read_text(encoding="utf-8").startswith("GPML Conversion Report")
    assert target.read_bytes().startswith(b"<?xml")
    legacy_model, _ = codec.read_file(target)
    assert [n.text_label for n in legacy_model.data_nodes] == ["TP53", "MDM2"]


def test_read_missing_file_raises(codec, tmp_path):
    with pytest.raises(OSError):
        codec.read_file(tmp_path / "absent.gpml")


def test_validation_without_schema_only_warns(current_xml, caplog):
    codec = GpmlCodec(CodecConfig(validate_schema=True))

    with caplog.at_level(logging.WARNING, logger="gpml_codec.core.codec"):
        model, _ = codec.read_string(current_xml)

    assert model.pathway.title == "Sample"
    assert "no schema configured" in caplog.text


def test_config_is_frozen():
    config = CodecConfig()

    with pytest.raises(ValidationError):
        config.pretty_print = False



@pytest.mark.parametrize("dialect", list(Dialect))
def test_graphical_line_round_trip(codec, dialect):
    """Test that lines and anchors survive writing and reading back"""
    model = PathwayModel(pathway=Pathway(title="Lines", board_width=100, board_height=100))
    model.add(GraphicalLine(
        element_id="gl",
        points=[LinePoint(element_id="p1", x=0, y=0), LinePoint(element_id="p2", x=10, y=10)],
        anchors=[Anchor(element_id="an", position=0.25)],
    ))

    again, collector = codec.read_string(codec.write_string(model, dialect))

    line = again.get_element("gl")
    assert isinstance(line, GraphicalLine)
    assert [(p.element_id, p.x, p.y) for p in line.points] == [("p1", 0.0, 0.0), ("p2", 10.0, 10.0)]
    assert [(a.element_id, a.position) for a in line.anchors] == [("an", 0.25)]
    assert not collector.warnings


def test_attached_waypoint_gets_relative_position(codec):
    xml = '''<Pathway xmlns="http://pathvisio.org/GPML/2021" title="Waypoints">
        <Graphics boardWidth="400.0" boardHeight="200.0"/>
        <DataNodes>
            <DataNode elementId="n1" textLabel="A">
                <Graphics centerX="100.0" centerY="100.0" width="80.0" height="40.0"/>
            </DataNode>
        </DataNodes>
        <Interactions>
            <Interaction elementId="i1">
                <Waypoints>
                    <Point elementId="p1" x="0.0" y="0.0"/>
                    <Point elementId="p2" x="140.0" y="100.0" elementRef="n1"/>
                    <Point elementId="p3" x="300.0" y="100.0"/>
                </Waypoints>
                <Graphics connectorType="Segmented"/>
            </Interaction>
        </Interactions>
    </Pathway>'''

    model, collector = codec.read_string(xml)

    middle = model.get_element("p2")
    assert (middle.element_ref, middle.rel_x, middle.rel_y) == ("n1", 0.5, 0.0)
    root = codec.write_element(model)
    point = root.find("g:Interactions/g:Interaction/g:Waypoints/g:Point[@elementId='p2']", NS_2021)
    assert point.get("relX") == "0.5"
    assert not collector.warnings


ANNOTATED = '''<Pathway xmlns="http://pathvisio.org/GPML/2021" title="Annotated">
    <AnnotationRef elementRef="a1"/>
    <Graphics boardWidth="100.0" boardHeight="100.0"/>
    <DataNodes>
        <DataNode elementId="n1" textLabel="A">
            <AnnotationRef elementRef="a1">
                <EvidenceRef elementRef="e1"/>
            </AnnotationRef>
            <Graphics centerX="10.0" centerY="10.0" width="10.0" height="10.0"/>
        </DataNode>
    </DataNodes>
    <Annotations>
        <Annotation elementId="a1" value="apoptosis" type="Ontology"/>
    </Annotations>
    <Evidences>
        <Evidence elementId="e1" value="inferred"/>
    </Evidences>
</Pathway>'''


def test_annotations_and_evidences_are_reported(codec):
    """Test that unsupported 2021 content is reported as lost, not dropped silently"""
    model, collector = codec.read_string(ANNOTATED)

    lossy = collector.get_results_by_category(IssueCategory.LOSSY_CONVERSION)
    assert [r.message for r in lossy] == [
        "1 Annotation element(s) are not supported and were skipped.",
        "2 AnnotationRef element(s) are not supported and were skipped.",
        "1 Evidence element(s) are not supported and were skipped.",
        "1 EvidenceRef element(s) are not supported and were skipped.",
    ]
    assert all(r.severity == ValidationSeverity.ERROR for r in lossy)
    assert model.get_element("n1").text_label == "A"


def test_strict_level_refuses_skipped_content():
    codec = GpmlCodec(CodecConfig(validation_level=ValidationLevel.STRICT))

    with pytest.raises(EscalatedIssueError):
        codec.read_string(ANNOTATED)


def test_strict_level_refuses_lossy_write(current_xml):
    """Test that STRICT aborts a write that would drop the pathway Xref"""
    codec = GpmlCodec(CodecConfig(validation_level=ValidationLevel.STRICT))
    model, _ = codec.read_string(current_xml)

    with pytest.raises(EscalatedIssueError) as exc_info:
        codec.write_string(model, Dialect.GPML2013A)

    assert "Xref of pathway" in str(exc_info.value)


def test_unknown_biopax_entries_are_reported_as_lost(codec):
    model = PathwayModel(pathway=Pathway(title="BioPAX", board_width=100, board_height=100))
    model.biopax.append(
        '<bp:openControlledVocabulary xmlns:bp="http://www.biopax.org/release/biopax-level3.owl#" '
        'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" rdf:id="ocv1"></bp:openControlledVocabulary>'
    )
    collector = ValidationCollector(ValidationLevel.LENIENT)

    codec.write_element(model, Dialect.GPML2021, collector)

    lossy = collector.get_results_by_category(IssueCategory.LOSSY_CONVERSION)
    assert [r.message for r in lossy] == [
        "1 BioPAX entries of pathway cannot be written in GPML 2021 and is dropped."
    ]
