import pytest

from gpml_codec.core.codec import GpmlCodec

CURRENT_SAMPLE = '''<?xml version="1.0" encoding="UTF-8"?>
<Pathway xmlns="http://pathvisio.org/GPML/2021" title="Sample" organism="Homo sapiens">
    <Xref identifier="WP1" dataSource="WikiPathways"/>
    <Description>A small test pathway</Description>
    <Authors>
        <Author name="Ada" order="1"/>
    </Authors>
    <Comment source="curator">Checked</Comment>
    <Property key="color-scheme" value="default"/>
    <CitationRef elementRef="c1"/>
    <Graphics boardWidth="500.0" boardHeight="400.0"/>
    <DataNodes>
        <DataNode elementId="n1" textLabel="TP53" type="GeneProduct" groupRef="g1">
            <Xref identifier="7157" dataSource="Entrez Gene"/>
            <States>
                <State elementId="s1" textLabel="P" type="ProteinModification">
                    <Graphics relX="1.0" relY="-1.0" width="10.0" height="10.0" shapeType="Oval"/>
                </State>
            </States>
            <Graphics centerX="100.0" centerY="100.0" width="80.0" height="40.0" fillColor="ff0000"/>
        </DataNode>
        <DataNode elementId="n2" textLabel="MDM2" type="GeneProduct" groupRef="g1">
            <Graphics centerX="300.0" centerY="100.0" width="80.0" height="40.0"/>
        </DataNode>
    </DataNodes>
    <Interactions>
        <Interaction elementId="i1">
            <Waypoints>
                <Point elementId="p1" x="140.0" y="100.0" elementRef="n1"/>
                <Point elementId="p2" x="260.0" y="100.0" elementRef="n2" arrowHead="Inhibition"/>
                <Anchor elementId="a1" position="0.5"/>
            </Waypoints>
            <Graphics lineColor="0000ff"/>
        </Interaction>
    </Interactions>
    <Labels>
        <Label elementId="l1" textLabel="Nucleus" href="https://example.org">
            <Graphics centerX="50.0" centerY="20.0" width="60.0" height="20.0" fontWeight="Bold"/>
        </Label>
    </Labels>
    <Groups>
        <Group elementId="g1" type="Complex">
            <Graphics centerX="200.0" centerY="100.0" width="300.0" height="80.0"/>
        </Group>
    </Groups>
    <Citations>
        <Citation elementId="c1">
            <Xref identifier="123" dataSource="PubMed"/>
        </Citation>
    </Citations>
</Pathway>'''

LEGACY_SAMPLE = '''<?xml version="1.0" encoding="UTF-8"?>
<Pathway xmlns="http://pathvisio.org/GPML/2013a" Name="Legacy" Organism="Mus musculus" Author="Jane" Last-Modified="20200101">
    <Comment Source="WikiPathways-description">A legacy pathway</Comment>
    <Comment>Imported</Comment>
    <BiopaxRef>c1</BiopaxRef>
    <Graphics BoardWidth="500.0" BoardHeight="400.0"/>
    <DataNode TextLabel="TP53" GraphId="n1" Type="GeneProduct" GroupRef="grp1">
        <Attribute Key="org.pathvisio.DoubleLineProperty" Value="Double"/>
        <Graphics CenterX="100.0" CenterY="100.0" Width="80.0" Height="40.0" ZOrder="32768" FillColor="ff0000"/>
        <Xref Database="Entrez Gene" ID="7157"/>
    </DataNode>
    <DataNode TextLabel="MDM2" GraphId="n2" GroupRef="grp1">
        <Graphics CenterX="300.0" CenterY="100.0" Width="80.0" Height="40.0"/>
        <Xref Database="" ID=""/>
    </DataNode>
    <State GraphRef="n1" TextLabel="P" StateType="ProteinModification">
        <Graphics RelX="1.0" RelY="-1.0" Width="10.0" Height="10.0" ShapeType="Oval"/>
    </State>
    <Interaction>
        <Graphics ZOrder="12288" LineThickness="1.0">
            <Point X="140.0" Y="100.0" GraphRef="n1" RelX="0.5" RelY="0.0"/>
            <Point X="260.0" Y="100.0" GraphRef="n2" ArrowHead="mim-inhibition"/>
            <Anchor Position="0.5" Shape="None" GraphId="a1"/>
        </Graphics>
        <Xref Database="" ID=""/>
    </Interaction>
    <Label TextLabel="Nucleus" GraphId="l1">
        <Graphics CenterX="50.0" CenterY="20.0" Width="60.0" Height="20.0"/>
    </Label>
    <Shape GraphId="sh1">
        <Graphics CenterX="200.0" CenterY="300.0" Width="100.0" Height="50.0" ShapeType="Oval" Rotation="Right"/>
    </Shape>
    <Group GroupId="grp1" GraphId="g1" Style="Complex"/>
    <InfoBox CenterX="0.0" CenterY="0.0"/>
    <Biopax>
        <bp:PublicationXref xmlns:bp="http://www.biopax.org/release/biopax-level3.owl#" xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" rdf:id="c1"><bp:ID rdf:datatype="http://www.w3.org/2001/XMLSchema#string">123</bp:ID><bp:DB rdf:datatype="http://www.w3.org/2001/XMLSchema#string">PubMed</bp:DB><bp:TITLE rdf:datatype="http://www.w3.org/2001/XMLSchema#string">A paper</bp:TITLE><bp:YEAR rdf:datatype="http://www.w3.org/2001/XMLSchema#string">2001</bp:YEAR></bp:PublicationXref>
    </Biopax>
</Pathway>'''


@pytest.fixture
def codec():
    """Provides a codec with default settings"""
    return GpmlCodec()


@pytest.fixture
def current_xml():
    """Provides a GPML 2021 document using every element kind"""
    return CURRENT_SAMPLE


@pytest.fixture
def legacy_xml():
    """Provides a GPML 2013a document with states, groups and BioPAX"""
    return LEGACY_SAMPLE
