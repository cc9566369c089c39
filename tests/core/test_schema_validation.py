import logging

import pytest
from lxml import etree as ET

from gpml_codec.core.codec import CodecConfig, GpmlCodec
from gpml_codec.core.dialects.base import Dialect
from gpml_codec.core.schema_validation import XsdValidator
from gpml_codec.exceptions.codec import SchemaValidationError

# Accepts any 2021 Pathway that has the attributes it requires
XSD_TEMPLATE = '''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://pathvisio.org/GPML/2021"
           elementFormDefault="qualified">
    <xs:element name="Pathway">
        <xs:complexType>
            <xs:sequence>
                <xs:any minOccurs="0" maxOccurs="unbounded" processContents="skip"/>
            </xs:sequence>
            <xs:attribute name="title" type="xs:string" use="required"/>
            {extra}
            <xs:anyAttribute processContents="skip"/>
        </xs:complexType>
    </xs:element>
</xs:schema>'''


@pytest.fixture
def lenient_xsd(tmp_path):
    """Provides a schema the sample document conforms to"""
    path = tmp_path / "lenient.xsd"
    path.write_text(XSD_TEMPLATE.format(extra=""), encoding="utf-8")
    return path


@pytest.fixture
def strict_xsd(tmp_path):
    """Provides a schema requiring an attribute the sample lacks"""
    path = tmp_path / "strict.xsd"
    path.write_text(
        XSD_TEMPLATE.format(extra='<xs:attribute name="version" type="xs:string" use="required"/>'),
        encoding="utf-8",
    )
    return path


def test_conforming_document_passes(lenient_xsd, current_xml):
    codec = GpmlCodec(CodecConfig(validate_schema=True, schema_paths={Dialect.GPML2021: lenient_xsd}))

    model, _ = codec.read_string(current_xml)
    codec.write_string(model)

    assert model.pathway.title == "Sample"


def test_invalid_document_raises_with_document(strict_xsd, current_xml, caplog):
    """Test that failures carry and log the offending document"""
    codec = GpmlCodec(CodecConfig(validate_schema=True, schema_paths={Dialect.GPML2021: strict_xsd}))

    with caplog.at_level(logging.ERROR, logger="gpml_codec.core.codec"):
        with pytest.raises(SchemaValidationError) as exc_info:
            codec.read_string(current_xml)

    assert "version" in str(exc_info.value)
    assert exc_info.value.details["errors"]
    assert 'title="Sample"' in exc_info.value.document
    assert "Schema validation failed" in caplog.text


def test_validation_is_off_by_default(strict_xsd, current_xml):
    codec = GpmlCodec(CodecConfig(schema_paths={Dialect.GPML2021: strict_xsd}))

    model, _ = codec.read_string(current_xml)

    assert model.data_nodes


def test_written_documents_are_validated(strict_xsd, current_xml):
    """Test that the writer checks its own output"""
    model, _ = GpmlCodec().read_string(current_xml)
    codec = GpmlCodec(CodecConfig(validate_schema=True, schema_paths={Dialect.GPML2021: strict_xsd}))

    with pytest.raises(SchemaValidationError):
        codec.write_string(model)


def test_custom_validator_gets_document(current_xml):
    """Test that any callable can serve as validator"""
    seen = []

    def reject(root):
        seen.append(ET.QName(root).localname)
        raise SchemaValidationError("rejected")

    codec = GpmlCodec(CodecConfig(validate_schema=True), schema_validators={Dialect.GPML2021: reject})

    with pytest.raises(SchemaValidationError) as exc_info:
        codec.read_string(current_xml)

    assert seen == ["Pathway"]
    assert exc_info.value.document.startswith("<Pathway")


def test_unreadable_schema_raises(tmp_path):
    path = tmp_path / "broken.xsd"
    path.write_text("<xs:schema", encoding="utf-8")

    with pytest.raises(SchemaValidationError):
        XsdValidator(path).schema


def test_errors_lists_messages(strict_xsd):
    validator = XsdValidator(strict_xsd)
    root = ET.fromstring('<Pathway xmlns="http://pathvisio.org/GPML/2021" title="x"/>')

    errors = validator.errors(root)

    assert len(errors) == 1
    assert errors[0].startswith("line ")
