"""
Codec orchestrator: the entry point for reading and writing GPML.

Reading runs through these stages:

1. parse the XML and select the dialect adapter from the root namespace
2. optionally validate against the dialect's XSD
3. pass 1: the adapter maps elements to the model
4. synthesize IDs for elements that have none
5. pass 2: the adapter resolves what pass 1 deferred
6. check group references and resolve endpoint coordinates

Writing works on a copy of the model: IDs are synthesized, empty groups
pruned, elements emitted by the adapter, put in canonical order, optionally
validated and serialized.
"""
import logging
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

from lxml import etree as ET
from pydantic import BaseModel, Field

from gpml_codec.codec.coordinates import CoordinateResolver
from gpml_codec.codec.identifiers import IdentifierAllocator
from gpml_codec.codec.references import (
    check_citation_references,
    check_group_references,
    prune_empty_groups,
)
from gpml_codec.core.dialects.base import (
    ConversionContext,
    DataSourceLookup,
    Dialect,
    DialectAdapter,
)
from gpml_codec.core.dialects.current import Gpml2021Adapter
from gpml_codec.core.dialects.legacy import Gpml2013aAdapter
from gpml_codec.core.schema_validation import SchemaValidator, XsdValidator, pretty_document
from gpml_codec.exceptions.codec import (
    MalformedXmlError,
    SchemaValidationError,
    UnsupportedDialectError,
)
from gpml_codec.models.pathway import PathwayModel
from gpml_codec.utils.validation import ValidationCollector, ValidationLevel

logger = logging.getLogger(__name__)

DialectSpec = Union[Dialect, str]

# Adapters by root namespace
DIALECTS: Mapping[str, DialectAdapter] = MappingProxyType({
    adapter.namespace: adapter for adapter in (Gpml2013aAdapter(), Gpml2021Adapter())
})

ROOT_TAG = "Pathway"


class ReadStage(str, Enum):
    UNPARSED = "Unparsed"
    ROOT_VALIDATED = "RootValidated"
    ELEMENTS_MAPPED = "ElementsMapped"
    IDS_RESOLVED = "IdsResolved"
    COORDINATES_RESOLVED = "CoordinatesResolved"
    READY = "Ready"


class WriteStage(str, Enum):
    READY = "Ready"
    ELEMENTS_EMITTED = "ElementsEmitted"
    ORDERED = "Ordered"
    VALIDATED = "Validated"
    SERIALIZED = "Serialized"


class CodecConfig(BaseModel):
    """Settings of a :class:`GpmlCodec`."""

    validate_schema: bool = False
    schema_paths: Dict[Dialect, Path] = Field(default_factory=dict)
    validation_level: ValidationLevel = ValidationLevel.NORMAL
    default_dialect: Dialect = Dialect.GPML2021
    pretty_print: bool = True
    report_path: Optional[Path] = None  # report saved after read_file

    class Config:
        frozen = True


def xml_parser() -> ET.XMLParser:
    # blank text is dropped so that re-serialized documents indent cleanly
    return ET.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)


class GpmlCodec:
    """Reads GPML documents into a :class:`PathwayModel` and writes them back."""

    def __init__(self,
                 config: Optional[CodecConfig] = None,
                 datasource_lookup: Optional[DataSourceLookup] = None,
                 schema_validators: Optional[Mapping[Dialect, SchemaValidator]] = None):
        """Initialize the codec.

        Args:
            config: Codec settings, defaults to :class:`CodecConfig` defaults
            datasource_lookup: Maps database names read from Xrefs to canonical names
            schema_validators: Validators per dialect, taking precedence over
                the XSD files named in ``config.schema_paths``
        """
        self.config = config or CodecConfig()
        self.datasource_lookup = datasource_lookup
        self.schema_validators: Dict[Dialect, SchemaValidator] = dict(schema_validators or {})
        for dialect, path in self.config.schema_paths.items():
            self.schema_validators.setdefault(dialect, XsdValidator(path))

    def _new_collector(self) -> ValidationCollector:
        return ValidationCollector(self.config.validation_level)

    @staticmethod
    def adapter_for(dialect: DialectSpec) -> DialectAdapter:
        return DIALECTS[Dialect.parse(dialect).namespace]

    @staticmethod
    def detect_dialect(root: ET._Element) -> Dialect:
        """Dialect of a document, from the namespace of its root.

        Raises:
            UnsupportedDialectError: If the root is not a GPML ``Pathway`` of a known dialect
        """
        qname = ET.QName(root)
        adapter = DIALECTS.get(qname.namespace)
        if adapter is None or qname.localname != ROOT_TAG:
            raise UnsupportedDialectError(qname.namespace)
        return adapter.dialect

    def _validate(self, root: ET._Element, dialect: Dialect) -> None:
        """Run the configured validator of a dialect, if any.

        Raises:
            SchemaValidationError: If the document does not conform
        """
        validator = self.schema_validators.get(dialect)
        if validator is None:
            logger.warning("Schema validation requested but no schema configured for GPML %s",
                           dialect.value)
            return
        try:
            validator(root)
        except SchemaValidationError as e:
            if not e.document:
                e.document = pretty_document(root)
            logger.error("Schema validation failed: %s\n%s", e, e.document)
            raise

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_file(self, path: Union[str, Path]) -> Tuple[PathwayModel, ValidationCollector]:
        """Read a GPML file.

        Args:
            path: Path to a GPML 2013a or 2021 document

        Returns:
            Tuple of (PathwayModel, ValidationCollector)

        Raises:
            MalformedXmlError: If the file is not well-formed XML
            GpmlCodecError: For any other fatal problem with the document
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                root = ET.parse(f, xml_parser()).getroot()
        except ET.XMLSyntaxError as e:
            raise MalformedXmlError(f"Failed to parse {path}: {e}", details={"line": e.lineno}) from e

        model, collector = self.read_element(root)
        if self.config.report_path is not None:
            collector.save_report(self.config.report_path)
        return model, collector

    def read_string(self, text: Union[str, bytes]) -> Tuple[PathwayModel, ValidationCollector]:
        """Read a GPML document from a string.

        Raises:
            MalformedXmlError: If the text is not well-formed XML
        """
        data = text.encode("utf-8") if isinstance(text, str) else text
        try:
            root = ET.fromstring(data, xml_parser())
        except ET.XMLSyntaxError as e:
            raise MalformedXmlError(f"Failed to parse XML: {e}", details={"line": e.lineno}) from e
        return self.read_element(root)

    def read_element(self, root: ET._Element) -> Tuple[PathwayModel, ValidationCollector]:
        """Convert a parsed ``Pathway`` element into a model.

        Returns:
            Tuple of (PathwayModel, ValidationCollector)

        Raises:
            UnsupportedDialectError: If the root namespace is not a GPML dialect
            SchemaValidationError: If validation is enabled and fails
            MissingRequiredAttributeError: If a required attribute is absent
        """
        collector = self._new_collector()
        dialect = self.detect_dialect(root)
        adapter = self.adapter_for(dialect)
        if self.config.validate_schema:
            self._validate(root, dialect)
        self._log_stage(ReadStage.ROOT_VALIDATED, dialect)

        context = ConversionContext(collector, self.datasource_lookup)
        model = adapter.read(root, context)
        self._log_stage(ReadStage.ELEMENTS_MAPPED, dialect)

        assigned = IdentifierAllocator().allocate(model)
        adapter.link(model, context)
        # states attached in pass 2 may still lack IDs
        assigned += IdentifierAllocator().allocate(model)
        logger.debug("Synthesized %d element IDs", assigned)
        self._log_stage(ReadStage.IDS_RESOLVED, dialect)

        check_group_references(model, collector)
        check_citation_references(model, collector)
        CoordinateResolver(collector).resolve(model)
        self._log_stage(ReadStage.COORDINATES_RESOLVED, dialect)

        logger.info("Read GPML %s pathway '%s' with %d warnings",
                    dialect.value, model.pathway.title, len(collector.warnings))
        self._log_stage(ReadStage.READY, dialect)
        return model, collector

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write_element(self, model: PathwayModel, dialect: Optional[DialectSpec] = None,
                      collector: Optional[ValidationCollector] = None) -> ET._Element:
        """Convert a model into an ordered ``Pathway`` element.

        The model itself is not modified.

        Args:
            model: The pathway to write
            dialect: Target dialect, defaults to ``config.default_dialect``
            collector: Receives lossy-conversion and pruning warnings

        Raises:
            UnsupportedDialectError: If the dialect is unknown
            SchemaValidationError: If validation is enabled and fails
        """
        dialect = Dialect.parse(dialect or self.config.default_dialect)
        adapter = self.adapter_for(dialect)
        context = ConversionContext(collector or self._new_collector(), self.datasource_lookup)

        working = model.model_copy(deep=True)
        IdentifierAllocator().allocate(working)
        prune_empty_groups(working, context.validator)
        self._log_stage(WriteStage.READY, dialect)

        root = adapter.write(working, context)
        self._log_stage(WriteStage.ELEMENTS_EMITTED, dialect)
        adapter.ordering.sort_children(root)
        self._log_stage(WriteStage.ORDERED, dialect)

        if self.config.validate_schema:
            self._validate(root, dialect)
            self._log_stage(WriteStage.VALIDATED, dialect)
        return root

    def write_string(self, model: PathwayModel, dialect: Optional[DialectSpec] = None,
                     collector: Optional[ValidationCollector] = None) -> str:
        """Serialize a model as a GPML document string (UTF-8, with declaration)."""
        root = self.write_element(model, dialect, collector)
        data = ET.tostring(root, pretty_print=self.config.pretty_print,
                           xml_declaration=True, encoding="UTF-8")
        self._log_stage(WriteStage.SERIALIZED, Dialect.parse(dialect or self.config.default_dialect))
        return data.decode("utf-8")

    def write_file(self, model: PathwayModel, path: Union[str, Path],
                   dialect: Optional[DialectSpec] = None,
                   collector: Optional[ValidationCollector] = None) -> None:
        """Write a model to a GPML file."""
        root = self.write_element(model, dialect, collector)
        path = Path(path)
        with path.open("wb") as f:
            ET.ElementTree(root).write(f, pretty_print=self.config.pretty_print,
                                       xml_declaration=True, encoding="UTF-8")
        logger.info("Wrote %s", path)

    @staticmethod
    def _log_stage(stage: Enum, dialect: Dialect) -> None:
        logger.debug("GPML %s: %s", dialect.value, stage.value)
