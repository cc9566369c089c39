"""
Dialect adapter interface and per-document conversion state.

An adapter translates between one GPML dialect and the dialect-independent
:class:`PathwayModel`. Reading happens in two passes around identifier
allocation:

- ``read`` (pass 1) maps every XML element to a model element and records
  anything that can only be resolved once all IDs are known;
- ``link`` (pass 2) resolves what pass 1 recorded.

Writing is a single ``write`` call producing an unordered root element;
the orchestrator orders and serializes it.
"""
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Tuple, Union

from lxml import etree as ET

from gpml_codec.codec.ordering import OrderingPolicy
from gpml_codec.exceptions.codec import UnsupportedDialectError
from gpml_codec.models.pathway import Group, PathwayModel, State
from gpml_codec.schema import gpml2013a, gpml2021
from gpml_codec.schema.registry import SchemaRegistry
from gpml_codec.utils.validation import ValidationCollector, ValidationLevel

DataSourceLookup = Callable[[str], str]


class Dialect(str, Enum):
    """GPML dialects known to the codec"""

    GPML2013A = "2013a"
    GPML2021 = "2021"

    @property
    def namespace(self) -> str:
        if self == Dialect.GPML2013A:
            return gpml2013a.NAMESPACE
        return gpml2021.NAMESPACE

    @classmethod
    def parse(cls, value: Union["Dialect", str]) -> "Dialect":
        """Dialect from an enum member, a short name or a namespace URI.

        Raises:
            UnsupportedDialectError: If the value names no known dialect
        """
        if isinstance(value, Dialect):
            return value
        for dialect in cls:
            if value in (dialect.value, dialect.namespace):
                return dialect
        raise UnsupportedDialectError(value)


def identity_lookup(name: str) -> str:
    return name


class ConversionContext:
    """State of one document conversion, shared by both passes."""

    def __init__(self, collector: Optional[ValidationCollector] = None,
                 datasource_lookup: Optional[DataSourceLookup] = None):
        """Initialize the context.

        Args:
            collector: Receives recovered issues; a lenient one is created if omitted
            datasource_lookup: Maps database names to their canonical form
        """
        self.validator = collector or ValidationCollector(ValidationLevel.LENIENT)
        self.lookup = datasource_lookup or identity_lookup
        # legacy states waiting for their data node: (state, GraphRef)
        self.pending_states: List[Tuple[State, Optional[str]]] = []
        # legacy group GraphId -> group, for point references
        self.graph_id_groups: Dict[str, Group] = {}
        # legacy GroupId -> group whose GroupId clashed with another ID
        self.renamed_groups: Dict[str, Group] = {}

    def data_source(self, name: Optional[str]) -> str:
        if not name:
            return ""
        return self.lookup(name)


class DialectAdapter(Protocol):
    """What the orchestrator needs from a dialect implementation."""

    dialect: Dialect
    namespace: str
    registry: SchemaRegistry
    ordering: OrderingPolicy

    def read(self, root: ET._Element, context: ConversionContext) -> PathwayModel:
        """Pass 1: map the document to a model, leaving references unresolved."""
        ...

    def link(self, model: PathwayModel, context: ConversionContext) -> None:
        """Pass 2: resolve what pass 1 deferred. Runs after ID allocation."""
        ...

    def write(self, model: PathwayModel, context: ConversionContext) -> ET._Element:
        """Emit a ``Pathway`` root element. Children need not be ordered yet."""
        ...
