"""
Reference graph of a pathway model.

Group membership, alias and endpoint attachments are weak references by
ID. Building them into a NetworkX digraph (referrer -> referenced) makes
dangling references and empty groups simple graph queries.
"""
import logging
from typing import List, NamedTuple, Optional

import networkx as nx

from gpml_codec.models.pathway import Group, PathwayModel
from gpml_codec.utils.validation import (
    IssueCategory,
    ValidationCollector,
    ValidationLevel,
    ValidationResult,
)
from gpml_codec.utils.validation_messages import CodecMessage

logger = logging.getLogger(__name__)

MEMBER = "member"
ALIAS = "alias"
ATTACHED = "attached"


class DanglingEdge(NamedTuple):
    source: str
    target: str
    relation: str


class ReferenceGraph:
    """Directed graph of all by-ID references in a model."""

    def __init__(self, model: PathwayModel):
        self.model = model
        self.graph = nx.DiGraph()
        self._build()

    def _build(self) -> None:
        for element in self.model.iter_elements():
            if element.element_id:
                self.graph.add_node(element.element_id, kind=element.kind.value)

        for element in (*self.model.iter_shaped_elements(), *self.model.iter_line_elements()):
            if element.element_id and element.group_ref:
                self.graph.add_edge(element.element_id, element.group_ref, relation=MEMBER)
        for data_node in self.model.data_nodes:
            if data_node.element_id and data_node.alias_ref:
                self.graph.add_edge(data_node.element_id, data_node.alias_ref, relation=ALIAS)
        for line in self.model.iter_line_elements():
            if not line.element_id:
                continue
            for point in line.points:
                if point.element_ref:
                    self.graph.add_edge(line.element_id, point.element_ref, relation=ATTACHED)

    def dangling(self) -> List[DanglingEdge]:
        """References whose target is not an element of the model.

        Targets only known through an edge have no ``kind`` attribute.
        """
        return [
            DanglingEdge(source, target, data["relation"])
            for source, target, data in self.graph.edges(data=True)
            if "kind" not in self.graph.nodes[target]
        ]

    def member_count(self, group_id: str) -> int:
        if group_id not in self.graph:
            return 0
        return sum(
            1 for _, _, relation in self.graph.in_edges(group_id, data="relation")
            if relation == MEMBER
        )

    def empty_groups(self) -> List[Group]:
        return [g for g in self.model.groups if not g.element_id or self.member_count(g.element_id) == 0]


def check_group_references(model: PathwayModel,
                           collector: Optional[ValidationCollector] = None) -> List[ValidationResult]:
    """Report and clear group and alias references that do not resolve.

    Returns:
        The warnings raised
    """
    validator = collector or ValidationCollector(ValidationLevel.LENIENT)
    group_ids = {g.element_id for g in model.groups if g.element_id}
    warnings = []

    for element in (*model.iter_shaped_elements(), *model.iter_line_elements()):
        if element.group_ref and element.group_ref not in group_ids:
            warnings.append(validator.warn(
                CodecMessage.DANGLING_GROUP_REF.format(element_id=element.element_id, ref=element.group_ref),
                IssueCategory.DANGLING_REFERENCE,
                element_id=element.element_id,
                element_type=element.kind.value,
                field_name="group_ref",
            ))
            element.group_ref = None
    for data_node in model.data_nodes:
        if data_node.alias_ref and data_node.alias_ref not in group_ids:
            warnings.append(validator.warn(
                CodecMessage.DANGLING_ALIAS_REF.format(element_id=data_node.element_id, ref=data_node.alias_ref),
                IssueCategory.DANGLING_REFERENCE,
                element_id=data_node.element_id,
                element_type=data_node.kind.value,
                field_name="alias_ref",
            ))
            data_node.alias_ref = None
    return warnings


def prune_empty_groups(model: PathwayModel,
                       collector: Optional[ValidationCollector] = None) -> List[Group]:
    """Remove groups without members, repeating while removals empty parents.

    Returns:
        The removed groups
    """
    removed: List[Group] = []
    while True:
        empty = ReferenceGraph(model).empty_groups()
        if not empty:
            break
        for group in empty:
            model.remove(group)
            removed.append(group)
            message = CodecMessage.PRUNED_EMPTY_GROUP.format(element_id=group.element_id)
            if collector is not None:
                collector.warn(message, IssueCategory.PRUNED_GROUP,
                               element_id=group.element_id, element_type=group.kind.value)
            else:
                logger.info(message)

    removed_ids = {g.element_id for g in removed if g.element_id}
    for data_node in model.data_nodes:
        if data_node.alias_ref in removed_ids:
            data_node.alias_ref = None
    for line in model.iter_line_elements():
        for point in line.points:
            if point.element_ref in removed_ids:
                point.unlink()
    return removed


def check_citation_references(model: PathwayModel,
                              collector: Optional[ValidationCollector] = None) -> List[ValidationResult]:
    """Report citation refs naming no citation of the model.

    The refs are kept: in 2013a they may point at other BioPAX entries.
    """
    validator = collector or ValidationCollector(ValidationLevel.LENIENT)
    citation_ids = {c.element_id for c in model.citations if c.element_id}
    referrers = [(None, model.pathway.citation_refs)]
    referrers += [(e.element_id, e.citation_refs) for e in model.iter_elements()]
    warnings = []
    for element_id, refs in referrers:
        for ref in refs:
            if ref not in citation_ids:
                warnings.append(validator.warn(
                    CodecMessage.DANGLING_CITATION_REF.format(element_id=element_id or "pathway", ref=ref),
                    IssueCategory.DANGLING_REFERENCE,
                    element_id=element_id,
                    field_name="citation_refs",
                ))
    return warnings
