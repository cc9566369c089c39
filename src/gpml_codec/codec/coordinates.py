"""
Coordinate resolution for attached line endpoints.

A line endpoint attached to another element stores, next to its absolute
position, where it sits relative to that element. Legacy documents often
carry only the absolute position; the resolver fills in the relative one.
It must run after identifier allocation, when every element can be found
by ID.

Relative positions are fractions of the referenced element's size measured
from its center, so the right-center point of a box is ``(0.5, 0)``.
Anchors and points have no area; for them the relative position is the
plain offset from the anchor or point.
"""
import logging
from typing import Dict, List, Optional, Tuple

from gpml_codec.codec.connectors import point_at, refresh_route
from gpml_codec.models.graphics import RectProperty
from gpml_codec.models.pathway import (
    Anchor,
    LineElement,
    LinePoint,
    PathwayElement,
    PathwayModel,
    ShapedElement,
)
from gpml_codec.utils.validation import (
    IssueCategory,
    ValidationCollector,
    ValidationLevel,
    ValidationResult,
)
from gpml_codec.utils.validation_messages import CodecMessage

logger = logging.getLogger(__name__)


def to_relative(rect: RectProperty, x: float, y: float) -> Tuple[float, float]:
    """Position of ``(x, y)`` inside ``rect`` as a fraction of its size."""
    rel_x = (x - rect.center_x) / rect.width if rect.width else 0.0
    rel_y = (y - rect.center_y) / rect.height if rect.height else 0.0
    return rel_x, rel_y


def to_absolute(rect: RectProperty, rel_x: float, rel_y: float) -> Tuple[float, float]:
    """Inverse of :func:`to_relative`."""
    return rect.center_x + rel_x * rect.width, rect.center_y + rel_y * rect.height


class CoordinateResolver:
    """Second pass of reading: relative positions of attached endpoints."""

    def __init__(self, collector: Optional[ValidationCollector] = None):
        self.validator = collector or ValidationCollector(ValidationLevel.LENIENT)

    def resolve(self, model: PathwayModel) -> List[ValidationResult]:
        """Resolve every unresolved attached point of every line.

        Intermediate waypoints are treated like endpoints. Points whose
        relative position is already set are left alone, so running this
        twice changes nothing the second time.

        Returns:
            The dangling-reference warnings raised during this run
        """
        index = model.element_index()
        anchor_owners: Dict[str, LineElement] = {}
        for line in model.iter_line_elements():
            refresh_route(line)
            for anchor in line.anchors:
                if anchor.element_id:
                    anchor_owners[anchor.element_id] = line

        warnings: List[ValidationResult] = []
        for line in model.iter_line_elements():
            for point in line.points:
                if not point.element_ref or point.relative_set:
                    continue
                target = index.get(point.element_ref)
                if target is None:
                    warnings.append(self._report_dangling(line, point))
                    point.unlink()
                    continue
                relative = self._relative_position(model, target, point, anchor_owners)
                if relative is None:
                    self._report_unplaceable(line, point)
                    point.unlink()
                    continue
                point.set_relative(*relative)

        # routing depends on the resolved attachments
        for line in model.iter_line_elements():
            refresh_route(line)
        return warnings

    def _relative_position(self, model: PathwayModel, target: PathwayElement,
                           point: LinePoint,
                           anchor_owners: Dict[str, LineElement]) -> Optional[Tuple[float, float]]:
        if isinstance(target, Anchor):
            owner = anchor_owners.get(target.element_id)
            location = point_at(owner.route, target.position) if owner else None
            if location is None:
                return None
            return point.x - location[0], point.y - location[1]
        if isinstance(target, LinePoint):
            return point.x - target.x, point.y - target.y

        bounds = model.bounds_of(target)
        if bounds is None and isinstance(target, ShapedElement):
            # a group without members falls back to its own rect
            bounds = target.rect
        if bounds is None:
            return None
        return to_relative(bounds, point.x, point.y)

    def _report_dangling(self, line: LineElement, point: LinePoint) -> ValidationResult:
        return self.validator.warn(
            CodecMessage.DANGLING_POINT_REF.format(element_id=line.element_id, ref=point.element_ref),
            IssueCategory.DANGLING_REFERENCE,
            element_id=line.element_id,
            element_type=line.kind.value,
            field_name="element_ref",
        )

    def _report_unplaceable(self, line: LineElement, point: LinePoint) -> ValidationResult:
        return self.validator.warn(
            CodecMessage.UNPLACEABLE_POINT_REF.format(element_id=line.element_id, ref=point.element_ref),
            IssueCategory.GENERAL,
            element_id=line.element_id,
            element_type=line.kind.value,
            field_name="element_ref",
        )
