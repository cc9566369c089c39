from enum import Enum


class CodecMessage(Enum):
    """Message templates for recovered codec issues.

    Each enum value is a message template with placeholders like {element_id}.
    They are filled in by :meth:`format` when the issue is recorded, so the
    same wording is used wherever an issue of that kind is detected.
    """
    DANGLING_POINT_REF = "Point of line {element_id} references unknown element '{ref}'. Keeping absolute coordinates."
    UNPLACEABLE_POINT_REF = "Point of line {element_id} references '{ref}', which has no position. Keeping absolute coordinates."
    DANGLING_GROUP_REF = "Element {element_id} references unknown group '{ref}'. Group membership dropped."
    DANGLING_STATE_REF = "State {element_id} references unknown data node '{ref}'. State dropped."
    DANGLING_ALIAS_REF = "Data node {element_id} is an alias of unknown group '{ref}'. Alias dropped."
    DANGLING_CITATION_REF = "Element {element_id} cites unknown citation '{ref}'."
    INVALID_COLOR = "Invalid color literal '{literal}'. Using opaque black."
    EIGHT_DIGIT_COLOR = "Color literal '{literal}' has 8 hex digits; alpha is not supported. Using opaque black."
    UNSUPPORTED_ARROWHEAD = "Unknown arrowhead '{value}' on line {element_id}. Keeping it verbatim."
    LOST_IN_DIALECT = "{what} of {element_id} cannot be written in GPML {dialect} and is dropped."
    SKIPPED_ON_READ = "{count} {what} element(s) are not supported and were skipped."
    PRUNED_EMPTY_GROUP = "Group {element_id} has no members and is not written."

    def format(self, **values) -> str:
        """Fill the template with the given values.

        Args:
            **values: Placeholder values for the template

        Returns:
            The formatted message
        """
        return self.value.format(**values)
