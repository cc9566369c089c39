"""Optional XSD validation of GPML documents."""
import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from lxml import etree as ET

from gpml_codec.exceptions.codec import SchemaValidationError

logger = logging.getLogger(__name__)

# Anything that raises SchemaValidationError for a non-conforming document
SchemaValidator = Callable[[ET._Element], None]


def pretty_document(root: ET._Element) -> str:
    return ET.tostring(root, pretty_print=True, encoding="unicode")


class XsdValidator:
    """Validates documents against an XSD file using lxml.

    The schema is loaded on first use and reused afterwards.
    """

    def __init__(self, xsd_path: Union[str, Path]):
        self.xsd_path = Path(xsd_path)
        self._schema: Optional[ET.XMLSchema] = None

    @property
    def schema(self) -> ET.XMLSchema:
        """The compiled schema.

        Raises:
            SchemaValidationError: If the XSD cannot be read or compiled
        """
        if self._schema is None:
            try:
                self._schema = ET.XMLSchema(ET.parse(str(self.xsd_path)))
            except (OSError, ET.XMLSyntaxError, ET.XMLSchemaParseError) as e:
                raise SchemaValidationError(f"Cannot load schema {self.xsd_path}: {e}") from e
            logger.debug("Loaded schema %s", self.xsd_path)
        return self._schema

    def errors(self, root: ET._Element) -> List[str]:
        """Validation messages for a document, empty if it conforms."""
        schema = self.schema
        if schema.validate(root):
            return []
        return [f"line {error.line}: {error.message}" for error in schema.error_log]

    def __call__(self, root: ET._Element) -> None:
        """Validate a document.

        Raises:
            SchemaValidationError: If the document does not conform, with the
                pretty-printed document attached
        """
        errors = self.errors(root)
        if not errors:
            return
        raise SchemaValidationError(
            f"Document does not conform to {self.xsd_path.name}: {errors[0]}",
            document=pretty_document(root),
            details={"errors": errors},
        )
