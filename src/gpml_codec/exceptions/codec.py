'''Custom exceptions for reading and writing GPML documents.'''
from typing import Any, Dict, Optional


class GpmlCodecError(Exception):
    """Base class for all codec errors"""
    def __init__(self, message: str, element_id: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.element_id = element_id  # ID of the problematic element
        self.details = details or {}   # Additional context for debugging
        super().__init__(message)


class UnknownAttributeError(GpmlCodecError):
    """Raised when dialect code asks the schema registry for an undefined key"""
    def __init__(self, tag, attribute):
        self.tag = tag
        self.attribute = attribute
        super().__init__(f"Trying to set invalid attribute key {tag}@{attribute}")


class UnorderedTagError(GpmlCodecError):
    """Raised when an element tag is missing from the canonical ordering table"""
    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Tag '{tag}' has no position in the canonical element order")


class MissingRequiredAttributeError(GpmlCodecError):
    """Raised when a required attribute is absent from the source document"""
    def __init__(self, tag, attribute, element_id: Optional[str] = None):
        self.tag = tag
        self.attribute = attribute
        super().__init__(
            f"Required attribute '{attribute}' missing on '{tag}'", element_id
        )


class MalformedXmlError(GpmlCodecError):
    """Raised when the input is not well-formed XML"""


class SchemaValidationError(GpmlCodecError):
    """Raised when a document does not conform to its dialect's XSD.

    Attributes:
        document: pretty-printed serialization of the offending document
    """
    def __init__(self, message: str, document: str = "", details=None):
        self.document = document
        super().__init__(message, details=details)


class UnsupportedDialectError(GpmlCodecError):
    """Raised when the root namespace names no known GPML dialect"""
    def __init__(self, namespace: Optional[str]):
        self.namespace = namespace
        super().__init__(f"Unsupported GPML namespace: {namespace!r}")


class EscalatedIssueError(GpmlCodecError):
    """Raised by the validation collector when its level forbids an issue"""
