"""
Issue collection for GPML reading and writing.

Fatal problems (malformed XML, missing required attributes, unknown
dialects) are raised as exceptions. Everything the codec can recover from
is recorded here instead, so a conversion can finish and still tell the
caller what went wrong:
- references to element IDs that do not exist in the document
- color literals that could not be decoded
- information that cannot be represented in the target dialect

Three severity levels are supported:
- CRITICAL: Fatal issues that MUST be addressed
- ERROR: Serious issues that SHOULD be addressed, such as information lost
  in a conversion
- WARNING: Recovered issues, the document was still converted

And three validation modes:
- STRICT: Raises for any ERROR or CRITICAL issue and interrupts
- NORMAL: Raises for CRITICAL issues, collects ERROR and WARNING issues
- LENIENT: Collects all issues without raising (for debugging purposes)
"""
from enum import Enum
from typing import List, Optional
import logging
from pathlib import Path
from datetime import datetime
from pydantic import BaseModel, Field

from gpml_codec.exceptions.codec import EscalatedIssueError

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Defines the severity levels for validation issues."""
    CRITICAL = "CRITICAL"  # Fatal issues that prevent proper functioning
    ERROR = "ERROR"       # Serious issues that should be fixed
    WARNING = "WARNING"   # Recovered issues


class ValidationLevel(Enum):
    """Determines how strictly collected issues are escalated."""
    STRICT = "STRICT"     # Will raise ERROR and CRITICAL issues immediately
    NORMAL = "NORMAL"     # Will raise on CRITICAL, but only collect the other severity levels
    LENIENT = "LENIENT"   # Collect all issues, never raise


class IssueCategory(str, Enum):
    """What kind of recoverable problem an issue describes."""
    DANGLING_REFERENCE = "DanglingReference"
    INVALID_COLOR_LITERAL = "InvalidColorLiteral"
    COLOR_ANOMALY = "ColorAnomaly"
    LOSSY_CONVERSION = "LossyConversion"
    PRUNED_GROUP = "PrunedGroup"
    GENERAL = "General"


class ValidationResult(BaseModel):
    """A single collected issue."""
    severity: ValidationSeverity
    message: str
    category: IssueCategory = IssueCategory.GENERAL
    element_id: Optional[str] = None
    element_type: Optional[str] = None
    field_name: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)

    class Config:
        """Pydantic configuration."""
        frozen = True  # Make validation results immutable


class ValidationCollector:
    """Collects and manages issues raised during one document conversion."""

    def __init__(self, validation_level: ValidationLevel = ValidationLevel.NORMAL):
        """Initialize the validation collector.

        Args:
            validation_level: Determines how strictly to handle issues.
                            Defaults to NORMAL.
        """
        self.validation_level = validation_level
        self.results: List[ValidationResult] = []

    def add_result(self,
                   severity: ValidationSeverity,
                   message: str,
                   category: IssueCategory = IssueCategory.GENERAL,
                   element_id: Optional[str] = None,
                   element_type: Optional[str] = None,
                   field_name: Optional[str] = None) -> ValidationResult:
        """Add an issue and handle it according to the validation level.

        Args:
            severity: The severity level of the issue
            message: Description of the issue
            category: Kind of recoverable problem
            element_id: ID of the affected element (if applicable)
            element_type: Type of the affected element (if applicable)
            field_name: Name of the affected field (if applicable)

        Returns:
            The stored result

        Raises:
            EscalatedIssueError: If validation level and severity require an exception
        """
        result = ValidationResult(
            severity=severity,
            message=message,
            category=category,
            element_id=element_id,
            element_type=element_type,
            field_name=field_name
        )
        self.results.append(result)

        self._log_result(result)
        self._handle_result(result)
        return result

    def warn(self, message: str, category: IssueCategory, **context) -> ValidationResult:
        """Shortcut for recording a recovered issue."""
        return self.add_result(ValidationSeverity.WARNING, message, category, **context)

    def lost(self, message: str, **context) -> ValidationResult:
        """Record information that the target cannot represent and drops.

        Recorded as an ERROR, so STRICT collectors refuse lossy conversions.
        """
        return self.add_result(ValidationSeverity.ERROR, message, IssueCategory.LOSSY_CONVERSION, **context)

    def _log_result(self, result: ValidationResult) -> None:
        """Log the result at a level matching its severity."""
        log_message = self._format_log_message(result)

        if result.severity in (ValidationSeverity.CRITICAL, ValidationSeverity.ERROR):
            logger.error(log_message)
        else:
            logger.warning(log_message)

    def _handle_result(self, result: ValidationResult) -> None:
        """Raise if the validation level does not tolerate the result.

        Raises:
            EscalatedIssueError: If validation level and severity require an exception
        """
        if self.validation_level == ValidationLevel.STRICT:
            if result.severity in [ValidationSeverity.CRITICAL, ValidationSeverity.ERROR]:
                raise EscalatedIssueError(self._format_error_message(result), result.element_id)
        elif self.validation_level == ValidationLevel.NORMAL:
            if result.severity == ValidationSeverity.CRITICAL:
                raise EscalatedIssueError(self._format_error_message(result), result.element_id)

    def save_report(self, output_path: Path) -> None:
        """Save collected results to a text file.

        Args:
            output_path: Path where to save the report
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            self._write_report_header(f)
            self._write_results_by_severity(f)
            self._write_report_summary(f)

    def _write_report_header(self, file) -> None:
        file.write("GPML Conversion Report\n")
        file.write("=" * 50 + "\n")
        file.write(f"Validation Level: {self.validation_level.value}\n")
        file.write(f"Total Issues: {len(self.results)}\n")
        file.write("-" * 50 + "\n\n")

    def _write_results_by_severity(self, file) -> None:
        for severity in ValidationSeverity:
            results = self.get_results_by_severity(severity)
            if results:
                file.write(f"\n{severity.value} Issues ({len(results)}):\n")
                file.write("-" * 30 + "\n")

                for result in results:
                    file.write(f"- [{result.category.value}] {result.message}\n")
                    if result.element_id:
                        file.write(f"  Element ID: {result.element_id}\n")
                    if result.element_type:
                        file.write(f"  Element Type: {result.element_type}\n")
                    if result.field_name:
                        file.write(f"  Field: {result.field_name}\n")
                    file.write(f"  Time: {result.timestamp.strftime('%Y-%m-%d %H:%M:%S')}\n")
                    file.write("\n")

    def _write_report_summary(self, file) -> None:
        file.write("\nSummary:\n")
        file.write("-" * 30 + "\n")
        for severity in ValidationSeverity:
            count = len(self.get_results_by_severity(severity))
            file.write(f"{severity.value}: {count} issues\n")

        if self.has_critical_issues:
            file.write("\nWARNING: Critical issues were found!\n")

    @staticmethod
    def _format_log_message(result: ValidationResult) -> str:
        message = f"{result.severity.value}: [{result.category.value}] {result.message}"
        if result.element_id:
            message += f" (Element ID: {result.element_id})"
        if result.element_type:
            message += f" (Type: {result.element_type})"
        return message

    @staticmethod
    def _format_error_message(result: ValidationResult) -> str:
        return f"{result.severity.value}: {result.message}"

    def get_results_by_severity(self, severity: ValidationSeverity) -> List[ValidationResult]:
        """Get all results of a specific severity."""
        return [r for r in self.results if r.severity == severity]

    def get_results_by_category(self, category: IssueCategory) -> List[ValidationResult]:
        """Get all results of a specific category."""
        return [r for r in self.results if r.category == category]

    @property
    def warnings(self) -> List[ValidationResult]:
        """Recovered issues, in the order they were collected."""
        return self.get_results_by_severity(ValidationSeverity.WARNING)

    @property
    def has_critical_issues(self) -> bool:
        """Check if there are any critical issues.

        Returns:
            True if there are any CRITICAL issues, False otherwise
        """
        return any(r.severity == ValidationSeverity.CRITICAL for r in self.results)
