"""
Result types for trade validation.

A TradeCheck records one field-level test on a trade; a ValidationResult
collects them for a single trade or, merged with row prefixes, for a whole
import.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ValidationSeverity(str, Enum):
    """How a failed check affects whether a trade can be stored."""
    ERROR = 'error'
    WARNING = 'warning'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TradeCheck:
    """
    One field-level check on a trade.

    `value` is the raw field value the check looked at, kept so a failure
    can be reported next to what the file actually contained.
    """
    field: str
    passed: bool
    message: str = ""
    severity: ValidationSeverity = ValidationSeverity.ERROR
    value: Any = None

    @property
    def blocks_storage(self) -> bool:
        return not self.passed and self.severity == ValidationSeverity.ERROR


@dataclass
class ValidationResult:
    """
    Outcome of validating one trade or a whole import.

    Only failed ERROR checks clear `passed`; WARNING failures are reported
    but the trade can still be stored. Methods return self so checks can be
    chained:

        >>> result = ValidationResult()
        >>> result.add_check('instrument', True).add_warning('No exit price')
        >>> result.passed
        True
    """
    passed: bool = True
    checks: List[TradeCheck] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_check(
        self,
        field_key: str,
        passed: bool,
        message: str = "",
        severity: ValidationSeverity = ValidationSeverity.ERROR,
        value: Any = None,
    ) -> 'ValidationResult':
        """
        Record a check on one trade field.

        Args:
            field_key: Canonical field the check is about
            passed: Whether the check passed
            message: Text reported on failure (the field key when empty)
            severity: ERROR fails the result, WARNING only reports
            value: Raw value that was checked

        Returns:
            Self for method chaining
        """
        check = TradeCheck(field_key, passed, message, severity, value)
        self.checks.append(check)

        if not passed:
            text = message or field_key
            if check.blocks_storage:
                self.passed = False
                self.errors.append(text)
            else:
                self.warnings.append(text)
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        self.warnings.append(message)
        return self

    def add_metadata(self, key: str, value: Any) -> 'ValidationResult':
        self.metadata[key] = value
        return self

    def merge(self, other: 'ValidationResult', prefix: str = "") -> 'ValidationResult':
        """
        Fold another result into this one.

        Messages from `other` get `prefix` prepended (e.g. "Row 3: ");
        metadata is not carried over.
        """
        self.passed = self.passed and other.passed
        self.checks.extend(other.checks)
        self.errors.extend(prefix + message for message in other.errors)
        self.warnings.extend(prefix + message for message in other.warnings)
        return self

    @property
    def failed_fields(self) -> List[str]:
        """Fields with at least one blocking failure, in check order."""
        fields: List[str] = []
        for check in self.checks:
            if check.blocks_storage and check.field not in fields:
                fields.append(check.field)
        return fields

    def summary(self, max_errors: Optional[int] = 5) -> str:
        """
        Human-readable report: a status line with counts, then the first
        `max_errors` error messages (all of them when None).
        """
        status = "PASSED" if self.passed else "FAILED"
        lines = [f"Validation {status}: {len(self.errors)} error(s), {len(self.warnings)} warning(s)"]

        if self.failed_fields:
            lines.append(f"  Failing fields: {', '.join(self.failed_fields)}")

        shown = self.errors if max_errors is None else self.errors[:max_errors]
        lines.extend(f"  - {message}" for message in shown)
        if len(self.errors) > len(shown):
            lines.append(f"  ... and {len(self.errors) - len(shown)} more")

        return "\n".join(lines)

    def __bool__(self) -> bool:
        return self.passed

    def __repr__(self) -> str:
        status = "PASSED" if self.passed else "FAILED"
        return f"ValidationResult({status}, errors={len(self.errors)}, warnings={len(self.warnings)})"
