"""Error Hierarchy — typed, categorized exceptions for record synthesis failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All errors here are programmer-facing: the caller passed input inconsistent
      with the object metadata. None of them is retryable
    - Cache misses are never errors and have no class here
    - Messages enumerate every offending key, never just the first

Design Decisions:
    - Single hierarchy with ObjectRecordError base: callers abort a mutation on any of them
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    object_name: str | None = None
    field_names: list[str] | None = None
    record_id: str | None = None
    debug_info: dict[str, Any] | None = None


class ObjectRecordError(Exception):
    """Base exception for all object record errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "object_name": self.context.object_name,
                    "field_names": self.context.field_names,
                    "record_id": self.context.record_id,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Input Errors ───────────────────────────────────────────────

class UnknownFieldError(ObjectRecordError):
    """RecordInput holds keys that the object metadata does not declare."""
    def __init__(
        self, object_name: str, unknown_fields: list[str],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.object_name = object_name
        ctx.field_names = list(unknown_fields)
        super().__init__(
            f"Should never occur, encountered unknown fields "
            f"{', '.join(unknown_fields)} in objectMetadaItem {object_name}",
            "UNKNOWN_FIELDS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.object_name = object_name
        self.unknown_fields = list(unknown_fields)


class AmbiguousRelationInputError(ObjectRecordError):
    """RecordInput holds both the id-form and the object-form of one relation."""
    def __init__(
        self, relation_field_name: str, relation_id_field_name: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_names = [relation_id_field_name, relation_field_name]
        super().__init__(
            f"Should never provide relation mutation through anything else than "
            f"the fieldId e.g {relation_id_field_name} and not {relation_field_name}, "
            f"encountered: {relation_field_name}",
            "AMBIGUOUS_RELATION_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.relation_field_name = relation_field_name
        self.relation_id_field_name = relation_id_field_name


class MissingRecordIdError(ObjectRecordError):
    """A record handed to the normalizer carries no id to key it by."""
    def __init__(
        self, object_name: str, record_keys: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.object_name = object_name
        if record_keys is not None:
            ctx.debug_info = {"record_keys": list(record_keys)}
        super().__init__(
            f"Cannot normalize {object_name} record without an id",
            "MISSING_RECORD_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.object_name = object_name


# ─── Metadata Errors ────────────────────────────────────────────

class ObjectMetadataItemNotFoundError(ObjectRecordError):
    """A relation targets an object type absent from the metadata collection."""
    def __init__(self, name_singular: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.object_name = name_singular
        super().__init__(
            f"Object metadata item '{name_singular}' not found",
            "OBJECT_METADATA_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.name_singular = name_singular
