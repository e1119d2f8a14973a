"""Supplier performance errors.

One exception type carries a ``kind`` discriminator and the payload that
belongs to that kind, so callers branch on ``err.kind`` instead of on
subclasses.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Error discriminator."""

    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    INVALID_STATE_TRANSITION = "invalid_state_transition"


class SupplierPerformanceError(Exception):
    """Domain error raised by the performance service."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        entity: str | None = None,
        entity_id: int | None = None,
        errors: dict[str, str] | None = None,
        current_status: str | None = None,
        attempted_action: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.entity = entity
        self.entity_id = entity_id
        self.errors = errors or {}
        self.current_status = current_status
        self.attempted_action = attempted_action

    @classmethod
    def validation_failed(cls, message: str, errors: dict[str, str]) -> "SupplierPerformanceError":
        return cls(ErrorKind.VALIDATION_FAILED, message, errors=dict(errors))

    @classmethod
    def not_found(cls, entity: str, entity_id: int) -> "SupplierPerformanceError":
        return cls(
            ErrorKind.NOT_FOUND,
            f"Supplier {entity} with ID {entity_id} not found",
            entity=entity,
            entity_id=entity_id,
        )

    @classmethod
    def invalid_state_transition(
        cls, entity_id: int, current_status: str, attempted_action: str
    ) -> "SupplierPerformanceError":
        return cls(
            ErrorKind.INVALID_STATE_TRANSITION,
            f"Cannot {attempted_action} evaluation {entity_id} with status '{current_status}'",
            entity="evaluation",
            entity_id=entity_id,
            current_status=current_status,
            attempted_action=attempted_action,
        )

    def field_error(self, field: str) -> str | None:
        """Message for one field of a validation failure, if any."""
        return self.errors.get(field)

    def payload(self) -> dict[str, Any]:
        """Kind-specific details, suitable for an API error body."""
        if self.kind is ErrorKind.VALIDATION_FAILED:
            return {"errors": self.errors}
        if self.kind is ErrorKind.NOT_FOUND:
            return {"entity": self.entity, "entity_id": self.entity_id}
        return {
            "entity_id": self.entity_id,
            "current_status": self.current_status,
            "attempted_action": self.attempted_action,
        }
