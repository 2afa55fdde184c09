"""Domain exceptions used across API and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class DomainError(Exception):
    """Base exception for predictable domain failures."""

    code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(DomainError):
    """Raised when user sends semantically invalid input."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_REQUEST",
            message=message
            or compose_error_message(
                cause="Request data violates business rules.",
                action="Adjust the input fields and try again.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class GroupNotFoundError(DomainError):
    """Raised when the referenced group does not exist."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="GROUP_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="The group was not found.",
                action="Check the group identifier and retry.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class ExpenseNotFoundError(DomainError):
    """Raised when an expense id does not exist in the group."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="EXPENSE_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="The expense was not found in this group.",
                action="Reload the group expenses and use a current expense id.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class ParticipantNotFoundError(DomainError):
    """Raised when a participant id does not belong to the group."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="PARTICIPANT_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="The participant does not belong to this group.",
                action="Use one of the group participant ids.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class NotALeaseExpenseError(DomainError):
    """Raised when a lease command targets a non-LEASE expense."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="EXPENSE_NOT_LEASE",
            message=message
            or compose_error_message(
                cause="Expense is not a lease.",
                action="Use lease commands only on expenses settled in LEASE mode.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class InvalidSplitError(DomainError):
    """Raised when expense shares are inconsistent with the split mode."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_SPLIT",
            message=message
            or compose_error_message(
                cause="Expense shares do not match the split mode.",
                action="Adjust the shares so they add up to the expected total.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )


class DomainInvariantError(DomainError):
    """Raised when fixed domain assumptions are violated."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="DOMAIN_INVARIANT_VIOLATION",
            message=message
            or compose_error_message(
                cause="A required domain invariant is not satisfied.",
                action="Verify base data setup and retry the operation.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )
