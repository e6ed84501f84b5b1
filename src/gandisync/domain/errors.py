"""Error taxonomy of the reconciliation engine.

Two layers live here:

- ``RemoteError`` is the classified view of a failed gateway call. It is
  derived from the reported status code only (``classify``).
- ``ReconciliationError`` and its subclasses are what callers of the
  reconciler see. Each one names the lifecycle operation, the resource kind
  and the identifier it concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus
from typing import TYPE_CHECKING

from gandisync.domain.ports.gateway import GatewayError

if TYPE_CHECKING:
    from gandisync.domain.model import ResourceKind
    from gandisync.domain.validation import Violation


class RemoteErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class Operation(StrEnum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    IMPORT = "import"


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoteError:
    """Classified outcome of a failed remote call."""

    kind: RemoteErrorKind
    message: str
    status_code: int | None = None
    cause: BaseException | None = None


def classify(error: BaseException) -> RemoteError:
    """Map a raw gateway failure onto a closed set of kinds.

    Only ``GatewayError.status_code`` is consulted; exceptions of any other type
    are unknown failures.
    """

    if not isinstance(error, GatewayError):
        return RemoteError(kind=RemoteErrorKind.UNKNOWN, message=str(error), cause=error)

    status = error.status_code
    if status == HTTPStatus.NOT_FOUND:
        kind = RemoteErrorKind.NOT_FOUND
    elif status is not None and 400 <= status < 500:  # noqa: PLR2004
        kind = RemoteErrorKind.REJECTED
    else:
        kind = RemoteErrorKind.UNKNOWN
    return RemoteError(kind=kind, message=error.message, status_code=status, cause=error)


class ReconciliationError(RuntimeError):
    """Base class for failures reported by the reconciler."""

    def __init__(
        self,
        message: str,
        *,
        operation: Operation,
        kind: ResourceKind,
        identifier: str | None = None,
    ) -> None:
        self.message = message
        self.operation = operation
        self.kind = kind
        self.identifier = identifier
        target = f"{kind} {identifier}" if identifier else str(kind)
        super().__init__(f"{operation} {target}: {message}")


class ValidationFailedError(ReconciliationError):
    """Desired state failed local validation; nothing was sent."""

    def __init__(
        self,
        violations: tuple[Violation, ...],
        *,
        operation: Operation,
        kind: ResourceKind,
        identifier: str | None = None,
    ) -> None:
        self.violations = violations
        detail = "; ".join(f"{violation.field}: {violation.message}" for violation in violations)
        super().__init__(
            f"invalid configuration ({detail})",
            operation=operation,
            kind=kind,
            identifier=identifier,
        )


class MalformedIdentifierError(ReconciliationError):
    """An identifier could not be decoded into a compound key."""


class ImmutableFieldError(ReconciliationError):
    """An update tried to change identity-bearing fields."""

    def __init__(
        self,
        fields: tuple[str, ...],
        *,
        operation: Operation,
        kind: ResourceKind,
        identifier: str | None = None,
    ) -> None:
        self.fields = fields
        super().__init__(
            f"cannot change {', '.join(fields)} in place; destroy and recreate the resource",
            operation=operation,
            kind=kind,
            identifier=identifier,
        )


class UnsupportedOperationError(ReconciliationError):
    """The resource variant does not support the requested operation."""


class NormalizationError(ReconciliationError):
    """A successful remote response could not be turned into local state."""


class RemoteFailure(ReconciliationError):
    """A classified remote failure."""

    def __init__(
        self,
        remote: RemoteError,
        *,
        operation: Operation,
        kind: ResourceKind,
        identifier: str | None = None,
    ) -> None:
        self.remote = remote
        super().__init__(remote.message, operation=operation, kind=kind, identifier=identifier)


class NotFoundError(RemoteFailure):
    """The remote service confirmed the resource does not exist."""


class RejectedError(RemoteFailure):
    """The remote service refused the request as invalid."""


class UnknownRemoteError(RemoteFailure):
    """Transport or server-side failure; says nothing about existence."""


_FAILURE_TYPES: dict[RemoteErrorKind, type[RemoteFailure]] = {
    RemoteErrorKind.NOT_FOUND: NotFoundError,
    RemoteErrorKind.REJECTED: RejectedError,
    RemoteErrorKind.UNKNOWN: UnknownRemoteError,
}


def failure_for(
    remote: RemoteError,
    *,
    operation: Operation,
    kind: ResourceKind,
    identifier: str | None = None,
) -> RemoteFailure:
    """Wrap a classified remote error with the operation and identity it concerns."""

    failure_type = _FAILURE_TYPES[remote.kind]
    return failure_type(remote, operation=operation, kind=kind, identifier=identifier)
