"""Reconciler: the lifecycle state machine for one resource variant.

Every operation is a function from an explicit ``ManagedState`` (and, for
writes, a desired record) to a new ``ManagedState``. Nothing the caller holds
is mutated, so an operation abandoned half-way leaves the caller's state as it
was.

Remote failures are classified by status code and re-raised as
``ReconciliationError`` subclasses naming the operation and identifier. The
reconciler never retries; a blind retry of a create could duplicate the remote
resource.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gandisync.domain.errors import (
    ImmutableFieldError,
    MalformedIdentifierError,
    NormalizationError,
    NotFoundError,
    Operation,
    ReconciliationError,
    RemoteError,
    RemoteErrorKind,
    UnsupportedOperationError,
    ValidationFailedError,
    classify,
    failure_for,
)
from gandisync.domain.identity import IdentifierDecodeError, changed_key_fields
from gandisync.domain.ports.gateway import GatewayError, GatewayPayloadError, RemoteGateway
from gandisync.domain.validation import Violation, validate_resource

from .contracts import ManagedState, ReconcileResult, ResourceState
from .normalize import (
    carry_local_fields,
    comparable_fields,
    diff_resources,
    normalize_resource,
    with_key,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from gandisync.domain.identity import IdentityCodec
    from gandisync.domain.model import ResourceKind
    from gandisync.domain.ports.gateway import ReadGateway

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Reconciler[R, K]:
    """Create/read/update/delete/import for one resource variant."""

    codec: IdentityCodec[R, K]
    gateway: ReadGateway[R, K]
    writable: bool = field(init=False)

    def __post_init__(self) -> None:
        self.writable = isinstance(self.gateway, RemoteGateway)

    @property
    def kind(self) -> ResourceKind:
        return self.codec.kind

    def create(self, desired: R) -> ReconcileResult[R]:
        """Create the remote resource, then read it back to fill computed fields."""

        operation = Operation.CREATE
        self._ensure_writable(operation, None)
        self._validate(desired, operation, None)

        normalized = normalize_resource(desired)
        key = self._key_for(normalized, None, operation, None)
        identifier = self.codec.encode(key)
        written = with_key(normalized, key)

        log.info("Creating %s %s", self.kind, identifier)
        self._call(operation, identifier, lambda: self._remote().create(key, written))

        return self._read_after_write(identifier, written)

    def read(self, state: ManagedState[R]) -> ManagedState[R]:
        """Refresh ``state`` from the remote service.

        A resource the service reports as missing becomes ``ABSENT`` without an
        error; that is how out-of-band deletion shows up as drift.
        """

        if state.status is ResourceState.PLANNED and state.identifier is None:
            return state
        if state.identifier is None or state.status is ResourceState.ABSENT:
            return ManagedState.absent()
        return self._read(state.identifier, state.resource, Operation.READ)

    def update(self, state: ManagedState[R], desired: R) -> ReconcileResult[R]:
        """Send the full desired snapshot in place, then read it back.

        Identity-bearing fields cannot change in place; the caller has to
        delete and recreate the resource instead.
        """

        operation = Operation.UPDATE
        identifier = state.identifier
        self._ensure_writable(operation, identifier)
        if identifier is None or not state.is_present:
            raise NotFoundError(
                RemoteError(
                    kind=RemoteErrorKind.NOT_FOUND,
                    message="resource is not present; create it instead",
                ),
                operation=operation,
                kind=self.kind,
                identifier=identifier,
            )
        self._validate(desired, operation, identifier)

        current_key = self._decode(identifier, state.resource, operation)
        normalized = normalize_resource(desired)
        desired_key = self._key_for(normalized, state.resource, operation, identifier)
        immutable = changed_key_fields(current_key, desired_key)
        if immutable:
            raise ImmutableFieldError(
                immutable, operation=operation, kind=self.kind, identifier=identifier
            )

        written = with_key(normalized, current_key)
        # sent even when unchanged: state.resource may be older than the remote
        changed = diff_resources(written, state.resource) if state.resource is not None else ()
        log.info(
            "Updating %s %s (changed since last read: %s)",
            self.kind,
            identifier,
            ", ".join(changed) or "none",
        )

        self._call(operation, identifier, lambda: self._remote().update(current_key, written))
        return self._read_after_write(identifier, written)

    def delete(self, state: ManagedState[R]) -> ManagedState[R]:
        """Delete the remote resource. Deleting something already gone succeeds."""

        operation = Operation.DELETE
        identifier = state.identifier
        self._ensure_writable(operation, identifier)
        if identifier is None or state.status is ResourceState.ABSENT:
            log.info("%s already absent; nothing to delete", self.kind)
            return ManagedState.absent()

        key = self._decode(identifier, state.resource, operation)
        log.info("Deleting %s %s", self.kind, identifier)
        try:
            self._remote().delete(key)
        except GatewayError as exc:
            remote = classify(exc)
            if remote.kind is not RemoteErrorKind.NOT_FOUND:
                raise failure_for(
                    remote, operation=operation, kind=self.kind, identifier=identifier
                ) from exc
            log.info("%s %s was already deleted remotely", self.kind, identifier)
        return ManagedState.absent()

    def import_resource(self, identifier: str) -> ManagedState[R]:
        """Adopt an existing remote resource; its normalized remote state becomes the state."""

        operation = Operation.IMPORT
        log.info("Importing %s %s", self.kind, identifier)
        state = self._read(identifier, None, operation)
        if not state.is_present:
            raise NotFoundError(
                RemoteError(
                    kind=RemoteErrorKind.NOT_FOUND,
                    message="no remote resource to import",
                    status_code=404,
                ),
                operation=operation,
                kind=self.kind,
                identifier=identifier,
            )
        return state

    def drift(self, state: ManagedState[R], desired: R) -> tuple[str, ...]:
        """Fields of ``desired`` that the observed state does not match.

        Every comparable field drifts when nothing has been observed.
        """

        if state.resource is None or not state.is_present:
            return comparable_fields(desired)  # type: ignore[arg-type]
        return diff_resources(desired, state.resource)  # type: ignore[arg-type]

    def _read(self, identifier: str, prior: R | None, operation: Operation) -> ManagedState[R]:
        key = self._decode(identifier, prior, operation)
        try:
            fetched = self.gateway.get(key)
        except GatewayPayloadError as exc:
            raise NormalizationError(
                str(exc), operation=operation, kind=self.kind, identifier=identifier
            ) from exc
        except GatewayError as exc:
            remote = classify(exc)
            if remote.kind is RemoteErrorKind.NOT_FOUND:
                log.warning("%s %s no longer exists remotely", self.kind, identifier)
                return ManagedState.absent()
            raise failure_for(
                remote, operation=operation, kind=self.kind, identifier=identifier
            ) from exc

        try:
            observed = normalize_resource(carry_local_fields(fetched, prior))
            observed_identifier = self.codec.encode(self.codec.key_for(observed, prior=prior))
        except (TypeError, ValueError) as exc:
            raise NormalizationError(
                f"cannot normalize remote response: {exc}",
                operation=operation,
                kind=self.kind,
                identifier=identifier,
            ) from exc
        return ManagedState.present(observed_identifier, observed)

    def _read_after_write(self, identifier: str, written: R) -> ReconcileResult[R]:
        partial: ManagedState[R] = ManagedState.present(identifier, written)
        read_error: ReconciliationError
        try:
            observed = self._read(identifier, written, Operation.READ)
        except ReconciliationError as exc:
            read_error = exc
        else:
            if observed.is_present:
                return ReconcileResult(state=observed)
            read_error = NotFoundError(
                RemoteError(
                    kind=RemoteErrorKind.NOT_FOUND,
                    message="not visible yet after write",
                    status_code=404,
                ),
                operation=Operation.READ,
                kind=self.kind,
                identifier=identifier,
            )
        log.warning("Read after write failed for %s %s: %s", self.kind, identifier, read_error)
        return ReconcileResult(state=partial, read_error=read_error)

    def _call(self, operation: Operation, identifier: str, func: Callable[[], None]) -> None:
        try:
            func()
        except GatewayError as exc:
            raise failure_for(
                classify(exc), operation=operation, kind=self.kind, identifier=identifier
            ) from exc

    def _remote(self) -> RemoteGateway[R, K]:
        return self.gateway  # type: ignore[return-value]

    def _ensure_writable(self, operation: Operation, identifier: str | None) -> None:
        if not self.writable:
            raise UnsupportedOperationError(
                f"{self.kind} resources are read-only",
                operation=operation,
                kind=self.kind,
                identifier=identifier,
            )

    def _validate(self, desired: R, operation: Operation, identifier: str | None) -> None:
        result = validate_resource(desired)
        if not result.ok:
            raise ValidationFailedError(
                result.violations, operation=operation, kind=self.kind, identifier=identifier
            )

    def _decode(self, identifier: str, prior: R | None, operation: Operation) -> K:
        try:
            return self.codec.decode(identifier, prior=prior)
        except IdentifierDecodeError as exc:
            raise MalformedIdentifierError(
                str(exc), operation=operation, kind=self.kind, identifier=identifier
            ) from exc

    def _key_for(
        self, resource: R, prior: R | None, operation: Operation, identifier: str | None
    ) -> K:
        try:
            return self.codec.key_for(resource, prior=prior)
        except IdentifierDecodeError as exc:
            raise ValidationFailedError(
                (Violation(exc.field, str(exc)),),
                operation=operation,
                kind=self.kind,
                identifier=identifier,
            ) from exc
