"""State values exchanged between the host and the reconciler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gandisync.domain.errors import ReconciliationError


class ResourceState(StrEnum):
    """Lifecycle of one managed identity."""

    PLANNED = "planned"
    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True, kw_only=True)
class ManagedState[R]:
    """What the host knows about one resource.

    ``identifier`` is only set while the resource is ``PRESENT``.
    """

    status: ResourceState
    identifier: str | None = None
    resource: R | None = None

    @classmethod
    def planned(cls, resource: R) -> ManagedState[R]:
        return cls(status=ResourceState.PLANNED, resource=resource)

    @classmethod
    def present(cls, identifier: str, resource: R | None = None) -> ManagedState[R]:
        return cls(status=ResourceState.PRESENT, identifier=identifier, resource=resource)

    @classmethod
    def absent(cls) -> ManagedState[R]:
        return cls(status=ResourceState.ABSENT)

    @property
    def is_present(self) -> bool:
        return self.status is ResourceState.PRESENT


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconcileResult[R]:
    """Outcome of a write followed by its read-after-write.

    The write succeeded whenever a result is returned. ``read_error`` is set
    when the follow-up read failed; ``state`` then holds the desired values
    without computed fields.
    """

    state: ManagedState[R]
    read_error: ReconciliationError | None = None

    @property
    def fully_observed(self) -> bool:
        return self.read_error is None
