"""Reconciliation of declared resources against the remote service.

Flow per lifecycle operation:
1) validate desired state locally
2) derive or decode the compound key
3) call the gateway
4) classify failures by status code
5) normalize the remote response into comparable local state
"""

from __future__ import annotations

from .contracts import ManagedState, ReconcileResult, ResourceState
from .engine import Reconciler
from .normalize import comparable_fields, diff_resources, normalize_resource

__all__ = [
    "ManagedState",
    "ReconcileResult",
    "Reconciler",
    "ResourceState",
    "comparable_fields",
    "diff_resources",
    "normalize_resource",
]
