# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from gandisync.adapters.documents import from_document, state_from_document, state_to_document
from gandisync.app import build_reconciler
from gandisync.config import ConfigurationError, configure_logging, level_for
from gandisync.domain.errors import ReconciliationError, ValidationFailedError
from gandisync.domain.model import ResourceKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from gandisync.domain.reconciliation import ManagedState, Reconciler

log = logging.getLogger(__name__)

_KINDS = [str(kind) for kind in ResourceKind]


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile Gandi domains, DNS and email")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    read = subparsers.add_parser("read", help="Refresh a state document from Gandi")
    read.add_argument("kind", choices=_KINDS)
    read.add_argument("--state", type=Path, required=True, help="State document (JSON)")

    import_ = subparsers.add_parser("import", help="Adopt an existing remote resource")
    import_.add_argument("kind", choices=_KINDS)
    import_.add_argument("identifier", help="Resource identifier, e.g. example.com/www/A")

    create = subparsers.add_parser("create", help="Create a resource")
    create.add_argument("kind", choices=_KINDS)
    create.add_argument("--desired", type=Path, required=True, help="Desired record (JSON)")

    update = subparsers.add_parser("update", help="Update a resource in place")
    update.add_argument("kind", choices=_KINDS)
    update.add_argument("--state", type=Path, required=True, help="State document (JSON)")
    update.add_argument("--desired", type=Path, required=True, help="Desired record (JSON)")

    delete = subparsers.add_parser("delete", help="Delete a resource")
    delete.add_argument("kind", choices=_KINDS)
    delete.add_argument("--state", type=Path, required=True, help="State document (JSON)")

    plan = subparsers.add_parser("plan", help="List fields that drifted from the desired record")
    plan.add_argument("kind", choices=_KINDS)
    plan.add_argument("--state", type=Path, required=True, help="State document (JSON)")
    plan.add_argument("--desired", type=Path, required=True, help="Desired record (JSON)")

    return parser.parse_args(list(argv))


def _load_json(path: Path) -> dict[str, Any]:
    try:
        document = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return document


def _emit(kind: ResourceKind, state: ManagedState[Any]) -> None:
    print(json.dumps(state_to_document(kind, state), indent=2, sort_keys=True))


def _run(args: argparse.Namespace, reconciler: Reconciler[Any, Any]) -> None:
    kind = ResourceKind(args.kind)
    match args.command:
        case "read":
            state = state_from_document(_load_json(args.state), kind=kind)
            _emit(kind, reconciler.read(state))
        case "import":
            _emit(kind, reconciler.import_resource(args.identifier))
        case "create":
            result = reconciler.create(from_document(kind, _load_json(args.desired)))
            if result.read_error is not None:
                log.warning("Created, but could not read back: %s", result.read_error)
            _emit(kind, result.state)
        case "update":
            state = state_from_document(_load_json(args.state), kind=kind)
            desired = from_document(kind, _load_json(args.desired))
            result = reconciler.update(state, desired)
            if result.read_error is not None:
                log.warning("Updated, but could not read back: %s", result.read_error)
            _emit(kind, result.state)
        case "delete":
            state = state_from_document(_load_json(args.state), kind=kind)
            _emit(kind, reconciler.delete(state))
        case "plan":
            state = reconciler.read(state_from_document(_load_json(args.state), kind=kind))
            desired = from_document(kind, _load_json(args.desired))
            drifted = reconciler.drift(state, desired)
            print(json.dumps({"status": str(state.status), "drift": list(drifted)}, indent=2))
        case _:
            raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=level_for(verbose=parsed_args.verbose))

    try:
        reconciler = build_reconciler(parsed_args.kind)
        _run(parsed_args, reconciler)
    except ValidationFailedError as exc:
        for violation in exc.violations:
            log.error("%s: %s", violation.field, violation.message)  # noqa: TRY400
        sys.exit(2)
    except ValueError:
        log.exception("Invalid input")
        sys.exit(2)
    except (ConfigurationError, ReconciliationError):
        log.exception("Reconciliation failed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
