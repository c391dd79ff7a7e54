from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from discographer.app import get_import_order, import_release
from discographer.config import configure_logging
from discographer.domain.model import ImportTarget

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from discographer.app import ImportResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import MusicBrainz data into discographer")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every build step",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    release = subparsers.add_parser(
        "import-release",
        help="Import a MusicBrainz release (or recording) with its artists and tracks",
    )
    release.add_argument("mbid", type=str, help="MusicBrainz id of the release")
    release.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Build the record tree without writing anything (defaults to DISCOGRAPHER_DRY_RUN)",
    )
    release.add_argument(
        "--recording",
        action="store_true",
        help="Treat MBID as a recording and import it as a song edition",
    )

    show = subparsers.add_parser("show-import", help="Show the outcome of an import order")
    show.add_argument("order_id", type=str, help="Id printed by import-release")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _report(result: ImportResult) -> None:
    order = result.order
    if not result.succeeded:
        log.warning("Import %s failed: %s", order.id, order.message)
        return
    edition = result.edition
    if result.dry_run:
        log.info(
            "Dry run for %s built %s (nothing written)",
            order.mbid,
            edition.title if edition is not None else type(result.record).__name__,
        )
        return
    log.info("Import %s succeeded: edition=%s", order.id, order.edition_id)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        order_id = _parse_uuid(parsed_args.order_id) if parsed_args.command == "show-import" else None
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "import-release":
            result = import_release(
                parsed_args.mbid,
                target=ImportTarget.RECORDING if parsed_args.recording else ImportTarget.RELEASE,
                dry_run=parsed_args.dry_run,
            )
            _report(result)
            if not result.succeeded:
                sys.exit(1)
        elif parsed_args.command == "show-import" and order_id is not None:
            order = get_import_order(order_id)
            if order is None:
                log.error("No import order %s", order_id)
                sys.exit(1)
            log.info(
                "Import %s for %s %s: %s%s",
                order.id,
                order.target,
                order.mbid,
                order.status,
                f" ({order.message})" if order.message else "",
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
