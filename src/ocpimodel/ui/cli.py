# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ocpimodel.app import patch_document, validate_document
from ocpimodel.common import configure_logging
from ocpimodel.config import ConfigurationError, get_contract_config
from ocpimodel.domain.contract import ContractError, PartialIdentity
from ocpimodel.domain.model import ENTITY_TYPES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate and patch OCPI 2.2.1 JSON objects")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log why objects and patches are rejected",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    kinds = sorted(ENTITY_TYPES)

    validate = subparsers.add_parser(
        "validate", help="Parse a JSON object and print it canonically"
    )
    validate.add_argument("kind", choices=kinds, help="Entity kind of the JSON object")
    validate.add_argument("file", type=Path, help="File holding the JSON object")
    validate.add_argument(
        "--country-code",
        type=str,
        help="Country code given out-of-band (as in a request path)",
    )
    validate.add_argument(
        "--party-id",
        type=str,
        help="Party id given out-of-band (as in a request path)",
    )
    validate.add_argument(
        "--id",
        type=str,
        help="Object id given out-of-band (as in a request path)",
    )

    patch = subparsers.add_parser("patch", help="Apply a JSON merge patch to a JSON object")
    patch.add_argument("kind", choices=kinds, help="Entity kind of the JSON object")
    patch.add_argument("file", type=Path, help="File holding the JSON object")
    patch.add_argument("patch", type=Path, help="File holding the JSON merge patch")
    patch.add_argument(
        "--no-downgrades",
        action="store_true",
        help="Reject patches whose 'last_updated' is not newer than the object's",
    )

    return parser.parse_args(list(argv))


def _out_of_band(args: argparse.Namespace) -> PartialIdentity | None:
    if args.country_code is None and args.party_id is None and args.id is None:
        return None
    return PartialIdentity(country_code=args.country_code, party_id=args.party_id, id=args.id)


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc.strerror}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        config = get_contract_config()
        parsed_args = _parse_args(args_list)
        configure_logging(
            level=config.log_level,
            contract_level=logging.DEBUG if parsed_args.verbose else None,
        )
        document = _read(parsed_args.file)
        patch_text = _read(parsed_args.patch) if parsed_args.command == "patch" else None
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "validate":
            entity = validate_document(
                parsed_args.kind,
                document,
                identity=_out_of_band(parsed_args),
            )
            print(entity.dumps(indent=2))
        elif parsed_args.command == "patch" and patch_text is not None:
            allow_downgrades = config.allow_downgrades and not parsed_args.no_downgrades
            outcome = patch_document(
                parsed_args.kind,
                document,
                patch_text,
                allow_downgrades=allow_downgrades,
            )
            print(outcome.patched.dumps(indent=2))
            if outcome.error is not None:
                log.error(outcome.error.message)
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ContractError as exc:
        log.error(exc.message)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
