from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, TypeAdapter

from requestentity.adapters.httpx_request import RequestBodyTooLargeError, parse_pairs
from requestentity.app import decode_payload, load_target
from requestentity.config import ConfigurationError, configure_logging, get_request_config
from requestentity.domain.decoding import DecodeError, UnsupportedTargetError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from requestentity.config import RequestConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hydrate entities from request parameters")
    subparsers = parser.add_subparsers(dest="command", required=True)

    decode = subparsers.add_parser("decode", help="Decode query/body parameters into a class")
    decode.add_argument(
        "target",
        type=str,
        help="Target class as 'package.module:ClassName'",
    )
    decode.add_argument(
        "--query",
        type=str,
        default="",
        help="URL-encoded query string, e.g. 'name=Kristoffer&age=30'",
    )
    body = decode.add_mutually_exclusive_group()
    body.add_argument(
        "--body",
        type=str,
        help="URL-encoded form body",
    )
    body.add_argument(
        "--json",
        type=str,
        help="JSON object used as the request body",
    )
    decode.add_argument(
        "--assign",
        action="append",
        default=[],
        metavar="KEY=FIELD",
        help="Read FIELD from input KEY (repeatable)",
    )
    decode.add_argument(
        "--require",
        action="append",
        default=[],
        metavar="FIELD",
        help="Fail when FIELD resolves empty (repeatable)",
    )
    decode.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="FIELD",
        help="Never populate FIELD from input (repeatable)",
    )

    return parser.parse_args(list(argv))


def _parse_assignment(value: str) -> tuple[str, str]:
    source_key, sep, field_name = value.partition("=")
    if not sep or not source_key or not field_name:
        raise ValueError(f"Invalid --assign value (expected KEY=FIELD): {value}")
    return source_key, field_name


def _parse_form(value: str) -> dict[str, object]:
    return parse_pairs(httpx.QueryParams(value).multi_items())


def _parse_json_object(value: str) -> dict[str, object]:
    try:
        payload = json.loads(value)
    except ValueError as exc:
        raise ValueError(f"Invalid JSON body: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("JSON body must be an object")  # noqa: TRY004
    return cast("dict[str, object]", payload)


def _parse_body(args: argparse.Namespace, config: RequestConfig) -> dict[str, object]:
    raw = args.json if args.json is not None else args.body or ""
    size = len(raw.encode())
    if size > config.max_body_bytes:
        raise RequestBodyTooLargeError(size, config.max_body_bytes)
    if args.json is None:
        return _parse_form(raw)
    if not config.parse_json_body:
        raise ValueError("JSON bodies are disabled (REQUESTENTITY_PARSE_JSON)")
    return _parse_json_object(raw)


def _dump(entity: object) -> str:
    if isinstance(entity, BaseModel):
        return entity.model_dump_json()
    return TypeAdapter(type(entity)).dump_json(entity).decode()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        config = get_request_config()
    except ConfigurationError:
        configure_logging()
        log.exception("Invalid configuration")
        sys.exit(2)
    configure_logging(level=config.log_level)

    parsed_args = _parse_args(args_list)
    try:
        target = load_target(parsed_args.target)
        query = _parse_form(parsed_args.query)
        body = _parse_body(parsed_args, config)
        assignments = [_parse_assignment(value) for value in parsed_args.assign]
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        entity = decode_payload(
            target,
            query=query,
            body=body,
            assign=assignments,
            require=parsed_args.require,
            exclude=parsed_args.exclude,
        )
    except UnsupportedTargetError:
        log.exception("Unsupported target")
        sys.exit(2)
    except DecodeError:
        log.exception("Decoding failed")
        sys.exit(1)

    sys.stdout.write(_dump(entity) + "\n")


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
