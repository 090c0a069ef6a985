"""Build :class:`~requestentity.request.Request` objects from ``httpx.Request``.

Query strings and urlencoded bodies follow the bracket conventions HTML forms use:
``tags[]=a&tags[]=b`` becomes a list, ``address[city]=Oslo`` becomes a nested mapping
and a plain key repeated several times keeps its last value.
"""

from __future__ import annotations

import json
import re
from logging import getLogger
from typing import TYPE_CHECKING, cast

import httpx

from requestentity.config import RequestConfig
from requestentity.domain.decoding.errors import DecodeError
from requestentity.request import Request

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from requestentity.domain.request_data import UploadedFile

log = getLogger(__name__)

_BRACKET_PART = re.compile(r"\[([^\[\]]*)\]")
_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_JSON_CONTENT_TYPE = "application/json"


class RequestBodyTooLargeError(DecodeError):
    """Raised when a request body exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Request body of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


class MalformedBodyError(DecodeError):
    """Raised when a request body cannot be parsed for its declared content type."""


def _split_key(key: str) -> list[str]:
    head, sep, rest = key.partition("[")
    if not sep or not head:
        return [key]
    parts = _BRACKET_PART.findall(sep + rest)
    if "".join(f"[{part}]" for part in parts) != sep + rest:
        return [key]
    return [head, *parts]


def _next_index(container: dict[str, object]) -> str:
    indexes = [int(key) for key in container if key.isdigit()]
    return str(max(indexes) + 1) if indexes else "0"


def _slot(
    container: dict[str, object], key: str, *, append: bool
) -> dict[str, object] | list[object]:
    existing = container.get(key)
    if isinstance(existing, dict):
        return cast("dict[str, object]", existing)
    if isinstance(existing, list):
        items = cast("list[object]", existing)
        if append:
            return items
        # a named key turns an appended list into a mapping keyed by position
        converted: dict[str, object] = {str(index): item for index, item in enumerate(items)}
        container[key] = converted
        return converted
    child: dict[str, object] | list[object] = [] if append else {}
    container[key] = child
    return child


def _assign(container: dict[str, object] | list[object], path: list[str], value: str) -> None:
    key, rest = path[0], path[1:]
    if isinstance(container, list):
        if not rest:
            container.append(value)
            return
        child: dict[str, object] | list[object] = [] if rest[0] == "" else {}
        container.append(child)
        _assign(child, rest, value)
        return

    if key == "":
        key = _next_index(container)
    if not rest:
        container[key] = value
        return
    _assign(_slot(container, key, append=rest[0] == ""), rest, value)


def parse_pairs(pairs: Iterable[tuple[str, str]]) -> dict[str, object]:
    """Fold ``(key, value)`` pairs into nested input data."""

    data: dict[str, object] = {}
    for key, value in pairs:
        _assign(data, _split_key(key), value)
    return data


def _media_type(headers: httpx.Headers) -> str:
    return headers.get("content-type", "").split(";", 1)[0].strip().lower()


def _parse_body(request: httpx.Request, config: RequestConfig) -> dict[str, object]:
    content = request.read()
    if not content:
        return {}
    if len(content) > config.max_body_bytes:
        raise RequestBodyTooLargeError(len(content), config.max_body_bytes)

    media_type = _media_type(request.headers)
    if media_type == _FORM_CONTENT_TYPE:
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedBodyError("Form body is not valid UTF-8") from exc
        return parse_pairs(httpx.QueryParams(text).multi_items())

    if media_type == _JSON_CONTENT_TYPE and config.parse_json_body:
        try:
            payload = json.loads(content)
        except ValueError as exc:
            raise MalformedBodyError(f"Invalid JSON body: {exc}") from exc
        if not isinstance(payload, dict):
            raise MalformedBodyError("JSON body must be an object")
        return cast("dict[str, object]", payload)

    log.debug("Ignoring request body with content type %r", media_type or None)
    return {}


def request_from_httpx(
    request: httpx.Request,
    *,
    config: RequestConfig | None = None,
    files: Mapping[str, UploadedFile] | None = None,
) -> Request:
    """Collect query, body and headers of ``request`` into a :class:`Request`."""

    effective_config = config or RequestConfig()
    return Request(
        query=parse_pairs(request.url.params.multi_items()),
        body=_parse_body(request, effective_config),
        files=files or {},
        url=request.url,
        headers=request.headers,
    )


__all__ = [
    "MalformedBodyError",
    "RequestBodyTooLargeError",
    "parse_pairs",
    "request_from_httpx",
]
