from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from requestentity.request import Request
from tests.support.entities import USER_INPUT

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping


@pytest.fixture(autouse=True)
def _clean_requestentity_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "REQUESTENTITY_MAX_BODY_BYTES",
        "REQUESTENTITY_PARSE_JSON",
        "REQUESTENTITY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def make_request() -> Callable[..., Request]:
    def factory(
        body: Mapping[str, object] | None = None,
        *,
        query: Mapping[str, object] | None = None,
        url: str = "https://example.com/",
    ) -> Request:
        return Request(query=query or {}, body=body or {}, url=url)

    return factory


@pytest.fixture
def user_request() -> Request:
    return Request(body=USER_INPUT)
