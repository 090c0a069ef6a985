"""Request facade: typed input accessors, URL helpers and entity decoding."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, cast

import httpx
from pydantic import EmailStr, TypeAdapter, ValidationError

from requestentity.adapters.pydantic_hydrator import PydanticHydrator
from requestentity.domain.decoding.resolver import EntityResolver
from requestentity.domain.request_data import RequestData

if TYPE_CHECKING:
    from requestentity.config import RequestConfig
    from requestentity.domain.decoding.policy import ConfigurePolicy
    from requestentity.domain.ports import Hydrator

_TRUE_STRINGS = frozenset({"1", "true", "on", "yes"})
_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


def _parse_iso_datetime(value: str) -> datetime:
    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    return datetime.fromisoformat(normalized)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True, slots=True)
class Request(RequestData):
    """Input data of one HTTP request plus the URL and headers it arrived with."""

    url: httpx.URL = field(default_factory=httpx.URL)
    headers: httpx.Headers = field(default_factory=httpx.Headers)

    def __post_init__(self) -> None:
        RequestData.__post_init__(self)
        object.__setattr__(self, "url", httpx.URL(self.url))
        object.__setattr__(self, "headers", httpx.Headers(self.headers))

    @classmethod
    def from_httpx(cls, request: httpx.Request, *, config: RequestConfig | None = None) -> Request:
        from requestentity.adapters.httpx_request import request_from_httpx

        return request_from_httpx(request, config=config)

    # URL

    def path(self) -> str:
        """Path without surrounding slashes, e.g. ``profile/settings``."""
        return self.url.path.strip("/")

    def domain_name(self) -> str:
        """Registered domain without subdomains, e.g. ``example.com``."""
        return ".".join(self.url.host.split(".")[-2:])

    def subdomain(self) -> str:
        return ".".join(self.url.host.split(".")[:-2])

    def is_subdomain(self, subdomain: str) -> bool:
        return self.subdomain().lower() == subdomain.lower()

    # Typed input

    def _scalar(self, key: str) -> str | int | float | bool | None:
        value = self.input(key)
        if isinstance(value, str | int | float | bool):
            return value
        return None

    def input_string(self, key: str) -> str | None:
        value = self._scalar(key)
        if value is None:
            return None
        if isinstance(value, bool):
            return "1" if value else ""
        return str(value)

    def input_int(self, key: str) -> int | None:
        value = self._scalar(key)
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (ValueError, OverflowError):
            return None
        if not math.isfinite(number):
            return None
        return _round_half_away(number)

    def input_float(self, key: str) -> float | None:
        value = self._scalar(key)
        if value is None:
            return None
        try:
            return float(value)
        except (ValueError, OverflowError):
            return None

    def input_bool(self, key: str) -> bool:
        value = self._scalar(key)
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in _TRUE_STRINGS

    def input_array(self, key: str) -> list[Any] | dict[str, Any] | None:
        value = self.input(key)
        if isinstance(value, list | dict):
            return cast("list[Any] | dict[str, Any]", value)
        return None

    def input_datetime(
        self,
        key: str,
        fmt: str | None = None,
        *,
        raise_on_error: bool = False,
    ) -> datetime | None:
        value = self.input_string(key)
        if not value:
            return None
        try:
            if fmt:
                return datetime.strptime(value, fmt)  # noqa: DTZ007
            return _parse_iso_datetime(value)
        except ValueError as exc:
            if raise_on_error:
                detail = f" with format {fmt!r}" if fmt else ""
                raise ValueError(f"Unable to parse date{detail}: {value}") from exc
            return None

    def input_email(self, key: str) -> str | None:
        value = self.input_string(key)
        if not value:
            return None
        try:
            _EMAIL_ADAPTER.validate_python(value.strip())
        except ValidationError:
            return None
        return value

    # Decoding

    def decode[T](
        self,
        target: type[T] | T,
        configure: ConfigurePolicy | None = None,
        *,
        hydrator: Hydrator | None = None,
    ) -> T:
        """Hydrate ``target`` from this request's input.

        ``configure`` receives a :class:`~requestentity.domain.decoding.MappingPolicy`
        and may rename, require or exclude fields before any field is resolved.
        Raises :class:`~requestentity.domain.decoding.MissingRequiredFieldError` for the
        first required field that resolves empty.
        """

        resolver = EntityResolver(self, hydrator or PydanticHydrator())
        return resolver.hydrate(target, configure)


__all__ = ["Request"]
