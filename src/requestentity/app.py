"""Application orchestration entry points."""

from __future__ import annotations

import importlib
from logging import getLogger
from typing import TYPE_CHECKING

from requestentity.adapters.pydantic_hydrator import PydanticHydrator
from requestentity.config import ConfigurationError
from requestentity.domain.decoding import decode
from requestentity.domain.request_data import RequestData

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from requestentity.domain.decoding import MappingPolicy
    from requestentity.domain.ports import Hydrator

log = getLogger(__name__)


def load_target(path: str) -> type[object]:
    """Import a target type given as ``"package.module:ClassName"``."""

    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(f"Target must look like 'module:ClassName', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module {module_name!r}: {exc}") from exc

    target: object = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigurationError(f"{module_name!r} has no attribute {attribute!r}") from exc
    if not isinstance(target, type):
        raise ConfigurationError(f"Target {path!r} is not a class")
    return target


def decode_payload[T](
    target: type[T],
    *,
    query: Mapping[str, object] | None = None,
    body: Mapping[str, object] | None = None,
    assign: Sequence[tuple[str, str]] = (),
    require: Sequence[str] = (),
    exclude: Sequence[str] = (),
    hydrator: Hydrator | None = None,
) -> T:
    """Hydrate ``target`` from plain query/body mappings and directive lists."""

    source = RequestData(query=query or {}, body=body or {})

    def configure(policy: MappingPolicy) -> None:
        for source_key, field_name in assign:
            policy.assign(source_key, field_name)
        for field_name in require:
            policy.require(field_name)
        for field_name in exclude:
            policy.exclude(field_name)

    log.info(
        "Decoding %s: assign=%s, require=%s, exclude=%s",
        target.__qualname__,
        len(assign),
        len(require),
        len(exclude),
    )
    return decode(source, target, configure, hydrator=hydrator or PydanticHydrator())
