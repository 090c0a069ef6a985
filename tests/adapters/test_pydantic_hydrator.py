from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from requestentity.adapters.pydantic_hydrator import PydanticHydrator
from requestentity.domain.decoding import FieldValueError, UnsupportedTargetError
from requestentity.domain.ports import MISSING, Hydrator
from requestentity.domain.request_data import UploadedFile
from tests.support.entities import (
    Account,
    NotATarget,
    Profile,
    Upload,
    UserEntity,
    UserRecord,
)

if TYPE_CHECKING:
    from collections.abc import Callable


def _from(values: dict[str, object]) -> Callable[[str], object]:
    def resolve(name: str) -> object:
        return values.get(name, MISSING)

    return resolve


def test_hydrator_satisfies_port() -> None:
    assert isinstance(PydanticHydrator(), Hydrator)


def test_fields_follow_declaration_order() -> None:
    fields = PydanticHydrator().fields(UserEntity)

    assert [descriptor.name for descriptor in fields] == ["name", "age", "email"]
    assert all(descriptor.has_default for descriptor in fields)


def test_fields_report_required_model_fields() -> None:
    fields = {descriptor.name: descriptor for descriptor in PydanticHydrator().fields(Account)}

    assert not fields["username"].has_default
    assert fields["display_name"].has_default


def test_fields_for_dataclass_and_instances() -> None:
    hydrator = PydanticHydrator()

    assert [d.name for d in hydrator.fields(UserRecord)] == ["name", "age", "score"]
    assert [d.name for d in hydrator.fields(UserEntity(name="x"))] == ["name", "age", "email"]


def test_hydrate_model_coerces_raw_strings() -> None:
    user = PydanticHydrator().hydrate(
        UserEntity,
        _from({"name": "Kristoffer", "age": "30", "email": "kristoffer@example.com"}),
    )

    assert user == UserEntity(name="Kristoffer", age=30, email="kristoffer@example.com")


def test_hydrate_asks_each_field_once_in_order() -> None:
    asked: list[str] = []

    def resolve(name: str) -> object:
        asked.append(name)
        return MISSING

    PydanticHydrator().hydrate(UserEntity, resolve)

    assert asked == ["name", "age", "email"]


def test_missing_values_fall_back_to_defaults() -> None:
    user = PydanticHydrator().hydrate(UserEntity, _from({"name": "Kristoffer"}))

    assert user.age is None
    assert user.email == ""


def test_explicit_none_is_passed_to_validation() -> None:
    user = PydanticHydrator().hydrate(UserEntity, _from({"age": None}))

    assert user.age is None


def test_aliased_fields_resolve_by_attribute_name() -> None:
    account = PydanticHydrator().hydrate(
        Account,
        _from({"username": "kristoffer", "display_name": "Kristoffer", "active": "on"}),
    )

    assert account.display_name == "Kristoffer"
    assert account.active is True


def test_nested_models_and_lists() -> None:
    profile = PydanticHydrator().hydrate(
        Profile,
        _from({"tags": ["a", "b"], "address": {"city": "Oslo"}}),
    )

    assert profile.tags == ["a", "b"]
    assert profile.address is not None
    assert profile.address.city == "Oslo"


def test_hydrate_dataclass_target() -> None:
    record = PydanticHydrator().hydrate(UserRecord, _from({"name": "Kristoffer", "score": "4.5"}))

    assert record == UserRecord(name="Kristoffer", age=None, score=4.5)


def test_dataclass_accepts_uploaded_file_values() -> None:
    upload = UploadedFile("cv.pdf", b"%PDF", "application/pdf")

    result = PydanticHydrator().hydrate(Upload, _from({"title": "CV", "attachment": upload}))

    assert result.attachment == upload


def test_instance_keeps_current_values_for_missing_fields() -> None:
    existing = UserEntity(name="Kristoffer", age=30, email="old@example.com")

    updated = PydanticHydrator().hydrate(existing, _from({"email": "new@example.com"}))

    assert updated == UserEntity(name="Kristoffer", age=30, email="new@example.com")
    assert updated is not existing
    assert existing.email == "old@example.com"


def test_dataclass_instance_is_not_mutated() -> None:
    existing = UserRecord(name="Kristoffer", age=30)

    updated = PydanticHydrator().hydrate(existing, _from({"age": "31"}))

    assert updated.age == 31
    assert existing.age == 30


def test_invalid_value_raises_field_value_error() -> None:
    with pytest.raises(FieldValueError) as exc:
        PydanticHydrator().hydrate(UserEntity, _from({"age": "thirty"}))

    assert exc.value.target == "UserEntity"
    assert exc.value.fields == ("age",)
    assert isinstance(exc.value, ValueError)


def test_missing_field_without_default_raises_field_value_error() -> None:
    with pytest.raises(FieldValueError) as exc:
        PydanticHydrator().hydrate(Account, _from({}))

    assert "username" in exc.value.fields


def test_unfilled_fields_without_default_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="requestentity.adapters.pydantic_hydrator")

    with pytest.raises(FieldValueError):
        PydanticHydrator().hydrate(Account, _from({"active": "1"}))

    assert "No value for Account fields without default: username" in caplog.text


def test_resolver_errors_propagate_unchanged() -> None:
    class Boom(Exception):
        pass

    def resolve(name: str) -> object:
        raise Boom(name)

    with pytest.raises(Boom, match="name"):
        PydanticHydrator().hydrate(UserEntity, resolve)


@pytest.mark.parametrize("target", [NotATarget, NotATarget(), int, "UserEntity"])
def test_unsupported_targets_are_rejected(target: object) -> None:
    with pytest.raises(UnsupportedTargetError):
        PydanticHydrator().hydrate(target, _from({}))
