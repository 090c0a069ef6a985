"""Target types shared by decoding tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from requestentity.domain.request_data import UploadedFile

USER_INPUT: dict[str, object] = {
    "name": "Kristoffer",
    "age": "30",
    "email": "kristoffer@example.com",
}


class UserEntity(BaseModel):
    name: str = ""
    age: int | None = None
    email: str = ""


class Account(BaseModel):
    username: str
    display_name: str = Field(default="", alias="displayName")
    active: bool = False


class Address(BaseModel):
    city: str
    zip: str = ""


class Profile(BaseModel):
    name: str = ""
    tags: list[str] = Field(default_factory=list)
    address: Address | None = None


@dataclass
class UserRecord:
    name: str = ""
    age: int | None = None
    score: float = 0.0


@dataclass
class Upload:
    title: str
    attachment: UploadedFile | None = None
    labels: list[str] = field(default_factory=list)


class NotATarget:
    def __init__(self, name: str = "") -> None:
        self.name = name
