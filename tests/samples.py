"""Sample domain types used across the ensured tests."""

import dataclasses

import pydantic

from ensured.result import Result


@dataclasses.dataclass(frozen=True)
class NonEmptyString:
    """Sample domain value: a string with visible characters."""

    value: str

    @classmethod
    def try_create(cls, value: str) -> Result["NonEmptyString"]:
        if value is None or not value.strip():
            return Result.fail("must not be empty")
        return Result.ok(cls(value))


@dataclasses.dataclass(frozen=True)
class EmailAddress:
    """Sample domain value: something that looks like an e-mail address."""

    value: str

    @classmethod
    def try_create(cls, value: str) -> Result["EmailAddress"]:
        local, _, domain = value.strip().partition("@")
        if not local or "." not in domain or domain.endswith("."):
            return Result.fail(f"'{value}' is not a valid email address")
        return Result.ok(cls(value.strip()))


class SampleDto(pydantic.BaseModel):
    """Record with a plain field, a number and a collection."""

    property_one: str
    property_two: int
    collection: list[str] = []


class NullableDto(pydantic.BaseModel):
    """Record with one optional field."""

    property_one: str | None = None


class Address(pydantic.BaseModel):
    street: str
    city: str


class Customer(pydantic.BaseModel):
    name: str
    age: int
    address: Address | None = None
    emails: list[str] = []


