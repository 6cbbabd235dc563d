"""Shared pytest fixtures for ensured tests."""

import typing

import pytest

from samples import Address, Customer, SampleDto


@pytest.fixture
def sample_dto() -> SampleDto:
    """Fixture providing a valid SampleDto."""
    return SampleDto(property_one="Value1", property_two=42, collection=["a", "b"])


@pytest.fixture
def customer() -> Customer:
    """Fixture providing a valid Customer."""
    return Customer(
        name="Alice",
        age=30,
        address=Address(street="1 Main St", city="Springfield"),
        emails=["alice@example.com", "a.smith@example.org"],
    )


@pytest.fixture
def customer_record() -> dict[str, typing.Any]:
    """Fixture providing a Customer as a plain dictionary."""
    return {
        "name": "Alice",
        "age": 30,
        "address": {"street": "1 Main St", "city": "Springfield"},
        "emails": ["alice@example.com"],
    }
