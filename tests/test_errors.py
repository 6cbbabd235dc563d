"""Tests for ensured.errors module."""

import pytest

from ensured.errors import (
    ContractViolationError,
    Error,
    FieldError,
    ObjectError,
    ObjectValidationError,
    UnsupportedPathExpression,
    ValidationError,
)


def test_error_equality():
    """Test errors compare by type and message."""
    assert Error("x") == Error("x")
    assert Error("x") != Error("y")
    assert ValidationError("x") != Error("x")
    assert len({Error("x"), Error("x")}) == 1


def test_field_and_object_rendering():
    """Test nodes render as key: message and key: { ... }."""
    node = ObjectError(
        key="address",
        children=(
            FieldError(key="street", message="must not be empty"),
            FieldError(key="city", message="must not be empty"),
        ),
    )

    assert str(FieldError(key="name", message="required")) == "name: required"
    assert str(node) == "address: { street: must not be empty, city: must not be empty }"
    assert str(ObjectError(children=(FieldError(key="a", message="b"),))) == "{ a: b }"


def test_nodes_are_frozen():
    """Test error nodes can not be modified after construction."""
    node = FieldError(key="name", message="required")

    with pytest.raises(Exception):
        node.message = "changed"


def test_node_round_trips_through_model_dump():
    """Test the discriminated union rebuilds nested nodes from dicts."""
    node = ObjectError(
        key="address", children=(FieldError(key="city", message="required"),)
    )

    dumped = node.model_dump()
    rebuilt = ObjectError.model_validate(dumped)

    assert isinstance(rebuilt.children[0], FieldError)
    assert rebuilt.model_dump() == dumped


def test_object_validation_error_is_raisable():
    """Test the failure payload can be raised and caught as ValueError."""
    error = ObjectValidationError(
        "Person", [FieldError(key="name", message="must not be empty")]
    )

    with pytest.raises(ValueError, match=r"Person \{ name: must not be empty \}"):
        raise error


def test_object_validation_error_to_dict():
    """Test the dictionary form used for API error bodies."""
    error = ObjectValidationError(
        "Person", [FieldError(key="name", message="must not be empty")]
    )

    assert error.to_dict() == {
        "type": "Person",
        "message": "Person { name: must not be empty }",
        "errors": [{"kind": "field", "key": "name", "message": "must not be empty"}],
    }


def test_error_families():
    """Test which errors are values and which are raised."""
    assert issubclass(UnsupportedPathExpression, Error)
    assert not issubclass(UnsupportedPathExpression, Exception)
    assert issubclass(ContractViolationError, RuntimeError)
    assert not issubclass(ContractViolationError, Error)
