"""Tests for ensured.tree module."""

from ensured.errors import FieldError, ObjectError, ObjectValidationError
from ensured.rules import FailureRecord
from ensured.tree import build, to_validation_error


def test_single_flat_failure_is_field():
    """Test one failure on a top level field stays a Field node."""
    tree = build("Person", [FailureRecord("Name", "must not be empty")])

    assert tree == ObjectError(
        key="", children=(FieldError(key="Name", message="must not be empty"),)
    )


def test_failures_on_different_fields():
    """Test each failing top level field becomes its own node in order."""
    tree = build(
        "Person",
        [
            FailureRecord("Name", "must not be empty"),
            FailureRecord("Age", "must be greater than 0"),
        ],
    )

    assert tree.key == ""
    assert tree.children == (
        FieldError(key="Name", message="must not be empty"),
        FieldError(key="Age", message="must be greater than 0"),
    )


def test_single_nested_failure_is_object():
    """Test one failure below a top level field nests under that field."""
    tree = build("Customer", [FailureRecord("address.city", "must not be empty")])

    assert tree.children == (
        ObjectError(
            key="address",
            children=(FieldError(key="city", message="must not be empty"),),
        ),
    )


def test_multiple_failures_on_one_field_are_grouped():
    """Test several failures on the same field nest with unchanged keys."""
    tree = build(
        "Person",
        [
            FailureRecord("Name", "must not be empty"),
            FailureRecord("Name", "must start with a capital"),
        ],
    )

    assert tree.children == (
        ObjectError(
            key="Name",
            children=(
                FieldError(key="Name", message="must not be empty"),
                FieldError(key="Name", message="must start with a capital"),
            ),
        ),
    )


def test_indexed_failures():
    """Test a single indexed failure stays flat, several keep their indexed paths."""
    single = build("Customer", [FailureRecord("emails[1]", "is not valid")])
    several = build(
        "Customer",
        [
            FailureRecord("emails[0]", "is not valid"),
            FailureRecord("emails[2]", "is not valid"),
        ],
    )

    assert single.children == (FieldError(key="emails", message="is not valid"),)
    assert several.children == (
        ObjectError(
            key="emails",
            children=(
                FieldError(key="emails[0]", message="is not valid"),
                FieldError(key="emails[2]", message="is not valid"),
            ),
        ),
    )


def test_root_failures_group_under_type_name():
    """Test failures with an empty path are keyed by the type name."""
    tree = build("Order", [FailureRecord("", "totals do not add up")])

    assert tree.children == (FieldError(key="Order", message="totals do not add up"),)


def test_group_discovery_order_is_kept():
    """Test groups appear in the order their first failure was reported."""
    tree = build(
        "Customer",
        [
            FailureRecord("b", "1"),
            FailureRecord("a.x", "2"),
            FailureRecord("b", "3"),
        ],
    )

    assert [child.key for child in tree.children] == ["b", "a"]


def test_no_failures():
    """Test an empty failure list gives an empty root."""
    assert build("Person", []) == ObjectError(key="", children=())


def test_to_validation_error_renders_tree():
    """Test the failure payload renders as an indented textual tree."""
    error = to_validation_error(
        "Customer",
        [
            FailureRecord("name", "must not be empty"),
            FailureRecord("address.city", "must not be empty"),
        ],
    )

    assert isinstance(error, ObjectValidationError)
    assert error.message == (
        "Customer { name: must not be empty, address: { city: must not be empty } }"
    )
    assert error.tree.key == ""
    assert len(error.tree.children) == 2
