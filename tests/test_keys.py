"""Tests for ensured.keys module."""

import datetime
import decimal
import typing

from ensured.keys import (
    ResultKey,
    default_for,
    display_name,
    is_optional,
    optional_of,
    type_name,
)
from ensured.path import ROOT

from samples import EmailAddress, NonEmptyString


def test_type_name_builtin_and_classes():
    """Test builtins use their bare name, other classes are module qualified."""
    assert type_name(int) == "int"
    assert type_name(datetime.date) == "datetime.date"
    assert type_name(EmailAddress) == "samples.EmailAddress"


def test_type_name_optional_spellings_are_equal():
    """Test Optional[X], X | None and Union[X, None] share one identity."""
    expected = "Optional[samples.EmailAddress]"

    assert type_name(typing.Optional[EmailAddress]) == expected
    assert type_name(EmailAddress | None) == expected
    assert type_name(typing.Union[None, EmailAddress]) == expected


def test_type_name_nullable_differs_from_plain():
    """Test the nullable form of a type is a different identity."""
    assert type_name(datetime.date) != type_name(datetime.date | None)


def test_type_name_union_order_does_not_matter():
    """Test union members are sorted."""
    assert type_name(int | str) == type_name(str | int) == "Union[int, str]"


def test_type_name_generics():
    """Test parametrised generics include their arguments."""
    assert type_name(list[int]) == "list[int]"
    assert type_name(typing.List[int]) == "list[int]"


def test_is_optional_and_optional_of():
    """Test nullable detection and construction."""
    assert is_optional(int | None)
    assert not is_optional(int)
    assert not is_optional(int | str)
    assert type_name(optional_of(int)) == "Optional[int]"
    assert optional_of(int | None) == (int | None)


def test_display_name():
    """Test short names for diagnostics."""
    assert display_name(EmailAddress) == "EmailAddress"
    assert display_name(typing.Optional[datetime.date]) == "Optional[date]"
    assert display_name(int | str) == display_name(str | int) == "Union[int, str]"
    assert display_name(typing.Optional[str | int]) == "Optional[Union[int, str]]"


def test_default_for():
    """Test zero values per type."""
    assert default_for(int) == 0
    assert default_for(str) == ""
    assert default_for(datetime.date) == datetime.date(1, 1, 1)
    assert default_for(datetime.datetime) == datetime.datetime.min
    assert default_for(decimal.Decimal) == decimal.Decimal(0)
    assert default_for(datetime.date | None) is None
    assert default_for(NonEmptyString) is None


def test_result_key_generation_is_stable():
    """Test generating a key twice yields equal keys."""
    first = ResultKey.for_type("emails[0]", EmailAddress)
    second = ResultKey.for_type("emails[0]", EmailAddress)

    assert first == second
    assert hash(first) == hash(second)
    assert str(first) == "emails[0]:samples.EmailAddress"


def test_result_key_root_and_index_are_significant():
    """Test the empty path maps to the root marker and indices distinguish keys."""
    assert ResultKey.for_type("", int).path == ROOT
    assert ResultKey.for_type("", int) == ResultKey.for_type(ROOT, int)
    assert ResultKey.for_type("emails[0]", str) != ResultKey.for_type("emails[1]", str)
    assert ResultKey.for_type("born", datetime.date) != ResultKey.for_type(
        "born", datetime.date | None
    )
