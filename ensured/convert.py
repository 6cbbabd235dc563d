"""Ready-made conversion functions for ``ensure_result``.

Each conversion takes a field value and returns a ``Result`` instead of
raising, so it can be registered directly::

    validator.rule_for(lambda x: x.born).ensure_result(date, converter(date))
    validator.rule_for(lambda x: x.age).ensure_optional_result(int, converter(int))
"""

import datetime
import typing

import dateutil.parser  # type: ignore[import-untyped]

from . import keys as _keys
from . import result as _result

CAST_ERRORS = (ValueError, TypeError, OverflowError, dateutil.parser.ParserError)


def cast_as(value: typing.Any, annotation: type) -> typing.Any:
    """Cast a value to the specified annotation type.

    Args:
        value: The value to cast
        annotation: The target type annotation

    Returns:
        The value cast to the annotation type

    Raises:
        ValueError: If value cannot be converted to annotation type
        TypeError: If casting fails
        dateutil.parser.ParserError: If date or datetime parsing fails
    """
    if isinstance(value, annotation) and not (
        annotation is datetime.date and isinstance(value, datetime.datetime)
    ):
        return value
    if annotation is datetime.datetime:
        return dateutil.parser.parse(value)
    if annotation is datetime.date:
        if isinstance(value, datetime.datetime):
            return value.date()
        return dateutil.parser.parse(value).date()
    return annotation(value)


def cast_as_union(value: typing.Any, union_annotation: typing.Any) -> typing.Any:
    """Cast a value to one of the types in a union.

    Args:
        value: The value to cast
        union_annotation: The union type annotation (Union[X, Y] or X | Y)

    Returns:
        The value cast to the first matching type in the union

    Raises:
        TypeError: If value cannot be cast to any type in the union
    """
    union_types = _keys.union_args(union_annotation)
    # values already of a member type are kept as is
    for _type in union_types:
        if isinstance(value, _type):
            return value
    attempted_types = []
    for _type in union_types:
        if _type is type(None):
            continue
        # Don't allow casting containers to scalar types
        if _type in (int, float, str, bool) and isinstance(
            value, (list, dict, tuple, set)
        ):
            attempted_types.append(_type)
            continue
        try:
            return cast_as(value, _type)
        except CAST_ERRORS:
            attempted_types.append(_type)
    raise TypeError(
        f"Failed to cast value {value!r} to any of the union types: "
        f"{', '.join(_keys.display_name(t) for t in attempted_types)}"
    )


def cast_as_annotation(value: typing.Any, annotation: typing.Any) -> typing.Any:
    """Cast a value according to its type annotation.

    Handles both simple types and union types.

    Raises:
        TypeError: If casting fails
        ValueError: If value cannot be converted
    """
    if _keys.is_union(annotation):
        return cast_as_union(value, annotation)
    return cast_as(value, annotation)


def try_cast(value: typing.Any, annotation: typing.Any) -> _result.Result[typing.Any]:
    """Cast a value, returning a failed Result instead of raising."""
    try:
        return _result.Result.ok(cast_as_annotation(value, annotation))
    except CAST_ERRORS:
        return _result.Result.fail(
            f"'{value}' is not a valid {_keys.display_name(annotation)}"
        )


def converter(
    annotation: typing.Any,
) -> typing.Callable[[typing.Any], _result.Result[typing.Any]]:
    """Conversion function casting field values to ``annotation``."""

    def convert(value: typing.Any) -> _result.Result[typing.Any]:
        return try_cast(value, annotation)

    convert.__name__ = f"convert_to_{_keys.display_name(annotation)}"
    return convert


def parse_date(value: str) -> _result.Result[datetime.date]:
    return try_cast(value, datetime.date)


def parse_datetime(value: str) -> _result.Result[datetime.datetime]:
    return try_cast(value, datetime.datetime)


def parse_optional_date(value: str | None) -> _result.Result[datetime.date | None]:
    """Parse a date, treating None and blank strings as an absent date."""
    if value is None or not str(value).strip():
        return _result.Result.ok(None)
    return parse_date(value)
