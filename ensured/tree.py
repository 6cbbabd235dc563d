"""Folding flat field failures into an error tree."""

import typing

from . import errors as _errors
from . import path as _path
from . import rules as _rules


def build(
    type_name: str, failures: typing.Iterable[_rules.FailureRecord]
) -> _errors.ObjectError:
    """Group failures by the top level field they belong to.

    A group holding exactly one failure whose path does not go below its root
    member becomes a ``FieldError``. Any other group becomes an
    ``ObjectError`` with one ``FieldError`` per failure, keyed by the path
    relative to the group's root member. Index segments are kept, so
    ``emails[0]`` stays ``emails[0]``. Failures on the object itself (empty
    path) are grouped under ``type_name``.

    Args:
        type_name: Name of the validated type
        failures: Failures in the order the rule engine reported them

    Returns:
        Root node (empty key) whose children keep group discovery order
    """
    groups: dict[str, list[_rules.FailureRecord]] = {}
    for failure in failures:
        key = _path.root_segment(failure.path) if failure.path else type_name
        groups.setdefault(key, []).append(failure)

    return _errors.ObjectError(
        key="",
        children=tuple(_group_node(key, group) for key, group in groups.items()),
    )


def _group_node(
    key: str, failures: list[_rules.FailureRecord]
) -> _errors.FieldError | _errors.ObjectError:
    if len(failures) == 1 and not _path.is_nested(failures[0].path):
        return _errors.FieldError(key=key, message=failures[0].message)
    return _errors.ObjectError(
        key=key,
        children=tuple(
            _errors.FieldError(
                key=_path.relative_path(failure.path, key), message=failure.message
            )
            for failure in failures
        ),
    )


def to_validation_error(
    type_name: str, failures: typing.Iterable[_rules.FailureRecord]
) -> _errors.ObjectValidationError:
    """Build the tree and wrap it as the failure payload of a run."""
    return _errors.ObjectValidationError(type_name, build(type_name, failures).children)
