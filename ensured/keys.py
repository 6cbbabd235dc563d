"""Result keys and type identities.

A stored result is addressed by the path of the field it was produced for and
by the identity of the result type. Python erases nothing at runtime, but
``Optional[X]``, ``X | None`` and ``typing.Union[X, None]`` are distinct
objects, so every type is reduced to a canonical name first.
"""

import datetime
import decimal
import types
import typing

from . import path as _path


def is_union(annotation: typing.Any) -> bool:
    """Check if annotation is a union type (Union[X, Y] or X | Y)."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union:
        return True
    # X | Y syntax
    return isinstance(annotation, types.UnionType) or origin is types.UnionType


def union_args(annotation: typing.Any) -> tuple[typing.Any, ...]:
    """Get the arguments from a union type annotation.

    Raises:
        ValueError: If annotation is not a union type
    """
    if not is_union(annotation):
        raise ValueError(f"{annotation} is not a union type")
    return typing.get_args(annotation)


def is_optional(annotation: typing.Any) -> bool:
    """Whether the annotation admits None (``Optional[X]`` or ``X | None``)."""
    return is_union(annotation) and type(None) in union_args(annotation)


def optional_of(annotation: typing.Any) -> typing.Any:
    """The nullable form of an annotation. Already optional types are returned as is."""
    if is_optional(annotation):
        return annotation
    return typing.Optional[annotation]


def type_name(annotation: typing.Any) -> str:
    """Canonical identity of a result type.

    ``module.QualName`` for classes (bare name for builtins),
    ``Optional[...]`` for nullable unions, ``Union[...]`` with sorted members
    for other unions, ``origin[args]`` for parametrised generics.
    """
    if annotation is None or annotation is type(None):
        return "None"
    if is_union(annotation):
        args = union_args(annotation)
        members = sorted(type_name(arg) for arg in args if arg is not type(None))
        inner = members[0] if len(members) == 1 else f"Union[{', '.join(members)}]"
        return f"Optional[{inner}]" if type(None) in args else inner
    origin = typing.get_origin(annotation)
    if origin is not None:
        args = ", ".join(type_name(arg) for arg in typing.get_args(annotation))
        return f"{type_name(origin)}[{args}]"
    if isinstance(annotation, type):
        if annotation.__module__ == "builtins":
            return annotation.__qualname__
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return repr(annotation)


def display_name(annotation: typing.Any) -> str:
    """Short name for diagnostics, e.g. ``EmailAddress`` or ``Optional[date]``.

    Union members are sorted, like in ``type_name``.
    """
    if is_union(annotation):
        args = union_args(annotation)
        members = sorted(display_name(arg) for arg in args if arg is not type(None))
        inner = members[0] if len(members) == 1 else f"Union[{', '.join(members)}]"
        return f"Optional[{inner}]" if type(None) in args else inner
    return getattr(annotation, "__name__", None) or repr(annotation)


_ZERO_VALUES: dict[typing.Any, typing.Any] = {
    datetime.datetime: datetime.datetime.min,
    datetime.date: datetime.date.min,
    datetime.time: datetime.time.min,
    decimal.Decimal: decimal.Decimal(0),
}


def default_for(annotation: typing.Any) -> typing.Any:
    """Zero value of a type.

    None for nullable types, the minimum for temporal types, ``T()`` for
    types constructible without arguments (``int`` -> 0, ``str`` -> ""),
    None otherwise.
    """
    if annotation is None or is_optional(annotation):
        return None
    if annotation in _ZERO_VALUES:
        return _ZERO_VALUES[annotation]
    if not callable(annotation):
        return None
    try:
        return annotation()
    except (TypeError, ValueError):
        # needs constructor arguments, behaves like a reference type
        return None


class ResultKey(typing.NamedTuple):
    """Identity of a stored result: (property path, result type name).

    Attributes:
        path: Property path; the root object is stored as ``ROOT``
        type_name: Canonical name of the result type (see ``type_name``)
    """

    path: str
    type_name: str

    @classmethod
    def for_type(cls, path: str, annotation: typing.Any) -> "ResultKey":
        """Build the key for a path and a result type."""
        return cls(path or _path.ROOT, type_name(annotation))

    def __str__(self) -> str:
        return f"{self.path}:{self.type_name}"
