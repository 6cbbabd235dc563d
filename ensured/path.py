"""Property paths derived from accessors.

An accessor is either a callable such as ``lambda x: x.address.city`` or a
path string such as ``"address.city"``. Callables are evaluated once against
a recording proxy that remembers every member access and integer subscript;
the recorded segments become the path.

Supported:
- ``lambda x: x`` -> ``ROOT``
- ``lambda x: x.address.city`` -> ``"address.city"``
- ``lambda x: x.emails[0]`` -> ``"emails[0]"``
- ``lambda x: x["address"]["city"]`` -> ``"address.city"``
- ``lambda x: +x.total`` (and ``-``, ``~``) -> ``"total"``

Anything else, in particular method calls such as ``x.name.upper()`` and
conditions such as ``x.a or x.b``, fail with ``UnsupportedPathExpression``.
No partial path is ever returned.
"""

import re
import typing

from . import errors as _errors
from . import result as _result

ROOT = "Root"
"""Path of the validated object itself."""

MEMBER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
INDEX_PATTERN = re.compile(r"\[(\d+)\]")
PATH_PATTERN = re.compile(
    r"(?:[A-Za-z_][A-Za-z0-9_]*|\[\d+\])(?:\.[A-Za-z_][A-Za-z0-9_]*|\[\d+\])*"
)
SEGMENT_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*|\[\d+\]")

_METHOD_CALL = "Unsupported method call expression in member path"


class _PathRecorder:
    """Stand-in for the validated object while an accessor is evaluated.

    Every attribute that is not a dunder is recorded, including names such as
    ``_segments``; the recorder's own state is read with ``_state``.
    """

    __slots__ = ("_segments", "_error")

    def __init__(self, segments: tuple[str, ...] = (), error: str | None = None):
        object.__setattr__(self, "_segments", segments)
        object.__setattr__(self, "_error", error)

    def __getattribute__(self, name: str) -> typing.Any:
        if name.startswith("__") and name.endswith("__"):
            return object.__getattribute__(self, name)
        return _extend(self, name)

    def __getitem__(self, item: typing.Any) -> "_PathRecorder":
        if isinstance(item, str) and MEMBER_PATTERN.fullmatch(item):
            return _extend(self, item)
        if isinstance(item, int) and not isinstance(item, bool) and item >= 0:
            return _extend(self, f"[{item}]")
        return _fail(self, f"Unsupported subscript {item!r} in member path")

    def __call__(self, *args: typing.Any, **kwargs: typing.Any) -> "_PathRecorder":
        return _fail(self, _METHOD_CALL)

    def __bool__(self) -> typing.NoReturn:
        raise TypeError("member paths can not be used as conditions")

    def __iter__(self) -> typing.NoReturn:
        raise TypeError("member paths can not be iterated")

    def __setattr__(self, name: str, value: typing.Any) -> typing.NoReturn:
        raise TypeError("member paths are read only")

    # unary operators are transparent
    def __pos__(self) -> "_PathRecorder":
        return self

    def __neg__(self) -> "_PathRecorder":
        return self

    def __invert__(self) -> "_PathRecorder":
        return self


def _state(recorder: _PathRecorder) -> tuple[tuple[str, ...], str | None]:
    return (
        object.__getattribute__(recorder, "_segments"),
        object.__getattribute__(recorder, "_error"),
    )


def _extend(recorder: _PathRecorder, segment: str) -> _PathRecorder:
    recorded, error = _state(recorder)
    if error is not None:
        return recorder
    return _PathRecorder(recorded + (segment,))


def _fail(recorder: _PathRecorder, error: str) -> _PathRecorder:
    recorded, previous = _state(recorder)
    return _PathRecorder(recorded, previous or error)


Accessor = typing.Callable[[typing.Any], typing.Any] | str


def join(*parts: str) -> str:
    """Join path parts, keeping index segments attached to their member.

    >>> join("emails", "[0]")
    'emails[0]'
    >>> join("address", "city")
    'address.city'
    """
    joined = ""
    for part in parts:
        if not part:
            continue
        if not joined or part.startswith("["):
            joined += part
        else:
            joined += "." + part
    return joined


def index(path: str, position: int) -> str:
    """Path of one element of a sequence field."""
    return f"{path}[{position}]"


def segments(path: str) -> list[str]:
    """Split a path into member names and ``[n]`` index segments."""
    if not path or path == ROOT:
        return []
    return SEGMENT_PATTERN.findall(path)


def is_well_formed(path: str) -> bool:
    return PATH_PATTERN.fullmatch(path) is not None


def resolve(accessor: Accessor) -> _result.Result[str]:
    """Turn an accessor into a canonical property path.

    Args:
        accessor: Callable taking the validated object, or a path string

    Returns:
        ``ok(ROOT)`` for the identity accessor, ``ok("a.b[0]")`` for member
        chains, or a failure carrying ``UnsupportedPathExpression``.
        Never raises.
    """
    if isinstance(accessor, str):
        if not accessor or accessor == ROOT:
            return _result.Result.ok(ROOT)
        if is_well_formed(accessor):
            return _result.Result.ok(accessor)
        return _unsupported(f"Malformed member path {accessor!r}")
    if not callable(accessor):
        return _unsupported(f"Unsupported accessor {accessor!r}")

    try:
        recorded = accessor(_PathRecorder())
    except Exception as e:
        return _unsupported(f"Unsupported expression in member path: {e}")

    if not isinstance(recorded, _PathRecorder):
        return _unsupported("Unsupported expression type")
    recorded_segments, error = _state(recorded)
    if error is not None:
        return _unsupported(error)
    if not recorded_segments:
        return _result.Result.ok(ROOT)
    return _result.Result.ok(join(*recorded_segments))


def _unsupported(message: str) -> _result.Result[str]:
    return _result.Result.fail(_errors.UnsupportedPathExpression(message))


def strip_indices(path: str) -> str:
    """Remove ``[n]`` segments: ``emails[1].domain`` -> ``emails.domain``."""
    return INDEX_PATTERN.sub("", path)


def root_segment(path: str) -> str:
    """Text before the first ``.`` or ``[``, or the whole path."""
    match = re.match(r"[^.\[]+", path)
    if match is None:
        # path starts with an index, e.g. "[0].name"
        leading = INDEX_PATTERN.match(path)
        return leading.group(0) if leading else path
    return match.group(0)


def is_nested(path: str) -> bool:
    """Whether the path goes below its root member (``a.b``, not ``a`` or ``a[0]``)."""
    return "." in path


def relative_path(path: str, parent: str) -> str:
    """Path made relative to a parent: ``address.city`` under ``address`` -> ``city``.

    Index segments stay with their member, so ``emails[1]`` under ``emails``
    is still ``emails[1]``. Paths that are not below ``parent`` are returned
    unchanged.
    """
    if path.startswith(parent + "."):
        return path[len(parent) + 1 :]
    return path


def is_within(path: str, prefix: str) -> bool:
    """Segment aware prefix test; ``ROOT`` contains every path.

    ``emails`` contains ``emails`` and ``emails.domain`` but not ``emailsBackup``.
    """
    if prefix == ROOT:
        return True
    return (
        path == prefix
        or path.startswith(prefix + ".")
        or path.startswith(prefix + "[")
    )
