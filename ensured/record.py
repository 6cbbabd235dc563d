"""Reading field values from validated records.

Records may be dictionaries, Pydantic models or plain objects.
"""

import typing

from . import path as _path


def get_field(record: typing.Any, segment: str) -> typing.Any:
    """Read one path segment from a record.

    Args:
        record: Dictionary, sequence, Pydantic model or plain object
        segment: Member name or ``[n]`` index segment

    Returns:
        The value of the segment. Missing dictionary keys read as None.

    Raises:
        AttributeError: If an object has no such attribute
        IndexError: If a sequence is shorter than the index
        TypeError: If the record can not be indexed
    """
    index = _path.INDEX_PATTERN.fullmatch(segment)
    if index is not None:
        return record[int(index.group(1))]
    if isinstance(record, dict):
        return record.get(segment)
    return getattr(record, segment)


def read(record: typing.Any, accessor: _path.Accessor) -> typing.Any:
    """Read the value an accessor points at.

    Callables are applied to the record; path strings are walked segment by
    segment with ``get_field``.
    """
    if callable(accessor):
        return accessor(record)
    value = record
    for segment in _path.segments(accessor):
        value = get_field(value, segment)
    return value
