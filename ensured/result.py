"""Success-or-failure values passed between rules, sessions and callers."""

import typing

from . import errors as _errors

T = typing.TypeVar("T")
U = typing.TypeVar("U")


class Result(typing.Generic[T]):
    """Either a successful value or a non-empty sequence of errors.

    Build with ``Result.ok(value)`` or ``Result.fail(*errors)``. Plain strings
    passed to ``fail`` are wrapped in ``Error``.

    A result is truthy when successful, so ``if not result:`` reads naturally.
    """

    __slots__ = ("_value", "_errors")

    def __init__(
        self, value: T | None = None, errors: typing.Iterable[_errors.Error] = ()
    ) -> None:
        self._value = value
        self._errors = tuple(errors)

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value)

    @classmethod
    def fail(cls, *errors: _errors.Error | str) -> "Result[typing.Any]":
        if not errors:
            raise ValueError("A failed Result needs at least one error")
        return cls(
            None,
            (e if isinstance(e, _errors.Error) else _errors.Error(str(e)) for e in errors),
        )

    @property
    def is_success(self) -> bool:
        return not self._errors

    @property
    def is_failed(self) -> bool:
        return bool(self._errors)

    @property
    def errors(self) -> tuple[_errors.Error, ...]:
        return self._errors

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self._errors]

    @property
    def value(self) -> T:
        """The successful value.

        Raises:
            ContractViolationError: If the result failed. Check ``is_success``
                first, or use ``value_or_default``.
        """
        if self._errors:
            raise _errors.ContractViolationError(
                "Result is in failed state. Value can not be accessed. Errors: "
                + "; ".join(self.messages)
            )
        return typing.cast(T, self._value)

    @property
    def value_or_default(self) -> T | None:
        """The value if successful, otherwise None."""
        return None if self._errors else self._value

    def map(self, func: typing.Callable[[T], U]) -> "Result[U]":
        """Transform the value of a successful result; failures pass through."""
        if self._errors:
            return Result(None, self._errors)
        return Result.ok(func(typing.cast(T, self._value)))

    def bind(self, func: typing.Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain a function that itself returns a Result."""
        if self._errors:
            return Result(None, self._errors)
        return func(typing.cast(T, self._value))

    def __bool__(self) -> bool:
        return self.is_success

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._errors == other._errors and self._value == other._value

    def __repr__(self) -> str:
        if self._errors:
            return f"Result.fail({', '.join(repr(e) for e in self._errors)})"
        return f"Result.ok({self._value!r})"


def merge(results: typing.Iterable[Result[T]]) -> Result[list[T]]:
    """Combine results into one.

    Args:
        results: Results to combine, in order

    Returns:
        ``ok`` with every value in order when all succeeded, otherwise a
        failure carrying the errors of every failed result in order
    """
    results = list(results)
    errors = [error for result in results for error in result.errors]
    if errors:
        return Result(None, errors)
    return Result.ok([result.value for result in results])
