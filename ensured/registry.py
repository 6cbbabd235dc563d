"""Write-once store of results registered during one validation run."""

import logging
import threading
import typing

from . import errors as _errors
from . import keys as _keys
from . import path as _path
from . import result as _result

logger = logging.getLogger(__name__)


class ResultRegistry:
    """Results keyed by (path, result type), each key written at most once.

    One registry belongs to one validation run. Writes happen while rules
    are evaluated; reads happen afterwards. The check-then-insert in
    ``register`` holds a lock so the write-once guarantee also holds when
    rules are evaluated from several threads.
    """

    def __init__(self) -> None:
        self._entries: dict[_keys.ResultKey, _result.Result[typing.Any]] = {}
        self._lock = threading.Lock()

    def register(
        self, key: _keys.ResultKey, outcome: _result.Result[typing.Any]
    ) -> None:
        """Store a result under a key.

        Args:
            key: Path and result type the outcome belongs to
            outcome: Successful or failed result of a conversion

        Raises:
            ContractViolationError: If a result is already stored under ``key``,
                whether or not the two outcomes are equal
        """
        with self._lock:
            if key in self._entries:
                raise _errors.ContractViolationError(
                    f"A result has already been registered for '{key}'. "
                    "Only one registration is allowed"
                )
            self._entries[key] = outcome
        logger.debug(
            "Registered %s result for %s",
            "successful" if outcome.is_success else "failed",
            key,
        )

    def lookup(self, key: _keys.ResultKey) -> _result.Result[typing.Any] | None:
        """The result stored under ``key``, or None."""
        return self._entries.get(key)

    def lookup_by_prefix(
        self, key: _keys.ResultKey
    ) -> list[_result.Result[typing.Any]]:
        """Results of the same type stored at or below ``key.path``.

        Index segments are ignored on both sides, so ``emails`` matches
        ``emails[0]``, ``emails[1]`` and so on. Registration order is kept.
        """
        prefix = _path.strip_indices(key.path)
        return [
            outcome
            for stored, outcome in self._entries.items()
            if stored.type_name == key.type_name
            and _path.is_within(_path.strip_indices(stored.path), prefix)
        ]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> typing.Iterator[_keys.ResultKey]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"ResultRegistry({len(self._entries)} results)"
