"""Validation runs and typed retrieval of the results they registered.

``validate_to_context_result`` runs a validator once and returns a
``ValidationContextResult``: the outcome of the run plus the registry of
results that rules stored on the way. Which accessors may raise:

==========================  ==========================================
``expect_result``           never raises; missing results are failures
``expect_results``          never raises; no matches is a failure
``expect_value``            raises ContractViolationError if missing or failed
``expect_values``           raises ContractViolationError if missing or failed
``expect_value_or_default`` never raises; missing or failed gives the default
==========================  ==========================================

``expect_value_or_default`` is the unsafe one. It can not tell "field was
absent" from "result was registered under another type": a result stored as
``Optional[date]`` read back as ``date`` silently yields ``date.min``.
"""

import logging
import typing

from . import errors as _errors
from . import keys as _keys
from . import options as _options
from . import path as _path
from . import registry as _registry
from . import result as _result
from . import rules as _rules
from . import tree as _tree

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")
R = typing.TypeVar("R")

_MISSING: typing.Any = object()


class ValidationContextResult(typing.NamedTuple):
    """Outcome of one validation run and the results registered during it.

    Attributes:
        result: ``ok(instance)`` (or the transformed value) if no rule failed,
            otherwise a failure holding one ``ObjectValidationError``
        registry: Results registered by rules during the run
        failures: Raw failures in the order rules reported them
        type_name: Name of the validated type
    """

    result: _result.Result[typing.Any]
    registry: _registry.ResultRegistry
    failures: tuple[_rules.FailureRecord, ...]
    type_name: str

    @property
    def is_valid(self) -> bool:
        return self.result.is_success

    @property
    def error(self) -> _errors.ObjectValidationError | None:
        """The failure payload, or None for a successful run."""
        if self.result.is_success:
            return None
        return typing.cast(_errors.ObjectValidationError, self.result.errors[0])

    def expect_result(
        self, result_type: typing.Any, accessor: _path.Accessor
    ) -> _result.Result[typing.Any]:
        """Result registered for a field under exactly ``result_type``.

        Args:
            result_type: Type the result was registered as
            accessor: Field the result was registered for

        Returns:
            The stored result, or a failure naming the path and type when the
            accessor is unsupported or nothing was registered
        """
        resolved = _path.resolve(accessor)
        if resolved.is_failed:
            return resolved
        key = _keys.ResultKey.for_type(resolved.value, result_type)
        outcome = self.registry.lookup(key)
        if outcome is None:
            logger.debug("No result registered for %s", key)
            return _result.Result.fail(
                f"No result found for key '{resolved.value}' "
                f"and type '{_keys.display_name(result_type)}'"
            )
        return outcome

    def expect_value(
        self, result_type: typing.Any, accessor: _path.Accessor
    ) -> typing.Any:
        """Value of a registered result.

        Raises:
            ContractViolationError: If no result was registered for the field
                under ``result_type``, or the registered result failed
        """
        return self.expect_result(result_type, accessor).value

    def expect_value_or_default(
        self,
        result_type: typing.Any,
        accessor: _path.Accessor,
        default: typing.Any = _MISSING,
    ) -> typing.Any:
        """Value of a registered result, or a default.

        Missing and failed results both give ``default`` when passed,
        otherwise the zero value of ``result_type`` (None for optional types,
        see ``ensured.keys.default_for``). Meant for optional fields; read
        such fields with the ``Optional[...]`` type they were registered as.
        """
        outcome = self.expect_result(result_type, accessor)
        if outcome.is_success:
            return outcome.value
        return _keys.default_for(result_type) if default is _MISSING else default

    def expect_results(
        self, result_type: typing.Any, accessor: _path.Accessor
    ) -> _result.Result[list[typing.Any]]:
        """All results of ``result_type`` registered for elements of a sequence field.

        Index segments are ignored, so results registered for ``emails[0]``,
        ``emails[1]``, ... are all found through ``lambda x: x.emails``.

        Returns:
            ``ok`` with the values in registration order, a failure carrying
            every underlying message if any element failed, or a failure
            naming the path and type if nothing matched
        """
        resolved = _path.resolve(accessor)
        if resolved.is_failed:
            return resolved
        matches = self.registry.lookup_by_prefix(
            _keys.ResultKey.for_type(resolved.value, result_type)
        )
        if not matches:
            return _result.Result.fail(
                f"No results found for '{resolved.value}' "
                f"and type '{_keys.display_name(result_type)}'"
            )
        return _result.merge(matches)

    def expect_values(
        self, result_type: typing.Any, accessor: _path.Accessor
    ) -> list[typing.Any]:
        """Values of ``expect_results``.

        Raises:
            ContractViolationError: If nothing matched or any element failed
        """
        return self.expect_results(result_type, accessor).value

    def to_result(
        self, build: typing.Callable[["ValidationContextResult"], R]
    ) -> _result.Result[R]:
        """Build a value from the registered results of a successful run.

        ``build`` is only called when the run succeeded, so it may use
        ``expect_value`` freely for fields guarded by ``ensure_result``.
        """
        return self.result.bind(lambda _: _result.Result.ok(build(self)))


class ValidationSession(typing.Generic[T]):
    """One validation run: NotRun -> Evaluated. Not reusable.

    Attributes:
        validator: Rules to evaluate
        registry: Registry owned by this run
        outcome: Set once ``run`` has completed
    """

    def __init__(self, validator: _rules.Validator[T]) -> None:
        self.validator = validator
        self.registry = _registry.ResultRegistry()
        self.outcome: ValidationContextResult | None = None

    @property
    def has_run(self) -> bool:
        return self.outcome is not None

    def run(
        self,
        instance: T,
        *,
        transform: typing.Callable[[T], typing.Any] | None = None,
    ) -> ValidationContextResult:
        """Evaluate every rule once against ``instance``.

        Args:
            instance: Object to validate
            transform: Applied to ``instance`` to produce the success value

        Returns:
            The outcome of the run and its registry

        Raises:
            ContractViolationError: If the session already ran, or a rule
                registered two results under the same key
        """
        if self.outcome is not None:
            raise _errors.ContractViolationError(
                "ValidationSession.run may only be called once"
            )

        type_name = self.validator.type_name(instance)
        logger.debug("Validating %s", type_name)
        context = _rules.RuleContext(instance, self.registry)
        failures = tuple(self.validator.validate(instance, context))

        if failures:
            result = _result.Result.fail(
                _tree.to_validation_error(type_name, failures)
            )
            logger.debug(
                "Validation of %s failed with %d failures", type_name, len(failures)
            )
        else:
            result = _result.Result.ok(
                instance if transform is None else transform(instance)
            )

        self.outcome = ValidationContextResult(
            result, self.registry, failures, type_name
        )
        return self.outcome


def validate_to_context_result(
    validator: _rules.Validator[T],
    instance: T,
    *,
    transform: typing.Callable[[T], typing.Any] | None = None,
    error_option: _options.ErrorOption = _options.ErrorOption.RETURN,
) -> ValidationContextResult:
    """Validate an instance in a fresh session.

    Args:
        validator: Rules to evaluate
        instance: Object to validate
        transform: Applied to ``instance`` to produce the success value
        error_option: RETURN (default) keeps failures in the result,
            RAISE raises the ObjectValidationError instead

    Returns:
        ValidationContextResult for typed retrieval of registered results

    Raises:
        ObjectValidationError: If the run failed and error_option is RAISE
        ContractViolationError: If a rule registered two results under one key
    """
    outcome = ValidationSession(validator).run(instance, transform=transform)
    if error_option == _options.ErrorOption.RAISE and outcome.error is not None:
        raise outcome.error
    return outcome


def validate_to_result(
    validator: _rules.Validator[T],
    instance: T,
    *,
    transform: typing.Callable[[T], typing.Any] | None = None,
    error_option: _options.ErrorOption = _options.ErrorOption.RETURN,
) -> _result.Result[typing.Any]:
    """Validate an instance and return only the outcome."""
    return validate_to_context_result(
        validator, instance, transform=transform, error_option=error_option
    ).result
