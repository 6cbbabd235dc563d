"""A small composable rule engine.

A ``Validator`` is a list of rules. A rule is any callable taking the
instance and a ``RuleContext``; it reports problems with
``context.add_failure`` and may store conversion results with
``context.register_result``. ``rule_for`` / ``rule_for_each`` return a
``RuleBuilder`` that chains the common checks::

    validator = Validator(SignupForm)
    validator.rule_for(lambda x: x.name).not_empty()
    validator.rule_for(lambda x: x.email).ensure_result(EmailAddress, EmailAddress.try_create)
    validator.rule_for_each(lambda x: x.tags).must(str.isidentifier, "must be an identifier")
"""

import logging
import typing

from . import errors as _errors
from . import keys as _keys
from . import path as _path
from . import record as _record
from . import registry as _registry
from . import result as _result

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")


class FailureRecord(typing.NamedTuple):
    """One complaint produced by a rule.

    Attributes:
        path: Property path of the failing field ("" for the object itself)
        message: Error message
    """

    path: str
    message: str


class RuleContext:
    """State shared by the rules of one validation run.

    Attributes:
        instance: The object being validated
        registry: Where conversion results are registered
        failures: Failures reported so far, in order
        prefix: Path prepended to every path reported through this context
    """

    def __init__(
        self,
        instance: typing.Any,
        registry: _registry.ResultRegistry,
        failures: list[FailureRecord] | None = None,
        prefix: str = "",
    ) -> None:
        self.instance = instance
        self.registry = registry
        self.failures = failures if failures is not None else []
        self.prefix = prefix

    def full_path(self, path: str) -> str:
        return _path.join(self.prefix, path)

    def add_failure(self, path: str, message: str) -> None:
        self.failures.append(FailureRecord(self.full_path(path), message))

    def result_key(self, path: str, result_type: typing.Any) -> _keys.ResultKey:
        return _keys.ResultKey.for_type(self.full_path(path), result_type)

    def register_result(
        self, path: str, result_type: typing.Any, outcome: _result.Result[typing.Any]
    ) -> None:
        """Register a conversion result for a field.

        Raises:
            ContractViolationError: If a result of this type is already
                registered for the field
        """
        self.registry.register(self.result_key(path, result_type), outcome)

    def nested(self, instance: typing.Any, path: str) -> "RuleContext":
        """Context for a child validator; shares failures and registry."""
        return RuleContext(instance, self.registry, self.failures, self.full_path(path))


Rule = typing.Callable[[typing.Any, RuleContext], None]
Step = typing.Callable[[typing.Any, str, RuleContext], None]


class ValidationRule:
    """A predicate check on a field value.

    Attributes:
        validator: Function that takes value and returns bool
        message: Error message if validation fails
    """

    def __init__(
        self, validator: typing.Callable[[typing.Any], bool], message: str
    ) -> None:
        """Initialize ValidationRule.

        Args:
            validator: Function(value) -> bool (True if valid)
            message: Error message if validation fails
        """
        self.validator = validator
        self.message = message

    def validate(self, value: typing.Any) -> tuple[bool, str]:
        """Validate a value.

        Args:
            value: Value to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            is_valid = bool(self.validator(value))
            return (is_valid, "" if is_valid else self.message)
        except Exception as e:
            return (False, f"{self.message}: {str(e)}")

    def __call__(self, value: typing.Any, path: str, context: RuleContext) -> None:
        is_valid, error_msg = self.validate(value)
        if not is_valid:
            context.add_failure(path, error_msg)


class ResultRule:
    """Runs a conversion and registers its outcome for later retrieval.

    The outcome is registered whether it succeeded or not; every error of a
    failed outcome is also reported as a failure on the field.

    Attributes:
        result_type: Type the conversion produces
        conversion: Function(value) -> Result
        optional: If True, the outcome is registered as ``Optional[result_type]``
            and None values are not converted (they register ``ok(None)``)
    """

    def __init__(
        self,
        result_type: typing.Any,
        conversion: typing.Callable[[typing.Any], _result.Result[typing.Any]],
        optional: bool = False,
    ) -> None:
        self.result_type = _keys.optional_of(result_type) if optional else result_type
        self.conversion = conversion
        self.optional = optional

    def __call__(self, value: typing.Any, path: str, context: RuleContext) -> None:
        key = context.result_key(path, self.result_type)
        if key in context.registry:
            raise _errors.ContractViolationError(
                f"ensure_result has already been called for '{key}'. "
                "Only one call is allowed"
            )

        if self.optional and value is None:
            outcome: _result.Result[typing.Any] = _result.Result.ok(None)
        else:
            outcome = self.conversion(value)
        if not isinstance(outcome, _result.Result):
            raise _errors.ContractViolationError(
                f"Conversion for '{key}' returned {type(outcome).__name__}, "
                "expected Result"
            )

        context.register_result(path, self.result_type, outcome)
        for error in outcome.errors:
            context.add_failure(path, error.message)


class ChildValidatorRule:
    """Runs another validator on a field value, nesting its paths."""

    def __init__(self, validator: "Validator[typing.Any]") -> None:
        self.validator = validator

    def __call__(self, value: typing.Any, path: str, context: RuleContext) -> None:
        if value is None:
            return
        self.validator.validate(value, context.nested(value, path))


class RuleBuilder:
    """Chain of checks applied to one field (or to each element of it)."""

    def __init__(
        self, accessor: _path.Accessor, each: bool = False, priority: int = 0
    ) -> None:
        """Initialize RuleBuilder.

        Args:
            accessor: Field the rules apply to
            each: Apply the checks to every element of the field
            priority: Execution order within a validator (lower runs first)

        Raises:
            ContractViolationError: If the accessor does not resolve to a path
        """
        resolved = _path.resolve(accessor)
        if resolved.is_failed:
            raise _errors.ContractViolationError(
                f"Can not build a rule for {accessor!r}: {'; '.join(resolved.messages)}"
            )
        self.accessor = accessor
        self.path = "" if resolved.value == _path.ROOT else resolved.value
        self.each = each
        self.priority = priority
        self.steps: list[Step] = []
        self.condition: typing.Callable[[typing.Any], bool] | None = None

    def must(
        self, predicate: typing.Callable[[typing.Any], bool], message: str
    ) -> "RuleBuilder":
        self.steps.append(ValidationRule(predicate, message))
        return self

    def not_none(self, message: str = "must not be None") -> "RuleBuilder":
        return self.must(lambda value: value is not None, message)

    def not_empty(self, message: str = "must not be empty") -> "RuleBuilder":
        def _not_empty(value: typing.Any) -> bool:
            if value is None:
                return False
            if isinstance(value, str):
                return bool(value.strip())
            if hasattr(value, "__len__"):
                return len(value) > 0
            return True

        return self.must(_not_empty, message)

    def greater_than(self, limit: typing.Any, message: str | None = None) -> "RuleBuilder":
        return self.must(
            lambda value: value is not None and value > limit,
            message or f"must be greater than {limit}",
        )

    def ensure_result(
        self,
        result_type: typing.Any,
        conversion: typing.Callable[[typing.Any], _result.Result[typing.Any]],
    ) -> "RuleBuilder":
        """Convert the value and register the outcome under ``result_type``."""
        self.steps.append(ResultRule(result_type, conversion))
        return self

    def ensure_optional_result(
        self,
        result_type: typing.Any,
        conversion: typing.Callable[[typing.Any], _result.Result[typing.Any]],
    ) -> "RuleBuilder":
        """Like ``ensure_result`` for a field that may be None.

        The outcome is registered under ``Optional[result_type]``; retrieve it
        with that type.
        """
        self.steps.append(ResultRule(result_type, conversion, optional=True))
        return self

    def set_validator(self, validator: "Validator[typing.Any]") -> "RuleBuilder":
        """Validate a nested object with its own validator. None values are skipped."""
        self.steps.append(ChildValidatorRule(validator))
        return self

    def when(self, condition: typing.Callable[[typing.Any], bool]) -> "RuleBuilder":
        """Only run this chain when ``condition(instance)`` is true."""
        self.condition = condition
        return self

    def __call__(self, instance: typing.Any, context: RuleContext) -> None:
        if self.condition is not None and not self.condition(instance):
            return
        try:
            value = _record.read(instance, self.accessor)
        except (AttributeError, KeyError, IndexError, TypeError) as e:
            context.add_failure(self.path, f"could not be read: {e}")
            return

        if not self.each:
            self._apply(value, self.path, context)
            return
        if value is None:
            return
        try:
            elements = iter(value)
        except TypeError:
            context.add_failure(
                self.path, f"must be a sequence, got {type(value).__name__}"
            )
            return
        for position, element in enumerate(elements):
            self._apply(element, _path.index(self.path, position), context)

    def _apply(self, value: typing.Any, path: str, context: RuleContext) -> None:
        for step in self.steps:
            step(value, path, context)


class Validator(typing.Generic[T]):
    """Validates instances of one type against a collection of rules.

    Attributes:
        model: Validated type; its name labels the error tree
        rules: Rules in execution order
    """

    def __init__(
        self, model: type | None = None, rules: typing.Iterable[Rule] = ()
    ) -> None:
        self.model = model
        self._rules: list[Rule] = list(rules)

    @property
    def rules(self) -> list[Rule]:
        return sorted(self._rules, key=lambda rule: getattr(rule, "priority", 0))

    def rule_for(self, accessor: _path.Accessor, priority: int = 0) -> RuleBuilder:
        builder = RuleBuilder(accessor, priority=priority)
        self._rules.append(builder)
        return builder

    def rule_for_each(self, accessor: _path.Accessor, priority: int = 0) -> RuleBuilder:
        builder = RuleBuilder(accessor, each=True, priority=priority)
        self._rules.append(builder)
        return builder

    def add_rule(self, rule: Rule) -> "Validator[T]":
        """Add a plain rule function ``(instance, context) -> None``."""
        self._rules.append(rule)
        return self

    def include(self, other: "Validator[T]") -> "Validator[T]":
        """Add every rule of another validator for the same type."""
        self._rules.extend(other._rules)
        return self

    def type_name(self, instance: typing.Any) -> str:
        if self.model is not None:
            return self.model.__name__
        return type(instance).__name__

    def validate(self, instance: T, context: RuleContext) -> list[FailureRecord]:
        """Evaluate every rule once, in priority order.

        Returns:
            All failures reported through ``context``
        """
        for rule in self.rules:
            rule(instance, context)
        logger.debug(
            "Evaluated %d rules for %s, %d failures",
            len(self._rules),
            self.type_name(instance),
            len(context.failures),
        )
        return context.failures
