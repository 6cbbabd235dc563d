"""Correlate rule-based field validation with typed results.

Rules run against an input object; failures are folded into a nested error
tree, and conversions performed by rules (``ensure_result``) are stored so
calling code can retrieve the typed values after validation completes.
"""

__version__ = "0.1.0"

from ensured.result import Result, merge
from ensured.errors import (
    Error,
    ValidationError,
    ObjectValidationError,
    UnsupportedPathExpression,
    ContractViolationError,
    FieldError,
    ObjectError,
    ErrorNode,
)
from ensured.path import ROOT, resolve
from ensured.keys import ResultKey
from ensured.registry import ResultRegistry
from ensured.rules import FailureRecord, RuleBuilder, RuleContext, Validator
from ensured.tree import build as build_error_tree
from ensured.options import ErrorOption
from ensured.convert import converter, try_cast, parse_date, parse_datetime
from ensured.session import (
    ValidationContextResult,
    ValidationSession,
    validate_to_context_result,
    validate_to_result,
)

__all__ = [
    "Result",
    "merge",
    "Error",
    "ValidationError",
    "ObjectValidationError",
    "UnsupportedPathExpression",
    "ContractViolationError",
    "FieldError",
    "ObjectError",
    "ErrorNode",
    "ROOT",
    "resolve",
    "ResultKey",
    "ResultRegistry",
    "FailureRecord",
    "RuleBuilder",
    "RuleContext",
    "Validator",
    "build_error_tree",
    "ErrorOption",
    "converter",
    "try_cast",
    "parse_date",
    "parse_datetime",
    "ValidationContextResult",
    "ValidationSession",
    "validate_to_context_result",
    "validate_to_result",
]
