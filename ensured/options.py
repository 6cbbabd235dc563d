"""Error handling options for validation runs."""

from enum import Enum


class ErrorOption(str, Enum):
    """Options for how to handle a failed validation run.

    Attributes:
        RETURN: Return the error tree as a failed Result without raising
        RAISE: Raise the ObjectValidationError as soon as the run completes
    """

    RETURN = "return"
    RAISE = "raise"
