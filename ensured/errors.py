"""Error types for validation outcomes and contract violations.

Two families live here:

* ``Error`` and its subclasses are *values*. They are carried inside a failed
  ``Result`` and describe why a field, a conversion or a path lookup failed.
  ``ObjectValidationError`` is also raisable, for callers that ask for
  ``ErrorOption.RAISE``.
* ``ContractViolationError`` is raised, never returned. It signals a mismatch
  between how a result was registered and how it is being retrieved.
"""

import typing

import pydantic


class Error:
    """A single reason a ``Result`` failed.

    Attributes:
        message: Human readable description of the failure
    """

    def __init__(self, message: str) -> None:
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message))


class ValidationError(Error):
    """A failure reported while validating a field."""


class UnsupportedPathExpression(Error):
    """An accessor could not be turned into a property path.

    Returned (not raised) by ``ensured.path.resolve``.
    """


class ContractViolationError(RuntimeError):
    """Raised when calling code breaks the registration/retrieval contract.

    Examples: registering two results under the same key, or calling
    ``expect_value`` for a result that was never registered or that failed.
    """


class FieldError(pydantic.BaseModel):
    """Leaf of the error tree: one message for one key."""

    model_config = pydantic.ConfigDict(frozen=True)

    kind: typing.Literal["field"] = "field"
    key: str
    message: str

    def __str__(self) -> str:
        return f"{self.key}: {self.message}"


class ObjectError(pydantic.BaseModel):
    """Grouping node of the error tree. The root node has an empty key."""

    model_config = pydantic.ConfigDict(frozen=True)

    kind: typing.Literal["object"] = "object"
    key: str = ""
    children: tuple["ErrorNode", ...] = ()

    def __str__(self) -> str:
        body = "{ " + ", ".join(str(child) for child in self.children) + " }"
        if not self.key.strip():
            return body
        return f"{self.key}: {body}"


ErrorNode = typing.Annotated[
    FieldError | ObjectError, pydantic.Field(discriminator="kind")
]
"""Either a ``FieldError`` or an ``ObjectError``."""

ObjectError.model_rebuild()


class ObjectValidationError(ValidationError, ValueError):
    """Failure payload of a validation run.

    Carries the error tree built for the validated type. Rendered as
    ``TypeName { Field1: msg1, Field2: { Nested: msg2 } }``.

    Attributes:
        type_name: Name of the validated type
        fields: Top level nodes of the error tree, in discovery order
    """

    def __init__(
        self, type_name: str, fields: typing.Iterable[FieldError | ObjectError]
    ) -> None:
        """Initialize ObjectValidationError.

        Args:
            type_name: Name of the validated type
            fields: Error nodes, one per failing top level field
        """
        self.type_name = type_name
        self.fields = tuple(fields)
        message = (
            f"{type_name} {{ " + ", ".join(str(node) for node in self.fields) + " }"
        )
        ValidationError.__init__(self, message)
        ValueError.__init__(self, message)

    @property
    def tree(self) -> ObjectError:
        """The root node of the error tree (empty key)."""
        return ObjectError(key="", children=self.fields)

    def to_dict(self) -> dict[str, typing.Any]:
        """Dictionary form of the error, suitable for an API error body."""
        return {
            "type": self.type_name,
            "message": self.message,
            "errors": [node.model_dump() for node in self.fields],
        }
