"""Custom exceptions for nestedstruct."""


class NestedStructError(Exception):
    """Base exception for all nestedstruct errors.

    Carries the source position and the struct/field the problem was found
    in, so callers can turn it into a compiler-style diagnostic.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        struct_name: str | None = None,
        field_name: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.struct_name = struct_name
        self.field_name = field_name

    @property
    def location(self) -> str | None:
        """Human readable ``line L, column C`` or None when unknown."""
        if self.line is None:
            return None
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"

    def __str__(self) -> str:
        location = self.location
        if location:
            return f"{location}: {self.message}"
        return self.message


# Parsing Errors
class StructSyntaxError(NestedStructError):
    """Raised when the nested-struct source is malformed."""

    pass


# Configuration Errors
class ConfigurationError(NestedStructError):
    """Raised when the input uses a feature the configuration disables."""

    pass


# Attribute Errors
class AttributeOrderError(NestedStructError):
    """Raised when @nested(...) markers are not contiguous at the configured end."""

    pass


class MisplacedMarkerError(NestedStructError):
    """Raised when @nested(...) decorates a field without a nested struct type."""

    pass


# Naming Errors
class NameCollisionError(NestedStructError):
    """Raised when two structs resolve to the same name."""

    pass


class DuplicateFieldNameError(NestedStructError):
    """Raised when two fields of one struct share a name."""

    pass
