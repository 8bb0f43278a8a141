"""Tree model for parsed nested-struct declarations and their flattened output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from nestedstruct.parsers.tokenizer import Token, render_tokens


@dataclass
class Attribute:
    """An opaque attribute such as ``#[derive(Clone)]`` or a ``///`` doc line."""

    text: str
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return self.text


@dataclass
class NestedMarker:
    """A ``@nested(...)`` annotation; its attributes belong to the child struct."""

    attributes: list[Attribute] = field(default_factory=list)
    line: int = 0
    column: int = 0


LeadingItem = Union[Attribute, NestedMarker]


@dataclass
class ExternalType:
    """A field type given as an opaque token sequence."""

    tokens: list[Token] = field(default_factory=list)

    @property
    def text(self) -> str:
        return render_tokens(self.tokens)


@dataclass
class NestedType:
    """A field type given as an inline struct body."""

    child: StructSpec


TypeRef = Union[ExternalType, NestedType]


@dataclass
class FieldSpec:
    """One field of a StructSpec."""

    name: str
    type_ref: TypeRef
    visibility: str = ""
    field_attributes: list[Attribute] = field(default_factory=list)
    leading: list[LeadingItem] = field(default_factory=list)
    line: int = 0
    column: int = 0

    @property
    def is_nested(self) -> bool:
        return isinstance(self.type_ref, NestedType)

    @property
    def child(self) -> StructSpec | None:
        if isinstance(self.type_ref, NestedType):
            return self.type_ref.child
        return None

    @property
    def markers(self) -> list[NestedMarker]:
        return [item for item in self.leading if isinstance(item, NestedMarker)]


@dataclass
class StructSpec:
    """One struct to be emitted, either the root or a nested body."""

    name: str | None
    visibility: str = ""
    struct_attributes: list[Attribute] = field(default_factory=list)
    fields: list[FieldSpec] = field(default_factory=list)
    line: int = 0
    column: int = 0

    @property
    def is_anonymous(self) -> bool:
        return self.name is None

    def nested_fields(self) -> Iterator[FieldSpec]:
        """Fields whose type is an inline struct body, in source order."""
        return (f for f in self.fields if f.is_nested)

    def walk(self) -> Iterator[StructSpec]:
        """Yield this spec and every descendant in pre-order."""
        stack = [self]
        while stack:
            spec = stack.pop()
            yield spec
            children = [f.child for f in spec.nested_fields()]
            stack.extend(reversed(children))


# ---------------------------------------------------------------------- #
# Flattened output
# ---------------------------------------------------------------------- #
@dataclass
class FieldDeclaration:
    """A field of a flattened struct; its type is plain text."""

    name: str
    type_text: str
    visibility: str = ""
    attributes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type_text,
            "visibility": self.visibility,
            "attributes": list(self.attributes),
        }


@dataclass
class StructDeclaration:
    """A self-contained struct declaration with no nested bodies."""

    name: str
    visibility: str = ""
    attributes: list[str] = field(default_factory=list)
    fields: list[FieldDeclaration] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "visibility": self.visibility,
            "attributes": list(self.attributes),
            "fields": [f.to_dict() for f in self.fields],
        }
