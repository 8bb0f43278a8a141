"""Flattens a named StructSpec tree into independent struct declarations."""

from nestedstruct.core.model import (
    FieldDeclaration,
    NestedType,
    StructDeclaration,
    StructSpec,
)
from nestedstruct.exceptions import DuplicateFieldNameError
from nestedstruct.utils.logging_utils import get_logger


class Flattener:
    """
    Emits one StructDeclaration per StructSpec, in pre-order.

    Nested fields are emitted as references to the child's resolved name.
    The input tree is not modified.
    """

    def __init__(self):
        self.logger = get_logger(f"nestedstruct.{self.__class__.__name__}")

    def flatten(self, root: StructSpec) -> list[StructDeclaration]:
        """
        Flatten the tree rooted at ``root``.

        Raises:
            DuplicateFieldNameError: If two fields of one struct share a name
            ValueError: If a nested struct has not been named yet
        """
        declarations = [self._declare(spec) for spec in root.walk()]
        self.logger.debug(f"Flattened {root.name} into {len(declarations)} declaration(s)")
        return declarations

    def _declare(self, spec: StructSpec) -> StructDeclaration:
        if spec.name is None:
            raise ValueError(
                f"nested struct at line {spec.line} has no name; assign names before flattening"
            )

        seen: dict[str, int] = {}
        fields = []
        for field in spec.fields:
            if field.name in seen:
                raise DuplicateFieldNameError(
                    f"field {field.name!r} of struct {spec.name} is already declared "
                    f"at line {seen[field.name]}",
                    line=field.line,
                    column=field.column,
                    struct_name=spec.name,
                    field_name=field.name,
                )
            seen[field.name] = field.line

            if isinstance(field.type_ref, NestedType):
                child_name = field.type_ref.child.name
                if child_name is None:
                    raise ValueError(
                        f"nested struct of {spec.name}.{field.name} has no name; "
                        "assign names before flattening"
                    )
                type_text = child_name
            else:
                type_text = field.type_ref.text

            fields.append(
                FieldDeclaration(
                    name=field.name,
                    type_text=type_text,
                    visibility=field.visibility,
                    attributes=[attr.text for attr in field.field_attributes],
                )
            )

        return StructDeclaration(
            name=spec.name,
            visibility=spec.visibility,
            attributes=[attr.text for attr in spec.struct_attributes],
            fields=fields,
        )


def flatten(root: StructSpec) -> list[StructDeclaration]:
    """Flatten a named tree into its ordered list of declarations."""
    return Flattener().flatten(root)
