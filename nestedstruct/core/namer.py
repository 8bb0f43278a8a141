"""Derives names for anonymous nested structs and checks name uniqueness."""

import re

from nestedstruct.core.model import StructSpec
from nestedstruct.exceptions import NameCollisionError
from nestedstruct.utils.logging_utils import get_logger


def to_upper_camel(identifier: str) -> str:
    """
    Convert a snake_case field name to UpperCamelCase.

    >>> to_upper_camel("nested_field")
    'NestedField'
    >>> to_upper_camel("r#type")
    'Type'
    """
    if identifier.startswith("r#"):
        identifier = identifier[2:]
    parts = [part for part in re.split(r"_+", identifier) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


class StructNamer:
    """
    Assigns names to anonymous StructSpecs.

    A struct reached through field ``f`` of a parent named ``P`` is named
    ``P + UpperCamel(f)``, so every generated name encodes the whole field
    path from the root.
    """

    def __init__(self):
        self.logger = get_logger(f"nestedstruct.{self.__class__.__name__}")

    def assign_names(self, root: StructSpec) -> StructSpec:
        """
        Name every anonymous struct in the tree and verify uniqueness.

        Raises:
            NameCollisionError: If two structs resolve to the same name
        """
        if root.name is None:
            raise ValueError("the root struct must be named explicitly")

        derived = 0
        # Pre-order: a parent is named before its children are visited
        for spec in root.walk():
            for field in spec.nested_fields():
                child = field.child
                if child.name is None:
                    child.name = spec.name + to_upper_camel(field.name)
                    derived += 1
                    self.logger.debug(f"Named {spec.name}.{field.name} -> {child.name}")

        self._check_unique(root)
        self.logger.debug(f"Derived {derived} struct name(s) under {root.name}")
        return root

    def _check_unique(self, root: StructSpec) -> None:
        seen: dict[str, str] = {root.name: root.name}
        stack = [(root, root.name)]
        while stack:
            spec, path = stack.pop()
            for field in spec.nested_fields():
                child = field.child
                child_path = f"{path}.{field.name}"
                if child.name in seen:
                    raise NameCollisionError(
                        f"struct name {child.name!r} is produced by both "
                        f"{seen[child.name]} and {child_path}",
                        line=child.line,
                        column=child.column,
                        struct_name=child.name,
                        field_name=field.name,
                    )
                seen[child.name] = child_path
                stack.append((child, child_path))


def assign_names(root: StructSpec) -> StructSpec:
    """Name every anonymous struct reachable from ``root``."""
    return StructNamer().assign_names(root)
