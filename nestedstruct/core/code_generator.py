"""Deterministic source rendering for flattened struct declarations."""

from dataclasses import dataclass

from nestedstruct.core.model import StructDeclaration


@dataclass
class GeneratedCode:
    """Container for generated code artifacts."""

    declarations: list[StructDeclaration]
    code: str


class CodeGenerator:
    """Renders StructDeclarations as plain struct source text."""

    def __init__(self, indent: int = 4, trailing_comma: bool = True):
        self.indent = " " * indent
        self.trailing_comma = trailing_comma

    def generate(self, declarations: list[StructDeclaration]) -> GeneratedCode:
        """Render all declarations, separated by one blank line."""
        code = "\n\n".join(self.render(decl) for decl in declarations)
        return GeneratedCode(declarations=list(declarations), code=code + "\n" if code else "")

    def render(self, decl: StructDeclaration) -> str:
        """Render a single declaration."""
        lines = list(decl.attributes)
        header = f"{decl.visibility} struct {decl.name}" if decl.visibility else f"struct {decl.name}"

        if not decl.fields:
            lines.append(header + " {}")
            return "\n".join(lines)

        lines.append(header + " {")
        for index, field in enumerate(decl.fields):
            for attribute in field.attributes:
                lines.append(self.indent + attribute)
            prefix = f"{field.visibility} " if field.visibility else ""
            is_last = index == len(decl.fields) - 1
            separator = "," if not is_last or self.trailing_comma else ""
            lines.append(f"{self.indent}{prefix}{field.name}: {field.type_text}{separator}")
        lines.append("}")
        return "\n".join(lines)
