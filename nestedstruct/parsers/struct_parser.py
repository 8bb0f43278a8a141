"""Recursive-descent parser for nested-struct declarations."""

from __future__ import annotations

from nestedstruct.core.model import (
    Attribute,
    ExternalType,
    FieldSpec,
    LeadingItem,
    NestedMarker,
    NestedType,
    StructSpec,
    TypeRef,
)
from nestedstruct.exceptions import ConfigurationError, StructSyntaxError
from nestedstruct.parsers.tokenizer import Token, TokenKind, render_tokens, tokenize
from nestedstruct.utils.logging_utils import get_logger

CLOSERS = {"(": ")", "[": "]", "{": "}"}


class StructParser:
    """
    Parser for a single nested-struct declaration.

    Grammar::

        declaration := attr* visibility 'struct' IDENT body
        body        := '{' (field (',' | NEWLINE))* field? '}'
        field       := (attr | marker)* visibility IDENT ':' type
        type        := attr* IDENT body | attr* body | opaque-tokens
        marker      := '@' 'nested' '(' attr* ')'
    """

    def __init__(self, anonymous_nesting: bool = True):
        """
        Initialize the parser.

        Args:
            anonymous_nesting: Allow nested bodies with no preceding identifier
        """
        self.anonymous_nesting = anonymous_nesting
        self.logger = get_logger(f"nestedstruct.{self.__class__.__name__}")
        self.tokens: list[Token] = []
        self.index = 0

    def parse(self, source: str) -> StructSpec:
        """
        Parse ``source`` into the root StructSpec.

        Raises:
            StructSyntaxError: If the source is malformed
            ConfigurationError: If anonymous nesting is used while disabled
        """
        self.tokens = tokenize(source)
        self.index = 0

        try:
            root = self._parse_declaration()
        except RecursionError as e:
            # Each nesting level costs a few interpreter frames
            raise self._error(
                "struct nesting is too deep to expand", self._peek()
            ) from e

        trailing = self._peek()
        if trailing.kind is not TokenKind.EOF:
            raise self._error(f"unexpected {trailing.text!r} after struct body", trailing)

        self.logger.debug(f"Parsed struct {root.name} with {len(root.fields)} top-level fields")
        return root

    # ------------------------------------------------------------------ #
    # Token helpers
    # ------------------------------------------------------------------ #
    def _peek(self, offset: int = 0) -> Token:
        index = min(self.index + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def _next(self) -> Token:
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            self.index += 1
        return token

    def _previous(self) -> Token:
        return self.tokens[self.index - 1]

    def _error(self, message: str, token: Token, **context) -> StructSyntaxError:
        return StructSyntaxError(message, line=token.line, column=token.column, **context)

    def _describe(self, token: Token) -> str:
        return "end of input" if token.kind is TokenKind.EOF else repr(token.text)

    def _expect_punct(self, text: str, message: str, **context) -> Token:
        token = self._peek()
        if not token.is_punct(text):
            raise self._error(f"{message}, found {self._describe(token)}", token, **context)
        return self._next()

    def _consume_group(self) -> list[Token]:
        """Consume a balanced (), [] or {} group, delimiters included."""
        opener = self._next()
        stack = [opener]
        group = [opener]
        while stack:
            token = self._next()
            if token.kind is TokenKind.EOF:
                unclosed = stack[-1]
                raise self._error(f"unterminated {unclosed.text!r}", unclosed)
            if token.kind is TokenKind.DOC:
                raise self._error(f"doc comment inside {opener.text!r} group", token)
            group.append(token)
            if token.kind is not TokenKind.PUNCT:
                continue
            if token.text in CLOSERS:
                stack.append(token)
            elif token.text in CLOSERS.values():
                if token.text != CLOSERS[stack[-1].text]:
                    raise self._error(
                        f"mismatched {token.text!r}, expected {CLOSERS[stack[-1].text]!r}",
                        token,
                    )
                stack.pop()
        return group

    # ------------------------------------------------------------------ #
    # Declarations
    # ------------------------------------------------------------------ #
    def _parse_declaration(self) -> StructSpec:
        attributes = self._parse_attributes()
        visibility = self._parse_visibility()

        keyword = self._peek()
        if not keyword.is_ident("struct"):
            raise self._error(f"expected 'struct', found {self._describe(keyword)}", keyword)
        self._next()

        name_token = self._peek()
        if name_token.kind is not TokenKind.IDENT:
            raise self._error(
                f"expected struct name, found {self._describe(name_token)}", name_token
            )
        self._next()

        root = StructSpec(
            name=name_token.text,
            visibility=visibility,
            struct_attributes=attributes,
            line=keyword.line,
            column=keyword.column,
        )
        if not self._peek().is_punct("{"):
            raise self._error(
                f"expected '{{' after struct {root.name}, found {self._describe(self._peek())}",
                self._peek(),
                struct_name=root.name,
            )
        self._parse_body(root)
        return root

    def _parse_visibility(self) -> str:
        token = self._peek()
        if not token.is_ident("pub"):
            return ""
        self._next()
        # pub(crate), pub(super), pub(in path)
        if self._peek().is_punct("("):
            return "pub" + render_tokens(self._consume_group())
        return "pub"

    def _parse_attribute(self) -> Attribute:
        token = self._peek()
        if token.kind is TokenKind.DOC:
            if token.text.startswith(("//!", "/*!")):
                raise self._error("inner doc comments are not allowed here", token)
            self._next()
            return Attribute(token.text, token.line, token.column)

        hash_token = self._next()
        if self._peek().is_punct("!"):
            raise self._error("inner attributes are not allowed here", self._peek())
        if not self._peek().is_punct("["):
            raise self._error(
                f"expected '[' after '#', found {self._describe(self._peek())}", self._peek()
            )
        group = self._consume_group()
        return Attribute(render_tokens([hash_token] + group), hash_token.line, hash_token.column)

    def _at_attribute(self) -> bool:
        token = self._peek()
        return token.kind is TokenKind.DOC or token.is_punct("#")

    def _parse_attributes(self) -> list[Attribute]:
        attributes = []
        while self._at_attribute():
            attributes.append(self._parse_attribute())
        return attributes

    def _parse_marker(self) -> NestedMarker:
        at = self._next()
        name = self._peek()
        if not name.is_ident("nested") or name.start != at.end:
            raise self._error(f"unknown marker '@{name.text}'", at)
        self._next()
        self._expect_punct("(", "expected '(' after '@nested'")

        marker = NestedMarker(line=at.line, column=at.column)
        while not self._peek().is_punct(")"):
            if not self._at_attribute():
                token = self._peek()
                if token.kind is TokenKind.EOF:
                    raise self._error("unterminated '@nested('", at)
                raise self._error(
                    f"expected an attribute inside '@nested(...)', found {self._describe(token)}",
                    token,
                )
            marker.attributes.append(self._parse_attribute())
        self._next()
        return marker

    def _parse_leading_run(self) -> list[LeadingItem]:
        run: list[LeadingItem] = []
        while True:
            if self._at_attribute():
                run.append(self._parse_attribute())
            elif self._peek().is_punct("@"):
                run.append(self._parse_marker())
            else:
                return run

    # ------------------------------------------------------------------ #
    # Bodies and fields
    # ------------------------------------------------------------------ #
    def _parse_body(self, owner: StructSpec) -> None:
        opener = self._next()
        while True:
            token = self._peek()
            if token.is_punct("}"):
                self._next()
                return
            if token.kind is TokenKind.EOF:
                raise self._error("unterminated '{'", opener, struct_name=owner.name)

            field = self._parse_field(owner)
            owner.fields.append(field)

            separator = self._peek()
            if separator.is_punct(","):
                self._next()
            elif separator.is_punct("}") or separator.kind is TokenKind.EOF:
                continue
            elif separator.line == self._previous().line:
                raise self._error(
                    f"expected ',' or '}}' after field {field.name!r}, "
                    f"found {self._describe(separator)}",
                    separator,
                    struct_name=owner.name,
                    field_name=field.name,
                )

    def _parse_field(self, owner: StructSpec) -> FieldSpec:
        start = self._peek()
        leading = self._parse_leading_run()

        if self._peek().is_punct("}") or self._peek().kind is TokenKind.EOF:
            has_marker = any(isinstance(item, NestedMarker) for item in leading)
            kind = "@nested(...) marker" if has_marker else "attribute"
            raise self._error(f"{kind} is not followed by a field", start, struct_name=owner.name)

        visibility = self._parse_visibility()

        name_token = self._peek()
        if name_token.kind is not TokenKind.IDENT:
            raise self._error(
                f"expected field name, found {self._describe(name_token)}",
                name_token,
                struct_name=owner.name,
            )
        self._next()
        name = name_token.text
        context = {"struct_name": owner.name, "field_name": name}

        self._expect_punct(":", f"expected ':' after field name {name!r}", **context)

        field = FieldSpec(
            name=name,
            type_ref=ExternalType(),
            visibility=visibility,
            field_attributes=[item for item in leading if isinstance(item, Attribute)],
            leading=leading,
            line=name_token.line,
            column=name_token.column,
        )
        field.type_ref = self._parse_type(field, context)
        return field

    def _parse_type(self, field: FieldSpec, context: dict) -> TypeRef:
        header_attributes = self._parse_attributes()
        token = self._peek()

        if token.kind is TokenKind.IDENT and self._peek(1).is_punct("{"):
            self._next()
            child = StructSpec(
                name=token.text,
                visibility=field.visibility,
                struct_attributes=header_attributes,
                line=token.line,
                column=token.column,
            )
            self._parse_body(child)
            return NestedType(child)

        if token.is_punct("{"):
            if not self.anonymous_nesting:
                raise ConfigurationError(
                    f"anonymous nested struct for field {field.name!r} requires "
                    "anonymous-nesting to be enabled",
                    line=token.line,
                    column=token.column,
                    **context,
                )
            child = StructSpec(
                name=None,
                visibility=field.visibility,
                struct_attributes=header_attributes,
                line=token.line,
                column=token.column,
            )
            self._parse_body(child)
            return NestedType(child)

        if header_attributes:
            raise self._error(
                f"attributes in the type of field {field.name!r} must precede a nested struct body",
                token,
                **context,
            )
        return ExternalType(self._parse_opaque_type(context))

    def _parse_opaque_type(self, context: dict) -> list[Token]:
        tokens: list[Token] = []
        angle_depth = 0
        while True:
            token = self._peek()
            if token.kind is TokenKind.EOF:
                break
            if angle_depth == 0:
                if token.is_punct(",") or token.is_punct("}"):
                    break
                # A field start or doc comment ends the type; on the same
                # line _parse_body then reports the missing comma
                if tokens and self._at_field_start():
                    break
            if token.kind is TokenKind.DOC:
                raise self._error("doc comment inside field type", token, **context)
            if token.is_punct("{"):
                raise self._error("unexpected '{' in field type", token, **context)
            if token.is_punct("(") or token.is_punct("["):
                tokens.extend(self._consume_group())
                continue
            if token.is_punct("<"):
                angle_depth += 1
            elif token.is_punct(">") and angle_depth > 0:
                angle_depth -= 1
            tokens.append(self._next())

        if not tokens:
            raise self._error(
                f"expected a type for field {context['field_name']!r}, "
                f"found {self._describe(self._peek())}",
                self._peek(),
                **context,
            )
        return tokens

    def _at_field_start(self) -> bool:
        token = self._peek()
        if self._at_attribute() or token.is_punct("@") or token.is_ident("pub"):
            return True
        return token.kind is TokenKind.IDENT and self._peek(1).is_punct(":")


def parse_struct(source: str, anonymous_nesting: bool = True) -> StructSpec:
    """Parse one nested-struct declaration into its root StructSpec."""
    return StructParser(anonymous_nesting=anonymous_nesting).parse(source)
