"""Tokenizer for nested-struct source text."""

from dataclasses import dataclass
from enum import Enum

from nestedstruct.exceptions import StructSyntaxError


class TokenKind(Enum):
    IDENT = "ident"
    LIFETIME = "lifetime"
    LITERAL = "literal"
    PUNCT = "punct"
    DOC = "doc"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A lexical token with its 1-based position and source offsets."""

    kind: TokenKind
    text: str
    line: int
    column: int
    start: int
    end: int

    def is_punct(self, text: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.text == text

    def is_ident(self, text: str | None = None) -> bool:
        if self.kind is not TokenKind.IDENT:
            return False
        return text is None or self.text == text

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"


# Longest first; ">>" is deliberately absent so generic closers stay separate
MULTI_CHAR_PUNCT = ("..=", "...", "::", "->", "=>", "..", "==", "!=")
SINGLE_CHAR_PUNCT = set("#@(){}[]<>,;:=+-*/&|!?.$%^~")


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


class Tokenizer:
    """Converts source text into a list of tokens ending with an EOF token."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []

    # ------------------------------------------------------------------ #
    # Cursor helpers
    # ------------------------------------------------------------------ #
    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else ""

    def _advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self.pos >= len(self.source):
                return
            if self.source[self.pos] == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1
            self.pos += 1

    def _emit(self, kind: TokenKind, start: int, line: int, col: int, text: str | None = None):
        if text is None:
            text = self.source[start : self.pos]
        self.tokens.append(Token(kind, text, line, col, start, self.pos))

    def _error(self, message: str, line: int, col: int) -> StructSyntaxError:
        return StructSyntaxError(message, line=line, column=col)

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def tokenize(self) -> list[Token]:
        while self.pos < len(self.source):
            ch = self._peek()
            start, line, col = self.pos, self.line, self.col

            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                self._line_comment(start, line, col)
            elif ch == "/" and self._peek(1) == "*":
                self._block_comment(start, line, col)
            elif ch == "r" and self._peek(1) == "#" and _is_ident_start(self._peek(2)):
                self._advance(2)
                self._consume_ident_tail()
                self._emit(TokenKind.IDENT, start, line, col)
            elif self._at_string_prefix():
                self._string(start, line, col)
            elif _is_ident_start(ch):
                self._consume_ident_tail()
                self._emit(TokenKind.IDENT, start, line, col)
            elif ch.isdigit():
                self._number(start, line, col)
            elif ch == "'":
                self._quote(start, line, col)
            else:
                self._punct(start, line, col)

        self.tokens.append(
            Token(TokenKind.EOF, "", self.line, self.col, self.pos, self.pos)
        )
        return self.tokens

    # ------------------------------------------------------------------ #
    # Lexemes
    # ------------------------------------------------------------------ #
    def _consume_ident_tail(self) -> None:
        while self._peek() and _is_ident_char(self._peek()):
            self._advance()

    def _line_comment(self, start: int, line: int, col: int) -> None:
        # "///" and "//!" are doc comments, "////" is not
        is_doc = self._peek(2) == "!" or (self._peek(2) == "/" and self._peek(3) != "/")
        while self._peek() and self._peek() != "\n":
            self._advance()
        if is_doc:
            text = self.source[start : self.pos].rstrip()
            self._emit(TokenKind.DOC, start, line, col, text=text)

    def _block_comment(self, start: int, line: int, col: int) -> None:
        # "/**" and "/*!" open doc comments, "/**/" and "/***" do not
        is_doc = self._peek(2) == "!" or (
            self._peek(2) == "*" and self._peek(3) not in ("*", "/")
        )
        depth = 0
        while True:
            if not self._peek():
                raise self._error("unterminated block comment", line, col)
            if self._peek() == "/" and self._peek(1) == "*":
                depth += 1
                self._advance(2)
            elif self._peek() == "*" and self._peek(1) == "/":
                depth -= 1
                self._advance(2)
                if depth == 0:
                    break
            else:
                self._advance()
        if is_doc:
            self._emit(TokenKind.DOC, start, line, col)

    def _at_string_prefix(self) -> bool:
        ch = self._peek()
        if ch == '"':
            return True
        if ch == "b":
            nxt = self._peek(1)
            if nxt == '"':
                return True
            if nxt == "r" and self._peek(2) in ('"', "#"):
                return True
            return False
        if ch == "r":
            return self._peek(1) == '"' or (self._peek(1) == "#" and self._peek(2) in ('"', "#"))
        return False

    def _string(self, start: int, line: int, col: int) -> None:
        raw = False
        if self._peek() == "b":
            self._advance()
        if self._peek() == "r":
            raw = True
            self._advance()

        if raw:
            hashes = 0
            while self._peek() == "#":
                hashes += 1
                self._advance()
            if self._peek() != '"':
                raise self._error("malformed raw string literal", line, col)
            self._advance()
            terminator = '"' + "#" * hashes
            while not self.source.startswith(terminator, self.pos):
                if not self._peek():
                    raise self._error("unterminated string literal", line, col)
                self._advance()
            self._advance(len(terminator))
        else:
            self._advance()  # opening quote
            while self._peek() != '"':
                if not self._peek():
                    raise self._error("unterminated string literal", line, col)
                if self._peek() == "\\":
                    self._advance()
                self._advance()
            self._advance()
        self._emit(TokenKind.LITERAL, start, line, col)

    def _number(self, start: int, line: int, col: int) -> None:
        self._consume_ident_tail()
        if self._peek() == "." and self._peek(1).isdigit():
            self._advance()
            self._consume_ident_tail()
        self._emit(TokenKind.LITERAL, start, line, col)

    def _quote(self, start: int, line: int, col: int) -> None:
        # 'a is a lifetime, 'a' is a char literal
        if _is_ident_start(self._peek(1)) and self._peek(2) != "'":
            self._advance()
            self._consume_ident_tail()
            self._emit(TokenKind.LIFETIME, start, line, col)
            return
        self._advance()
        while self._peek() != "'":
            if not self._peek() or self._peek() == "\n":
                raise self._error("unterminated character literal", line, col)
            if self._peek() == "\\":
                self._advance()
            self._advance()
        self._advance()
        self._emit(TokenKind.LITERAL, start, line, col)

    def _punct(self, start: int, line: int, col: int) -> None:
        for candidate in MULTI_CHAR_PUNCT:
            if self.source.startswith(candidate, self.pos):
                self._advance(len(candidate))
                self._emit(TokenKind.PUNCT, start, line, col)
                return
        ch = self._peek()
        if ch not in SINGLE_CHAR_PUNCT:
            raise self._error(f"unexpected character {ch!r}", line, col)
        self._advance()
        self._emit(TokenKind.PUNCT, start, line, col)


def tokenize(source: str) -> list[Token]:
    """Tokenize ``source``; the returned list always ends with an EOF token."""
    return Tokenizer(source).tokenize()


def render_tokens(tokens: list[Token]) -> str:
    """
    Render tokens back to text.

    Adjacent tokens stay adjacent; any gap in the source (whitespace or a
    comment) becomes a single space.
    """
    parts: list[str] = []
    previous: Token | None = None
    for token in tokens:
        if previous is not None and token.start > previous.end:
            parts.append(" ")
        parts.append(token.text)
        previous = token
    return "".join(parts)
