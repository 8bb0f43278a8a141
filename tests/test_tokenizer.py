"""Tests for the nested-struct tokenizer."""

import pytest

from nestedstruct.exceptions import StructSyntaxError
from nestedstruct.parsers.tokenizer import TokenKind, render_tokens, tokenize


def texts(source):
    return [t.text for t in tokenize(source) if t.kind is not TokenKind.EOF]


class TestTokenizer:
    """Lexing of identifiers, punctuation, literals and comments."""

    def test_ends_with_eof(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.EOF

    def test_positions_are_one_based(self):
        tokens = tokenize("struct S {\n    a: u8\n}")
        a = tokens[3]
        assert a.text == "a"
        assert (a.line, a.column) == (2, 5)

    def test_multi_char_punctuation(self):
        assert texts("std::fmt::Result -> x") == ["std", "::", "fmt", "::", "Result", "->", "x"]

    def test_generic_closers_are_not_fused(self):
        assert texts("Vec<Vec<u8>>")[-2:] == [">", ">"]

    def test_lifetime_and_char_literal(self):
        tokens = tokenize("&'a str 'x'")
        assert tokens[1].kind is TokenKind.LIFETIME
        assert tokens[1].text == "'a"
        assert tokens[3].kind is TokenKind.LITERAL
        assert tokens[3].text == "'x'"

    def test_raw_identifier(self):
        tokens = tokenize("r#type: u8")
        assert tokens[0].kind is TokenKind.IDENT
        assert tokens[0].text == "r#type"

    def test_string_literals(self):
        assert texts('#[doc = "a \\" b"]')[4] == '"a \\" b"'
        assert texts('r#"raw "quoted""#')[0] == 'r#"raw "quoted""#'
        assert texts('b"bytes"')[0] == 'b"bytes"'

    def test_comments_are_skipped(self):
        assert texts("a /* one /* two */ */ b // tail\nc") == ["a", "b", "c"]

    def test_doc_comments_become_tokens(self):
        tokens = tokenize("/// Documented\n//// not doc\nx")
        assert tokens[0].kind is TokenKind.DOC
        assert tokens[0].text == "/// Documented"
        assert tokens[1].text == "x"

    def test_block_doc_comments_become_tokens(self):
        tokens = tokenize("/** Block */ /**/ /*** banner */ /* plain */ x")
        assert [(t.kind, t.text) for t in tokens[:-1]] == [
            (TokenKind.DOC, "/** Block */"),
            (TokenKind.IDENT, "x"),
        ]

    def test_inner_doc_comments_become_tokens(self):
        tokens = tokenize("//! inner line\n/*! inner block */ x")
        assert [t.text for t in tokens if t.kind is TokenKind.DOC] == [
            "//! inner line",
            "/*! inner block */",
        ]

    def test_unterminated_string(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            tokenize('struct S { #[doc = "open] }')
        assert "unterminated string" in str(exc_info.value)
        assert exc_info.value.line == 1

    def test_unterminated_block_comment(self):
        with pytest.raises(StructSyntaxError):
            tokenize("struct S { /* never closed }")

    def test_unexpected_character(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            tokenize("struct S { a: § }")
        assert exc_info.value.column == 15


class TestRenderTokens:
    """Rendering opaque token runs back to text."""

    def test_preserves_adjacency(self):
        assert render_tokens(tokenize("HashMap<String,u32>")[:-1]) == "HashMap<String,u32>"

    def test_collapses_whitespace_and_comments(self):
        source = "HashMap<String,   /* key */\n u32>"
        assert render_tokens(tokenize(source)[:-1]) == "HashMap<String, u32>"
