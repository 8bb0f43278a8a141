"""Tokenizer and parser for nested-struct declarations."""
