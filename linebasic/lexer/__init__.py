"""BASIC Lexer - Splits source lines into tokens."""

from .lexer import Lexer, tokenize

__all__ = ['Lexer', 'tokenize']
