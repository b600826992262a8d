"""Markup tokenization.

Converts markup text into positioned tokens with a strict state machine.
"""

from .tokenizer import (
    MarkupTokenizer,
    Token,
    TokenizerState,
    TokenPosition,
    TokenType,
    tokenize,
)

__all__ = [
    "MarkupTokenizer",
    "Token",
    "TokenizerState",
    "TokenPosition",
    "TokenType",
    "tokenize",
]
