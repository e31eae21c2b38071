"""Whitespace tokenizer for flow language source.

Tokens must be separated by whitespace: ``a : Foo`` is three tokens while
``a:Foo`` is a single identifier.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from loguru import logger


class TokenKind(str, Enum):
    Keyword = "keyword"
    Symbol = "symbol"
    Operator = "operator"
    Identifier = "identifier"
    NumericLiteral = "numeric-literal"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    def is_symbol(self, text: str) -> bool:
        return self.kind is TokenKind.Symbol and self.text == text

    def __str__(self) -> str:
        return self.text


def _vocabulary(kind: TokenKind, *texts: str) -> Dict[str, Token]:
    return {text: Token(kind, text) for text in texts}


KEYWORDS = _vocabulary(TokenKind.Keyword, "export", "import", "as", "type", "true", "false", "default")
SYMBOLS = _vocabulary(TokenKind.Symbol, ";", ",", ":", "{", "}", "(", ")", "<", ">")
OPERATORS = _vocabulary(TokenKind.Operator, "->", "=")

# ASCII whitespace only; other unicode spaces stay inside fragments
_WHITESPACE = re.compile(r"[ \t\n\x0b\f\r]+")
# digits with at most one dot anywhere, "." included
_NUMBER = re.compile(r"\d*\.?\d*")


def is_number_literal(fragment: str) -> bool:
    return _NUMBER.fullmatch(fragment) is not None


def classify(fragment: str) -> Token:
    for table in (KEYWORDS, SYMBOLS, OPERATORS):
        token = table.get(fragment)
        if token is not None:
            return token
    if is_number_literal(fragment):
        return Token(TokenKind.NumericLiteral, fragment)
    return Token(TokenKind.Identifier, fragment)


def tokenize(source: str) -> List[Token]:
    tokens = [classify(fragment) for fragment in _WHITESPACE.split(source) if fragment]
    logger.debug("Tokenized source into {} tokens", len(tokens))
    return tokens
