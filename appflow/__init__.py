from loguru import logger

from .errors import FlowLangError, ParseError
from .lexer import Token, TokenKind, tokenize
from .parser import parse, parse_statements

logger.disable("appflow")

__all__ = [
    "FlowLangError",
    "ParseError",
    "Token",
    "TokenKind",
    "parse",
    "parse_statements",
    "tokenize",
]
