from __future__ import annotations
import os
from pathlib import Path
from typing import List, Sequence, Tuple

from lark import Lark, Token as LarkToken, Transformer, v_args
from lark.exceptions import UnexpectedInput
from loguru import logger

from .ast import (
    Assignment,
    ConfigExpression,
    ConstructorPattern,
    Empty,
    ExportFlow,
    Expression,
    FlowExpression,
    FlowType,
    Identifier,
    ImportIdentifier,
    Literal,
    MapExpression,
    SimpleType,
    Statement,
)
from .errors import ParseError
from .lexer import Token, TokenKind, tokenize

GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")

# grammar terminal for each fixed-vocabulary token; undeclared ones are never accepted
_TERMINALS = {
    ";": "_SEMICOLON",
    ",": "_COMMA",
    ":": "_COLON",
    "{": "_LBRACE",
    "}": "_RBRACE",
    "(": "_LPAR",
    ")": "_RPAR",
    "<": "LESS",
    ">": "MORE",
    "->": "_ARROW",
    "=": "_EQUAL",
    "import": "_IMPORT",
    "export": "_EXPORT",
    "as": "AS",
    "type": "TYPE",
    "true": "TRUE",
    "false": "FALSE",
    "default": "DEFAULT",
}

_DESCRIPTIONS = {terminal: f"[{text}]" for text, terminal in _TERMINALS.items()}
_DESCRIPTIONS.update({"IDENTIFIER": "an identifier", "NUMBER": "a literal", "$END": "end of input"})

_parser = None


def _debug_enabled() -> bool:
    return os.getenv("APPFLOW_PARSER_DEBUG", "").lower() in ("1", "true", "yes")


def _load_parser() -> Lark:
    """Compile the grammar once, with ``AstBuilder`` applied on every reduction."""
    global _parser
    if _parser is None:
        grammar = GRAMMAR_PATH.read_text(encoding="utf-8")
        _parser = Lark(grammar, start="start", parser="lalr", lexer="basic",
                       transformer=AstBuilder(), debug=_debug_enabled())
        logger.debug("Compiled flow grammar from {}", GRAMMAR_PATH)
    return _parser


def _terminal(token: Token) -> str:
    if token.kind is TokenKind.Identifier:
        return "IDENTIFIER"
    if token.kind is TokenKind.NumericLiteral:
        return "NUMBER"
    return _TERMINALS[token.text]


def _render(tokens: Sequence[Token]) -> str:
    return " ".join(token.text for token in tokens)


def _statement_at(tokens: Sequence[Token], index: int) -> Tuple[Token, ...]:
    """Tokens of the ``;``-delimited run that contains ``index``."""
    start = index
    while start > 0 and not tokens[start - 1].is_symbol(";"):
        start -= 1
    end = index
    while end < len(tokens) and not tokens[end].is_symbol(";"):
        end += 1
    return tuple(tokens[start:end])


def _unexpected(tokens: Sequence[Token], index: int, error: UnexpectedInput) -> ParseError:
    token = tokens[index]
    context = _statement_at(tokens, index)
    expected = sorted(_DESCRIPTIONS.get(name, name) for name in getattr(error, "expected", ()))
    message = (f"Expected {' or '.join(expected) or 'nothing'} but found [{token}] "
               f"in statement [{_render(context)}].")
    logger.debug("Rejected token {} at index {}", token, index)
    return ParseError(message, token, context)


def _premature_end(tokens: Sequence[Token]) -> ParseError:
    last = tokens[-1] if tokens else ""
    context = _statement_at(tokens, len(tokens) - 1) if tokens else ()
    return ParseError(f"Expected more tokens after [{last}] but found none.", None, context)


def _collapse(parts: Sequence[Expression]) -> Expression:
    if len(parts) == 1:
        return parts[0]
    return FlowExpression(parts=parts)


@v_args(inline=True)
class AstBuilder(Transformer):
    """Turns the parse tree into ``appflow.ast`` nodes."""

    def start(self, *statements):
        return list(statements)

    def empty(self):
        return Empty()

    def import_identifier(self, name, type_):
        return ImportIdentifier(name=Identifier(name=str(name)), type=type_)

    def export_flow(self, assignment):
        return ExportFlow(assignment=assignment)

    def assignment(self, name, *rest):
        *declared, value = rest
        return Assignment(name=Identifier(name=str(name)),
                          declared_type=declared[0] if declared else None,
                          value=value)

    def type_annotation(self, name, output=None):
        if output is None:
            return SimpleType(name=Identifier(name=str(name)))
        return FlowType(input_type=Identifier(name=str(name)), output_type=Identifier(name=str(output)))

    def flow_expression(self, *parts):
        return _collapse(parts)

    def map_value(self, *parts):
        return _collapse(parts)

    def map_expression(self, *entries):
        return MapExpression(entries=entries)

    def map_entry(self, key, value):
        return (key, value)

    def constructor_pattern(self, name, *args):
        return ConstructorPattern(name=Identifier(name=str(name)), args=args)

    def config_expression(self, name, *properties):
        return ConfigExpression(name=Identifier(name=str(name)), properties=properties)

    def config_property(self, name, value):
        return (Identifier(name=str(name)), value)

    def identifier(self, token):
        return Identifier(name=str(token))

    def literal(self, token):
        return Literal(text=str(token))


def parse_statements(tokens: Sequence[Token]) -> List[Statement]:
    """Parse a token sequence into top-level statements.

    Every statement, the last one included, must end with ``;``. The first
    token the grammar cannot accept raises ``ParseError``; nothing is recovered.
    """
    session = _load_parser().parse_interactive()
    fed = None
    for index, token in enumerate(tokens):
        fed = LarkToken(_terminal(token), token.text, start_pos=index)
        try:
            session.feed_token(fed)
        except UnexpectedInput as e:
            raise _unexpected(tokens, index, e) from e
    try:
        statements = session.feed_eof(fed)
    except UnexpectedInput as e:
        raise _premature_end(tokens) from e
    logger.debug("Parsed {} statements", len(statements))
    return statements


def parse(source: str | Path) -> List[Statement]:
    if isinstance(source, Path):
        source = source.read_text(encoding="utf-8")
    return parse_statements(tokenize(source))
