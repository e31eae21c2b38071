"""Immutable AST for the flow language.

Every node is a frozen pydantic model: it cannot be mutated once built and two
nodes compare equal when they have the same class and the same fields. The
role a node may play (expression, map key, config value, type, statement) is
given by the ``Union`` aliases at the bottom of the module and enforced by
validation when a parent node is constructed.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)


# ─── Expressions ────────────────────────────────────────────────
class Identifier(Node):
    name: str


class Literal(Node):
    """Numeric literal, kept as its source text."""
    text: str


class FlowExpression(Node):
    """Pipeline of two or more steps, in execution order."""
    parts: Tuple[Expression, ...] = Field(min_length=2)


class MapExpression(Node):
    """Pattern dispatch block. Entries keep source order; keys may repeat."""
    entries: Tuple[Tuple[MatchableExpression, Expression], ...] = ()


class ConfigExpression(Node):
    """Configured component reference.

    ``properties`` holds ``(name, value)`` pairs with unique names, in the
    order each name first appeared; ``property_map`` is a read-only mapping
    view of the same pairs.
    """
    name: Identifier
    properties: Tuple[Tuple[Identifier, SimpleExpression], ...] = ()

    @field_validator("properties", mode="before")
    @classmethod
    def merge_repeated_names(cls, v):
        """Accept a mapping or pairs; a repeated name keeps its first position and last value."""
        pairs = v.items() if isinstance(v, Mapping) else v
        merged = {}
        for name, value in pairs:
            merged[name] = value
        return tuple(merged.items())

    @property
    def property_map(self) -> Mapping[Identifier, SimpleExpression]:
        return MappingProxyType(dict(self.properties))


class ConstructorPattern(Node):
    name: Identifier
    args: Tuple[MatchableExpression, ...] = ()


# ─── Types ──────────────────────────────────────────────────────
class SimpleType(Node):
    name: Identifier


class FlowType(Node):
    input_type: Identifier
    output_type: Identifier


# ─── Statements ─────────────────────────────────────────────────
class Empty(Node):
    pass


class ImportIdentifier(Node):
    name: Identifier
    type: Type


class Assignment(Node):
    name: Identifier
    declared_type: Optional[Type] = None
    value: Expression


class ExportFlow(Node):
    assignment: Assignment


Expression = Union[Identifier, Literal, FlowExpression, MapExpression, ConfigExpression]
MatchableExpression = Union[Literal, Identifier, ConstructorPattern]
SimpleExpression = Union[Identifier, Literal]
Type = Union[SimpleType, FlowType]
Statement = Union[Empty, ImportIdentifier, ExportFlow, Assignment]

for _model in (FlowExpression, MapExpression, ConfigExpression, ConstructorPattern,
               ImportIdentifier, Assignment, ExportFlow):
    _model.model_rebuild()
