"""
Tests for the immutable AST models in appflow.ast.
"""
import pytest
from pydantic import ValidationError

from appflow import parse

from appflow.ast import (
    Assignment,
    ConfigExpression,
    ConstructorPattern,
    Empty,
    FlowExpression,
    Identifier,
    Literal,
    MapExpression,
    SimpleType,
)


def test_nodes_are_frozen():
    node = Identifier(name="foo")
    with pytest.raises(ValidationError):
        node.name = "bar"


def test_structural_equality():
    assert Identifier(name="a") == Identifier(name="a")
    assert Identifier(name="1") != Literal(text="1")
    assert Empty() == Empty()


def test_matchable_nodes_are_hashable():
    key = ConstructorPattern(name=Identifier(name="Some"), args=(Literal(text="1"),))
    same = ConstructorPattern(name=Identifier(name="Some"), args=[Literal(text="1")])
    assert hash(key) == hash(same)
    assert len({key, same, Identifier(name="x")}) == 2


def test_flow_expression_needs_two_parts():
    with pytest.raises(ValidationError):
        FlowExpression(parts=[Identifier(name="a")])
    flow = FlowExpression(parts=[Identifier(name="a"), Literal(text="2")])
    assert flow.parts == (Identifier(name="a"), Literal(text="2"))


def test_map_keys_must_be_matchable():
    """A flow is an expression but not a pattern."""
    flow = FlowExpression(parts=[Identifier(name="a"), Identifier(name="b")])
    with pytest.raises(ValidationError):
        MapExpression(entries=[(flow, Identifier(name="c"))])


def test_map_entries_keep_duplicates_in_order():
    entries = [
        (Literal(text="1"), Identifier(name="a")),
        (Literal(text="1"), Identifier(name="b")),
    ]
    node = MapExpression(entries=entries)
    assert [value.name for _, value in node.entries] == ["a", "b"]


def test_config_values_must_be_simple():
    nested = MapExpression()
    with pytest.raises(ValidationError):
        ConfigExpression(name=Identifier(name="w"), properties=[(Identifier(name="p"), nested)])


def test_assignment_declared_type_is_optional():
    plain = Assignment(name=Identifier(name="x"), value=Identifier(name="y"))
    typed = Assignment(name=Identifier(name="x"), declared_type=SimpleType(name=Identifier(name="T")),
                       value=Identifier(name="y"))
    assert plain.declared_type is None
    assert typed.declared_type == SimpleType(name=Identifier(name="T"))


def test_config_properties_accept_mapping_or_pairs():
    a, b = Identifier(name="a"), Identifier(name="b")
    from_pairs = ConfigExpression(name=Identifier(name="w"), properties=[(a, Literal(text="1")), (b, a),
                                                                         (a, Literal(text="3"))])
    from_mapping = ConfigExpression(name=Identifier(name="w"), properties={a: Literal(text="3"), b: a})
    assert from_pairs == from_mapping
    assert from_pairs.properties == ((a, Literal(text="3")), (b, a))


def test_config_properties_cannot_be_mutated():
    (stmt,) = parse("x = w ( a = 1 ) ;")
    config = stmt.value
    with pytest.raises(TypeError):
        config.property_map[Identifier(name="z")] = Literal(text="9")
    with pytest.raises(ValidationError):
        config.properties = ()
    assert config.property_map == {Identifier(name="a"): Literal(text="1")}


def test_parsed_statements_are_hashable():
    (stmt,) = parse("x = { 1 : w ( a = 1 ) -> b } ;")
    (again,) = parse("x = { 1 : w ( a = 1 ) -> b } ;")
    assert hash(stmt) == hash(again)
    assert len({stmt, again}) == 1
