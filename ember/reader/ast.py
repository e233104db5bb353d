"""Syntax tree produced by the parser.

One statement parses to one tree. Nodes own their children; nothing is shared
between trees.
"""

from __future__ import annotations

from dataclasses import dataclass

from ember.reader.tokens import Op
from ember.types.values import Value


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Literal(Node):
    value: Value


@dataclass(frozen=True)
class UnaryOp(Node):
    op: Op
    operand: Node


@dataclass(frozen=True)
class BinaryOp(Node):
    left: Node
    op: Op
    right: Node


@dataclass(frozen=True)
class VariableDeclare(Node):
    name: str
    initializer: Node


@dataclass(frozen=True)
class VariableAssign(Node):
    name: str
    value: Node


@dataclass(frozen=True)
class VariableAccess(Node):
    name: str
