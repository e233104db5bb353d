"""Tree-walking evaluator for Ember.

Operands are evaluated strictly left to right; the only side effects are the
bindings written by declarations and assignments.
"""

from __future__ import annotations

from ember.evaluation.operators import BINARY_OPERATORS, UNARY_OPERATORS
from ember.reader.ast import (
    BinaryOp,
    Literal,
    Node,
    UnaryOp,
    VariableAccess,
    VariableAssign,
    VariableDeclare,
)
from ember.types.environment import Environment
from ember.types.values import Value


def evaluate(node: Node, env: Environment) -> Value:
    """Evaluate one syntax tree against `env`, raising an EvaluationError on failure."""
    match node:
        case Literal(value=value):
            return value

        case UnaryOp(op=op, operand=operand):
            handler = UNARY_OPERATORS.get(op)
            assert handler is not None, f"parser produced unary {op}"
            return handler(evaluate(operand, env))

        case BinaryOp(left=left, op=op, right=right):
            handler = BINARY_OPERATORS.get(op)
            assert handler is not None, f"parser produced binary {op}"
            lhs = evaluate(left, env)
            rhs = evaluate(right, env)
            return handler(lhs, rhs)

        case VariableDeclare(name=name, initializer=initializer):
            value = evaluate(initializer, env)
            env.declare(name, value)
            return value

        case VariableAssign(name=name, value=value_node):
            value = evaluate(value_node, env)
            env.assign(name, value)
            return value

        case VariableAccess(name=name):
            return env.lookup(name)

    raise AssertionError(f"unknown syntax node {node!r}")
