from __future__ import annotations

import logging
from pathlib import Path

from ember.errors import EmberError, EvaluationError, LexError, ParseError
from ember.evaluation.evaluator import evaluate
from ember.reader.lexer import lex
from ember.reader.parser import parse_program
from ember.types.environment import Environment
from ember.types.values import Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates lexing, parsing and evaluating Ember code.
    Maintains one global Environment across calls, so a REPL session or a
    file run sees every binding made earlier in the same session.
    """

    def __init__(self, env: Environment | None = None):
        self.env: Environment = env if env is not None else Environment()

    def eval(self, code: str) -> Value | None:
        """Evaluate every ';'-separated statement in `code`; return the last value.

        Returns None when `code` holds no statements. If any statement fails,
        the Environment is rolled back to its state before the call.
        """
        statements = parse_program(lex(code))
        checkpoint = self.env.snapshot()
        result: Value | None = None
        try:
            for statement in statements:
                result = self._evaluate(statement)
        except BaseException:
            # any failure, Ember or not, leaves the session as it was
            self.env.restore(checkpoint)
            raise
        logger.debug("env after eval: %r", self.env)
        return result

    def _evaluate(self, node) -> Value:
        try:
            return evaluate(node, self.env)
        except RecursionError:
            raise EvaluationError("expression is nested too deeply") from None


def run_file(path: str | Path) -> Value | None:
    """Run a source file against a fresh session; return the value of its last statement."""
    source = Path(path).read_text(encoding='utf-8')
    logger.info("running %s (%d chars)", path, len(source))
    return Interpreter().eval(source)


def describe_error(err: EmberError) -> str:
    """One-line report for an error, prefixed by the stage that raised it."""
    if isinstance(err, LexError):
        return f"Lex error: {err}"
    if isinstance(err, ParseError):
        return f"Parse error: {err}"
    return f"Runtime error: {err}"
