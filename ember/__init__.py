# Ember: a small expression language.
#
# Pipeline: lex (text -> tokens), parse (tokens -> syntax tree),
# evaluate (syntax tree + Environment -> value). The Interpreter ties the
# three together and keeps one global Environment per session.

__version__ = "0.1.0"

from ember.reader.lexer import lex
from ember.reader.parser import parse, parse_program
from ember.evaluation.evaluator import evaluate
from ember.types.environment import Environment
from ember.interpreter import Interpreter

__all__ = [
    'lex',
    'parse',
    'parse_program',
    'evaluate',
    'Environment',
    'Interpreter',
    '__version__',
]
