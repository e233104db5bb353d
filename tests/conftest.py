import pytest

from ember.interpreter import Interpreter
from ember.types.environment import Environment


@pytest.fixture
def env():
    """Fresh global environment."""
    return Environment()


@pytest.fixture
def interp(env):
    """Interpreter session bound to the `env` fixture."""
    return Interpreter(env)


@pytest.fixture
def run(interp):
    """Evaluate source text in the shared session and return the last value."""
    return interp.eval
