"""Runtime environment for Ember.

The Environment stores bindings of names to values and supports nested scopes
via an `outer` link. Lookups and assignments walk the chain from the innermost
scope outwards; declarations always land in the scope they are made in.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from ember.errors import UndefinedVariable
from ember.types.values import Value, to_repr

Snapshot = list[dict[str, Value]]


class Environment:
    """Hierarchical mapping from names to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def child(self) -> Environment:
        """Create a nested scope whose lookups fall back to this one."""
        return Environment(self)

    def declare(self, name: str, value: Value) -> None:
        """Bind `name` in this scope, replacing or shadowing any existing binding."""
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def assign(self, name: str, value: Value) -> None:
        """Update the nearest existing binding for `name`.

        Raises UndefinedVariable if the name is not bound anywhere in the chain.
        """
        env = self.find(name)
        if env is None:
            raise UndefinedVariable(name)
        env.vars[name] = value

    def get(self, name: str) -> Optional[Value]:
        """Return the nearest binding for `name`, or None if there is none."""
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def lookup(self, name: str) -> Value:
        """Like get, but raises UndefinedVariable on a miss."""
        env = self.find(name)
        if env is None:
            raise UndefinedVariable(name)
        return env.vars[name]

    def snapshot(self) -> Snapshot:
        """Copy the bindings of every scope in the chain, innermost first."""
        frames: Snapshot = []
        env: Optional[Environment] = self
        while env is not None:
            frames.append(dict(env.vars))
            env = env.outer
        return frames

    def restore(self, frames: Snapshot) -> None:
        """Put back bindings captured by snapshot() on this same chain."""
        env: Optional[Environment] = self
        for saved in frames:
            assert env is not None, "snapshot taken from a longer scope chain"
            env.vars.clear()
            env.vars.update(saved)
            env = env.outer

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {to_repr(v)}")
            first = False
        buffer.write("}")

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                env_buf: StringIO = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
