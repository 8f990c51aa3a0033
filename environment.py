"""Lexical environments for the evaluator.

An `Environment` is one frame of bindings (`store`) plus an optional link to
the enclosing frame (`outer`). Lookups walk the chain outward; bindings are
only ever written into the frame they are made in, so an inner `let` shadows
an outer binding without touching it.

A fresh root environment is created per program run and a new frame per
function call, enclosed by the environment the function captured when it was
defined. Frames only point outward, never back at their children, so plain
reference counting keeps a frame alive exactly as long as some closure or
nested frame still refers to it.
"""

from __future__ import annotations
from typing import Dict, Optional, TYPE_CHECKING
from errors import EvalNameError

if TYPE_CHECKING:
    from objects import Object


class Environment:
    def __init__(self, outer: Optional[Environment] = None):
        self.store: Dict[str, Object] = {}
        self.outer = outer

    @classmethod
    def new_enclosed(cls, outer: Environment) -> Environment:
        """Create a frame whose lookups fall back to `outer`."""
        return cls(outer=outer)

    def get(self, name: str) -> Object:
        """Look up a name in this frame and then in the enclosing ones."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        raise EvalNameError(name)

    def set(self, name: str, value: Object) -> Object:
        """Bind `name` in this frame, replacing any previous binding here."""
        self.store[name] = value
        return value

    def contains_local(self, name: str) -> bool:
        """Check if name is bound in this frame only."""
        return name in self.store

    def contains(self, name: str) -> bool:
        """Check if name is bound anywhere along the chain."""
        if name in self.store:
            return True
        elif self.outer:
            return self.outer.contains(name)
        return False

    def depth(self) -> int:
        """Number of frames between this one and the root (root is 0)."""
        return 0 if self.outer is None else self.outer.depth() + 1

    def __repr__(self) -> str:
        names = ", ".join(sorted(self.store))
        return f"Environment([{names}], depth={self.depth()})"
