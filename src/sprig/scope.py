## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass, field

from .types import Value
from .errors import SprigUndefinedVariable


@dataclass(eq=False)
class Scope:
    """One frame of variable bindings, linked to its enclosing frame.

    `define` always writes into this frame, shadowing any outer binding of the same name.
    `get` and `set` walk outwards and act on the first frame that has the name.
    """
    variables: dict[str, Value] = field(default_factory=dict)
    parent: "Scope | None" = None

    def child(self) -> "Scope":
        return Scope(parent=self)

    def define(self, name: str, value: Value) -> None:
        self.variables[name] = value

    def _resolve(self, name: str) -> "Scope | None":
        frame = self
        while frame is not None:
            if name in frame.variables:
                return frame
            frame = frame.parent
        return None

    def get(self, name: str) -> Value:
        if (frame := self._resolve(name)) is None:
            raise SprigUndefinedVariable(f"Undefined variable `{name}`.", token=name)
        return frame.variables[name]

    def set(self, name: str, value: Value) -> None:
        if (frame := self._resolve(name)) is None:
            raise SprigUndefinedVariable(f"Cannot assign to undefined variable `{name}`.", token=name)
        frame.variables[name] = value

    def exists(self, name: str) -> bool:
        return self._resolve(name) is not None

    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth() + 1
