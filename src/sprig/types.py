## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .nodes import Block


@dataclass(eq=False)
class Function:
    """User-defined function; owns its own copy of the declared body."""
    name: str
    params: list[str]
    body: Block

    def __repr__(self):
        return f"<function {self.name}>"


@dataclass(eq=False)
class Builtin:
    """Host function exposed to scripts.  Arity of -1 accepts any number of arguments.

    Results of untrusted builtins are converted to script values before scripts see them.
    """
    name: str
    fn: Callable[..., Any]
    arity: int
    meta: dict = field(default_factory=dict)
    trusted: bool = False

    def __repr__(self):
        return f"<builtin {self.name}>"


# The Python type is the variant tag: Number is always `float`, Nil is `None`, and the
# array and object variants are plain `list` and `dict` so that every copy of a value
# shares the same storage.
Value = float | str | bool | None | list | dict | Function | Builtin


@dataclass(frozen=True)
class Returning:
    """Outcome of a statement that executed `return`; `None` is the normal outcome."""
    value: Value

Outcome = Returning | None


def is_number(value: Any) -> bool:
    # `bool` is a subclass of `int`, never of `float`.
    return isinstance(value, float)

def is_callable(value: Any) -> bool:
    return isinstance(value, (Function, Builtin))


TYPE_NAMES: dict[type, str] = {
    float: 'number', str: 'string', bool: 'boolean', type(None): 'null',
    list: 'array', dict: 'object', Function: 'function', Builtin: 'function',
}

def type_name(value: Value) -> str:
    return TYPE_NAMES.get(type(value), type(value).__name__)
