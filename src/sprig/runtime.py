## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable

from .nodes import Program
from .types import Value, Builtin
from .errors import SprigError
from .parser import parse
from .interpreter import Evaluator
from .builtins import load_builtins, make_builtin, to_value as _to_value, from_value as _from_value


class Runtime:
    """Minimal runtime facade focused on embedding and extension."""

    def __init__(self, write_line: Callable[[str], None] | None = None, builtins: bool = True):
        self.evaluator = Evaluator(write_line=write_line)
        if builtins:
            for name, builtin in load_builtins().items():
                self.evaluator.set_global(name, builtin)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def parse(self, source: str, filename: str | None = None) -> Program:
        return parse(source, filename=filename)

    def run(self, source: str, filename: str | None = None, verbosity: int = 0,
            stats: dict | None = None, on_error: Callable[[SprigError], None] | None = None) -> Value:
        return self.interpret(parse(source, filename=filename), verbosity=verbosity, stats=stats, on_error=on_error)

    def interpret(self, program: Program, verbosity: int = 0, stats: dict | None = None,
                  on_error: Callable[[SprigError], None] | None = None) -> Value:
        self.evaluator.verbosity = verbosity
        return self.evaluator.interpret(program, on_error=on_error, stats=stats)

    # Globals ─────────────────────────────────────────────────────────────────────────────────
    def set_global(self, name: str, value: Any) -> None:
        self.evaluator.set_global(name, _to_value(value))

    def get_global(self, name: str) -> Value:
        return self.evaluator.get_global(name)

    def has_global(self, name: str) -> bool:
        return self.evaluator.globals.exists(name)

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_operation(self, name: str, func: Callable) -> None:
        self.evaluator.set_global(name, make_builtin(name, func))

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def list_operations(self) -> dict[str, dict]:
        return {n: {'arity': v.arity, **v.meta} for n, v in self.evaluator.globals.variables.items()
                if isinstance(v, Builtin)}

    def to_value(self, x: Any) -> Value:
        return _to_value(x)

    def from_value(self, v: Value) -> Any:
        return _from_value(v)
