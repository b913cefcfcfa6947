## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from typing import Any, Callable

from . import operators
from .types import Value, Builtin, Function
from .errors import SprigRegistrationError


def get_script_name(py_name: str) -> str:
    """Map an `op_*` Python function name to the name scripts call it by."""
    if not py_name.startswith("op_"):
        raise SprigRegistrationError(f"Operator function `{py_name}` requires prefix `op_` by convention.", token=py_name)
    return py_name[3:]


def get_arity(fn: Callable, name: str = None) -> int:
    """Number of arguments a script must pass, or -1 when the function takes `*args`.

    Keyword-only parameters without defaults can't be supplied from a script call, so they're
    rejected up front rather than failing on first use.
    """
    op_name = name or getattr(fn, '__name__', '<unnamed>')
    params = list(inspect.signature(fn).parameters.values())
    if any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params):
        return -1
    if missing := [p.name for p in params if p.kind == inspect.Parameter.KEYWORD_ONLY and p.default is inspect._empty]:
        raise SprigRegistrationError(f"Operation `{op_name}` has required keyword-only parameters: {', '.join(missing)}.", token=op_name)
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return len([p for p in params if p.kind in positional])


def make_builtin(name: str, fn: Callable[..., Any], trusted: bool = False) -> Builtin:
    return Builtin(name, fn, get_arity(fn, name), meta={'doc': inspect.getdoc(fn) or ''}, trusted=trusted)


def load_builtins() -> dict[str, Builtin]:
    table = {}
    for k in dir(operators):
        if not k.startswith('op_'): continue
        name = get_script_name(k)
        table[name] = make_builtin(name, getattr(operators, k), trusted=True)
    return table


def to_value(x: Any) -> Value:
    """Convert host Python data into a script value; lists and dicts are copied."""
    if x is None or isinstance(x, (bool, str, float, Builtin, Function)): return x
    if isinstance(x, int): return float(x)
    if isinstance(x, (list, tuple)): return [to_value(v) for v in x]
    if isinstance(x, dict): return {str(k): to_value(v) for k, v in x.items()}
    if callable(x): return make_builtin(getattr(x, '__name__', '<lambda>'), x)
    raise SprigRegistrationError(f"Cannot convert {type(x).__name__} to a script value.")


def is_value(x: Any, seen: frozenset = frozenset()) -> bool:
    """True when `x` is already made of script values only, shared containers included."""
    if x is None or isinstance(x, (bool, str, float, Builtin, Function)): return True
    if not isinstance(x, (list, dict)): return False
    if id(x) in seen: return True
    seen = seen | {id(x)}
    if isinstance(x, list): return all(is_value(v, seen) for v in x)
    return all(isinstance(k, str) and is_value(v, seen) for k, v in x.items())


def from_host(x: Any) -> Value:
    """Result of a host call; script values pass through so arrays handed back stay shared."""
    return x if is_value(x) else to_value(x)


def from_value(v: Value) -> Any:
    """Convert a script value into plain Python data; integral numbers become `int`."""
    if isinstance(v, float) and v.is_integer(): return int(v)
    if isinstance(v, list): return [from_value(x) for x in v]
    if isinstance(v, dict): return {k: from_value(x) for k, x in v.items()}
    return v
