## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math
import dataclasses

from .nodes import Node
from .types import Value, Function, Builtin


def format_number(x: float) -> str:
    if math.isnan(x): return 'nan'
    if math.isinf(x): return 'inf' if x > 0 else '-inf'
    if x.is_integer() and abs(x) < 1e16:
        return str(int(x))
    return repr(x)

def _to_string(value: Value, seen: set) -> str:
    if value is None: return 'null'
    if isinstance(value, bool): return 'true' if value else 'false'
    if isinstance(value, float): return format_number(value)
    if isinstance(value, str): return value
    if isinstance(value, (list, dict)):
        lhs, rhs = ('[', ']') if isinstance(value, list) else ('{', '}')
        if id(value) in seen: return lhs + '...' + rhs
        seen = seen | {id(value)}
        if isinstance(value, list):
            items = (_to_string(v, seen) for v in value)
        else:
            items = (f"{k}: {_to_string(v, seen)}" for k, v in value.items())
        return lhs + ', '.join(items) + rhs
    if isinstance(value, (Function, Builtin)): return repr(value)
    return str(value)

def to_string(value: Value) -> str:
    """Display form of any runtime value, as used by `print` and by `==`."""
    return _to_string(value, frozenset())


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def _node_label(node: Node) -> str:
    scalars = [f.name for f in dataclasses.fields(node) if f.name != 'line']
    args = []
    for name in scalars:
        v = getattr(node, name)
        if name == 'params':
            args.append('(' + ', '.join(v) + ')')
        elif isinstance(v, (Node, list)) or v is None:
            continue
        elif isinstance(v, str):
            args.append(repr(v))
        else:
            args.append(to_string(v))
    return type(node).__name__ + (' ' + ' '.join(args) if args else '')

def _node_children(node: Node):
    for f in dataclasses.fields(node):
        v = getattr(node, f.name)
        if isinstance(v, Node):
            yield f.name, v
        elif isinstance(v, list):
            for item in v:
                # Object literal pairs are (key, expression).
                if isinstance(item, tuple): yield repr(item[0]), item[1]
                elif isinstance(item, Node): yield None, item

def format_tree(node: Node, indent: int = 0) -> str:
    """Indented outline of a syntax tree, one node per line."""
    lines = [' ' * indent + _node_label(node)]
    for label, child in _node_children(node):
        if label is not None and label not in ('statements', 'elements', 'args'):
            lines.append(' ' * (indent + 2) + f"{label}:")
            lines.append(format_tree(child, indent + 4))
        else:
            lines.append(format_tree(child, indent + 2))
    return '\n'.join(lines)

def format_statement(node: Node, width: int = 72) -> str:
    """Single-line summary of a statement, for execution traces."""
    text = _node_label(node)
    if node.line is not None:
        text += f"  @{node.line}"
    return text if len(text) <= width else text[:width-2] + ' …'
