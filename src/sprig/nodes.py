## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Syntax tree for sprig programs.  Two closed families of node classes, expressions
# and statements, each a plain dataclass so the evaluator can `match` on them.
#

import copy
from dataclasses import dataclass, field


@dataclass
class Node:
    # Source line from the parser, for error reports; never part of node identity.
    line: int | None = field(default=None, kw_only=True, compare=False, repr=False)

    def clone(self):
        """Structural copy of this node and everything it owns."""
        return copy.deepcopy(self)


class Expression(Node): pass
class Statement(Node): pass


## EXPRESSIONS
@dataclass
class NumberLiteral(Expression):
    value: float

@dataclass
class StringLiteral(Expression):
    value: str

@dataclass
class BooleanLiteral(Expression):
    value: bool

@dataclass
class NullLiteral(Expression):
    pass

@dataclass
class Identifier(Expression):
    name: str

@dataclass
class BinaryOp(Expression):
    left: Expression
    op: str
    right: Expression

@dataclass
class UnaryOp(Expression):
    op: str
    operand: Expression

@dataclass
class Call(Expression):
    name: str
    args: list[Expression] = field(default_factory=list)

@dataclass
class ArrayLiteral(Expression):
    elements: list[Expression] = field(default_factory=list)

@dataclass
class ObjectLiteral(Expression):
    pairs: list[tuple[str, Expression]] = field(default_factory=list)

@dataclass
class Index(Expression):
    object: Expression
    index: Expression

@dataclass
class PropertyAccess(Expression):
    object: Expression
    name: str


## STATEMENTS
@dataclass
class ExpressionStatement(Statement):
    expression: Expression

@dataclass
class VariableDeclaration(Statement):
    name: str
    initializer: Expression | None = None

@dataclass
class Assignment(Statement):
    """Assign to a variable `name`, or through `target` into an array slot or object property.

    When `target` is set it is an `Index` or `PropertyAccess`, and `name` is the variable
    at the root of that target if there is one (only used in messages).
    """
    name: str | None
    value: Expression
    target: Index | PropertyAccess | None = None

@dataclass
class Block(Statement):
    statements: list[Statement] = field(default_factory=list)

@dataclass
class If(Statement):
    condition: Expression
    then_block: Block
    else_block: Block | None = None

@dataclass
class While(Statement):
    condition: Expression
    body: Block

@dataclass
class For(Statement):
    init: Statement | None
    condition: Expression | None
    increment: Statement | None
    body: Block

@dataclass
class Return(Statement):
    value: Expression | None = None

@dataclass
class Print(Statement):
    expression: Expression

@dataclass
class FunctionDeclaration(Statement):
    name: str
    params: list[str]
    body: Block


@dataclass
class Program(Node):
    statements: list[Statement] = field(default_factory=list)
