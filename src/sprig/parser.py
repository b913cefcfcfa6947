## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import functools

import lark
from lark import v_args

from .nodes import (
    Program, Block, NumberLiteral, StringLiteral, BooleanLiteral, NullLiteral, Identifier,
    BinaryOp, UnaryOp, Call, ArrayLiteral, ObjectLiteral, Index, PropertyAccess,
    ExpressionStatement, VariableDeclaration, Assignment, If, While, For, Return, Print,
    FunctionDeclaration,
)
from .errors import SprigParseError, SprigIncompleteParse


GRAMMAR = r"""start: statement*

?statement: var_decl | fun_decl | if_stmt | while_stmt | for_stmt
          | return_stmt | print_stmt | bare_block | assign_stmt | expr_stmt

var_decl: var_clause ";"
var_clause: "let" NAME ("=" expr)?
assign_stmt: assign_clause ";"
assign_clause: postfix "=" expr
expr_stmt: expr ";"
fun_decl: "fun" NAME "(" [params] ")" block
params: NAME ("," NAME)*
if_stmt: "if" "(" expr ")" block ("else" (block | if_stmt))?
while_stmt: "while" "(" expr ")" block
for_stmt: "for" "(" [for_init] ";" [expr] ";" [for_step] ")" block
?for_init: var_clause | assign_clause | expr_clause
?for_step: assign_clause | expr_clause
expr_clause: expr
return_stmt: "return" [expr] ";"
print_stmt: PRINT expr ";"

block: "{" statement* "}"
bare_block: "{" statement+ "}"

?expr: or_expr
?or_expr: and_expr | or_expr OR and_expr -> binary
?and_expr: equality | and_expr AND equality -> binary
?equality: comparison | equality (EQ | NE) comparison -> binary
?comparison: term | comparison (LT | LE | GT | GE) term -> binary
?term: factor | term (PLUS | MINUS) factor -> binary
?factor: unary | factor (STAR | SLASH) unary -> binary
?unary: (MINUS | NOT) unary -> unary_op
      | postfix
?postfix: primary
        | postfix "[" expr "]" -> index
        | postfix "." NAME -> attribute
?primary: NUMBER -> number
        | STRING -> string
        | "true" -> true
        | "false" -> false
        | "null" -> null
        | NAME -> identifier
        | NAME "(" [arguments] ")" -> call
        | "[" [arguments] "]" -> array_literal
        | "{" [pairs] "}" -> object_literal
        | "(" expr ")"
arguments: expr ("," expr)*
pairs: pair ("," pair)* ","?
pair: (NAME | STRING) ":" expr

// TOKENS
PRINT.2: /print\b(?!\s*\()/
OR: "or"
AND: "and"
NOT: "not"
EQ: "=="
NE: "!="
LE: "<="
GE: ">="
LT: "<"
GT: ">"
PLUS: "+"
MINUS: "-"
STAR: "*"
SLASH: "/"
NUMBER: /\d+(\.\d+)?/
STRING: /"[^"]*"/
NAME: /[A-Za-z_][A-Za-z0-9_]*/

// COMMENTS & WHITESPACE
COMMENT: /\/\/[^\n]*/
%import common.WS
%ignore WS
%ignore COMMENT
"""


def _located(build):
    """Attach the source line of the matched rule to the node it produces."""
    @functools.wraps(build)
    def wrapper(self, meta, *children):
        node = build(self, *children)
        if not getattr(meta, 'empty', True):
            node.line = meta.line
        return node
    return v_args(meta=True, inline=True)(wrapper)


class ToSyntaxTree(lark.Transformer):
    """Turns the lark parse tree into `sprig.nodes` objects."""

    def __init__(self, filename=None):
        super().__init__()
        self.filename = filename

    def start(self, statements):
        return Program(list(statements))

    # Statements
    @_located
    def var_decl(self, clause): return clause
    @_located
    def var_clause(self, name, initializer=None): return VariableDeclaration(str(name), initializer)
    @_located
    def assign_stmt(self, clause): return clause
    @_located
    def expr_stmt(self, expr):
        return self._leading_print(expr) or ExpressionStatement(expr)
    @_located
    def expr_clause(self, expr): return ExpressionStatement(expr)
    @_located
    def return_stmt(self, value): return Return(value)
    @_located
    def print_stmt(self, _keyword, expr): return Print(expr)
    @_located
    def while_stmt(self, condition, body): return While(condition, body)

    @_located
    def assign_clause(self, target, value):
        match target:
            case Identifier(name=name):
                return Assignment(name, value)
            case Index() | PropertyAccess():
                root = target
                while isinstance(root, (Index, PropertyAccess)):
                    root = root.object
                return Assignment(root.name if isinstance(root, Identifier) else None, value, target)
        raise SprigParseError("Invalid assignment target.", filename=self.filename, line=target.line, token='=')

    def _leading_print(self, expr):
        """A statement such as `print (a) + b;` prints `(a) + b` rather than adding to a call."""
        parent, node = None, expr
        while isinstance(node, (BinaryOp, Index, PropertyAccess)):
            parent, node = node, node.left if isinstance(node, BinaryOp) else node.object
        if parent is None or not (isinstance(node, Call) and node.name == 'print'):
            return None
        if len(node.args) != 1:
            raise SprigParseError("Expected a single expression after `print`.", filename=self.filename, line=node.line, token='print')
        if isinstance(parent, BinaryOp): parent.left = node.args[0]
        else: parent.object = node.args[0]
        return Print(expr)

    @_located
    def fun_decl(self, name, params, body):
        return FunctionDeclaration(str(name), params or [], body)

    def params(self, names):
        return [str(n) for n in names]

    @_located
    def if_stmt(self, condition, then_block, else_branch=None):
        # `else if` chains nest as an else-block holding a single `if`.
        if isinstance(else_branch, If):
            else_branch = Block([else_branch], line=else_branch.line)
        return If(condition, then_block, else_branch)

    @_located
    def for_stmt(self, init, condition, increment, body):
        return For(init, condition, increment, body)

    @_located
    def block(self, *statements): return Block(list(statements))
    @_located
    def bare_block(self, *statements): return Block(list(statements))

    # Expressions
    @_located
    def binary(self, left, op, right): return BinaryOp(left, str(op), right)
    @_located
    def unary_op(self, op, operand): return UnaryOp(str(op), operand)
    @_located
    def index(self, obj, index): return Index(obj, index)
    @_located
    def attribute(self, obj, name): return PropertyAccess(obj, str(name))
    @_located
    def number(self, token): return NumberLiteral(float(token))
    @_located
    def string(self, token): return StringLiteral(str(token)[1:-1])
    @_located
    def true(self): return BooleanLiteral(True)
    @_located
    def false(self): return BooleanLiteral(False)
    @_located
    def null(self): return NullLiteral()
    @_located
    def identifier(self, name): return Identifier(str(name))
    @_located
    def call(self, name, args): return Call(str(name), args or [])
    @_located
    def array_literal(self, elements): return ArrayLiteral(elements or [])
    @_located
    def object_literal(self, pairs): return ObjectLiteral(pairs or [])

    def arguments(self, exprs):
        return list(exprs)

    def pairs(self, items):
        return list(items)

    @v_args(inline=True)
    def pair(self, key, value):
        key = str(key)
        return (key[1:-1] if key.startswith('"') else key, value)


@functools.cache
def _get_parser() -> lark.Lark:
    return lark.Lark(GRAMMAR, start='start', parser="lalr", lexer="contextual", propagate_positions=True)


def parse(source: str, filename=None) -> Program:
    try:
        tree = _get_parser().parse(source)
    except lark.exceptions.UnexpectedInput as exc:
        def attr(k): return getattr(exc, k, None)
        token_val = getattr(token, 'value', '') if (token := attr('token')) is not None else ''
        # Running out of input mid-statement is reported separately, so a REPL can keep reading.
        error_class = SprigIncompleteParse if isinstance(exc, lark.exceptions.UnexpectedEOF) or \
            (token is not None and token.type == '$END') else SprigParseError
        line = attr('line') if attr('line') not in (None, -1) else source.count('\n') + 1
        raise error_class(str(exc), filename=filename, line=line, column=attr('column'), token=token_val) from None
    try:
        return ToSyntaxTree(filename=filename).transform(tree)
    except lark.exceptions.VisitError as exc:
        if isinstance(exc.orig_exc, SprigParseError):
            raise exc.orig_exc from None
        raise


def format_parse_error_context(filename, line, column, token_value, source=None):
    lines = source.splitlines(keepends=True) if source else open(filename, 'r').readlines()
    if not lines: return ''
    line = max(1, min(line or 1, len(lines)))
    column = column if isinstance(column, int) else 0
    token_value = token_value or ''
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column > 0 and column <= len(line_content) and token_value:
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+len(token_value)-1]}\033[0m" +
                    line_content[column+len(token_value)-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
