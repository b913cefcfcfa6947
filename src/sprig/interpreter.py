## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
import operator
from typing import Callable

from .nodes import (
    Expression, Statement, Program, Block,
    NumberLiteral, StringLiteral, BooleanLiteral, NullLiteral, Identifier, BinaryOp, UnaryOp,
    Call, ArrayLiteral, ObjectLiteral, Index, PropertyAccess,
    ExpressionStatement, VariableDeclaration, Assignment, If, While, For, Return, Print,
    FunctionDeclaration,
)
from .types import Value, Function, Builtin, Returning, Outcome, is_number, is_callable, type_name
from .scope import Scope
from .errors import (
    SprigError, SprigTypeMismatch, SprigDivisionByZero, SprigIndexOutOfBounds,
    SprigPropertyNotFound, SprigArityMismatch, SprigNotAFunction, SprigRecursionDepth,
)
from .formatting import to_string, format_statement
from .builtins import from_host


ARITHMETIC = {'-': operator.sub, '*': operator.mul, '/': operator.truediv}
COMPARISON = {'<': operator.lt, '>': operator.gt, '<=': operator.le, '>=': operator.ge}


def _mismatch(op: str, *operands: Value) -> SprigTypeMismatch:
    types = ' and '.join(type_name(v) for v in operands)
    return SprigTypeMismatch(f"Operator `{op}` is not defined for {types}.", token=op)


class Evaluator:
    """Tree-walking evaluator holding the global frame that persists across `interpret` calls."""

    def __init__(self, write_line: Callable[[str], None] | None = None, verbosity: int = 0):
        self.globals = Scope()
        self.write_line = write_line or print
        self.verbosity = verbosity
        self.steps = 0

    def set_global(self, name: str, value: Value) -> None:
        self.globals.define(name, value)

    def get_global(self, name: str) -> Value:
        return self.globals.get(name)

    def interpret(self, program: Program, on_error: Callable[[SprigError], None] | None = None,
                  stats: dict | None = None) -> Value:
        """Run every top-level statement in the global frame.

        Stops at the first error unless `on_error` is given, in which case the error is handed
        over and execution resumes with the next top-level statement.  A top-level `return`
        ends the program early and its value is returned.
        """
        start, result = self.steps, None
        for stmt in program.statements:
            if self.verbosity == 1:
                self._trace(stmt, self.globals)
            try:
                try:
                    outcome = self.execute(stmt, self.globals)
                except RecursionError:
                    raise SprigRecursionDepth("Function calls nested too deeply.", line=stmt.line) from None
            except SprigError as exc:
                if on_error is None: raise
                on_error(exc)
                continue
            if outcome is not None:
                result = outcome.value
                break

        if stats is not None:
            stats['steps'] = stats.get('steps', 0) + self.steps - start
        return result

    def _trace(self, stmt: Statement, scope: Scope) -> None:
        print(f"\033[90m{self.steps:>3} :\033[0m  " + '  ' * scope.depth() + format_statement(stmt))

    # Statements ──────────────────────────────────────────────────────────────────────────────
    def execute(self, stmt: Statement, scope: Scope) -> Outcome:
        if self.verbosity >= 2:
            self._trace(stmt, scope)
        self.steps += 1
        try:
            return self._execute(stmt, scope)
        except SprigError as exc:
            if exc.line is None: exc.line = stmt.line
            raise

    def execute_block(self, block: Block, frame: Scope) -> Outcome:
        for stmt in block.statements:
            if (outcome := self.execute(stmt, frame)) is not None:
                return outcome
        return None

    def _execute(self, stmt: Statement, scope: Scope) -> Outcome:
        match stmt:
            case ExpressionStatement(expression=expression):
                self.evaluate(expression, scope)

            case VariableDeclaration(name=name, initializer=initializer):
                scope.define(name, None if initializer is None else self.evaluate(initializer, scope))

            case Assignment(name=name, value=value, target=None):
                scope.set(name, self.evaluate(value, scope))

            case Assignment(value=value, target=Index(object=obj, index=index)):
                value = self.evaluate(value, scope)
                array = self.evaluate(obj, scope)
                array[self._array_slot(array, self.evaluate(index, scope))] = value

            case Assignment(value=value, target=PropertyAccess(object=obj, name=key)):
                value = self.evaluate(value, scope)
                if not isinstance(target := self.evaluate(obj, scope), dict):
                    raise SprigTypeMismatch(f"Cannot set property `{key}` on {type_name(target)}.", token=key)
                target[key] = value

            case Block():
                return self.execute_block(stmt, scope.child())

            case If(condition=condition, then_block=then_block, else_block=else_block):
                if self._condition(condition, scope):
                    return self.execute_block(then_block, scope.child())
                if else_block is not None:
                    return self.execute_block(else_block, scope.child())

            case While(condition=condition, body=body):
                while self._condition(condition, scope):
                    if (outcome := self.execute_block(body, scope.child())) is not None:
                        return outcome

            case For(init=init, condition=condition, increment=increment, body=body):
                # Loop variables live in one frame around the whole loop, each pass gets its own.
                loop = scope.child()
                if init is not None:
                    self.execute(init, loop)
                while condition is None or self._condition(condition, loop):
                    if (outcome := self.execute_block(body, loop.child())) is not None:
                        return outcome
                    if increment is not None:
                        self.execute(increment, loop)

            case Return(value=value):
                return Returning(None if value is None else self.evaluate(value, scope))

            case Print(expression=expression):
                self.write_line(to_string(self.evaluate(expression, scope)))

            case FunctionDeclaration(name=name, params=params, body=body):
                scope.define(name, Function(name, list(params), body.clone()))

            case _:
                raise NotImplementedError(f"Unknown statement {type(stmt).__name__}.")
        return None

    def _condition(self, expr: Expression, scope: Scope) -> bool:
        # Only `true` passes; every non-boolean value counts as false.
        return self.evaluate(expr, scope) is True

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def evaluate(self, expr: Expression, scope: Scope) -> Value:
        match expr:
            case NumberLiteral(value=value):
                return float(value)
            case StringLiteral(value=value) | BooleanLiteral(value=value):
                return value
            case NullLiteral():
                return None
            case Identifier(name=name):
                return scope.get(name)
            case BinaryOp(left=left, op=op, right=right):
                # Both sides are always evaluated, `and` / `or` included.
                lhs = self.evaluate(left, scope)
                rhs = self.evaluate(right, scope)
                return self._binary(op, lhs, rhs)
            case UnaryOp(op=op, operand=operand):
                return self._unary(op, self.evaluate(operand, scope))
            case Call():
                return self._call(expr, scope)
            case ArrayLiteral(elements=elements):
                return [self.evaluate(e, scope) for e in elements]
            case ObjectLiteral(pairs=pairs):
                return {key: self.evaluate(e, scope) for key, e in pairs}
            case Index(object=obj, index=index):
                array = self.evaluate(obj, scope)
                return array[self._array_slot(array, self.evaluate(index, scope))]
            case PropertyAccess(object=obj, name=name):
                if not isinstance(target := self.evaluate(obj, scope), dict):
                    raise SprigTypeMismatch(f"Cannot read property `{name}` of {type_name(target)}.", token=name)
                if name not in target:
                    raise SprigPropertyNotFound(f"Object has no property `{name}`.", token=name)
                return target[name]
            case _:
                raise NotImplementedError(f"Unknown expression {type(expr).__name__}.")

    def _binary(self, op: str, lhs: Value, rhs: Value) -> Value:
        if op == '+':
            if is_number(lhs) and is_number(rhs):
                return lhs + rhs
            if isinstance(lhs, str) or isinstance(rhs, str):
                return to_string(lhs) + to_string(rhs)
            raise _mismatch(op, lhs, rhs)
        if op in ('==', '!='):
            return (to_string(lhs) == to_string(rhs)) == (op == '==')
        if op in ('and', 'or'):
            if not (isinstance(lhs, bool) and isinstance(rhs, bool)):
                raise _mismatch(op, lhs, rhs)
            return (lhs and rhs) if op == 'and' else (lhs or rhs)

        if op not in ARITHMETIC and op not in COMPARISON:
            raise NotImplementedError(f"Unknown binary operator `{op}`.")
        if not (is_number(lhs) and is_number(rhs)):
            raise _mismatch(op, lhs, rhs)
        if op == '/' and rhs == 0:
            raise SprigDivisionByZero("Division by zero.", token=op)
        return (ARITHMETIC.get(op) or COMPARISON[op])(lhs, rhs)

    def _unary(self, op: str, operand: Value) -> Value:
        if op == 'not':
            if not isinstance(operand, bool): raise _mismatch(op, operand)
            return not operand
        if op == '-':
            if not is_number(operand): raise _mismatch(op, operand)
            return -operand
        raise NotImplementedError(f"Unknown unary operator `{op}`.")

    def _array_slot(self, array: Value, index: Value) -> int:
        if not isinstance(array, list):
            raise SprigTypeMismatch(f"Cannot index into {type_name(array)}.")
        if not is_number(index):
            raise SprigTypeMismatch(f"Array index must be a number, got {type_name(index)}.")
        if not math.isfinite(index) or not (0 <= (slot := int(index)) < len(array)):
            raise SprigIndexOutOfBounds(f"Index {to_string(index)} is out of bounds for array of length {len(array)}.")
        return slot

    def _call(self, call: Call, scope: Scope) -> Value:
        if call.name == 'print':
            self.write_line(' '.join(to_string(self.evaluate(a, scope)) for a in call.args))
            return None

        callee = scope.get(call.name)
        if not is_callable(callee):
            raise SprigNotAFunction(f"`{call.name}` is {type_name(callee)}, not a function.", token=call.name)

        expected = callee.arity if isinstance(callee, Builtin) else len(callee.params)
        if expected >= 0 and len(call.args) != expected:
            raise SprigArityMismatch(
                f"`{call.name}` takes {expected} argument(s), but {len(call.args)} given.", token=call.name)
        args = [self.evaluate(a, scope) for a in call.args]

        if isinstance(callee, Builtin):
            result = callee.fn(*args)
            return result if callee.trusted else from_host(result)

        # Functions see the globals and their parameters only, never the caller's locals.
        frame = self.globals.child()
        for name, value in zip(callee.params, args):
            frame.define(name, value)
        outcome = self.execute_block(callee.body, frame)
        return None if outcome is None else outcome.value
