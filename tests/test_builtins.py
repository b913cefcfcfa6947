## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from sprig.runtime import Runtime
from sprig.builtins import get_script_name, get_arity, load_builtins, to_value, from_value
from sprig.types import Builtin
from sprig.errors import SprigRegistrationError, SprigArityMismatch, SprigTypeMismatch, SprigIndexOutOfBounds


def run(source: str):
    out = []
    Runtime(write_line=out.append).run(source)
    return out


@pytest.mark.parametrize("source, expected", [
    ("print len([1, 2, 3]);", "3"),
    ("print len(\"abcd\");", "4"),
    ("print len({a: 1});", "1"),
    ("print keys({b: 1, a: 2});", "[b, a]"),
    ("print has({a: 1}, \"a\");", "true"),
    ("print has({a: 1}, \"z\");", "false"),
    ("print join([\"a\", 1, true], \"-\");", "a-1-true"),
    ("print range(3);", "[0, 1, 2]"),
    ("print range(0);", "[]"),
    ("print str(1.5) + \"!\";", "1.5!"),
    ("print num(\"42\") + 1;", "43"),
    ("print num(\"nope\");", "null"),
    ("print num(7);", "7"),
    ("print type([]);", "array"),
    ("print type({});", "object"),
    ("print type(len);", "function"),
    ("print type(clock());", "number"),
    ("print abs(-2);", "2"),
    ("print floor(2.7);", "2"),
    ("print sqrt(16);", "4"),
    ("print min(3, -1);", "-1"),
    ("print max(3, -1);", "3"),
])
def test_builtin_results(source, expected):
    assert run(source) == [expected]


def test_push_mutates_shared_array():
    assert run("let a = []; let b = a; push(b, 1); push(b, \"two\"); print len(a); print a;") == ["2", "[1, two]"]


def test_pop_returns_last_element():
    assert run("let a = [1, 2]; print pop(a); print a;") == ["2", "[1]"]


def test_pop_empty_array_fails():
    with pytest.raises(SprigIndexOutOfBounds):
        run("pop([]);")


@pytest.mark.parametrize("source", ["len(1);", "push({}, 1);", "keys([]);", "abs(\"1\");", "sqrt(-1);", "has({}, 1);"])
def test_builtin_type_errors(source):
    with pytest.raises(SprigTypeMismatch):
        run(source)


@pytest.mark.parametrize("call", ["floor(num(\"inf\"))", "floor(-num(\"inf\"))", "range(num(\"nan\"))", "range(num(\"inf\"))"])
def test_non_finite_numbers_are_rejected_and_program_continues(call):
    out, errors = [], []
    Runtime(write_line=out.append).run(f"print {call};\nprint \"next\";", on_error=errors.append)
    assert out == ["next"]
    assert isinstance(errors[0], SprigTypeMismatch)
    assert errors[0].line == 1


def test_builtin_arity_is_checked():
    with pytest.raises(SprigArityMismatch):
        run("len();")
    with pytest.raises(SprigArityMismatch):
        run("max(1, 2, 3);")


def test_script_names_need_prefix():
    assert get_script_name('op_len') == 'len'
    with pytest.raises(SprigRegistrationError):
        get_script_name('len')


def test_arity_from_signature():
    assert get_arity(lambda: 0) == 0
    assert get_arity(lambda a, b: 0) == 2
    assert get_arity(lambda *xs: 0) == -1
    assert get_arity(lambda a, *, flag=False: 0) == 1


def test_required_keyword_only_parameters_are_rejected():
    def bad(a, *, required): return a
    with pytest.raises(SprigRegistrationError):
        get_arity(bad)


def test_load_builtins_table():
    table = load_builtins()
    assert {'len', 'push', 'pop', 'keys', 'has', 'str', 'num', 'type', 'abs', 'floor',
            'sqrt', 'min', 'max', 'join', 'range', 'clock'} <= set(table)
    assert all(isinstance(b, Builtin) for b in table.values())
    assert table['len'].arity == 1
    assert table['clock'].arity == 0


def test_to_value_normalizes_host_data():
    value = to_value({'n': 1, 'items': (1, 2.5), 3: None})
    assert value == {'n': 1.0, 'items': [1.0, 2.5], '3': None}
    assert isinstance(value['n'], float)
    assert isinstance(to_value(len), Builtin)


def test_to_value_rejects_unknown_types():
    with pytest.raises(SprigRegistrationError):
        to_value(object())


def test_from_value_restores_integers():
    assert from_value([1.0, 2.5, {'k': 3.0}]) == [1, 2.5, {'k': 3}]
    assert isinstance(from_value(1.0), int)
    assert from_value(True) is True
