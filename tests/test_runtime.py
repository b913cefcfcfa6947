## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from sprig.runtime import Runtime
from sprig.types import Builtin
from sprig.errors import SprigUndefinedVariable, SprigRegistrationError


def make_runtime(**kwargs):
    out = []
    return Runtime(write_line=out.append, **kwargs), out


def test_register_operation_callable_from_scripts():
    rt, out = make_runtime()
    def double(x): return x * 2
    rt.register_operation('double', double)
    rt.run("print double(21);")
    assert out == ["42"]


def test_registered_operation_int_results_become_numbers():
    rt, out = make_runtime()
    rt.register_operation('count', lambda: 3)
    rt.run("print type(count()); print count() / 2;")
    assert out == ["number", "1.5"]


def test_registered_operation_containers_become_script_values():
    rt, out = make_runtime()
    rt.register_operation('pair', lambda: [1, 2])
    rt.register_operation('tup', lambda: (1, (2, 3)))
    rt.register_operation('info', lambda: {'n': 4, 1: 'one'})
    rt.run("print pair()[0] + 1; print len(tup()); print tup()[1]; print info().n * 2; print type(tup());")
    assert out == ["2", "2", "[2, 3]", "8", "array"]


def test_registered_operation_returning_argument_keeps_it_shared():
    rt, out = make_runtime()
    rt.register_operation('same', lambda a: a)
    rt.run("let a = [1]; let b = same(a); b[0] = 9; print a;")
    assert out == ["[9]"]


def test_builtin_push_result_stays_shared():
    rt, out = make_runtime()
    rt.run("let a = []; let b = push(a, 1); b[0] = 5; print a;")
    assert out == ["[5]"]


def test_variadic_operation_accepts_any_count():
    rt, out = make_runtime()
    def total(*xs): return sum(xs)
    rt.register_operation('total', total)
    rt.run("print total(1, 2, 3); print total();")
    assert out == ["6", "0"]


def test_registered_operation_arity_is_enforced():
    rt, _ = make_runtime()
    rt.register_operation('pair', lambda a, b: [a, b])
    out = []
    rt.run("pair(1);", on_error=out.append)
    assert [e.kind for e in out] == ["ArityMismatch"]


def test_register_operation_rejects_keyword_only():
    rt, _ = make_runtime()
    def bad(x, *, required): return x
    with pytest.raises(SprigRegistrationError):
        rt.register_operation('bad', bad)


def test_set_global_converts_host_data():
    rt, out = make_runtime()
    rt.set_global('config', {'n': 1, 'items': [1, 2]})
    rt.run("print config.items[1] + config.n;")
    assert out == ["3"]


def test_globals_are_shared_with_host():
    rt, out = make_runtime()
    rt.run("let xs = [1, 2.5]; let o = {k: \"v\"};")
    assert rt.from_value(rt.get_global('xs')) == [1, 2.5]
    rt.get_global('xs').append(3.0)
    rt.run("print len(xs);")
    assert out == ["3"]
    assert rt.has_global('o')
    assert not rt.has_global('missing')


def test_get_global_undefined_fails():
    rt, _ = make_runtime()
    with pytest.raises(SprigUndefinedVariable):
        rt.get_global('missing')


def test_list_operations_reports_arity_and_doc():
    rt, _ = make_runtime()
    def greet(name):
        """Say hello."""
        return "hi " + name
    rt.register_operation('greet', greet)
    ops = rt.list_operations()
    assert ops['len']['arity'] == 1
    assert ops['greet'] == {'arity': 1, 'doc': 'Say hello.'}


def test_runtime_without_builtins():
    rt, _ = make_runtime(builtins=False)
    assert rt.list_operations() == {}
    with pytest.raises(SprigUndefinedVariable):
        rt.run("len([]);")


def test_separate_runtimes_do_not_share_globals():
    a, _ = make_runtime()
    b, _ = make_runtime()
    a.run("let only_here = 1;")
    assert a.has_global('only_here')
    assert not b.has_global('only_here')


def test_parse_then_interpret():
    rt, out = make_runtime()
    program = rt.parse("print \"parsed\"; return 1 + 1;", filename="<test>")
    assert rt.interpret(program) == 2.0
    assert out == ["parsed"]


def test_on_error_continues_with_next_statement():
    rt, out = make_runtime()
    errors = []
    rt.run("print missing; print \"still here\";", on_error=errors.append)
    assert out == ["still here"]
    assert errors[0].kind == "UndefinedVariable"


def test_stats_accumulate_steps():
    rt, _ = make_runtime()
    stats = {}
    rt.run("let a = 1; let b = 2;", stats=stats)
    rt.run("let c = 3;", stats=stats)
    assert stats['steps'] == 3


def test_to_value_wraps_callables():
    rt, _ = make_runtime()
    assert isinstance(rt.to_value(abs), Builtin)
    assert rt.to_value([1, (2,)]) == [1.0, [2.0]]
