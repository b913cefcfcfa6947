## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

import sprig.api as S


def test_run_returns_top_level_value():
    assert S.run("return 2 + 3;") == 5


def test_run_prints_to_stdout(capsys):
    S.run('print "hi from api";')
    assert capsys.readouterr().out == "hi from api\n"


def test_register_and_call_operation(capsys):
    def shout(text):
        return text + "!"
    S.register_operation('shout', shout)
    S.run('print shout("hey");')
    assert capsys.readouterr().out == "hey!\n"
    assert 'shout' in S.list_operations()


def test_globals_round_trip():
    S.set_global('api_data', {'values': [1, 2, 3]})
    S.run("push(api_data.values, 4);")
    assert S.from_value(S.get_global('api_data')) == {'values': [1, 2, 3, 4]}


def test_errors_are_exposed():
    with pytest.raises(S.SprigDivisionByZero):
        S.run("1 / 0;")
    with pytest.raises(S.SprigParseError):
        S.parse("let = ;")


def test_types_are_exposed():
    S.run("fun api_fn(a) { return a; }")
    assert isinstance(S.get_global('api_fn'), S.Function)
    assert isinstance(S.get_global('len'), S.Builtin)
