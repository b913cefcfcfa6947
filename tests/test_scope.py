## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from sprig.scope import Scope
from sprig.errors import SprigUndefinedVariable


def test_define_then_get_in_same_frame():
    scope = Scope()
    scope.define('x', 1.0)
    assert scope.get('x') == 1.0


def test_get_walks_outward_through_parents():
    outer = Scope()
    outer.define('x', 'outer')
    inner = outer.child().child()
    assert inner.get('x') == 'outer'
    assert inner.parent.parent is outer


def test_define_shadows_without_touching_parent():
    outer = Scope()
    outer.define('x', 1.0)
    inner = outer.child()
    inner.define('x', 2.0)
    assert inner.get('x') == 2.0
    assert outer.get('x') == 1.0


def test_define_overwrites_binding_in_same_frame():
    scope = Scope()
    scope.define('x', 1.0)
    scope.define('x', 'again')
    assert scope.get('x') == 'again'


def test_set_mutates_nearest_existing_binding():
    outer = Scope()
    outer.define('x', 1.0)
    inner = outer.child()
    inner.set('x', 5.0)
    assert outer.get('x') == 5.0
    assert 'x' not in inner.variables


def test_set_prefers_innermost_shadowing_binding():
    outer = Scope()
    outer.define('x', 1.0)
    inner = outer.child()
    inner.define('x', 2.0)
    inner.set('x', 3.0)
    assert inner.get('x') == 3.0
    assert outer.get('x') == 1.0


def test_get_undefined_fails():
    with pytest.raises(SprigUndefinedVariable) as info:
        Scope().child().get('missing')
    assert info.value.token == 'missing'
    assert isinstance(info.value, NameError)


def test_set_undefined_fails_and_does_not_define():
    scope = Scope()
    with pytest.raises(SprigUndefinedVariable):
        scope.set('y', 1.0)
    assert not scope.exists('y')


def test_exists_checks_whole_chain():
    outer = Scope()
    outer.define('a', None)
    inner = outer.child()
    assert inner.exists('a')
    assert not outer.exists('b')


def test_nil_binding_still_counts_as_defined():
    scope = Scope()
    scope.define('nothing', None)
    assert scope.get('nothing') is None
    assert scope.exists('nothing')


def test_depth_counts_parents():
    root = Scope()
    assert root.depth() == 0
    assert root.child().child().depth() == 2
