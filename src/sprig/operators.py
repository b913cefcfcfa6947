## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
import time

from .types import Value, is_number, type_name
from .errors import SprigTypeMismatch, SprigIndexOutOfBounds
from .formatting import to_string


def _expect(name: str, value: Value, kind, label: str) -> Value:
    if not isinstance(value, kind):
        raise SprigTypeMismatch(f"`{name}` expects {label}, got {type_name(value)}.", token=name)
    return value

def _number(name: str, value: Value) -> float:
    if not is_number(value):
        raise SprigTypeMismatch(f"`{name}` expects number, got {type_name(value)}.", token=name)
    return value

def _finite(name: str, value: Value) -> float:
    if not math.isfinite(_number(name, value)):
        raise SprigTypeMismatch(f"`{name}` expects a finite number, got {to_string(value)}.", token=name)
    return value


## COLLECTIONS
def op_len(x: Value) -> float:
    return float(len(_expect('len', x, (list, dict, str), 'array, object or string')))

def op_push(a: Value, x: Value) -> list:
    _expect('push', a, list, 'array').append(x)
    return a

def op_pop(a: Value) -> Value:
    if not _expect('pop', a, list, 'array'):
        raise SprigIndexOutOfBounds("`pop` from an empty array.", token='pop')
    return a.pop()

def op_keys(o: Value) -> list:
    return list(_expect('keys', o, dict, 'object'))

def op_has(o: Value, key: Value) -> bool:
    return _expect('has', key, str, 'string') in _expect('has', o, dict, 'object')

def op_join(a: Value, sep: Value) -> str:
    return _expect('join', sep, str, 'string').join(to_string(v) for v in _expect('join', a, list, 'array'))

def op_range(n: Value) -> list:
    return [float(i) for i in range(int(_finite('range', n)))]

## CONVERSION & INTROSPECTION
def op_str(x: Value) -> str: return to_string(x)
def op_type(x: Value) -> str: return type_name(x)

def op_num(x: Value) -> Value:
    if is_number(x): return x
    try:
        return float(_expect('num', x, str, 'string or number'))
    except ValueError:
        return None

## ARITHMETIC
def op_abs(x: Value) -> float: return abs(_number('abs', x))
def op_floor(x: Value) -> float: return float(math.floor(_finite('floor', x)))
def op_min(a: Value, b: Value) -> float: return min(_number('min', a), _number('min', b))
def op_max(a: Value, b: Value) -> float: return max(_number('max', a), _number('max', b))

def op_sqrt(x: Value) -> float:
    if _number('sqrt', x) < 0:
        raise SprigTypeMismatch("`sqrt` of a negative number.", token='sqrt')
    return math.sqrt(x)

## TIME
def op_clock() -> float: return time.time()
