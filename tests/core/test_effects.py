"""Tests for the effect contexts — pure, map, bind and sequence per context."""

import pytest

from docmatrix.core.effects import ASYNC, IDENTITY, OPTION, RESULT
from docmatrix.core.result import Err, Ok


def test_identity_context():
    assert IDENTITY.pure(1) == 1
    assert IDENTITY.map(1, lambda n: n + 1) == 2
    assert IDENTITY.bind(1, lambda n: n * 3) == 3
    assert IDENTITY.sequence([lambda: 1, lambda: 2]) == [1, 2]


def test_option_context():
    assert OPTION.map(None, lambda n: n + 1) is None
    assert OPTION.bind(2, lambda n: None) is None
    assert OPTION.sequence([]) == []
    assert OPTION.sequence([lambda: 1, lambda: None]) is None


def test_result_left_identity():
    def f(n):
        return Ok(n * 2)

    assert RESULT.bind(RESULT.pure(4), f) == f(4)


def test_result_right_identity():
    assert RESULT.bind(Ok(4), RESULT.pure) == Ok(4)
    assert RESULT.bind(Err("e"), RESULT.pure) == Err("e")


def test_result_associativity():
    def f(n):
        return Ok(n + 1)

    def g(n):
        return Err("odd") if n % 2 else Ok(n)

    left = RESULT.bind(RESULT.bind(Ok(2), f), g)
    right = RESULT.bind(Ok(2), lambda n: RESULT.bind(f(n), g))
    assert left == right == Err("odd")


def test_result_sequence_stops_at_first_err():
    calls = []

    def thunk(value):
        def run():
            calls.append(value)
            return value
        return run

    assert RESULT.sequence([thunk(Ok(1)), thunk(Err("a")), thunk(Err("b"))]) == Err("a")
    assert calls == [Ok(1), Err("a")]


async def test_async_pure_map_bind():
    async def double(n):
        return n * 2

    assert await ASYNC.pure(3) == 3
    assert await ASYNC.map(ASYNC.pure(3), lambda n: n + 1) == 4
    assert await ASYNC.bind(ASYNC.pure(3), double) == 6
    assert await ASYNC.sequence([lambda: ASYNC.pure(1), lambda: double(2)]) == [1, 4]


# --- Option laws ---

def _halve(n):
    return n // 2 if n % 2 == 0 else None


def _decrement(n):
    return n - 1 if n > 0 else None


def test_option_left_identity():
    assert OPTION.bind(OPTION.pure(8), _halve) == _halve(8) == 4
    assert OPTION.bind(OPTION.pure(3), _halve) is _halve(3) is None


def test_option_right_identity():
    assert OPTION.bind(5, OPTION.pure) == 5
    assert OPTION.bind(None, OPTION.pure) is None


def test_option_associativity():
    for start in (None, 0, 1, 4, 6):
        left = OPTION.bind(OPTION.bind(start, _halve), _decrement)
        right = OPTION.bind(start, lambda n: OPTION.bind(_halve(n), _decrement))
        assert left == right
    assert OPTION.bind(OPTION.bind(4, _halve), _decrement) == 1
    assert OPTION.bind(OPTION.bind(2, _halve), _decrement) == 0
    assert OPTION.bind(OPTION.bind(0, _halve), _decrement) is None


# --- Async laws ---

async def _async_double(n):
    return n * 2


async def _async_increment(n):
    return n + 1


async def test_async_left_identity():
    assert await ASYNC.bind(ASYNC.pure(5), _async_double) == await _async_double(5)


async def test_async_right_identity():
    assert await ASYNC.bind(_async_double(5), ASYNC.pure) == 10


async def test_async_associativity():
    left = await ASYNC.bind(ASYNC.bind(ASYNC.pure(3), _async_double), _async_increment)
    right = await ASYNC.bind(
        ASYNC.pure(3), lambda n: ASYNC.bind(_async_double(n), _async_increment),
    )
    assert left == right == 7


async def test_async_bind_propagates_failure_without_calling_next():
    calls = []

    async def fail(n):
        raise ValueError(f"cannot use {n}")

    async def record(n):
        calls.append(n)
        return n

    with pytest.raises(ValueError, match="cannot use 3"):
        await ASYNC.bind(ASYNC.bind(ASYNC.pure(3), fail), record)
    assert calls == []
