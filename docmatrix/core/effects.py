"""Effect Contexts — the capability traverse_m is parameterized over.

Invariants:
    - Every context offers pure, map, bind and sequence
    - sequence() receives zero-argument thunks and evaluates them strictly left to right,
      each only after the previous one has completed
    - Short-circuiting contexts (OPTION, RESULT) never evaluate a thunk after the first failure
    - Contexts hold no state; the module-level singletons are safe to share

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with the four methods qualifies
    - OPTION uses None as "absent" (plain Optional values), so a present None cannot be represented
    - ASYNC wraps awaitables; results are coroutines the caller awaits
"""

from typing import Any, Awaitable, Callable, Protocol, Sequence

from docmatrix.core.result import Err, Ok

Thunk = Callable[[], Any]


class EffectContext(Protocol):
    """Lift, transform, chain and sequence wrapped values."""
    name: str

    def pure(self, value: Any) -> Any: ...
    def map(self, fa: Any, fn: Callable[[Any], Any]) -> Any: ...
    def bind(self, fa: Any, fn: Callable[[Any], Any]) -> Any: ...
    def sequence(self, thunks: Sequence[Thunk]) -> Any: ...


class IdentityContext:
    """No effect — the wrapped value is the value itself."""
    name = "identity"

    def pure(self, value):
        return value

    def map(self, fa, fn):
        return fn(fa)

    def bind(self, fa, fn):
        return fn(fa)

    def sequence(self, thunks: Sequence[Thunk]) -> list:
        return [thunk() for thunk in thunks]


class OptionContext:
    """Optional values — None is absent, anything else is present."""
    name = "option"

    def pure(self, value):
        return value

    def map(self, fa, fn):
        if fa is None:
            return None
        return fn(fa)

    def bind(self, fa, fn):
        if fa is None:
            return None
        return fn(fa)

    def sequence(self, thunks: Sequence[Thunk]) -> list | None:
        values = []
        for thunk in thunks:
            value = thunk()
            if value is None:
                return None
            values.append(value)
        return values


class ResultContext:
    """Ok / Err values — the first Err wins."""
    name = "result"

    def pure(self, value) -> Ok:
        return Ok(value)

    def map(self, fa, fn):
        match fa:
            case Ok(value=value):
                return Ok(fn(value))
            case Err():
                return fa
        raise TypeError(f"Expected Ok or Err, got {type(fa).__name__}")

    def bind(self, fa, fn):
        match fa:
            case Ok(value=value):
                return fn(value)
            case Err():
                return fa
        raise TypeError(f"Expected Ok or Err, got {type(fa).__name__}")

    def sequence(self, thunks: Sequence[Thunk]):
        values = []
        for thunk in thunks:
            match thunk():
                case Ok(value=value):
                    values.append(value)
                case Err() as failure:
                    return failure
                case other:
                    raise TypeError(f"Expected Ok or Err, got {type(other).__name__}")
        return Ok(values)


class AsyncContext:
    """Awaitables — each thunk is awaited before the next one is started."""
    name = "async"

    def pure(self, value) -> Awaitable:
        async def completed():
            return value
        return completed()

    def map(self, fa: Awaitable, fn) -> Awaitable:
        async def mapped():
            return fn(await fa)
        return mapped()

    def bind(self, fa: Awaitable, fn) -> Awaitable:
        async def bound():
            return await fn(await fa)
        return bound()

    def sequence(self, thunks: Sequence[Thunk]) -> Awaitable:
        async def sequenced():
            values = []
            for thunk in thunks:
                values.append(await thunk())
            return values
        return sequenced()


IDENTITY = IdentityContext()
OPTION = OptionContext()
RESULT = ResultContext()
ASYNC = AsyncContext()

CONTEXTS: dict[str, EffectContext] = {
    ctx.name: ctx for ctx in (IDENTITY, OPTION, RESULT, ASYNC)
}
