import typing
from itertools import count as _count, repeat as _repeat
from .types import *
from .errors import require_callable, require_count, require_sequence

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable

def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """
    wrap an iterable without copying it. re-iterable sources (lists, ranges,
    other enumerables) give every pass a fresh run; a one-shot iterator only
    supports a single pass.
    """
    from .enumerable import Enumerable
    require_sequence(data, 'data')
    if isinstance(data, Enumerable):
        return data
    return Enumerable(lambda: data)

def defer(factory: Callable[[], Iterable[T]]) -> 'Enumerable[T]':
    """create enumerable that calls factory for a fresh iterable on every pass"""
    from .enumerable import Enumerable
    require_callable(factory, 'factory')
    return Enumerable(factory)

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    from .enumerable import Enumerable
    count = require_count(count)
    return Enumerable(lambda: range(start, start + count))

def count_from(start: int = 0, step: int = 1) -> 'Enumerable[int]':
    """infinite arithmetic sequence; bound it with take() or take_while()"""
    from .enumerable import Enumerable
    return Enumerable(lambda: _count(start, step))

def repeat(item: T, count: Optional[int] = None) -> 'Enumerable[T]':
    """create enumerable with repeated item; infinite when count is None"""
    from .enumerable import Enumerable
    if count is None:
        return Enumerable(lambda: _repeat(item))
    count = require_count(count)
    return Enumerable(lambda: _repeat(item, count))

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(lambda: ())

def generate(generator_func: Callable[[], T], count: Optional[int] = None) -> 'Enumerable[T]':
    """generate sequence by calling a function; infinite when count is None"""
    from .enumerable import Enumerable
    require_callable(generator_func, 'generator_func')
    if count is None:
        return Enumerable(lambda: (generator_func() for _ in _count()))
    count = require_count(count)
    return Enumerable(lambda: (generator_func() for _ in range(count)))

# --- aliases ---
seq = from_iterable
P = from_iterable
