"""
free-function operator surface.

every function takes any iterable (an Enumerable included) as its first
argument and returns a deferred Enumerable, so calls nest as well as chain:

    take(zip(names, scores, lambda name, score: f"{name}:{score}"), 3)

arguments are checked when the function is called, never on first pull.
"""
import typing

from .types import *
from .errors import require_callable, require_sequence
from .factories import from_iterable

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable, GroupedEnumerable

__all__ = [
    "zip",
    "group_by",
    "take",
    "take_last",
    "take_while",
    "skip",
    "skip_last",
    "skip_while",
    "compose",
]


def zip(first: Iterable[T], second: Iterable[U], third: Any = None,
        combiner: Optional[Callable[..., V]] = None) -> 'Enumerable[Any]':
    """zip(a, b) -> pairs, zip(a, b, f) -> f(a, b), zip(a, b, c) -> triples"""
    return from_iterable(require_sequence(first, 'first')).zip(second, third, combiner)


def group_by(source: Iterable[T], key_selector: KeySelector[T, K],
             element_selector: Optional[Selector[T, V]] = None,
             comparer: Optional[KeyComparer[K]] = None) -> 'GroupedEnumerable[K, V]':
    return from_iterable(source).group.group_by(key_selector, element_selector, comparer)


def take(source: Iterable[T], count: int) -> 'Enumerable[T]':
    return from_iterable(source).take(count)


def take_last(source: Iterable[T], count: int) -> 'Enumerable[T]':
    return from_iterable(source).take_last(count)


def take_while(source: Iterable[T], predicate: Union[Predicate[T], IndexedPredicate[T]],
               with_index: bool = False) -> 'Enumerable[T]':
    return from_iterable(source).take_while(predicate, with_index=with_index)


def skip(source: Iterable[T], count: int) -> 'Enumerable[T]':
    return from_iterable(source).skip(count)


def skip_last(source: Iterable[T], count: int) -> 'Enumerable[T]':
    return from_iterable(source).skip_last(count)


def skip_while(source: Iterable[T], predicate: Union[Predicate[T], IndexedPredicate[T]],
               with_index: bool = False) -> 'Enumerable[T]':
    return from_iterable(source).skip_while(predicate, with_index=with_index)


def compose(*stages: Callable[['Enumerable[Any]'], 'Enumerable[Any]']) -> Callable[[Iterable[Any]], 'Enumerable[Any]']:
    """
    join stages left to right into one reusable stage. nothing runs until the
    returned function is applied to a source and the result is enumerated.
    """
    for stage in stages:
        require_callable(stage, 'stage')

    def composed(source: Iterable[Any]) -> 'Enumerable[Any]':
        result = from_iterable(source)
        for stage in stages:
            result = stage(result)
        return result

    return composed
