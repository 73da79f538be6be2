from __future__ import annotations
import typing
from contextlib import ExitStack
from itertools import zip_longest
from ..types import *
from ..errors import InvalidArgumentError, require_callable, require_sequence

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _is_combiner(candidate: Any) -> bool:
    # a callable that is also iterable (an Enumerable, an Enum class) counts as a sequence;
    # a plain class such as range is only callable
    return callable(candidate) and not hasattr(type(candidate), '__iter__')


class ZipAccessor(Generic[T]):
    """
    positional pairing of this sequence with one or two others.

    seq.zip(b)            -> (a, b) pairs
    seq.zip(b, f)         -> f(a, b)
    seq.zip(b, c)         -> (a, b, c) triples
    seq.zip(b, c, f)      -> f(a, b, c)

    the result is as long as the shortest input: iteration ends the moment any
    input runs out, and the longer inputs are closed rather than drained.
    """

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def __call__(self, second: Iterable[U], third: Any = None,
                 combiner: Optional[Callable[..., V]] = None) -> 'Enumerable[Any]':
        require_sequence(second, 'second')
        if third is None:
            sequences = [second]
        elif _is_combiner(third):
            if combiner is not None:
                raise InvalidArgumentError('combiner', "given twice")
            sequences, combiner = [second], third
        else:
            sequences = [second, require_sequence(third, 'third')]
        if combiner is not None:
            require_callable(combiner, 'combiner')
        return self._zip(sequences, combiner)

    def _zip(self, others: List[Iterable[Any]], combiner: Optional[Callable[..., V]]) -> 'Enumerable[Any]':
        from ..enumerable import Enumerable, opened

        def zip_data():
            with ExitStack() as stack:
                iterators = [stack.enter_context(opened(source)) for source in [self._enumerable, *others]]
                # zip() stops at the first exhausted input and pulls nothing further
                for items in zip(*iterators):
                    yield combiner(*items) if combiner is not None else items

        return Enumerable(zip_data)

    def with_selector(self, other: Iterable[U], result_selector: Callable[[T, U], V]) -> 'Enumerable[V]':
        """zip two sequences with custom result selector"""
        require_sequence(other, 'other')
        require_callable(result_selector, 'result_selector')
        return self._zip([other], result_selector)

    def triples(self, second: Iterable[U], third: Iterable[V]) -> 'Enumerable[Tuple[T, U, V]]':
        """zip three sequences into (first, second, third) tuples"""
        require_sequence(second, 'second')
        require_sequence(third, 'third')
        return self._zip([second, third], None)

    def longest_with(self, other: Iterable[U],
                     result_selector: Callable[[Optional[T], Optional[U]], V],
                     default_self: Optional[T] = None, default_other: Optional[U] = None) -> 'Enumerable[V]':
        """zip sequences padding the shorter one with defaults"""
        from ..enumerable import Enumerable
        require_sequence(other, 'other')
        require_callable(result_selector, 'result_selector')

        def zip_longest_data():
            # use a sentinel object to distinguish from a fill value of none
            sentinel = object()
            for t, u in zip_longest(self._enumerable, other, fillvalue=sentinel):
                s_item = t if t is not sentinel else default_self
                o_item = u if u is not sentinel else default_other
                yield result_selector(s_item, o_item)

        return Enumerable(zip_longest_data)
