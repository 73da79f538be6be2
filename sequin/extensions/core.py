from __future__ import annotations
import typing
import logging
from collections import deque
from itertools import chain, dropwhile, islice
from ..types import *
from ..errors import require_callable, require_count, require_sequence

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable

logger = logging.getLogger(__name__)


class _CoreOperations(Generic[T]):
    # --- filtering and projection ---

    def where(self: 'Enumerable[T]', predicate: Union[Predicate[T], IndexedPredicate[T]],
              with_index: bool = False) -> 'Enumerable[T]':
        """filter elements based on a predicate; with_index passes (item, index)"""
        from ..enumerable import Enumerable
        require_callable(predicate, 'predicate')
        def filter_data():
            for index, item in enumerate(self):
                if predicate(item, index) if with_index else predicate(item):
                    yield item
        return Enumerable(filter_data)

    def select(self: 'Enumerable[T]', selector: Union[Selector[T, U], IndexedSelector[T, U]],
               with_index: bool = False) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        require_callable(selector, 'selector')
        if with_index:
            return Enumerable(lambda: (selector(item, index) for index, item in enumerate(self)))
        return Enumerable(lambda: (selector(item) for item in self))

    def select_with_index(self: 'Enumerable[T]', selector: IndexedSelector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form, using the element's index"""
        return self.select(selector, with_index=True)

    def select_many(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project and flatten sequences"""
        from ..enumerable import Enumerable
        require_callable(selector, 'selector')
        def flat_map_data():
            for item in self:
                yield from selector(item)
        return Enumerable(flat_map_data)

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        # the type hint Type[U] ensures the user passes a class/type, not an instance
        return self.where(lambda item: isinstance(item, type_filter))

    # --- ordering ---

    def order_by(self: 'Enumerable[T]', key_selector: Callable[[T], K]) -> 'OrderedEnumerable[T]':
        """sort elements by a key"""
        from ..enumerable import OrderedEnumerable
        require_callable(key_selector, 'key_selector')
        return OrderedEnumerable(self._iterate, [(key_selector, False)])

    def order_by_descending(self: 'Enumerable[T]', key_selector: Callable[[T], K]) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        from ..enumerable import OrderedEnumerable
        require_callable(key_selector, 'key_selector')
        return OrderedEnumerable(self._iterate, [(key_selector, True)])

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements in a sequence"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: reversed(list(self)))

    # --- partitioning ---

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements; the source is not pulled past them"""
        from ..enumerable import Enumerable, opened
        count = require_count(count)
        def take_data():
            if count == 0:
                return
            with opened(self) as source:
                for taken, item in enumerate(source, 1):
                    yield item
                    if taken >= count:
                        return
        return Enumerable(take_data)

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable, opened
        count = require_count(count)
        def skip_data():
            with opened(self) as source:
                yield from islice(source, count, None)
        return Enumerable(skip_data)

    def take_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """
        take the final 'count' elements in their original order.
        drains the source through a ring buffer holding at most 'count' items,
        so memory is bounded by count rather than by the sequence length.
        """
        from ..enumerable import Enumerable, opened
        count = require_count(count)
        def take_last_data():
            if count == 0:
                return
            with opened(self) as source:
                buffer = deque(source, maxlen=count)
            logger.debug("take_last drained source, keeping %d element(s)", len(buffer))
            yield from buffer
        return Enumerable(take_last_data)

    def skip_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """
        drop the final 'count' elements. streams with a lag of 'count' items:
        an element is released once 'count' newer elements have been seen.
        """
        from ..enumerable import Enumerable, opened
        count = require_count(count)
        def skip_last_data():
            buffer = deque()
            with opened(self) as source:
                for item in source:
                    buffer.append(item)
                    if len(buffer) > count:
                        yield buffer.popleft()
            logger.debug("skip_last discarded %d trailing element(s)", len(buffer))
        return Enumerable(skip_last_data)

    def take_while(self: 'Enumerable[T]', predicate: Union[Predicate[T], IndexedPredicate[T]],
                   with_index: bool = False) -> 'Enumerable[T]':
        """
        take elements while predicate is true. stops at the first failure and
        never inspects anything after it. with_index passes (item, index), the
        index counting this operator's own input.
        """
        from ..enumerable import Enumerable, opened
        require_callable(predicate, 'predicate')
        def take_while_data():
            with opened(self) as source:
                for index, item in enumerate(source):
                    if not (predicate(item, index) if with_index else predicate(item)):
                        return
                    yield item
        return Enumerable(take_while_data)

    def skip_while(self: 'Enumerable[T]', predicate: Union[Predicate[T], IndexedPredicate[T]],
                   with_index: bool = False) -> 'Enumerable[T]':
        """
        skip elements while predicate is true, then yield the first failing
        element and everything after it without calling predicate again.
        """
        from ..enumerable import Enumerable, opened
        require_callable(predicate, 'predicate')
        def skip_while_data():
            with opened(self) as source:
                if not with_index:
                    # itertools.dropwhile already stops testing after the first failure
                    yield from dropwhile(predicate, source)
                    return
                for index, item in enumerate(source):
                    if not predicate(item, index):
                        yield item
                        break
                yield from source
        return Enumerable(skip_while_data)

    # --- composition ---

    def concat(self: 'Enumerable[T]', other: Iterable[T]) -> 'Enumerable[T]':
        """yields this sequence followed by another"""
        from ..enumerable import Enumerable
        require_sequence(other, 'other')
        return Enumerable(lambda: chain(self, other))

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: chain(self, [element]))

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: chain([element], self))

    def default_if_empty(self: 'Enumerable[T]', default_value: T) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton collection if the sequence is empty"""
        from ..enumerable import Enumerable
        def default_data():
            is_empty = True
            for item in self:
                is_empty = False
                yield item
            if is_empty:
                yield default_value
        return Enumerable(default_data)
