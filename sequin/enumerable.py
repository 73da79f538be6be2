from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from .types import *
from .errors import require_callable

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.grouping import GroupingAccessor
from .extensions.query import QueryAccessor
from .extensions.utility import UtilityAccessor
from .extensions.terminal import TerminalAccessor
from .extensions.zip import ZipAccessor

logger = logging.getLogger(__name__)


@contextmanager
def opened(iterable: Iterable[T]) -> Iterator[Iterator[T]]:
    """iterate a source and close it on exit, even when the consumer stops early"""
    iterator = iter(iterable)
    try:
        yield iterator
    finally:
        close = getattr(iterator, 'close', None)
        if close is not None:
            close()

# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def _iterate(self) -> Iterator[T]:
        """start a fresh pass over the underlying data"""
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, data_func: DataFactory[T]):
        """init with a function that produces the data when called"""
        self._data_func = data_func

    def _iterate(self) -> Iterator[T]:
        # no caching: every pass re-runs the upstream pipeline
        return iter(self._data_func())

    def __iter__(self) -> Iterator[T]:
        return self._iterate()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<deferred>)"

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, linq-inspired enumerable over any python iterable."""
    def __init__(self, data_func: DataFactory[T]):
        super().__init__(data_func)
        # --- initialize accessors ---
        self.zip = ZipAccessor(self)
        self.group = GroupingAccessor(self)
        self.query = QueryAccessor(self)
        self.util = UtilityAccessor(self)
        self.to = TerminalAccessor(self)

# --- ordered enumerable class ---

class OrderedEnumerable(Enumerable[T]):
    """represents a sorted sequence, allowing for subsequent orderings."""

    def __init__(self, data_func: DataFactory[T], sort_keys: List[Tuple[Callable, bool]]):
        super().__init__(data_func)
        self._sort_keys = sort_keys

    def _iterate(self) -> Iterator[T]:
        """sorting needs the whole source, so each pass materializes it once."""
        def sorted_data():
            data = list(self._data_func())
            logger.debug("sorting %d elements by %d key(s)", len(data), len(self._sort_keys))
            # python's sort is stable, so we sort from the last key to the first
            for key_selector, is_descending in reversed(self._sort_keys):
                data.sort(key=key_selector, reverse=is_descending)
            yield from data
        return sorted_data()

    def then_by(self, key_selector: KeySelector[T, K]) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        require_callable(key_selector, 'key_selector')
        return OrderedEnumerable(self._data_func, self._sort_keys + [(key_selector, False)])

    def then_by_descending(self, key_selector: KeySelector[T, K]) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        require_callable(key_selector, 'key_selector')
        return OrderedEnumerable(self._data_func, self._sort_keys + [(key_selector, True)])

# --- grouping results ---

class Grouping(Enumerable[T], Generic[K, T]):
    """a key together with the members that share it, in source order."""

    def __init__(self, key: K, elements: List[T]):
        super().__init__(lambda: elements)
        self.key = key
        self._elements = elements

    @property
    def elements(self) -> Tuple[T, ...]:
        return tuple(self._elements)

    def __len__(self) -> int:
        # members are already materialized, so this never re-runs a pipeline
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Grouping(key={self.key!r}, count={len(self._elements)})"


class GroupedEnumerable(Enumerable[Grouping[K, T]]):
    """a deferred sequence of groupings supporting whole-group filters."""

    def having(self, predicate: Predicate['Grouping[K, T]']) -> 'GroupedEnumerable[K, T]':
        """
        keep only groups satisfying the predicate. runs after the groups are
        fully built, so the predicate sees every member of a group.
        to drop individual elements before keys are computed, call where()
        ahead of group_by() instead.
        """
        require_callable(predicate, 'predicate')

        def having_data():
            for grouping in self:
                if predicate(grouping):
                    yield grouping

        return GroupedEnumerable(having_data)

    def keys(self) -> 'Enumerable[K]':
        """the group keys in first-occurrence order"""
        return self.select(lambda grouping: grouping.key)
