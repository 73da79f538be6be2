from __future__ import annotations
import typing
import logging
from collections.abc import Hashable
from ..types import *
from ..errors import InvalidArgumentError, optional_callable, require_callable, require_positive

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, Grouping, GroupedEnumerable

logger = logging.getLogger(__name__)


class _KeyIndex(Generic[K, V]):
    """
    ordered key -> bucket table. hashable keys go through a dict; a custom
    comparer, or an unhashable key, is matched by scanning the known keys.
    """

    def __init__(self, comparer: Optional[KeyComparer[K]] = None):
        self._comparer = comparer
        self._hashed: Dict[Any, List[V]] = {}
        self._entries: List[Tuple[K, List[V]]] = []

    def bucket(self, key: K) -> List[V]:
        if self._comparer is None and isinstance(key, Hashable):
            try:
                bucket = self._hashed.get(key)
                if bucket is None:
                    bucket = self._hashed[key] = self._new_bucket(key)
                return bucket
            except TypeError:
                # e.g. a tuple holding a list: Hashable by type, unhashable by value
                pass
        equals = self._comparer or (lambda a, b: a == b)
        for known_key, bucket in self._entries:
            if equals(known_key, key):
                return bucket
        return self._new_bucket(key)

    def _new_bucket(self, key: K) -> List[V]:
        bucket: List[V] = []
        self._entries.append((key, bucket))
        return bucket

    def items(self) -> List[Tuple[K, List[V]]]:
        return self._entries


class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K],
                 element_selector: Optional[Selector[T, V]] = None,
                 comparer: Optional[KeyComparer[K]] = None) -> 'GroupedEnumerable[K, V]':
        """
        group elements by a key. deferred: the source is read in a single pass
        when the result is first pulled. groups come out in the order their
        keys first appear, and members keep their source order.

        element_selector projects each member; comparer(a, b) -> bool replaces
        the default key equality.
        """
        from ..enumerable import Grouping, GroupedEnumerable
        require_callable(key_selector, 'key_selector')
        optional_callable(element_selector, 'element_selector')
        optional_callable(comparer, 'comparer')

        def group_data():
            index = _KeyIndex(comparer)
            for item in self._enumerable:
                value = element_selector(item) if element_selector is not None else item
                index.bucket(key_selector(item)).append(value)
            logger.debug("group_by built %d group(s)", len(index.items()))
            for key, members in index.items():
                yield Grouping(key, members)

        return GroupedEnumerable(group_data)

    def group_by_multiple(self, *key_selectors: KeySelector[T, Any]) -> 'GroupedEnumerable[Tuple, T]':
        """group by multiple keys returning composite key tuples"""
        if not key_selectors:
            raise InvalidArgumentError('key_selectors', "needs at least one selector")
        for selector in key_selectors:
            require_callable(selector, 'key_selector')
        return self.group_by(lambda item: tuple(selector(item) for selector in key_selectors))

    def group_by_with_aggregate(self, key_selector: KeySelector[T, K],
                                element_selector: Selector[T, U],
                                result_selector: Callable[[K, List[U]], V]) -> 'Enumerable[V]':
        """group by key then transform each group into a single result"""
        require_callable(result_selector, 'result_selector')
        return (self.group_by(key_selector, element_selector)
                .select(lambda grouping: result_selector(grouping.key, grouping.to.list())))

    def partition(self, predicate: Predicate[T]) -> Tuple[List[T], List[T]]:
        """partition elements based on predicate. this is eager."""
        require_callable(predicate, 'predicate')
        true_items, false_items = [], []
        for item in self._enumerable:
            (true_items if predicate(item) else false_items).append(item)
        return true_items, false_items

    def chunk(self, size: int) -> 'Enumerable[List[T]]':
        """split into consecutive chunks of the given size; the last may be shorter"""
        from ..enumerable import Enumerable
        size = require_positive(size, 'size')
        def chunk_data():
            current = []
            for item in self._enumerable:
                current.append(item)
                if len(current) == size:
                    yield current
                    current = []
            if current:
                yield current
        return Enumerable(chunk_data)
