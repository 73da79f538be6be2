from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, Mapping
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')
R = TypeVar('R')

Predicate = Callable[[T], bool]
IndexedPredicate = Callable[[T, int], bool]
Selector = Callable[[T], U]
IndexedSelector = Callable[[T, int], U]
KeySelector = Callable[[T], K]
KeyComparer = Callable[[K, K], bool]
Comparer = Callable[[T, T], int]
Accumulator = Callable[[U, T], U]
DataFactory = Callable[[], Iterable[T]]


class Bindings:
    """
    immutable set of named range variables flowing through a query.
    values are reachable as attributes (b.word) or items (b['word']).
    """

    __slots__ = ('_values',)

    def __init__(self, values: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        merged = dict(values or {})
        merged.update(kwargs)
        object.__setattr__(self, '_values', merged)

    def extend(self, name: str, value: Any) -> 'Bindings':
        """new bindings with one more variable; an existing name is shadowed"""
        values = dict(self._values)
        values[name] = value
        return Bindings(values)

    def names(self) -> Tuple[str, ...]:
        return tuple(self._values)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __getattr__(self, name: str) -> Any:
        # copy and pickle look up dunders before _values is set
        if name == '_values' or (name.startswith('__') and name.endswith('__')):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"no range variable named '{name}' is bound") from None

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("bindings are immutable; use extend() to add a variable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bindings):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __reduce__(self):
        return Bindings, (dict(self._values),)

    def __repr__(self) -> str:
        inner = ', '.join(f"{k}={v!r}" for k, v in self._values.items())
        return f"Bindings({inner})"


class MemoizedEnumerable(Generic[T]):
    """
    lazily materialized sequence with partial caching.
    the source is pulled only as far as some consumer has asked for, and every
    later enumeration replays the cache before pulling more.
    """

    def __init__(self, data_func: Callable[[], Iterable[T]]):
        self._source_func = data_func
        self._cache: List[T] = []
        self._source_iterator: Optional[Iterator[T]] = None
        self._is_fully_enumerated = False

    def _get_iterator(self) -> Iterator[T]:
        """get or create the source iterator"""
        if self._source_iterator is None:
            self._source_iterator = iter(self._source_func())
        return self._source_iterator

    def _materialize_to_index(self, target_index: int) -> None:
        """materialize the cache up to (and including) the target index"""
        if self._is_fully_enumerated:
            return

        iterator = self._get_iterator()
        while len(self._cache) <= target_index:
            try:
                self._cache.append(next(iterator))
            except StopIteration:
                self._is_fully_enumerated = True
                self._source_iterator = None
                break

    def _materialize_all(self) -> None:
        """fully materialize the enumerable into cache"""
        if self._is_fully_enumerated:
            return

        self._cache.extend(self._get_iterator())
        self._is_fully_enumerated = True
        self._source_iterator = None

    @property
    def is_fully_materialized(self) -> bool:
        return self._is_fully_enumerated

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def __iter__(self) -> Iterator[T]:
        # walk by index so interleaved enumerations each see every element
        index = 0
        while True:
            if index < len(self._cache):
                yield self._cache[index]
                index += 1
                continue
            if self._is_fully_enumerated:
                return
            self._materialize_to_index(index)

    def __getitem__(self, index):
        """support indexing by materializing up to the requested index"""
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            return [self[i] for i in range(start, stop, step)]

        if index < 0:
            self._materialize_all()
            if abs(index) > len(self._cache):
                raise IndexError("index out of range")
            return self._cache[index]

        self._materialize_to_index(index)

        if index < len(self._cache):
            return self._cache[index]
        raise IndexError("index out of range")

    def __len__(self) -> int:
        """get the length by fully materializing if necessary"""
        self._materialize_all()
        return len(self._cache)
