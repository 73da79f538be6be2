from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from functools import reduce
from ..types import *
from ..errors import optional_callable, require_callable

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

_missing = object()


class TerminalAccessor(Generic[T]):
    """eager operations: each call runs the pipeline once and returns a value."""

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def list(self) -> List[T]:
        """convert to list"""
        return list(self._enumerable)

    def tuple(self) -> Tuple[T, ...]:
        """convert to tuple"""
        return tuple(self._enumerable)

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self._enumerable)

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary; a repeated key keeps the last value"""
        require_callable(key_selector, 'key_selector')
        val_sel = optional_callable(value_selector, 'value_selector') or (lambda item: item)
        return {key_selector(item): val_sel(item) for item in self._enumerable}

    def lookup(self, key_selector: KeySelector[T, K],
               value_selector: Optional[Selector[T, V]] = None) -> Dict[K, List[V]]:
        """eager grouping into a dict of lists, keys in first-occurrence order"""
        return {grouping.key: grouping.to.list()
                for grouping in self._enumerable.group.group_by(key_selector, value_selector)}

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        optional_callable(predicate, 'predicate')
        if predicate is None:
            return sum(1 for _ in self._enumerable)
        return sum(1 for x in self._enumerable if predicate(x))

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition; stops at the first match"""
        optional_callable(predicate, 'predicate')
        if predicate is None:
            return next(iter(self._enumerable), _missing) is not _missing
        return any(predicate(x) for x in self._enumerable)

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        require_callable(predicate, 'predicate')
        return all(predicate(x) for x in self._enumerable)

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        optional_callable(predicate, 'predicate')
        for item in self._enumerable:
            if predicate is None or predicate(item):
                return item
        if predicate is None:
            raise ValueError("sequence contains no elements")
        raise ValueError("no element satisfies the condition")

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        try:
            return self.first(predicate)
        except ValueError:
            return default

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get last element; drains the sequence"""
        optional_callable(predicate, 'predicate')
        found = _missing
        for item in self._enumerable:
            if predicate is None or predicate(item):
                found = item
        if found is _missing:
            raise ValueError("sequence contains no elements" if predicate is None
                             else "no element satisfies the condition")
        return found

    def single(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get single element, erroring if not exactly one"""
        optional_callable(predicate, 'predicate')
        matches = self._enumerable.where(predicate) if predicate else self._enumerable
        # two elements are enough to know there is more than one
        data = matches.take(2).to.list()
        if len(data) == 0:
            raise ValueError("sequence contains no matching elements")
        if len(data) > 1:
            raise ValueError("sequence contains more than one matching element")
        return data[0]

    def aggregate(self, accumulator: Accumulator[T, T], seed: Optional[T] = None) -> T:
        """applies accumulator function over sequence"""
        require_callable(accumulator, 'accumulator')
        iterator = iter(self._enumerable)
        if seed is None:
            seed = next(iterator, _missing)
            if seed is _missing:
                raise ValueError("cannot aggregate empty sequence without seed")
        return reduce(accumulator, iterator, seed)

    def aggregate_with_selector(self, seed: U, accumulator: Accumulator[U, T],
                                result_selector: Selector[U, V]) -> V:
        """aggregate with seed and final transformation"""
        require_callable(accumulator, 'accumulator')
        require_callable(result_selector, 'result_selector')
        return result_selector(reduce(accumulator, self._enumerable, seed))
