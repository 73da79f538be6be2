from __future__ import annotations
import typing
import logging
from ..types import *
from ..errors import require_callable

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


class UtilityAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def for_each(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        performs the specified action on each element of a sequence for side-effects.
        this is an EAGER operation that executes immediately.
        returns the original enumerable to allow chaining.
        """
        require_callable(action, 'action')
        for item in self._enumerable:
            action(item)
        # returns the original enumerable instance, not a new lazy one.
        return self._enumerable

    def side_effect(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        performs a side-effect action for each element as it passes through the sequence
        without modifying it. lazy: the action runs only while something pulls.
        example: .where(...).util.side_effect(print).select(...)
        """
        from ..enumerable import Enumerable
        require_callable(action, 'action')
        def side_effect_data():
            for item in self._enumerable:
                action(item)
                yield item
        return Enumerable(side_effect_data)

    def materialize(self) -> 'Enumerable[T]':
        """
        EAGER. copies the sequence into a list now and returns an enumerable over
        that copy, so later passes never re-run the upstream pipeline.
        """
        from ..enumerable import Enumerable
        data = list(self._enumerable)
        logger.debug("materialized %d element(s)", len(data))
        return Enumerable(lambda: data)

    def memoize(self) -> 'Enumerable[T]':
        """
        LAZY counterpart of materialize(): elements are cached as they are first
        pulled, and every later pass replays the cache before pulling more.
        works on infinite sequences as long as consumers stop early.
        """
        from ..enumerable import Enumerable
        memo = self.memoize_advanced()
        return Enumerable(lambda: memo)

    def memoize_advanced(self) -> 'MemoizedEnumerable[T]':
        """the raw partial cache, with indexing and cache inspection."""
        return MemoizedEnumerable(self._enumerable._iterate)

    def pipe(self, func: Callable[..., U], *args, **kwargs) -> U:
        """
        pipes the enumerable object into an external function. enables custom, chainable operations.
        example: .util.pipe(my_custom_plot_function, title='my data')
        """
        require_callable(func, 'func')
        return func(self._enumerable, *args, **kwargs)

    def pipe_through(self, *operations: Callable[['Enumerable[Any]'], 'Enumerable[Any]']) -> 'Enumerable[Any]':
        """
        functional pipeline - applies operations in sequence.
        each operation receives the result of the previous.
        """
        for operation in operations:
            require_callable(operation, 'operation')
        result = self._enumerable
        for operation in operations:
            result = operation(result)
        return result

    def apply_if(self, condition: bool, operation: Callable[['Enumerable[T]'], 'Enumerable[T]']) -> 'Enumerable[T]':
        """conditionally apply operation based on boolean condition"""
        require_callable(operation, 'operation')
        return operation(self._enumerable) if condition else self._enumerable
