from __future__ import annotations
import typing
from ..types import *
from ..errors import InvalidArgumentError, optional_callable, require_callable

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

# name given to a raw element when a continuation first needs bindings
DEFAULT_RANGE_VARIABLE = 'it'


def _require_name(name: Any, argument: str = 'name') -> str:
    if not isinstance(name, str) or not name.isidentifier():
        raise InvalidArgumentError(argument, f"must be an identifier string, got {name!r}")
    return name


def _as_bindings(item: Any) -> Bindings:
    return item if isinstance(item, Bindings) else Bindings({DEFAULT_RANGE_VARIABLE: item})


class QueryAccessor(Generic[T]):
    """
    query continuation over named range variables.

    let() augments: the new value is bound next to everything already in scope.
    into() re-binds: the stage output becomes the only variable, and whatever
    was bound before it is gone.

        (P(words)
         .query.from_('word')
         .query.let('length', lambda s: len(s.word))
         .where(lambda s: s.length > 3)
         .group.group_by(lambda s: s.length, lambda s: s.word)
         .query.into('g')
         .where(lambda s: len(s.g) > 1))

    both are ordinary lazy stages, so they chain with every other operator.
    """

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def from_(self, name: str) -> 'Enumerable[Bindings]':
        """bind each element as the single range variable 'name'"""
        return self.into(name)

    def let(self, name: str, selector: Callable[[Bindings], U]) -> 'Enumerable[Bindings]':
        """
        add 'name' = selector(bindings) alongside the variables already bound.
        a raw element is first bound as 'it'.
        """
        from ..enumerable import Enumerable
        _require_name(name)
        require_callable(selector, 'selector')
        def let_data():
            for item in self._enumerable:
                bindings = _as_bindings(item)
                yield bindings.extend(name, selector(bindings))
        return Enumerable(let_data)

    def into(self, name: str, selector: Optional[Callable[[Any], U]] = None) -> 'Enumerable[Bindings]':
        """
        continue the query with each element (or selector(element)) as the
        only range variable 'name'; earlier variables go out of scope.
        """
        from ..enumerable import Enumerable
        _require_name(name)
        optional_callable(selector, 'selector')
        def into_data():
            for item in self._enumerable:
                value = selector(item) if selector is not None else item
                yield Bindings({name: value})
        return Enumerable(into_data)

    def select(self, name: str) -> 'Enumerable[Any]':
        """project the range variable 'name' out of each element's bindings"""
        _require_name(name)
        return self._enumerable.select(lambda item: _as_bindings(item)[name])

    def unpack(self, *names: str) -> 'Enumerable[Tuple[Any, ...]]':
        """project several range variables as a tuple, in the order given"""
        if not names:
            raise InvalidArgumentError('names', "needs at least one variable name")
        for name in names:
            _require_name(name, 'names')
        return self._enumerable.select(lambda item: tuple(_as_bindings(item)[n] for n in names))
