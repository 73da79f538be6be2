r"""
'   ___  ___  __ _ _   _(_)_ __
'  / __|/ _ \/ _` | | | | | '_ \
'  \__ \  __/ (_| | |_| | | | | |
'  |___/\___|\__, |\__,_|_|_| |_|
'               |_|
"""
import logging

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable, Grouping, GroupedEnumerable

# expose the factory functions
from .factories import (
    from_iterable,
    defer,
    from_range,
    count_from,
    repeat,
    empty,
    generate,
    seq,
    P
)

# expose supporting data classes and errors
from .types import (
    Bindings,
    MemoizedEnumerable
)
from .errors import InvalidArgumentError

# free-function operators live in sequin.ops (their names shadow builtins)
from . import ops

# library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "Grouping",
    "GroupedEnumerable",
    "from_iterable",
    "defer",
    "from_range",
    "count_from",
    "repeat",
    "empty",
    "generate",
    "seq",
    "P",
    "Bindings",
    "MemoizedEnumerable",
    "InvalidArgumentError",
    "ops"
]
