"""
Pipeline nodes. A node is an immutable description of one step of a view: which kind of step it
is, a display name, the upstream source(s) it reads and the parameters it was built with.
Sources are either other nodes or plain iterables. Cursors are created from nodes by
lazyviews.cursors.open_cursor, which dispatches on the node kind.
"""
import collections
import enum

from lazyviews.errors import InvalidArgumentError
from lazyviews.util import is_reiterable


class NodeKind(enum.Enum):
    PASSTHROUGH = "passthrough"
    MAP = "map"
    FILTER = "filter"
    UNIQUE = "unique"
    CONCAT = "concatenate"
    LIMIT = "limit"
    SKIP = "skip"
    EXPAND = "expand"
    GROUP = "grouped"
    SORT = "sort"


Node = collections.namedtuple("Node", ["kind", "name", "sources", "params"])


def name(function):
    """
    Retrieve a pretty name for the function
    :param function: function to get name from
    :return: pretty name
    """
    if isinstance(function, type):
        return function.__name__
    return getattr(function, "__name__", None) or str(function)


def _source_name(source):
    if isinstance(source, Node):
        return source.name
    return type(source).__name__


def check_non_negative(value, what):
    if value < 0:
        raise InvalidArgumentError(f"{what} cannot be < 0")
    return value


def reiterable(source):
    """
    Check that every root of source can be traversed more than once.
    :param source: node or iterable
    :return: True if each traversal of source starts from the beginning
    """
    if isinstance(source, Node):
        return all(reiterable(upstream) for upstream in source.sources)
    return is_reiterable(source)


def passthrough_node(source):
    return Node(NodeKind.PASSTHROUGH, "passthrough", (source,), {})


def map_node(source, mapper):
    return Node(NodeKind.MAP, f"map({name(mapper)})", (source,), {"mapper": mapper})


def filter_node(source, predicate, shunt=None):
    return Node(
        NodeKind.FILTER,
        f"filter({name(predicate)})",
        (source,),
        {"predicate": predicate, "shunt": shunt},
    )


def unique_node(source):
    return Node(NodeKind.UNIQUE, "unique", (source,), {})


def concat_node(first, following):
    return Node(
        NodeKind.CONCAT,
        f"concatenate({_source_name(following)})",
        (first, following),
        {},
    )


def limit_node(source, limit):
    check_non_negative(limit, "limit")
    return Node(NodeKind.LIMIT, f"limit({limit})", (source,), {"limit": limit})


def skip_node(source, count):
    check_non_negative(count, "skip count")
    return Node(NodeKind.SKIP, f"skip({count})", (source,), {"count": count})


def slice_node(source, start, size):
    return limit_node(skip_node(source, start), size)


def expand_node(source, size, filler):
    check_non_negative(size, "expand size")
    return Node(
        NodeKind.EXPAND,
        f"expand({size}, {filler!r})",
        (source,),
        {"size": size, "filler": filler},
    )


def lineage(node):
    """
    Names of the steps of a pipeline from its root to node, following the first source of each
    node.
    """
    steps = []
    current = node
    while isinstance(current, Node):
        steps.append(current.name)
        current = current.sources[0]
    steps.append(type(current).__name__)
    steps.reverse()
    return steps
