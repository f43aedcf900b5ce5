"""
Eager combinators. Sorting and grouping both need to see the whole upstream before they can say
anything about the first element, so the work happens when the node is built rather than when it
is iterated.
"""
from lazyviews.cursors import open_source
from lazyviews.errors import InvalidArgumentError
from lazyviews.logger import get_logger
from lazyviews.nodes import Node, NodeKind, name, reiterable
from lazyviews.util import identity

logger = get_logger()


def drain(source):
    """
    Pull every element of source into a new list
    :param source: node or iterable
    :return: list of the elements of source in order
    """
    cursor = open_source(source)
    buffer = []
    while cursor.has_next():
        buffer.append(cursor.next())
    return buffer


def sort_node(source, key=None, reverse=False):
    """
    Drain source and stable sort it. Elements with equal keys keep their upstream order, also
    when reverse is set.
    :param source: node or iterable, must be finite
    :param key: key extractor, or None for the natural order of the elements
    :param reverse: sort descending
    :return: SORT node holding the sorted buffer
    """
    buffer = sorted(drain(source), key=key, reverse=reverse)
    logger.d("sorted %d elements", len(buffer))
    label = "natural_order" if key is None else f"order_by({name(key)})"
    return Node(NodeKind.SORT, label, (buffer,), {})


def count_source(source):
    cursor = open_source(source)
    total = 0
    while cursor.has_next():
        cursor.next()
        total += 1
    return total


def group_node(source, size, factory=identity):
    """
    Partition source into consecutive groups of size elements, the last group possibly shorter.
    The element count is taken once here; each group re-reads the source when it is iterated, so
    the source has to be finite and re-iterable.
    :param source: node or iterable
    :param size: group size, at least 1
    :param factory: wraps the slice node of each group
    :return: GROUP node
    """
    if size < 1:
        raise InvalidArgumentError("group size cannot be < 1")
    if not reiterable(source):
        raise InvalidArgumentError("grouped requires a source that can be iterated more than once")
    total = count_source(source)
    logger.d("grouping %d elements by %d", total, size)
    return Node(
        NodeKind.GROUP,
        f"grouped({size})",
        (source,),
        {"size": size, "total": total, "factory": factory},
    )
