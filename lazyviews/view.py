"""
The View class, the chainable face of a pipeline. A view wraps a single node; every combinator
returns a new view over a new node whose upstream is this view's node, and every materializer
opens a cursor and consumes it.

Laziness by combinator:

* map, filter, concatenate, first(n)/limit, expand: lazy, pull one upstream element per element
  produced.
* skip/from_: skips its prefix when a cursor is opened, then lazy.
* unique: drains upstream when a cursor is opened.
* grouped: counts upstream when the view is built, each group is a lazy slice.
* order_by/natural_order: drain and sort upstream when the view is built.
"""
import collections.abc
from typing import Optional

from lazyviews import aggregates
from lazyviews.aggregates import NO_SEED
from lazyviews.base import Callback, FoldFunction, Mapper, Predicate
from lazyviews.cursors import open_cursor
from lazyviews.nodes import (
    Node,
    NodeKind,
    concat_node,
    expand_node,
    filter_node,
    limit_node,
    lineage,
    map_node,
    passthrough_node,
    skip_node,
    slice_node,
    unique_node,
)
from lazyviews.ordering import group_node, sort_node
from lazyviews.util import identity


def _as_source(source):
    if isinstance(source, View):
        return source.node
    return source


class View(object):
    """
    Immutable, re-iterable description of a lazy pipeline over one or two sources.
    """

    __slots__ = ("node",)

    def __init__(self, node):
        self.node = node

    def cursor(self):
        """
        Begin a new traversal. Cursors from the same view are independent of each other.
        :return: Cursor
        """
        return open_cursor(self.node)

    def __iter__(self):
        return self.cursor()

    def lineage(self):
        return lineage(self.node)

    def __repr__(self):
        return "View(" + " -> ".join(self.lineage()) + ")"

    def __str__(self):
        return self.to_string()

    # combinators

    def map(self, mapper: Mapper) -> "View":
        return View(map_node(self.node, mapper))

    def filter(self, predicate: Predicate, shunt: Optional[Callback] = None) -> "View":
        """
        Keep elements accepted by predicate. Each rejected element is passed to shunt, when given,
        at the point the traversal skips over it.
        :param predicate: one argument predicate
        :param shunt: one argument callback for rejected elements
        :return: View
        """
        return View(filter_node(self.node, predicate, shunt))

    def unique(self):
        return View(unique_node(self.node))

    def concatenate(self, following):
        return View(concat_node(self.node, _as_source(following)))

    def union(self, following):
        return self.concatenate(following).unique()

    def limit(self, limit):
        return View(limit_node(self.node, limit))

    def first(self, limit=None):
        """
        Without an argument, the first element. With an argument, a view of at most the first
        limit elements.
        """
        if limit is None:
            return aggregates.first(self)
        return self.limit(limit)

    def skip(self, count):
        return View(skip_node(self.node, count))

    from_ = skip

    def slice(self, start, size):
        return View(slice_node(self.node, start, size))

    def expand(self, size, filler):
        return View(expand_node(self.node, size, filler))

    def grouped(self, size):
        return View(group_node(self.node, size, factory=View))

    def order_by(self, key, reverse=False):
        return View(sort_node(self.node, key=key, reverse=reverse))

    def natural_order(self, reverse=False):
        return View(sort_node(self.node, reverse=reverse))

    def read_only_view(self):
        return View(passthrough_node(self.node))

    def to_strings(self):
        return self.map(str)

    # materializers

    def foreach(self, callback: Callback) -> None:
        aggregates.foreach(self, callback)

    def aggregate(self, func: FoldFunction, initial=NO_SEED):
        return aggregates.aggregate(self, func, initial)

    def count(self):
        return aggregates.count(self)

    def is_empty(self):
        return not self.cursor().has_next()

    def contains(self, value, equality=None):
        return aggregates.contains(self, value, equality)

    def exists(self, predicate):
        return aggregates.exists(self, predicate)

    def get(self, index):
        source = self._positional_source()
        if source is not None:
            return aggregates.get(source, index)
        return aggregates.get(self, index)

    def _positional_source(self):
        node = self.node
        while node.kind in (NodeKind.PASSTHROUGH, NodeKind.SORT):
            source = node.sources[0]
            if not isinstance(source, Node):
                return source if isinstance(source, collections.abc.Sequence) else None
            node = source
        return None

    def max(self, key=identity):
        return aggregates.max_(self, key)

    def min(self, key=identity):
        return aggregates.min_(self, key)

    def as_list(self):
        return aggregates.as_list(self)

    def as_set(self):
        return aggregates.as_set(self)

    def as_map(self, pair_function=identity):
        return aggregates.as_map(self, pair_function)

    def as_array(self, typecode=None, builder=None):
        return aggregates.as_array(self, typecode=typecode, builder=builder)

    def group_by(self, key):
        return aggregates.group_by(self, key)

    def to_string(self, start="[", sep=",", end="]"):
        return aggregates.to_string(self, start, sep, end)

    def string_format(self, fmt, elem_fmt):
        return aggregates.string_format(self, fmt, elem_fmt)

    def delimit(self, delimiter):
        return aggregates.delimit(self, delimiter)
