"""
Cursors are the per-traversal state machines behind views. Every call to iter() on a view opens
a fresh cursor chain, one cursor per node, each pulling from the cursor of its upstream node. A
cursor only keeps the state its node kind needs.

Cursors follow a has_next/next protocol: has_next may pull from upstream to find out whether an
element is available and buffers it, so calling it repeatedly is idempotent. They are also
ordinary Python iterators.
"""
from lazyviews.errors import NoSuchElementError, UnsupportedOperationError
from lazyviews.logger import get_logger
from lazyviews.nodes import Node, NodeKind, slice_node

logger = get_logger()


class Cursor(object):
    """
    Read-only traversal over one node of a pipeline
    """

    def has_next(self):
        raise NotImplementedError

    def next(self):
        raise NotImplementedError

    def remove(self):
        raise UnsupportedOperationError(f"{type(self).__name__} is read-only")

    def __iter__(self):
        return self

    def __next__(self):
        if not self.has_next():
            raise StopIteration
        return self.next()


class SourceCursor(Cursor):
    """
    Adapts a plain Python iterable to the cursor protocol with a single element of lookahead.
    """

    def __init__(self, iterable):
        self._iterator = iter(iterable)
        self._current = None
        self._ready = False
        self._exhausted = False

    def has_next(self):
        if not self._ready and not self._exhausted:
            try:
                self._current = next(self._iterator)
                self._ready = True
            except StopIteration:
                self._exhausted = True
        return self._ready

    def next(self):
        if not self.has_next():
            raise NoSuchElementError("source is exhausted")
        value, self._current = self._current, None
        self._ready = False
        return value


class MapCursor(Cursor):
    def __init__(self, upstream, mapper):
        self._upstream = upstream
        self._mapper = mapper

    def has_next(self):
        return self._upstream.has_next()

    def next(self):
        return self._mapper(self._upstream.next())


class FilterCursor(Cursor):
    """
    Looks ahead for the next element accepted by the predicate. Rejected elements are handed to
    the shunt callback, once each and in order, as they are passed over.
    """

    def __init__(self, upstream, predicate, shunt=None):
        self._upstream = upstream
        self._predicate = predicate
        self._shunt = shunt
        self._current = None
        self._ready = False

    def _advance(self):
        while self._upstream.has_next():
            value = self._upstream.next()
            if self._predicate(value):
                self._current = value
                self._ready = True
                return
            if self._shunt is not None:
                self._shunt(value)

    def has_next(self):
        if not self._ready:
            self._advance()
        return self._ready

    def next(self):
        if not self.has_next():
            raise NoSuchElementError("no remaining element matches the filter")
        value, self._current = self._current, None
        self._ready = False
        return value


class UniqueCursor(SourceCursor):
    """
    Drains the whole upstream into an insertion ordered set as soon as it is opened, then walks
    that buffer.
    """

    def __init__(self, upstream):
        seen = {}
        while upstream.has_next():
            seen.setdefault(upstream.next(), None)
        logger.d("unique buffered %d distinct elements", len(seen))
        super(UniqueCursor, self).__init__(seen)


class ConcatCursor(Cursor):
    """
    Reads the first source until it runs dry, then opens the second source and stays on it.
    """

    def __init__(self, first, following):
        self._current = open_source(first)
        self._following = following
        self._switched = False

    def has_next(self):
        if not self._switched and not self._current.has_next():
            self._current = open_source(self._following)
            self._switched = True
        return self._current.has_next()

    def next(self):
        if not self.has_next():
            raise NoSuchElementError("both concatenated sources are exhausted")
        return self._current.next()


class LimitCursor(Cursor):
    def __init__(self, upstream, limit):
        self._upstream = upstream
        self._limit = limit
        self._position = 0

    def has_next(self):
        # position first: never pull past the limit
        return self._position < self._limit and self._upstream.has_next()

    def next(self):
        if not self.has_next():
            raise NoSuchElementError(f"limit of {self._limit} reached")
        value = self._upstream.next()
        self._position += 1
        return value


class SkipCursor(Cursor):
    """
    Discards up to count leading elements when opened, then passes the rest through.
    """

    def __init__(self, upstream, count):
        self._upstream = upstream
        skipped = 0
        while skipped < count and upstream.has_next():
            upstream.next()
            skipped += 1

    def has_next(self):
        return self._upstream.has_next()

    def next(self):
        return self._upstream.next()


class ExpandCursor(Cursor):
    """
    Yields exactly size elements: upstream elements while there are any, then filler.
    """

    def __init__(self, upstream, size, filler):
        self._upstream = upstream
        self._size = size
        self._filler = filler
        self._position = 0
        self._drained = False

    def has_next(self):
        return self._position < self._size

    def next(self):
        if not self.has_next():
            raise NoSuchElementError(f"expanded size of {self._size} reached")
        self._position += 1
        if not self._drained:
            if self._upstream.has_next():
                return self._upstream.next()
            self._drained = True
        return self._filler


class GroupCursor(Cursor):
    """
    Walks the precomputed element count of a grouped node in steps of the group size. Each group
    is a lazy slice of the source, built by the node's factory.
    """

    def __init__(self, source, size, total, factory):
        self._source = source
        self._size = size
        self._total = total
        self._factory = factory
        self._index = 0

    def has_next(self):
        return self._index < self._total

    def next(self):
        if not self.has_next():
            raise NoSuchElementError("no groups remain")
        group = self._factory(slice_node(self._source, self._index, self._size))
        self._index += self._size
        return group


def _open_passthrough(node):
    return open_source(node.sources[0])


def _open_map(node):
    return MapCursor(open_source(node.sources[0]), node.params["mapper"])


def _open_filter(node):
    return FilterCursor(open_source(node.sources[0]), node.params["predicate"], node.params["shunt"])


def _open_unique(node):
    return UniqueCursor(open_source(node.sources[0]))


def _open_concat(node):
    first, following = node.sources
    return ConcatCursor(first, following)


def _open_limit(node):
    return LimitCursor(open_source(node.sources[0]), node.params["limit"])


def _open_skip(node):
    return SkipCursor(open_source(node.sources[0]), node.params["count"])


def _open_expand(node):
    return ExpandCursor(open_source(node.sources[0]), node.params["size"], node.params["filler"])


def _open_group(node):
    return GroupCursor(node.sources[0], node.params["size"], node.params["total"], node.params["factory"])


_OPENERS = {
    NodeKind.PASSTHROUGH: _open_passthrough,
    NodeKind.MAP: _open_map,
    NodeKind.FILTER: _open_filter,
    NodeKind.UNIQUE: _open_unique,
    NodeKind.CONCAT: _open_concat,
    NodeKind.LIMIT: _open_limit,
    NodeKind.SKIP: _open_skip,
    NodeKind.EXPAND: _open_expand,
    NodeKind.GROUP: _open_group,
    # sort nodes hold their sorted buffer as their only source
    NodeKind.SORT: _open_passthrough,
}


def open_cursor(node):
    """
    Begin a traversal of node
    :param node: pipeline node
    :return: fresh cursor positioned before the first element
    """
    return _OPENERS[node.kind](node)


def open_source(source):
    """
    Begin a traversal of an upstream source, which may be a node or any iterable
    :param source: node or iterable
    :return: fresh cursor over source
    """
    if isinstance(source, Node):
        return open_cursor(source)
    return SourceCursor(source)
