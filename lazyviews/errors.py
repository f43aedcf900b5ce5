class ViewError(Exception):
    """
    Base class for every error raised by lazyviews. Each subclass also derives from the matching
    builtin exception so callers may catch either.
    """


class InvalidArgumentError(ViewError, ValueError):
    """
    Raised when a view is constructed with an illegal parameter, such as a negative limit or a
    group size below one.
    """


class NoSuchElementError(ViewError, LookupError):
    """
    Raised when an element is requested from a cursor that has none left.
    """


class IndexOutOfRangeError(ViewError, IndexError):
    """
    Raised by positional access past the end of a view. The index attribute holds the index the
    traversal actually reached before running out of elements.
    """

    def __init__(self, index):
        super(IndexOutOfRangeError, self).__init__(str(index))
        self.index = index


class UnsupportedOperationError(ViewError, TypeError):
    """
    Raised when a mutation is attempted through a cursor. All cursors are read-only.
    """
