import collections.abc
import enum


class Empty(enum.Enum):
    """
    Sentinel returned by a fold without a seed over an empty view. It is falsy.
    """
    EMPTY = 0

    def __bool__(self):
        return False

    def __repr__(self):
        return 'EMPTY'


EMPTY = Empty.EMPTY


def identity(arg):
    """
    Function which returns the argument. Used as a default lambda function.

    >>> obj = object()
    >>> obj is identity(obj)
    True

    :param arg: object to take identity of
    :return: return arg
    """
    return arg


def is_reiterable(val):
    """
    Check if iterating val twice yields two independent traversals. Iterators (including
    generators) are their own iterator and so can only be traversed once.

    >>> is_reiterable([1, 2])
    True
    >>> is_reiterable(iter([1, 2]))
    False

    :param val: value to check
    :return: True if val can be traversed more than once
    """
    return isinstance(val, collections.abc.Iterable) and not isinstance(val, collections.abc.Iterator)


def negate(predicate):
    """
    Return a predicate which is true exactly when predicate is false

    >>> negate(lambda x: x > 1)(0)
    True

    :param predicate: predicate to invert
    :return: inverted predicate
    """
    return lambda arg: not predicate(arg)


def not_none(arg):
    return arg is not None
