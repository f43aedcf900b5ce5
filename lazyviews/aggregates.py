"""
Materializers and aggregators. Every function here consumes its source completely in a single
pass, so none of them terminate on an infinite source. They accept views as well as any other
iterable.
"""
import array
import collections.abc

from lazyviews.base import Aggregate, DefaultEquality
from lazyviews.errors import IndexOutOfRangeError, InvalidArgumentError, NoSuchElementError
from lazyviews.util import EMPTY, identity

NO_SEED = object()


class Counter(Aggregate):
    def __init__(self):
        self._count = 0

    def call(self, element):
        self._count += 1

    def value(self):
        return self._count


class StringMaker(Aggregate):
    """
    Joins str() of every element with sep, between start and end.
    """

    def __init__(self, start, sep, end):
        self._start = start
        self._sep = sep
        self._end = end
        self._parts = []

    def call(self, element):
        self._parts.append(str(element))

    def value(self):
        return self._start + self._sep.join(self._parts) + self._end


class FormattedStringMaker(Aggregate):
    """
    Applies the %-style elem_fmt to str() of each element, concatenates the results and
    substitutes them into fmt.

    >>> maker = FormattedStringMaker("<ul>%s</ul>", "<li>%s</li>")
    >>> maker.call(1); maker.call(2)
    >>> maker.value()
    '<ul><li>1</li><li>2</li></ul>'
    """

    def __init__(self, fmt, elem_fmt):
        self._fmt = fmt
        self._elem_fmt = elem_fmt
        self._parts = []

    def call(self, element):
        self._parts.append(self._elem_fmt % str(element))

    def value(self):
        return self._fmt % "".join(self._parts)


def aggregate(source, func, initial=NO_SEED):
    """
    Fold source from left to right.

    With an Aggregate object every element is passed to its call() and its value() is returned.
    With a two argument function and no initial value, the first element seeds the fold and an
    empty source yields EMPTY. With an initial value, an empty source yields that value.

    >>> aggregate([1, 2, 3], lambda x, y: x + y)
    6
    >>> aggregate([], lambda x, y: x + y)
    EMPTY
    >>> aggregate([], lambda x, y: x + y, 10)
    10

    :param source: iterable to fold
    :param func: two argument fold function, or an Aggregate
    :param initial: optional seed
    :return: folded value
    """
    if isinstance(func, Aggregate):
        for element in source:
            func.call(element)
        return func.value()
    iterator = iter(source)
    if initial is NO_SEED:
        result = next(iterator, NO_SEED)
        if result is NO_SEED:
            return EMPTY
    else:
        result = initial
    for element in iterator:
        result = func(result, element)
    return result


def count(source):
    return aggregate(source, Counter())


def is_empty(source):
    if source is None:
        return True
    for _ in source:
        return False
    return True


def foreach(source, callback):
    for element in source:
        callback(element)


def first(source):
    """
    First element of source
    :param source: iterable
    :return: first element
    :raises NoSuchElementError: when source is empty
    """
    for element in source:
        return element
    raise NoSuchElementError("first() of an empty sequence")


def get(source, index):
    """
    Element at position index. Sequences are indexed directly, other iterables are walked from
    the start.
    :param source: iterable
    :param index: zero based position
    :return: element at index
    :raises IndexOutOfRangeError: carrying the index reached, which is the length of source
    """
    if isinstance(source, collections.abc.Sequence):
        if 0 <= index < len(source):
            return source[index]
        raise IndexOutOfRangeError(len(source))
    reached = 0
    for element in source:
        if reached == index:
            return element
        reached += 1
    raise IndexOutOfRangeError(reached)


def contains(source, value, equality=None):
    """
    Check whether any element of source equals value
    :param source: iterable
    :param value: value to look for
    :param equality: two argument comparator called as equality(element, value), defaults to a
        None-safe ==
    :return: True if a match is found
    """
    equality = equality or DefaultEquality()
    for element in source:
        if equality(element, value):
            return True
    return False


def exists(source, predicate):
    for element in source:
        if predicate(element):
            return True
    return False


def max_(source, key=identity):
    """
    Largest element by left fold. On ties the later element wins. EMPTY for an empty source.
    """
    return aggregate(source, lambda left, right: left if key(left) > key(right) else right)


def min_(source, key=identity):
    """
    Smallest element by left fold. On ties the later element wins. EMPTY for an empty source.
    """
    return aggregate(source, lambda left, right: left if key(left) < key(right) else right)


def as_list(source):
    return [element for element in source]


def as_set(source):
    return set(source)


def as_map(source, pair_function=identity):
    """
    Build a dict from (key, value) pairs. Later pairs overwrite earlier values for the same key;
    keys keep the order in which they were first seen.
    :param source: iterable
    :param pair_function: maps each element to a (key, value) pair, defaults to the element
    :return: dict
    """
    result = {}
    for element in source:
        key, value = pair_function(element)
        result[key] = value
    return result


def as_array(source, typecode=None, builder=None):
    """
    Materialize source into a fixed size container. The element type is given explicitly: either
    an array module typecode, or a builder called with the list of elements.

    >>> as_array([1, 2, 3], typecode="i")
    array('i', [1, 2, 3])
    >>> as_array([1, 2], builder=frozenset)
    frozenset({1, 2})

    :param source: iterable
    :param typecode: typecode for array.array
    :param builder: callable taking a list of elements
    :return: array, builder result, or a tuple when neither is given
    """
    if typecode is not None and builder is not None:
        raise InvalidArgumentError("pass either typecode or builder, not both")
    elements = as_list(source)
    if typecode is not None:
        return array.array(typecode, elements)
    if builder is not None:
        return builder(elements)
    return tuple(elements)


def group_by(source, key):
    """
    Map each key to the set of elements that produce it. Keys appear in first-seen order;
    equal elements under the same key collapse into one.
    :param source: iterable
    :param key: key extractor
    :return: dict of key to set
    """
    groups = {}
    for element in source:
        groups.setdefault(key(element), set()).add(element)
    return groups


def to_string(source, start="[", sep=",", end="]"):
    return aggregate(source, StringMaker(start, sep, end))


def string_format(source, fmt, elem_fmt):
    return aggregate(source, FormattedStringMaker(fmt, elem_fmt))


def delimit(source, delimiter):
    return to_string(source, "", delimiter, "")
