"""
Entry points that turn caller data into views: plain iterables, fixed size arrays and delimited
strings.
"""
import array
import re

from lazyviews.base import LazyLib
from lazyviews.errors import InvalidArgumentError
from lazyviews.nodes import passthrough_node
from lazyviews.util import identity
from lazyviews.view import View

numpy = LazyLib('numpy')

DEFAULT_DELIMITER = r"[,|]"


def box(arr):
    """
    Convert a fixed size array into a tuple of plain Python values, preserving order. Handles
    array.array, bytes, bytearray, memoryview, str (one element per character), lists, tuples
    and, when numpy is installed, numpy arrays.

    >>> box(array.array("i", [1, 2]))
    (1, 2)
    >>> box(b"ab")
    (97, 98)
    >>> box("ab")
    ('a', 'b')

    :param arr: array to box
    :return: tuple supporting positional access
    """
    if isinstance(arr, tuple):
        return arr
    if isinstance(arr, (str, bytes, bytearray, list)):
        return tuple(arr)
    if isinstance(arr, (array.array, memoryview)):
        return tuple(arr.tolist())
    np = numpy()
    if np is not None and isinstance(arr, np.ndarray):
        return tuple(arr.tolist())
    raise InvalidArgumentError(f"cannot box {type(arr).__name__}")


def _from_numpy(val):
    return type(val).__module__.partition(".")[0] == "numpy"


def is_array(val):
    if isinstance(val, (bytes, bytearray, array.array, memoryview)):
        return True
    if not _from_numpy(val):
        return False
    np = numpy()
    return np is not None and isinstance(val, np.ndarray)


def view_of(source):
    """
    Wrap source in a view. Views are returned unchanged and arrays are boxed first; anything
    else is referenced as is, so re-iterating the view re-iterates source.
    :param source: iterable or array
    :return: View over source
    """
    if isinstance(source, View):
        return source
    if is_array(source):
        source = box(source)
    return View(passthrough_node(source))


orderable_view_of = view_of


def read_only_view_of(source):
    return view_of(source).read_only_view()


def from_string(text, delim=DEFAULT_DELIMITER, builder=identity):
    """
    Split text on the regular expression delim and map each token through builder. Trailing
    empty tokens are dropped, but text without any delimiter is always a single token.

    >>> from_string("1,2|3", builder=int).as_list()
    [1, 2, 3]
    >>> from_string("").as_list()
    ['']

    :param text: text to split
    :param delim: delimiter pattern
    :param builder: converts each token
    :return: View of the converted tokens
    """
    tokens = re.split(delim, text)
    if len(tokens) > 1:
        while tokens and tokens[-1] == "":
            tokens.pop()
    return view_of(tokens).map(builder)
