"""
Package for building lazy, re-iterable pipelines over ordered sequences. Imports the primary
entrypoint at sources.view_of

A view is a description of a pipeline: map, filter, unique, concatenate, limit, skip, expand,
grouped and ordering steps chained over any iterable. Nothing is computed until the view is
iterated or materialized with one of its as_* / aggregate methods.
"""

from lazyviews.base import Aggregate, DefaultEquality, Equality, NullSafeEquality
from lazyviews.errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    NoSuchElementError,
    UnsupportedOperationError,
    ViewError,
)
from lazyviews.sources import box, from_string, orderable_view_of, read_only_view_of, view_of
from lazyviews.util import EMPTY, negate, not_none
from lazyviews.view import View

__license__ = "MIT"
__version__ = "0.1.0"
__status__ = "Development"
