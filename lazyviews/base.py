import sys
import importlib
import importlib.util
import threading
from abc import abstractmethod
from typing import Any, Callable

_importlock = threading.Lock()
_imports = {}

# Function-object contracts. Plain callables satisfy all of them.
Mapper = Callable[[Any], Any]
Predicate = Callable[[Any], bool]
FoldFunction = Callable[[Any, Any], Any]
Callback = Callable[[Any], None]


def lazy_import(name):
    if name in sys.modules:
        return sys.modules[name]
    return importlib.import_module(name)


def lazy_check(name):
    return importlib.util.find_spec(name) is not None


def _setup_lib(name, required):
    global _imports
    with _importlock:
        if name in _imports:
            return
        if not lazy_check(name):
            if required:
                raise ImportError(f'{name} is required but is not installed')
            _imports[name] = None
            return
        _imports[name] = lazy_import(name)


def initialize_lib(name, required=False):
    _setup_lib(name, required)
    return _imports[name]


class LazyLib:
    """
    Handle on an optional library which is only imported the first time it is called. Calling the
    handle returns the module, or None when the library is not installed and not required.
    """
    def __init__(self, name, required=False):
        self._name = name
        self._lib = None
        self._loaded = False
        self._required = required

    def _setup(self):
        self._lib = initialize_lib(self._name, self._required)
        self._loaded = True

    def __call__(self):
        if not self._loaded:
            self._setup()
        return self._lib


class Equality:
    """
    Two-argument equality comparator.
    """
    @abstractmethod
    def __call__(self, left, right):
        pass


class NullSafeEquality(Equality):
    """
    Equality that settles None before delegating: two Nones are equal, None against anything else
    is unequal. Subclasses implement null_safe_equals for the non-None case.
    """
    def __call__(self, left, right):
        if left is None or right is None:
            return left is None and right is None
        return self.null_safe_equals(left, right)

    @abstractmethod
    def null_safe_equals(self, left, right):
        pass


class DefaultEquality(NullSafeEquality):
    def null_safe_equals(self, left, right):
        return left == right


class Aggregate:
    """
    Stateful fold. Each element is fed to call() in order, then value() produces the result.
    """
    @abstractmethod
    def call(self, element):
        pass

    @abstractmethod
    def value(self):
        pass

    def __call__(self, element):
        self.call(element)
