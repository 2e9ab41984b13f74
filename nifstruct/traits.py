'''
Predicates over types used by the generic algorithms (equality, traversal,
serialization) to treat user defined records uniformly.

All of them work on the type only: nothing is instantiated and a failing
probe simply answers False, it never raises.
'''
import logging
from functools import lru_cache
from typing import Optional, get_origin

from .meta import Category


logger = logging.getLogger(__name__)

# the caches keep the probed classes alive, so they are bounded
CACHE_SIZE = 1024


def _as_class(tp):
    '''Resolve parameterized aliases like FixedArray[int] to the class itself.'''
    origin = get_origin(tp)
    if origin is not None:
        tp = origin

    return tp if isinstance(tp, type) else None


@lru_cache(maxsize=CACHE_SIZE)
def _is_iterable(cls) -> bool:
    for klass in cls.__mro__:
        if '__iter__' in klass.__dict__:
            return klass.__dict__['__iter__'] is not None

    return False


def is_iterable(tp) -> bool:
    '''True if the type exposes a way to walk its elements (i.e. it declares __iter__).'''
    cls = _as_class(tp)
    if cls is None:
        return False

    try:
        return _is_iterable(cls)
    except TypeError:  # unhashable
        return False


@lru_cache(maxsize=CACHE_SIZE)
def _is_base_of_template(base, derived) -> bool:
    # a subclass of Key[float] has Key itself in its MRO
    return base in derived.__mro__


def is_base_of_template(base, derived) -> bool:
    '''Tell if "derived" is "base" or derives from some parameterization
    of it, whatever the parameters are.

        class Key(Record, Generic[T]):
            ...

        class FloatKey(Key[float]):
            ...

        is_base_of_template(Key, FloatKey)  # True
    '''
    base = _as_class(base)
    derived = _as_class(derived)
    if base is None or derived is None:
        return False

    try:
        return _is_base_of_template(base, derived)
    except TypeError:
        return False


def category_of(obj) -> Optional[Category]:
    '''Return the category marker of a type or of an instance, None if untagged.'''
    cls = _as_class(obj)
    if cls is None:
        cls = _as_class(type(obj))

    return getattr(cls, '_category', None)


def is_native(obj) -> bool:
    return category_of(obj) is Category.NATIVE


def is_compound(obj) -> bool:
    return category_of(obj) is Category.COMPOUND
