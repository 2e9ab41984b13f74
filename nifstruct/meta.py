import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    '''Byte order of the multi-byte numbers inside a file.'''
    BIG_ENDIAN    = 0
    LITTLE_ENDIAN = 1


class Category(Enum):
    '''How a generic traversal has to consider a type.'''
    NATIVE   = auto()  # a leaf, even if composed internally
    COMPOUND = auto()  # recurse into fields or elements


class FieldDescriptor(object):
    """Wrapper around field access of a Record related class."""

    def __init__(self, default: "FieldBase", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.default = default
        self.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self

        data = instance.__dict__

        if self.name not in data:
            self.logger.debug("create new field for field named '%s'", self.name)
            data[self.name] = self.default.create()

        return data[self.name]

    def __set__(self, instance, value):
        self.logger.debug("__set__ from %s for field named '%s'", instance.__class__.__name__, self.name)
        field_cls = self.default.__class__

        # if the value is the same type then set as it is
        # otherwise delegate the conversion to the field
        if not isinstance(value, field_cls):
            value = field_cls.coerce(value)

        instance.__dict__[self.name] = value


class FieldBase(object):
    """Common base of the category markers.

    Any instance of a subclass used as class attribute of a Record
    becomes a field of it with the instance as default value."""
    __slots__ = ()
    _category = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        categories = {_.__dict__['_category'] for _ in cls.__mro__ if _.__dict__.get('_category')}
        if len(categories) > 1:
            raise TypeError(f'{cls.__name__} cannot be both Native and Compound')

    def contribute_to_record(self, cls, name):
        setattr(cls, name, FieldDescriptor(self, name))

    def create(self):
        return copy.deepcopy(self)

    @classmethod
    def coerce(cls, value):
        return cls(value)


class Native(FieldBase):
    '''Atomic as far as a generic traversal is concerned.'''
    __slots__ = ()
    _category = Category.NATIVE


class Compound(FieldBase):
    '''A generic traversal recurses into the fields or the elements.'''
    __slots__ = ()
    _category = Category.COMPOUND


class Meta(object):
    """Class containing metadata about the record"""

    def __init__(self):
        self.fields = []


class MetaRecord(type):

    def __new__(cls, names, bases, attrs):
        '''The fields are removed from the class namespace and installed
        back as descriptors, remembering the order of declaration.'''
        fields = {_k: _v for _k, _v in attrs.items() if isinstance(_v, FieldBase)}
        new_attrs = {_k: _v for _k, _v in attrs.items() if _k not in fields}

        new_cls = super(MetaRecord, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaRecord)]
        for parent in parents:
            for obj_name in parent._meta.fields:
                if obj_name not in new_cls._meta.fields:
                    new_cls._meta.fields.append(obj_name)

        for obj_name, obj in fields.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        logger.debug('contribute_to_record() for field \'%s.%s\'' % (cls.__name__, name))
        # redeclaring a field of a parent only changes its default
        if name not in cls._meta.fields:
            cls._meta.fields.append(name)
        value.contribute_to_record(cls, name)
