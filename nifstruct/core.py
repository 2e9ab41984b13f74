"""
Core module for the compound records of the format.
"""
import logging
from collections.abc import Mapping
from typing import List, Tuple

from .meta import Compound, FieldBase, MetaRecord


logger = logging.getLogger(__name__)


class Record(Compound, metaclass=MetaRecord):
    """
    Base class of the multi-field records: the fields are declared as class
    attributes, their value is used as default

        class Key(Record):
            time  = HalfFloat()
            color = PackedColor(0xff, 0xff, 0xff, 0xff)
            name  = IndexedString()

    Every instance gets its own copy of the defaults and assigning a plain
    value to a field converts it to the declared type

        key = Key(name='Scene Root')
        key.color = 'red'

    Records can be generic too (class Key(Record, Generic[T])).
    """

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(self._meta.fields)
        if unknown:
            raise TypeError(f"{self.__class__.__name__} has no field(s) {', '.join(sorted(unknown))}")

        for name, value in kwargs.items():
            logger.debug('initializing %s.%s' % (self.__class__.__name__, name))
            setattr(self, name, value)

    @classmethod
    def coerce(cls, value):
        if not isinstance(value, Mapping):
            raise TypeError(f'{cls.__name__} can be built only from a mapping, not {value.__class__.__name__}')

        return cls(**value)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, FieldBase]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.get_fields() == other.get_fields()

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, field)
        return msg
