"""
The basic, non-mathematical, types of the format: strings, colors, half floats
and raw bytes.

Each of them is a small value type with its own notion of equality that
knows how to pack/unpack itself; the version and the byte order of the file
come from the FormatMetadata passed along.
"""
import logging
import struct
from typing import Generic, TypeVar

from bitstring import Bits
from PIL import ImageColor

from .enum import Compliant
from .exceptions import UnpackException, PackException, MagicException
from .info import FormatMetadata
from .meta import Native, Compound
from .streams import Stream
from .versions import VER_10_0_1_0, VER_20_1_0_3, VER_INVALID, format_version, parse_version


logger = logging.getLogger(__name__)

# one byte for each character
ENCODING = 'latin1'


def _error(exc_cls, msg):
    logger.error(msg)
    raise exc_cls(chain=[], msg=msg)


def _encode_text(instance, text) -> bytes:
    try:
        return text.encode(ENCODING)
    except UnicodeEncodeError as e:
        _error(PackException, f'{instance.__class__.__name__} cannot encode {text!r}: {e.reason}')


class Field(object):
    """Base class of the basic types: the subclasses implement _encode()
    and _decode(), here we have the common interface."""
    __slots__ = ()

    def _encode(self, info: FormatMetadata) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._encode() not implemented")

    @classmethod
    def _decode(cls, stream: Stream, info: FormatMetadata, compliant: Compliant):
        raise NotImplementedError(f"method {cls.__name__}._decode() not implemented")

    def pack(self, stream=None, info=None) -> bytes:
        '''Encode the value and, if a stream is passed, write it there.

        The value is encoded completely before writing, so a value that
        cannot be represented leaves the stream untouched.'''
        info = FormatMetadata() if info is None else info

        try:
            raw = self._encode(info)
        except struct.error as e:
            _error(PackException, f'{self!r} cannot be packed: {e}')

        if stream is not None:
            stream.write(raw)

        return raw

    @classmethod
    def unpack(cls, stream, info=None, compliant=Compliant.NONE):
        info = FormatMetadata() if info is None else info

        logger.debug('unpacking \'%s\' at offset %d' % (cls.__name__, stream.tell()))

        try:
            return cls._decode(stream, info, compliant)
        except (UnpackException, MagicException) as e:
            e.chain.append(cls.__name__)
            raise

    @classmethod
    def from_raw(cls, raw: bytes, info=None, compliant=Compliant.NONE):
        return cls.unpack(Stream(raw), info=info, compliant=compliant)

    @property
    def raw(self) -> bytes:
        return self.pack()


class StringField(Field, Native):
    """Text with exact equality, the subclasses define how it's stored.

    Only instances of the same class compare equal."""

    def __init__(self, text=''):
        if isinstance(text, StringField):
            text = text.text

        if not isinstance(text, str):
            raise TypeError(f'{self.__class__.__name__} needs a str, not {text.__class__.__name__}')

        self.text = text

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.text)

    def __str__(self):
        return self.text

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.text == other.text

    def __hash__(self):
        return hash(self.text)


class ShortString(StringField):
    """String with a one byte length in front.

    The length counts also the NUL written after the text, so the text
    can be at most 254 characters long."""
    MAX_LENGTH = 254

    def _encode(self, info):
        raw = _encode_text(self, self.text)

        if len(raw) > self.MAX_LENGTH:
            _error(PackException, f'{self.__class__.__name__} can hold at most {self.MAX_LENGTH} characters, not {len(raw)}')

        if b'\x00' in raw:
            _error(PackException, f'{self.__class__.__name__} cannot contain NUL characters')

        return struct.pack('B', len(raw) + 1) + raw + b'\x00'

    @classmethod
    def _decode(cls, stream, info, compliant):
        length = stream.read_exactly(1)[0]
        raw = stream.read_exactly(length)

        raw, terminator, _ = raw.partition(b'\x00')

        if not terminator:
            logger.debug('%s without terminator' % cls.__name__)
            if compliant & Compliant.TERMINATOR:
                _error(UnpackException, f'{cls.__name__} without terminator')

        if len(raw) > cls.MAX_LENGTH:
            _error(UnpackException, f'{cls.__name__} of {len(raw)} characters without terminator')

        return cls(raw.decode(ENCODING))


class LineString(StringField):
    """String terminated by a line break."""
    TERMINATOR = b'\x0a'

    def _encode(self, info):
        raw = _encode_text(self, self.text)

        if self.TERMINATOR in raw:
            _error(PackException, f'{self.__class__.__name__} cannot contain line breaks')

        return raw + self.TERMINATOR

    @classmethod
    def _decode(cls, stream, info, compliant):
        return cls(stream.read_until(cls.TERMINATOR).decode(ENCODING))


class FixedHeaderString(LineString):
    """The first line of a file, something like

        Gamebryo File Format, Version 20.0.0.5

    The version written here is the one that rules the rest of the file."""
    NETIMMERSE = 'NetImmerse File Format, Version '
    GAMEBRYO   = 'Gamebryo File Format, Version '

    PREFIXES = (NETIMMERSE, GAMEBRYO)

    @classmethod
    def for_version(cls, version: int) -> "FixedHeaderString":
        prefix = cls.NETIMMERSE if version <= VER_10_0_1_0 else cls.GAMEBRYO

        return cls(prefix + format_version(version))

    def is_known(self) -> bool:
        return self.text.startswith(self.PREFIXES)

    @property
    def version(self) -> int:
        for prefix in self.PREFIXES:
            if self.text.startswith(prefix):
                return parse_version(self.text[len(prefix):])

        return VER_INVALID

    @classmethod
    def _decode(cls, stream, info, compliant):
        header = super()._decode(stream, info, compliant)

        if not header.is_known():
            logger.warning(f'unknown header {header.text!r}')
            if compliant & Compliant.MAGIC:
                raise MagicException(chain=[], msg=f'unknown header {header.text!r}')

        return header


class TextString(StringField):
    """A StringField that can be used where a str is expected: it compares
    and hashes like its text and the str methods are delegated to it.

    Indexing makes Python willing to iterate over its characters, but it's
    Native so a generic traversal treats it as a leaf."""

    def __getattr__(self, name):
        # called only for what is not defined here (upper(), split(), ...)
        if name.startswith('_') or 'text' not in self.__dict__:
            raise AttributeError(name)

        return getattr(self.__dict__['text'], name)

    def __eq__(self, other):
        if isinstance(other, str):
            return self.text == other

        if isinstance(other, TextString):
            return self.text == other.text

        return NotImplemented

    def __hash__(self):
        return hash(self.text)

    def __len__(self):
        return len(self.text)

    def __getitem__(self, item):
        return self.text[item]

    def __contains__(self, item):
        if isinstance(item, StringField):
            item = item.text

        return item in self.text

    def __add__(self, other):
        return self.text + str(other)

    def __radd__(self, other):
        return str(other) + self.text


class IndexedString(TextString):
    """String referenced by its position in the string table of the file;
    before version 20.1.0.3 it's stored inline with a 32 bit length in front.

    The translation between index and text belongs to the string table,
    here the index is only carried along. It's part of the equality only
    between two references not resolved yet (index and no text)."""
    NO_INDEX = -1

    def __init__(self, text='', index=NO_INDEX):
        if isinstance(text, IndexedString) and index == self.NO_INDEX:
            index = text.index

        super().__init__(text)
        self.index = index

    def __repr__(self):
        if self.index == self.NO_INDEX:
            return super().__repr__()

        return '<%s(%r, index=%d)>' % (self.__class__.__name__, self.text, self.index)

    def is_unresolved(self) -> bool:
        return self.index != self.NO_INDEX and not self.text

    def __eq__(self, other):
        if isinstance(other, IndexedString) and self.is_unresolved() and other.is_unresolved():
            return self.index == other.index

        return super().__eq__(other)

    def __hash__(self):
        return hash(self.text)

    def _encode(self, info):
        if info.version >= VER_20_1_0_3:
            if self.index == self.NO_INDEX and self.text:
                _error(PackException, f'{self!r} has no index in the string table')

            return struct.pack(info.struct_prefix + 'i', self.index)

        raw = _encode_text(self, self.text)

        return struct.pack(info.struct_prefix + 'I', len(raw)) + raw

    @classmethod
    def _decode(cls, stream, info, compliant):
        if info.version >= VER_20_1_0_3:
            index, = struct.unpack(info.struct_prefix + 'i', stream.read_exactly(4))
            return cls(index=index)

        length, = struct.unpack(info.struct_prefix + 'I', stream.read_exactly(4))

        return cls(stream.read_exactly(length).decode(ENCODING))


class CharString(TextString):
    """Literal buffer of characters stored inline, padded with NULs."""
    LENGTH = 8

    def _encode(self, info):
        raw = _encode_text(self, self.text)

        if len(raw) > self.LENGTH:
            _error(PackException, f'{self.__class__.__name__} can hold at most {self.LENGTH} characters, not {len(raw)}')

        if b'\x00' in raw:
            _error(PackException, f'{self.__class__.__name__} cannot contain NUL characters')

        return raw.ljust(self.LENGTH, b'\x00')

    @classmethod
    def _decode(cls, stream, info, compliant):
        raw = stream.read_exactly(cls.LENGTH)

        return cls(raw.split(b'\x00', 1)[0].decode(ENCODING))


class Channel(object):
    """One byte of the word of a PackedColor."""

    def __init__(self, shift):
        self.shift = shift

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        return (instance.word >> self.shift) & 0xff

    def __set__(self, instance, value):
        if not isinstance(value, int) or not 0 <= value <= 0xff:
            raise ValueError(f'channel {self.name} must be in 0..255, not {value!r}')

        instance.word = (instance.word & ~(0xff << self.shift)) | (value << self.shift)


class PackedColor(Field, Native):
    """Color with four 8 bit channels.

    The channels are views over a single 32 bit word (red in the least
    significant byte) and two colors are equal only if the words are."""
    __slots__ = ('word',)

    r = Channel(0)
    g = Channel(8)
    b = Channel(16)
    a = Channel(24)

    def __init__(self, r=0, g=0, b=0, a=0):
        self.word = 0
        self.r = r
        self.g = g
        self.b = b
        self.a = a

    @classmethod
    def from_word(cls, word: int) -> "PackedColor":
        if not 0 <= word <= 0xffffffff:
            raise ValueError(f'word must be a 32 bit unsigned, not {word:#x}')

        color = cls()
        color.word = word

        return color

    @classmethod
    def from_name(cls, name: str) -> "PackedColor":
        '''Build the color from a name like "red" or "#ff000080".'''
        return cls(*ImageColor.getcolor(name, 'RGBA'))

    @classmethod
    def coerce(cls, value):
        if isinstance(value, str):
            return cls.from_name(value)

        if isinstance(value, int):
            return cls.from_word(value)

        return cls(*value)

    @property
    def channels(self):
        return self.r, self.g, self.b, self.a

    def __repr__(self):
        return '<%s(r=%d, g=%d, b=%d, a=%d)>' % ((self.__class__.__name__,) + self.channels)

    def __eq__(self, other):
        if not isinstance(other, PackedColor):
            return NotImplemented

        return self.word == other.word

    def __hash__(self):
        return hash(self.word)

    def _encode(self, info):
        return bytes(self.channels)

    @classmethod
    def _decode(cls, stream, info, compliant):
        return cls(*stream.read_exactly(4))


class HalfFloat(Field, Native):
    """Half precision floating point number kept as its raw 16 bit pattern.

    It's never converted to a float: what is read is written back bit by
    bit, negative zero (0x8000) included, and the equality is on the bits."""
    __slots__ = ('_value',)

    def __init__(self, value=0):
        self.value = value

    def __get_value(self):
        return self._value

    def __set_value(self, value):
        if not isinstance(value, int) or not 0 <= value <= 0xffff:
            raise ValueError(f'{self.__class__.__name__} needs a 16 bit pattern, not {value!r}')

        self._value = value

    value = property(__get_value, __set_value)

    def __int__(self):
        return self.value

    def __repr__(self):
        return '<%s(0x%04x)>' % (self.__class__.__name__, self.value)

    def __eq__(self, other):
        if not isinstance(other, HalfFloat):
            return NotImplemented

        return self.value == other.value

    def __hash__(self):
        return hash(self.value)

    @property
    def bits(self) -> Bits:
        return Bits(uint=self.value, length=16)

    @property
    def sign(self) -> int:
        return int(self.bits[0])

    @property
    def exponent(self) -> int:
        return self.bits[1:6].uint

    @property
    def fraction(self) -> int:
        return self.bits[6:].uint

    def _encode(self, info):
        return struct.pack(info.struct_prefix + 'H', self.value)

    @classmethod
    def _decode(cls, stream, info, compliant):
        return cls(struct.unpack(info.struct_prefix + 'H', stream.read_exactly(2))[0])


class Flags(int, Field, Native):
    """16 bit unsigned integer whose meaning is in the single bits."""

    def __new__(cls, value=0):
        if not isinstance(value, int) or not 0 <= value <= 0xffff:
            raise ValueError(f'{cls.__name__} must be a 16 bit unsigned, not {value!r}')

        return super().__new__(cls, value)

    def __str__(self):
        return Bits(uint=self, length=16).bin

    def __repr__(self):
        return '<%s(0b%s)>' % (self.__class__.__name__, self)

    def _encode(self, info):
        return struct.pack(info.struct_prefix + 'H', self)

    @classmethod
    def _decode(cls, stream, info, compliant):
        return cls(struct.unpack(info.struct_prefix + 'H', stream.read_exactly(2))[0])


class ByteBuffer(bytearray, Field, Compound):
    """An array of bytes, stored with a 32 bit length in front.

    It's a Compound so a generic traversal walks its elements."""
    MAX_LENGTH = 0xffffffff

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, bytes(self))

    def _encode(self, info):
        if len(self) > self.MAX_LENGTH:
            _error(PackException, f'{self.__class__.__name__} too long ({len(self)} bytes)')

        return struct.pack(info.struct_prefix + 'I', len(self)) + bytes(self)

    @classmethod
    def _decode(cls, stream, info, compliant):
        length, = struct.unpack(info.struct_prefix + 'I', stream.read_exactly(4))

        return cls(stream.read_exactly(length))


T = TypeVar('T')


class FixedArray(Compound, Generic[T]):
    '''Sequence with a number of elements decided at creation time.

    You can pass the elements or a factory to build each of them

        FixedArray(3, [1.0, 0.0, 0.0])
        FixedArray(4, factory=HalfFloat)
    '''

    def __init__(self, length, items=None, factory=None):
        if items is None:
            items = [factory() if factory else None for _ in range(length)]

        items = list(items)
        if len(items) != length:
            raise ValueError(f'{self.__class__.__name__} needs {length} elements, not {len(items)}')

        self._items = items

    @classmethod
    def coerce(cls, value):
        value = list(value)
        return cls(len(value), value)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._items!r})>'

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, item):
        return self._items[item]

    def __setitem__(self, item, value):
        if isinstance(item, slice):
            raise TypeError(f'{self.__class__.__name__} cannot be assigned by slice')

        self._items[item] = value

    def __eq__(self, other):
        if not isinstance(other, FixedArray):
            return NotImplemented

        return self._items == other._items
