import pytest

from nifstruct.core import Record
from nifstruct.fields import FixedHeaderString, ShortString, PackedColor, Flags, FixedArray, HalfFloat
from nifstruct.meta import FieldDescriptor
from nifstruct.traits import is_compound, is_iterable
from nifstruct.versions import VER_20_0_0_5


class Header(Record):
    header = FixedHeaderString.for_version(VER_20_0_0_5)
    author = ShortString()


class Material(Record):
    diffuse = PackedColor()
    uv      = FixedArray(2, [HalfFloat(), HalfFloat()])


class Scene(Record):
    info     = Header()
    material = Material()


def test_record():
    """Check that building a Record from fields behaves correctly."""
    header = Header()

    assert header.get_ordered_fields_name() == ['header', 'author']
    assert header.get_fields() == [
        ('header', FixedHeaderString('Gamebryo File Format, Version 20.0.0.5')),
        ('author', ShortString('')),
    ]
    assert isinstance(Header.author, FieldDescriptor)
    assert is_compound(header)
    assert not is_iterable(Header)


def test_defaults_are_copied():
    first = Header()
    second = Header()

    assert first.author is not second.author

    first.author = 'me'

    assert first.author == ShortString('me')
    assert second.author == ShortString('')


def test_keyword_construction():
    header = Header(author='someone')

    assert header.author == ShortString('someone')

    with pytest.raises(TypeError):
        Header(creator='someone')


def test_equality():
    assert Header() == Header()
    assert Header(author='x') != Header()
    assert Header() != Scene()


def test_inheritance():
    '''subclasses inherit fields'''
    class ExtendedHeader(Header):
        flags = Flags()

    class SignedHeader(Header):
        author = ShortString('anonymous')

    assert ExtendedHeader().get_ordered_fields_name() == ['header', 'author', 'flags']

    # redeclaring a field changes only its default
    assert SignedHeader().get_ordered_fields_name() == ['header', 'author']
    assert SignedHeader().author == ShortString('anonymous')
    assert Header().author == ShortString('')


def test_coerce():
    material = Material()

    material.diffuse = 'red'
    assert material.diffuse.channels == (255, 0, 0, 255)

    material.diffuse = (1, 2, 3, 4)
    assert material.diffuse == PackedColor(1, 2, 3, 4)

    material.diffuse = 0x04030201
    assert material.diffuse == PackedColor(1, 2, 3, 4)

    material.uv = [HalfFloat(1), HalfFloat(2)]
    assert isinstance(material.uv, FixedArray)
    assert list(material.uv) == [HalfFloat(1), HalfFloat(2)]


def test_nested():
    scene = Scene()
    scene.info.author = 'x'

    assert Scene().info.author == ShortString('')

    scene.material = {'diffuse': 'blue'}
    assert isinstance(scene.material, Material)
    assert scene.material.diffuse == PackedColor(0, 0, 255, 255)

    with pytest.raises(TypeError):
        scene.material = 'blue'


def test_repr():
    assert repr(Header(author='x')) == (
        "<Header(header=<FixedHeaderString('Gamebryo File Format, Version 20.0.0.5')>,"
        "author=<ShortString('x')>)>"
    )
    assert str(Header(author='x')) == 'header: Gamebryo File Format, Version 20.0.0.5\nauthor: x\n'
