import pytest

from pngstash.core import Chunk
from pngstash.fields import StructField, StringField
from pngstash.meta import Endianess
from pngstash.properties import Dependency
from pngstash.exceptions import TruncatedException, MagicException


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert dummy.get_ordered_fields_name() == ['a', 'b', 'c']

    assert dummy.a.size == 4
    assert dummy.a.raw == b'\xad\x0b\x00\x00'
    assert dummy.a.value == 0xbad
    assert dummy.a.father is dummy

    assert dummy.b.size == 0x10
    assert dummy.b.raw == b'\x00' * 0x10

    assert dummy.c.raw == b'\xef\xbe\xad\xde'

    assert dummy.layout == {
        'a': (0x00, 4),
        'b': (0x04, 0x10),
        'c': (0x14, 4),
    }

    assert dummy.size == 0x18
    assert len(dummy.raw) == dummy.size
    assert dummy.pack() == dummy.raw
    assert dummy.raw == (
        b'\xad\x0b\x00\x00' +
        b'\x00' * 0x10 +
        b'\xef\xbe\xad\xde'
    )


def test_instances_do_not_share_fields():
    class Dummy(Chunk):
        a = StructField('I')

    first, second = Dummy(), Dummy()
    first.a = 0xcafe

    assert first.a.value == 0xcafe
    assert second.a.value == 0


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))

    example = Example()

    assert list(example.get_dependencies().keys()) == [
        'data.length',
    ]

    example.data = b'kebab'

    assert example.sz.value == 5
    assert example.data.value == b'kebab'
    assert example.raw == b'\x05\x00\x00\x00kebab'


def test_unpack_w_dependencies():
    class Example(Chunk):
        sz = StructField('H', endianess=Endianess.BIG_ENDIAN)
        data = StringField(Dependency('.sz'))
        tail = StructField('B')

    example = Example(b'\x00\x03abc\xff')

    assert example.sz.value == 3
    assert example.data.value == b'abc'
    assert example.tail.value == 0xff
    assert example.raw == b'\x00\x03abc\xff'


def test_dependency_from_root():
    class Header(Chunk):
        count = StructField('B')

    class Container(Chunk):
        header = Header()
        payload = StringField(Dependency('header.count'))

    container = Container(b'\x02xy')

    assert container.header.count.value == 2
    assert container.payload.value == b'xy'
    assert container.header.root is container


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = StructField("I")

    class Son(Father):
        field_c = StringField(0x08)

    field_b_value = b'\x01\x02\x03\x04'
    field_c_value = b'ABCDEFGH'
    son = Son(b'A' * 16 + field_b_value + field_c_value)

    assert [name for name, _ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]

    assert son.field_b.value == 0x04030201
    assert son.field_c.value == field_c_value


def test_unpack_error_chain():
    class Inner(Chunk):
        a = StructField('I')
        b = StructField('I')

    class Outer(Chunk):
        first = Inner()
        second = Inner()

    with pytest.raises(TruncatedException) as excinfo:
        Outer(b'\x00' * 12)

    assert excinfo.value.chain == ['b', 'second']
    assert excinfo.value.path == 'second.b'
    assert excinfo.value.expected == 4
    assert excinfo.value.got == 0


def test_magic():
    class Magic(Chunk):
        magic = StringField(default=b'MAGIC', is_magic=True)

    assert Magic(b'MAGIC').magic.value == b'MAGIC'

    with pytest.raises(MagicException):
        Magic(b'MAGIK')


def test_validate_hook():
    class Checked(Chunk):
        a = StructField('B')

        def validate(self):
            if self.a.value == 0:
                raise ValueError('zero is not allowed')

    assert Checked(b'\x01').a.value == 1

    with pytest.raises(ValueError):
        Checked(b'\x00')
