"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable from a stream.
"""
import logging
import struct
from typing import Dict

from .meta import FieldBase, Endianess
from .properties import Dependency
from .streams import Stream
from .exceptions import PngStashException, MagicException


logger = logging.getLogger(__name__)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, endianess=Endianess.LITTLE_ENDIAN):
        super().__init__()
        self.name = name
        self.father = father
        self.default = default
        self.endianess = endianess

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Return the dictionary containing as key the attribute depending on another field"""
        instance_dict = self.__dict__
        return {_k.lstrip('_'): _v for _k, _v in instance_dict.items() if isinstance(_v, Dependency)}

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self) -> int:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def pack(self, stream=None) -> bytes:
        stream = Stream() if stream is None else stream
        stream.write(self.raw)

        return stream.getvalue()

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    PREFIXES = {
        Endianess.LITTLE_ENDIAN: '<',
        Endianess.BIG_ENDIAN: '>',
        Endianess.NETWORK: '!',
    }

    def __init__(self, format, default=0, formatter=None, **kw):
        self.format = format
        self.formatter = formatter
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        if self.formatter:
            return self.formatter % self.value

        width = self.size * 2
        formatter = '0x%%0%dx' % width
        return formatter % self.value

    def get_format(self):
        return '%s%s' % (self.PREFIXES[self.endianess], self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def _set_raw(self, raw: bytes) -> None:
        self.value = struct.unpack(self.get_format(), raw)[0]

    def unpack(self, stream):
        self.raw = stream.read_exact(self.size)


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be fixed or a Dependency: in the latter case assigning a
    new value writes its size back into the field it depends on.

    With is_magic=True the unpacked value must be equal to the default.
    """

    def __init__(self, n=None, is_magic=False, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self._length = n if n is not None else len(kw['default'])
        self.is_magic = is_magic

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return len(self.value)

    @property
    def length(self) -> int:
        if isinstance(self._length, Dependency):
            if self.father is None:
                return len(self.value)

            return self._length.resolve(self)

        return self._length

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'' if isinstance(self._length, Dependency) else b'\x00' * self._length

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"{self.__class__.__name__} accepts only bytes, not '{value.__class__.__name__}'")

        value = bytes(value)

        if isinstance(self._length, Dependency):
            if self.father is not None:
                self._length.resolve_and_set(self, len(value))
        elif len(value) != self._length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self._length} bytes)')

        self._value = value

    def _get_raw(self):
        return self.value

    def _set_raw(self, raw: bytes) -> None:
        self.value = raw

    def unpack(self, stream):
        self.raw = stream.read_exact(self.length)

        if self.is_magic and self.value != self.default:
            logger.debug('the magic doesn\'t correspond: %r', self.value)
            raise MagicException(f'expected magic {self.default!r}, got {self.value!r}')


class ArrayField(Field):
    '''Un/Pack an array of elements laid out back-to-back until the
    stream is exhausted.

    The element passed to the constructor is a template: every element
    is a copy of it having this field as father.

    This class behaves like a (small) list.
    '''

    def __init__(self, field, **kw):
        self.field = field
        kw.setdefault('default', [])

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default)

    def _get_size(self):
        return sum(element.size for element in self.value)

    def _get_raw(self) -> bytes:
        return b''.join(element.raw for element in self.value)

    def instance_element(self):
        return self.field.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pop(self, index):
        element = self.value.pop(index)
        element.father = None

        return element

    def clear(self):
        self.value.clear()

    def unpack(self, stream):
        self.value = []

        while not stream.is_exhausted():
            idx = len(self.value)
            logger.debug('unpacking element #%d of %s', idx, self.name)

            element = self.instance_element()
            try:
                element.unpack(stream)
            except PngStashException as e:
                e.chain.append(str(idx))
                raise

            self.value.append(element)
