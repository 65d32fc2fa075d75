'''
# Chunk type codes

The type of a chunk is a 4-byte code made only of ASCII letters. Bit 5 of each
byte (the bit telling lower case from upper case) is a property bit:

 1. ancillary bit (first byte): 0 (uppercase) means critical
 2. private bit (second byte): 0 (uppercase) means public
 3. reserved bit (third byte): must be 0 (uppercase) in this version of the format
 4. safe-to-copy bit (fourth byte): 1 (lowercase) means safe to copy

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from enum import Flag

from bitstring import BitArray

from ...fields import Field
from ...exceptions import (
    ChunkTypeEncodingException,
    ChunkTypeLengthException,
    ChunkTypeAsciiException,
    ChunkTypeReservedBitException,
)


class ChunkProperty(Flag):
    NONE         = 0
    CRITICAL     = 1 << 0
    PUBLIC       = 1 << 1
    SAFE_TO_COPY = 1 << 2


class ChunkType(object):
    '''Immutable, validated chunk type code.

    It can be built from bytes or from a string, in both cases the code is
    checked before being stored.'''

    SIZE = 4
    CASE_BIT = 2  # bit 5 of the byte, counting from the most significant

    def __init__(self, code):
        if isinstance(code, str):
            text = code
        elif isinstance(code, (bytes, bytearray)):
            try:
                text = bytes(code).decode('utf-8')
            except UnicodeDecodeError as e:
                raise ChunkTypeEncodingException() from e
        else:
            raise TypeError(f"a chunk type can be built from bytes or str, not '{code.__class__.__name__}'")

        self._code = self._validate(text).encode('ascii')

    @classmethod
    def from_bytes(cls, data: bytes) -> "ChunkType":
        return cls(bytes(data))

    @classmethod
    def from_str(cls, text: str) -> "ChunkType":
        return cls(text)

    @staticmethod
    def _validate(text: str) -> str:
        if len(text) != ChunkType.SIZE:
            raise ChunkTypeLengthException(len(text))

        if not all(_.isascii() and _.isalpha() for _ in text):
            raise ChunkTypeAsciiException()

        if not text[2].isupper():
            raise ChunkTypeReservedBitException()

        return text

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._code == other._code

    def __hash__(self):
        return hash(self._code)

    def __str__(self):
        return self._code.decode('ascii')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def __bytes__(self):
        return self._code

    def bytes(self) -> bytes:
        return self._code

    def _is_lowercase(self, position: int) -> bool:
        return BitArray(self._code)[position * 8 + self.CASE_BIT]

    def is_critical(self) -> bool:
        return not self._is_lowercase(0)

    def is_public(self) -> bool:
        return not self._is_lowercase(1)

    def is_safe_to_copy(self) -> bool:
        return self._is_lowercase(3)

    def properties(self) -> ChunkProperty:
        flags = ChunkProperty.NONE

        if self.is_critical():
            flags |= ChunkProperty.CRITICAL
        if self.is_public():
            flags |= ChunkProperty.PUBLIC
        if self.is_safe_to_copy():
            flags |= ChunkProperty.SAFE_TO_COPY

        return flags


class TypeCodeField(Field):
    '''Field holding a ChunkType: unpacking validates the code read from the stream.'''

    def __init__(self, **kw):
        super().__init__(default=None, **kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value})>'

    def _get_size(self):
        return ChunkType.SIZE

    def _set_value(self, value) -> None:
        if value is not None and not isinstance(value, ChunkType):
            value = ChunkType(value)

        self._value = value

    def _get_raw(self) -> bytes:
        if self.value is None:
            raise ValueError(f"the chunk type of '{self.father.__class__.__name__}' is not set")

        return self.value.bytes()

    def unpack(self, stream):
        self.value = ChunkType.from_bytes(stream.read_exact(ChunkType.SIZE))
