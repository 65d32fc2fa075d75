'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

A PNG file is an 8-byte signature followed by a sequence of chunks; here the
chunk data is kept opaque, what matters is being able to read the chunks,
add/remove some of them and write the file back byte for byte.
'''
from typing import Iterable, Optional

from ...core import Chunk
from ... import fields
from ...meta import Endianess
from ...properties import Dependency
from ...common import crc
from ...exceptions import (
    TruncatedException,
    MagicException,
    ChunkTypeException,
    ChunkException,
    InvalidChunkTypeException,
    CRCMismatchException,
    TruncatedChunkException,
    ChunkDecodeException,
    InvalidSignatureException,
    InvalidChunkException,
    ChunkNotFoundException,
)
from .chunk_type import ChunkType, ChunkProperty, TypeCodeField
from .utils import iter_chunks_by_type


PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

# chunk lengths are limited to 2^31 - 1 bytes
MAX_CHUNK_LENGTH = (1 << 31) - 1


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_SIGNATURE, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each integer is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field (see ChunkType for the other flags).

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    Use new() to build a chunk and from_bytes() to parse one. Assigning type or
    data afterwards recomputes length and crc.
    '''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    type   = TypeCodeField()
    data   = fields.StringField(Dependency('.length'))
    crc    = crc.CRCField(['type', 'data'], endianess=Endianess.NETWORK, formatter='0x%08x')

    @classmethod
    def new(cls, chunk_type, data: bytes) -> "PNGChunk":
        if len(data) > MAX_CHUNK_LENGTH:
            raise ValueError(f'chunk data is {len(data)} bytes, the maximum is {MAX_CHUNK_LENGTH}')

        chunk = cls()
        chunk.type = chunk_type
        chunk.data = bytes(data)  # updates length and crc

        return chunk

    def __setattr__(self, name, value):
        super().__setattr__(name, value)

        # the crc must always cover the current type and data
        if name in ('type', 'data') and self.type.value is not None:
            self.crc.update()

    @classmethod
    def from_bytes(cls, data) -> "PNGChunk":
        '''Parse a chunk from the start of data, what follows it is ignored.'''
        return cls(data)

    def unpack(self, stream):
        try:
            super().unpack(stream)
        except TruncatedException as e:
            raise TruncatedChunkException(e, chain=e.chain) from e
        except ChunkTypeException as e:
            raise InvalidChunkTypeException(e, chain=e.chain) from e

    def validate(self):
        if not self.crc.is_valid():
            raise CRCMismatchException(self.crc.value, self.crc.calculate(), chain=['crc'])

    @property
    def chunk_type(self) -> ChunkType:
        return self.type.value

    @property
    def checksum(self) -> int:
        return self.crc.value

    def data_as_string(self) -> str:
        try:
            return self.data.value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ChunkDecodeException() from e

    def as_bytes(self) -> bytes:
        return self.raw

    def __eq__(self, other):
        if not isinstance(other, PNGChunk):
            return NotImplemented

        return (self.chunk_type, self.data.value, self.checksum) == \
            (other.chunk_type, other.data.value, other.checksum)

    def __str__(self):
        flags = self.chunk_type.properties()
        return '%s length=%d crc=%s %s' % (
            self.chunk_type,
            self.length.value,
            self.crc,
            '|'.join(_.name for _ in ChunkProperty if _ and _ in flags) or '-',
        )


class PNGFile(Chunk):
    STANDARD_HEADER = PNG_SIGNATURE

    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk())

    @classmethod
    def from_bytes(cls, data) -> "PNGFile":
        return cls(data)

    @classmethod
    def from_chunks(cls, chunks: Iterable[PNGChunk]) -> "PNGFile":
        png = cls()
        for chunk in chunks:
            png.append_chunk(chunk)

        return png

    def unpack(self, stream):
        '''The whole file is rejected at the first broken chunk.'''
        try:
            self.header.unpack(stream)
        except (MagicException, TruncatedException) as e:
            raise InvalidSignatureException(chain=e.chain + ['header']) from e

        try:
            self.chunks.unpack(stream)
        except ChunkException as e:
            raise InvalidChunkException(e, len(self.chunks), chain=e.chain + ['chunks']) from e

    @property
    def header_bytes(self) -> bytes:
        return self.header.magic.value

    def __iter__(self):
        return iter(self.chunks)

    def __len__(self):
        return len(self.chunks)

    def append_chunk(self, chunk: PNGChunk):
        self.chunks.append(chunk)

    def remove_chunk(self, chunk_type: str) -> PNGChunk:
        for idx, chunk in enumerate(self.chunks):
            if str(chunk.chunk_type) == chunk_type:
                return self.chunks.pop(idx)

        raise ChunkNotFoundException(chunk_type)

    def chunk_by_type(self, chunk_type: str) -> Optional[PNGChunk]:
        return next(iter_chunks_by_type(self.chunks, chunk_type), None)

    def as_bytes(self) -> bytes:
        return self.raw
