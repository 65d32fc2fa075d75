class PngStashException(Exception):
    '''Base class to extend in order to throw exception in pngstash.

    It takes a "chain" argument that represents the layers that caused the
    exception: each Chunk/ArrayField appends its own name while the exception
    bubbles up, so the first element is the innermost field.
    '''

    def __init__(self, *args, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(*args)

    @property
    def path(self) -> str:
        return '.'.join(reversed(self.chain))


class UnpackException(PngStashException):
    pass


class TruncatedException(UnpackException):
    '''The stream ended before the field could be read completely.'''

    def __init__(self, expected, got, **kwargs):
        self.expected = expected
        self.got = got
        super().__init__(f'expected {expected} bytes, got {got}', **kwargs)


class MagicException(PngStashException):
    pass


# chunk type


class ChunkTypeException(PngStashException):
    pass


class ChunkTypeEncodingException(ChunkTypeException):
    def __str__(self):
        return f'utf-8 error while parsing chunk type: {self.__cause__}'


class ChunkTypeLengthException(ChunkTypeException):
    def __init__(self, length, **kwargs):
        self.length = length
        super().__init__(f'invalid length in chunk type, expecting exactly 4 characters, got {length}', **kwargs)


class ChunkTypeAsciiException(ChunkTypeException):
    def __str__(self):
        return 'received non-alphabetic ascii characters in chunk type'


class ChunkTypeReservedBitException(ChunkTypeException):
    def __str__(self):
        return 'the reserved bit of the chunk type is not valid'


# chunk


class ChunkException(PngStashException):
    pass


class InvalidChunkTypeException(ChunkException):
    def __init__(self, error, **kwargs):
        self.error = error
        super().__init__(f'chunk type error: {error}', **kwargs)


class CRCMismatchException(ChunkException):
    def __init__(self, stored, computed, **kwargs):
        self.stored = stored
        self.computed = computed
        super().__init__(f'CRC mismatch: stored 0x{stored:08x}, computed 0x{computed:08x}', **kwargs)


class TruncatedChunkException(ChunkException):
    def __init__(self, error, **kwargs):
        self.error = error
        super().__init__(f'truncated chunk: {error}', **kwargs)


class ChunkDecodeException(ChunkException):
    def __str__(self):
        return f'chunk data is not valid utf-8: {self.__cause__}'


# file


class PNGException(PngStashException):
    pass


class InvalidSignatureException(PNGException):
    def __str__(self):
        return 'not a PNG file: the signature is missing or invalid'


class InvalidChunkException(PNGException):
    '''Wraps the ChunkException raised by the chunk at position "index".'''

    def __init__(self, error, index, **kwargs):
        self.error = error
        self.index = index
        super().__init__(f'chunk #{index}: {error}', **kwargs)


class ChunkNotFoundException(PNGException):
    def __init__(self, chunk_type, **kwargs):
        self.chunk_type = chunk_type
        super().__init__(f"no chunk with type '{chunk_type}' found", **kwargs)
