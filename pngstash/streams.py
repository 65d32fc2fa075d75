import io
import logging

from .exceptions import TruncatedException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around an in-memory buffer to
    uniform its properties: unpacking needs to read exact amounts of
    bytes and to know when the data is exhausted.'''
    def __init__(self, obj=b''):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)

        init_method_name = 'init_%s' % obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise TypeError('\'%s\' is not a supported kind of stream' % obj.__class__.__name__)

        self.obj = init_method(obj)

    def __getattr__(self, name):
        # only called for missing attributes, "obj" included while initializing
        if name == 'obj':
            raise AttributeError(name)

        return getattr(self.obj, name)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__} @ {self.obj.tell()})>'

    def init_bytes(self, obj):
        '''We think these are raw bytes'''
        return io.BytesIO(obj)

    def init_bytearray(self, obj):
        return io.BytesIO(bytes(obj))

    def init_memoryview(self, obj):
        return io.BytesIO(obj.tobytes())

    def read_exact(self, size: int) -> bytes:
        '''Read exactly "size" bytes or raise TruncatedException.

        BytesIO never allocates more than what is left in the buffer so
        a bogus size coming from the data itself is harmless here.'''
        data = self.obj.read(size)
        if len(data) != size:
            logger.debug('short read at offset %d: wanted %d bytes, got %d', self.obj.tell(), size, len(data))
            raise TruncatedException(size, len(data))

        return data

    def is_exhausted(self) -> bool:
        offset = self.obj.tell()
        end = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(offset)

        return offset >= end

    def getvalue(self) -> bytes:
        return self.obj.getvalue()
