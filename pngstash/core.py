"""
Core module for the abstraction of a file format

"""
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import PngStashException
from .properties import (
    get_root_from_chunk,
    Dependency,
)


logger = logging.getLogger(__name__)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: the fields
    declared as class attributes are packed/unpacked in declaration order.

    A Chunk can contain sub-chunks, since a Chunk is a Field itself.

    If some data is passed to the constructor it is unpacked right away.
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        if data is not None:
            stream = data if isinstance(data, Stream) else Stream(data)
            logger.debug('unpacking \'%s\' from %r', self.__class__.__name__, stream)
            self.unpack(stream)

    def init(self):
        # sub-fields are created lazily with their own defaults
        pass

    def _get_value(self):
        return self

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def get_dependencies(self) -> Dict[str, Dependency]:
        dep = super().get_dependencies()

        for field_name, field in self.get_fields():
            for key, value in field.get_dependencies().items():
                dep.update({f'{field_name}.{key}': value})

        return dep

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def _get_raw(self) -> bytes:
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            logger.debug("field '%s' raw=%r", field_name, field_raw)
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        '''Offset and size of each field, relative to the chunk.'''
        result = {}
        offset = 0
        for name, field in self.get_fields():
            result[name] = (offset, field.size)
            offset += field.size

        return result

    def pack(self, stream=None) -> bytes:
        stream = Stream() if stream is None else stream

        for field_name, field_instance in self.get_fields():
            logger.debug('packing %s.%s', self.__class__.__name__, field_name)
            field_instance.pack(stream)

        return stream.getvalue()

    def unpack(self, stream):
        '''Take binary data from the stream and transform it in the representation
        given by the class this method is implemented in.

        When a field fails, its name is appended to the exception's chain so that the
        caller knows where the data is broken. After all the fields are unpacked
        validate() is called.'''
        for field_name, field in self.get_fields():
            logger.debug('unpacking %s.%s at offset %d', self.__class__.__name__, field_name, stream.tell())

            try:
                field.unpack(stream)
            except PngStashException as e:
                e.chain.append(field_name)
                raise

        self.validate()

    def validate(self):
        '''Hook for checks involving more than one field: raise to reject the data.'''
        pass
