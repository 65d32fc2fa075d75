'''
Operations behind the command line: each one reads the whole PNG file in memory,
works on its chunks and, when needed, writes it back.
'''
import logging
from typing import List

from .images.png import PNGFile, PNGChunk
from .images.png.chunk_type import ChunkType
from .images.png.utils import describe_chunks
from .exceptions import ChunkNotFoundException


logger = logging.getLogger(__name__)


def read_png(path) -> PNGFile:
    logger.debug('reading \'%s\'', path)
    with open(path, 'rb') as f:
        return PNGFile.from_bytes(f.read())


def write_png(path, png: PNGFile) -> None:
    logger.debug('writing \'%s\'', path)
    with open(path, 'wb') as f:
        f.write(png.as_bytes())


def encode(path, chunk_type: str, message: str, output=None) -> PNGChunk:
    '''Append a chunk of the given type containing the message; the result is
    written to output or, if missing, over the original file.'''
    png = read_png(path)
    chunk = PNGChunk.new(ChunkType.from_str(chunk_type), message.encode('utf-8'))

    png.append_chunk(chunk)

    output = path if output is None else output
    logger.info('writing message `%s` as type %s to file %s', message, chunk_type, output)
    write_png(output, png)

    return chunk


def decode(path, chunk_type: str) -> str:
    ChunkType.from_str(chunk_type)

    png = read_png(path)
    chunk = png.chunk_by_type(chunk_type)

    if chunk is None:
        raise ChunkNotFoundException(chunk_type)

    return chunk.data_as_string()


def remove(path, chunk_type: str) -> PNGChunk:
    ChunkType.from_str(chunk_type)

    png = read_png(path)
    chunk = png.remove_chunk(chunk_type)

    logger.info('removed chunk %s from %s', chunk.chunk_type, path)
    write_png(path, png)

    return chunk


def print_chunks(path) -> List[str]:
    return describe_chunks(read_png(path))
