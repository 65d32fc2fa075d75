import logging


logger = logging.getLogger(__name__)


def iter_chunks_by_type(chunks, chunk_type):
    '''Yield, in file order, the chunks whose type code reads as chunk_type.'''
    for chunk in chunks:
        if str(chunk.chunk_type) == chunk_type:
            yield chunk


def describe_chunks(chunks):
    '''One line for each chunk, prefixed by its position.'''
    lines = [f'[{idx:02d}] {chunk}' for idx, chunk in enumerate(chunks)]
    logger.debug('described %d chunks', len(lines))

    return lines
