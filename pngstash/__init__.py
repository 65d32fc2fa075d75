"""
# pngstash: hide messages inside PNG chunks.

A PNG file is a signature followed by chunks, each one made of a length, a type
code, some data and a CRC. Ancillary, private chunks are ignored by decoders,
so a message can live inside one of them without touching the image.

The formats are described declaratively: a Chunk subclass lists its fields as
class attributes and the framework takes care of the two basic operations

 1. unpack(): read the binary data and build a high-level representation of it.
    Each field knows how many bytes it needs, possibly depending on the value
    of another field (see properties.Dependency).

 2. pack(): encode the high-level representation into binary data.

Any broken data is reported with an exception from pngstash.exceptions, carrying
the chain of fields where the problem was found.
"""
