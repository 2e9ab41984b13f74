"""
# nifstruct: the basic types of the NIF file format.

Every record of a NIF file is built from a small set of basic types:

 1. strings: the header line, short strings with a one byte length,
    strings terminated by a line break, strings indexed in the string
    table of the file and fixed buffers of characters
 2. colors with four 8 bit channels
 3. half precision floats, kept as their raw bits
 4. buffers of raw bytes

Each type declares if a generic traversal has to consider it atomic
(Native) or has to walk inside it (Compound); the functions in
nifstruct.traits answer questions like "can I iterate over this type?"
without the need for the type to declare anything.

The way a file is stored (version, user versions, byte order) is
described by nifstruct.info.FormatMetadata that is passed to every
pack()/unpack() that needs it.
"""
