from enum import Flag


class Compliant(Flag):
    '''How strictly the data read must follow the format: what is not
    selected here is tolerated and only logged.'''
    NONE       = 0
    MAGIC      = 1 << 0  # the header must be a known one
    TERMINATOR = 1 << 1  # optional terminators must be present
    STRICT     = MAGIC | TERMINATOR
