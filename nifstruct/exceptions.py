class NifStructException(Exception):
    '''Base class to extend in order to throw exception in nifstruct.

    It takes as argument the chain of the layer that caused the exception
    and optionally a message describing what went wrong.
    '''

    def __init__(self, chain, msg=''):
        self.chain = chain
        super().__init__(msg)


class UnpackException(NifStructException):
    '''The data read from the stream violates the limits of the type
    (short read, length prefix too big, missing terminator).'''
    pass


class PackException(NifStructException):
    '''The value cannot be encoded without breaking the limits of its type.
    It's raised before any byte is written.'''
    pass


class MagicException(NifStructException):
    pass
