import io
import logging

from .exceptions import UnpackException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: the basic types read from it exactly the
    number of bytes they need and complain if they are not there.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' cannot be used as a stream' % self._type.__name__)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.obj.close()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_BytesIO(self):
        pass

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

    def read_exactly(self, size):
        '''Read "size" bytes or raise UnpackException if the stream ends before.'''
        offset = self.obj.tell()
        data = self.obj.read(size)

        if len(data) != size:
            msg = f'expected {size} bytes at offset {offset:#x}, got {len(data)}'
            logger.error(msg)
            raise UnpackException(chain=[], msg=msg)

        return data

    def read_until(self, delimiter=b'\n'):
        '''Read up to and including "delimiter"; the delimiter is not returned.'''
        offset = self.obj.tell()
        data = []
        while True:
            b = self.obj.read(1)
            if len(b) == 0:
                msg = f'missing terminator {delimiter!r} for data starting at offset {offset:#x}'
                logger.error(msg)
                raise UnpackException(chain=[], msg=msg)
            if b == delimiter:
                break
            data.append(b)

        return b''.join(data)

    def read_all(self):
        return self.obj.read()

    def write(self, data):
        return self.obj.write(data)

    def getvalue(self):
        return self.obj.getvalue()
