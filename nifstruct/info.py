from .meta import Endianess
from .versions import VER_4_0_0_2, format_version


class FormatMetadata(object):
    '''
    Used to specify the way a file is to be written or to retrieve information about
    the way an existing file was stored.

    It's created once for each file and then passed to every basic type that needs
    to know the version or the byte order; nobody is supposed to change it while
    a file is processed.

    No check is done on the version numbers: knowing which versions are valid
    is a job for whoever reads the file.
    '''

    def __init__(self, version=VER_4_0_0_2, user_version=0, user_version2=0):
        self.version = version
        self.user_version = user_version
        self.user_version2 = user_version2
        # it should match the processor type of the target system
        self.byte_order = Endianess.LITTLE_ENDIAN
        # the following are supported only by Oblivion
        # (name of the person that created the file)
        self.author = ''
        # type of script or program used to export the file
        self.export_tool_name = ''
        # more specific script or options of the above
        self.export_tool_settings = ''

    def __repr__(self):
        return '<%s(version=%s, user_version=%d, user_version2=%d, byte_order=%s)>' % (
            self.__class__.__name__,
            format_version(self.version),
            self.user_version,
            self.user_version2,
            self.byte_order.name,
        )

    def __eq__(self, other):
        if not isinstance(other, FormatMetadata):
            return NotImplemented

        return vars(self) == vars(other)

    @property
    def struct_prefix(self) -> str:
        '''The byte order character to use with the struct module.'''
        return '<' if self.byte_order == Endianess.LITTLE_ENDIAN else '>'
