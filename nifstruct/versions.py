'''
Version numbers of the NIF format.

A version is packed in a 32 bit integer, one byte for each component of
its dotted representation, i.e. 20.0.0.5 is 0x14000005.
'''
import logging


logger = logging.getLogger(__name__)


VER_2_3         = 0x02030000
VER_3_0         = 0x03000000
VER_3_03        = 0x03000300
VER_3_1         = 0x03010000
VER_3_3_0_13    = 0x0303000D
VER_4_0_0_0     = 0x04000000
VER_4_0_0_2     = 0x04000002
VER_4_1_0_12    = 0x0401000C
VER_4_2_0_2     = 0x04020002
VER_4_2_1_0     = 0x04020100
VER_4_2_2_0     = 0x04020200
VER_10_0_1_0    = 0x0A000100
VER_10_0_1_2    = 0x0A000102
VER_10_0_1_3    = 0x0A000103
VER_10_1_0_0    = 0x0A010000
VER_10_1_0_101  = 0x0A010065
VER_10_1_0_106  = 0x0A01006A
VER_10_2_0_0    = 0x0A020000
VER_20_0_0_4    = 0x14000004
VER_20_0_0_5    = 0x14000005
VER_20_1_0_3    = 0x14010003
VER_20_2_0_7    = 0x14020007
VER_20_3_0_9    = 0x14030009

VER_UNSUPPORTED = 0xFFFFFFFF
VER_INVALID     = 0xFFFFFFFE

SUPPORTED_VERSIONS = (
    VER_3_0, VER_3_03, VER_3_1, VER_3_3_0_13,
    VER_4_0_0_0, VER_4_0_0_2, VER_4_1_0_12, VER_4_2_0_2, VER_4_2_1_0, VER_4_2_2_0,
    VER_10_0_1_0, VER_10_0_1_2, VER_10_0_1_3, VER_10_1_0_0, VER_10_1_0_101,
    VER_10_1_0_106, VER_10_2_0_0,
    VER_20_0_0_4, VER_20_0_0_5, VER_20_1_0_3, VER_20_2_0_7, VER_20_3_0_9,
)


def parse_version(text: str) -> int:
    '''Convert something like "20.0.0.5" into the packed integer.

    Missing components are zero ("3.1" is 3.1.0.0); anything that is
    not made of at most four byte-sized numbers gives VER_INVALID.'''
    components = text.strip().split('.')

    if len(components) > 4:
        logger.debug('too many components in version \'%s\'' % text)
        return VER_INVALID

    version = 0
    for idx, component in enumerate(components):
        if not component.isdigit() or int(component) > 0xff:
            logger.debug('invalid component \'%s\' in version \'%s\'' % (component, text))
            return VER_INVALID

        version |= int(component) << (24 - idx * 8)

    return version


def format_version(version: int) -> str:
    return '.'.join(str((version >> shift) & 0xff) for shift in (24, 16, 8, 0))


def is_supported_version(version: int) -> bool:
    return version in SUPPORTED_VERSIONS
