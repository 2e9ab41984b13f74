import pytest

from nifstruct.info import FormatMetadata
from nifstruct.meta import Endianess
from nifstruct.versions import VER_20_0_0_5


@pytest.fixture
def little_info():
    return FormatMetadata(VER_20_0_0_5, user_version=11)


@pytest.fixture
def big_info():
    info = FormatMetadata(VER_20_0_0_5, user_version=11)
    info.byte_order = Endianess.BIG_ENDIAN

    return info
