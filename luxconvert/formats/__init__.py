from luxconvert.formats.base import CodecBase, PhotometricCodec
from luxconvert.formats.cie import CIECodec
from luxconvert.formats.ies import IESCodec
from luxconvert.formats.ldt import LDTCodec

__all__ = ["CodecBase", "PhotometricCodec", "IESCodec", "LDTCodec", "CIECodec"]
