"""Reading and writing of GPML pathway diagrams in the 2013a and 2021 dialects."""
from gpml_codec.core.codec import CodecConfig, GpmlCodec
from gpml_codec.core.dialects.base import Dialect

__all__ = ["CodecConfig", "Dialect", "GpmlCodec"]
