"""Chunk codecs."""
from .abc import Codec, CodecId
from .blosc import BloscCodec, BloscConfig
from .factory import create, create_default, default_properties
from .identity import IDENTITY, IdentityCodec
from .j2k import J2KCodec, J2KConfig
from .zlib import ZlibCodec, ZlibConfig
