"""Pluggable chunk codecs for LINC Zarr archives."""

__all__ = [
    "Codec",
    "CodecId",
    "create",
    "create_default",
    "default_properties",
    "errors",
]

from . import errors
from .codecs import Codec, CodecId, create, create_default, default_properties
