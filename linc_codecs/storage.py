"""Expose linc_codecs to Zarr through the numcodecs registry."""

# stdlib
from typing import Any

# externals
import numcodecs
import numcodecs.abc
from numcodecs.compat import ensure_bytes, ndarray_copy

# internals
from linc_codecs.codecs import Codec, create


class ChunkCodec(numcodecs.abc.Codec):
    """
    numcodecs wrapper around a linc_codecs codec.

    Parameters
    ----------
    compressor : str
        Id of the wrapped codec.
    **prm
        Properties of the wrapped codec.

    Examples
    --------
    >>> codec = ChunkCodec("blosc", cname="zstd", clevel=3)
    >>> zarr.create_array(store, data=data, compressors=codec, zarr_format=2)
    """

    codec_id = "linc_codecs"

    def __init__(self, compressor: str = "blosc", **prm: Any) -> None:
        self.codec: Codec = create(compressor, prm)

    def encode(self, buf: Any) -> bytes:
        return self.codec.encode(ensure_bytes(buf))

    def decode(self, buf: Any, out: Any = None) -> Any:
        dec = self.codec.decode(ensure_bytes(buf))
        return ndarray_copy(dec, out)

    def get_config(self) -> dict[str, Any]:
        return {
            "id": self.codec_id,
            "compressor": self.codec.identifier(),
            **self.codec.parameters(),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.codec})"


numcodecs.register_codec(ChunkCodec)


def make_compressor(name: str | Codec | Any, **prm: Any) -> Any:
    """Build compressor object from name and options."""
    if isinstance(name, Codec):
        return ChunkCodec(name.identifier(), **name.parameters())
    if not isinstance(name, str):
        return name
    return ChunkCodec(name, **prm)
