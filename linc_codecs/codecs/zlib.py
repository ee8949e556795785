"""Deflate codec (zlib container)."""

# stdlib
import logging
import zlib
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, BinaryIO

# internals
from linc_codecs.codecs.abc import COPY_BUFSIZE, Codec, CodecId
from linc_codecs.errors import ConfigurationError, MalformedInputError
from linc_codecs.utils.params import int_value, warn_unused

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = 1


@dataclass(frozen=True)
class ZlibConfig:
    """
    Parameters of the zlib codec.

    Parameters
    ----------
    level
        Compression level, from 0 (no compression) to 9 (best).
    """

    level: int = DEFAULT_LEVEL

    def __post_init__(self) -> None:
        if not 0 <= self.level <= 9:
            raise ConfigurationError(
                f"zlib: invalid compression level: {self.level}"
            )

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "ZlibConfig":
        warn_unused(params, ("level",), "zlib")
        return cls(level=int_value(params, "level", DEFAULT_LEVEL, "zlib: "))


@dataclass(frozen=True)
class ZlibCodec(Codec):
    """Compress chunks into a zlib-wrapped deflate stream."""

    config: ZlibConfig = ZlibConfig()
    codec_id = CodecId.ZLIB

    @property
    def level(self) -> int:
        return self.config.level

    def parameters(self) -> dict[str, Any]:
        return asdict(self.config)

    def compress(self, inp: BinaryIO, out: BinaryIO) -> None:
        deflater = zlib.compressobj(self.level)
        while chunk := inp.read(COPY_BUFSIZE):
            out.write(deflater.compress(chunk))
        out.write(deflater.flush())

    def uncompress(self, inp: BinaryIO, out: BinaryIO) -> None:
        inflater = zlib.decompressobj()
        try:
            while chunk := inp.read(COPY_BUFSIZE):
                out.write(inflater.decompress(chunk))
            out.write(inflater.flush())
        except zlib.error as e:
            raise MalformedInputError(f"zlib: corrupt stream: {e}") from e
        if not inflater.eof:
            raise MalformedInputError("zlib: unexpected end of stream")
        if inflater.unused_data:
            logger.warning(
                f"zlib: ignoring {len(inflater.unused_data)} trailing bytes "
                "after the end of the stream"
            )
