"""Blosc codec: chunks are stored as self-describing blosc frames."""

# stdlib
import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, BinaryIO

# internals
from linc_codecs.codecs.abc import Codec, CodecId, read_exactly
from linc_codecs.errors import ConfigurationError, MalformedInputError, NativeCallError
from linc_codecs.utils import blosc_native
from linc_codecs.utils.frame import (
    BITSHUFFLE,
    BYTESHUFFLE,
    HEADER_SIZE,
    NOSHUFFLE,
    SHUFFLE_NAMES,
)
from linc_codecs.utils.params import int_value, str_value, warn_unused

logger = logging.getLogger(__name__)

SUPPORTED_CNAMES = ("zstd", "blosclz", "lz4", "lz4hc", "zlib")
SUPPORTED_SHUFFLE = (NOSHUFFLE, BYTESHUFFLE, BITSHUFFLE)

DEFAULT_CNAME = "lz4"
DEFAULT_CLEVEL = 5
DEFAULT_SHUFFLE = BYTESHUFFLE
DEFAULT_BLOCKSIZE = 0

DEFAULT_PROPERTIES = {
    "cname": DEFAULT_CNAME,
    "clevel": DEFAULT_CLEVEL,
    "shuffle": DEFAULT_SHUFFLE,
    "blocksize": DEFAULT_BLOCKSIZE,
}


@dataclass(frozen=True)
class BloscConfig:
    """
    Parameters of the blosc codec.

    Parameters
    ----------
    cname
        Internal compressor, one of `SUPPORTED_CNAMES`.
    clevel
        Compression level, from 0 to 9.
    shuffle
        Pre-compression filter: 0 (NOSHUFFLE), 1 (BYTESHUFFLE)
        or 2 (BITSHUFFLE).
    blocksize
        Internal block size in bytes. 0 lets blosc choose.
    """

    cname: str = DEFAULT_CNAME
    clevel: int = DEFAULT_CLEVEL
    shuffle: int = DEFAULT_SHUFFLE
    blocksize: int = DEFAULT_BLOCKSIZE

    def __post_init__(self) -> None:
        if self.cname not in SUPPORTED_CNAMES:
            raise ConfigurationError(
                f"blosc: compressor not supported: '{self.cname}'; "
                f"expected one of {list(SUPPORTED_CNAMES)}"
            )
        if not 0 <= self.clevel <= 9:
            raise ConfigurationError(
                "blosc: clevel parameter must be between 0 and 9 "
                f"but was: {self.clevel}"
            )
        if self.shuffle not in SUPPORTED_SHUFFLE:
            names = [f"{s} ({SHUFFLE_NAMES[s]})" for s in SUPPORTED_SHUFFLE]
            raise ConfigurationError(
                f"blosc: shuffle type not supported: '{self.shuffle}'; "
                f"expected one of {names}"
            )
        if self.blocksize < 0:
            raise ConfigurationError(
                "blosc: blocksize must be 0 (automatic) or a positive number "
                f"of bytes but was: {self.blocksize}"
            )

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "BloscConfig":
        warn_unused(params, DEFAULT_PROPERTIES, "blosc")
        return cls(
            cname=str_value(params, "cname", DEFAULT_CNAME, "blosc: "),
            clevel=int_value(params, "clevel", DEFAULT_CLEVEL, "blosc: "),
            shuffle=int_value(params, "shuffle", DEFAULT_SHUFFLE, "blosc: "),
            blocksize=int_value(params, "blocksize", DEFAULT_BLOCKSIZE, "blosc: "),
        )


@dataclass(frozen=True)
class BloscCodec(Codec):
    """
    Compress chunks with the native blosc library.

    A compressed chunk is one blosc frame: a 16 byte header followed by the
    payload. The header carries the uncompressed size (`nbytes`) and the
    frame size (`cbytes`), which is how `uncompress` knows how many bytes
    to read and to allocate.
    """

    config: BloscConfig = BloscConfig()
    codec_id = CodecId.BLOSC

    def parameters(self) -> dict[str, Any]:
        return asdict(self.config)

    def compress(self, inp: BinaryIO, out: BinaryIO) -> None:
        source = inp.read()
        cfg = self.config
        buffer = blosc_native.compress(
            source, cfg.cname, cfg.clevel, cfg.shuffle, cfg.blocksize
        )
        sizes = blosc_native.introspect_header(buffer[:HEADER_SIZE])
        capacity = len(source) + HEADER_SIZE
        if not HEADER_SIZE <= sizes.cbytes <= min(len(buffer), capacity):
            raise NativeCallError(
                f"blosc: compressed size {sizes.cbytes} out of range "
                f"[{HEADER_SIZE}, {min(len(buffer), capacity)}]"
            )
        if sizes.nbytes != len(source):
            raise NativeCallError(
                f"blosc: frame declares {sizes.nbytes} bytes "
                f"but {len(source)} were compressed"
            )
        out.write(buffer[:sizes.cbytes])

    def uncompress(self, inp: BinaryIO, out: BinaryIO) -> None:
        header = read_exactly(inp, HEADER_SIZE, "blosc header")
        sizes = blosc_native.introspect_header(header)
        if sizes.cbytes < HEADER_SIZE:
            raise MalformedInputError(
                f"blosc: declared frame size {sizes.cbytes} is smaller "
                f"than the {HEADER_SIZE} byte header"
            )
        payload = read_exactly(inp, sizes.cbytes - HEADER_SIZE, "blosc payload")
        if sizes.nbytes == 0:
            return
        dest = bytearray(sizes.nbytes)
        blosc_native.decompress(header + payload, dest)
        out.write(dest)
