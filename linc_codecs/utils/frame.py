"""Layout of the blosc 1.x frame header.

Every buffer produced by `blosc_compress` starts with a 16 byte header,
little-endian, defined in c-blosc's `blosc.h`:

    offset  size  field
    0       1     version      (BLOSC_VERSION_FORMAT)
    1       1     versionlz    (version of the internal compressor format)
    2       1     flags        (shuffle/memcpy bits, compressor code in bits 5-7)
    3       1     typesize
    4       4     nbytes       (uncompressed size)
    8       4     blocksize
    12      4     cbytes       (frame size, header included)

`linc_codecs.utils.blosc_native.introspect_header` falls back on this view
when numcodecs does not expose blosc's own header introspection.
"""

# stdlib
import struct
from dataclasses import dataclass
from typing import NamedTuple

# internals
from linc_codecs.errors import MalformedInputError, TruncatedInputError

HEADER_FORMAT = "<BBBBIII"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # BLOSC_MAX_OVERHEAD
MAX_BUFFERSIZE = 2**31 - 1 - HEADER_SIZE  # BLOSC_MAX_BUFFERSIZE

# flags
DOSHUFFLE = 0x1
MEMCPYED = 0x2
DOBITSHUFFLE = 0x4

NOSHUFFLE = 0
BYTESHUFFLE = 1
BITSHUFFLE = 2
SHUFFLE_NAMES = {
    NOSHUFFLE: "NOSHUFFLE",
    BYTESHUFFLE: "BYTESHUFFLE",
    BITSHUFFLE: "BITSHUFFLE",
}

# compressor format codes stored in the top three bits of `flags`
COMPRESSOR_FORMATS = {
    0: "blosclz",
    1: "lz4",  # lz4 and lz4hc share a format
    2: "snappy",
    3: "zlib",
    4: "zstd",
}


class FrameSizes(NamedTuple):
    """Sizes reported by a frame header."""

    nbytes: int
    cbytes: int
    blocksize: int


@dataclass(frozen=True)
class FrameHeader:
    """Decoded blosc frame header."""

    version: int
    versionlz: int
    flags: int
    typesize: int
    nbytes: int
    blocksize: int
    cbytes: int

    @classmethod
    def unpack(cls, buf: bytes) -> "FrameHeader":
        """
        Decode the first `HEADER_SIZE` bytes of a frame.

        Raises
        ------
        TruncatedInputError
            If `buf` is shorter than a header.
        MalformedInputError
            If the declared frame size is smaller than its own header.
        """
        if len(buf) < HEADER_SIZE:
            raise TruncatedInputError(
                f"blosc: header needs {HEADER_SIZE} bytes, got {len(buf)}"
            )
        header = cls(*struct.unpack_from(HEADER_FORMAT, buf))
        if header.cbytes < HEADER_SIZE:
            raise MalformedInputError(
                f"blosc: declared frame size {header.cbytes} is smaller "
                f"than the {HEADER_SIZE} byte header"
            )
        return header

    @property
    def sizes(self) -> FrameSizes:
        return FrameSizes(self.nbytes, self.cbytes, self.blocksize)

    @property
    def shuffle(self) -> int:
        if self.flags & DOSHUFFLE:
            return BYTESHUFFLE
        if self.flags & DOBITSHUFFLE:
            return BITSHUFFLE
        return NOSHUFFLE

    @property
    def memcpyed(self) -> bool:
        """True if the payload is stored uncompressed."""
        return bool(self.flags & MEMCPYED)

    @property
    def compressor(self) -> str:
        code = self.flags >> 5
        return COMPRESSOR_FORMATS.get(code, f"unknown({code})")

    def describe(self) -> dict:
        """Human-readable summary, used by the `info` command."""
        return {
            "version": self.version,
            "versionlz": self.versionlz,
            "compressor": self.compressor,
            "shuffle": f"{self.shuffle} ({SHUFFLE_NAMES[self.shuffle]})",
            "memcpyed": self.memcpyed,
            "typesize": self.typesize,
            "nbytes": self.nbytes,
            "cbytes": self.cbytes,
            "blocksize": self.blocksize,
        }
