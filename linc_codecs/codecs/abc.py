"""Chunk codec interface."""

# stdlib
import io
import shutil
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, BinaryIO

# internals
from linc_codecs.errors import TruncatedInputError

COPY_BUFSIZE = 64 * 1024


class CodecId(StrEnum):
    """Identifiers persisted alongside compressed chunks."""

    IDENTITY = "identity"
    ZLIB = "zlib"
    BLOSC = "blosc"
    J2K = "j2k"


class Codec(ABC):
    """
    Base class for chunk codecs.

    A codec is built once from a validated configuration and never changes
    afterwards, so a single instance can be shared between threads and
    reused for every chunk of an array.
    """

    codec_id: CodecId

    def identifier(self) -> str:
        """Stable name of the compression scheme."""
        return str(self.codec_id)

    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """Normalized parameters, enough to rebuild an identical codec."""
        ...

    def get_config(self) -> dict[str, Any]:
        """Configuration to persist next to the compressed chunks."""
        return {"id": self.identifier(), **self.parameters()}

    @abstractmethod
    def compress(self, inp: BinaryIO, out: BinaryIO) -> None:
        """
        Compress every byte readable from `inp` and write the result to `out`.

        Parameters
        ----------
        inp : BinaryIO
            Raw chunk bytes.
        out : BinaryIO
            Destination of the compressed representation.
        """
        ...

    @abstractmethod
    def uncompress(self, inp: BinaryIO, out: BinaryIO) -> None:
        """
        Reconstruct the raw bytes of a chunk compressed by `compress`.

        Parameters
        ----------
        inp : BinaryIO
            Compressed chunk bytes.
        out : BinaryIO
            Destination of the raw chunk.
        """
        ...

    def encode(self, data: bytes) -> bytes:
        """Compress an in-memory buffer."""
        out = io.BytesIO()
        self.compress(io.BytesIO(data), out)
        return out.getvalue()

    def decode(self, data: bytes) -> bytes:
        """Uncompress an in-memory buffer."""
        out = io.BytesIO()
        self.uncompress(io.BytesIO(data), out)
        return out.getvalue()

    def __str__(self) -> str:
        prm = "/".join(f"{k}={v}" for k, v in self.parameters().items())
        return f"compressor={self.identifier()}" + (f"/{prm}" if prm else "")


def pass_through(inp: BinaryIO, out: BinaryIO) -> None:
    """Copy a stream to another one."""
    shutil.copyfileobj(inp, out, COPY_BUFSIZE)


def read_exactly(inp: BinaryIO, size: int, what: str) -> bytes:
    """
    Read exactly `size` bytes, looping over short reads.

    Raises
    ------
    TruncatedInputError
        If the stream ends before `size` bytes were read.
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = inp.read(remaining)
        if not chunk:
            raise TruncatedInputError(
                f"Truncated input: expected {size} bytes of {what}, "
                f"got {size - remaining}"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
