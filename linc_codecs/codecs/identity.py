"""Pass-through codec for uncompressed chunks."""

# stdlib
from typing import Any, BinaryIO

# internals
from linc_codecs.codecs.abc import Codec, CodecId, pass_through


class IdentityCodec(Codec):
    """Store chunks as they are. Stateless, use the shared `IDENTITY`."""

    codec_id = CodecId.IDENTITY

    def parameters(self) -> dict[str, Any]:
        return {}

    def compress(self, inp: BinaryIO, out: BinaryIO) -> None:
        pass_through(inp, out)

    def uncompress(self, inp: BinaryIO, out: BinaryIO) -> None:
        pass_through(inp, out)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IdentityCodec)

    def __hash__(self) -> int:
        return hash(self.codec_id)


IDENTITY = IdentityCodec()
