"""Root command line entry point."""

# stdlib
import json
import logging
import os.path as op
from typing import Annotated

# externals
from cyclopts import App, Parameter

# internals
from linc_codecs.codecs import CodecId, create, default_properties
from linc_codecs.codecs.abc import read_exactly
from linc_codecs.codecs.factory import ALIASES
from linc_codecs.config import CodecConfig, GeneralConfig
from linc_codecs.utils.frame import HEADER_SIZE, FrameHeader
from linc_codecs.utils.logging import add_file_handler, setup_logging

logger = logging.getLogger(__name__)

help = "Chunk codecs for LINC Zarr archives"
main = App("linc-codecs", help=help)

SIDECAR_EXT = ".json"


def _setup(general_config: GeneralConfig | None) -> GeneralConfig:
    general_config = general_config or GeneralConfig()
    setup_logging(general_config.log_level)
    if general_config.log_file:
        add_file_handler(general_config.log_file)
    return general_config


@main.command
def compress(
    inp: str,
    out: str | None = None,
    *,
    codec_config: CodecConfig = None,
    general_config: GeneralConfig = None,
) -> str:
    """
    Compress a raw chunk file.

    The codec configuration is written next to the output, in
    `<out>.json`, so that `decompress` can rebuild the same codec.

    Parameters
    ----------
    inp
        Path to the raw input file.
    out
        Path to the compressed output [<inp>.<compressor>]
    """
    _setup(general_config)
    codec = (codec_config or CodecConfig()).make_codec()
    out = out or f"{inp}.{codec.identifier()}"

    logger.info(f"Compressing {inp} -> {out} ({codec})")
    with open(inp, "rb") as fi, open(out, "wb") as fo:
        codec.compress(fi, fo)
    with open(out + SIDECAR_EXT, "w") as f:
        json.dump(codec.get_config(), f, indent=2)
    logger.info(f"{op.getsize(inp)} -> {op.getsize(out)} bytes")
    return out


@main.command
def decompress(
    inp: str,
    out: str | None = None,
    *,
    codec_config: CodecConfig = None,
    general_config: GeneralConfig = None,
) -> str:
    """
    Uncompress a chunk file produced by `compress`.

    The codec is rebuilt from `<inp>.json` if it exists, from the
    command line options otherwise.

    Parameters
    ----------
    inp
        Path to the compressed input file.
    out
        Path to the raw output [<inp> without its extension]
    """
    _setup(general_config)
    sidecar = inp + SIDECAR_EXT
    if op.exists(sidecar):
        logger.info(f"Reading codec configuration from {sidecar}")
        with open(sidecar) as f:
            codec = create(json.load(f))
    else:
        codec = (codec_config or CodecConfig()).make_codec()
    if out is None:
        base, ext = op.splitext(inp)
        out = base if ext else inp + ".raw"

    logger.info(f"Uncompressing {inp} -> {out} ({codec})")
    with open(inp, "rb") as fi, open(out, "wb") as fo:
        codec.uncompress(fi, fo)
    return out


@main.command
def info(
    inp: str,
    *,
    general_config: GeneralConfig = None,
) -> None:
    """
    Print the blosc frame header of a compressed chunk.

    Parameters
    ----------
    inp
        Path to a blosc-compressed chunk.
    """
    _setup(general_config)
    with open(inp, "rb") as f:
        header = FrameHeader.unpack(read_exactly(f, HEADER_SIZE, "blosc header"))
    for key, value in header.describe().items():
        print(f"{key:>12}: {value}")


@main.command(name="codecs")
def list_codecs(
    *,
    json_output: Annotated[bool, Parameter(name="--json")] = False,
) -> None:
    """
    List the known codec ids with their aliases.

    Parameters
    ----------
    json_output
        Print a JSON document instead of a table.
    """
    listing = {
        str(codec_id): sorted(k for k, v in ALIASES.items() if v == codec_id)
        for codec_id in CodecId
    }
    if json_output:
        print(json.dumps(
            {"codecs": listing, "default": default_properties()}, indent=2
        ))
    else:
        for codec_id, aliases in listing.items():
            print(f"{codec_id:>10}  aliases: {', '.join(aliases)}")
        print(f"default: {default_properties()}")
