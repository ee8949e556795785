"""Build codecs from their persisted configuration."""

# stdlib
import logging
from collections.abc import Mapping, Sequence
from typing import Any

# internals
from linc_codecs.codecs.abc import Codec, CodecId
from linc_codecs.codecs.blosc import DEFAULT_PROPERTIES, BloscCodec, BloscConfig
from linc_codecs.codecs.identity import IDENTITY
from linc_codecs.codecs.j2k import J2KCodec, J2KConfig
from linc_codecs.codecs.zlib import ZlibCodec, ZlibConfig
from linc_codecs.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ID = CodecId.BLOSC

ALIASES: dict[str, CodecId] = {
    "null": CodecId.IDENTITY,
    "none": CodecId.IDENTITY,
    "raw": CodecId.IDENTITY,
    "deflate": CodecId.ZLIB,
    "generic-deflate": CodecId.ZLIB,
    "native-frame": CodecId.BLOSC,
    "jpeg2000": CodecId.J2K,
    "external-raster": CodecId.J2K,
}


def default_properties() -> dict[str, Any]:
    """Properties of the default compressor, `id` included."""
    return {"id": str(DEFAULT_ID), **DEFAULT_PROPERTIES}


def create_default() -> Codec:
    """Build the default compressor (blosc/lz4)."""
    return create(default_properties())


def resolve_id(codec_id: Any) -> CodecId:
    """
    Map a persisted identifier (or one of its aliases) to a `CodecId`.

    Raises
    ------
    ConfigurationError
        If the identifier is missing or unknown.
    """
    if codec_id is None:
        raise ConfigurationError("Compressor id is missing.")
    if isinstance(codec_id, CodecId):
        return codec_id
    if isinstance(codec_id, str):
        name = codec_id.strip().lower()
        if name in ALIASES:
            return ALIASES[name]
        if name in {c.value for c in CodecId}:
            return CodecId(name)
    supported = [str(c) for c in CodecId] + sorted(ALIASES)
    raise ConfigurationError(
        f"Compressor id:'{codec_id}' not supported; expected one of {supported}"
    )


def create(
    id_or_properties: str | CodecId | Mapping[str, Any],
    *key_value_pairs: Any,
    **options: Any,
) -> Codec:
    """
    Create a codec from its id and properties.

    Accepted forms::

        create({"id": "zlib", "level": 1})
        create("zlib", {"level": 1})
        create("zlib", "level", 1)
        create("zlib", level=1)

    Parameters
    ----------
    id_or_properties : str | CodecId | Mapping
        Either the codec id, or a mapping holding the id under `"id"`
        along with the codec-specific properties.
    key_value_pairs
        A single properties mapping, or an even number of alternating
        keys and values.
    options
        Additional properties.

    Returns
    -------
    codec : Codec

    Raises
    ------
    ConfigurationError
        If the id is missing or unknown, if the key/value sequence is
        malformed, or if a property is invalid for the codec.
    """
    if isinstance(id_or_properties, Mapping):
        if key_value_pairs:
            raise ConfigurationError(
                "Extra positional arguments are not allowed when properties "
                "are given as a mapping."
            )
        properties = dict(id_or_properties)
        codec_id = properties.get("id")
    else:
        codec_id = id_or_properties
        if len(key_value_pairs) == 1 and isinstance(key_value_pairs[0], Mapping):
            properties = dict(key_value_pairs[0])
        else:
            properties = to_map(key_value_pairs)
    properties.update(options)
    return _create(resolve_id(codec_id), properties)


def _create(codec_id: CodecId, properties: Mapping[str, Any]) -> Codec:
    match codec_id:
        case CodecId.IDENTITY:
            codec = IDENTITY
        case CodecId.ZLIB:
            codec = ZlibCodec(ZlibConfig.from_mapping(properties))
        case CodecId.BLOSC:
            codec = BloscCodec(BloscConfig.from_mapping(properties))
        case CodecId.J2K:
            codec = J2KCodec(J2KConfig.from_mapping(properties))
        case _:
            raise ConfigurationError(f"Compressor id:'{codec_id}' not supported.")
    logger.debug(f"Created codec {codec}")
    return codec


def to_map(key_value_pairs: Sequence[Any]) -> dict[str, Any]:
    """Turn `(key1, value1, key2, value2, ...)` into a dictionary."""
    if len(key_value_pairs) % 2 != 0:
        raise ConfigurationError(
            f"Key/value arguments must come in pairs, got {len(key_value_pairs)}"
        )
    keys = key_value_pairs[::2]
    for key in keys:
        if not isinstance(key, str):
            raise ConfigurationError(f"Property names must be str, got {key!r}")
    return dict(zip(keys, key_value_pairs[1::2]))
