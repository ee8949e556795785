"""JPEG2000 codec, delegating the raster work to OpenJPEG via glymur."""

# stdlib
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, BinaryIO

# externals
import numpy as np

# internals
from linc_codecs.codecs.abc import Codec, CodecId
from linc_codecs.errors import ConfigurationError, MalformedInputError
from linc_codecs.utils import raster_service
from linc_codecs.utils.params import (
    bool_value,
    float_value,
    int_value,
    warn_unused,
)

logger = logging.getLogger(__name__)

LITTLE_ENDIAN_KEY = "littleEndian"
INTERLEAVED_KEY = "interleaved"
LOSSLESS_KEY = "lossless"
WIDTH_KEY = "imageWidth"
HEIGHT_KEY = "imageHeight"
BITS_PER_SAMPLE_KEY = "bitsPerSample"
CHANNELS_KEY = "channels"
QUALITY_KEY = "quality"

SUPPORTED_BITS_PER_SAMPLE = (8, 16)


@dataclass(frozen=True)
class J2KConfig:
    """
    Parameters of the JPEG2000 codec.

    Parameters
    ----------
    little_endian
        Byte order of multi-byte samples in raw chunks.
    interleaved
        Raw chunks are laid out (H, W, C) if True, (C, H, W) otherwise.
    width, height
        Image size in pixels. -1 means unset; required to compress.
    bits_per_sample
        8 or 16.
    channels
        Number of channels.
    lossless
        Use reversible compression. Defaults to True when `quality`
        is not set.
    quality
        Target PSNR (dB) of lossy compression. -1 means unset.
    """

    little_endian: bool = False
    interleaved: bool = False
    width: int = -1
    height: int = -1
    bits_per_sample: int = 8
    channels: int = 1
    lossless: bool = True
    quality: float = -1.0

    def __post_init__(self) -> None:
        if self.bits_per_sample not in SUPPORTED_BITS_PER_SAMPLE:
            raise ConfigurationError(
                f"j2k: {BITS_PER_SAMPLE_KEY} not supported: "
                f"{self.bits_per_sample}; expected one of "
                f"{list(SUPPORTED_BITS_PER_SAMPLE)}"
            )
        if self.channels < 1:
            raise ConfigurationError(
                f"j2k: {CHANNELS_KEY} must be positive but was: {self.channels}"
            )
        for key, value in ((WIDTH_KEY, self.width), (HEIGHT_KEY, self.height)):
            if value == 0 or value < -1:
                raise ConfigurationError(
                    f"j2k: {key} must be positive (or -1 if unknown) "
                    f"but was: {value}"
                )

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "J2KConfig":
        p = "j2k: "
        warn_unused(
            params,
            (
                LITTLE_ENDIAN_KEY, INTERLEAVED_KEY, LOSSLESS_KEY, WIDTH_KEY,
                HEIGHT_KEY, BITS_PER_SAMPLE_KEY, CHANNELS_KEY, QUALITY_KEY,
            ),
            "j2k",
        )
        # if neither quality nor lossless is defined, do lossless compression
        quality = float_value(params, QUALITY_KEY, -1.0, p)
        return cls(
            little_endian=bool_value(params, LITTLE_ENDIAN_KEY, False, p),
            interleaved=bool_value(params, INTERLEAVED_KEY, False, p),
            width=int_value(params, WIDTH_KEY, -1, p),
            height=int_value(params, HEIGHT_KEY, -1, p),
            bits_per_sample=int_value(params, BITS_PER_SAMPLE_KEY, 8, p),
            channels=int_value(params, CHANNELS_KEY, 1, p),
            lossless=bool_value(params, LOSSLESS_KEY, quality < 0, p),
            quality=quality,
        )

    @property
    def dtype(self) -> np.dtype:
        """Data type of raw samples, in the configured byte order."""
        dtype = np.dtype(f"u{self.bits_per_sample // 8}")
        return dtype.newbyteorder("<" if self.little_endian else ">")


@dataclass(frozen=True)
class J2KCodec(Codec):
    """
    Compress 2D image chunks as JPEG2000 codestreams.

    Raw chunks hold `height * width * channels` samples. Decoding always
    writes them back in the configured byte order and interleaving.
    """

    config: J2KConfig = J2KConfig()
    codec_id = CodecId.J2K

    def parameters(self) -> dict[str, Any]:
        cfg = self.config
        prm = {
            LITTLE_ENDIAN_KEY: cfg.little_endian,
            INTERLEAVED_KEY: cfg.interleaved,
            WIDTH_KEY: cfg.width,
            HEIGHT_KEY: cfg.height,
            BITS_PER_SAMPLE_KEY: cfg.bits_per_sample,
            CHANNELS_KEY: cfg.channels,
            LOSSLESS_KEY: cfg.lossless,
        }
        if cfg.quality >= 0:
            prm[QUALITY_KEY] = cfg.quality
        return prm

    def compress(self, inp: BinaryIO, out: BinaryIO) -> None:
        cfg = self.config
        if cfg.width < 0 or cfg.height < 0:
            raise ConfigurationError(
                f"j2k: {WIDTH_KEY} and {HEIGHT_KEY} are required to compress"
            )
        raw = inp.read()
        expected = cfg.width * cfg.height * cfg.channels * cfg.dtype.itemsize
        if len(raw) != expected:
            raise MalformedInputError(
                f"j2k: expected {expected} bytes for a {cfg.height}x{cfg.width}"
                f"x{cfg.channels} image, got {len(raw)}"
            )
        image = np.frombuffer(raw, dtype=cfg.dtype)
        if cfg.interleaved:
            image = image.reshape([cfg.height, cfg.width, cfg.channels])
        else:
            image = image.reshape([cfg.channels, cfg.height, cfg.width])
            image = image.transpose([1, 2, 0])
        if cfg.channels == 1:
            image = image[..., 0]
        image = image.astype(cfg.dtype.newbyteorder("="))
        out.write(raster_service.encode(image, cfg.lossless, cfg.quality))

    def uncompress(self, inp: BinaryIO, out: BinaryIO) -> None:
        cfg = self.config
        image = raster_service.decode(inp.read())
        if image.ndim == 2:
            image = image[..., None]
        if not cfg.interleaved:
            image = image.transpose([2, 0, 1])
        out.write(np.ascontiguousarray(image, dtype=cfg.dtype).tobytes())
