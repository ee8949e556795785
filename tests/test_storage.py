"""
Tests for the numcodecs/Zarr adapter.
"""

import numcodecs
import numpy as np
import pytest

from linc_codecs import create
from linc_codecs.storage import ChunkCodec, make_compressor


class TestChunkCodec:

    def test_registered(self):
        codec = numcodecs.get_codec(
            {"id": "linc_codecs", "compressor": "zlib", "level": 3}
        )
        assert isinstance(codec, ChunkCodec)
        assert codec.codec == create("zlib", level=3)

    @pytest.mark.parametrize(
        "compressor, prm",
        [
            ("identity", {}),
            ("zlib", {"level": 9}),
            ("blosc", {"cname": "zstd", "clevel": 3, "shuffle": 2}),
        ],
    )
    def test_roundtrip(self, compressor, prm):
        data = np.arange(1000, dtype="<f4")
        codec = ChunkCodec(compressor, **prm)
        encoded = codec.encode(data)
        decoded = np.frombuffer(codec.decode(encoded), dtype="<f4")
        np.testing.assert_array_equal(decoded, data)

        out = np.empty_like(data)
        codec.decode(encoded, out=out)
        np.testing.assert_array_equal(out, data)

    def test_config_roundtrip(self):
        codec = ChunkCodec("blosc", cname="lz4hc", clevel="7")
        config = codec.get_config()
        assert config == {
            "id": "linc_codecs",
            "compressor": "blosc",
            "cname": "lz4hc",
            "clevel": 7,
            "shuffle": 1,
            "blocksize": 0,
        }
        assert numcodecs.get_codec(config) == codec


class TestMakeCompressor:

    def test_name(self):
        assert make_compressor("zlib", level=2).codec == create("zlib", level=2)

    def test_codec(self):
        codec = create("blosc", cname="zstd")
        assert make_compressor(codec).codec == codec

    def test_passthrough(self):
        other = numcodecs.Zlib(level=1)
        assert make_compressor(other) is other


@pytest.mark.parametrize("compressor", ["zlib", "blosc", "identity"])
def test_zarr_array(compressor):
    zarr = pytest.importorskip("zarr")
    store = {}
    data = np.arange(64 * 64, dtype=np.uint16).reshape(64, 64)
    z_w = zarr.create_array(
        store=store,
        data=data,
        chunks=(16, 16),
        compressors=make_compressor(compressor),
        zarr_format=2,
    )
    z_w[:] = data
    z_r = zarr.open_array(store=store, zarr_format=2)
    np.testing.assert_array_equal(z_r[:], data)
    assert z_r.metadata.to_dict()["compressor"]["compressor"] == compressor
