"""
Unit tests for linc_codecs.codecs.factory.
"""

import pytest

from linc_codecs import create, create_default, default_properties
from linc_codecs.codecs import (
    IDENTITY,
    BloscCodec,
    CodecId,
    IdentityCodec,
    J2KCodec,
    ZlibCodec,
)
from linc_codecs.codecs.factory import resolve_id, to_map
from linc_codecs.errors import ConfigurationError


class TestCreate:
    """Test the different call forms of `create`."""

    def test_mapping(self):
        codec = create({"id": "zlib", "level": 3})
        assert isinstance(codec, ZlibCodec)
        assert codec.parameters() == {"level": 3}

    def test_id_and_mapping(self):
        codec = create("zlib", {"level": 3})
        assert codec.parameters() == {"level": 3}

    def test_key_value_pairs(self):
        codec = create("blosc", "cname", "zstd", "clevel", 7)
        assert isinstance(codec, BloscCodec)
        assert codec.parameters()["cname"] == "zstd"
        assert codec.parameters()["clevel"] == 7

    def test_keywords(self):
        assert create("zlib", level=4).parameters() == {"level": 4}

    def test_odd_key_value_pairs(self):
        with pytest.raises(ConfigurationError, match="pairs"):
            create("zlib", "level")

    def test_non_str_key(self):
        with pytest.raises(ConfigurationError, match="Property names"):
            create("zlib", 1, 2)

    def test_mapping_with_extra_positional(self):
        with pytest.raises(ConfigurationError):
            create({"id": "zlib"}, "level", 1)

    def test_unknown_id(self):
        with pytest.raises(ConfigurationError, match="not-a-real-codec"):
            create("not-a-real-codec", {})

    def test_missing_id(self):
        with pytest.raises(ConfigurationError, match="missing"):
            create({"level": 1})

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            create({"id": "zlib", "level": 10})

    def test_unknown_parameter_is_ignored(self, caplog):
        codec = create({"id": "zlib", "level": 2, "foo": "bar"})
        assert codec.parameters() == {"level": 2}
        assert "foo" in caplog.text


class TestDispatch:
    """Test id resolution."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("identity", IdentityCodec),
            ("null", IdentityCodec),
            ("zlib", ZlibCodec),
            ("generic-deflate", ZlibCodec),
            ("ZLIB", ZlibCodec),
            ("blosc", BloscCodec),
            ("native-frame", BloscCodec),
            ("j2k", J2KCodec),
            ("jpeg2000", J2KCodec),
        ],
    )
    def test_ids_and_aliases(self, name, expected):
        assert isinstance(create(name), expected)

    def test_resolve_enum(self):
        assert resolve_id(CodecId.BLOSC) is CodecId.BLOSC

    def test_identity_is_shared(self):
        assert create("identity") is IDENTITY
        assert create({"id": "null"}) is IDENTITY

    def test_identity_identifier(self):
        assert create({"id": "identity"}).identifier() == "identity"


class TestDefault:
    """Test the default compressor."""

    def test_default_properties(self):
        assert default_properties() == {
            "id": "blosc",
            "cname": "lz4",
            "clevel": 5,
            "shuffle": 1,
            "blocksize": 0,
        }

    def test_create_default(self):
        codec = create_default()
        assert isinstance(codec, BloscCodec)
        assert codec.get_config() == default_properties()


class TestConfiguration:
    """Test that configurations are normalized."""

    @pytest.mark.parametrize(
        "properties",
        [
            {"id": "zlib", "level": 5},
            {"id": "blosc", "cname": "zstd", "clevel": 9, "shuffle": 2},
            {"id": "j2k", "imageWidth": 4, "imageHeight": 4, "quality": 30},
        ],
    )
    def test_idempotent(self, properties):
        a, b = create(properties), create(properties)
        assert a.identifier() == b.identifier()
        assert a.parameters() == b.parameters()
        assert a == b

    @pytest.mark.parametrize(
        "properties",
        [
            {"id": "zlib", "level": 5},
            {"id": "blosc", "cname": "lz4hc", "blocksize": 256},
            {"id": "j2k", "imageWidth": 8, "imageHeight": 2, "lossless": False},
        ],
    )
    def test_rebuild_from_config(self, properties):
        codec = create(properties)
        assert create(codec.get_config()) == codec

    def test_mixed_types(self):
        assert create({"id": "zlib", "level": "5"}) == create({"id": "zlib", "level": 5})
        assert (
            create("blosc", clevel="3", shuffle="2", blocksize="0").parameters()
            == create("blosc", clevel=3, shuffle=2, blocksize=0).parameters()
        )

    def test_to_map(self):
        assert to_map(("a", 1, "b", "2")) == {"a": 1, "b": "2"}
        assert to_map(()) == {}
