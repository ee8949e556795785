"""
Unit tests for linc_codecs.utils.params.
"""

import numpy as np
import pytest

from linc_codecs.errors import ConfigurationError
from linc_codecs.utils.params import (
    bool_value,
    float_value,
    int_value,
    str_value,
)


class TestIntValue:

    @pytest.mark.parametrize(
        "value", [5, "5", " 5 ", 5.0, "5.0", "5e0", np.int64(5)]
    )
    def test_accepted(self, value):
        assert int_value({"k": value}, "k", 0) == 5

    def test_default(self):
        assert int_value({}, "k", 7) == 7
        assert int_value({"k": None}, "k", 7) == 7

    @pytest.mark.parametrize(
        "value", ["five", "5.5", "inf", "nan", 5.5, True, [5]]
    )
    def test_rejected(self, value):
        with pytest.raises(ConfigurationError, match="k"):
            int_value({"k": value}, "k", 0)

    def test_prefix(self):
        with pytest.raises(ConfigurationError, match="^zlib: level"):
            int_value({"level": "x"}, "level", 0, "zlib: ")


class TestFloatValue:

    @pytest.mark.parametrize("value", [2.5, "2.5", np.float32(2.5)])
    def test_accepted(self, value):
        assert float_value({"k": value}, "k", 0.0) == 2.5

    def test_int(self):
        assert float_value({"k": 3}, "k", 0.0) == 3.0

    @pytest.mark.parametrize("value", ["high", False, {}])
    def test_rejected(self, value):
        with pytest.raises(ConfigurationError):
            float_value({"k": value}, "k", 0.0)


class TestBoolValue:

    @pytest.mark.parametrize("value", [True, "true", "True", "yes", 1, "1"])
    def test_true(self, value):
        assert bool_value({"k": value}, "k", False) is True

    @pytest.mark.parametrize("value", [False, "false", "off", 0, "0"])
    def test_false(self, value):
        assert bool_value({"k": value}, "k", True) is False

    @pytest.mark.parametrize("value", ["maybe", 2, 0.5])
    def test_rejected(self, value):
        with pytest.raises(ConfigurationError):
            bool_value({"k": value}, "k", False)


class TestStrValue:

    def test_str(self):
        assert str_value({"k": "lz4"}, "k", "") == "lz4"

    def test_bytes(self):
        assert str_value({"k": b"zstd"}, "k", "") == "zstd"

    def test_rejected(self):
        with pytest.raises(ConfigurationError):
            str_value({"k": 4}, "k", "")
