"""Tests for CounterConfig."""

import os
from unittest import mock

import pytest

from crdt_counters.config import DEFAULT_CONFIG, CounterConfig


class TestCounterConfigDefaults:
    def test_default_is_64_bit_raise(self):
        assert DEFAULT_CONFIG == CounterConfig(bits=64, overflow="raise")

    def test_64_bit_limits(self):
        assert DEFAULT_CONFIG.max_count == 2**64 - 1
        assert DEFAULT_CONFIG.max_value == 2**63 - 1
        assert DEFAULT_CONFIG.min_value == -(2**63)

    def test_saturating_flag(self):
        assert not CounterConfig().saturating
        assert CounterConfig(overflow="saturate").saturating

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.bits = 32


class TestCounterConfigValidation:
    @pytest.mark.parametrize("bits", [0, 7, 1025, -64])
    def test_rejects_bits_out_of_range(self, bits):
        with pytest.raises(ValueError, match="between"):
            CounterConfig(bits=bits)

    @pytest.mark.parametrize("bits", ["64", 64.0, True])
    def test_rejects_non_int_bits(self, bits):
        with pytest.raises(ValueError, match="int"):
            CounterConfig(bits=bits)

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValueError, match="overflow"):
            CounterConfig(overflow="wrap")


class TestCounterConfigFromEnv:
    def test_defaults_when_unset(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            assert CounterConfig.from_env() == DEFAULT_CONFIG

    def test_reads_env(self):
        env = {"CRDT_COUNT_BITS": "32", "CRDT_OVERFLOW": "Saturate"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = CounterConfig.from_env()
        assert config.bits == 32
        assert config.overflow == "saturate"
        assert config.max_count == 2**32 - 1

    def test_invalid_bits_raises(self):
        with mock.patch.dict(os.environ, {"CRDT_COUNT_BITS": "lots"}, clear=True):
            with pytest.raises(ValueError, match="CRDT_COUNT_BITS"):
                CounterConfig.from_env()

    def test_invalid_policy_raises(self):
        with mock.patch.dict(os.environ, {"CRDT_OVERFLOW": "ignore"}, clear=True):
            with pytest.raises(ValueError, match="overflow"):
                CounterConfig.from_env()
