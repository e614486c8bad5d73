"""
Tests for optimization encoding.

These tests verify:
- Required-after-defaulting fields are enforced
- sideEffects stringification
- splitChunks absence versus presence
- Cache group field narrowing
"""

import re

import pytest

from options_adapter.compiler.optimization import (
    encode_cache_group,
    encode_optimization,
    encode_split_chunks,
    to_text,
)
from options_adapter.core.errors import PreconditionViolation, UnsupportedShapeError


def _optimization(**overrides):
    optimization = {"moduleIds": "named", "removeAvailableModules": True, "sideEffects": True}
    optimization.update(overrides)
    return optimization


class TestToText:
    """Test the scalar stringification shared by several sections."""

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, "true"), (False, "false"), ("flag", "flag"), (0, "0"), ("mock", "mock")],
    )
    async def test_to_text(self, value, expected):
        assert to_text(value) == expected


class TestEncodeOptimization:
    """Test the optimization section."""

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("side_effects", "expected"), [(True, "true"), (False, "false"), ("flag", "flag")]
    )
    async def test_side_effects_stringified(self, side_effects, expected):
        encoded = encode_optimization(_optimization(sideEffects=side_effects))
        assert encoded["sideEffects"] == expected

    @pytest.mark.anyio
    async def test_flags_pass_through(self):
        encoded = encode_optimization(_optimization(moduleIds="deterministic"))

        assert encoded["moduleIds"] == "deterministic"
        assert encoded["removeAvailableModules"] is True

    @pytest.mark.anyio
    @pytest.mark.parametrize("split_chunks", [None, False])
    async def test_split_chunks_absent_when_disabled(self, split_chunks):
        """Disabled split chunks are omitted, not encoded as an empty record."""
        encoded = encode_optimization(_optimization(splitChunks=split_chunks))
        assert "splitChunks" not in encoded

    @pytest.mark.anyio
    async def test_split_chunks_key_missing(self):
        assert "splitChunks" not in encode_optimization(_optimization())

    @pytest.mark.anyio
    async def test_empty_split_chunks_means_enabled(self):
        encoded = encode_optimization(_optimization(splitChunks={}))
        assert encoded["splitChunks"] == {"cacheGroups": {}}

    @pytest.mark.anyio
    async def test_split_chunks_with_one_cache_group(self):
        optimization = _optimization(
            splitChunks={
                "cacheGroups": {
                    "vendors": {
                        "test": re.compile(r"[\\/]node_modules[\\/]"),
                        "name": "vendors",
                        "priority": -10,
                        "minChunks": 2,
                        "chunks": "initial",
                    }
                }
            }
        )

        groups = encode_optimization(optimization)["splitChunks"]["cacheGroups"]

        assert list(groups) == ["vendors"]
        assert groups["vendors"] == {
            "test": r"[\\/]node_modules[\\/]",
            "name": "vendors",
            "priority": -10,
            "minChunks": 2,
            "chunks": "initial",
        }

    @pytest.mark.anyio
    async def test_missing_fields_all_reported(self):
        with pytest.raises(PreconditionViolation) as exc_info:
            encode_optimization({"moduleIds": "named"})

        assert exc_info.value.details["missing_fields"] == [
            "removeAvailableModules",
            "sideEffects",
        ]
        assert exc_info.value.message == (
            "optimization: removeAvailableModules, sideEffects should not be nil after defaults"
        )

    @pytest.mark.anyio
    async def test_false_values_are_not_missing(self):
        """False is a value, only None and absent keys count as missing."""
        encoded = encode_optimization(
            {"moduleIds": "natural", "removeAvailableModules": False, "sideEffects": False}
        )
        assert encoded["removeAvailableModules"] is False
        assert encoded["sideEffects"] == "false"


class TestSplitChunks:
    """Test split-chunk and cache group narrowing."""

    @pytest.mark.anyio
    async def test_top_level_tuning_fields(self):
        encoded = encode_split_chunks(
            {
                "chunks": "all",
                "maxAsyncRequests": 30,
                "maxInitialRequests": 30,
                "minChunks": 1,
                "minSize": 20000,
                "enforceSizeThreshold": 50000,
                "minRemainingSize": 0,
            }
        )

        assert encoded == {
            "cacheGroups": {},
            "chunks": "all",
            "maxAsyncRequests": 30,
            "maxInitialRequests": 30,
            "minChunks": 1,
            "minSize": 20000,
            "enforceSizeThreshold": 50000,
            "minRemainingSize": 0,
        }

    @pytest.mark.anyio
    async def test_cache_group_order_preserved(self):
        encoded = encode_split_chunks({"cacheGroups": {"b": {}, "a": {}, "c": {}}})
        assert list(encoded["cacheGroups"]) == ["b", "a", "c"]

    @pytest.mark.anyio
    async def test_pattern_flags_dropped_in_cache_group(self):
        group = encode_cache_group({"test": re.compile("Vendor", re.IGNORECASE)})
        assert group == {"test": "Vendor"}

    @pytest.mark.anyio
    async def test_text_test_kept_as_source(self):
        assert encode_cache_group({"test": "node_modules"}) == {"test": "node_modules"}

    @pytest.mark.anyio
    async def test_absent_fields_omitted(self):
        assert encode_cache_group({"priority": 5}) == {"priority": 5}

    @pytest.mark.anyio
    async def test_name_false_passes_through(self):
        assert encode_cache_group({"name": False}) == {"name": False}

    @pytest.mark.anyio
    async def test_unsupported_test_raises(self):
        with pytest.raises(UnsupportedShapeError) as exc_info:
            encode_cache_group({"test": ["a", "b"]}, "vendors")

        assert exc_info.value.details["cache_group"] == "vendors"
