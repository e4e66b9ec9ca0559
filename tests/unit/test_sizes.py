"""Tests for size tier tables and resolvers."""

import pytest

from descriptor_transpiler.core.errors import ValidationError
from descriptor_transpiler.core.sizes import (
    DATABASE_MACHINE_CLASSES,
    SIZE_RESOURCES,
    VALID_SIZES,
    ResourceSpec,
    SizeTier,
    resolve_database_class,
    resolve_resources,
)


class TestSizeTier:
    """Tests for the SizeTier enum."""

    def test_values(self):
        """Test the four tiers in order."""
        assert VALID_SIZES == ("tiny", "small", "medium", "large")

    def test_string_comparison(self):
        """Test tiers compare equal to their string values."""
        assert SizeTier.MEDIUM == "medium"
        assert SizeTier("large") is SizeTier.LARGE


class TestResolveResources:
    """Tests for resolve_resources."""

    @pytest.mark.parametrize(
        ("tier", "cpu", "memory"),
        [
            (SizeTier.TINY, "100m", "128Mi"),
            (SizeTier.SMALL, "200m", "256Mi"),
            (SizeTier.MEDIUM, "500m", "512Mi"),
            (SizeTier.LARGE, "1", "1Gi"),
        ],
    )
    def test_tier_table(self, tier, cpu, memory):
        """Test each tier maps to its fixed resources."""
        assert resolve_resources(tier) == ResourceSpec(cpu=cpu, memory=memory)

    def test_plain_string_lookup(self):
        """Test lookup with a plain string tier."""
        assert resolve_resources("small").cpu == "200m"

    def test_unknown_tier_falls_back_to_tiny(self):
        """Test unknown tiers silently get tiny resources."""
        assert resolve_resources("huge") == SIZE_RESOURCES[SizeTier.TINY]

    def test_table_is_read_only(self):
        """Test the resource table cannot be modified."""
        with pytest.raises(TypeError):
            SIZE_RESOURCES[SizeTier.TINY] = ResourceSpec(cpu="1", memory="1Gi")  # type: ignore[index]


class TestResolveDatabaseClass:
    """Tests for resolve_database_class."""

    @pytest.mark.parametrize(
        ("tier", "machine_class"),
        [
            ("small", "db-g1-small"),
            ("medium", "db-perf-optimized-N-2"),
            ("large", "db-perf-optimized-N-16"),
        ],
    )
    def test_mapped_tiers(self, tier, machine_class):
        """Test database machine classes."""
        assert resolve_database_class(tier) == machine_class

    def test_tiny_has_no_database_class(self):
        """Test tiny is rejected for databases."""
        assert SizeTier.TINY not in DATABASE_MACHINE_CLASSES

        with pytest.raises(ValidationError) as exc_info:
            resolve_database_class(SizeTier.TINY)

        message = str(exc_info.value)
        assert "tiny" in message
        assert "small, medium, large" in message

    def test_unknown_tier_is_an_error(self):
        """Test unknown tiers are rejected rather than defaulted."""
        with pytest.raises(ValidationError, match="huge"):
            resolve_database_class("huge")
