"""Tests for ViewConfig validation and immutability."""

from __future__ import annotations

import dataclasses

import pytest

from json_schema_view.config import DRAFT7, DRAFT202012, ViewConfig
from json_schema_view.errors import SchemaConfigurationError


class TestViewConfig:
    """Defaults, validation and immutability."""

    def test_defaults(self) -> None:
        config = ViewConfig()
        assert config.memo_max_size == 4096
        assert config.view_max_size is None
        assert config.default_dialect == DRAFT7
        assert config.normalize_keys is True

    def test_frozen(self) -> None:
        config = ViewConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.memo_max_size = 1  # type: ignore[misc]

    def test_accepts_known_dialect(self) -> None:
        assert ViewConfig(default_dialect=DRAFT202012).default_dialect == DRAFT202012

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"memo_max_size": 0},
            {"view_max_size": 0},
            {"default_dialect": "https://example.com/my-dialect"},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(SchemaConfigurationError):
            ViewConfig(**kwargs)  # type: ignore[arg-type]

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ViewConfig(memo_max_size=-5)
