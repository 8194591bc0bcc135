"""Unit tests for request normalization helpers."""

import pytest

from src.user_api.api.http.deps import is_blank, normalize_page, normalize_page_size
from src.user_api.runtime.config.config_data import ConfigData
from src.user_api.runtime.context import with_context


class TestNormalizePage:
    @pytest.mark.parametrize("page,expected", [(1, 1), (7, 7), (0, 1), (-5, 1)])
    def test_clamps_below_one(self, page, expected):
        assert normalize_page(page) == expected


class TestNormalizePageSize:
    @pytest.mark.parametrize(
        "page_size,expected", [(1, 1), (50, 50), (100, 100), (0, 10), (-1, 10), (101, 10)]
    )
    def test_out_of_range_falls_back_to_default(self, page_size, expected):
        assert normalize_page_size(page_size) == expected

    def test_limits_follow_config(self):
        override = ConfigData()
        override.pagination.max_page_size = 20
        override.pagination.default_page_size = 5

        with with_context(override):
            assert normalize_page_size(20) == 20
            assert normalize_page_size(21) == 5


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", " ", "\t\n"])
    def test_blank(self, value):
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["a", " a "])
    def test_not_blank(self, value):
        assert is_blank(value) is False
