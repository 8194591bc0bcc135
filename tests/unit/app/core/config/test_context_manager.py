"""Unit tests for the application context and config overrides."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from src.user_api.runtime.config.config_data import ConfigData
from src.user_api.runtime.context import (
    AppContext,
    get_config,
    get_context,
    load_default_config,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_field(self):
        """Only the overridden field changes; siblings are inherited."""
        original_config = get_config()
        original_url = original_config.mongo.url

        override = ConfigData()
        override.mongo.database = "override_db"

        with with_context(override):
            config = get_config()
            assert config.mongo.database == "override_db"
            assert config.mongo.url == original_url
            assert config is not original_config

        assert get_config() is original_config

    def test_nested_overrides(self):
        original_host = get_config().app.host

        level1 = ConfigData()
        level1.app.host = "level1_host"
        level1.app.port = 8001

        with with_context(level1):
            level2 = ConfigData()
            level2.app.port = 8002

            with with_context(level2):
                config = get_config()
                assert config.app.host == "level1_host"
                assert config.app.port == 8002

            assert get_config().app.port == 8001

        assert get_config().app.host == original_host

    def test_none_override_is_noop(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_rejects_non_config_override(self):
        with pytest.raises(ValueError, match="config_override must be ConfigData"):
            with with_context({"app": {"host": "x"}}):
                pass

    def test_override_not_visible_from_other_threads(self):
        override = ConfigData()
        override.mongo.database = "thread_local_db"

        with with_context(override):
            with ThreadPoolExecutor(max_workers=1) as pool:
                seen = pool.submit(lambda: get_config().mongo.database).result()

        assert seen != "thread_local_db"


class TestLoadDefaultConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        config = load_default_config(tmp_path / "absent.yaml")

        assert config == ConfigData()
