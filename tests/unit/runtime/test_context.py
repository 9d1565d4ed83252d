"""Unit tests for the configuration context."""

import pytest

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import AppContext, get_config, get_context, with_context


class TestContext:
    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert context.config is get_config()

    def test_with_context_overrides_only_set_fields(self):
        original = get_config()
        override = ConfigData()
        override.database.url = "sqlite://"

        with with_context(override):
            config = get_config()
            assert config.database.url == "sqlite://"
            assert config.logging.level == original.logging.level
            assert config.app.name == original.app.name

        assert get_config() is original

    def test_nested_overrides(self):
        outer = ConfigData()
        outer.app.environment = "test"
        inner = ConfigData()
        inner.logging.level = "DEBUG"

        with with_context(outer):
            with with_context(inner):
                assert get_config().app.environment == "test"
                assert get_config().logging.level == "DEBUG"
            assert get_config().app.environment == "test"

    def test_none_override_is_noop(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"app": {}}):  # type: ignore[arg-type]
                pass
