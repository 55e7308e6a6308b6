"""Tests for tinyroute.config — RouterConfig and AppConfig frozen dataclasses."""

import pytest

from tinyroute.config import AppConfig, RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()
        assert cfg.sensitive is False
        assert cfg.trailing is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()
        with pytest.raises(AttributeError):
            cfg.sensitive = True  # type: ignore[misc]


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()
        assert cfg.debug is False
        assert cfg.router == RouterConfig()

    def test_override(self) -> None:
        cfg = AppConfig(debug=True, router=RouterConfig(trailing=False))
        assert cfg.debug is True
        assert cfg.router.trailing is False

    def test_frozen(self) -> None:
        cfg = AppConfig()
        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]
