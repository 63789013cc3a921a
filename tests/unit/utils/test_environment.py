"""Unit tests for environment helpers."""

from __future__ import annotations

import pytest

from starlink_api.utils.environment import (
    get_available_services,
    get_env_float,
    get_env_int,
    get_env_str,
    is_truthy,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "STARLINK_CLIENT_ID",
        "STARLINK_CLIENT_SECRET",
        "STARLINK_DISH_HOST",
        "STARLINK_LOCAL_ENABLE",
        "STARLINK_REQUEST_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize("value", ["true", "1", "YES", " on "])
def test_is_truthy(value: str):
    assert is_truthy(value)


@pytest.mark.parametrize("value", [None, "", "0", "false", "off"])
def test_is_not_truthy(value):
    assert not is_truthy(value)


def test_get_env_str_strips_and_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STARLINK_CLIENT_ID", "  abc  ")
    assert get_env_str("STARLINK_CLIENT_ID") == "abc"
    monkeypatch.setenv("STARLINK_CLIENT_ID", "   ")
    assert get_env_str("STARLINK_CLIENT_ID", "fallback") == "fallback"


def test_get_env_int(monkeypatch: pytest.MonkeyPatch):
    assert get_env_int("STARLINK_REQUEST_LIMIT", 250) == 250
    monkeypatch.setenv("STARLINK_REQUEST_LIMIT", "100")
    assert get_env_int("STARLINK_REQUEST_LIMIT", 250) == 100
    monkeypatch.setenv("STARLINK_REQUEST_LIMIT", "lots")
    with pytest.raises(ValueError, match="STARLINK_REQUEST_LIMIT"):
        get_env_int("STARLINK_REQUEST_LIMIT", 250)


def test_get_env_float(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STARLINK_REQUEST_LIMIT", "2.5")
    assert get_env_float("STARLINK_REQUEST_LIMIT", 1.0) == 2.5


def test_available_services_defaults():
    assert get_available_services() == {"enterprise": False, "local": False}


def test_available_services_configured(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STARLINK_CLIENT_ID", "id")
    monkeypatch.setenv("STARLINK_CLIENT_SECRET", "secret")
    monkeypatch.setenv("STARLINK_LOCAL_ENABLE", "yes")
    assert get_available_services() == {"enterprise": True, "local": True}


def test_enterprise_needs_both_credentials(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STARLINK_CLIENT_ID", "id")
    monkeypatch.setenv("STARLINK_DISH_HOST", "192.168.100.1")
    assert get_available_services() == {"enterprise": False, "local": True}
