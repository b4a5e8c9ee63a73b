"""Unit tests for config settings, loaders and RedisCacheOptions."""

import dataclasses
from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from tagcache.adapters.redis import RedisCacheOptions
from tagcache.config.settings import EnvSettingsLoader, Settings
from tagcache.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


@dataclass(frozen=True)
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    debug: bool = False
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"
    api_key: str


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_HOST", "example.com")
        assert EnvSettingsLoader().load(AppSettings).host == "example.com"

    def test_loads_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PORT", "9000")
        assert EnvSettingsLoader().load(AppSettings).port == 9000

    def test_loads_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for truthy in ("true", "1", "yes", "on"):
            monkeypatch.setenv("APP_DEBUG", truthy)
            assert EnvSettingsLoader().load(AppSettings).debug is True
        monkeypatch.setenv("APP_DEBUG", "off")
        assert EnvSettingsLoader().load(AppSettings).debug is False

    def test_loads_json_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_EXTRA", '{"socket_timeout": 5}')
        assert EnvSettingsLoader().load(AppSettings).extra == {"socket_timeout": 5}

    def test_non_object_json_for_dict_is_invalid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_EXTRA", "[1, 2]")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(AppSettings)

    def test_bad_int_is_invalid_setting(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PORT", "eighty")
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader().load(AppSettings)
        assert exc_info.value.setting_name == "APP_PORT"

    def test_defaults_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("APP_HOST", raising=False)
        monkeypatch.delenv("APP_PORT", raising=False)
        settings = EnvSettingsLoader().load(AppSettings)
        assert settings.host == "localhost"
        assert settings.port == 8080

    def test_missing_required_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_API_KEY", raising=False)
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader().load(RequiredSettings)
        assert exc_info.value.setting_name == "REQ_API_KEY"

    def test_settings_are_immutable(self) -> None:
        settings = AppSettings()
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.host = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# RedisCacheOptions
# ---------------------------------------------------------------------------


class TestRedisCacheOptions:
    def test_defaults(self) -> None:
        options = RedisCacheOptions()
        assert options.url == "redis://localhost:6379/0"
        assert options.ttl == 0
        assert options.namespace == ""
        assert options.namespace_separator == ":"
        assert options.client_options == {}

    def test_negative_ttl_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            RedisCacheOptions(ttl=-1)
        assert exc_info.value.setting_name == "ttl"

    def test_empty_separator_with_namespace_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            RedisCacheOptions(namespace="app", namespace_separator="")

    def test_empty_separator_without_namespace_allowed(self) -> None:
        assert RedisCacheOptions(namespace_separator="").namespace_separator == ""

    def test_retry_attempts_must_be_positive(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            RedisCacheOptions(tag_retry_attempts=0)

    def test_decode_responses_is_reserved(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            RedisCacheOptions(client_options={"decode_responses": False})

    def test_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            RedisCacheOptions(ttl=-5)

    def test_namespacer_reflects_options(self) -> None:
        keys = RedisCacheOptions(namespace="app", namespace_separator="/", key_prefix="p:").namespacer()
        assert keys.storage_key("k") == "p:app/k"

    def test_ttl_policy_reflects_options(self) -> None:
        assert RedisCacheOptions(ttl=30).ttl_policy().expiry() == 30

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGCACHE_URL", "redis://cache:6379/2")
        monkeypatch.setenv("TAGCACHE_TTL", "3600")
        monkeypatch.setenv("TAGCACHE_NAMESPACE", "orders")
        monkeypatch.setenv("TAGCACHE_CLIENT_OPTIONS", '{"socket_timeout": 2}')
        options = EnvSettingsLoader().load(RedisCacheOptions)
        assert options.url == "redis://cache:6379/2"
        assert options.ttl == 3600
        assert options.namespace == "orders"
        assert options.client_options == {"socket_timeout": 2}

    def test_invalid_env_value_keeps_its_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGCACHE_TTL", "-10")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(RedisCacheOptions)
