"""Tests for core.domain.session."""

import pytest
from pydantic import ValidationError

from core.config import AppSettings
from core.domain.session import ONE_WEEK_SECONDS, SessionConfiguration, URLCache


class TestDefaultConfiguration:
    def test_defaults(self, settings, tmp_path):
        configuration = SessionConfiguration.default(settings)
        assert configuration.allows_cellular_access is True
        assert configuration.timeout_interval_for_request == 60.0
        assert configuration.timeout_interval_for_resource == ONE_WEEK_SECONDS
        assert configuration.http_maximum_connections_per_host == 6
        assert configuration.persists_cookies is True
        assert configuration.persists_credentials is True
        assert configuration.is_ephemeral is False

        cache = configuration.url_cache
        assert cache.memory_capacity == 512_000
        assert cache.disk_capacity == 10_000_000
        assert cache.disk_path == tmp_path / "http-cache"
        assert cache.is_persistent

    def test_each_call_is_a_new_object(self, settings):
        first = SessionConfiguration.default(settings)
        first.allows_cellular_access = False
        assert SessionConfiguration.default(settings).allows_cellular_access is True

    def test_settings_drive_capacities(self):
        settings = AppSettings(_env_file=None, cache_memory_capacity=1024, cache_disk_capacity=2048)
        cache = SessionConfiguration.default(settings).url_cache
        assert cache.memory_capacity == 1024
        assert cache.disk_capacity == 2048


class TestEphemeralConfiguration:
    def test_no_persistent_storage(self, settings):
        configuration = SessionConfiguration.ephemeral(settings)
        assert configuration.is_ephemeral is True
        assert configuration.persists_cookies is False
        assert configuration.persists_credentials is False
        assert configuration.url_cache.disk_capacity == 0
        assert configuration.url_cache.memory_capacity == 512_000
        assert configuration.url_cache.disk_path is None
        assert not configuration.url_cache.is_persistent

    def test_custom_persistent_cache(self, settings):
        configuration = SessionConfiguration.ephemeral(settings)
        configuration.url_cache = URLCache(memory_capacity=512_000, disk_capacity=10_000_000, disk_path=None)
        assert configuration.url_cache.disk_capacity == 10_000_000
        assert configuration.url_cache.is_persistent
        assert configuration.persists_cookies is False


class TestValidation:
    def test_negative_capacity(self):
        with pytest.raises(ValidationError):
            URLCache(memory_capacity=-1, disk_capacity=0)

    def test_assignment_is_validated(self):
        cache = URLCache(memory_capacity=1, disk_capacity=1)
        with pytest.raises(ValidationError):
            cache.disk_capacity = -5

    def test_timeout_must_be_positive(self, settings):
        configuration = SessionConfiguration.default(settings)
        with pytest.raises(ValidationError):
            configuration.timeout_interval_for_request = 0


def test_clone_is_deep(settings):
    original = SessionConfiguration.default(settings)
    clone = original.clone()
    clone.url_cache.disk_capacity = 0
    clone.http_additional_headers["X-Test"] = "1"
    assert original.url_cache.disk_capacity == 10_000_000
    assert original.http_additional_headers == {}
