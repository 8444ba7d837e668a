"""Tests for core.services.playground."""

import pytest

from core.services.playground import SECTIONS, TourHooks, run_tour


@pytest.fixture
def result(settings):
    return run_tour(settings=settings)


def _values(result, expression):
    return [step.value for step in result.steps if step.expression == expression]


class TestURLSection:
    def test_url_from_string(self, result):
        assert result.value_of("url.scheme") == "https"
        assert result.value_of("url.host") == "itunes.apple.com"
        assert result.value_of("url.path") == "/search"
        assert result.value_of("url.query") == "media=music&entity=song&term=abba"
        assert result.value_of("url.base_url") is None

    def test_relative_url(self, result):
        assert result.value_of("relative_url.absolute_string") == "https://itunes.apple.com/search"
        assert result.value_of("relative_url.path") == "/search"
        assert result.value_of("relative_url.query") is None
        assert result.value_of("relative_url.base_url") == "https://itunes.apple.com"


class TestComponentsSection:
    def test_strings_in_order(self, result):
        strings = _values(result, "components.string")
        assert strings == [
            "https://itunes.apple.com/search?media=music&entity=song&term=crowded%20house",
            "https://itunes.apple.com/search?media=music&entity=song&term=crowded%20house&emoji=%F0%9F%98%BB",
        ]

    def test_query_items_are_plain_data(self, result):
        items = result.value_of("components.query_items")
        assert items[-1] == {"name": "emoji", "value": "😻"}
        assert len(items) == 4


class TestSessionSection:
    def test_shared_session_ignores_assignment(self, result):
        assert _values(result, "shared.configuration.allows_cellular_access") == [True, True]

    def test_custom_default_configuration(self, result):
        assert _values(result, "my_default_configuration.allows_cellular_access") == [True, False]
        assert result.value_of("my_default_session.configuration.allows_cellular_access") is False
        assert result.value_of("default_session.configuration.allows_cellular_access") is True

    def test_cache_capacities(self, result):
        assert result.value_of("my_default_configuration.url_cache.disk_capacity") == 10_000_000
        assert result.value_of("my_default_configuration.url_cache.memory_capacity") == 512_000
        assert _values(result, "ephemeral_configuration.url_cache.disk_capacity") == [0, 10_000_000]
        assert result.value_of("ephemeral_configuration.url_cache.memory_capacity") == 512_000
        assert result.value_of("ephemeral_configuration.persists_cookies") is False


def test_sections_follow_canonical_order(result):
    seen = []
    for step in result.steps:
        if step.section not in seen:
            seen.append(step.section)
    assert seen == list(SECTIONS)


def test_section_filter(settings):
    result = run_tour(["components"], settings=settings)
    assert {step.section for step in result.steps} == {"components"}
    assert result.by_section("url") == []


def test_unknown_section(settings):
    with pytest.raises(ValueError, match="unknown tour sections"):
        run_tour(["cookies"], settings=settings)


def test_hooks_receive_every_step(settings):
    seen = []
    result = run_tour(settings=settings, hooks=TourHooks(on_step=seen.append))
    assert seen == result.steps


def test_value_of_missing_expression(result):
    with pytest.raises(KeyError):
        result.value_of("nope")
