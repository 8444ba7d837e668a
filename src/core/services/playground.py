"""Guided tour of URLs, URL components and session configuration.

The tour replays the classic playground exercise as data: every step is a
`TourStep` holding the expression that was evaluated and its value. The CLI
renders the steps; tests assert on them. No network I/O happens here; the
session section only builds sessions and inspects their configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from adapters.http_client import HTTPSession
from core.config import AppSettings
from core.domain.components import URLComponents
from core.domain.models import QueryItem, TourStep
from core.domain.session import SessionConfiguration, URLCache
from core.domain.url import WebURL

logger = logging.getLogger(__name__)

SEARCH_URL = "https://itunes.apple.com/search?media=music&entity=song&term=abba"
BASE_URL = "https://itunes.apple.com"
COMPONENTS_URL = "https://itunes.apple.com/search?media=music&entity=song"

CUSTOM_CACHE_MEMORY = 512_000
CUSTOM_CACHE_DISK = 10_000_000

SECTIONS = ("url", "components", "session")


@dataclass
class TourHooks:
    """Optional callbacks for UI layers."""

    on_step: Callable[[TourStep], None] | None = None


@dataclass
class TourResult:
    """Output of a tour run."""

    steps: list[TourStep] = field(default_factory=list)

    def by_section(self, section: str) -> list[TourStep]:
        return [step for step in self.steps if step.section == section]

    def value_of(self, expression: str, section: str | None = None) -> Any:
        """Value of the last step with this expression (optionally within a section)."""

        for step in reversed(self.steps):
            if step.expression == expression and (section is None or step.section == section):
                return step.value
        raise KeyError(expression)


class _Recorder:
    def __init__(self, section: str, result: TourResult, hooks: TourHooks) -> None:
        self._section = section
        self._result = result
        self._hooks = hooks

    def __call__(self, expression: str, value: Any, note: str | None = None) -> None:
        step = TourStep(section=self._section, expression=expression, value=_jsonable(value), note=note)
        self._result.steps.append(step)
        if self._hooks.on_step is not None:
            self._hooks.on_step(step)


def _jsonable(value: Any) -> Any:
    if isinstance(value, WebURL):
        return value.absolute_string
    if isinstance(value, QueryItem):
        return value.model_dump()
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def _url_accessors(record: _Recorder, name: str, url: WebURL | None) -> None:
    record(f"{name}.absolute_string", url.absolute_string if url else None)
    record(f"{name}.scheme", url.scheme if url else None)
    record(f"{name}.host", url.host if url else None)
    record(f"{name}.path", url.path if url else None)
    record(f"{name}.query", url.query if url else None)
    record(f"{name}.base_url", url.base_url if url else None)


def tour_urls(record: _Recorder) -> None:
    url = WebURL.parse(SEARCH_URL)
    record("url", url, note="A URL parsed from a string.")
    _url_accessors(record, "url", url)

    base_url = WebURL.parse(BASE_URL)
    relative_url = WebURL.parse("search", relative_to=base_url)
    record("relative_url", relative_url, note="Start from a base URL and add to it, handy for REST APIs.")
    _url_accessors(record, "relative_url", relative_url)


def tour_components(record: _Recorder) -> None:
    components = URLComponents.from_string(COMPONENTS_URL)
    if components is None:
        logger.warning("Could not build components from %s", COMPONENTS_URL)
        return

    components.append_query_item(QueryItem(name="term", value="crowded house"))
    record("components.url", components.url, note="Spaces become %20.")
    record("components.string", components.string)
    record("components.query_items", components.query_items)

    components.append_query_item(QueryItem(name="emoji", value="😻"))
    record("components.url", components.url, note="Non-ASCII is UTF-8 encoded: 😻 is %F0%9F%98%BB.")
    record("components.string", components.string)
    record("components.query_items", components.query_items)


def tour_sessions(record: _Recorder, settings: AppSettings) -> None:
    shared = HTTPSession.shared()
    record(
        "shared.configuration.allows_cellular_access",
        shared.configuration.allows_cellular_access,
        note="The shared session uses the default configuration.",
    )
    shared.configuration.allows_cellular_access = False
    record(
        "shared.configuration.allows_cellular_access",
        shared.configuration.allows_cellular_access,
        note="Assigning through the session changes a copy, not the session.",
    )

    my_default_configuration = SessionConfiguration.default(settings)
    record("my_default_configuration.allows_cellular_access", my_default_configuration.allows_cellular_access)
    my_default_configuration.allows_cellular_access = False
    record("my_default_configuration.allows_cellular_access", my_default_configuration.allows_cellular_access)

    with HTTPSession(my_default_configuration, settings) as my_default_session:
        record(
            "my_default_session.configuration.allows_cellular_access",
            my_default_session.configuration.allows_cellular_access,
        )

    with HTTPSession(SessionConfiguration.default(settings), settings) as default_session:
        record(
            "default_session.configuration.allows_cellular_access",
            default_session.configuration.allows_cellular_access,
        )

    default_cache = my_default_configuration.url_cache
    record("my_default_configuration.url_cache.disk_capacity", default_cache.disk_capacity if default_cache else None)
    record("my_default_configuration.url_cache.memory_capacity", default_cache.memory_capacity if default_cache else None)

    ephemeral_configuration = SessionConfiguration.ephemeral(settings)
    ephemeral_cache = ephemeral_configuration.url_cache
    record(
        "ephemeral_configuration.url_cache.disk_capacity",
        ephemeral_cache.disk_capacity if ephemeral_cache else None,
        note="No persistent storage for cache, cookies or credentials.",
    )
    record("ephemeral_configuration.url_cache.memory_capacity", ephemeral_cache.memory_capacity if ephemeral_cache else None)

    cache = URLCache(memory_capacity=CUSTOM_CACHE_MEMORY, disk_capacity=CUSTOM_CACHE_DISK, disk_path=None)
    ephemeral_configuration.url_cache = cache
    record(
        "ephemeral_configuration.url_cache.disk_capacity",
        ephemeral_configuration.url_cache.disk_capacity,
        note="A persistent cache while cookies and credentials stay ephemeral.",
    )
    record("ephemeral_configuration.persists_cookies", ephemeral_configuration.persists_cookies)


def run_tour(
    sections: Iterable[str] | None = None,
    *,
    settings: AppSettings | None = None,
    hooks: TourHooks | None = None,
) -> TourResult:
    """Run the requested sections in their canonical order."""

    settings = settings or AppSettings()
    hooks = hooks or TourHooks()
    wanted = set(sections) if sections is not None else set(SECTIONS)
    unknown = wanted - set(SECTIONS)
    if unknown:
        raise ValueError(f"unknown tour sections: {', '.join(sorted(unknown))}")

    result = TourResult()
    for section in SECTIONS:
        if section not in wanted:
            continue
        logger.debug("Running tour section %s", section)
        record = _Recorder(section, result, hooks)
        if section == "url":
            tour_urls(record)
        elif section == "components":
            tour_components(record)
        else:
            tour_sessions(record, settings)
    return result
