"""Wrapper de httpx.

Por qué un wrapper:
- Traduce `SessionConfiguration` (dominio) a `httpx.Client`/`httpx.AsyncClient`.
- `HTTPSession` fija su configuración al crearse: leer `session.configuration`
  devuelve una copia, así que modificarla no cambia la sesión.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
import threading
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import SessionClosedError
from core.domain.session import SessionConfiguration
from core.domain.url import WebURL

logger = logging.getLogger(__name__)


def _build_headers(configuration: SessionConfiguration, settings: AppSettings) -> dict[str, str]:
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    headers.update(configuration.http_additional_headers)
    return headers


def _build_cookie_jar(configuration: SessionConfiguration) -> CookieJar:
    if configuration.http_should_set_cookies:
        return CookieJar()
    # Lista vacía de dominios permitidos: se rechazan todas las cookies.
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


def _build_timeout(configuration: SessionConfiguration) -> httpx.Timeout:
    return httpx.Timeout(configuration.timeout_interval_for_request)


def _build_limits(configuration: SessionConfiguration) -> httpx.Limits:
    # httpx solo expone un límite global del pool, no por host.
    return httpx.Limits(max_connections=configuration.http_maximum_connections_per_host)


def build_client(
    configuration: SessionConfiguration,
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` a partir de una configuración de sesión."""

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=_build_timeout(configuration),
        limits=_build_limits(configuration),
        follow_redirects=True,
        headers=_build_headers(configuration, settings),
        cookies=_build_cookie_jar(configuration),
        transport=transport,
    )


def build_async_client(
    configuration: SessionConfiguration,
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Variante asíncrona de `build_client` (mismos defaults)."""

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=_build_timeout(configuration),
        limits=_build_limits(configuration),
        follow_redirects=True,
        headers=_build_headers(configuration, settings),
        cookies=_build_cookie_jar(configuration),
        transport=transport,
    )


class HTTPSession:
    """Sesión HTTP con configuración fija.

    `HTTPSession.shared()` devuelve un singleton con la configuración por
    defecto; cerrarlo no tiene efecto.
    """

    _shared: HTTPSession | None = None
    _shared_lock = threading.Lock()

    def __init__(
        self,
        configuration: SessionConfiguration | None = None,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        if configuration is None:
            configuration = SessionConfiguration.default(self._settings)
        self._configuration = configuration.clone()
        self._transport = transport
        self._client: httpx.Client | None = None
        self._closed = False
        self._is_shared = False

    @classmethod
    def shared(cls) -> HTTPSession:
        with cls._shared_lock:
            if cls._shared is None:
                session = cls()
                session._is_shared = True
                cls._shared = session
                logger.debug("Created shared HTTP session")
            return cls._shared

    @property
    def configuration(self) -> SessionConfiguration:
        return self._configuration.clone()

    @property
    def is_shared(self) -> bool:
        return self._is_shared

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def client(self) -> httpx.Client:
        if self._closed:
            raise SessionClosedError("HTTP session is closed")
        if self._client is None:
            self._client = build_client(self._configuration, self._settings, transport=self._transport)
            logger.debug(
                "Built httpx client (timeout=%ss, cookies=%s)",
                self._configuration.timeout_interval_for_request,
                self._configuration.http_should_set_cookies,
            )
        return self._client

    def get(self, url: WebURL | str, **kwargs: Any) -> httpx.Response:
        target = url.absolute_string if isinstance(url, WebURL) else url
        logger.info("GET %s", target)
        return self.client.get(target, **kwargs)

    def close(self) -> None:
        if self._is_shared:
            logger.debug("Ignoring close() on the shared HTTP session")
            return
        if self._client is not None:
            self._client.close()
            self._client = None
        self._closed = True

    def __enter__(self) -> HTTPSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
