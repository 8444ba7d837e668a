"""URL inmutable con soporte de URL base.

Por qué un tipo propio y no solo `urllib.parse`:
- `urlsplit` acepta cualquier string; aquí un string inválido produce `None`
  (o `InvalidURLError` en el constructor estricto).
- Conserva la URL base: `WebURL.parse("search", relative_to=base)` recuerda
  `base` y resuelve la URL absoluta con `urljoin`.

El parseo y la resolución en sí se delegan en `urllib.parse`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from string import ascii_letters, digits
from urllib.parse import SplitResult, unquote, urljoin, urlsplit

from core.domain.errors import InvalidURLError
from core.domain.models import URLSnapshot

logger = logging.getLogger(__name__)

# RFC 3986: unreserved + reserved + '%'.
_ALLOWED_CHARS = frozenset(ascii_letters + digits + "-._~:/?#[]@!$&'()*+,;=%")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_MAX_PORT = 65535


@dataclass(frozen=True)
class Authority:
    user: str | None = None
    password: str | None = None
    host: str | None = None
    port: int | None = None


def split_authority(netloc: str) -> Authority:
    """Separa `user:password@host:port`.

    Lanza `ValueError` si el puerto no es numérico / está fuera de rango o si un
    host IPv6 no cierra el corchete. El host conserva mayúsculas y se devuelve
    sin corchetes.
    """

    if not netloc:
        return Authority()

    userinfo, at, hostport = netloc.rpartition("@")
    user: str | None = None
    password: str | None = None
    if at:
        raw_user, colon, raw_password = userinfo.partition(":")
        user = unquote(raw_user)
        password = unquote(raw_password) if colon else None

    port_text: str | None = None
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            raise ValueError("unterminated IPv6 host")
        host = hostport[1:end]
        rest = hostport[end + 1 :]
        if rest:
            if not rest.startswith(":"):
                raise ValueError(f"unexpected text after IPv6 host: {rest!r}")
            port_text = rest[1:]
    elif ":" in hostport:
        host, _, port_text = hostport.rpartition(":")
    else:
        host = hostport

    port: int | None = None
    if port_text:
        if not port_text.isdigit():
            raise ValueError(f"port is not numeric: {port_text!r}")
        port = int(port_text)
        if port > _MAX_PORT:
            raise ValueError(f"port out of range: {port}")

    return Authority(user=user, password=password, host=unquote(host) or None, port=port)


def check_url_string(value: str) -> str | None:
    """Devuelve el motivo por el que `value` no es una URL, o None si es válida."""

    if not value:
        return "empty string"
    for char in value:
        if char not in _ALLOWED_CHARS:
            return f"character {char!r} must be percent-encoded"
    if _BAD_PERCENT.search(value):
        return "'%' not followed by two hex digits"
    try:
        parts = urlsplit(value)
        split_authority(parts.netloc)
    except ValueError as exc:
        return str(exc)
    return None


class WebURL:
    """URL parseada, opcionalmente relativa a otra `WebURL`."""

    __slots__ = ("_string", "_base", "_absolute", "_parts", "_authority")

    def __init__(self, string: str, relative_to: WebURL | str | None = None) -> None:
        reason = check_url_string(string)
        if reason is not None:
            raise InvalidURLError(string, reason)
        if isinstance(relative_to, str):
            relative_to = WebURL(relative_to)

        self._string = string
        self._base = relative_to
        if relative_to is not None:
            self._absolute = urljoin(relative_to.absolute_string, string)
        else:
            self._absolute = string
        self._parts: SplitResult = urlsplit(self._absolute)
        self._authority = split_authority(self._parts.netloc)

    @classmethod
    def parse(cls, string: str, relative_to: WebURL | str | None = None) -> WebURL | None:
        """Como el constructor, pero devuelve `None` en vez de lanzar."""

        try:
            return cls(string, relative_to)
        except InvalidURLError as exc:
            logger.debug("Rejected URL string: %s", exc)
            return None

    @property
    def relative_string(self) -> str:
        return self._string

    @property
    def absolute_string(self) -> str:
        return self._absolute

    @property
    def absolute_url(self) -> WebURL:
        return WebURL(self._absolute)

    @property
    def base_url(self) -> WebURL | None:
        return self._base

    @property
    def scheme(self) -> str | None:
        return self._parts.scheme or None

    @property
    def user(self) -> str | None:
        return self._authority.user

    @property
    def password(self) -> str | None:
        return self._authority.password

    @property
    def host(self) -> str | None:
        return self._authority.host

    @property
    def port(self) -> int | None:
        return self._authority.port

    @property
    def path(self) -> str:
        decoded = unquote(self._parts.path)
        if len(decoded) > 1 and decoded.endswith("/"):
            decoded = decoded[:-1]
        return decoded

    @property
    def query(self) -> str | None:
        if "?" not in self._absolute.split("#", 1)[0]:
            return None
        return self._parts.query

    @property
    def fragment(self) -> str | None:
        if "#" not in self._absolute:
            return None
        return self._parts.fragment

    def snapshot(self) -> URLSnapshot:
        return URLSnapshot(
            absolute_string=self.absolute_string,
            relative_string=self.relative_string,
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query=self.query,
            fragment=self.fragment,
            base_url=self._base.absolute_string if self._base is not None else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebURL):
            return NotImplemented
        return self._string == other._string and self._base == other._base

    def __hash__(self) -> int:
        return hash((self._string, self._base))

    def __str__(self) -> str:
        return self._absolute

    def __repr__(self) -> str:
        if self._base is None:
            return f"WebURL({self._string!r})"
        return f"WebURL({self._string!r}, relative_to={self._base.absolute_string!r})"
