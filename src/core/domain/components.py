"""Construcción de URLs por componentes.

Por qué existe:
- Armar URLs concatenando strings olvida codificar espacios, `+`, `&` o emojis.
- `URLComponents` guarda los valores sin codificar y solo aplica
  percent-encoding (UTF-8, `urllib.parse.quote`) al serializar.

Reglas de la query:
- espacio -> `%20`, `%` -> `%25`, `+` -> `%2B`, `&`/`=`/`#` también se codifican.
- al decodificar, `+` es un `+` literal (no un espacio).
"""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import quote, unquote, urlsplit

from core.domain.errors import InvalidURLError
from core.domain.models import QueryItem
from core.domain.url import WebURL, check_url_string, split_authority

# Caracteres que se dejan tal cual además de los unreserved (A-Z a-z 0-9 - . _ ~).
QUERY_SAFE = "!$'()*,;:@/?"
_PATH_SAFE = "/!$&'()*+,;=:@"
_USERINFO_SAFE = "!$&'()*+,;="
_HOST_SAFE = "!$&'()*+,;="
_FRAGMENT_SAFE = "/?!$&'()*+,;=:@"

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")


def percent_encode_query_part(text: str) -> str:
    """Codifica un nombre o valor de la query (UTF-8)."""

    return quote(text, safe=QUERY_SAFE)


def encode_query(items: Iterable[QueryItem]) -> str:
    pieces: list[str] = []
    for item in items:
        name = percent_encode_query_part(item.name)
        if item.value is None:
            pieces.append(name)
        else:
            pieces.append(f"{name}={percent_encode_query_part(item.value)}")
    return "&".join(pieces)


def decode_query(query: str) -> list[QueryItem]:
    if not query:
        return []
    items: list[QueryItem] = []
    for piece in query.split("&"):
        name, sep, value = piece.partition("=")
        items.append(QueryItem(name=unquote(name), value=unquote(value) if sep else None))
    return items


class URLComponents:
    """Componentes editables de una URL.

    Todos los atributos se guardan decodificados. `query_items` es `None`
    cuando la URL no tiene `?`, y `[]` cuando la query está vacía.

    El path conserva además su forma codificada original (`%2F` no es `/`);
    solo se vuelve a codificar si se asigna `path`.
    """

    def __init__(
        self,
        *,
        scheme: str | None = None,
        user: str | None = None,
        password: str | None = None,
        host: str | None = None,
        port: int | None = None,
        path: str = "",
        query_items: Iterable[QueryItem] | None = None,
        fragment: str | None = None,
    ) -> None:
        self.scheme = scheme
        self.user = user
        self.password = password
        self.host = host
        self.port = port
        self.path = path
        self.query_items: list[QueryItem] | None = list(query_items) if query_items is not None else None
        self.fragment = fragment

    @classmethod
    def from_string(cls, value: str) -> URLComponents | None:
        if check_url_string(value) is not None:
            return None

        parts = urlsplit(value)
        authority = split_authority(parts.netloc)
        hier_part = value[len(parts.scheme) + 1 :] if parts.scheme else value
        host = authority.host
        if host is None and hier_part.startswith("//"):
            host = ""

        before_fragment = value.split("#", 1)[0]
        components = cls(
            scheme=parts.scheme or None,
            user=authority.user,
            password=authority.password,
            host=host,
            port=authority.port,
            path=unquote(parts.path),
            query_items=decode_query(parts.query) if "?" in before_fragment else None,
            fragment=unquote(parts.fragment) if "#" in value else None,
        )
        components._percent_encoded_path = parts.path
        return components

    @classmethod
    def from_url(cls, url: WebURL) -> URLComponents:
        components = cls.from_string(url.absolute_string)
        if components is None:
            raise InvalidURLError(url.absolute_string, "not representable as components")
        return components

    def append_query_item(self, item: QueryItem | str, value: str | None = None) -> None:
        """Añade un item; acepta un `QueryItem` o `name, value`."""

        if isinstance(item, str):
            item = QueryItem(name=item, value=value)
        if self.query_items is None:
            self.query_items = []
        self.query_items.append(item)

    @property
    def path(self) -> str:
        return self._path

    @path.setter
    def path(self, value: str) -> None:
        self._path = value
        self._percent_encoded_path = quote(value, safe=_PATH_SAFE)

    @property
    def percent_encoded_path(self) -> str:
        return self._percent_encoded_path

    @property
    def percent_encoded_query(self) -> str | None:
        if self.query_items is None:
            return None
        return encode_query(self.query_items)

    @property
    def query(self) -> str | None:
        if self.query_items is None:
            return None
        return "&".join(str(item) for item in self.query_items)

    @property
    def has_authority(self) -> bool:
        return self.host is not None or self.user is not None or self.port is not None

    @property
    def string(self) -> str | None:
        """URL serializada, o `None` si los componentes no forman una URL."""

        out = ""
        if self.scheme is not None:
            if not _SCHEME_RE.fullmatch(self.scheme):
                return None
            out += f"{self.scheme}:"

        encoded_path = self._percent_encoded_path
        if self.has_authority:
            # Con authority, el path debe ser vacío o absoluto.
            if encoded_path and not encoded_path.startswith("/"):
                return None
            out += "//"
            if self.user is not None:
                out += quote(self.user, safe=_USERINFO_SAFE)
                if self.password is not None:
                    out += ":" + quote(self.password, safe=_USERINFO_SAFE)
                out += "@"
            host = self.host or ""
            out += f"[{host}]" if ":" in host else quote(host, safe=_HOST_SAFE)
            if self.port is not None:
                out += f":{self.port}"
        elif encoded_path.startswith("//"):
            return None

        out += encoded_path
        if self.query_items is not None:
            out += "?" + encode_query(self.query_items)
        if self.fragment is not None:
            out += "#" + quote(self.fragment, safe=_FRAGMENT_SAFE)
        return out

    @property
    def url(self) -> WebURL | None:
        value = self.string
        if value is None:
            return None
        return WebURL.parse(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URLComponents):
            return NotImplemented
        return self.string == other.string and self.query_items == other.query_items

    def __repr__(self) -> str:
        return f"URLComponents({self.string!r})"
