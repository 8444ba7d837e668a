"""Excepciones del dominio.

Los parsers devuelven `None` ante entradas inválidas; estas excepciones solo
aparecen en los constructores estrictos y en el ciclo de vida de la sesión.
"""

from __future__ import annotations


class InvalidURLError(ValueError):
    """El string no forma una URL válida."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"invalid URL {value!r}: {reason}")
        self.value = value
        self.reason = reason


class SessionClosedError(RuntimeError):
    """Se intentó usar una sesión HTTP ya cerrada."""
