"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Facilita la serialización (JSON) de lo que la CLI inspecciona.

Nota:
- `WebURL`, `URLComponents` y `SessionConfiguration` viven en sus propios
  módulos; aquí están los valores planos que viajan entre capas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class QueryItem(BaseModel):
    """Un par nombre/valor de la query.

    `value=None` representa un item sin `=` (p.ej. `?flag`), distinto de
    `value=""` (`?flag=`).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Nombre del parámetro (sin codificar).",
    )
    value: str | None = Field(
        default=None,
        description="Valor del parámetro (sin codificar) o None si no lleva '='.",
    )

    def __str__(self) -> str:
        if self.value is None:
            return self.name
        return f"{self.name}={self.value}"


class URLSnapshot(BaseModel):
    """Foto de los accessors de una `WebURL`, lista para tablas o JSON."""

    absolute_string: str = Field(..., description="URL absoluta resuelta.")
    relative_string: str = Field(..., description="String original de la URL.")
    scheme: str | None = None
    host: str | None = None
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None
    base_url: str | None = Field(
        default=None,
        description="Absolute string de la URL base, si la hay.",
    )


class TourStep(BaseModel):
    """Una línea del tour: la expresión evaluada y su resultado."""

    section: str = Field(..., min_length=1)
    expression: str = Field(..., min_length=1)
    value: Any = None
    note: str | None = Field(
        default=None,
        description="Comentario didáctico que acompaña al paso.",
    )
