"""Configuración de sesiones HTTP y de su caché.

Por qué en el dominio:
- Son valores puros (Pydantic): qué opciones tiene una sesión, no cómo se
  hacen los requests. El adaptador `adapters.http_client` las traduce a httpx.
- `default()` y `ephemeral()` devuelven siempre un objeto nuevo: modificar uno
  nunca altera el siguiente.

Nota:
- `URLCache` describe capacidades; la política de caché (qué se guarda, cuándo
  se expulsa) queda fuera de este proyecto.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.config import AppSettings

ONE_WEEK_SECONDS = 7 * 24 * 60 * 60.0


class URLCache(BaseModel):
    """Límites de la caché de respuestas, en memoria y en disco."""

    model_config = ConfigDict(validate_assignment=True)

    memory_capacity: int = Field(
        ...,
        ge=0,
        description="Bytes máximos en memoria.",
    )
    disk_capacity: int = Field(
        ...,
        ge=0,
        description="Bytes máximos en disco (0 = sin almacenamiento persistente).",
    )
    disk_path: Path | None = Field(
        default=None,
        description="Directorio de la caché en disco.",
    )

    @property
    def is_persistent(self) -> bool:
        return self.disk_capacity > 0


class SessionConfiguration(BaseModel):
    """Opciones de una sesión HTTP.

    Los objetos son mutables (como un builder) y validan cada asignación.
    Una sesión copia la configuración al crearse.
    """

    model_config = ConfigDict(validate_assignment=True)

    allows_cellular_access: bool = Field(
        default=True,
        description="Permite usar interfaces celulares/medidas.",
    )
    allows_expensive_network_access: bool = Field(
        default=True,
        description="Permite interfaces marcadas como costosas (p.ej. hotspot).",
    )
    allows_constrained_network_access: bool = Field(
        default=True,
        description="Permite interfaces en modo de datos reducido.",
    )
    waits_for_connectivity: bool = Field(
        default=False,
        description="Esperar conectividad en vez de fallar de inmediato.",
    )

    timeout_interval_for_request: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    timeout_interval_for_resource: float = Field(
        default=ONE_WEEK_SECONDS,
        gt=0,
        description="Tiempo máximo total por recurso (segundos).",
    )

    http_additional_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers añadidos a cada request.",
    )
    http_should_set_cookies: bool = Field(
        default=True,
        description="Aceptar y enviar cookies.",
    )
    http_maximum_connections_per_host: int = Field(
        default=6,
        ge=1,
        description="Conexiones simultáneas máximas por host.",
    )

    persists_cookies: bool = Field(
        default=True,
        description="Las cookies sobreviven a la sesión.",
    )
    persists_credentials: bool = Field(
        default=True,
        description="Las credenciales sobreviven a la sesión.",
    )
    url_cache: URLCache | None = Field(
        default=None,
        description="Caché de respuestas asociada (None = sin caché).",
    )
    is_ephemeral: bool = Field(
        default=False,
        description="Creada con `ephemeral()`.",
    )

    @classmethod
    def default(cls, settings: AppSettings | None = None) -> SessionConfiguration:
        """Configuración por defecto: caché en memoria y en disco, almacenamiento persistente."""

        settings = settings or AppSettings()
        return cls(
            timeout_interval_for_request=settings.http_timeout_seconds,
            timeout_interval_for_resource=settings.resource_timeout_seconds,
            http_maximum_connections_per_host=settings.max_connections_per_host,
            url_cache=URLCache(
                memory_capacity=settings.cache_memory_capacity,
                disk_capacity=settings.cache_disk_capacity,
                disk_path=settings.resolved_cache_dir(),
            ),
        )

    @classmethod
    def ephemeral(cls, settings: AppSettings | None = None) -> SessionConfiguration:
        """Sin almacenamiento persistente para caché, cookies ni credenciales."""

        settings = settings or AppSettings()
        return cls(
            timeout_interval_for_request=settings.http_timeout_seconds,
            timeout_interval_for_resource=settings.resource_timeout_seconds,
            http_maximum_connections_per_host=settings.max_connections_per_host,
            persists_cookies=False,
            persists_credentials=False,
            url_cache=URLCache(memory_capacity=settings.cache_memory_capacity, disk_capacity=0),
            is_ephemeral=True,
        )

    def clone(self) -> SessionConfiguration:
        return self.model_copy(deep=True)
