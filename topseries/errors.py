"""Errors surfaced by the catalog query.

Only the top-level catalog query raises these to callers. Enrichment
lookups (trailers, providers) catch them and degrade to "no value".
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog API failures."""

    prefix = "Erro no catálogo"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class InvalidResponse(CatalogError):
    """The catalog API answered with a non-success status."""

    prefix = "Erro na resposta da API"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodingError(CatalogError):
    """The response body does not match the expected shape."""

    prefix = "Erro ao decodificar dados"
