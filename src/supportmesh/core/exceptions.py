"""
Custom exceptions for supportmesh.

All supportmesh exceptions inherit from SupportMeshError for easy catching.
"""

from typing import Any


class SupportMeshError(Exception):
    """Base exception for all supportmesh errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(SupportMeshError):
    """Raised when configuration is invalid or missing."""

    pass


class GeometryError(SupportMeshError):
    """Raised when geometry loading or conversion fails."""

    pass


class InvalidMeshError(GeometryError):
    """Raised when the input mesh violates its contract (shape, index range)."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        vertex_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.index = index
        self.vertex_count = vertex_count


class SupportGenerationError(SupportMeshError):
    """Raised when support generation cannot complete."""

    pass
