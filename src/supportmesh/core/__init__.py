"""
Core module - Shared utilities, configuration, and mesh input.
"""

from supportmesh.core.config import ConfigManager, SupportConfig, load_profile
from supportmesh.core.exceptions import (
    SupportMeshError,
    ConfigurationError,
    GeometryError,
    InvalidMeshError,
    SupportGenerationError,
)
from supportmesh.core.geometry import (
    GeometryConverter,
    GeometryLoader,
    TriangleMesh,
)

__all__ = [
    # Config
    "ConfigManager",
    "SupportConfig",
    "load_profile",
    # Exceptions
    "SupportMeshError",
    "ConfigurationError",
    "GeometryError",
    "InvalidMeshError",
    "SupportGenerationError",
    # Geometry
    "GeometryConverter",
    "GeometryLoader",
    "TriangleMesh",
]
