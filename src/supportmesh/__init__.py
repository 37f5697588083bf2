"""
supportmesh - Overhang support solids for 3D printing

Computes the solid that fills the space between a model's overhanging
surfaces and the build plate, as a flat-shaded render buffer plus the
volume of support material it represents.
"""

__version__ = "0.1.0"
__author__ = "supportmesh Contributors"

from supportmesh.core.config import ConfigManager, SupportConfig
from supportmesh.core.geometry import TriangleMesh
from supportmesh.support.generator import SupportResult, generate_support

__all__ = [
    "__version__",
    "ConfigManager",
    "SupportConfig",
    "TriangleMesh",
    "SupportResult",
    "generate_support",
]
