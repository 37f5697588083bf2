"""
3-component vector helpers.

Single-vector functions mirror the batched ``*_rows`` / ``triangle_normals``
forms so that per-triangle and whole-mesh code compute normals the same way.
"""

import numpy as np


def subtract(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.subtract(a, b, dtype=np.float64)


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.cross(a, b)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def copy(a: np.ndarray) -> np.ndarray:
    return np.array(a, dtype=np.float64, copy=True)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along *v*; the zero vector stays zero."""
    length = np.linalg.norm(v)
    if length == 0.0 or not np.isfinite(length):
        return np.zeros(3)
    return np.asarray(v, dtype=np.float64) / length


def ground(p: np.ndarray) -> np.ndarray:
    """Project a point straight down onto the build plate (z = 0)."""
    return np.array([p[0], p[1], 0.0])


def face_normal(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    """Unit normal of triangle (a, b, c): ``normalize(cross(c - b, a - b))``."""
    return normalize(cross(subtract(c, b), subtract(a, b)))


def normalize_rows(v: np.ndarray) -> np.ndarray:
    """Row-wise ``normalize``; zero-length rows stay zero."""
    v = np.asarray(v, dtype=np.float64)
    lengths = np.linalg.norm(v, axis=-1, keepdims=True)
    out = np.zeros_like(v)
    np.divide(v, lengths, out=out, where=lengths > 0.0)
    return out


def triangle_normals(corners: np.ndarray) -> np.ndarray:
    """
    Unit normals of a stack of triangles.

    Args:
        corners: Array of shape (T, 3, 3), one (a, b, c) triple per row.

    Returns:
        Array of shape (T, 3).
    """
    a, b, c = corners[:, 0], corners[:, 1], corners[:, 2]
    return normalize_rows(np.cross(c - b, a - b))
