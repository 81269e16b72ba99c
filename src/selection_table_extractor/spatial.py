# src/selection_table_extractor/spatial.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple
import math
import numpy as np

DEFAULT_FALLBACK_HEIGHT = 10.0

IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

Affine = Tuple[float, float, float, float, float, float]

@dataclass(frozen=True)
class BBox:
    """Representa un bounding box top-left con ancho y alto."""
    x: float
    y: float
    width: float
    height: float

def to_matrix(transform: Sequence[float]) -> np.ndarray:
    """[a, b, c, d, e, f] -> matriz homogénea 3x3."""
    if len(transform) != 6:
        raise ValueError(f"Se esperaba una transformación afín de 6 elementos, se recibió {len(transform)}")
    a, b, c, d, e, f = (float(v) for v in transform)
    return np.array([[a, c, e],
                     [b, d, f],
                     [0.0, 0.0, 1.0]])

def from_matrix(m: np.ndarray) -> Affine:
    return (float(m[0, 0]), float(m[1, 0]), float(m[0, 1]),
            float(m[1, 1]), float(m[0, 2]), float(m[1, 2]))

def compose(outer: Sequence[float], inner: Sequence[float]) -> Affine:
    """Compone dos afines: `outer` se aplica después de `inner` (viewport x item)."""
    return from_matrix(to_matrix(outer) @ to_matrix(inner))

def viewport_scale(transform: Sequence[float]) -> Tuple[float, float]:
    """Factores de escala por eje (norma de las columnas de la matriz)."""
    m = to_matrix(transform)
    sx = float(np.hypot(m[0, 0], m[1, 0]))
    sy = float(np.hypot(m[0, 1], m[1, 1]))
    return sx, sy

def is_finite_box(x: float, y: float, width: float, height: float) -> bool:
    if not all(math.isfinite(v) for v in (x, y, width, height)):
        return False
    return width >= 0 and height >= 0

def fragment_box(item_transform: Sequence[float],
                 viewport_transform: Sequence[float] = IDENTITY,
                 width: float = 0.0,
                 height: float = 0.0,
                 fallback_height: float = DEFAULT_FALLBACK_HEIGHT,
                 ) -> BBox:
    """
    Convierte la posición nativa de un fragmento (origen en la línea base)
    en una caja top-left en el espacio del viewport, donde Y crece hacia abajo.

    El alto renderizado sube el origen; un fragmento sin alto (anotaciones sin
    métricas de glifo) conserva el origen y usa `fallback_height` como alto.
    """
    if fallback_height <= 0:
        raise ValueError("fallback_height debe ser positivo")
    tx = compose(viewport_transform, item_transform)
    sx, sy = viewport_scale(viewport_transform)
    w = float(width or 0.0) * sx
    h = float(height or 0.0) * sy
    origin_x, origin_y = tx[4], tx[5]
    if h == 0:
        return BBox(x=origin_x, y=origin_y, width=w, height=float(fallback_height))
    return BBox(x=origin_x, y=origin_y - h, width=w, height=h)
