from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .structures import Fragment

COLUMN_GAP_THRESHOLD = 15.0
WORD_GAP_THRESHOLD = 4.0

def segment_row(row: Sequence[Fragment],
                column_gap: float = COLUMN_GAP_THRESHOLD,
                word_gap: float = WORD_GAP_THRESHOLD,
                ) -> List[str]:
    """Parte una fila en celdas según el hueco horizontal entre fragmentos.

    Se recorre de izquierda a derecha midiendo el hueco entre el borde
    izquierdo del fragmento y el borde derecho del anterior:
      - hueco > column_gap  → celda nueva;
      - hueco > word_gap    → misma celda, separada por un espacio;
      - en otro caso        → pegado (kerning / glifos que se tocan).
    """
    if not row:
        return []

    ordered = sorted(row, key=lambda f: f.x)
    cells: List[str] = []
    current = ""
    last_right: Optional[float] = None

    for frag in ordered:
        if last_right is None:
            current = frag.text
        else:
            gap = frag.x - last_right
            if gap > column_gap:
                cells.append(current.strip())
                current = frag.text
            else:
                sep = " " if gap > word_gap else ""
                current += sep + frag.text
        last_right = frag.right

    if current:
        cells.append(current.strip())
    return cells


def estimate_gap_thresholds(fragments: Sequence[Fragment],
                            word_factor: float = 0.4,
                            column_factor: float = 1.5,
                            ) -> Tuple[float, float]:
    """Estima (word_gap, column_gap) proporcionales al alto mediano de los fragmentos.

    Útil para documentos renderizados a otra escala; nunca se aplica de forma
    implícita. Sin fragmentos devuelve los umbrales por defecto.
    """
    heights = np.array([f.height for f in fragments if f.height > 0], dtype=float)
    if heights.size == 0:
        return WORD_GAP_THRESHOLD, COLUMN_GAP_THRESHOLD
    h_med = float(np.median(heights))
    return word_factor * h_med, column_factor * h_med
