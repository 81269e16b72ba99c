# src/selection_table_extractor/rows.py
from __future__ import annotations
from typing import List, Sequence

from .structures import Fragment

ROW_TOLERANCE = 10.0

def cluster_rows(fragments: Sequence[Fragment],
                 row_tolerance: float = ROW_TOLERANCE,
                 ) -> List[List[Fragment]]:
    """Agrupa fragmentos en bandas horizontales (filas), de arriba a abajo.

    Se ordena por Y y se abre una fila nueva cuando la Y de un fragmento se
    aleja más de `row_tolerance` de la Y ancla de la fila actual. El ancla es
    la Y del primer fragmento de la fila, no un promedio: el jitter dentro de
    la fila se tolera, pero una deriva lenta a lo largo de muchos fragmentos
    puede partir la fila.
    """
    if not fragments:
        return []

    ordered = sorted(fragments, key=lambda f: f.y)
    rows: List[List[Fragment]] = []
    current: List[Fragment] = [ordered[0]]
    anchor_y = ordered[0].y

    for frag in ordered[1:]:
        if abs(frag.y - anchor_y) > row_tolerance:
            rows.append(current)
            current = [frag]
            anchor_y = frag.y
        else:
            current.append(frag)
    rows.append(current)
    return rows
