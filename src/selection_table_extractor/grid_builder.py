# src/selection_table_extractor/grid_builder.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .columns import COLUMN_GAP_THRESHOLD, WORD_GAP_THRESHOLD, segment_row
from .rows import ROW_TOLERANCE, cluster_rows
from .structures import Fragment

log = logging.getLogger(__name__)

@dataclass
class TableGrid:
    """Representa la tabla como una rejilla rectangular de celdas."""
    rows: List[List[str]] = field(default_factory=list)

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def to_list(self) -> List[List[str]]:
        return [list(r) for r in self.rows]

def normalize_grid(rows: Sequence[Sequence[str]]) -> List[List[str]]:
    """Rellena con "" al final las filas cortas hasta el máximo de columnas."""
    if not rows:
        return []
    max_cols = max(len(r) for r in rows)
    return [list(r) + [""] * (max_cols - len(r)) for r in rows]

def build_table(fragments: Sequence[Fragment],
                *,
                row_tolerance: float = ROW_TOLERANCE,
                column_gap: float = COLUMN_GAP_THRESHOLD,
                word_gap: float = WORD_GAP_THRESHOLD,
                ) -> Optional[TableGrid]:
    """
    Filas → celdas → rejilla normalizada. Devuelve None si no hay fragmentos.
    No guarda estado entre llamadas ni modifica la entrada.
    """
    if not fragments:
        return None

    rows = cluster_rows(fragments, row_tolerance=row_tolerance)
    log.debug("Se agruparon %d fragmentos en %d filas.", len(fragments), len(rows))

    cell_rows = [segment_row(r, column_gap=column_gap, word_gap=word_gap) for r in rows]
    grid = TableGrid(rows=normalize_grid(cell_rows))
    log.info("Rejilla construida con %d filas y %d columnas.", grid.n_rows, grid.n_cols)
    return grid
