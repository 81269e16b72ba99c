# src/selection_table_extractor/exporters.py
from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Sequence
import csv

from .grid_builder import TableGrid

def rows_to_csv(rows: Sequence[Sequence[str]], header: Sequence[str], csv_path: str) -> None:
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        if header:
            w.writerow(header)
        w.writerows(rows)

def table_to_csv(table: Optional[TableGrid], csv_path: str,
                 header: Optional[List[str]] = None) -> None:
    """
    Escribe la rejilla a CSV. Una tabla None ("sin texto") produce un CSV vacío.
    """
    Path(csv_path).parent.mkdir(parents=True, exist_ok=True)
    rows = table.rows if table is not None else []
    rows_to_csv(rows, header or [], csv_path)
