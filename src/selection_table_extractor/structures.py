from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import math
import re

MIN_SELECTION_SIZE = 5

BBOX_RE = re.compile(r"bbox (-?\d+)\s+(-?\d+)\s+(-?\d+)\s+(-?\d+)")

def parse_bbox(title_attr: str) -> Optional[Tuple[int, int, int, int]]:
    if not title_attr:
        return None
    m = BBOX_RE.search(title_attr)
    if not m:
        return None
    x1, y1, x2, y2 = map(int, m.groups())
    return x1, y1, x2, y2

@dataclass(frozen=True)
class Fragment:
    """Un trozo de texto posicionado: caja top-left en un único espacio de coordenadas."""
    text: str
    x: float
    y: float
    width: float
    height: float
    source: str = ""

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def is_well_formed(self) -> bool:
        """False si el texto está vacío o la geometría no es finita / tiene tamaño negativo."""
        if not self.text or not self.text.strip():
            return False
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.width >= 0 and self.height >= 0

@dataclass(frozen=True)
class SelectionRect:
    """Rectángulo de selección normalizado (left <= right, top <= bottom)."""
    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        if self.left > self.right or self.top > self.bottom:
            raise ValueError(
                f"Rectángulo no normalizado: ({self.left}, {self.top}, {self.right}, {self.bottom})"
            )

    @classmethod
    def from_drag(cls, start_x: float, start_y: float, dx: float, dy: float) -> "SelectionRect":
        """Normaliza un arrastre con signo (ancla + delta, posiblemente negativo)."""
        x1, x2 = min(start_x, start_x + dx), max(start_x, start_x + dx)
        y1, y2 = min(start_y, start_y + dy), max(start_y, start_y + dy)
        return cls(left=x1, top=y1, right=x2, bottom=y2)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, frag: Fragment) -> bool:
        # inclusivo en el borde
        return (frag.x >= self.left and frag.right <= self.right
                and frag.y >= self.top and frag.bottom <= self.bottom)

    def is_too_small(self, min_size: float = MIN_SELECTION_SIZE) -> bool:
        return self.width < min_size or self.height < min_size

    def as_crop_box(self) -> Tuple[int, int, int, int]:
        """Límites enteros (left, top, right, bottom) para recortar un bitmap."""
        return (int(round(self.left)), int(round(self.top)),
                int(round(self.right)), int(round(self.bottom)))
