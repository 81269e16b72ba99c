from __future__ import annotations
import logging
from typing import Iterable, List

from .structures import Fragment, SelectionRect

log = logging.getLogger(__name__)

def select_fragments(fragments: Iterable[Fragment], rect: SelectionRect) -> List[Fragment]:
    """Devuelve, en el orden de entrada, los fragmentos totalmente contenidos en `rect`.

    Un solapamiento parcial en un borde no cuenta. Los fragmentos degenerados
    (texto vacío, coordenadas no finitas o tamaño negativo) se omiten.
    """
    selected: List[Fragment] = []
    skipped = 0
    for frag in fragments:
        if not frag.is_well_formed():
            skipped += 1
            log.debug("Fragmento degenerado omitido: %r", frag)
            continue
        if rect.contains(frag):
            selected.append(frag)
    if skipped:
        log.debug("Se omitieron %d fragmentos degenerados.", skipped)
    log.debug("Seleccionados %d fragmentos dentro de %s", len(selected), rect)
    return selected
