from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .spatial import DEFAULT_FALLBACK_HEIGHT, IDENTITY, fragment_box, is_finite_box, to_matrix
from .structures import Fragment

log = logging.getLogger(__name__)

SOURCE_TEXT_LAYER = "text_layer"


@dataclass
class TextLayerPage:
    """Capa de texto vectorial de una página: items nativos + transformación del viewport."""
    page: int
    items: List[Dict[str, Any]] = field(default_factory=list)
    viewport_transform: Sequence[float] = IDENTITY


def _field(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def fragments_from_text_items(
    items: Iterable[Any],
    viewport_transform: Sequence[float] = IDENTITY,
    *,
    fallback_height: float = DEFAULT_FALLBACK_HEIGHT,
) -> List[Fragment]:
    """
    Traduce items de texto estilo pdf.js (`str`, `transform`, `width`, `height`)
    a fragmentos top-left en el espacio del viewport.

    Los items sin texto o con geometría degenerada se omiten.
    """
    # un viewport inválido invalida toda la página
    to_matrix(viewport_transform)
    fragments: List[Fragment] = []
    for idx, item in enumerate(items):
        raw_text = _field(item, "str")
        text = "" if raw_text is None else str(raw_text)
        if not text.strip():
            continue
        transform = _field(item, "transform")
        if transform is None:
            log.debug("Item %d sin 'transform'. Se omitirá.", idx)
            continue
        try:
            width = float(_field(item, "width") or 0.0)
            height = float(_field(item, "height") or 0.0)
        except (TypeError, ValueError):
            log.debug("Item %d con tamaño no numérico. Se omitirá.", idx)
            continue
        try:
            box = fragment_box(
                transform,
                viewport_transform,
                width=width,
                height=height,
                fallback_height=fallback_height,
            )
        except (TypeError, ValueError):
            log.debug("Item %d (%r) con transform inválido. Se omitirá.", idx, text)
            continue
        if not is_finite_box(box.x, box.y, box.width, box.height):
            log.debug("Item %d (%r) con geometría degenerada. Se omitirá.", idx, text)
            continue
        fragments.append(
            Fragment(text=text, x=box.x, y=box.y, width=box.width, height=box.height,
                     source=SOURCE_TEXT_LAYER)
        )
    log.debug("Capa de texto: %d fragmentos posicionados.", len(fragments))
    return fragments


def _page_from_dict(raw: Dict[str, Any], default_page: int) -> TextLayerPage:
    viewport = raw.get("viewport") or {}
    transform = viewport.get("transform") if isinstance(viewport, dict) else None
    return TextLayerPage(
        page=int(raw.get("page", default_page)),
        items=list(raw.get("items", [])),
        viewport_transform=tuple(transform) if transform else IDENTITY,
    )


def load_text_layer(path: str) -> List[TextLayerPage]:
    """
    Lee un volcado JSON de la capa de texto: un objeto
    `{"viewport": {"transform": [...]}, "items": [...]}` o una lista de ellos
    (con `page` opcional).
    """
    with open(path, "r", encoding="utf-8") as fh:
        raw = json.load(fh)
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        raise ValueError(f"Formato de capa de texto no soportado en {Path(path).name}")
    pages = [_page_from_dict(p, default_page=i) for i, p in enumerate(raw, start=1)]
    log.info("Capa de texto cargada: %d páginas desde %s", len(pages), path)
    return pages


def find_page(pages: Sequence[TextLayerPage], page: int) -> Optional[TextLayerPage]:
    for p in pages:
        if p.page == page:
            return p
    return None
