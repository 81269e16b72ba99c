from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from .columns import COLUMN_GAP_THRESHOLD, WORD_GAP_THRESHOLD
from .grid_builder import TableGrid, build_table
from .ocr_utils import (
    DEFAULT_OCR_LANG,
    OcrWord,
    crop_to_selection,
    fragments_from_ocr_words,
    normalize_lang,
    recognize_words,
)
from .parser import parse_hocr_fragments
from .rows import ROW_TOLERANCE
from .selector import select_fragments
from .spatial import DEFAULT_FALLBACK_HEIGHT, IDENTITY
from .structures import Fragment, SelectionRect
from .text_layer import fragments_from_text_items

log = logging.getLogger(__name__)

Recognizer = Callable[[Any, str], Sequence[OcrWord]]


def extract_table(
    fragments: Iterable[Fragment],
    rect: SelectionRect,
    *,
    row_tolerance: float = ROW_TOLERANCE,
    column_gap: float = COLUMN_GAP_THRESHOLD,
    word_gap: float = WORD_GAP_THRESHOLD,
) -> Optional[TableGrid]:
    """
    Pipeline común: selección → filas → columnas → normalización.

    Devuelve None cuando ningún fragmento cae dentro de la selección
    ("no se encontró texto"), que es un resultado válido y no un error.
    """
    selected = select_fragments(fragments, rect)
    if not selected:
        log.warning("No se encontró texto en la selección %s.", rect)
        return None
    return build_table(
        selected,
        row_tolerance=row_tolerance,
        column_gap=column_gap,
        word_gap=word_gap,
    )


def extract_table_from_text_layer(
    items: Iterable[Any],
    viewport_transform: Sequence[float],
    rect: SelectionRect,
    *,
    fallback_height: float = DEFAULT_FALLBACK_HEIGHT,
    row_tolerance: float = ROW_TOLERANCE,
    column_gap: float = COLUMN_GAP_THRESHOLD,
    word_gap: float = WORD_GAP_THRESHOLD,
) -> Optional[TableGrid]:
    """Método 1: capa de texto vectorial (items + transformación del viewport)."""
    log.info("Extrayendo tabla desde la capa de texto.")
    fragments = fragments_from_text_items(
        items,
        IDENTITY if viewport_transform is None else viewport_transform,
        fallback_height=fallback_height,
    )
    return extract_table(
        fragments,
        rect,
        row_tolerance=row_tolerance,
        column_gap=column_gap,
        word_gap=word_gap,
    )


def extract_table_from_hocr(
    hocr_text: str,
    rect: SelectionRect,
    *,
    page: int = 1,
    row_tolerance: float = ROW_TOLERANCE,
    column_gap: float = COLUMN_GAP_THRESHOLD,
    word_gap: float = WORD_GAP_THRESHOLD,
) -> Optional[TableGrid]:
    """Salida HOCR ya generada por Tesseract, en píxeles de la página completa."""
    log.info("Extrayendo tabla desde HOCR (página %d).", page)
    return extract_table(
        parse_hocr_fragments(hocr_text, page=page),
        rect,
        row_tolerance=row_tolerance,
        column_gap=column_gap,
        word_gap=word_gap,
    )


async def extract_table_from_image(
    image,
    rect: SelectionRect,
    *,
    lang: Union[str, Sequence[str], None] = DEFAULT_OCR_LANG,
    recognizer: Optional[Recognizer] = None,
    timeout: float = 0,
    row_tolerance: float = ROW_TOLERANCE,
    column_gap: float = COLUMN_GAP_THRESHOLD,
    word_gap: float = WORD_GAP_THRESHOLD,
) -> Optional[TableGrid]:
    """
    Método 2: bitmap rasterizado + OCR.

    El recorte se completa antes de invocar al reconocedor, que corre en un
    hilo aparte. Cancelar la tarea que espera propaga CancelledError y no se
    produce tabla. Los fallos del motor llegan como RecognizerError.
    """
    cropped = crop_to_selection(image, rect)
    width, height = cropped.size
    lang_code = normalize_lang(lang)
    recognize = recognizer or functools.partial(recognize_words, timeout=timeout)
    log.info("Ejecutando OCR (%s) sobre recorte %sx%s.", lang_code, width, height)
    try:
        words = await asyncio.to_thread(recognize, cropped, lang_code)
    except asyncio.CancelledError:
        log.info("Reconocimiento cancelado.")
        raise

    # las cajas OCR viven en el espacio del recorte
    crop_rect = SelectionRect(left=0, top=0, right=width, bottom=height)
    return extract_table(
        fragments_from_ocr_words(words),
        crop_rect,
        row_tolerance=row_tolerance,
        column_gap=column_gap,
        word_gap=word_gap,
    )
