# src/selection_table_extractor/parser.py
from __future__ import annotations
import logging
from typing import List
from bs4 import BeautifulSoup
from .structures import Fragment, parse_bbox

log = logging.getLogger(__name__)

SOURCE_HOCR = "hocr"

def _load_soup(text: str) -> BeautifulSoup:
    """
    Intenta XML (lxml-xml) y, si no hay nodos HOCR, fallback a HTML (lxml).
    """
    soup_xml = BeautifulSoup(text, "lxml-xml")
    if soup_xml.find(class_=lambda c: c and "ocr_page" in c):
        return soup_xml
    return BeautifulSoup(text, "lxml")

def parse_hocr_fragments(hocr_text: str, page: int = 1) -> List[Fragment]:
    """
    Extrae fragmentos de palabras (`ocrx_word`) con su bbox en píxeles de la página `page`.
    Las palabras sin bbox o sin texto se omiten.
    """
    soup = _load_soup(hocr_text)
    pages = soup.find_all(class_=lambda c: c and "ocr_page" in c)
    if not pages:
        log.warning("El HOCR no contiene nodos 'ocr_page'.")
        return []
    if page < 1 or page > len(pages):
        raise ValueError(f"Página {page} fuera de rango (1..{len(pages)})")

    fragments: List[Fragment] = []
    for w in pages[page - 1].find_all(class_=lambda c: c and "ocrx_word" in c):
        bb = parse_bbox(w.get("title", ""))
        if not bb:
            continue
        text = (w.get_text() or "").strip()
        if not text:
            continue
        x1, y1, x2, y2 = bb
        fragments.append(Fragment(text=text, x=x1, y=y1, width=x2 - x1, height=y2 - y1,
                                  source=SOURCE_HOCR))
    log.debug("HOCR página %d: %d palabras.", page, len(fragments))
    return fragments

def parse_hocr_file(hocr_path: str, page: int = 1) -> List[Fragment]:
    with open(hocr_path, "r", encoding="utf-8") as f:
        raw = f.read()
    return parse_hocr_fragments(raw, page=page)
