from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from .structures import Fragment, SelectionRect

log = logging.getLogger(__name__)

DEFAULT_OCR_LANG = "rus+eng"
SOURCE_OCR = "ocr"
WORD_LEVEL = 5


class RecognizerError(RuntimeError):
    """El motor OCR no pudo ejecutarse (distinto de "no encontró texto")."""


@dataclass(frozen=True)
class OcrWord:
    """Palabra reconocida, en píxeles del bitmap ya recortado."""
    text: str
    left: int
    top: int
    width: int
    height: int
    confidence: float = -1.0


def normalize_lang(lang: Union[str, Sequence[str], None]) -> str:
    """'rus+eng' o ['rus', 'eng'] → 'rus+eng'."""
    if not lang:
        return DEFAULT_OCR_LANG
    if isinstance(lang, str):
        return lang
    codes = [c.strip() for c in lang if c and c.strip()]
    return "+".join(codes) if codes else DEFAULT_OCR_LANG


def crop_to_selection(image, rect: SelectionRect):
    """
    Recorta el bitmap exactamente al rectángulo de selección.
    Devuelve una imagen nueva; el llamador no retiene el recorte más allá de la llamada.
    """
    left, top, right, bottom = rect.as_crop_box()
    if right <= left or bottom <= top:
        raise ValueError(f"Selección vacía para recortar: {rect}")
    log.debug("Recortando imagen %sx%s a %s", image.width, image.height, (left, top, right, bottom))
    cropped = image.crop((left, top, right, bottom))
    cropped.load()
    return cropped


def load_image(image_path: str):
    try:
        from PIL import Image
    except ImportError as exc:
        raise RuntimeError("Pillow es requerido para el reconocimiento sobre imágenes.") from exc

    with Image.open(image_path) as img:
        return img.convert("RGB")


def recognize_words(
    image,
    lang: Union[str, Sequence[str], None] = DEFAULT_OCR_LANG,
    *,
    min_confidence: Optional[float] = None,
    psm: int = 6,
    oem: int = 3,
    timeout: float = 0,
) -> List[OcrWord]:
    """
    Ejecuta Tesseract sobre `image` y devuelve palabras con bbox en píxeles.

    Cualquier fallo del motor (binario ausente, error, timeout) se eleva como
    RecognizerError.
    """
    try:
        import pytesseract
    except ImportError as exc:
        raise RecognizerError(
            "pytesseract no está instalado. Instale las dependencias y Tesseract."
        ) from exc

    lang_code = normalize_lang(lang)
    config = f"--oem {oem} --psm {psm}"
    log.debug("Tesseract lang=%s config=%s", lang_code, config)
    try:
        data = pytesseract.image_to_data(
            image,
            lang=lang_code,
            config=config,
            output_type=pytesseract.Output.DICT,
            timeout=timeout,
        )
    except pytesseract.TesseractNotFoundError as exc:
        raise RecognizerError("No se encontró el binario de Tesseract.") from exc
    except (pytesseract.TesseractError, RuntimeError) as exc:
        raise RecognizerError(f"Tesseract falló: {exc}") from exc

    words: List[OcrWord] = []
    for i in range(len(data["text"])):
        if int(data["level"][i]) != WORD_LEVEL:
            continue
        text = (data["text"][i] or "").strip()
        if not text:
            continue
        try:
            conf = float(data["conf"][i])
        except (TypeError, ValueError):
            conf = -1.0
        if min_confidence is not None and conf < min_confidence:
            continue
        words.append(OcrWord(
            text=text,
            left=int(data["left"][i]),
            top=int(data["top"][i]),
            width=int(data["width"][i]),
            height=int(data["height"][i]),
            confidence=conf,
        ))
    log.info("Tesseract reconoció %d palabras.", len(words))
    return words


def fragments_from_ocr_words(words: Iterable[OcrWord]) -> List[Fragment]:
    """Las cajas ya están en el espacio del recorte: no hace falta transformar."""
    return [
        Fragment(text=w.text, x=float(w.left), y=float(w.top),
                 width=float(w.width), height=float(w.height), source=SOURCE_OCR)
        for w in words
        if w.text and w.text.strip()
    ]
