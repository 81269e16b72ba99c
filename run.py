# run.py
from __future__ import annotations
import asyncio
import sys
from pathlib import Path
import logging
import argparse

sys.path.append(str(Path(__file__).parent / "src"))
from importlib import import_module
extractor = import_module("selection_table_extractor.main")
exporters = import_module("selection_table_extractor.exporters")
structures = import_module("selection_table_extractor.structures")
text_layer = import_module("selection_table_extractor.text_layer")
ocr_utils = import_module("selection_table_extractor.ocr_utils")
spatial = import_module("selection_table_extractor.spatial")
rows_mod = import_module("selection_table_extractor.rows")
columns_mod = import_module("selection_table_extractor.columns")

# La configuración del logging se hace en main(); aquí sólo el logger del módulo.
log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconstruir una tabla a partir del texto dentro de una selección y exportarla a CSV.")
    parser.add_argument("csv_path", type=str, help="Ruta al archivo de salida .csv")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text-layer", type=str, help="Volcado JSON de la capa de texto (items + viewport)")
    source.add_argument("--image", type=str, help="Imagen de la página (se recorta a la selección y se pasa por OCR)")
    source.add_argument("--hocr", type=str, help="Archivo .hocr de la página completa")
    parser.add_argument("--select", type=float, nargs=4, required=True, metavar=("X", "Y", "DX", "DY"),
                        help="Selección como arrastre: ancla X Y y desplazamiento DX DY (puede ser negativo)")
    parser.add_argument("--page", type=int, default=1, help="Página a usar (default: 1)")
    parser.add_argument("--lang", type=str, default=ocr_utils.DEFAULT_OCR_LANG,
                        help="Idioma(s) OCR para Tesseract, p.ej. 'rus+eng' (default: %(default)s)")
    parser.add_argument("--ocr-timeout", type=float, default=0, help="Timeout de Tesseract en segundos (0 = sin límite)")
    parser.add_argument("--row-tolerance", type=float, default=rows_mod.ROW_TOLERANCE)
    parser.add_argument("--column-gap", type=float, default=columns_mod.COLUMN_GAP_THRESHOLD)
    parser.add_argument("--word-gap", type=float, default=columns_mod.WORD_GAP_THRESHOLD)
    parser.add_argument("--fallback-height", type=float, default=spatial.DEFAULT_FALLBACK_HEIGHT,
                        help="Alto para fragmentos sin métricas de glifo (default: %(default)s)")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser


def run(args: argparse.Namespace, rect):
    thresholds = dict(
        row_tolerance=args.row_tolerance,
        column_gap=args.column_gap,
        word_gap=args.word_gap,
    )

    if args.text_layer:
        log.info(f"CAPA DE TEXTO: {args.text_layer}")
        pages = text_layer.load_text_layer(args.text_layer)
        page = text_layer.find_page(pages, args.page)
        if page is None:
            raise ValueError(f"La página {args.page} no existe en {args.text_layer}")
        return extractor.extract_table_from_text_layer(
            page.items,
            page.viewport_transform,
            rect,
            fallback_height=args.fallback_height,
            **thresholds,
        )

    if args.hocr:
        log.info(f"HOCR: {args.hocr}")
        hocr_text = Path(args.hocr).read_text(encoding="utf-8")
        return extractor.extract_table_from_hocr(hocr_text, rect, page=args.page, **thresholds)

    log.info(f"IMAGEN: {args.image}")
    image = ocr_utils.load_image(args.image)
    return asyncio.run(extractor.extract_table_from_image(
        image,
        rect,
        lang=args.lang,
        timeout=args.ocr_timeout,
        **thresholds,
    ))


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.loglevel, format='%(asctime)s - %(levelname)s - %(message)s')

    rect = structures.SelectionRect.from_drag(*args.select)
    if rect.is_too_small():
        parser.error(f"La selección es demasiado pequeña ({rect.width:g}x{rect.height:g}); mínimo {structures.MIN_SELECTION_SIZE}")
    log.info(f"CSV : {args.csv_path}")

    try:
        table = run(args, rect)
        exporters.table_to_csv(table, args.csv_path)
        if table is None:
            log.warning("No se encontró texto en la selección. CSV vacío.")
        else:
            log.info(f"✔ Tabla de {table.n_rows}x{table.n_cols} escrita.")
    except FileNotFoundError as e:
        log.error(f"Error: No se encontró el archivo de entrada: {e.filename}")
        return 1
    except ocr_utils.RecognizerError as e:
        log.error(f"El motor OCR no pudo ejecutarse: {e}")
        return 1
    except Exception as e:
        log.error(f"Ocurrió un error inesperado: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
