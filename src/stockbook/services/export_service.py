from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from stockbook.domain.models import Product
from stockbook.repositories.codec import PRODUCT_FIELDS

log = logging.getLogger(__name__)


class ExportService:
    def __init__(self, exports_dir: Path | str):
        self.exports_dir = Path(exports_dir)

    @staticmethod
    def products_to_csv(products: Iterable[Product]) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(PRODUCT_FIELDS)
        for p in products:
            writer.writerow([getattr(p, f) for f in PRODUCT_FIELDS])
        return buf.getvalue()

    def export_products_csv(self, products: Iterable[Product], filename: str, directory: Path | str | None = None) -> Path:
        out_dir = Path(directory) if directory else self.exports_dir
        out_dir.mkdir(parents=True, exist_ok=True)

        name = filename if filename.lower().endswith(".csv") else f"{filename}.csv"
        target = out_dir / name
        products = list(products)
        target.write_text(self.products_to_csv(products), encoding="utf-8")
        log.info("products_exported path=%s rows=%s", target, len(products))
        return target
