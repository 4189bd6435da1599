from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from stockbook.domain.models import (
    MOVEMENT_IN,
    MOVEMENT_OUT,
    DailyTotals,
    DashboardStats,
    Movement,
    Product,
    UNKNOWN_PRODUCT,
)
from stockbook.repositories.catalog_store import CatalogStore
from stockbook.repositories.codec import PRODUCT_FIELDS
from stockbook.repositories.movement_ledger import MovementLedger


def _sum_totals(movements: Iterable[Movement], movement_type: str) -> float:
    return sum((m.total for m in movements if m.type == movement_type), 0.0)


class ReportingService:
    """Read-side figures, recomputed from the current catalog and ledger on every call."""

    def __init__(self, catalog: CatalogStore, ledger: MovementLedger):
        self.catalog = catalog
        self.ledger = ledger

    def dashboard_stats(self, recent_limit: int = 5) -> DashboardStats:
        products = self.catalog.all()
        movements = self.ledger.all()
        purchases = _sum_totals(movements, MOVEMENT_IN)
        sales = _sum_totals(movements, MOVEMENT_OUT)
        return DashboardStats(
            total_products=len(products),
            low_stock_products=sum(1 for p in products if p.is_low_stock),
            total_quantity=sum(p.quantity for p in products),
            total_purchases=purchases,
            total_sales=sales,
            profit=sales - purchases,
            recent_movements=tuple(self.ledger.recent(recent_limit)),
        )

    def daily_totals(self, days: int = 7, today: Optional[date] = None) -> list[DailyTotals]:
        """Per-day sales/purchases for the last ``days`` days including today, oldest first.

        Movements are bucketed by the leading ``YYYY-MM-DD`` of their ``date``.
        """
        today = today or date.today()
        movements = self.ledger.all()
        out = []
        for offset in range(days - 1, -1, -1):
            day = (today - timedelta(days=offset)).isoformat()
            bucket = [m for m in movements if m.date.startswith(day)]
            sales = _sum_totals(bucket, MOVEMENT_OUT)
            purchases = _sum_totals(bucket, MOVEMENT_IN)
            out.append(DailyTotals(day=day, sales=sales, purchases=purchases, profit=sales - purchases))
        return out

    def resolve_product(self, product_id: str) -> Product:
        return self.catalog.find_by_id(product_id) or UNKNOWN_PRODUCT

    def low_stock_products(self) -> list[Product]:
        return [p for p in self.catalog.all() if p.is_low_stock]

    def critical_stock(self, limit: int = 10) -> list[Product]:
        ranked = sorted(self.catalog.all(), key=lambda p: (p.quantity - p.min_quantity, p.name))
        return ranked[: max(0, int(limit))]

    def export_dashboard_excel(self, path: str, recent_limit: int = 5, days: int = 7, today: Optional[date] = None) -> None:
        wb = Workbook()

        def money(cell):
            cell.number_format = "#,##0.00"

        def bold_row(ws, r):
            for c in ws[r]:
                c.font = Font(bold=True)

        def set_widths(ws, widths: dict[str, int]):
            for col, w in widths.items():
                ws.column_dimensions[col].width = w

        def add_table(ws, name: str, end_row: int, end_col: int):
            ref = f"A1:{get_column_letter(end_col)}{end_row}"
            tab = Table(displayName=name, ref=ref)
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(tab)

        stats = self.dashboard_stats(recent_limit)

        # -------- 1) Summary --------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = "Summary"
        ws["A1"].font = Font(bold=True, size=14)

        rows = [
            ("Products", stats.total_products, "int"),
            ("Low stock products", stats.low_stock_products, "int"),
            ("Units on hand", stats.total_quantity, "int"),
            ("Total purchases", stats.total_purchases, "money"),
            ("Total sales", stats.total_sales, "money"),
            ("Profit (sales - purchases)", stats.profit, "money"),
        ]
        for i, (label, val, kind) in enumerate(rows):
            r = 3 + i
            ws[f"A{r}"] = label
            ws[f"B{r}"] = val
            if kind == "money":
                money(ws[f"B{r}"])
        set_widths(ws, {"A": 28, "B": 18})

        # -------- 2) Daily --------
        ws2 = wb.create_sheet("Daily")
        ws2.append(["Day", "Sales", "Purchases", "Profit"])
        bold_row(ws2, 1)
        for d in self.daily_totals(days, today):
            ws2.append([d.day, d.sales, d.purchases, d.profit])
            for col in "BCD":
                money(ws2[f"{col}{ws2.max_row}"])
        set_widths(ws2, {"A": 14, "B": 14, "C": 14, "D": 14})

        # -------- 3) Products --------
        ws3 = wb.create_sheet("Products")
        ws3.append(list(PRODUCT_FIELDS))
        bold_row(ws3, 1)
        for p in self.catalog.all():
            ws3.append([getattr(p, f) for f in PRODUCT_FIELDS])
        ws3.freeze_panes = "A2"
        if ws3.max_row >= 2:
            add_table(ws3, "ProductsTable", ws3.max_row, len(PRODUCT_FIELDS))

        # -------- 4) Movements --------
        ws4 = wb.create_sheet("Movements")
        ws4.append(["Date", "Product", "Type", "Qty", "Unit Price", "Total", "Description"])
        bold_row(ws4, 1)
        for m in self.ledger.all():
            ws4.append([
                m.date, self.resolve_product(m.product_id).name, m.type,
                int(m.quantity), float(m.unit_price), float(m.total), m.description,
            ])
            money(ws4[f"E{ws4.max_row}"])
            money(ws4[f"F{ws4.max_row}"])
        ws4.freeze_panes = "A2"
        set_widths(ws4, {"A": 22, "B": 30, "C": 6, "D": 6, "E": 14, "F": 14, "G": 34})
        if ws4.max_row >= 2:
            add_table(ws4, "MovementsTable", ws4.max_row, 7)

        wb.save(path)
