from datetime import date

from conftest import add_widget
from openpyxl import load_workbook


def test_dashboard_totals_and_profit(tracker):
    a = add_widget(tracker, name="A", quantity=0, min_quantity=1, purchase_price=2.0, sale_price=5.0)
    b = add_widget(tracker, name="B", quantity=10, min_quantity=2, purchase_price=1.0, sale_price=1.5)
    tracker.record_movement(a.id, "IN", 10)  # 20
    tracker.record_movement(a.id, "OUT", 4)  # 20
    tracker.record_movement(b.id, "OUT", 8)  # 12

    stats = tracker.get_dashboard_stats()

    assert stats.total_products == 2
    assert stats.low_stock_products == 1
    assert stats.total_quantity == 8
    assert stats.total_purchases == 20.0
    assert stats.total_sales == 32.0
    assert stats.profit == 12.0


def test_recent_movements_are_latest_first_and_limited(tracker):
    p = add_widget(tracker, quantity=100)
    for qty in range(1, 8):
        tracker.record_movement(p.id, "OUT", qty)

    recent = tracker.get_dashboard_stats().recent_movements

    assert [m.quantity for m in recent] == [7, 6, 5, 4, 3, 2, 1][:5]


def test_daily_totals_bucket_by_calendar_day(tracker, clock):
    p = add_widget(tracker, quantity=50, purchase_price=1.0, sale_price=2.0)
    tracker.record_movement(p.id, "OUT", 1)  # 2024-03-10
    clock.advance(days=2)
    tracker.record_movement(p.id, "IN", 5)  # 2024-03-12
    tracker.record_movement(p.id, "OUT", 3)
    clock.advance(days=10)
    tracker.record_movement(p.id, "OUT", 1)  # 2024-03-22, outside window

    series = tracker.daily_totals(today=date(2024, 3, 12))

    assert [d.day for d in series] == [
        "2024-03-06", "2024-03-07", "2024-03-08", "2024-03-09",
        "2024-03-10", "2024-03-11", "2024-03-12",
    ]
    by_day = {d.day: d for d in series}
    assert by_day["2024-03-10"].sales == 2.0
    assert by_day["2024-03-12"].sales == 6.0
    assert by_day["2024-03-12"].purchases == 5.0
    assert by_day["2024-03-12"].profit == 1.0
    assert by_day["2024-03-11"].sales == 0.0


def test_daily_totals_custom_window(tracker):
    assert tracker.daily_totals(days=0, today=date(2024, 1, 1)) == []
    series = tracker.daily_totals(days=3, today=date(2024, 1, 1))
    assert [d.day for d in series] == ["2023-12-30", "2023-12-31", "2024-01-01"]


def test_critical_stock_orders_by_margin_to_minimum(tracker):
    add_widget(tracker, name="Comfortable", quantity=50, min_quantity=5)
    add_widget(tracker, name="Empty", quantity=0, min_quantity=4)
    add_widget(tracker, name="Close", quantity=6, min_quantity=5)

    assert [p.name for p in tracker.critical_stock()] == ["Empty", "Close", "Comfortable"]
    assert [p.name for p in tracker.reporting.critical_stock(1)] == ["Empty"]
    assert [p.name for p in tracker.reporting.low_stock_products()] == ["Empty"]


def test_excel_report_has_all_sheets(tracker, tmp_path):
    p = add_widget(tracker)
    gone = add_widget(tracker, name="Discontinued", quantity=3)
    tracker.record_movement(p.id, "OUT", 2, description="walk-in sale")
    tracker.record_movement(gone.id, "OUT", 1)
    tracker.delete_product(gone.id)

    path = tracker.export_report(tmp_path / "reports" / "dashboard.xlsx", today=date(2024, 3, 10))
    wb = load_workbook(path)

    assert wb.sheetnames == ["Summary", "Daily", "Products", "Movements"]
    summary = wb["Summary"]
    assert summary["A3"].value == "Products"
    assert summary["B3"].value == 1
    assert summary["B7"].value == 9.0

    movements = wb["Movements"]
    assert movements["B2"].value == "Widget"
    assert movements["G2"].value == "walk-in sale"
    assert movements["B3"].value == "Unknown product"

    daily = wb["Daily"]
    assert daily.max_row == 8
    assert daily["A8"].value == "2024-03-10"
    assert daily["B8"].value == 9.0
