from io import BytesIO

import pandas as pd

import const
from cafe.lib.reconcile import reconcile_order

SHEET_NAME = "Monthly Sales Report"

COLUMN_WIDTHS = {
    "OrderID": 25,
    "Date": 12,
    "Customer": 20,
    "Mobile": 15,
    "OrderType": 12,
    "Items": 40,
    "Subtotal": 10,
    "GST_5_Percent": 15,
    "Delivery_Charge": 15,
    "Total_Grand": 15,
    "Status": 15,
    "PaymentMethod": 20,
}

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def report_row(order):
    breakdown = reconcile_order(order)
    user = order.user
    return {
        "OrderID": order.id,
        "Date": order.created_at.strftime("%d/%m/%Y") if order.created_at else "",
        "Customer": user.name if user and user.name else "Guest",
        "Mobile": (user.mobile if user else None) or "N/A",
        "OrderType": order.order_type or "Delivery",
        "Items": ", ".join(
            f"{item.get('title')} (x{item.get('quantity')})" for item in order.item_list
        ),
        "Subtotal": breakdown["sub_total"],
        "GST_5_Percent": breakdown["gst_amount"],
        "Delivery_Charge": breakdown["delivery_charge"],
        "Total_Grand": breakdown["total"],
        "Status": order.status,
        "PaymentMethod": order.payment_method,
    }


def build_monthly_report(orders):
    df = pd.DataFrame([report_row(order) for order in orders], columns=list(COLUMN_WIDTHS))

    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
        worksheet = writer.sheets[SHEET_NAME]
        for index, width in enumerate(COLUMN_WIDTHS.values()):
            worksheet.column_dimensions[chr(ord("A") + index)].width = width

    output.seek(0)
    return output


def report_filename(year, month):
    return f"Sales_Report_{const.MONTH_NAMES[month]}_{year}.xlsx"
