import logging
import os
from datetime import date as Date, datetime

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import PatternFill, Alignment, Font, Border, Side
from openpyxl.worksheet.page import PageMargins

from attendance.constants import (
    RECORDS_FOLDER,
    EXPORT_PREFIX,
    RECORDS_SHEET,
    SUMMARY_SHEET,
    RECORDS_COLUMNS,
    SUMMARY_COLUMNS,
    HEADER_FILL,
    PRESENT_FILL,
    ABSENT_FILL,
    DATA_FILL
)
from attendance.logic import summarize
from attendance.models import RollSummary

logger = logging.getLogger(__name__)


def records_frame(records):
    rows = [
        [
            number,
            record.name,
            record.roll_number or "",
            record.status or "",
            record.date or ""
        ]
        for number, record in enumerate(records, 1)
    ]
    return pd.DataFrame(rows, columns=RECORDS_COLUMNS)


def summary_frame(summary):
    rows = [
        [
            roll_number,
            bucket.present_count,
            bucket.absent_count,
            bucket.total_count,
            bucket.percentage_text
        ]
        for roll_number, bucket in summary.per_roll.items()
    ]

    rows.append([
        "All",
        summary.present_count,
        summary.absent_count,
        summary.total_count,
        RollSummary(summary.present_count, summary.total_count).percentage_text
    ])
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def style_sheet(ws, widths, status_column=None):
    header_fill = PatternFill("solid", start_color=HEADER_FILL)
    present_fill = PatternFill("solid", start_color=PRESENT_FILL)
    absent_fill = PatternFill("solid", start_color=ABSENT_FILL)
    data_fill = PatternFill("solid", start_color=DATA_FILL)

    header_font = Font(bold=True, size=12)
    data_font = Font(size=11)

    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center")

    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = center
        cell.fill = header_fill
        cell.border = border

    for row in ws.iter_rows(min_row=2, max_row=ws.max_row, max_col=len(widths)):
        for cell in row:
            if cell.data_type == "f":
                cell.data_type = "s"
            cell.font = data_font
            cell.alignment = center
            cell.fill = data_fill
            cell.border = border

        if status_column is not None:
            status_cell = row[status_column]
            if str(status_cell.value).lower() == "present":
                status_cell.fill = present_fill
            elif str(status_cell.value).lower() == "absent":
                status_cell.fill = absent_fill

    for letter, width in widths.items():
        ws.column_dimensions[letter].width = width

    ws.page_margins = PageMargins(
        left=0.3, right=0.3,
        top=0.4, bottom=0.4,
        header=0.3, footer=0.3
    )

    ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE
    ws.page_setup.paperSize = ws.PAPERSIZE_A4
    ws.page_setup.fitToWidth = 1
    ws.page_setup.fitToHeight = 0


def export_workbook(store, folder=RECORDS_FOLDER, day=None):
    """
    Write every stored record and the attendance summary to
    ``<folder>/attendance_<YYYY-MM-DD>.xlsx`` and return the file path.

    Nothing is written when the store holds no records; None is returned.
    """
    records = store.read_all()
    summary = summarize(records)
    if summary is None:
        return None

    if day is None:
        day = Date.today()
    elif isinstance(day, datetime):
        day = day.date()

    try:
        os.makedirs(folder, exist_ok=True)
        file_path = os.path.join(folder, f"{EXPORT_PREFIX}_{day.isoformat()}.xlsx")

        with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
            records_frame(records).to_excel(writer, sheet_name=RECORDS_SHEET, index=False)
            summary_frame(summary).to_excel(writer, sheet_name=SUMMARY_SHEET, index=False)

        wb = load_workbook(file_path)
        style_sheet(
            wb[RECORDS_SHEET],
            {"A": 6, "B": 25, "C": 15, "D": 12, "E": 14},
            status_column=3
        )
        style_sheet(
            wb[SUMMARY_SHEET],
            {"A": 15, "B": 10, "C": 10, "D": 10, "E": 12}
        )
        wb.save(file_path)
    except Exception:
        logger.exception("Failed to export attendance to %s", folder)
        raise

    logger.info("Exported %d attendance records to %s", len(records), file_path)
    return file_path
