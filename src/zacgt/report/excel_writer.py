"""ExcelWriter — builds the CGT workbook with openpyxl."""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from zacgt.report.data_collector import ReportData

ZAR_FORMAT = '"R"#,##0.00'
QTY_FORMAT = "#,##0.00000000"
DATE_FORMAT = "yyyy-mm-dd hh:mm:ss"

# Sheet definitions: (sheet_name, headers, data_attr, number_formats)
# number_formats: dict of column_index (0-based) → openpyxl number format
SHEET_DEFS: list[tuple[str, list[str], str, dict[int, str]]] = [
    (
        "summary",
        ["Metric", "Value"],
        "summary",
        {},
    ),
    (
        "transactions",
        ["Date", "Type", "Sell Asset", "Sell Qty", "Buy Asset", "Buy Qty", "Unit Price (ZAR)", "Total Value (ZAR)"],
        "transactions",
        {0: DATE_FORMAT, 3: QTY_FORMAT, 5: QTY_FORMAT, 6: ZAR_FORMAT, 7: ZAR_FORMAT},
    ),
    (
        "disposals",
        [
            "Date", "Tax Year", "Type", "Asset", "Quantity",
            "Cost Basis (ZAR)", "Proceeds (ZAR)", "Gain/Loss (ZAR)", "Description",
        ],
        "disposals",
        {0: DATE_FORMAT, 4: QTY_FORMAT, 5: ZAR_FORMAT, 6: ZAR_FORMAT, 7: ZAR_FORMAT},
    ),
    (
        "tax_years",
        ["Tax Year", "Period", "Asset", "Total Gain (ZAR)", "Total Loss (ZAR)", "Net Gain (ZAR)"],
        "tax_years",
        {3: ZAR_FORMAT, 4: ZAR_FORMAT, 5: ZAR_FORMAT},
    ),
    (
        "base_costs",
        ["Tax Year", "As Of", "Asset", "Quantity", "Base Cost (ZAR)"],
        "base_costs",
        {1: DATE_FORMAT, 3: QTY_FORMAT, 4: ZAR_FORMAT},
    ),
    (
        "balances",
        ["Asset", "Quantity", "Cost Basis (ZAR)", "Open Lots"],
        "balances",
        {1: QTY_FORMAT, 2: ZAR_FORMAT},
    ),
]

HEADER_FONT = Font(bold=True)


class ExcelWriter:
    """Writes ReportData to an in-memory Excel buffer."""

    def write_to_buffer(self, data: ReportData) -> BytesIO:
        wb = Workbook()

        for idx, (sheet_name, headers, data_attr, num_fmts) in enumerate(SHEET_DEFS):
            if idx == 0:
                ws = wb.active
                ws.title = sheet_name
            else:
                ws = wb.create_sheet(title=sheet_name)

            for col_idx, header in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_idx, value=header)
                cell.font = HEADER_FONT

            for row_idx, row in enumerate(getattr(data, data_attr), start=2):
                for col_idx, value in enumerate(row, start=1):
                    cell = ws.cell(row=row_idx, column=col_idx, value=value)
                    fmt = num_fmts.get(col_idx - 1)  # col_idx is 1-based, num_fmts keys are 0-based
                    if fmt:
                        cell.number_format = fmt

            _auto_fit_columns(ws)

        buf = BytesIO()
        wb.save(buf)
        buf.seek(0)
        return buf


def _auto_fit_columns(ws) -> None:
    """Set column widths based on content (approximate)."""
    for col_cells in ws.columns:
        max_len = 0
        col_letter = get_column_letter(col_cells[0].column)
        for cell in col_cells:
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 3, 50)
