import logging
import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter
from pathlib import Path
from typing import List, Optional
from decimal import Decimal
from datetime import date
from processors.csv_exporter import CSV_HEADERS
from processors.record_statistics import yearly_statistics, available_years
from config.settings import OUTPUT_DIR

logger = logging.getLogger(__name__)


class ExcelExporter:
    """Generate salary record workbooks"""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR / "excel"
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def generate(self, records: List, year: Optional[int] = None) -> str:
        """Generate records and yearly summary sheets, return file path"""

        if year is not None:
            records = [r for r in records if r.year_month.year == year]

        if not records:
            raise ValueError(f"No salary records found{f' for {year}' if year else ''}")

        # Create workbook
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "工资记录"

        # Define styles
        bold_font = Font(bold=True)
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        header_fill = PatternFill(start_color="B4C7E7", end_color="B4C7E7", fill_type="solid")
        total_fill = PatternFill(start_color="FFFF99", end_color="FFFF99", fill_type="solid")

        self._write_records_sheet(ws, records, bold_font, thin_border, header_fill, total_fill)

        summary_ws = wb.create_sheet("年度统计")
        self._write_summary_sheet(summary_ws, records, bold_font, thin_border, header_fill)

        # Generate filename
        suffix = str(year) if year else date.today().isoformat()
        filepath = self.output_dir / f"salary_records_{suffix}.xlsx"

        wb.save(filepath)
        logger.info("Generated workbook with %d records: %s", len(records), filepath)

        return str(filepath)

    def _write_records_sheet(self, ws, records, bold_font, thin_border, header_fill, total_fill):
        """One row per month in calendar order, totals at the bottom"""

        # Set column widths
        ws.column_dimensions['A'].width = 14
        for col in range(2, len(CSV_HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 16

        # Headers row
        row = 1
        for col_idx, header in enumerate(CSV_HEADERS, start=1):
            cell = ws.cell(row=row, column=col_idx)
            cell.value = header
            cell.font = bold_font
            cell.fill = header_fill
            cell.border = thin_border
            cell.alignment = Alignment(horizontal='center', vertical='center')

        # Data rows
        row = 2
        totals = {
            'base_salary': Decimal('0'),
            'gross_salary': Decimal('0'),
            'total_insurance': Decimal('0'),
            'personal_income_tax': Decimal('0'),
            'union_fee': Decimal('0'),
            'net_salary': Decimal('0')
        }

        for record in sorted(records, key=lambda r: (r.year_month.year, r.year_month.month)):
            ws.cell(row=row, column=1, value=record.year_month.label)
            for col_idx, key in enumerate(totals, start=2):
                amount = getattr(record, key)
                ws.cell(row=row, column=col_idx, value=float(amount))
                totals[key] += amount

            for col_idx in range(1, len(CSV_HEADERS) + 1):
                cell = ws.cell(row=row, column=col_idx)
                cell.border = thin_border
                if col_idx > 1:
                    cell.number_format = '#,##0.00'

            row += 1

        # TOTAL row
        ws.cell(row=row, column=1, value="合计")
        for col_idx, key in enumerate(totals, start=2):
            ws.cell(row=row, column=col_idx, value=float(totals[key]))

        for col_idx in range(1, len(CSV_HEADERS) + 1):
            cell = ws.cell(row=row, column=col_idx)
            cell.font = bold_font
            cell.border = thin_border
            cell.fill = total_fill
            if col_idx > 1:
                cell.number_format = '#,##0.00'

    def _write_summary_sheet(self, ws, records, bold_font, thin_border, header_fill):
        """One row per year"""

        headers = ['年份', '月数', '累计应纳税所得额', '累计个税', '累计实发', '月均应纳税所得额', '月均个税']

        ws.column_dimensions['A'].width = 10
        ws.column_dimensions['B'].width = 8
        for col in range(3, len(headers) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 20

        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col_idx)
            cell.value = header
            cell.font = bold_font
            cell.fill = header_fill
            cell.border = thin_border
            cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)

        row = 2
        for year in sorted(available_years(records)):
            summary = yearly_statistics(year, records)

            ws[f'A{row}'] = summary.year
            ws[f'B{row}'] = summary.total_months
            ws[f'C{row}'] = float(summary.total_taxable_income)
            ws[f'D{row}'] = float(summary.total_tax_paid)
            ws[f'E{row}'] = float(summary.total_net_salary)
            ws[f'F{row}'] = float(summary.avg_taxable_income)
            ws[f'G{row}'] = float(summary.avg_tax_paid)

            for col_idx in range(1, len(headers) + 1):
                ws.cell(row=row, column=col_idx).border = thin_border

            for col in ['C', 'D', 'E', 'F', 'G']:
                ws[f'{col}{row}'].number_format = '#,##0.00'

            row += 1
