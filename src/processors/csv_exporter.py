import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from config.settings import OUTPUT_DIR

logger = logging.getLogger(__name__)

BOM = '\ufeff'

CSV_HEADERS = ['年月', '基本工资', '应发工资', '五险一金/二金', '个人所得税', '工会费', '实发工资']


def export_to_csv(records: Iterable) -> str:
    """Render records as CSV text, one row per record in the given order.

    Amounts are written as plain numbers. The payload starts with a byte-order
    mark so spreadsheet programs pick up UTF-8.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for r in records:
        writer.writerow([
            r.year_month.label,
            r.base_salary,
            r.gross_salary,
            r.total_insurance,
            r.personal_income_tax,
            r.union_fee,
            r.net_salary
        ])
    # No trailing newline: N records give exactly N + 1 lines
    return BOM + buffer.getvalue().rstrip('\n')


class CsvExporter:
    """Write salary records to a CSV file"""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR / "csv"
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, records: Iterable, filename: Optional[str] = None) -> str:
        """Write the CSV payload and return the file path"""
        records = list(records)
        if not records:
            raise ValueError("No salary records to export")

        filename = filename or f"工资记录_{date.today().isoformat()}.csv"
        filepath = self.output_dir / filename
        filepath.write_text(export_to_csv(records), encoding='utf-8')

        logger.info("Exported %d records to %s", len(records), filepath)
        return str(filepath)
