import logging
from pathlib import Path
from typing import List, Optional
from database.repository import SalaryRecordRepository
from database.models import SalaryRecordDB
from models.salary import SalaryInput, SalaryResult
from models.statistics import YearlySummary, OverallStatistics, TrendPoint, TrendSummary
from processors.tax_engine import compute_salary
from processors import record_statistics
from processors.csv_exporter import CsvExporter
from processors.excel_exporter import ExcelExporter

logger = logging.getLogger(__name__)


class SalaryLedger:
    """Calculate months against saved history and keep the history up to date"""

    def __init__(self, repository: SalaryRecordRepository, output_dir: Optional[Path] = None):
        self.repo = repository
        self.output_dir = output_dir

    @property
    def precision(self) -> int:
        return self.repo.get_precision()

    def set_precision(self, precision: int) -> int:
        return self.repo.set_precision(precision)

    def calculate(self, salary_input: SalaryInput) -> SalaryResult:
        """Compute a month using every saved month as withholding history"""
        history = self.repo.get_history()
        result = compute_salary(salary_input, history, self.precision)
        logger.info(
            "Calculated %s: tax %s, net %s",
            result.year_month, result.personal_income_tax, result.net_salary
        )
        return result

    def save(self, result: SalaryResult) -> SalaryRecordDB:
        return self.repo.save_record(result)

    def records(self, year: Optional[int] = None) -> List[SalaryRecordDB]:
        return self.repo.get_records(year)

    def delete(self, record_id: str) -> bool:
        return self.repo.delete_record(record_id)

    def clear(self) -> int:
        return self.repo.clear_records()

    # ========== Statistics ==========

    def yearly_statistics(self, year: int) -> YearlySummary:
        return record_statistics.yearly_statistics(year, self.repo.get_records())

    def overall_statistics(self) -> OverallStatistics:
        return record_statistics.overall_statistics(self.repo.get_records())

    def trend(self) -> List[TrendPoint]:
        return record_statistics.trend_series(self.repo.get_records())

    def trend_summary(self) -> Optional[TrendSummary]:
        return record_statistics.trend_summary(self.repo.get_records())

    def available_years(self) -> List[int]:
        return record_statistics.available_years(self.repo.get_records())

    # ========== Exports ==========

    def export_csv(self, filename: Optional[str] = None) -> str:
        exporter = CsvExporter(self.output_dir / "csv" if self.output_dir else None)
        return exporter.write(self.repo.get_records(), filename)

    def export_excel(self, year: Optional[int] = None) -> str:
        exporter = ExcelExporter(self.output_dir / "excel" if self.output_dir else None)
        return exporter.generate(self.repo.get_records(), year)
