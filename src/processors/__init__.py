from .contribution_calculator import compute_contributions
from .tax_engine import compute_salary, compute_cumulative_tax, find_bracket, accumulate_history
from .record_statistics import (
    summarize_year, yearly_statistics, trend_series, overall_statistics, trend_summary, available_years
)
from .csv_exporter import export_to_csv, CsvExporter
from .excel_exporter import ExcelExporter
from .salary_ledger import SalaryLedger


__all__ = [
    'compute_contributions',
    'compute_salary',
    'compute_cumulative_tax',
    'find_bracket',
    'accumulate_history',
    'summarize_year',
    'yearly_statistics',
    'trend_series',
    'overall_statistics',
    'trend_summary',
    'available_years',
    'export_to_csv',
    'CsvExporter',
    'ExcelExporter',
    'SalaryLedger'
]
