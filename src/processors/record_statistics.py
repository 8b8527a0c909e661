from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from models.salary import YearlyTaxEntry
from models.statistics import YearlySummary, OverallStatistics, TrendPoint, TrendSummary


def _period_key(record):
    return (record.year_month.year, record.year_month.month)


def summarize_year(year: int, records: Iterable[YearlyTaxEntry]) -> YearlySummary:
    """Totals and averages of taxable income, tax and net pay for one year"""
    year_records = [r for r in records if r.year_month.year == year]
    count = len(year_records)

    total_taxable_income = sum((r.taxable_income for r in year_records), Decimal('0'))
    total_tax_paid = sum((r.tax_paid for r in year_records), Decimal('0'))
    total_net_salary = sum((r.net_salary for r in year_records), Decimal('0'))

    return YearlySummary(
        year=year,
        total_months=count,
        total_taxable_income=total_taxable_income,
        total_tax_paid=total_tax_paid,
        total_net_salary=total_net_salary,
        avg_taxable_income=total_taxable_income / count if count else Decimal('0'),
        avg_tax_paid=total_tax_paid / count if count else Decimal('0')
    )


def to_yearly_entries(records) -> List[YearlyTaxEntry]:
    """Project saved records onto what the yearly summary needs"""
    return [
        YearlyTaxEntry(
            year_month=r.year_month,
            taxable_income=r.monthly_taxable_income,
            tax_paid=r.personal_income_tax,
            net_salary=r.net_salary
        )
        for r in records
    ]


def yearly_statistics(year: int, records) -> YearlySummary:
    return summarize_year(year, to_yearly_entries(records))


def trend_series(records) -> List[TrendPoint]:
    """Records in calendar order, oldest first"""
    return [
        TrendPoint(
            label=r.year_month.label,
            net_salary=r.net_salary,
            gross_salary=r.gross_salary,
            tax=r.personal_income_tax,
            insurance=r.total_insurance
        )
        for r in sorted(records, key=_period_key)
    ]


def overall_statistics(records: Sequence) -> OverallStatistics:
    """Totals and averages across every saved month"""
    records = list(records)
    if not records:
        return OverallStatistics()

    count = len(records)
    total_net = sum((r.net_salary for r in records), Decimal('0'))
    total_tax = sum((r.personal_income_tax for r in records), Decimal('0'))
    total_insurance = sum((r.total_insurance for r in records), Decimal('0'))

    return OverallStatistics(
        record_count=count,
        total_net_salary=total_net,
        total_tax=total_tax,
        total_insurance=total_insurance,
        avg_net_salary=total_net / count,
        avg_tax=total_tax / count,
        avg_insurance=total_insurance / count
    )


def trend_summary(records: Sequence) -> Optional[TrendSummary]:
    """Net pay range and the change between the two latest months"""
    records = sorted(records, key=_period_key)
    if not records:
        return None

    net_salaries = [r.net_salary for r in records]
    total_net = sum(net_salaries, Decimal('0'))

    change_percent = Decimal('0')
    if len(records) >= 2:
        latest, previous = net_salaries[-1], net_salaries[-2]
        if previous > 0:
            change_percent = (latest - previous) / previous * 100

    if change_percent > 0:
        direction = 'up'
    elif change_percent < 0:
        direction = 'down'
    else:
        direction = 'same'

    return TrendSummary(
        avg_net=total_net / len(net_salaries),
        max_net=max(net_salaries),
        min_net=min(net_salaries),
        total_net=total_net,
        change_percent=abs(change_percent),
        change_direction=direction
    )


def available_years(records) -> List[int]:
    """Distinct years, newest first"""
    return sorted({r.year_month.year for r in records}, reverse=True)
