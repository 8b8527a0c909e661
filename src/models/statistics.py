from dataclasses import dataclass
from decimal import Decimal


@dataclass
class YearlySummary:
    """Totals and monthly averages for one calendar year"""
    year: int
    total_months: int = 0
    total_taxable_income: Decimal = Decimal('0')
    total_tax_paid: Decimal = Decimal('0')
    total_net_salary: Decimal = Decimal('0')
    avg_taxable_income: Decimal = Decimal('0')
    avg_tax_paid: Decimal = Decimal('0')


@dataclass
class OverallStatistics:
    record_count: int = 0
    total_net_salary: Decimal = Decimal('0')
    total_tax: Decimal = Decimal('0')
    total_insurance: Decimal = Decimal('0')
    avg_net_salary: Decimal = Decimal('0')
    avg_tax: Decimal = Decimal('0')
    avg_insurance: Decimal = Decimal('0')


@dataclass
class TrendPoint:
    """One month on the salary trend chart"""
    label: str
    net_salary: Decimal
    gross_salary: Decimal
    tax: Decimal
    insurance: Decimal


@dataclass
class TrendSummary:
    avg_net: Decimal
    max_net: Decimal
    min_net: Decimal
    total_net: Decimal
    change_percent: Decimal
    change_direction: str  # 'up', 'down', 'same'
