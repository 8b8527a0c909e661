from dataclasses import dataclass
from typing import Optional
from decimal import Decimal, ROUND_HALF_UP

from config.settings import DEFAULT_HOUSING_FUND_RATE


def to_decimal(value) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal without binary float noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


CENT = Decimal('0.01')
RATE_QUANTUM = Decimal('0.0001')


def to_money(value) -> Decimal:
    """Decimal amount in whole cents, half up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, order=True)
class YearMonth:
    """Calendar period a salary belongs to"""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @property
    def label(self) -> str:
        return f"{self.year}年{self.month}月"

    def __str__(self):
        return f"{self.year}-{self.month:02d}"


@dataclass(frozen=True)
class TaxBracket:
    """One row of the progressive table; upper_limit None means unbounded"""
    upper_limit: Optional[Decimal]
    rate: Decimal
    quick_deduction: Decimal

    def covers(self, amount: Decimal) -> bool:
        return self.upper_limit is None or amount <= self.upper_limit


@dataclass
class SalaryInput:
    """One month's raw compensation facts"""
    base_salary: Decimal
    social_security_base: Decimal
    year_month: YearMonth
    quarterly_bonus: Decimal = Decimal('0')
    performance_bonus: Decimal = Decimal('0')
    year_end_bonus: Decimal = Decimal('0')
    special_deduction: Decimal = Decimal('0')
    enable_enterprise_annuity: bool = False
    enable_union_fee: bool = True
    housing_fund_rate: Decimal = DEFAULT_HOUSING_FUND_RATE

    def __post_init__(self):
        # Amounts are kept in cents and the rate in basis points, as stored
        for name in ('base_salary', 'social_security_base', 'quarterly_bonus',
                     'performance_bonus', 'year_end_bonus', 'special_deduction'):
            setattr(self, name, to_money(getattr(self, name)))
        self.housing_fund_rate = to_decimal(self.housing_fund_rate).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)

    @property
    def gross_salary(self) -> Decimal:
        return self.base_salary + self.quarterly_bonus + self.performance_bonus + self.year_end_bonus


@dataclass(frozen=True)
class MonthlyTaxRecord:
    """What a later month needs to know about an earlier one"""
    year_month: YearMonth
    taxable_income: Decimal
    tax_paid: Decimal


@dataclass
class ContributionSet:
    """Statutory insurance and housing fund line items"""
    pension: Decimal = Decimal('0')
    medical: Decimal = Decimal('0')
    unemployment: Decimal = Decimal('0')
    work_injury: Decimal = Decimal('0')
    maternity: Decimal = Decimal('0')
    housing_fund: Decimal = Decimal('0')
    enterprise_annuity: Decimal = Decimal('0')

    @property
    def social_insurance(self) -> Decimal:
        return self.pension + self.medical + self.unemployment + self.work_injury + self.maternity

    @property
    def total(self) -> Decimal:
        return self.social_insurance + self.housing_fund + self.enterprise_annuity


@dataclass
class Contributions:
    personal: ContributionSet
    employer: ContributionSet


@dataclass
class Composition:
    """Where the gross salary goes"""
    net_salary: Decimal
    tax: Decimal
    insurance: Decimal
    union_fee: Decimal


@dataclass
class SalaryResult:
    """Complete computation for one month"""
    # Echoed input
    base_salary: Decimal
    social_security_base: Decimal
    special_deduction: Decimal
    quarterly_bonus: Decimal
    performance_bonus: Decimal
    year_end_bonus: Decimal
    housing_fund_rate: Decimal
    enable_enterprise_annuity: bool
    enable_union_fee: bool
    year_month: YearMonth

    # Pay and deductions
    gross_salary: Decimal
    social_insurance: Decimal
    housing_fund: Decimal
    enterprise_annuity_amount: Decimal
    total_insurance: Decimal

    # Cumulative withholding
    monthly_taxable_income: Decimal
    accumulated_taxable_income: Decimal
    tax_rate: Decimal
    quick_deduction: Decimal
    accumulated_tax: Decimal
    tax_paid_before: Decimal
    personal_income_tax: Decimal

    union_fee: Decimal
    net_salary: Decimal

    contributions: Contributions
    composition: Composition


@dataclass(frozen=True)
class YearlyTaxEntry:
    """Per-month facts the yearly summary reduces over"""
    year_month: YearMonth
    taxable_income: Decimal
    tax_paid: Decimal
    net_salary: Decimal
