import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Tuple

from models.salary import (
    SalaryInput, SalaryResult, MonthlyTaxRecord, TaxBracket, YearMonth, Composition
)
from processors.contribution_calculator import compute_contributions
from utils.rounding import round_amount
from config.settings import TAX_BRACKETS, TAX_THRESHOLD, UNION_FEE_RATE

logger = logging.getLogger(__name__)

BRACKETS: Tuple[TaxBracket, ...] = tuple(
    TaxBracket(upper_limit=limit, rate=rate, quick_deduction=deduction)
    for limit, rate, deduction in TAX_BRACKETS
)


@dataclass
class CumulativeTax:
    """Year-to-date withholding figures for one month"""
    accumulated_taxable_income: Decimal
    tax_rate: Decimal
    quick_deduction: Decimal
    accumulated_tax: Decimal
    tax_paid_before: Decimal
    current_month_tax: Decimal


def find_bracket(amount: Decimal, brackets: Sequence[TaxBracket] = BRACKETS) -> TaxBracket:
    """First bracket whose ceiling covers the amount; a value on a boundary stays in the lower bracket"""
    for bracket in brackets:
        if bracket.covers(amount):
            return bracket
    return brackets[-1]


def accumulate_history(history: Iterable[MonthlyTaxRecord],
                       year_month: YearMonth) -> Tuple[Decimal, Decimal]:
    """Sum taxable income and tax paid for earlier months of the same year.

    Records from other years and from the same or later months are ignored.
    Two records for the same month are both counted; keeping one record per
    month is the storage layer's job.
    """
    taxable_income = Decimal('0')
    tax_paid = Decimal('0')
    for record in history:
        if record.year_month.year != year_month.year:
            continue
        if record.year_month.month < year_month.month:
            taxable_income += record.taxable_income
            tax_paid += record.tax_paid
    return taxable_income, tax_paid


def compute_cumulative_tax(monthly_taxable_income: Decimal,
                           history: Iterable[MonthlyTaxRecord],
                           year_month: YearMonth,
                           precision: int = 0) -> CumulativeTax:
    """Withhold this month's share of the year-to-date liability.

    The current month is never negative: when the year-to-date liability drops
    below what was already withheld, nothing is refunded and the month owes 0.
    """
    prior_income, tax_paid_before = accumulate_history(history, year_month)
    accumulated_taxable_income = monthly_taxable_income + prior_income

    bracket = find_bracket(accumulated_taxable_income)
    accumulated_tax = round_amount(
        accumulated_taxable_income * bracket.rate - bracket.quick_deduction, precision
    )
    current_month_tax = round_amount(max(Decimal('0'), accumulated_tax - tax_paid_before), precision)

    return CumulativeTax(
        accumulated_taxable_income=accumulated_taxable_income,
        tax_rate=bracket.rate,
        quick_deduction=bracket.quick_deduction,
        accumulated_tax=accumulated_tax,
        tax_paid_before=tax_paid_before,
        current_month_tax=current_month_tax
    )


def compute_salary(salary_input: SalaryInput,
                   history: Optional[Iterable[MonthlyTaxRecord]] = None,
                   precision: int = 0) -> SalaryResult:
    """Compute take-home pay for one month under cumulative withholding"""
    history = list(history or [])

    contributions = compute_contributions(
        salary_input.social_security_base,
        salary_input.housing_fund_rate,
        salary_input.enable_enterprise_annuity,
        precision
    )
    personal = contributions.personal
    total_insurance = personal.total

    gross_salary = salary_input.gross_salary

    monthly_taxable_income = max(
        Decimal('0'),
        gross_salary - TAX_THRESHOLD - total_insurance - salary_input.special_deduction
    )

    tax = compute_cumulative_tax(monthly_taxable_income, history, salary_input.year_month, precision)

    # Union fee is taken after tax
    if salary_input.enable_union_fee:
        union_fee = round_amount(salary_input.base_salary * UNION_FEE_RATE, precision)
    else:
        union_fee = Decimal('0')

    net_salary = gross_salary - total_insurance - tax.current_month_tax - union_fee

    logger.debug(
        "Computed %s: gross=%s taxable=%s accumulated=%s tax=%s net=%s",
        salary_input.year_month, gross_salary, monthly_taxable_income,
        tax.accumulated_taxable_income, tax.current_month_tax, net_salary
    )

    return SalaryResult(
        base_salary=salary_input.base_salary,
        social_security_base=salary_input.social_security_base,
        special_deduction=salary_input.special_deduction,
        quarterly_bonus=salary_input.quarterly_bonus,
        performance_bonus=salary_input.performance_bonus,
        year_end_bonus=salary_input.year_end_bonus,
        housing_fund_rate=salary_input.housing_fund_rate,
        enable_enterprise_annuity=salary_input.enable_enterprise_annuity,
        enable_union_fee=salary_input.enable_union_fee,
        year_month=salary_input.year_month,
        gross_salary=gross_salary,
        social_insurance=personal.social_insurance,
        housing_fund=personal.housing_fund,
        enterprise_annuity_amount=personal.enterprise_annuity,
        total_insurance=total_insurance,
        monthly_taxable_income=monthly_taxable_income,
        accumulated_taxable_income=tax.accumulated_taxable_income,
        tax_rate=tax.tax_rate,
        quick_deduction=tax.quick_deduction,
        accumulated_tax=tax.accumulated_tax,
        tax_paid_before=tax.tax_paid_before,
        personal_income_tax=tax.current_month_tax,
        union_fee=union_fee,
        net_salary=net_salary,
        contributions=contributions,
        composition=Composition(
            net_salary=net_salary,
            tax=tax.current_month_tax,
            insurance=total_insurance,
            union_fee=union_fee
        )
    )
