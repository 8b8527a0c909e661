from decimal import Decimal

from models.salary import ContributionSet, Contributions, to_decimal
from utils.rounding import round_amount
from config.settings import PERSONAL_RATES, EMPLOYER_RATES, ANNUITY_RATES


def compute_contributions(base: Decimal, housing_fund_rate: Decimal,
                          include_annuity: bool, precision: int = 0) -> Contributions:
    """Compute personal and employer insurance, housing fund and annuity.

    Each line item is rounded right after multiplication, so totals are sums
    of rounded amounts and match the figures shown line by line.
    """
    base = to_decimal(base)
    housing_fund_rate = to_decimal(housing_fund_rate)

    def line(rate: Decimal) -> Decimal:
        return round_amount(base * rate, precision)

    personal = ContributionSet(
        pension=line(PERSONAL_RATES['pension']),
        medical=line(PERSONAL_RATES['medical']),
        unemployment=line(PERSONAL_RATES['unemployment']),
        work_injury=Decimal('0'),
        maternity=Decimal('0'),
        housing_fund=line(housing_fund_rate),
        enterprise_annuity=line(ANNUITY_RATES['personal']) if include_annuity else Decimal('0')
    )

    employer = ContributionSet(
        pension=line(EMPLOYER_RATES['pension']),
        medical=line(EMPLOYER_RATES['medical']),
        unemployment=line(EMPLOYER_RATES['unemployment']),
        work_injury=line(EMPLOYER_RATES['work_injury']),
        maternity=line(EMPLOYER_RATES['maternity']),
        housing_fund=line(housing_fund_rate),
        enterprise_annuity=line(ANNUITY_RATES['employer']) if include_annuity else Decimal('0')
    )

    return Contributions(personal=personal, employer=employer)
