from decimal import Decimal

import pytest

from processors.contribution_calculator import compute_contributions


def test_personal_contributions_default_case():
    contributions = compute_contributions(Decimal('15000'), Decimal('0.12'), False, 0)
    personal = contributions.personal

    assert personal.pension == Decimal('1200')
    assert personal.medical == Decimal('300')
    assert personal.unemployment == Decimal('75')
    assert personal.work_injury == 0
    assert personal.maternity == 0
    assert personal.housing_fund == Decimal('1800')
    assert personal.enterprise_annuity == 0
    assert personal.total == Decimal('3375')
    assert personal.social_insurance == Decimal('1575')


def test_employer_contributions_with_annuity():
    employer = compute_contributions(Decimal('15000'), Decimal('0.12'), True, 0).employer

    assert employer.pension == Decimal('2400')
    assert employer.medical == Decimal('1500')
    assert employer.unemployment == Decimal('75')
    assert employer.work_injury == Decimal('60')
    assert employer.maternity == Decimal('120')
    assert employer.housing_fund == Decimal('1800')
    assert employer.enterprise_annuity == Decimal('1200')


def test_personal_annuity_is_two_percent():
    personal = compute_contributions(Decimal('15000'), Decimal('0.12'), True, 0).personal

    assert personal.enterprise_annuity == Decimal('300')
    assert personal.total == Decimal('3675')


def test_each_line_is_rounded_before_summing():
    # 12 + 3 + 0.75 + 10.5 would round to 26 as a whole
    personal = compute_contributions(Decimal('150'), Decimal('0.07'), False, 0).personal

    assert personal.unemployment == Decimal('1')
    assert personal.housing_fund == Decimal('11')
    assert personal.total == Decimal('27')


@pytest.mark.parametrize("precision, expected", [
    (0, Decimal('75')),
    (1, Decimal('75.1')),
    (2, Decimal('75.05')),
])
def test_precision_applies_per_line(precision, expected):
    personal = compute_contributions(Decimal('15010'), Decimal('0.12'), False, precision).personal

    assert personal.unemployment == expected


def test_accepts_plain_numbers():
    personal = compute_contributions(15000, 0.12, False).personal

    assert personal.housing_fund == Decimal('1800')


def test_zero_base_gives_zero_lines():
    contributions = compute_contributions(Decimal('0'), Decimal('0.05'), True, 2)

    assert contributions.personal.total == 0
    assert contributions.employer.total == 0
