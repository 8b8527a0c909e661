from decimal import Decimal

import openpyxl

from main import build_parser, run


def test_saved_months_feed_later_months(ledger, make_input):
    january = ledger.calculate(make_input(month=1, base_salary=Decimal('18375')))
    ledger.save(january)

    february = ledger.calculate(make_input(month=2, base_salary=Decimal('18375')))

    assert january.personal_income_tax == Decimal('300')
    assert february.accumulated_taxable_income == Decimal('20000')
    assert february.tax_paid_before == Decimal('300')
    assert february.personal_income_tax == Decimal('300')


def test_new_year_starts_from_zero(ledger, make_input):
    ledger.save(ledger.calculate(make_input(year=2023, month=12, base_salary=Decimal('50000'))))

    january = ledger.calculate(make_input(year=2024, month=1))

    assert january.accumulated_taxable_income == Decimal('1625')
    assert january.tax_paid_before == 0


def test_resaving_a_month_does_not_double_count(ledger, make_input):
    ledger.save(ledger.calculate(make_input(month=1)))
    ledger.save(ledger.calculate(make_input(month=1)))

    february = ledger.calculate(make_input(month=2))

    assert february.accumulated_taxable_income == Decimal('3250')


def test_stored_precision_is_used(ledger, make_input):
    ledger.set_precision(2)

    result = ledger.calculate(make_input())

    assert result.personal_income_tax == Decimal('48.75')


def test_statistics(ledger, make_input):
    for month in (1, 2, 3):
        ledger.save(ledger.calculate(make_input(month=month)))

    yearly = ledger.yearly_statistics(2024)
    overall = ledger.overall_statistics()

    assert yearly.total_months == 3
    assert yearly.total_taxable_income == Decimal('4875')
    assert overall.record_count == 3
    assert overall.total_insurance == Decimal('10125')
    assert [p.label for p in ledger.trend()] == ['2024年1月', '2024年2月', '2024年3月']
    # Third month withholds 48 after rounding
    assert ledger.trend_summary().change_direction == 'up'
    assert ledger.available_years() == [2024]


def test_exports(ledger, make_input, tmp_path):
    ledger.save(ledger.calculate(make_input(month=1)))
    ledger.save(ledger.calculate(make_input(month=2)))

    csv_path = ledger.export_csv('records.csv')
    xlsx_path = ledger.export_excel(2024)

    lines = (tmp_path / 'csv' / 'records.csv').read_text(encoding='utf-8').split('\n')
    assert csv_path.endswith('records.csv')
    assert len(lines) == 3
    assert openpyxl.load_workbook(xlsx_path).sheetnames == ['工资记录', '年度统计']


def test_delete_and_clear(ledger, make_input):
    record = ledger.save(ledger.calculate(make_input(month=1)))
    ledger.save(ledger.calculate(make_input(month=2)))

    assert ledger.delete(record.id)
    assert len(ledger.records()) == 1
    assert ledger.clear() == 1


# ========== Command line ==========

def test_cli_calc_and_save(ledger, capsys):
    args = build_parser().parse_args([
        'calc', '--year', '2024', '--month', '1',
        '--base-salary', '10000', '--social-security-base', '15000', '--save'
    ])

    assert run(args, ledger) == 0

    out = capsys.readouterr().out
    assert '2024年1月' in out
    assert '6,526' in out
    assert ledger.records()[0].net_salary == Decimal('6526')


def test_cli_sanitizes_bad_amounts(ledger, capsys):
    args = build_parser().parse_args([
        'calc', '--year', '2024', '--month', '3',
        '--base-salary', '10000', '--social-security-base', '15000',
        '--quarterly-bonus', 'abc', '--special-deduction', '-200'
    ])

    run(args, ledger)

    assert '6,526' in capsys.readouterr().out


def test_cli_precision(ledger, capsys):
    run(build_parser().parse_args(['precision', '2']), ledger)
    run(build_parser().parse_args(['precision']), ledger)

    assert capsys.readouterr().out.strip() == '2'


def test_sub_cent_month_feeds_next_month_unchanged(ledger, make_input):
    ledger.set_precision(2)
    january = ledger.calculate(make_input(month=1, base_salary='10000.125'))
    ledger.save(january)

    february = ledger.calculate(make_input(month=2, base_salary='10000.125'))

    assert january.monthly_taxable_income == Decimal('1625.13')
    assert february.accumulated_taxable_income == Decimal('3250.26')
    assert february.tax_paid_before == january.personal_income_tax
