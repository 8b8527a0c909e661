import argparse
import logging
import sys
from config.settings import LOG_LEVEL, DEFAULT_HOUSING_FUND_RATE
from database.db import init_db, SessionLocal
from database.repository import SalaryRecordRepository
from models.salary import SalaryInput, YearMonth
from processors.salary_ledger import SalaryLedger
from utils.formatters import format_money, format_percent
from utils.validators import sanitize_amount, validate_housing_fund_rate, validate_year_month

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='salary-ledger',
        description='Monthly take-home pay under cumulative tax withholding'
    )
    sub = parser.add_subparsers(dest='command', required=True)

    calc = sub.add_parser('calc', help='Calculate one month')
    calc.add_argument('--year', type=int, required=True)
    calc.add_argument('--month', type=int, required=True)
    calc.add_argument('--base-salary', required=True)
    calc.add_argument('--social-security-base', required=True)
    calc.add_argument('--quarterly-bonus')
    calc.add_argument('--performance-bonus')
    calc.add_argument('--year-end-bonus')
    calc.add_argument('--special-deduction')
    calc.add_argument('--housing-fund-rate', default=str(DEFAULT_HOUSING_FUND_RATE))
    calc.add_argument('--annuity', action='store_true', help='Enterprise annuity')
    calc.add_argument('--no-union-fee', action='store_true')
    calc.add_argument('--save', action='store_true', help='Save the result, replacing the same month')

    sub.add_parser('list', help='List saved months')

    delete = sub.add_parser('delete', help='Delete a saved month')
    delete.add_argument('record_id')

    sub.add_parser('clear', help='Delete every saved month')

    stats = sub.add_parser('stats', help='Show statistics')
    stats.add_argument('--year', type=int)

    sub.add_parser('trend', help='Show net pay trend')

    export = sub.add_parser('export', help='Export saved months')
    export.add_argument('--format', choices=['csv', 'xlsx'], default='csv')
    export.add_argument('--year', type=int, help='Only this year (xlsx)')

    precision = sub.add_parser('precision', help='Show or set display precision')
    precision.add_argument('value', type=int, nargs='?', choices=[0, 1, 2])

    return parser


def read_input(args) -> SalaryInput:
    """Turn command-line strings into a clean SalaryInput"""
    if not validate_year_month(args.year, args.month):
        raise ValueError(f"Invalid period {args.year}-{args.month}")

    housing_fund_rate = sanitize_amount(args.housing_fund_rate)
    if not validate_housing_fund_rate(housing_fund_rate):
        logger.warning("Housing fund rate %s is outside the 5%%-12%% policy range", housing_fund_rate)

    return SalaryInput(
        base_salary=sanitize_amount(args.base_salary),
        social_security_base=sanitize_amount(args.social_security_base),
        quarterly_bonus=sanitize_amount(args.quarterly_bonus),
        performance_bonus=sanitize_amount(args.performance_bonus),
        year_end_bonus=sanitize_amount(args.year_end_bonus),
        special_deduction=sanitize_amount(args.special_deduction),
        enable_enterprise_annuity=args.annuity,
        enable_union_fee=not args.no_union_fee,
        housing_fund_rate=housing_fund_rate,
        year_month=YearMonth(args.year, args.month)
    )


def print_result(result, precision: int):
    def money(amount):
        return format_money(amount, precision)

    print("=" * 60)
    print(f"  {result.year_month.label}")
    print("=" * 60)
    print(f"  应发工资          {money(result.gross_salary):>16}")
    print(f"  五险一金/二金     {money(result.total_insurance):>16}")
    print(f"  当月应纳税所得额  {money(result.monthly_taxable_income):>16}")
    print(f"  累计应纳税所得额  {money(result.accumulated_taxable_income):>16}")
    print(f"  税率 / 速算扣除数 {format_percent(result.tax_rate):>8} / {money(result.quick_deduction)}")
    print(f"  累计应纳税额      {money(result.accumulated_tax):>16}")
    print(f"  已预扣税额        {money(result.tax_paid_before):>16}")
    print(f"  个人所得税        {money(result.personal_income_tax):>16}")
    print(f"  工会费            {money(result.union_fee):>16}")
    print(f"  实发工资          {money(result.net_salary):>16}")
    print("=" * 60)


def run(args, ledger: SalaryLedger) -> int:
    precision = ledger.precision

    if args.command == 'calc':
        result = ledger.calculate(read_input(args))
        print_result(result, precision)
        if args.save:
            record = ledger.save(result)
            print(f"Saved as {record.id}")

    elif args.command == 'list':
        for r in ledger.records():
            print(f"{r.id}  {r.month_label:<10} gross {format_money(r.gross_salary, precision):>12}"
                  f"  tax {format_money(r.personal_income_tax, precision):>10}"
                  f"  net {format_money(r.net_salary, precision):>12}")

    elif args.command == 'delete':
        if not ledger.delete(args.record_id):
            raise ValueError(f"Salary record {args.record_id} not found")

    elif args.command == 'clear':
        print(f"Removed {ledger.clear()} records")

    elif args.command == 'stats':
        if args.year:
            s = ledger.yearly_statistics(args.year)
            print(f"{s.year}: {s.total_months} months, taxable {format_money(s.total_taxable_income, precision)}, "
                  f"tax {format_money(s.total_tax_paid, precision)}, net {format_money(s.total_net_salary, precision)}, "
                  f"avg tax {format_money(s.avg_tax_paid, precision)}")
        else:
            s = ledger.overall_statistics()
            print(f"{s.record_count} months, net {format_money(s.total_net_salary, precision)}, "
                  f"tax {format_money(s.total_tax, precision)}, insurance {format_money(s.total_insurance, precision)}, "
                  f"avg net {format_money(s.avg_net_salary, precision)}")

    elif args.command == 'trend':
        for point in ledger.trend():
            print(f"{point.label:<10} net {format_money(point.net_salary, precision):>12}"
                  f"  tax {format_money(point.tax, precision):>10}")
        summary = ledger.trend_summary()
        if summary:
            print(f"avg {format_money(summary.avg_net, precision)}, max {format_money(summary.max_net, precision)}, "
                  f"min {format_money(summary.min_net, precision)}, "
                  f"change {summary.change_percent:.1f}% {summary.change_direction}")

    elif args.command == 'export':
        if args.format == 'xlsx':
            print(ledger.export_excel(args.year))
        else:
            print(ledger.export_csv())

    elif args.command == 'precision':
        if args.value is None:
            print(precision)
        else:
            ledger.set_precision(args.value)

    return 0


def main(argv=None) -> int:
    """Main entry point for the salary ledger"""
    args = build_parser().parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        return run(args, SalaryLedger(SalaryRecordRepository(db)))
    except ValueError as e:
        logger.error(str(e))
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
