from decimal import Decimal

import openpyxl
import pytest

from processors.csv_exporter import export_to_csv, CsvExporter, CSV_HEADERS
from processors.excel_exporter import ExcelExporter
from factories import make_record


def test_csv_has_header_and_one_line_per_record():
    records = [make_record(2024, 2, '6526.25', tax='48.75'), make_record(2024, 1, '6526', tax='49')]

    text = export_to_csv(records)

    assert text.startswith('\ufeff')
    lines = text[1:].split('\n')
    assert len(lines) == 3
    assert lines[0].split(',') == CSV_HEADERS
    # Caller order is kept
    assert lines[1].startswith('2024年2月,')
    assert lines[2].startswith('2024年1月,')


def test_csv_values_parse_back_to_record_fields():
    record = make_record(2024, 2, '6526.25', tax='48.75')

    columns = export_to_csv([record])[1:].split('\n')[1].split(',')

    assert columns[0] == '2024年2月'
    fields = ['base_salary', 'gross_salary', 'total_insurance', 'personal_income_tax', 'union_fee', 'net_salary']
    for value, name in zip(columns[1:], fields):
        assert Decimal(value) == getattr(record, name)


def test_csv_without_records_is_header_only():
    assert export_to_csv([]) == '\ufeff' + ','.join(CSV_HEADERS)


def test_csv_exporter_writes_file(tmp_path):
    exporter = CsvExporter(tmp_path)

    path = exporter.write([make_record(2024, 1, '6526')], 'records.csv')

    content = (tmp_path / 'records.csv').read_text(encoding='utf-8')
    assert path == str(tmp_path / 'records.csv')
    assert content.count('\n') == 1


def test_csv_exporter_refuses_empty(tmp_path):
    with pytest.raises(ValueError):
        CsvExporter(tmp_path).write([])


def test_excel_workbook_has_records_and_summary(tmp_path):
    records = [
        make_record(2024, 2, '6000'),
        make_record(2024, 1, '7000'),
        make_record(2023, 12, '5000'),
    ]

    path = ExcelExporter(tmp_path).generate(records)

    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ['工资记录', '年度统计']

    ws = wb['工资记录']
    assert [c.value for c in ws[1]] == CSV_HEADERS
    assert ws['A2'].value == '2023年12月'
    assert ws['A4'].value == '2024年2月'
    assert ws['A5'].value == '合计'
    assert ws['G5'].value == 18000

    summary = wb['年度统计']
    assert summary['A2'].value == 2023
    assert summary['A3'].value == 2024
    assert summary['B3'].value == 2


def test_excel_year_filter(tmp_path):
    records = [make_record(2024, 1, '7000'), make_record(2023, 12, '5000')]

    path = ExcelExporter(tmp_path).generate(records, year=2024)

    ws = openpyxl.load_workbook(path)['工资记录']
    assert ws['A2'].value == '2024年1月'
    assert ws['A3'].value == '合计'
    assert path.endswith('salary_records_2024.xlsx')


def test_excel_year_without_records(tmp_path):
    with pytest.raises(ValueError):
        ExcelExporter(tmp_path).generate([make_record(2024, 1, '7000')], year=2020)
