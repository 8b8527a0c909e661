"""
Shared fixtures for the salary ledger tests.

sys.path gets both the project root (for config) and src/ (for the
packages) so the tests run from a plain checkout as well as an install.
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent

for _path in (_project_root, _project_root / 'src'):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

import pytest
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database.db import init_db
from database.repository import SalaryRecordRepository
from models.salary import SalaryInput, YearMonth
from processors.salary_ledger import SalaryLedger


@pytest.fixture
def db_session():
    """Fresh in-memory database per test"""
    engine = create_engine("sqlite://")
    init_db(engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def repo(db_session):
    return SalaryRecordRepository(db_session)


@pytest.fixture
def ledger(repo, tmp_path):
    return SalaryLedger(repo, output_dir=tmp_path)


@pytest.fixture
def make_input():
    """Build a SalaryInput with the default form values"""
    def _make(year=2024, month=1, **overrides):
        values = dict(
            base_salary=Decimal('10000'),
            social_security_base=Decimal('15000'),
            housing_fund_rate=Decimal('0.12'),
            enable_union_fee=True,
            year_month=YearMonth(year, month),
        )
        values.update(overrides)
        return SalaryInput(**values)
    return _make
