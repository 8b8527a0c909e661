from .db import engine, SessionLocal, Base, init_db
from .models import SalaryRecordDB, AppSettingDB
from .repository import SalaryRecordRepository

__all__ = [
    'engine',
    'SessionLocal',
    'Base',
    'init_db',
    'SalaryRecordDB',
    'AppSettingDB',
    'SalaryRecordRepository'
]
