import logging
import uuid
from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import List, Optional
from datetime import datetime
from .models import SalaryRecordDB, AppSettingDB
from models.salary import SalaryResult, MonthlyTaxRecord
from config.settings import DEFAULT_PRECISION
from utils.validators import validate_precision

logger = logging.getLogger(__name__)

PRECISION_KEY = 'precision'


class SalaryRecordRepository:
    """Repository for saved salary months and settings"""

    def __init__(self, db_session: Session):
        self.db = db_session

    # ========== Salary Record Operations ==========

    def save_record(self, result: SalaryResult) -> SalaryRecordDB:
        """Save a computed month, replacing any record for the same year and month"""
        year, month = result.year_month.year, result.year_month.month

        existing = self.get_record(year, month)
        if existing:
            logger.info("Replacing salary record %s for %s", existing.id, result.year_month)
            self.db.delete(existing)
            self.db.flush()

        record = SalaryRecordDB(
            id=uuid.uuid4().hex,
            year=year,
            month=month,
            base_salary=result.base_salary,
            social_security_base=result.social_security_base,
            special_deduction=result.special_deduction,
            quarterly_bonus=result.quarterly_bonus,
            performance_bonus=result.performance_bonus,
            year_end_bonus=result.year_end_bonus,
            housing_fund_rate=result.housing_fund_rate,
            enterprise_annuity=result.enterprise_annuity_amount,
            union_fee=result.union_fee,
            total_insurance=result.total_insurance,
            gross_salary=result.gross_salary,
            net_salary=result.net_salary,
            monthly_taxable_income=result.monthly_taxable_income,
            accumulated_taxable_income=result.accumulated_taxable_income,
            personal_income_tax=result.personal_income_tax,
            tax_paid_before=result.tax_paid_before,
            created_at=datetime.utcnow()
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Saved salary record %s for %s", record.id, result.year_month)
        return record

    def get_record(self, year: int, month: int) -> Optional[SalaryRecordDB]:
        """Get the record for a specific month"""
        return self.db.query(SalaryRecordDB).filter(
            and_(
                SalaryRecordDB.year == year,
                SalaryRecordDB.month == month
            )
        ).first()

    def get_record_by_id(self, record_id: str) -> Optional[SalaryRecordDB]:
        return self.db.query(SalaryRecordDB).filter_by(id=record_id).first()

    def get_records(self, year: Optional[int] = None) -> List[SalaryRecordDB]:
        """Get saved records, most recently saved first"""
        query = self.db.query(SalaryRecordDB)
        if year:
            query = query.filter_by(year=year)
        return query.order_by(
            SalaryRecordDB.created_at.desc(),
            SalaryRecordDB.year.desc(),
            SalaryRecordDB.month.desc()
        ).all()

    def get_history(self) -> List[MonthlyTaxRecord]:
        """Taxable income and tax paid of every saved month"""
        return [
            MonthlyTaxRecord(
                year_month=r.year_month,
                taxable_income=r.monthly_taxable_income,
                tax_paid=r.personal_income_tax
            )
            for r in self.get_records()
        ]

    def delete_record(self, record_id: str) -> bool:
        """Delete one record, False if it does not exist"""
        record = self.get_record_by_id(record_id)
        if not record:
            return False
        self.db.delete(record)
        self.db.commit()
        logger.info("Deleted salary record %s", record_id)
        return True

    def clear_records(self) -> int:
        """Delete every record, return how many were removed"""
        count = self.db.query(SalaryRecordDB).delete()
        self.db.commit()
        logger.info("Cleared %d salary records", count)
        return count

    # ========== Settings Operations ==========

    def get_precision(self) -> int:
        """Stored display precision, or the configured default"""
        setting = self.db.query(AppSettingDB).filter_by(key=PRECISION_KEY).first()
        if not setting:
            return DEFAULT_PRECISION
        return int(setting.value)

    def set_precision(self, precision: int) -> int:
        if not validate_precision(precision):
            raise ValueError(f"Precision must be 0, 1 or 2, got {precision!r}")

        setting = self.db.query(AppSettingDB).filter_by(key=PRECISION_KEY).first()
        if not setting:
            setting = AppSettingDB(key=PRECISION_KEY, value=str(precision))
            self.db.add(setting)
        else:
            setting.value = str(precision)
        self.db.commit()
        return precision
