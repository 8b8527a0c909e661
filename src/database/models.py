from sqlalchemy import Column, Integer, String, Numeric, DateTime, UniqueConstraint
from datetime import datetime
from models.salary import YearMonth
from .db import Base


class SalaryRecordDB(Base):
    """Saved monthly salary computation, one per (year, month)"""
    __tablename__ = "salary_records"
    __table_args__ = (
        UniqueConstraint('year', 'month', name='uq_salary_records_period'),
    )

    id = Column(String(32), primary_key=True)

    # Period information
    year = Column(Integer, nullable=False, index=True)
    month = Column(Integer, nullable=False)

    # Input echo
    base_salary = Column(Numeric(14, 2), nullable=False)
    social_security_base = Column(Numeric(14, 2), nullable=False)
    special_deduction = Column(Numeric(14, 2), default=0)
    quarterly_bonus = Column(Numeric(14, 2), default=0)
    performance_bonus = Column(Numeric(14, 2), default=0)
    year_end_bonus = Column(Numeric(14, 2), default=0)
    housing_fund_rate = Column(Numeric(6, 4), nullable=False)

    # Deductions
    enterprise_annuity = Column(Numeric(14, 2), default=0)
    union_fee = Column(Numeric(14, 2), default=0)
    total_insurance = Column(Numeric(14, 2), nullable=False)

    # Financial totals
    gross_salary = Column(Numeric(14, 2), nullable=False)
    net_salary = Column(Numeric(14, 2), nullable=False)

    # Cumulative withholding
    monthly_taxable_income = Column(Numeric(14, 2), nullable=False)
    accumulated_taxable_income = Column(Numeric(14, 2), nullable=False)
    personal_income_tax = Column(Numeric(14, 2), nullable=False)
    tax_paid_before = Column(Numeric(14, 2), default=0)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)

    @property
    def year_month(self) -> YearMonth:
        return YearMonth(self.year, self.month)

    @property
    def month_label(self) -> str:
        return self.year_month.label

    def __repr__(self):
        return f"<SalaryRecord(id={self.id}, period={self.year}-{self.month:02d}, net={self.net_salary})>"


class AppSettingDB(Base):
    """Key/value application settings"""
    __tablename__ = "app_settings"

    key = Column(String(50), primary_key=True)
    value = Column(String(255), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<AppSetting(key={self.key}, value={self.value})>"
