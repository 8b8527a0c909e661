import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Paths
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", BASE_DIR / "output"))

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'salary.db'}")

# Application settings
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Display precision (fraction digits) used when nothing is stored yet
DEFAULT_PRECISION = int(os.getenv("DEFAULT_PRECISION", "0"))
SUPPORTED_PRECISIONS = (0, 1, 2)

# Individual income tax settings (cumulative withholding, 2024 table)
TAX_THRESHOLD = Decimal('5000')

# (upper limit of accumulated taxable income, rate, quick deduction)
# None means unbounded
TAX_BRACKETS = (
    (Decimal('36000'), Decimal('0.03'), Decimal('0')),
    (Decimal('144000'), Decimal('0.10'), Decimal('2520')),
    (Decimal('300000'), Decimal('0.20'), Decimal('16920')),
    (Decimal('420000'), Decimal('0.25'), Decimal('31920')),
    (Decimal('660000'), Decimal('0.30'), Decimal('52920')),
    (Decimal('960000'), Decimal('0.35'), Decimal('85920')),
    (None, Decimal('0.45'), Decimal('181920')),
)

# Social insurance, personal share
PERSONAL_RATES = {
    'pension': Decimal('0.08'),
    'medical': Decimal('0.02'),
    'unemployment': Decimal('0.005'),
}

# Social insurance, employer share
EMPLOYER_RATES = {
    'pension': Decimal('0.16'),
    'medical': Decimal('0.10'),
    'unemployment': Decimal('0.005'),
    'work_injury': Decimal('0.004'),
    'maternity': Decimal('0.008'),
}

# Enterprise annuity
ANNUITY_RATES = {
    'personal': Decimal('0.02'),
    'employer': Decimal('0.08'),
}

UNION_FEE_RATE = Decimal('0.005')

# Housing fund policy range
HOUSING_FUND_RATE_MIN = Decimal('0.05')
HOUSING_FUND_RATE_MAX = Decimal('0.12')
DEFAULT_HOUSING_FUND_RATE = Decimal('0.12')
