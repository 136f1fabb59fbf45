import logging
import secrets
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)


# ---------------- Receipt numbers ----------------
def generate_digits(length: int = 4) -> str:
    return ''.join([str(secrets.randbelow(10)) for _ in range(length)])


def generate_receipt_number(now: Optional[datetime] = None) -> str:
    """Receipt number in the form MT-YYMMDD-NNNN."""
    now = now or datetime.utcnow()
    return f"MT-{now.strftime('%y%m%d')}-{generate_digits(4)}"


# ---------------- Money ----------------
def rupees_to_paise(amount: float) -> int:
    return int(round(float(amount) * 100))
