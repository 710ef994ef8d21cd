from sqlalchemy import Column, String, BigInteger, DateTime
from datetime import datetime
from models.base import Base


class Client(Base):
    """
    Destination table for validated client register lines.

    Design:
    - Append-only; one row per accepted input line
    - Column sizes mirror the truncation applied by the validator
    - Flags stay as the literal strings "true"/"false" from the source file
    """
    __tablename__ = "clients"

    id = Column(BigInteger, primary_key=True, autoincrement=True)

    first_name = Column(String(20), nullable=False)
    last_name = Column(String(20), nullable=False)
    national_id = Column(String(20), nullable=False, index=True)
    status = Column(String(50), nullable=False)
    admission_date = Column(String(50), nullable=False)
    is_pep = Column(String(10), nullable=False)
    is_regulated_subject = Column(String(10), nullable=False)

    loaded_at = Column(DateTime, nullable=False, default=datetime.utcnow)
