"""
Pydantic schema for an accepted client record
"""

from pydantic import BaseModel, Field, validator
from typing import Tuple

FLAG_VALUES = ("true", "false")

COLUMNS = (
    "first_name",
    "last_name",
    "national_id",
    "status",
    "admission_date",
    "is_pep",
    "is_regulated_subject",
)


class ClientRecord(BaseModel):
    """
    Normalized client record, in source column order.

    Instances are only built by RecordValidator once every line-level rule
    has passed, so these constraints restate the table limits.
    """

    first_name: str = Field(..., min_length=1, max_length=20)
    last_name: str = Field(..., min_length=1, max_length=20)
    national_id: str = Field(..., min_length=1, max_length=20)
    status: str = Field(..., min_length=1, max_length=50)
    admission_date: str = Field(..., min_length=1, max_length=50)
    is_pep: str
    is_regulated_subject: str

    @validator("is_pep", "is_regulated_subject")
    def check_flag(cls, v):
        """Flags are kept as the literal strings of the source file"""
        if v not in FLAG_VALUES:
            raise ValueError(f"flag must be one of {FLAG_VALUES}")
        return v

    class Config:
        frozen = True

    def to_row(self) -> Tuple[str, ...]:
        """Ordered 7-field row handed to the store"""
        return tuple(getattr(self, column) for column in COLUMNS)
