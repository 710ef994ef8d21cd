"""
Turn one raw client line into a ClientRecord or a list of rejection reasons
"""

import re
from datetime import datetime
from typing import List
from schemas.client import ClientRecord, FLAG_VALUES
from schemas.pipeline import Accepted, Rejected, ValidationResult
import logging

logger = logging.getLogger(__name__)

DELIMITER = "|"
FIELD_COUNT = 7
TAIL_FIELD_COUNT = 5  # national_id, status, admission_date, is_pep, is_regulated_subject
NAME_MAX_LENGTH = 20

NATIONAL_ID_MAX_LENGTH = 20
STATUS_MAX_LENGTH = 50
ADMISSION_DATE_MAX_LENGTH = 50

DATE_PATTERN = re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4}")

REASON_COLUMN_COUNT = "invalid column count"
REASON_REQUIRED = "missing required fields"
REASON_FIRST_NAME_LENGTH = f"first name exceeds {NAME_MAX_LENGTH} characters"
REASON_LAST_NAME_LENGTH = f"last name exceeds {NAME_MAX_LENGTH} characters"
REASON_DATE = "invalid or malformed admission date"
REASON_PEP = "invalid value for is_pep"
REASON_REGULATED = "invalid value for is_regulated_subject"


class RecordValidator:
    """
    Validate and normalize client lines.

    Handles:
    - Repair of last names that contain the field delimiter
    - Column count check
    - Independent field rules (every failing rule is reported)
    - Truncation of the accepted values to the table sizes
    """

    def validate(self, content: str) -> ValidationResult:
        """
        Classify one line.

        Never raises: an unexpected failure is reported as a single
        rejection reason.
        """
        try:
            return self._validate(content)
        except Exception as e:
            logger.exception("Unexpected error while validating line")
            return Rejected(reasons=[f"unexpected error: {type(e).__name__}: {e}"])

    def _validate(self, content: str) -> ValidationResult:
        fields = self.repair(content.strip().split(DELIMITER))

        if len(fields) != FIELD_COUNT:
            return Rejected(reasons=[REASON_COLUMN_COUNT])

        (
            first_name,
            last_name,
            national_id,
            status,
            admission_date,
            is_pep,
            is_regulated_subject,
        ) = [field.strip() for field in fields]

        reasons: List[str] = []

        if not all((first_name, last_name, national_id, status, admission_date)):
            reasons.append(REASON_REQUIRED)
        if len(first_name) > NAME_MAX_LENGTH:
            reasons.append(REASON_FIRST_NAME_LENGTH)
        if len(last_name) > NAME_MAX_LENGTH:
            reasons.append(REASON_LAST_NAME_LENGTH)
        if not self.is_valid_date(admission_date):
            reasons.append(REASON_DATE)
        if is_pep not in FLAG_VALUES:
            reasons.append(REASON_PEP)
        if is_regulated_subject not in FLAG_VALUES:
            reasons.append(REASON_REGULATED)

        if reasons:
            return Rejected(reasons=reasons)

        return Accepted(
            record=ClientRecord(
                first_name=first_name,
                last_name=last_name,
                national_id=national_id[:NATIONAL_ID_MAX_LENGTH],
                status=status[:STATUS_MAX_LENGTH],
                admission_date=admission_date[:ADMISSION_DATE_MAX_LENGTH],
                is_pep=is_pep,
                is_regulated_subject=is_regulated_subject,
            )
        )

    @staticmethod
    def repair(fields: List[str]) -> List[str]:
        """
        Rebuild a 7-field line whose surplus delimiters sit in the last name.

        Field 0 is the first name and the last five fields are the fixed
        tail; everything in between is joined with single spaces.
        """
        if len(fields) <= FIELD_COUNT:
            return fields

        first_name = fields[0]
        last_name = " ".join(fields[1:-TAIL_FIELD_COUNT])
        return [first_name, last_name, *fields[-TAIL_FIELD_COUNT:]]

    @staticmethod
    def is_valid_date(value: str) -> bool:
        """D/M/YYYY with 1-2 digit day and month, and a real calendar date"""
        if not DATE_PATTERN.fullmatch(value):
            return False
        try:
            datetime.strptime(value, "%d/%m/%Y")
        except ValueError:
            return False
        return True
