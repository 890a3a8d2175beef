"""Shared validation utilities"""

import re
from datetime import datetime, timezone
from typing import Optional

from ..models import JOB_STATUSES

TITLE_SEPARATOR = "–"  # en dash, "Deep Clean – Dr. Okonkwo"


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number to E.164 format.
    Numbers without a country code are treated as UK numbers.

    Args:
        phone: Phone number string in various formats

    Returns:
        Normalized phone number in E.164 format (+44XXXXXXXXXX)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    international = phone.strip().startswith("+")
    digits = re.sub(r"\D", "", phone)

    if not international:
        # UK national format: 07342 416166 -> +447342416166
        if digits.startswith("0"):
            digits = digits[1:]
        digits = f"44{digits}"

    if not 8 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 8 and 15 digits")

    return f"+{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_job_status(status: Optional[str]) -> Optional[str]:
    if status is not None and status not in JOB_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(JOB_STATUSES)}")
    return status


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Job times are stored without a timezone. Offset-aware input is converted
    to UTC and the offset dropped, naive input is kept as wall-clock time.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def job_type(title: str) -> str:
    """Service part of a job title, empty when the title has no separator"""
    if TITLE_SEPARATOR not in title:
        return ""
    return title.split(TITLE_SEPARATOR, 1)[0].strip()


def customer_name(title: str) -> str:
    """Customer part of a job title, the whole title when there is no separator"""
    if TITLE_SEPARATOR not in title:
        return title.strip()
    return title.split(TITLE_SEPARATOR, 1)[1].strip()
