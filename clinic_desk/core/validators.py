"""Field validation shared by appointment and patient operations."""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from clinic_desk.core.exceptions import (
    InvalidNameException,
    InvalidPhoneException,
    InvalidStatusException,
    ValidationException,
)
from clinic_desk.schemas.appointments import AppointmentStatus

PATIENT_NAME_MAX_LENGTH = 100

# appointments.amount is NUMERIC(10, 2)
AMOUNT_LIMIT = Decimal("100000000")
AMOUNT_PRECISION = Decimal("0.01")

# 10-digit Indian mobile number
PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")


def validate_patient_name(name: str | None) -> str:
    """
    Validate a patient name.

    Raises:
        InvalidNameException: If the name is blank or longer than 100 characters
    """
    if name is None or not name.strip():
        raise InvalidNameException("Patient name is required")
    name = name.strip()
    if len(name) > PATIENT_NAME_MAX_LENGTH:
        raise InvalidNameException(
            f"Patient name must be at most {PATIENT_NAME_MAX_LENGTH} characters"
        )
    return name


def validate_patient_phone(phone: str | None) -> str | None:
    """
    Validate an optional phone number; blank values are treated as absent.

    Raises:
        InvalidPhoneException: If a number is given and is not a valid mobile number
    """
    if phone is None or not phone.strip():
        return None
    phone = phone.strip()
    if not PHONE_PATTERN.match(phone):
        raise InvalidPhoneException(f"Invalid Indian mobile number: {phone}")
    return phone


def validate_status(status: str | AppointmentStatus | None) -> AppointmentStatus:
    """
    Coerce a status value into the closed set of appointment statuses.

    A missing status falls back to ``scheduled``.

    Raises:
        InvalidStatusException: For any value outside the enumeration
    """
    if status is None or status == "":
        return AppointmentStatus.SCHEDULED
    try:
        return AppointmentStatus(status)
    except ValueError as e:
        raise InvalidStatusException(f"Invalid appointment status: {status}") from e


def validate_amount(amount: Any) -> Decimal:
    """Validate a billed amount; missing amounts count as zero."""
    if amount is None or amount == "":
        return Decimal("0")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as e:
        raise ValidationException(f"Invalid amount: {amount}") from e
    if not value.is_finite() or value < 0:
        raise ValidationException("Amount must be a non-negative number")
    if value >= AMOUNT_LIMIT:
        raise ValidationException(f"Amount must be less than {AMOUNT_LIMIT}")
    if value != value.quantize(AMOUNT_PRECISION):
        raise ValidationException("Amount must have at most 2 decimal places")
    return value
