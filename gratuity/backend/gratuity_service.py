"""
Business logic layer for gratuity calculation.
This service layer validates raw form input, sequences the calculator calls and formats results.
"""
import logging
import math
import os
from datetime import date, datetime
from typing import Dict, Any, List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from gratuity_calculator import (
    CURRENT_RULE,
    OLD_RULE,
    ServiceDuration,
    calculate_gratuity_amount,
    calculate_service_duration,
)

load_dotenv()

logger = logging.getLogger(__name__)

# Configuration
CURRENCY = os.getenv("CURRENCY", "AED")

RULES = {
    CURRENT_RULE: "Current Rule (21 days for the first year, 30 days for the rest)",
    OLD_RULE: "Old Rule (25 days for first 3 years, 30 days for next 3 years, 35 days for others)",
}

FORM_DEFAULTS = {
    "basicSalary": "",
    "startDate": "",
    "endDate": "",
    "unPaidLeaveDays": "0",
    "rule": CURRENT_RULE,
}


class GratuityError(ValueError):
    """Base class for errors reported back to the person filling in the form"""


class ValidationError(GratuityError):
    """Raised when form input is missing or malformed"""


class InsufficientServiceError(GratuityError):
    """Raised when the service period is too short to earn gratuity"""


class GratuityInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    basic_salary: float
    start_date: date
    end_date: date
    unpaid_leave_days: float = 0
    rule: str = CURRENT_RULE


# ==================== RULE OPERATIONS ====================

def list_rules() -> List[Dict[str, str]]:
    """Get the supported gratuity rules with their descriptions."""
    return [
        {"code": code, "description": description}
        for code, description in RULES.items()
    ]


# ==================== VALIDATION ====================

def validate_form(form: Optional[Mapping[str, Any]]) -> GratuityInput:
    """
    Validate raw form fields and convert them to a GratuityInput.

    Args:
        form: Mapping of form field names (basicSalary, startDate, endDate,
              unPaidLeaveDays, rule) to raw values, usually strings

    Returns:
        Validated GratuityInput

    Raises:
        ValidationError: If a required field is missing or a value is malformed
    """
    fields = _with_defaults(form)

    if any(_is_blank(fields[name]) for name in ("basicSalary", "startDate", "endDate")):
        raise ValidationError("Please fill in all required fields")

    start_date, end_date = _parse_date_range(fields["startDate"], fields["endDate"])

    basic_salary = _parse_number(fields["basicSalary"], "Basic salary must be a number")

    unpaid_leave_days = 0.0
    if not _is_blank(fields["unPaidLeaveDays"]):
        unpaid_leave_days = _parse_number(
            fields["unPaidLeaveDays"], "Leave without pay days must be a number"
        )

    rule = fields["rule"]
    if _is_blank(rule):
        rule = CURRENT_RULE
    if not isinstance(rule, str) or rule not in RULES:
        raise ValidationError(f"Unknown gratuity rule: {rule}")

    return GratuityInput(
        basic_salary=basic_salary,
        start_date=start_date,
        end_date=end_date,
        unpaid_leave_days=unpaid_leave_days,
        rule=rule
    )


# ==================== CALCULATION OPERATIONS ====================

def calculate_service_duration_between(start_date: Any, end_date: Any) -> Dict[str, Any]:
    """
    Calculate the service duration between two raw date values.

    Raises:
        ValidationError: If either date is missing or invalid, or end is not after start
    """
    if _is_blank(start_date) or _is_blank(end_date):
        raise ValidationError("Please fill in all required fields")

    start, end = _parse_date_range(start_date, end_date)
    duration = calculate_service_duration(start, end)
    return {
        "startDate": start,
        "endDate": end,
        **_duration_to_dict(duration),
    }


def calculate_gratuity(form: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Validate a gratuity form and calculate the amount owed.

    Args:
        form: Raw form fields, see validate_form

    Returns:
        Dictionary with gratuityAmount and dailySalary as 2-decimal strings,
        the duration breakdown, the currency and the submitted form fields

    Raises:
        ValidationError: If the form is incomplete or malformed
        InsufficientServiceError: If the service period is under one year
    """
    try:
        gratuity_input = validate_form(form)
    except ValidationError as e:
        logger.info("Rejected gratuity form: %s", e)
        raise

    duration = calculate_service_duration(gratuity_input.start_date, gratuity_input.end_date)

    # Leftover days count towards decimal_years only
    service_years = duration.years + duration.months / 12

    result = calculate_gratuity_amount(
        gratuity_input.basic_salary,
        service_years,
        gratuity_input.rule,
        gratuity_input.unpaid_leave_days,
        duration.decimal_years
    )

    if result.error:
        logger.info("Gratuity not payable for %d days of service", duration.total_days)
        raise InsufficientServiceError(result.error)

    if not math.isfinite(result.daily_salary) or not math.isfinite(result.amount):
        logger.info("Gratuity out of range for basic salary %s", gratuity_input.basic_salary)
        raise ValidationError("Basic salary or leave days are too large to calculate")

    logger.debug(
        "Gratuity calculated: rule=%s total_days=%d amount=%.2f",
        gratuity_input.rule, duration.total_days, result.amount
    )

    fields = _with_defaults(form)
    return {
        "gratuityAmount": f"{result.amount:.2f}",
        "dailySalary": f"{result.daily_salary:.2f}",
        "currency": CURRENCY,
        "duration": _duration_to_dict(duration, places=2),
        "basicSalary": str(fields["basicSalary"]),
        "startDate": str(fields["startDate"]),
        "endDate": str(fields["endDate"]),
        "unPaidLeaveDays": str(fields["unPaidLeaveDays"]),
        "rule": gratuity_input.rule,
    }


# ==================== HELPERS ====================

def _with_defaults(form: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    fields = dict(FORM_DEFAULTS)
    for key, value in (form or {}).items():
        if key not in fields or value is None:
            continue
        fields[key] = value.strip() if isinstance(value, str) else value
    return fields


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")


def _parse_date_range(start_value: Any, end_value: Any) -> Tuple[date, date]:
    start_date = _parse_date(start_value)
    end_date = _parse_date(end_value)
    if end_date <= start_date:
        raise ValidationError("End date must be after start date")
    return start_date, end_date


def _parse_number(value: Any, message: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if not math.isfinite(number):
        raise ValidationError(message)
    return number


def _duration_to_dict(duration: ServiceDuration, places: Optional[int] = None) -> Dict[str, Any]:
    decimal_years = duration.decimal_years
    if places is not None:
        decimal_years = round(decimal_years, places)
    return {
        "years": duration.years,
        "months": duration.months,
        "days": duration.days,
        "totalDays": duration.total_days,
        "decimalYears": decimal_years,
    }
