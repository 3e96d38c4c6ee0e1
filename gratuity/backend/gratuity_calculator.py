"""
Gratuity arithmetic.
Pure functions with no request or framework dependencies.

Durations use a fixed 365-day year and 30-day month throughout.
"""
import math
from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


CURRENT_RULE = "currentRule"
OLD_RULE = "oldRule"

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
SECONDS_PER_DAY = 24 * 60 * 60

MINIMUM_SERVICE_ERROR = "Minimum 1 year of service required for gratuity."


class ServiceDuration(BaseModel):
    model_config = ConfigDict(frozen=True)

    years: int
    months: int
    days: int
    total_days: int
    decimal_years: float


class GratuityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    daily_salary: Optional[float] = None
    decimal_years: Optional[float] = None
    error: Optional[str] = None


def calculate_service_duration(
    start_date: Union[date, datetime],
    end_date: Union[date, datetime]
) -> ServiceDuration:
    """Break the span between two dates into years, months and days of service"""
    if isinstance(start_date, datetime) or isinstance(end_date, datetime):
        delta = _as_datetime(end_date) - _as_datetime(start_date)
        total_days = math.ceil(abs(delta.total_seconds()) / SECONDS_PER_DAY)
    else:
        total_days = abs((end_date - start_date).days)

    years = total_days // DAYS_PER_YEAR
    remaining_days = total_days % DAYS_PER_YEAR
    months = remaining_days // DAYS_PER_MONTH
    days = remaining_days % DAYS_PER_MONTH

    decimal_years = years + months / 12 + days / DAYS_PER_YEAR

    return ServiceDuration(
        years=years,
        months=months,
        days=days,
        total_days=total_days,
        decimal_years=decimal_years
    )


def calculate_gratuity_amount(
    basic_salary: float,
    service_years: float,
    rule: str,
    unpaid_leave_days: float,
    decimal_years: float
) -> GratuityResult:
    """
    Calculate the gratuity owed for a period of service.

    Args:
        basic_salary: Basic monthly salary
        service_years: Completed years plus months/12 (leftover days ignored)
        rule: CURRENT_RULE or OLD_RULE
        unpaid_leave_days: Days of leave without pay, deducted at the daily rate
        decimal_years: Full fractional service, used to prorate the first year

    Returns:
        GratuityResult. When service is under one year the result carries
        MINIMUM_SERVICE_ERROR and a zero amount.
    """
    if service_years < 1:
        return GratuityResult(amount=0, error=MINIMUM_SERVICE_ERROR)

    amount = 0.0
    daily_salary = (basic_salary * 12) / DAYS_PER_YEAR

    # 21 days for the first year, 30 days for each year after
    if rule == CURRENT_RULE:
        if service_years <= 1:
            amount = daily_salary * 21 * decimal_years
        else:
            amount = daily_salary * 21 * 1 + daily_salary * 30 * (service_years - 1)

    # 25 days for the first 3 years, 30 for the next 3, 35 after that
    elif rule == OLD_RULE:
        if service_years <= 3:
            amount = daily_salary * 25 * service_years
        elif service_years <= 6:
            amount = daily_salary * 25 * 3 + daily_salary * 30 * (service_years - 3)
        else:
            amount = (
                daily_salary * 25 * 3
                + daily_salary * 30 * 3
                + daily_salary * 35 * (service_years - 6)
            )

    # No floor at zero
    if unpaid_leave_days and unpaid_leave_days > 0:
        amount -= unpaid_leave_days * daily_salary

    return GratuityResult(
        amount=amount,
        daily_salary=daily_salary,
        decimal_years=decimal_years
    )


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)
