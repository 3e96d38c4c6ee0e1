#!/usr/bin/env python3
"""
MCP interface for gratuity calculation with StreamableHttp transport.
This is a thin wrapper around the gratuity service, suitable for assistants and remote tooling.
"""

import os
import logging
from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

import gratuity_service

# Load environment variables from .env file
load_dotenv()

# Logging (stdlib only)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
logger = logging.getLogger(__name__)

# Create MCP server instance with JSON responses
mcp = FastMCP(
    "Gratuity",
    json_response=True
)


# ==================== MCP TOOLS ====================

@mcp.tool()
def list_gratuity_rules() -> list:
    """
    Get the gratuity rules that can be used for a calculation.

    Returns:
        List of rules with code and description
    """
    return gratuity_service.list_rules()


@mcp.tool()
def calculate_service_duration(start_date: str, end_date: str) -> dict:
    """
    Calculate the length of service between two dates.
    Years are counted as 365 days and months as 30 days.

    Args:
        start_date: First day of employment in YYYY-MM-DD format
        end_date: Last day of employment in YYYY-MM-DD format

    Returns:
        Dictionary with years, months, days, totalDays and decimalYears
    """
    try:
        result = gratuity_service.calculate_service_duration_between(start_date, end_date)

        # Convert dates to ISO format
        result["startDate"] = result["startDate"].isoformat()
        result["endDate"] = result["endDate"].isoformat()
        return result
    except ValueError as e:
        return {"error": str(e)}


@mcp.tool()
def calculate_gratuity(
    basic_salary: str,
    start_date: str,
    end_date: str,
    unpaid_leave_days: str = "0",
    rule: str = "currentRule"
) -> dict:
    """
    Calculate UAE end of service gratuity.

    Args:
        basic_salary: Basic monthly salary in AED
        start_date: First day of employment in YYYY-MM-DD format
        end_date: Last day of employment in YYYY-MM-DD format
        unpaid_leave_days: Days of leave without pay, deducted from the gratuity
        rule: 'currentRule' (21 days for the first year, 30 after) or
              'oldRule' (25 days for 3 years, 30 for the next 3, 35 after)

    Returns:
        The calculated gratuity with daily salary and service duration
    """
    try:
        return gratuity_service.calculate_gratuity({
            "basicSalary": basic_salary,
            "startDate": start_date,
            "endDate": end_date,
            "unPaidLeaveDays": unpaid_leave_days,
            "rule": rule,
        })
    except ValueError as e:
        return {"error": str(e)}

if __name__ == "__main__":
    # Run with StreamableHttp transport
    mcp.run(transport="streamable-http")
