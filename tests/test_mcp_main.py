import mcp_main


def test_list_gratuity_rules():
    rules = mcp_main.list_gratuity_rules()
    assert {r["code"] for r in rules} == {"currentRule", "oldRule"}


def test_calculate_gratuity_defaults():
    result = mcp_main.calculate_gratuity("10000", "2020-01-01", "2025-01-01")
    assert result["gratuityAmount"] == "46356.16"
    assert result["rule"] == "currentRule"


def test_calculate_gratuity_old_rule_with_leave():
    result = mcp_main.calculate_gratuity("10000", "2015-01-01", "2025-01-01", "5", "oldRule")
    # 3653 days: 10 years, 0 months, 3 days
    daily = 10000 * 12 / 365
    expected = daily * (25 * 3 + 30 * 3 + 35 * 4) - 5 * daily
    assert result["gratuityAmount"] == f"{expected:.2f}"


def test_calculate_gratuity_reports_errors():
    result = mcp_main.calculate_gratuity("10000", "2024-01-01", "2024-05-01")
    assert result == {"error": "Minimum 1 year of service required for gratuity."}

    result = mcp_main.calculate_gratuity("", "2020-01-01", "2025-01-01")
    assert result == {"error": "Please fill in all required fields"}


def test_calculate_service_duration():
    result = mcp_main.calculate_service_duration("2020-01-01", "2025-01-01")
    assert result["startDate"] == "2020-01-01"
    assert result["endDate"] == "2025-01-01"
    assert result["totalDays"] == 1827
    assert result["years"] == 5


def test_calculate_service_duration_error():
    result = mcp_main.calculate_service_duration("2025-01-01", "2025-01-01")
    assert result == {"error": "End date must be after start date"}
