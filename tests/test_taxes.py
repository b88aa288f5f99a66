"""Unit tests for the taxes module.

These tests verify that federal, state and payroll tax calculations using the
embedded tax tables produce expected results.  Values use the 2024 IRS
brackets for multiple filing statuses and a mix of flat and progressive
state systems.
"""

import math

import pytest

from calculators import InvalidInput
from calculators import taxes as tax_calc


def test_federal_tax_example():
    """Federal tax on $60k of ordinary income for a single filer (2024)."""
    tax = tax_calc.compute_federal_tax(60000, year=2024)
    assert math.isclose(tax, 5216.0, rel_tol=1e-4)


def test_federal_married_joint():
    """Married filing jointly should use the wider brackets."""
    tax = tax_calc.compute_federal_tax(60000, filing_status="married_joint", year=2024)
    assert math.isclose(tax, 3232.0, rel_tol=1e-4)


def test_income_below_standard_deduction():
    assert tax_calc.compute_federal_tax(10000) == 0


def test_capital_gains_tax_example():
    """Capital gains tax on $100k of gains for a single filer (2024)."""
    tax = tax_calc.compute_capital_gains_tax(100000, year=2024)
    assert math.isclose(tax, 7946.25, rel_tol=1e-4)


def test_flat_state_tax():
    assert math.isclose(tax_calc.compute_state_tax(100000, "MI"), 4250.0)


def test_progressive_state_tax():
    """California applies its own deduction and brackets."""
    tax = tax_calc.compute_state_tax(100000, "CA", "single")
    assert math.isclose(tax, 5327.142, rel_tol=1e-6)


def test_state_without_status_table_uses_single():
    assert math.isclose(
        tax_calc.compute_state_tax(100000, "CA", "married_separate"),
        tax_calc.compute_state_tax(100000, "CA", "single"),
    )


def test_no_income_tax_and_unknown_states():
    assert tax_calc.compute_state_tax(100000, "TX") == 0
    assert tax_calc.compute_state_tax(100000, "ZZ") == 0


def test_available_states():
    states = tax_calc.available_states()
    assert "CA" in states and "TX" in states
    assert states == sorted(states)


def test_unknown_year_and_status():
    with pytest.raises(InvalidInput):
        tax_calc.compute_federal_tax(60000, year=1990)
    with pytest.raises(InvalidInput):
        tax_calc.compute_federal_tax(60000, filing_status="widowed")


def test_marginal_and_effective_rates():
    assert tax_calc.marginal_rate(60000) == pytest.approx(12.0)
    assert tax_calc.marginal_rate(100000) == pytest.approx(22.0)
    assert tax_calc.effective_rate(60000) == pytest.approx(5216 / 600)
    assert tax_calc.marginal_rate(10000) == 0


def test_income_tax_summary():
    r = tax_calc.income_tax(60000, "single", "MI")
    assert r["taxable_income"] == 45400
    assert math.isclose(r["federal_tax"], 5216)
    assert math.isclose(r["state_tax"], 2550)
    assert math.isclose(r["after_tax_income"], 60000 - 5216 - 2550)


def test_take_home_pay_texas():
    r = tax_calc.take_home_pay(100000, "single", "TX")
    assert math.isclose(r["federal_tax"], 13841)
    assert math.isclose(r["social_security"], 6200)
    assert math.isclose(r["medicare"], 1450)
    assert r["state_tax"] == 0
    assert math.isclose(r["net_annual"], 78509)
    assert math.isclose(r["net_per_paycheck"], 78509 / 26)


def test_pre_tax_deductions_do_not_reduce_fica():
    r = tax_calc.take_home_pay(100000, "single", "TX", pre_tax_deductions=10000, pay_frequency="monthly")
    assert math.isclose(r["social_security"], 6200)
    assert r["federal_tax"] < 13841
    assert math.isclose(r["net_per_paycheck"], r["net_monthly"])


def test_high_earner_payroll_taxes():
    r = tax_calc.take_home_pay(250000, "single", "TX")
    assert math.isclose(r["social_security"], 168600 * 0.062)
    assert math.isclose(r["medicare"], 250000 * 0.0145 + 50000 * 0.009)


def test_take_home_unknown_frequency():
    with pytest.raises(InvalidInput):
        tax_calc.take_home_pay(50000, pay_frequency="daily")


def test_self_employment_tax():
    r = tax_calc.self_employment_tax(50000)
    assert math.isclose(r["taxable_base"], 46175)
    assert math.isclose(r["total_se_tax"], 7064.775)
    assert math.isclose(r["deductible_half"], 7064.775 / 2)


def test_self_employment_wage_base_already_used():
    r = tax_calc.self_employment_tax(50000, wages_already_ss=168600)
    assert r["social_security_tax"] == 0
    assert math.isclose(r["medicare_tax"], 46175 * 0.029)


def test_long_term_capital_gains():
    r = tax_calc.capital_gains(10000, 30000, 24, 60000)
    assert r["term"] == "long"
    assert math.isclose(r["tax"], 2756.25)
    assert math.isclose(r["net_proceeds"], 30000 - 2756.25)


def test_short_term_gains_taxed_as_ordinary_income():
    r = tax_calc.capital_gains(10000, 30000, 6, 60000)
    assert r["term"] == "short"
    assert math.isclose(r["tax"], 4225)


def test_capital_loss_owes_nothing():
    r = tax_calc.capital_gains(30000, 20000, 24, 60000)
    assert r["tax"] == 0
    assert r["effective_rate"] == 0


def test_hourly_to_salary():
    r = tax_calc.hourly_to_salary(25)
    assert r["annual"] == 52000
    assert r["weekly"] == 1000
    assert r["daily"] == 200


def test_dividend_tax():
    r = tax_calc.dividend_tax(10000, 2000, 60000)
    assert math.isclose(r["ordinary_tax"], 265)
    assert math.isclose(r["qualified_tax"], 1500)
    assert math.isclose(r["total_tax"], 1765)
    assert math.isclose(r["after_tax_dividends"], 12000 - 1765)


def test_custom_tables():
    tables = {
        "2030": {
            "federal": {
                "single": {
                    "standard_deduction": 0,
                    "brackets": [{"rate": 0.1, "start": 0, "end": None}],
                }
            },
            "state": {"XX": {"rate": 0.05}},
        }
    }
    assert math.isclose(tax_calc.compute_federal_tax(1000, year=2030, tax_tables=tables), 100)
    assert math.isclose(tax_calc.compute_state_tax(1000, "XX", year=2030, tax_tables=tables), 50)
    assert tax_calc.compute_capital_gains_tax(1000, year=2030, tax_tables=tables) == 0


def test_self_employment_wage_base_comes_from_tables():
    tables = {"2030": {"fica": {"ss_wage_base": 40000}}}
    r = tax_calc.self_employment_tax(50000, year=2030, tax_tables=tables)
    assert math.isclose(r["ss_taxable"], 40000)
    assert math.isclose(r["social_security_tax"], 40000 * 0.124)
    default = tax_calc.self_employment_tax(200000)
    assert math.isclose(default["ss_taxable"], 168600)


def test_tax_tables_ship_inside_the_package():
    assert tax_calc._DEFAULT_TAX_TABLE_PATH.is_file()
    assert tax_calc._DEFAULT_TAX_TABLE_PATH.parent.parent.name == "calculators"
