# components/registry.py
# One entry per catalog slug: how to collect inputs, what to compute, and how
# to present the result.
#
#   compute(**values) -> dict        tool function, may raise InvalidInput
#   fields                           form field dicts from components.forms
#   metrics                          (result key, label, formatter kind)
#   charts(result, values) -> list   Plotly figures, possibly empty
#   table(result) -> dict or None    {"title", "rows", "columns"}

from typing import Callable, Dict, List, Optional

from calculators import business, currency, debt, insurance, loans, oil, roth, savings, taxes
from calculators.amortization import amortization_schedule, term_months
from calculators.errors import InvalidInput
from config import settings

from .charts import balance_chart, comparison_bars, growth_chart, split_chart
from .forms import (
    checkbox_field,
    int_field,
    number_field,
    optional_number_field,
    rows_field,
    select_field,
    text_field,
)

FILING_LABELS = {
    "single": "Single",
    "married_joint": "Married filing jointly",
    "married_separate": "Married filing separately",
    "head_of_household": "Head of household",
}
ROUNDING_LABELS = {"down": "Round down", "nearest": "Nearest", "up": "Round up"}


def _filing():
    return select_field("filing_status", "Filing status", taxes.FILING_STATUSES, labels=FILING_LABELS)


def _state():
    states = taxes.available_states(settings.tax_year)
    return select_field("state", "State", states, default="TX" if "TX" in states else None,
                        help="States without an income tax owe nothing.")


def _entry(compute: Callable, fields: List[Dict], metrics, charts: Optional[Callable] = None,
           table: Optional[Callable] = None) -> Dict:
    return {
        "compute": compute,
        "fields": fields,
        "metrics": metrics,
        "charts": charts or (lambda result, values: []),
        "table": table or (lambda result: None),
    }


# ---------- Shared presenters ----------
def _schedule_table(result):
    rows = result.get("schedule") or []
    if not rows:
        return None
    return {"title": "Amortization Schedule", "rows": rows,
            "columns": ["month", "payment", "interest", "principal", "extra", "balance"]}


def _schedule_charts(result, values):
    rows = result.get("schedule") or []
    if not rows:
        return []
    return [balance_chart(rows), split_chart(rows)]


def _path_chart(title, x_title="Year"):
    def charts(result, values):
        path = result.get("path") or []
        if len(path) < 2:
            return []
        return [growth_chart(path, result.get("target"), title=title, x_title=x_title)]
    return charts


def _bars(title, pairs, y_title="Dollars", highlight=None):
    def charts(result, values):
        labels = [label for label, _ in pairs]
        data = [result[key] for _, key in pairs]
        return [comparison_bars(labels, data, title=title, y_title=y_title,
                                highlight=highlight(result) if highlight else None)]
    return charts


# ---------- Loans ----------
def _extra_payment_charts(result, values):
    baseline = amortization_schedule(values["principal"], values["apr"], term_months(values["years"]))
    return [balance_chart(result["schedule"], baseline=baseline, title="Balance With and Without Extra Payments")]


def _term_charts(result, values):
    opts = result["options"]
    labels = [f"{o['years']:g} yr" for o in opts]
    best = f"{result['best_term_years']:g} yr"
    return [comparison_bars(labels, [o["total_interest"] for o in opts],
                            title="Total Interest by Term", highlight=best)]


LOAN_TOOLS = {
    "mortgage": _entry(
        loans.mortgage_payment,
        [
            number_field("principal", "Loan amount ($)", 300000, step=1000.0),
            number_field("apr", "Interest rate (APR %)", 7.0, step=0.125),
            number_field("years", "Loan term (years)", 30, step=1.0, min_value=1.0),
        ],
        [
            ("monthly_payment", "Monthly payment", "money2"),
            ("total_paid", "Total paid", "money"),
            ("total_interest", "Total interest", "money"),
        ],
        _schedule_charts,
        _schedule_table,
    ),
    "apr": _entry(
        loans.apr_with_fees,
        [
            number_field("principal", "Loan amount ($)", 200000, step=1000.0),
            number_field("apr", "Nominal interest rate (%)", 6.5, step=0.125),
            number_field("years", "Loan term (years)", 30, step=1.0, min_value=1.0),
            number_field("fees", "Upfront fees ($)", 4000, step=100.0),
        ],
        [
            ("monthly_payment", "Monthly payment", "money2"),
            ("nominal_rate", "Nominal rate", "percent"),
            ("apr", "APR with fees", "percent"),
            ("amount_financed", "Amount financed", "money"),
            ("apr_difference", "APR difference", "percent"),
        ],
    ),
    "extra-payments": _entry(
        loans.extra_payment_savings,
        [
            number_field("principal", "Loan amount ($)", 300000, step=1000.0),
            number_field("apr", "Interest rate (APR %)", 6.5, step=0.125),
            number_field("years", "Loan term (years)", 30, step=1.0, min_value=1.0),
            number_field("extra_monthly", "Extra principal per month ($)", 200, step=25.0),
        ],
        [
            ("monthly_payment", "Scheduled payment", "money2"),
            ("months", "New payoff time", "months"),
            ("months_saved", "Time saved", "months"),
            ("total_interest", "Total interest", "money"),
            ("interest_saved", "Interest saved", "money"),
            ("baseline_interest", "Interest without extra", "money"),
        ],
        _extra_payment_charts,
        _schedule_table,
    ),
    "balloon-loan": _entry(
        loans.balloon_loan,
        [
            number_field("principal", "Loan amount ($)", 250000, step=1000.0),
            number_field("apr", "Interest rate (APR %)", 6.0, step=0.125),
            number_field("amort_years", "Amortization term (years)", 30, step=1.0, min_value=1.0),
            number_field("balloon_years", "Balloon due after (years)", 7, step=1.0),
        ],
        [
            ("monthly_payment", "Monthly payment", "money2"),
            ("balloon_payment", "Balloon payment due", "money2"),
            ("interest_to_balloon", "Interest until balloon", "money"),
            ("paid_before_balloon", "Paid before balloon", "money"),
            ("total_cost", "Total cost", "money"),
        ],
        _schedule_charts,
        _schedule_table,
    ),
    "refinance": _entry(
        loans.refinance_savings,
        [
            number_field("balance", "Remaining balance ($)", 250000, step=1000.0),
            number_field("current_apr", "Current rate (%)", 7.5, step=0.125),
            number_field("current_years_left", "Years left on current loan", 25, step=1.0, min_value=1.0),
            number_field("new_apr", "New rate (%)", 6.25, step=0.125),
            number_field("new_years", "New loan term (years)", 30, step=1.0, min_value=1.0),
            number_field("closing_costs", "Closing costs ($)", 4000, step=100.0),
        ],
        [
            ("current_payment", "Current payment", "money2"),
            ("new_payment", "New payment", "money2"),
            ("monthly_savings", "Monthly savings", "money2"),
            ("interest_saved", "Lifetime interest saved", "money"),
            ("break_even_months", "Break-even", "months"),
        ],
        _bars("Total Interest", [("Current loan", "current_interest"), ("Refinanced", "new_interest")]),
    ),
    "mortgage-points": _entry(
        loans.points_break_even,
        [
            number_field("principal", "Loan amount ($)", 300000, step=1000.0),
            number_field("years", "Loan term (years)", 30, step=1.0, min_value=1.0),
            number_field("rate_no_points", "Rate without points (%)", 7.0, step=0.125),
            number_field("rate_with_points", "Rate with points (%)", 6.75, step=0.125),
            number_field("points", "Points purchased", 1.0, step=0.25),
        ],
        [
            ("points_cost", "Cost of points", "money"),
            ("monthly_savings", "Monthly savings", "money2"),
            ("break_even_months", "Break-even", "months"),
            ("lifetime_savings", "Lifetime savings", "money"),
            ("worth_it", "Pays off within term", "yesno"),
        ],
        _bars("Lifetime Interest", [("No points", "interest_no_points"), ("With points", "interest_with_points")]),
    ),
    "loan-payoff-time": _entry(
        loans.payoff_time,
        [
            number_field("balance", "Current balance ($)", 15000, step=100.0),
            number_field("apr", "Interest rate (APR %)", 8.0, step=0.25),
            number_field("monthly_payment", "Monthly payment ($)", 400, step=10.0),
        ],
        [
            ("months", "Time to pay off", "months"),
            ("total_interest", "Total interest", "money2"),
            ("total_paid", "Total paid", "money2"),
        ],
    ),
    "loan-term-comparison": _entry(
        lambda principal, apr, terms: loans.compare_terms(principal, apr, [r["years"] for r in terms]),
        [
            number_field("principal", "Loan amount ($)", 300000, step=1000.0),
            number_field("apr", "Interest rate (APR %)", 6.5, step=0.125),
            rows_field("terms", "Loan terms", [number_field("years", "Years", 15, step=1.0)],
                       [{"years": 10.0}, {"years": 15.0}, {"years": 20.0}, {"years": 30.0}],
                       add_label="Add term"),
        ],
        [
            ("best_term_years", "Least interest (years)", "number"),
            ("lowest_interest", "Lowest total interest", "money"),
            ("lowest_payment", "Lowest monthly payment", "money2"),
        ],
        _term_charts,
        lambda result: {"title": "Term Comparison", "rows": result["options"],
                        "columns": ["years", "monthly_payment", "total_paid", "total_interest"]},
    ),
    "ltv": _entry(
        loans.loan_to_value,
        [
            number_field("property_value", "Property value ($)", 400000, step=1000.0),
            number_field("loan_amount", "Loan amount ($)", 320000, step=1000.0),
        ],
        [
            ("ltv", "Loan-to-value", "percent"),
            ("equity", "Equity", "money"),
            ("verdict", "What it means", "text"),
        ],
    ),
    "pmi": _entry(
        loans.pmi_cost,
        [
            number_field("home_price", "Home price ($)", 350000, step=1000.0),
            number_field("down_payment", "Down payment ($)", 35000, step=1000.0),
            number_field("pmi_rate", "PMI rate (% per year)", 0.5, step=0.05),
        ],
        [
            ("loan_amount", "Loan amount", "money"),
            ("ltv", "Loan-to-value", "percent"),
            ("annual_pmi", "Annual PMI", "money2"),
            ("monthly_pmi", "Monthly PMI", "money2"),
        ],
    ),
    "rent-vs-buy": _entry(
        loans.rent_vs_buy,
        [
            number_field("monthly_rent", "Monthly rent ($)", 2000, step=50.0),
            number_field("home_price", "Home price ($)", 350000, step=1000.0),
            number_field("down_payment", "Down payment ($)", 70000, step=1000.0),
            number_field("apr", "Mortgage rate (%)", 6.5, step=0.125),
            number_field("years", "Mortgage term (years)", 30, step=1.0, min_value=1.0),
            number_field("monthly_extras", "Taxes, insurance and upkeep per month ($)", 600, step=25.0),
        ],
        [
            ("mortgage_payment", "Mortgage payment", "money2"),
            ("monthly_ownership", "Monthly cost to own", "money2"),
            ("monthly_rent", "Monthly rent", "money2"),
            ("difference", "Own minus rent", "money2"),
            ("verdict", "Verdict", "text"),
        ],
        _bars("Monthly Cost", [("Rent", "monthly_rent"), ("Own", "monthly_ownership")]),
    ),
    "arm-mortgage": _entry(
        loans.arm_payment,
        [
            number_field("principal", "Loan amount ($)", 400000, step=1000.0),
            number_field("intro_apr", "Intro rate (%)", 5.5, step=0.125),
            number_field("intro_years", "Intro period (years)", 5, step=1.0, min_value=1.0),
            number_field("adjusted_apr", "Rate after reset (%)", 7.5, step=0.125),
            number_field("years", "Loan term (years)", 30, step=1.0, min_value=1.0),
        ],
        [
            ("intro_payment", "Intro payment", "money2"),
            ("adjusted_payment", "Payment after reset", "money2"),
            ("payment_change", "Payment change", "money2"),
            ("reset_balance", "Balance at reset", "money"),
            ("total_interest", "Total interest", "money"),
        ],
        _schedule_charts,
        _schedule_table,
    ),
    "mortgage-rate-change": _entry(
        loans.rate_change_impact,
        [
            number_field("principal", "Loan amount ($)", 300000, step=1000.0),
            number_field("years", "Loan term (years)", 30, step=1.0, min_value=1.0),
            number_field("current_apr", "Current rate (%)", 6.0, step=0.125),
            number_field("new_apr", "New rate (%)", 7.5, step=0.125),
            optional_number_field("adjustment_cap", "Adjustment cap (points, blank = none)", step=0.25),
            optional_number_field("lifetime_cap", "Lifetime cap (points, blank = none)", step=0.25),
        ],
        [
            ("current_payment", "Current payment", "money2"),
            ("new_payment", "New payment", "money2"),
            ("monthly_change", "Monthly change", "money2"),
            ("rate_applied", "Rate applied", "percent"),
            ("interest_change", "Lifetime interest change", "money"),
        ],
        _bars("Lifetime Interest", [("Current rate", "current_interest"), ("New rate", "new_interest")]),
    ),
    "biweekly-mortgage": _entry(
        loans.biweekly_savings,
        [
            number_field("principal", "Loan amount ($)", 300000, step=1000.0),
            number_field("apr", "Interest rate (APR %)", 6.5, step=0.125),
            number_field("years", "Loan term (years)", 30, step=1.0, min_value=1.0),
        ],
        [
            ("monthly_payment", "Monthly payment", "money2"),
            ("biweekly_payment", "Biweekly payment", "money2"),
            ("payoff_months", "Biweekly payoff time", "months"),
            ("months_saved", "Time saved", "months"),
            ("interest_saved", "Interest saved", "money"),
        ],
        _bars("Total Interest", [("Monthly", "monthly_interest"), ("Biweekly", "biweekly_interest")]),
    ),
}


# ---------- Credit and debt ----------
DEBT_COLUMNS = [
    text_field("name", "Name"),
    number_field("balance", "Balance ($)", 0, step=100.0),
    number_field("rate", "APR (%)", 0, step=0.25),
    number_field("min_payment", "Minimum ($)", 0, step=10.0),
]
DEFAULT_DEBTS = [
    {"name": "Credit card", "balance": 5000.0, "rate": 22.0, "min_payment": 150.0},
    {"name": "Car loan", "balance": 12000.0, "rate": 7.0, "min_payment": 300.0},
    {"name": "Student loan", "balance": 20000.0, "rate": 5.0, "min_payment": 200.0},
]


def _plan(strategy):
    def compute(debts, monthly_budget):
        return debt.debt_payoff_plan(debts, monthly_budget, strategy)
    return _entry(
        compute,
        [
            number_field("monthly_budget", "Total monthly budget ($)", 900, step=25.0),
            rows_field("debts", "Debts", DEBT_COLUMNS, DEFAULT_DEBTS, add_label="Add debt"),
        ],
        [
            ("months", "Debt-free in", "months"),
            ("total_interest", "Total interest", "money2"),
        ],
        table=lambda result: {"title": "Payoff Order", "rows": result["payoff_order"], "columns": ["name", "month"]},
    )


DEBT_TOOLS = {
    "credit-card-payoff": _entry(
        debt.credit_card_payoff,
        [
            number_field("balance", "Card balance ($)", 5000, step=100.0),
            number_field("apr", "Card APR (%)", 22.0, step=0.25),
            number_field("monthly_payment", "Monthly payment ($)", 200, step=10.0),
        ],
        [
            ("months", "Time to pay off", "months"),
            ("total_paid", "Total paid", "money2"),
            ("interest_paid", "Interest paid", "money2"),
        ],
    ),
    "debt-avalanche": _plan("avalanche"),
    "debt-snowball": _plan("snowball"),
    "dti": _entry(
        debt.debt_to_income,
        [
            number_field("monthly_debt", "Monthly debt payments ($)", 1800, step=50.0),
            number_field("monthly_income", "Gross monthly income ($)", 6000, step=100.0),
        ],
        [
            ("dti", "Debt-to-income", "percent"),
            ("band", "Band", "text"),
            ("remaining_income", "Income after debts", "money"),
        ],
    ),
    "balance-transfer": _entry(
        debt.balance_transfer,
        [
            number_field("balance", "Card balance ($)", 6000, step=100.0),
            number_field("current_apr", "Current card APR (%)", 24.0, step=0.25),
            number_field("monthly_payment", "Monthly payment ($)", 300, step=10.0),
            number_field("transfer_fee", "Transfer fee (%)", 3.0, step=0.5),
            number_field("intro_apr", "Intro APR (%)", 0.0, step=0.25),
            int_field("intro_months", "Intro period (months)", 15, max_value=60),
            number_field("go_to_apr", "APR after intro (%)", 19.99, step=0.25),
        ],
        [
            ("fee", "Transfer fee", "money2"),
            ("current_interest", "Interest if you stay", "money2"),
            ("transfer_interest", "Interest after transfer", "money2"),
            ("savings", "Savings from transfer", "money2"),
            ("better", "Better choice", "text"),
        ],
        _bars("Total Paid", [("Keep card", "current_total_paid"), ("Transfer", "transfer_total_paid")]),
    ),
}


# ---------- Savings and retirement ----------
def _ira_limits(start_age, end_age, base_limit, inflation):
    schedule = roth.ira_limit_schedule(start_age, end_age, base_limit, inflation / 100)
    if not schedule:
        raise InvalidInput("End age must be after start age.")
    rows = [{"age": age, "limit": limit} for age, limit in schedule.items()]
    return {
        "schedule": rows,
        "first_limit": rows[0]["limit"],
        "last_limit": rows[-1]["limit"],
        "total": sum(r["limit"] for r in rows),
        "years": len(rows),
    }


SAVINGS_TOOLS = {
    "fire": _entry(
        savings.fire_target,
        [
            number_field("income", "Annual income after tax ($)", 90000, step=1000.0),
            number_field("expenses", "Annual expenses ($)", 50000, step=1000.0),
            number_field("current_savings", "Current savings ($)", 100000, step=1000.0),
            number_field("return_rate", "Expected return (%)", 6.0, step=0.25),
            number_field("withdrawal_rate", "Withdrawal rate (%)", 4.0, step=0.25),
            int_field("max_years", "Years to project", 60, min_value=1, max_value=200),
        ],
        [
            ("fire_number", "FIRE number", "money"),
            ("annual_savings", "Annual savings", "money"),
            ("savings_rate", "Savings rate", "percent"),
            ("years_to_fire", "Years to FIRE", "number"),
            ("status", "Status", "text"),
        ],
        _path_chart("Savings Toward FIRE Number"),
    ),
    "retirement-projection": _entry(
        savings.retirement_projection,
        [
            number_field("current_savings", "Current savings ($)", 50000, step=1000.0),
            number_field("annual_contribution", "Annual contribution ($)", 12000, step=500.0),
            number_field("return_rate", "Expected return (%)", 6.0, step=0.25),
            int_field("years", "Years until retirement", 30, max_value=120),
            number_field("desired_spending", "Desired yearly spending ($)", 60000, step=1000.0),
            number_field("withdrawal_rate", "Withdrawal rate (%)", 4.0, step=0.25),
        ],
        [
            ("projected_savings", "Projected savings", "money"),
            ("target_nest_egg", "Target nest egg", "money"),
            ("gap", "Shortfall", "money"),
            ("projected_annual_income", "Annual income", "money"),
            ("projected_monthly_income", "Monthly income", "money"),
        ],
        _path_chart("Projected Savings"),
    ),
    "savings-goal": _entry(
        savings.savings_goal,
        [
            number_field("current_savings", "Current savings ($)", 2000, step=100.0),
            number_field("monthly_contribution", "Monthly contribution ($)", 300, step=25.0),
            number_field("annual_rate", "Annual interest rate (%)", 4.0, step=0.25),
            number_field("target", "Savings goal ($)", 20000, step=500.0),
        ],
        [
            ("months", "Time to goal", "months"),
            ("total_contributed", "Total contributed", "money2"),
            ("interest_earned", "Interest earned", "money2"),
        ],
        lambda result, values: [growth_chart(result["path"], values["target"], title="Savings Toward Goal",
                                             x_title="Month")] if len(result["path"]) > 1 else [],
    ),
    "compound-interest": _entry(
        lambda principal, annual_rate, years, periods_per_year: savings.compound_interest(
            principal, annual_rate, years, int(periods_per_year)),
        [
            number_field("principal", "Initial deposit ($)", 10000, step=100.0),
            number_field("annual_rate", "Annual rate (%)", 5.0, step=0.25),
            number_field("years", "Years", 10, step=1.0),
            select_field("periods_per_year", "Compounding", [12, 1, 4, 365],
                         labels={1: "Yearly", 4: "Quarterly", 12: "Monthly", 365: "Daily"}),
        ],
        [
            ("future_value", "Future value", "money2"),
            ("interest_earned", "Interest earned", "money2"),
            ("effective_annual_rate", "Effective annual rate", "percent"),
        ],
        _path_chart("Growth by Year"),
    ),
    "drip": _entry(
        savings.drip_growth,
        [
            number_field("initial", "Initial investment ($)", 10000, step=500.0),
            number_field("dividend_yield", "Dividend yield (%)", 3.0, step=0.1),
            number_field("price_growth", "Share price growth (%/yr)", 5.0, step=0.25),
            int_field("years", "Years", 20, max_value=100),
        ],
        [
            ("value_with_drip", "Value with DRIP", "money"),
            ("value_without_drip", "Value without DRIP", "money"),
            ("drip_advantage", "DRIP advantage", "money"),
            ("annual_dividend_with_drip", "Yearly dividend with DRIP", "money2"),
            ("annual_dividend_without_drip", "Yearly dividend without DRIP", "money2"),
        ],
        _path_chart("Value With Dividends Reinvested"),
    ),
    "401k": _entry(
        savings.employer_401k,
        [
            number_field("current_balance", "Current balance ($)", 25000, step=1000.0),
            number_field("employee_annual", "Your yearly contribution ($)", 10000, step=500.0),
            number_field("return_rate", "Expected return (%)", 7.0, step=0.25),
            int_field("years", "Years until retirement", 25, max_value=120),
            select_field("match_mode", "Employer match", savings.MATCH_MODES,
                         labels={"none": "No match", "flat": "Flat amount",
                                 "percent_of_salary": "Percent of salary"}),
            number_field("employer_flat", "Employer flat match ($/yr)", 0, step=100.0),
            number_field("salary", "Salary ($)", 80000, step=1000.0),
            number_field("match_percent", "Match (% of salary)", 3.0, step=0.5),
        ],
        [
            ("final_balance", "Balance at retirement", "money"),
            ("employer_annual", "Employer match per year", "money"),
            ("total_contributed", "Total contributed", "money"),
            ("growth", "Investment growth", "money"),
        ],
        _path_chart("401(k) Balance"),
    ),
    "roth-vs-traditional": _entry(
        roth.roth_vs_traditional,
        [
            number_field("annual_contribution", "Annual contribution ($)", 7000, step=500.0),
            int_field("years", "Years of contributions", 25, max_value=120),
            number_field("return_rate", "Expected return (%)", 7.0, step=0.25),
            number_field("tax_now", "Tax rate now (%)", 22.0, step=1.0),
            number_field("tax_retirement", "Tax rate in retirement (%)", 15.0, step=1.0),
        ],
        [
            ("future_value", "Account value", "money"),
            ("roth_after_tax", "Roth after tax", "money"),
            ("traditional_after_tax", "Traditional after tax", "money"),
            ("difference", "Roth advantage", "money"),
            ("better", "Better choice", "text"),
        ],
        _bars("After-Tax Value", [("Roth", "roth_after_tax"), ("Traditional", "traditional_after_tax")],
              highlight=lambda r: r["better"]),
    ),
    "ira-limits": _entry(
        _ira_limits,
        [
            int_field("start_age", "Starting age", 30, min_value=18, max_value=100),
            int_field("end_age", "Stop contributing at age", 65, min_value=19, max_value=100),
            number_field("base_limit", "Current limit ($)", 7000, step=500.0),
            number_field("inflation", "Limit growth (%/yr)", 3.0, step=0.25),
        ],
        [
            ("first_limit", "Limit this year", "money"),
            ("last_limit", "Limit in final year", "money"),
            ("total", "Total you could contribute", "money"),
        ],
        table=lambda result: {"title": "Contribution Limits", "rows": result["schedule"],
                              "columns": ["age", "limit"]},
    ),
    "retirement-income": _entry(
        savings.retirement_income,
        [
            number_field("portfolio", "Portfolio at retirement ($)", 1000000, step=10000.0),
            number_field("withdrawal_rate", "Withdrawal rate (%)", 4.0, step=0.25),
            number_field("other_income", "Pensions and other income ($/yr)", 0, step=1000.0),
            number_field("ss_monthly_pia", "Social Security at full retirement age ($/mo)", 2000, step=50.0),
            int_field("ss_claim_age", "Social Security claiming age", 67, min_value=62, max_value=70),
            number_field("spouse_monthly_pia", "Spouse's benefit at full retirement age ($/mo)", 0, step=50.0,
                         help="Leave at 0 for a single earner."),
            int_field("spouse_claim_age", "Spouse's claiming age", 67, min_value=62, max_value=70),
            checkbox_field("survivor", "Survivor only (keep the larger benefit)", False),
        ],
        [
            ("from_portfolio", "From portfolio", "money"),
            ("social_security", "Social Security", "money"),
            ("spouse_benefit", "Spouse's Social Security", "money"),
            ("other_income", "Other income", "money"),
            ("total_annual_income", "Total yearly income", "money"),
            ("monthly_income", "Monthly income", "money"),
        ],
        _bars("Income Sources", [("Portfolio", "from_portfolio"), ("Social Security", "social_security"),
                                 ("Other", "other_income")]),
    ),
}


# ---------- Tax and salary ----------
TAX_TOOLS = {
    "take-home-pay": _entry(
        lambda **v: taxes.take_home_pay(year=settings.tax_year, **v),
        [
            number_field("gross_annual", "Gross salary ($/yr)", 85000, step=1000.0),
            _filing(),
            _state(),
            number_field("pre_tax_deductions", "Pre-tax deductions ($/yr)", 0, step=500.0,
                         help="401(k), HSA and similar. Lowers income tax, not FICA."),
            select_field("pay_frequency", "Pay frequency", list(taxes.PAY_PERIODS), default="biweekly"),
        ],
        [
            ("net_annual", "Take-home pay (yearly)", "money"),
            ("net_monthly", "Take-home pay (monthly)", "money2"),
            ("net_per_paycheck", "Per paycheck", "money2"),
            ("federal_tax", "Federal income tax", "money"),
            ("state_tax", "State income tax", "money"),
            ("social_security", "Social Security", "money"),
            ("medicare", "Medicare", "money"),
            ("effective_tax_rate", "Effective tax rate", "percent"),
        ],
        _bars("Where Your Salary Goes", [("Take-home", "net_annual"), ("Federal", "federal_tax"),
                                         ("State", "state_tax"), ("Social Security", "social_security"),
                                         ("Medicare", "medicare")]),
    ),
    "income-tax": _entry(
        lambda **v: taxes.income_tax(year=settings.tax_year, **v),
        [
            number_field("income", "Annual income ($)", 85000, step=1000.0),
            _filing(),
            _state(),
        ],
        [
            ("taxable_income", "Federal taxable income", "money"),
            ("federal_tax", "Federal tax", "money"),
            ("state_tax", "State tax", "money"),
            ("marginal_rate", "Marginal rate", "percent"),
            ("effective_rate", "Effective federal rate", "percent"),
            ("after_tax_income", "After-tax income", "money"),
        ],
    ),
    "self-employment-tax": _entry(
        lambda **v: taxes.self_employment_tax(year=settings.tax_year, **v),
        [
            number_field("net_profit", "Net self-employment profit ($)", 60000, step=1000.0),
            number_field("wages_already_ss", "W-2 wages already taxed for Social Security ($)", 0, step=1000.0),
            checkbox_field("apply_9235", "Apply the 92.35% adjustment", True),
        ],
        [
            ("total_se_tax", "Self-employment tax", "money2"),
            ("social_security_tax", "Social Security part", "money2"),
            ("medicare_tax", "Medicare part", "money2"),
            ("deductible_half", "Deductible half", "money2"),
            ("effective_rate", "Effective rate", "percent"),
        ],
    ),
    "capital-gains-tax": _entry(
        lambda **v: taxes.capital_gains(year=settings.tax_year, **v),
        [
            number_field("purchase_price", "Purchase price ($)", 10000, step=100.0),
            number_field("sale_price", "Sale price ($)", 30000, step=100.0),
            int_field("holding_months", "Months held", 18),
            number_field("ordinary_income", "Other taxable income ($/yr)", 60000, step=1000.0),
            _filing(),
        ],
        [
            ("gain", "Capital gain", "money"),
            ("term", "Holding period", "text"),
            ("tax", "Federal tax", "money2"),
            ("effective_rate", "Rate on gain", "percent"),
            ("net_proceeds", "Proceeds after tax", "money"),
        ],
    ),
    "hourly-to-salary": _entry(
        taxes.hourly_to_salary,
        [
            number_field("hourly", "Hourly rate ($)", 25, step=0.5),
            number_field("hours_per_week", "Hours per week", 40, step=1.0),
            number_field("weeks_per_year", "Weeks per year", 52, step=1.0, max_value=53.0),
        ],
        [
            ("annual", "Annual", "money"),
            ("monthly", "Monthly", "money2"),
            ("weekly", "Weekly", "money2"),
            ("daily", "Daily", "money2"),
        ],
    ),
    "dividend-tax": _entry(
        lambda **v: taxes.dividend_tax(year=settings.tax_year, **v),
        [
            number_field("qualified", "Qualified dividends ($)", 5000, step=100.0),
            number_field("ordinary", "Ordinary dividends ($)", 1000, step=100.0),
            number_field("other_income", "Other income ($/yr)", 60000, step=1000.0),
            _filing(),
        ],
        [
            ("qualified_tax", "Tax on qualified", "money2"),
            ("ordinary_tax", "Tax on ordinary", "money2"),
            ("total_tax", "Total dividend tax", "money2"),
            ("effective_rate", "Effective rate", "percent"),
            ("after_tax_dividends", "Dividends after tax", "money2"),
        ],
    ),
}


# ---------- Currency and transfers ----------
PROVIDER_COLUMNS = [
    text_field("name", "Provider"),
    number_field("fixed_fee", "Fixed fee ($)", 0, step=1.0),
    number_field("percent_fee", "Fee (%)", 0, step=0.1),
    number_field("fx_markup", "FX markup (%)", 0, step=0.1),
]


def _provider_charts(result, values):
    rows = result["providers"]
    return [comparison_bars([r["name"] for r in rows], [r["total_cost"] for r in rows],
                            title="Total Transfer Cost", highlight=result["cheapest"])]


CURRENCY_TOOLS = {
    "exchange-rate-markup": _entry(
        currency.exchange_rate_markup,
        [
            number_field("mid_rate", "Mid-market rate", 1.10, step=0.0001, format="%.4f"),
            number_field("offered_rate", "Offered rate", 1.05, step=0.0001, format="%.4f"),
            number_field("amount", "Amount to exchange", 1000, step=100.0),
        ],
        [
            ("markup_percent", "Markup", "percent"),
            ("hidden_loss", "Hidden cost", "money2"),
            ("value_at_mid", "Value at mid-market", "money2"),
            ("value_at_offered", "Value at offered rate", "money2"),
        ],
    ),
    "cheapest-transfer": _entry(
        currency.cheapest_transfer,
        [
            number_field("amount", "Amount to send ($)", 1000, step=100.0),
            rows_field("providers", "Providers", PROVIDER_COLUMNS, currency.DEFAULT_PROVIDERS,
                       add_label="Add provider"),
        ],
        [
            ("cheapest", "Cheapest option", "text"),
            ("cheapest_cost", "Its total cost", "money2"),
        ],
        _provider_charts,
        lambda result: {"title": "Providers", "rows": result["providers"],
                        "columns": ["name", "fixed_fee", "percent_fee_cost", "fx_cost", "total_cost",
                                    "cost_rate", "amount_received"]},
    ),
    "wire-transfer-cost": _entry(
        currency.wire_transfer_cost,
        [
            number_field("amount", "Transfer amount ($)", 2000, step=100.0),
            number_field("outgoing_fee", "Outgoing wire fee ($)", 25, step=1.0),
            number_field("intermediary_fees", "Intermediary bank fees ($)", 15, step=1.0),
            number_field("recipient_fees", "Recipient bank fee ($)", 10, step=1.0),
            number_field("fx_markup", "Exchange rate markup (%)", 1.2, step=0.1),
        ],
        [
            ("total_cost", "Total cost", "money2"),
            ("effective_rate", "Cost as % of transfer", "percent"),
            ("amount_remaining", "Amount received", "money2"),
            ("fx_cost", "FX markup cost", "money2"),
        ],
    ),
    "cash-vs-card": _entry(
        currency.cash_vs_card,
        [
            number_field("amount", "Amount to spend (home currency)", 1000, step=50.0),
            number_field("mid_rate", "Mid-market rate", 0.92, step=0.0001, format="%.4f"),
            number_field("cash_rate", "Cash exchange rate", 0.88, step=0.0001, format="%.4f"),
            number_field("cash_flat_fee", "Cash flat fee", 5, step=1.0),
            number_field("cash_percent_fee", "Cash fee (%)", 1.0, step=0.1),
            optional_number_field("card_rate", "Card exchange rate (blank = mid-market)", step=0.0001),
            number_field("card_fx_fee_percent", "Card foreign transaction fee (%)", 3.0, step=0.1),
        ],
        [
            ("cheaper", "Cheaper option", "text"),
            ("difference", "Difference", "money2"),
            ("cash_cost", "Cash cost vs mid-market", "money2"),
            ("card_cost", "Card cost vs mid-market", "money2"),
            ("cash_received", "Cash received", "money2"),
            ("card_received", "Card purchase value", "money2"),
        ],
        _bars("Cost Against Mid-Market", [("Cash", "cash_cost"), ("Card", "card_cost")],
              highlight=lambda r: {"Cash exchange": "Cash", "Card payment": "Card"}.get(r["cheaper"])),
    ),
}


# ---------- Oil and energy ----------
def _contract_size():
    return number_field("barrels_per_contract", "Barrels per contract", 1000, step=100.0)


def _rounding(default):
    return select_field("rounding", "Rounding", oil.ROUNDING_MODES, default=default, labels=ROUNDING_LABELS)


ENERGY_TOOLS = {
    "oil-futures-pl": _entry(
        oil.futures_pl,
        [
            select_field("side", "Position", ["long", "short"], labels={"long": "Long", "short": "Short"}),
            number_field("entry_price", "Entry price ($/bbl)", 78.0, step=0.1),
            number_field("exit_price", "Exit price ($/bbl)", 82.0, step=0.1),
            int_field("contracts", "Contracts", 2, min_value=1),
            _contract_size(),
        ],
        [
            ("total_pl", "Profit / loss", "money2"),
            ("pl_per_barrel", "P/L per barrel", "money2"),
            ("total_barrels", "Total barrels", "number"),
            ("notional_entry", "Notional at entry", "money"),
        ],
    ),
    "oil-futures-margin": _entry(
        oil.futures_margin_risk,
        [
            number_field("price", "Price ($/bbl)", 80.0, step=0.1),
            int_field("contracts", "Contracts", 2, min_value=1),
            _contract_size(),
            number_field("margin_rate", "Margin (% of notional)", 10.0, step=0.5),
            number_field("adverse_move", "Adverse move ($/bbl)", 3.0, step=0.1),
        ],
        [
            ("notional", "Notional value", "money"),
            ("margin", "Margin required", "money"),
            ("leverage", "Leverage (x)", "number"),
            ("adverse_pl", "P/L on adverse move", "money"),
            ("loss_pct_of_margin", "Loss as % of margin", "percent"),
        ],
    ),
    "oil-position-size": _entry(
        oil.position_size,
        [
            number_field("account_size", "Account size ($)", 100000, step=1000.0),
            number_field("risk_percent", "Risk per trade (%)", 2.0, step=0.25),
            number_field("stop_distance", "Stop distance ($/bbl)", 1.5, step=0.05),
            _contract_size(),
            _rounding("down"),
        ],
        [
            ("contracts", "Contracts", "number"),
            ("risk_budget", "Risk budget", "money2"),
            ("risk_per_contract", "Risk per contract", "money2"),
            ("total_risk", "Risk if stopped out", "money2"),
            ("unused_risk_budget", "Unused risk budget", "money2"),
        ],
    ),
    "oil-hedge-ratio": _entry(
        oil.hedge_ratio,
        [
            number_field("exposure_barrels", "Physical exposure (barrels)", 25000, step=1000.0),
            _contract_size(),
            number_field("coverage_percent", "Hedge coverage (%)", 80.0, step=5.0, max_value=100.0),
            _rounding("nearest"),
        ],
        [
            ("contracts", "Contracts to hedge", "number"),
            ("hedged_volume", "Target hedged volume", "number"),
            ("implied_hedged_volume", "Hedged volume", "number"),
            ("implied_coverage", "Actual coverage", "percent"),
        ],
    ),
    "oil-price-sensitivity": _entry(
        oil.price_sensitivity,
        [
            number_field("exposure_barrels", "Exposure (barrels per period)", 10000, step=100.0),
            number_field("baseline_price", "Baseline price ($/bbl)", 80.0, step=0.5),
            number_field("change", "Price change", 5.0, step=0.5, min_value=None),
            select_field("change_mode", "Change is in", ["dollar", "percent"],
                         labels={"dollar": "$ per barrel", "percent": "% of price"}),
            number_field("pass_through_percent", "Passed on to customers (%)", 40.0, step=5.0, max_value=100.0),
        ],
        [
            ("new_price", "New price", "money2"),
            ("gross_impact", "Gross cost impact", "money"),
            ("passed_through", "Passed through", "money"),
            ("net_impact", "Net impact", "money"),
            ("change_percent", "Price change", "percent"),
        ],
    ),
    "wti-brent-spread": _entry(
        oil.wti_brent_spread,
        [
            number_field("wti", "WTI ($/bbl)", 78.0, step=0.1),
            number_field("brent", "Brent ($/bbl)", 82.0, step=0.1),
        ],
        [
            ("spread", "Brent - WTI", "money2"),
            ("spread_pct_of_wti", "Spread vs WTI", "percent"),
            ("higher", "Higher benchmark", "text"),
        ],
    ),
    "crack-spread": _entry(
        lambda crude, gasoline, distillate, crude_barrels, crude_in, gas_out, dist_out: oil.crack_spread(
            crude, gasoline, distillate, crude_barrels, (crude_in, gas_out, dist_out)),
        [
            number_field("crude", "Crude ($/bbl)", 80.0, step=0.5),
            number_field("gasoline", "Gasoline ($/bbl)", 100.0, step=0.5),
            number_field("distillate", "Distillate ($/bbl)", 110.0, step=0.5),
            number_field("crude_barrels", "Crude volume (barrels)", 10000, step=1000.0),
            int_field("crude_in", "Crude barrels in ratio", 3, min_value=1, max_value=1000),
            int_field("gas_out", "Gasoline barrels in ratio", 2, max_value=1000),
            int_field("dist_out", "Distillate barrels in ratio", 1, max_value=1000),
        ],
        [
            ("crack_per_barrel", "Crack spread ($/bbl)", "money2"),
            ("total_margin", "Total margin", "money"),
            ("ratio", "Ratio", "text"),
        ],
    ),
    "barrel-gallon": _entry(
        oil.barrels_gallons,
        [
            number_field("amount", "Amount", 1.0, step=1.0),
            select_field("direction", "Convert", ["barrels_to_gallons", "gallons_to_barrels"],
                         labels={"barrels_to_gallons": "Barrels → gallons",
                                 "gallons_to_barrels": "Gallons → barrels"}),
            number_field("gallons_per_barrel", "Gallons per barrel", 42.0, step=1.0),
        ],
        [
            ("result", "Result", "number"),
            ("unit", "Unit", "text"),
        ],
    ),
    "heating-oil-cost": _entry(
        oil.heating_oil_monthly_cost,
        [
            number_field("price_per_gallon", "Price per gallon ($)", 3.8, step=0.05),
            number_field("daily_usage", "Daily usage (gallons)", 4.0, step=0.5),
            number_field("heating_days", "Heating days in month", 30, step=1.0, max_value=31.0),
            number_field("delivery_fee", "Delivery fee ($)", 0, step=5.0),
            number_field("tax_percent", "Tax (%)", 0, step=0.5),
        ],
        [
            ("total", "Monthly cost", "money2"),
            ("gallons", "Gallons used", "number"),
            ("fuel_cost", "Fuel cost", "money2"),
            ("tax", "Tax", "money2"),
            ("effective_price_per_gallon", "All-in price per gallon", "money2"),
        ],
    ),
    "oil-price-change": _entry(
        oil.price_change_percent,
        [
            number_field("old_price", "Old price ($)", 75.0, step=0.5),
            number_field("new_price", "New price ($)", 82.0, step=0.5),
        ],
        [
            ("percent_change", "Change", "percent"),
            ("difference", "Difference", "money2"),
            ("direction", "Direction", "text"),
        ],
    ),
}


# ---------- Business ----------
BUSINESS_TOOLS = {
    "store-profit": _entry(
        business.store_profit,
        [
            number_field("revenue", "Revenue ($)", 50000, step=1000.0),
            number_field("cogs_rate", "Cost of goods (% of revenue)", 40.0, step=1.0),
            number_field("rent", "Rent ($)", 5000, step=100.0),
            number_field("payroll", "Payroll ($)", 12000, step=100.0),
            number_field("other_fixed", "Other fixed costs ($)", 3000, step=100.0),
        ],
        [
            ("gross_profit", "Gross profit", "money"),
            ("net_profit", "Net profit", "money"),
            ("net_margin", "Net margin", "percent"),
            ("break_even_revenue", "Break-even revenue", "money"),
        ],
    ),
    "break-even-units": _entry(
        business.break_even_units,
        [
            number_field("fixed_costs", "Fixed costs ($)", 20000, step=500.0),
            number_field("price_per_unit", "Price per unit ($)", 50, step=1.0),
            number_field("variable_cost_per_unit", "Variable cost per unit ($)", 30, step=1.0),
        ],
        [
            ("units_to_sell", "Units to break even", "number"),
            ("contribution_margin", "Contribution margin", "money2"),
            ("break_even_revenue", "Break-even revenue", "money"),
        ],
    ),
    "roi": _entry(
        business.roi,
        [
            number_field("investment", "Initial investment ($)", 10000, step=500.0),
            number_field("final_value", "Final value ($)", 15000, step=500.0),
            number_field("years", "Years held (optional)", 3, step=1.0),
        ],
        [
            ("profit", "Profit", "money"),
            ("roi", "ROI", "percent"),
            ("annualized_roi", "Annualized ROI", "percent"),
        ],
    ),
    "margin-markup": _entry(
        business.margin_markup,
        [
            number_field("cost", "Cost ($)", 60, step=1.0),
            number_field("price", "Selling price ($)", 100, step=1.0),
        ],
        [
            ("profit", "Profit per unit", "money2"),
            ("margin", "Margin", "percent"),
            ("markup", "Markup", "percent"),
        ],
    ),
    "dscr": _entry(
        business.dscr,
        [
            number_field("net_operating_income", "Net operating income ($/yr)", 150000, step=1000.0, min_value=None),
            number_field("annual_debt_service", "Annual debt service ($)", 110000, step=1000.0),
        ],
        [
            ("dscr", "DSCR", "number"),
            ("band", "Band", "text"),
            ("cash_after_debt", "Cash after debt service", "money"),
        ],
    ),
}


# ---------- Health and insurance ----------
INSURANCE_TOOLS = {
    "health-out-of-pocket": _entry(
        insurance.out_of_pocket_cost,
        [
            number_field("monthly_premium", "Monthly premium ($)", 450, step=10.0),
            number_field("deductible", "Deductible ($)", 2000, step=100.0),
            number_field("coinsurance", "Coinsurance (%)", 20.0, step=5.0, max_value=100.0),
            number_field("out_of_pocket_max", "Out-of-pocket maximum ($)", 7000, step=100.0,
                         help="Use 0 if the plan has no maximum."),
            number_field("expected_expenses", "Expected medical bills ($/yr)", 12000, step=500.0),
        ],
        [
            ("annual_premium", "Premiums per year", "money"),
            ("out_of_pocket", "Your share of bills", "money"),
            ("total_annual_cost", "Total yearly cost", "money"),
            ("insurance_paid", "Paid by insurance", "money"),
            ("hit_max", "Reached the maximum", "yesno"),
        ],
        _bars("Where Your Money Goes", [("Premiums", "annual_premium"), ("Deductible", "deductible_paid"),
                                        ("Coinsurance", "coinsurance_paid")]),
    ),
    "high-vs-low-deductible": _entry(
        insurance.deductible_plan_comparison,
        [
            number_field("expected_expenses", "Expected medical bills ($/yr)", 6000, step=500.0),
            number_field("high_premium", "High-deductible plan premium ($/yr)", 3600, step=100.0),
            number_field("high_deductible", "High-deductible plan deductible ($)", 4000, step=100.0),
            number_field("high_coinsurance", "High-deductible plan coinsurance (%)", 20.0, step=5.0,
                         max_value=100.0),
            number_field("high_out_of_pocket_max", "High-deductible plan maximum ($, 0 = none)", 8000,
                         step=100.0),
            number_field("low_premium", "Low-deductible plan premium ($/yr)", 6000, step=100.0),
            number_field("low_deductible", "Low-deductible plan deductible ($)", 1000, step=100.0),
            number_field("low_coinsurance", "Low-deductible plan coinsurance (%)", 10.0, step=5.0,
                         max_value=100.0),
            number_field("low_out_of_pocket_max", "Low-deductible plan maximum ($, 0 = none)", 4000,
                         step=100.0),
        ],
        [
            ("high_total", "High-deductible total", "money"),
            ("low_total", "Low-deductible total", "money"),
            ("cheaper", "Cheaper plan", "text"),
            ("savings", "You save", "money"),
        ],
        _bars("Total Yearly Cost", [("High deductible", "high_total"), ("Low deductible", "low_total")],
              highlight=lambda r: r["cheaper"]),
    ),
    "er-copay-vs-coinsurance": _entry(
        insurance.er_copay_vs_coinsurance,
        [
            number_field("charges", "ER bill ($)", 3000, step=100.0),
            number_field("copay", "Flat copay ($)", 350, step=25.0),
            number_field("coinsurance", "Coinsurance (%)", 20.0, step=5.0, max_value=100.0),
        ],
        [
            ("copay_cost", "With copay", "money2"),
            ("coinsurance_cost", "With coinsurance", "money2"),
            ("cheaper", "Cheaper option", "text"),
            ("difference", "Difference", "money2"),
            ("break_even_charges", "Bill where they match", "money"),
        ],
        _bars("Out-of-Pocket Cost", [("Copay", "copay_cost"), ("Coinsurance", "coinsurance_cost")]),
    ),
}


REGISTRY: Dict[str, Dict] = {
    **LOAN_TOOLS,
    **DEBT_TOOLS,
    **SAVINGS_TOOLS,
    **TAX_TOOLS,
    **CURRENCY_TOOLS,
    **ENERGY_TOOLS,
    **BUSINESS_TOOLS,
    **INSURANCE_TOOLS,
}


def get_entry(slug: str) -> Optional[Dict]:
    return REGISTRY.get(slug)


def run(slug: str, values: Dict) -> Dict:
    """Compute a tool's result from its form values."""
    return REGISTRY[slug]["compute"](**values)
