"""Credit card and multi-debt payoff calculators."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List

from .amortization import monthly_rate
from .errors import InvalidInput

MAX_PLAN_MONTHS = 600  # 50 years
STRATEGIES = ("avalanche", "snowball")


def credit_card_payoff(balance: float, apr: float, monthly_payment: float) -> Dict:
    """Months to clear a card balance paying a fixed amount each month.

    Uses the closed form ``n = -ln(1 - r*B/M) / ln(1 + r)`` rounded up to a
    whole month.
    """
    if balance <= 0 or monthly_payment <= 0 or apr < 0:
        raise InvalidInput("Please enter a positive balance, rate, and monthly payment.")
    r = monthly_rate(apr)
    if r == 0:
        months = math.ceil(balance / monthly_payment)
    else:
        if monthly_payment <= balance * r:
            raise InvalidInput(
                "Monthly payment is too low. Increase it to be higher than the monthly interest."
            )
        n = -math.log(1 - r * balance / monthly_payment) / math.log(1 + r)
        months = math.ceil(n)
    total_paid = monthly_payment * months
    return {
        "months": months,
        "years": months / 12,
        "total_paid": total_paid,
        "interest_paid": total_paid - balance,
    }


def _parse_debts(debts: Iterable[Dict]) -> List[Dict]:
    parsed = []
    for i, d in enumerate(debts):
        balance = float(d.get("balance", 0.0) or 0.0)
        minimum = float(d.get("min_payment", 0.0) or 0.0)
        if balance <= 0 or minimum <= 0:
            continue
        parsed.append({
            "name": (d.get("name") or "").strip() or f"Debt {i + 1}",
            "balance": balance,
            "rate": float(d.get("rate", 0.0) or 0.0),
            "min_payment": minimum,
        })
    return parsed


def debt_payoff_plan(debts: Iterable[Dict], monthly_budget: float, strategy: str = "avalanche") -> Dict:
    """Simulate paying several debts from one monthly budget.

    Every active debt accrues a month of interest and receives its minimum
    payment; whatever is left of the budget goes to a single target debt.
    ``avalanche`` targets the highest rate, ``snowball`` the smallest balance.
    """
    if strategy not in STRATEGIES:
        raise InvalidInput(f"Unknown payoff strategy: {strategy}")
    if monthly_budget <= 0:
        raise InvalidInput("Please enter a positive monthly budget.")
    items = _parse_debts(debts)
    if not items:
        raise InvalidInput("Please enter at least one debt with balance, rate, and minimum payment.")
    if sum(d["min_payment"] for d in items) > monthly_budget:
        raise InvalidInput(
            "Your total minimum payments are greater than your monthly budget. "
            "Increase your budget or adjust minimums."
        )

    balances = [d["balance"] for d in items]
    rates = [monthly_rate(d["rate"]) for d in items]
    payoff_order: List[Dict] = []
    total_interest = 0.0
    month = 0

    while any(b > 0 for b in balances) and month < MAX_PLAN_MONTHS:
        month += 1
        active = [i for i, b in enumerate(balances) if b > 0]
        if strategy == "avalanche":
            target = max(active, key=lambda i: rates[i])
        else:
            target = min(active, key=lambda i: balances[i])
        extra = monthly_budget - sum(items[i]["min_payment"] for i in active)

        for i in active:
            interest = balances[i] * rates[i]
            total_interest += interest
            payment = items[i]["min_payment"]
            if i == target and extra > 0:
                payment += extra
            new_balance = balances[i] + interest - payment
            if new_balance <= 0:
                balances[i] = 0.0
                payoff_order.append({"name": items[i]["name"], "month": month})
            else:
                balances[i] = new_balance

    if any(b > 0 for b in balances):
        raise InvalidInput(
            "Payoff period is too long to estimate with the current inputs. "
            "Try increasing your monthly budget."
        )
    return {
        "strategy": strategy,
        "months": month,
        "years": month / 12,
        "total_interest": total_interest,
        "payoff_order": payoff_order,
    }


def debt_to_income(monthly_debt: float, monthly_income: float) -> Dict:
    """Debt-to-income ratio in percent, rounded to two decimals."""
    if monthly_income <= 0:
        raise InvalidInput("Enter a monthly income greater than 0.")
    if monthly_debt < 0:
        raise InvalidInput("Monthly debt payments cannot be negative.")
    ratio = round(monthly_debt / monthly_income * 100.0, 2)
    if ratio <= 36:
        band = "healthy"
    elif ratio <= 43:
        band = "manageable"
    else:
        band = "high"
    return {"dti": ratio, "band": band, "remaining_income": monthly_income - monthly_debt}


def _pay_down(balance: float, payment: float, rate_for_month) -> Dict:
    b = float(balance)
    months = 0
    interest_total = 0.0
    while b > 0.005 and months < MAX_PLAN_MONTHS:
        months += 1
        r = rate_for_month(months)
        interest = b * r
        if r > 0 and payment <= interest:
            raise InvalidInput(
                "Monthly payment is too low. Increase it to be higher than the monthly interest."
            )
        b -= min(b, payment - interest)
        interest_total += interest
    if b > 0.005:
        raise InvalidInput("Payoff takes longer than 50 years with these inputs.")
    return {"months": months, "interest": interest_total, "total_paid": balance + interest_total}


def balance_transfer(
    balance: float,
    current_apr: float,
    monthly_payment: float,
    transfer_fee: float = 3.0,
    intro_apr: float = 0.0,
    intro_months: int = 12,
    go_to_apr: float = 19.99,
) -> Dict:
    """Pay a card down where it is, or move it to a card with an intro rate.

    The transfer fee (percent of the balance) is added to the moved balance.
    Months up to ``intro_months`` accrue at ``intro_apr``, later months at
    ``go_to_apr``.
    """
    if balance <= 0 or monthly_payment <= 0:
        raise InvalidInput("Please enter a positive balance and monthly payment.")
    if min(current_apr, intro_apr, go_to_apr, transfer_fee, intro_months) < 0:
        raise InvalidInput("Rates, fee and intro months cannot be negative.")
    current = _pay_down(balance, monthly_payment, lambda m: monthly_rate(current_apr))
    fee = balance * transfer_fee / 100.0
    moved = _pay_down(
        balance + fee,
        monthly_payment,
        lambda m: monthly_rate(intro_apr if m <= intro_months else go_to_apr),
    )
    savings = current["total_paid"] - moved["total_paid"]
    if savings > 0:
        better = "Transfer"
    elif savings < 0:
        better = "Keep current card"
    else:
        better = "Same"
    return {
        "fee": fee,
        "current_months": current["months"],
        "current_interest": current["interest"],
        "current_total_paid": current["total_paid"],
        "transfer_months": moved["months"],
        "transfer_interest": moved["interest"],
        "transfer_total_paid": moved["total_paid"],
        "savings": savings,
        "better": better,
    }


__all__ = ["credit_card_payoff", "debt_payoff_plan", "debt_to_income", "balance_transfer", "STRATEGIES"]
