"""
Cap Rate Calculations

Going-in and all-in capitalization rates, all-in acquisition price, and the
inverse solver that finds the seller price hitting a target all-in cap rate.

All rates are passed and returned in percent (7.2 means 7.2%). Degenerate
inputs (zero price, zero NOI, zero cap rate) return 0 instead of raising,
so half-filled forms never break rendering.
"""

from dataclasses import dataclass, fields
from typing import Dict, List, Mapping, Optional, Sequence

from app.calculations.formatting import parse_formatted_number

GREEN_THRESHOLD = 8.5
ORANGE_THRESHOLD = 6.01

DEFAULT_CAP_RATE_TARGETS = (9, 8, 7, 6)
PRESET_CAP_RATES = (6, 7, 8, 9, 10)

COLOR_CLASSES = {
    "green": "bg-green-500",
    "orange": "bg-orange-500",
    "red": "bg-red-500",
}

RECOMMENDATIONS = {
    "green": "Excellent opportunity - Submit offer",
    "orange": "Acceptable return - Consider submitting",
    "red": "Below target - No Go",
}


@dataclass(frozen=True)
class Assumptions:
    """Acquisition and financing assumptions, as plain numbers."""

    lease_commission: float = 0.0  # % of annual NOI per commission year
    lease_commission_years: float = 0.0
    closing_costs: float = 0.0  # % of seller price
    loan_interest: float = 0.0  # % annual
    ltc: float = 0.0  # % loan-to-cost
    capex: float = 0.0  # $

    @classmethod
    def from_strings(cls, **values: str) -> "Assumptions":
        """Build from form strings such as capex="150,000"."""
        return parse_assumptions(values)


# Form field names used by the calculator UI
_CAMEL_CASE_KEYS = {
    "leaseCommission": "lease_commission",
    "leaseCommissionYears": "lease_commission_years",
    "closingCosts": "closing_costs",
    "loanInterest": "loan_interest",
    "ltc": "ltc",
    "capex": "capex",
}


def parse_assumptions(values: Mapping[str, object]) -> Assumptions:
    """
    Parse a mapping of form values into numeric Assumptions.

    Accepts snake_case or the form's camelCase keys. Missing or unparseable
    values become 0.
    """
    names = {f.name for f in fields(Assumptions)}
    parsed: Dict[str, float] = {}
    for key, raw in values.items():
        name = _CAMEL_CASE_KEYS.get(key, key)
        if name in names:
            parsed[name] = parse_formatted_number(raw)
    return Assumptions(**parsed)


def calculate_lease_commission_total(
    annual_noi: float, assumptions: Assumptions
) -> float:
    """Lease commission paid on the annual NOI over the commission term."""
    return (
        (assumptions.lease_commission / 100)
        * assumptions.lease_commission_years
        * annual_noi
    )


def calculate_going_in_cap_rate(seller_price: float, annual_noi: float) -> float:
    """
    Calculate the going-in cap rate.

    Args:
        seller_price: Seller asking price
        annual_noi: Annual net operating income

    Returns:
        Cap rate in percent, or 0 if either input is 0
    """
    if seller_price == 0 or annual_noi == 0:
        return 0.0
    return (annual_noi / seller_price) * 100


def calculate_all_in_price(
    annual_noi: float, seller_price: float, assumptions: Assumptions
) -> float:
    """
    Calculate the all-in acquisition price.

    Lease commission and closing costs are computed first; the loan
    interest reserve is applied last, on the sum of the seller price and
    every cost before it.

    Args:
        annual_noi: Annual net operating income
        seller_price: Seller (going-in) price
        assumptions: Acquisition and financing assumptions

    Returns:
        Seller price plus acquisition costs, or 0 if price or NOI is 0
    """
    if seller_price == 0 or annual_noi == 0:
        return 0.0

    lease_commission_total = calculate_lease_commission_total(annual_noi, assumptions)
    closing_costs = seller_price * (assumptions.closing_costs / 100)
    capex = assumptions.capex

    loan_interest_reserve = (
        (assumptions.loan_interest / 100)
        * (assumptions.ltc / 100)
        * (seller_price + lease_commission_total + closing_costs + capex)
    )

    expenses = lease_commission_total + closing_costs + capex + loan_interest_reserve
    return seller_price + expenses


def calculate_all_in_cap_rate(
    seller_price: float, annual_noi: float, assumptions: Assumptions
) -> float:
    """Cap rate on the all-in price, in percent. 0 when not computable."""
    all_in_price = calculate_all_in_price(annual_noi, seller_price, assumptions)
    if all_in_price == 0:
        return 0.0
    return (annual_noi / all_in_price) * 100


def calculate_going_in_price(annual_noi: float, target_cap_rate: float) -> float:
    """Price at which the NOI yields exactly the target cap rate, ignoring costs."""
    if annual_noi == 0 or target_cap_rate == 0:
        return 0.0
    return annual_noi / (target_cap_rate / 100)


def calculate_seller_price_from_cap_rate_stabilized(
    annual_noi: float, target_cap_rate: float, assumptions: Assumptions
) -> float:
    """
    Solve for the seller price that produces a target all-in cap rate.

    The all-in price is linear in the seller price P:

        all_in(P) = P * (1 + B) + A + C

    where
        A = lease commission total + capex
        B = closing% + interest% * ltc% * (1 + closing%)
        C = interest% * ltc% * A

    so P = (annual_noi / target - A - C) / (1 + B).

    Args:
        annual_noi: Annual net operating income
        target_cap_rate: Target all-in cap rate in percent
        assumptions: Acquisition and financing assumptions

    Returns:
        Seller price, floored at 0. A 0 result for non-zero inputs means the
        target cannot be reached at any positive price.
    """
    if annual_noi == 0 or target_cap_rate == 0:
        return 0.0

    closing_costs_pct = assumptions.closing_costs / 100
    loan_interest = assumptions.loan_interest / 100
    ltc = assumptions.ltc / 100

    lease_commission_total = calculate_lease_commission_total(annual_noi, assumptions)

    a = lease_commission_total + assumptions.capex
    b = closing_costs_pct + loan_interest * ltc * (1 + closing_costs_pct)
    c = loan_interest * ltc * a

    target_total = annual_noi / (target_cap_rate / 100)
    seller_price = (target_total - a - c) / (1 + b)

    return max(0.0, seller_price)


def get_cap_rate_color(cap_rate: float) -> str:
    """Classify a cap rate as "green", "orange" or "red"."""
    if cap_rate >= GREEN_THRESHOLD:
        return "green"
    if cap_rate >= ORANGE_THRESHOLD:
        return "orange"
    return "red"


def get_cap_rate_color_class(cap_rate: float) -> str:
    """CSS background class for a cap rate."""
    return COLOR_CLASSES[get_cap_rate_color(cap_rate)]


def get_cap_rate_recommendation(cap_rate: float) -> str:
    return RECOMMENDATIONS[get_cap_rate_color(cap_rate)]


@dataclass
class CapRateResult:
    """Prices supporting a target all-in cap rate."""

    cap_rate: float
    going_in_price: float
    all_in_price: float
    color: str


def calculate_custom_cap_rate(
    annual_noi: float, target_cap_rate: float, assumptions: Assumptions
) -> Optional[CapRateResult]:
    """
    Price a single target all-in cap rate.

    The seller price comes from the solver; the all-in price is the forward
    formula applied to that seller price.

    Returns:
        CapRateResult, or None if the target is not positive or NOI is 0
    """
    if not target_cap_rate or target_cap_rate <= 0 or not annual_noi:
        return None

    going_in_price = calculate_seller_price_from_cap_rate_stabilized(
        annual_noi, target_cap_rate, assumptions
    )
    all_in_price = calculate_all_in_price(annual_noi, going_in_price, assumptions)

    return CapRateResult(
        cap_rate=target_cap_rate,
        going_in_price=going_in_price,
        all_in_price=all_in_price,
        color=get_cap_rate_color(target_cap_rate),
    )


def build_price_grid(
    annual_noi: float,
    assumptions: Assumptions,
    targets: Sequence[float] = DEFAULT_CAP_RATE_TARGETS,
) -> List[Dict]:
    """
    Build the going-in / all-in price table for a list of target cap rates.

    Args:
        annual_noi: Annual net operating income
        assumptions: Acquisition and financing assumptions
        targets: Target cap rates in percent

    Returns:
        List of rows, one per target, in the order given
    """
    rows = []
    for cap_rate in targets:
        seller_price = calculate_seller_price_from_cap_rate_stabilized(
            annual_noi, cap_rate, assumptions
        )
        rows.append(
            {
                "cap_rate": cap_rate,
                "going_in_price": calculate_going_in_price(annual_noi, cap_rate),
                "stabilized_seller_price": seller_price,
                "all_in_price": calculate_all_in_price(
                    annual_noi, seller_price, assumptions
                ),
                "color": get_cap_rate_color(cap_rate),
            }
        )
    return rows
