"""
Cap rate calculation API endpoints.

These endpoints accept form values as typed (strings with commas, "$" and
so on), parse them at the edge and return calculated results together with
display strings. Used by the calculator UI for real-time updates.
"""

import logging
from typing import Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.config import get_settings
from app.calculations import cap_rate, noi
from app.calculations.formatting import (
    format_currency,
    format_percentage,
    parse_formatted_number,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _default(name: str):
    return lambda: getattr(get_settings(), name)


class PropertyInput(BaseModel):
    """Property form values."""

    seller_asking_price: str = ""
    property_size: str = ""  # acres
    building_size: str = ""  # sq ft


class NOIInput(BaseModel):
    """NOI form values (monthly)."""

    monthly_property_noi: str = ""
    monthly_acre_noi: str = ""
    monthly_sqft_noi: str = ""


class AssumptionsInput(BaseModel):
    """Assumption form values; omitted fields take the configured defaults."""

    lease_commission: str = Field(default_factory=_default("default_lease_commission"))
    lease_commission_years: str = Field(
        default_factory=_default("default_lease_commission_years")
    )
    closing_costs: str = Field(default_factory=_default("default_closing_costs"))
    loan_interest: str = Field(default_factory=_default("default_loan_interest"))
    ltc: str = Field(default_factory=_default("default_ltc"))
    capex: str = Field(default_factory=_default("default_capex"))

    def to_assumptions(self) -> cap_rate.Assumptions:
        return cap_rate.parse_assumptions(self.model_dump())


def _annual_noi(noi_input: NOIInput) -> float:
    return noi.annual_noi(parse_formatted_number(noi_input.monthly_property_noi))


class DefaultsResponse(BaseModel):
    """Default form values and cap rate tables."""

    assumptions: AssumptionsInput
    cap_rate_targets: List[float]
    preset_cap_rates: List[float]


@router.get("/defaults", response_model=DefaultsResponse)
async def get_defaults():
    """Return the default assumptions and cap rate tables."""
    settings = get_settings()
    return DefaultsResponse(
        assumptions=AssumptionsInput(),
        cap_rate_targets=settings.cap_rate_targets,
        preset_cap_rates=settings.preset_cap_rates,
    )


class CapRateInput(BaseModel):
    """Input for going-in / all-in cap rate calculation."""

    property_data: PropertyInput
    noi_data: NOIInput
    assumptions: AssumptionsInput = Field(default_factory=AssumptionsInput)


class CapRateResponse(BaseModel):
    """Current cap rates at the asking price."""

    asking_price: float
    monthly_noi: float
    annual_noi: float
    all_in_price: float
    going_in_cap_rate: float
    all_in_cap_rate: float
    going_in_color: str
    all_in_color: str
    formatted: Dict[str, str]


@router.post("/cap-rates", response_model=CapRateResponse)
async def calculate_cap_rates(inputs: CapRateInput):
    """Calculate going-in and all-in cap rates at the asking price."""

    asking_price = parse_formatted_number(inputs.property_data.seller_asking_price)
    monthly_noi = parse_formatted_number(inputs.noi_data.monthly_property_noi)
    annual_noi = noi.annual_noi(monthly_noi)
    assumptions = inputs.assumptions.to_assumptions()

    going_in = cap_rate.calculate_going_in_cap_rate(asking_price, annual_noi)
    all_in = cap_rate.calculate_all_in_cap_rate(asking_price, annual_noi, assumptions)
    all_in_price = cap_rate.calculate_all_in_price(annual_noi, asking_price, assumptions)

    logger.debug(
        f"Cap rates for price={asking_price} noi={annual_noi}: "
        f"going-in={going_in:.4f} all-in={all_in:.4f}"
    )

    return CapRateResponse(
        asking_price=asking_price,
        monthly_noi=monthly_noi,
        annual_noi=annual_noi,
        all_in_price=all_in_price,
        going_in_cap_rate=going_in,
        all_in_cap_rate=all_in,
        going_in_color=cap_rate.get_cap_rate_color(going_in),
        all_in_color=cap_rate.get_cap_rate_color(all_in),
        formatted={
            "asking_price": format_currency(asking_price),
            "annual_noi": format_currency(annual_noi),
            "all_in_price": format_currency(all_in_price),
            "going_in_cap_rate": format_percentage(going_in),
            "all_in_cap_rate": format_percentage(all_in),
        },
    )


class PriceGridInput(BaseModel):
    """Input for the target cap rate price table."""

    noi_data: NOIInput
    assumptions: AssumptionsInput = Field(default_factory=AssumptionsInput)
    targets: Optional[List[float]] = None


class PriceGridResponse(BaseModel):
    """Going-in and all-in prices per target cap rate."""

    annual_noi: float
    rows: List[dict]


@router.post("/price-grid", response_model=PriceGridResponse)
async def calculate_price_grid(inputs: PriceGridInput):
    """Price each target cap rate on a going-in and an all-in basis."""

    targets = inputs.targets or get_settings().cap_rate_targets
    annual_noi = _annual_noi(inputs.noi_data)

    rows = cap_rate.build_price_grid(
        annual_noi, inputs.assumptions.to_assumptions(), targets
    )
    for row in rows:
        row["formatted"] = {
            "going_in_price": format_currency(row["going_in_price"], 0),
            "stabilized_seller_price": format_currency(
                row["stabilized_seller_price"], 0
            ),
            "all_in_price": format_currency(row["all_in_price"], 0),
        }

    return PriceGridResponse(annual_noi=annual_noi, rows=rows)


class TargetPriceInput(BaseModel):
    """Input for a custom target all-in cap rate."""

    noi_data: NOIInput
    assumptions: AssumptionsInput = Field(default_factory=AssumptionsInput)
    target_cap_rate: float


class TargetPriceResponse(BaseModel):
    """Seller and all-in prices supporting a target cap rate."""

    cap_rate: float
    going_in_price: float
    all_in_price: float
    achieved_all_in_cap_rate: float
    color: str
    recommendation: str
    feasible: bool
    formatted: Dict[str, str]


@router.post("/target-price", response_model=TargetPriceResponse)
async def calculate_target_price(inputs: TargetPriceInput):
    """Solve the seller price for a target all-in cap rate."""

    annual_noi = _annual_noi(inputs.noi_data)
    assumptions = inputs.assumptions.to_assumptions()

    result = cap_rate.calculate_custom_cap_rate(
        annual_noi, inputs.target_cap_rate, assumptions
    )
    if result is None:
        raise HTTPException(
            status_code=400,
            detail="Target cap rate and monthly NOI must both be greater than 0",
        )

    feasible = result.going_in_price > 0
    if not feasible:
        logger.warning(
            f"No feasible seller price for target cap rate {result.cap_rate}% "
            f"at annual NOI {annual_noi}"
        )

    achieved = cap_rate.calculate_all_in_cap_rate(
        result.going_in_price, annual_noi, assumptions
    )

    return TargetPriceResponse(
        cap_rate=result.cap_rate,
        going_in_price=result.going_in_price,
        all_in_price=result.all_in_price,
        achieved_all_in_cap_rate=achieved,
        color=result.color,
        recommendation=cap_rate.get_cap_rate_recommendation(result.cap_rate),
        feasible=feasible,
        formatted={
            "going_in_price": format_currency(result.going_in_price),
            "all_in_price": format_currency(result.all_in_price),
        },
    )


class NOIReconcileInput(BaseModel):
    """Input for solving the per-unit NOI rates."""

    property_data: PropertyInput
    monthly_property_noi: str = ""
    locked: Literal["acre", "sqft"] = "acre"
    locked_value: str = ""


class NOIReconcileResponse(BaseModel):
    """Reconciled NOI values and their form strings."""

    sizes_ready: bool
    monthly_property_noi: float
    monthly_acre_noi: float
    monthly_sqft_noi: float
    implied_monthly_noi: float
    annual_noi: float
    formatted: Dict[str, str]


@router.post("/noi", response_model=NOIReconcileResponse)
async def reconcile_noi(inputs: NOIReconcileInput):
    """Solve the unlocked per-unit NOI rate from the monthly total."""

    property_data = noi.PropertyData.from_strings(**inputs.property_data.model_dump())
    acres = property_data.property_size
    sqft = property_data.building_size

    result = noi.reconcile_noi(
        parse_formatted_number(inputs.monthly_property_noi),
        inputs.locked,
        parse_formatted_number(inputs.locked_value),
        acres,
        sqft,
    )

    return NOIReconcileResponse(
        sizes_ready=noi.sizes_ready(acres, sqft),
        monthly_property_noi=result.monthly_property_noi,
        monthly_acre_noi=result.monthly_acre_noi,
        monthly_sqft_noi=result.monthly_sqft_noi,
        implied_monthly_noi=noi.monthly_noi_from_rates(
            result.monthly_acre_noi, result.monthly_sqft_noi, acres, sqft
        ),
        annual_noi=result.annual_noi,
        formatted=noi.format_noi_data(result),
    )
